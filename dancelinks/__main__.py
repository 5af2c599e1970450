"""
Command-line interface for the dancing links exact cover solver.

Solves 0/1 matrices read from text files, solves the calendar puzzle for a
date, or opens a step-by-step viewer of the search.
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from datetime import date
from itertools import islice
from pathlib import Path
from typing import List, Optional, Tuple

from .dlx import Dlx
from .errors import InvalidArgumentError
from .puzzles.calendar_board import BOARD_CELLS, build_calendar, render, solve_tiling

log = logging.getLogger("dancelinks.cli")


def load_matrix(path: Path) -> List[List[int]]:
    """Read one row per line, cells ``0``/``1``; blank lines and ``#`` comments are skipped."""
    rows: List[List[int]] = []
    with open(path, encoding="utf-8") as handle:
        for lineno, line in enumerate(handle, start=1):
            line = line.split("#", 1)[0]
            cells = "".join(line.split())
            if not cells:
                continue
            if set(cells) - {"0", "1"}:
                raise InvalidArgumentError(f"{path}:{lineno}: only 0 and 1 are allowed")
            rows.append([int(c) for c in cells])
    return rows


def parse_date(text: str) -> Tuple[int, int]:
    try:
        month, day = (int(part) for part in text.split("-"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected MM-DD, got {text!r}") from None
    return month, day


def setup_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dancelinks",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    commands = parser.add_subparsers(dest="command", required=True)

    solve = commands.add_parser("solve", help="Enumerate the exact covers of a matrix file")
    solve.add_argument("path", type=Path, help="Text file, one row of 0/1 per line")
    solve.add_argument(
        "-p", "--primary", type=int, default=None,
        help="Number of primary columns; the rest are secondary (default: all)",
    )
    solve.add_argument("-n", "--limit", type=int, default=None, help="Stop after this many solutions")
    solve.add_argument(
        "-t", "--timeout", type=float, default=None,
        help="Cancel the search after this many seconds",
    )

    cal = commands.add_parser("calendar", help="Solve the calendar puzzle for a date")
    cal.add_argument(
        "-d", "--date", type=parse_date, default=None,
        help="Date as MM-DD (default: today)",
    )
    cal.add_argument("-n", "--limit", type=int, default=1, help="Number of solutions to print (default: 1)")

    view = commands.add_parser("view", help="Step through a search in a window")
    source = view.add_mutually_exclusive_group(required=True)
    source.add_argument("path", type=Path, nargs="?", help="Matrix file to visualize")
    source.add_argument("-c", "--calendar", type=parse_date, help="Visualize the calendar puzzle for MM-DD")
    view.add_argument("-p", "--primary", type=int, default=None, help="Number of primary columns")
    view.add_argument("--max-steps", type=int, default=5000, help="Stop recording after this many steps")
    return parser


def run_solve(args: argparse.Namespace) -> int:
    matrix = load_matrix(args.path)
    stop = threading.Event()
    dlx = Dlx(cancellation=stop)
    cancelled = []
    dlx.on_cancelled(cancelled.append)

    timer: Optional[threading.Timer] = None
    if args.timeout is not None:
        timer = threading.Timer(args.timeout, stop.set)
        timer.daemon = True
        timer.start()

    count = 0
    solutions = dlx.solve(matrix, args.primary)
    try:
        for solution in islice(solutions, args.limit):
            print(f"#{solution.solution_index}: {' '.join(map(str, solution.row_indexes))}")
            count += 1
    finally:
        solutions.close()
        if timer is not None:
            timer.cancel()

    if cancelled:
        print(f"cancelled after {args.timeout}s, {count} solution(s)")
        return 1
    print(f"{count} solution(s)")
    return 0


def run_calendar(args: argparse.Namespace) -> int:
    if args.date is None:
        today = date.today()
        month, day = today.month, today.day
    else:
        month, day = args.date
    tiling = build_calendar(month, day)
    log.info("calendar %02d-%02d: %d placements", month, day, len(tiling.placements))

    count = 0
    for count, placements in enumerate(solve_tiling(tiling, limit=args.limit), start=1):
        print(f"Solution {count}")
        print(render(placements, BOARD_CELLS))
        print()
    if count == 0:
        print(f"no solution for {month:02d}-{day:02d}")
        return 1
    return 0


def run_view(args: argparse.Namespace) -> int:
    # pygame is only needed for the window.
    from .viewer import SearchTrace, run

    if args.calendar is not None:
        month, day = args.calendar
        tiling = build_calendar(month, day)
        row_labels = [f"piece {p.piece} at {p.cells[0]}" for p in tiling.placements]
        trace = SearchTrace(
            tiling.matrix,
            max_steps=args.max_steps,
            column_labels=tiling.column_labels,
            row_labels=row_labels,
        )
        caption = f"Calendar puzzle {month:02d}-{day:02d}"
    else:
        trace = SearchTrace(load_matrix(args.path), args.primary, max_steps=args.max_steps)
        caption = str(args.path)
    run(trace, caption)
    return 0


COMMANDS = {"solve": run_solve, "calendar": run_calendar, "view": run_view}


def main(argv: Optional[List[str]] = None) -> int:
    args = setup_argument_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        return COMMANDS[args.command](args)
    except (InvalidArgumentError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
