# calendar_board.py
# "Puzzle a day" calendar board as an exact cover tiling problem

from __future__ import annotations

from dataclasses import dataclass
from itertools import islice
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

from ..dlx import Dlx
from ..errors import InvalidArgumentError

Cell = Tuple[int, int]
Shape = FrozenSet[Cell]

# Months fill the first two rows (six per row), days the next five.
MONTH_COORDS: Dict[int, Cell] = {m: divmod(m - 1, 6) for m in range(1, 13)}
DAY_COORDS: Dict[int, Cell] = {
    d: (2 + (d - 1) // 7, (d - 1) % 7) if d <= 28 else (6, d - 27) for d in range(1, 32)
}

BOARD_CELLS = frozenset(MONTH_COORDS.values()) | frozenset(DAY_COORDS.values())

PIECE_SHAPES: Dict[str, Shape] = {
    "A": frozenset({(0, 0), (0, 1), (1, 0), (1, 1)}),
    "B": frozenset({(0, 0), (0, 1), (0, 2), (0, 3), (1, 0)}),
    "C": frozenset({(0, 2), (1, 0), (1, 1), (1, 2), (2, 0)}),
    "D": frozenset({(0, 1), (1, 0), (1, 1), (1, 2), (2, 1)}),
    "E": frozenset({(0, 1), (1, 0), (1, 1), (2, 0)}),
    "F": frozenset({(0, 0), (0, 1), (0, 2), (1, 0), (1, 2)}),
    "G": frozenset({(0, 0), (0, 1), (0, 2), (1, 0), (1, 1)}),
    "H": frozenset({(0, 0), (0, 1), (0, 2), (1, 0)}),
    "I": frozenset({(0, 0), (0, 1), (0, 2), (1, 1)}),
}


@dataclass(frozen=True)
class Placement:
    piece: str
    cells: Tuple[Cell, ...]  # board coordinates covered by this placement


@dataclass(frozen=True)
class Tiling:
    """Exact cover encoding of a tiling: piece columns first, then cell columns."""

    matrix: List[List[bool]]
    placements: List[Placement]
    column_labels: List[str]
    cells: FrozenSet[Cell]


def _normalize(shape: Iterable[Cell]) -> Shape:
    shape = list(shape)
    min_r = min(r for r, _ in shape)
    min_c = min(c for _, c in shape)
    return frozenset((r - min_r, c - min_c) for r, c in shape)


def piece_orientations(shape: Iterable[Cell]) -> List[Shape]:
    """All distinct rotations and mirror images of ``shape``, in a stable order."""
    seen: set = set()
    result: List[Shape] = []
    for base in (set(shape), {(r, -c) for r, c in shape}):
        variant = base
        for _ in range(4):
            norm = _normalize(variant)
            if norm not in seen:
                seen.add(norm)
                result.append(norm)
            # (r, c) -> (c, -r)
            variant = {(c, -r) for r, c in variant}
    return result


def generate_placements(cells: Iterable[Cell], shapes: Dict[str, Iterable[Cell]]) -> List[Placement]:
    """Every placement of every orientation of every piece that stays inside ``cells``."""
    cell_set = frozenset(cells)
    if not cell_set:
        return []
    max_row = max(r for r, _ in cell_set)
    max_col = max(c for _, c in cell_set)

    placements: List[Placement] = []
    for piece in sorted(shapes):
        for shape in piece_orientations(shapes[piece]):
            height = max(r for r, _ in shape)
            width = max(c for _, c in shape)
            for dr in range(max_row - height + 1):
                for dc in range(max_col - width + 1):
                    placed = frozenset((r + dr, c + dc) for r, c in shape)
                    if placed <= cell_set:
                        placements.append(Placement(piece, tuple(sorted(placed))))
    return placements


def build_tiling(cells: Iterable[Cell], shapes: Dict[str, Iterable[Cell]]) -> Tiling:
    cell_set = frozenset(cells)
    pieces = sorted(shapes)
    cells_sorted = sorted(cell_set)
    column_of: Dict[object, int] = {name: i for i, name in enumerate(pieces)}
    column_of.update({cell: len(pieces) + i for i, cell in enumerate(cells_sorted)})

    placements = generate_placements(cell_set, shapes)
    num_columns = len(column_of)
    matrix = []
    for placement in placements:
        row = [False] * num_columns
        row[column_of[placement.piece]] = True
        for cell in placement.cells:
            row[column_of[cell]] = True
        matrix.append(row)

    labels = pieces + [f"({r},{c})" for r, c in cells_sorted]
    return Tiling(matrix, placements, labels, cell_set)


def playable_cells_for_date(month: int, day: int) -> FrozenSet[Cell]:
    """Month and day cells, minus the two left open for the date."""
    if month not in MONTH_COORDS:
        raise InvalidArgumentError(f"no such month: {month!r}")
    if day not in DAY_COORDS:
        raise InvalidArgumentError(f"no such day: {day!r}")
    return BOARD_CELLS - {MONTH_COORDS[month], DAY_COORDS[day]}


def build_calendar(month: int, day: int) -> Tiling:
    return build_tiling(playable_cells_for_date(month, day), PIECE_SHAPES)


def solve_tiling(
    tiling: Tiling,
    dlx: Optional[Dlx] = None,
    limit: Optional[int] = None,
) -> Iterator[List[Placement]]:
    """Yield each tiling as its list of placements, at most ``limit`` of them."""
    if dlx is None:
        dlx = Dlx()
    solutions = dlx.solve(tiling.matrix)
    try:
        for solution in islice(solutions, limit):
            yield [tiling.placements[i] for i in solution.row_indexes]
    finally:
        solutions.close()


def render(placements: Iterable[Placement], cells: Iterable[Cell]) -> str:
    """ASCII board: piece letters on covered cells, ``.`` on open ones, blank elsewhere."""
    piece_at = {cell: p.piece for p in placements for cell in p.cells}
    board = frozenset(cells) | frozenset(piece_at)
    if not board:
        return ""
    lines = []
    for r in range(max(r for r, _ in board) + 1):
        line = []
        for c in range(max(c for _, c in board) + 1):
            if (r, c) in piece_at:
                line.append(piece_at[(r, c)])
            elif (r, c) in board:
                line.append(".")
            else:
                line.append(" ")
        lines.append(" ".join(line).rstrip())
    return "\n".join(lines)
