# trace.py
# Records one search run as a step-by-step history for the viewer

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from ..adapters import to_matrix
from ..dlx import Dlx
from ..events import (
    Cancelled,
    ColumnChosen,
    Finished,
    RowReleased,
    RowSelected,
    SearchEvent,
    SearchStep,
    SolutionFound,
    Started,
)

log = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 5000


@dataclass(frozen=True)
class TraceStep:
    event: SearchEvent
    selected: Tuple[int, ...]  # partial solution, in selection order
    focus_column: Optional[int]


class SearchTrace:
    """History of a search up to its first solution, plus playback state.

    The search is stopped through its cancellation event once ``max_steps``
    search steps have run, so huge matrices still give a bounded history.
    """

    def __init__(
        self,
        rows,
        num_primary_columns: Optional[int] = None,
        max_steps: Optional[int] = DEFAULT_MAX_STEPS,
        column_labels: Optional[Sequence[str]] = None,
        row_labels: Optional[Sequence[str]] = None,
    ):
        self.rows = to_matrix(rows)
        self.num_columns = len(self.rows[0]) if self.rows else 0
        self.num_primary_columns = (
            self.num_columns if num_primary_columns is None else num_primary_columns
        )
        self.column_labels = list(column_labels) if column_labels else [str(c) for c in range(self.num_columns)]
        self.row_labels = list(row_labels) if row_labels else [f"row {r}" for r in range(len(self.rows))]
        self.row_columns: List[FrozenSet[int]] = [
            frozenset(c for c, cell in enumerate(row) if cell) for row in self.rows
        ]
        self.column_rows: Dict[int, List[int]] = {c: [] for c in range(self.num_columns)}
        for r, columns in enumerate(self.row_columns):
            for c in columns:
                self.column_rows[c].append(r)

        self.max_steps = max_steps
        self.history: List[TraceStep] = []
        self.search_steps = 0
        self.truncated = False
        self.solution: Optional[Tuple[int, ...]] = None
        self._record()

        self.total_steps = len(self.history)
        self.current_step = 0
        self.playing = False
        self.play_speed = 0.1
        self.timer = 0.0

    # -- recording ------------------------------------------------------------

    def _record(self) -> None:
        stop = threading.Event()
        dlx = Dlx(cancellation=stop)
        selected: List[int] = []
        focus: List[Optional[int]] = [None]

        def keep(event: SearchEvent) -> None:
            self.history.append(TraceStep(event, tuple(selected), focus[0]))

        def on_step(event: SearchStep) -> None:
            self.search_steps = event.iteration + 1
            if self.max_steps is not None and self.search_steps > self.max_steps:
                stop.set()

        def on_column(event: ColumnChosen) -> None:
            focus[0] = event.column_index
            keep(event)

        def on_select(event: RowSelected) -> None:
            selected.append(event.row_index)
            keep(event)

        def on_release(event: RowReleased) -> None:
            selected.pop()
            keep(event)

        def on_cancelled(event: Cancelled) -> None:
            self.truncated = True
            keep(event)

        dlx.on_search_step(on_step)
        dlx.on_started(keep)
        dlx.on_finished(keep)
        dlx.on_cancelled(on_cancelled)
        dlx.on_solution_found(keep)
        dlx.subscribe(ColumnChosen, on_column)
        dlx.subscribe(RowSelected, on_select)
        dlx.subscribe(RowReleased, on_release)

        first = dlx.solve_first(self.rows, self.num_primary_columns)
        if first is not None:
            self.solution = first.row_indexes
        log.info(
            "recorded %d events over %d search steps%s",
            len(self.history),
            self.search_steps,
            " (truncated)" if self.truncated else "",
        )

    # -- state of the current step --------------------------------------------

    @property
    def current(self) -> TraceStep:
        return self.history[self.current_step]

    @property
    def selected_rows(self) -> Tuple[int, ...]:
        return self.current.selected

    @property
    def chosen_column(self) -> Optional[int]:
        return self.current.focus_column

    @property
    def covered_columns(self) -> FrozenSet[int]:
        covered = set()
        for r in self.selected_rows:
            covered |= self.row_columns[r]
        return frozenset(covered)

    @property
    def removed_rows(self) -> FrozenSet[int]:
        """Rows clashing with the partial solution (the selected rows excluded)."""
        covered = self.covered_columns
        selected = set(self.selected_rows)
        return frozenset(
            r for r, columns in enumerate(self.row_columns)
            if r not in selected and columns & covered
        )

    def column_label(self, column: Optional[int]) -> str:
        if column is None or not 0 <= column < self.num_columns:
            return "?"
        return self.column_labels[column]

    def narrative(self) -> List[str]:
        """Headline plus a few sentences describing the current step."""
        step = self.current
        event = step.event
        if isinstance(event, Started):
            return [
                "STARTING",
                f"{len(self.rows)} rows, {self.num_columns} columns "
                f"({self.num_primary_columns} must be covered).",
                "Every primary column needs exactly one selected row.",
            ]
        if isinstance(event, ColumnChosen):
            label = self.column_label(event.column_index)
            if event.size == 0:
                return [
                    "DEAD END",
                    f"Column {label} has no rows left.",
                    "Something chosen earlier must go.",
                ]
            return [
                "CHOOSING",
                f"Column {label} has the fewest options ({event.size}).",
                "Fewer options means fewer branches to explore.",
            ]
        if isinstance(event, RowSelected):
            return [
                "SELECTING",
                f"Trying {self.row_labels[event.row_index]} at depth {event.depth}.",
                f"It covers columns {self._labels_of(event.row_index)}.",
            ]
        if isinstance(event, RowReleased):
            return [
                "BACKTRACKING",
                f"Taking {self.row_labels[event.row_index]} back out.",
                "Its columns and clashing rows dance back in.",
            ]
        if isinstance(event, SolutionFound):
            return [
                "SOLVED",
                f"Rows {', '.join(str(r) for r in event.row_indexes)} cover every column.",
            ]
        if isinstance(event, Cancelled):
            return ["STOPPED", f"Gave up after {self.search_steps - 1} search steps."]
        if isinstance(event, Finished):
            if self.solution is None:
                return ["NO SOLUTION", "Every branch ended in a dead end."]
            return ["DONE", "The search stops at the first solution."]
        return [type(event).__name__.upper()]

    def _labels_of(self, row: int) -> str:
        return ", ".join(self.column_label(c) for c in sorted(self.row_columns[row]))

    # -- playback -------------------------------------------------------------

    def set_step(self, step: int) -> None:
        self.current_step = max(0, min(step, self.total_steps - 1))

    def step_forward(self) -> None:
        self.set_step(self.current_step + 1)

    def step_backward(self) -> None:
        self.set_step(self.current_step - 1)

    def toggle_play(self) -> None:
        self.playing = not self.playing

    def update(self, dt: float) -> None:
        if self.playing and self.current_step < self.total_steps - 1:
            self.timer += dt
            if self.timer >= self.play_speed:
                self.timer = 0.0
                self.step_forward()
        elif self.current_step >= self.total_steps - 1:
            self.playing = False
