# engine.py
# Algorithm X over the dancing-links matrix, as a resumable generator

from __future__ import annotations

from typing import Iterator, List

from .events import ColumnChosen, Observers, RowReleased, RowSelected, SearchStep, SolutionFound
from .matrix import ColumnHeader, Matrix, Node, cover, uncover
from .solution import Solution


class _Frame:
    """One pending level of the search: the covered column and the row being tried."""

    def __init__(self, column: ColumnHeader):
        self.column = column
        self.row: Node = column.down
        self.selected = False


class SearchEngine:
    """Depth-first exact cover search.

    :meth:`search` is a generator. It only suspends when a solution is found,
    so each ``next()`` runs the search up to the next solution. The recursion of
    Algorithm X is kept on an explicit stack of :class:`_Frame` objects, which
    lets the generator restore the matrix if it is cancelled or closed early.
    """

    def __init__(self, matrix: Matrix, observers: Observers, cancellation=None):
        self.matrix = matrix
        self.observers = observers
        self.cancellation = cancellation
        self.iterations = 0
        self.solutions_found = 0
        self.cancelled = False
        self._frames: List[_Frame] = []
        self._partial: List[int] = []
        self._trace_columns = False
        self._trace_rows = False

    def _cancel_requested(self) -> bool:
        return self.cancellation is not None and self.cancellation.is_set()

    def _choose_column(self) -> ColumnHeader:
        # Heuristic: choose column with smallest size, first one wins ties.
        root = self.matrix.root
        c = root.right
        best = c
        while c is not root:
            if c.size < best.size:
                best = c
            c = c.right
        return best

    def _select(self, frame: _Frame) -> None:
        row = frame.row
        self._partial.append(row.row_index)
        node = row.right
        while node is not row:
            cover(node.column)
            node = node.right
        frame.selected = True
        if self._trace_rows:
            self.observers.emit(RowSelected(row.row_index, len(self._frames) - 1))

    def _release(self, frame: _Frame) -> None:
        row = frame.row
        node = row.left
        while node is not row:
            uncover(node.column)
            node = node.left
        frame.selected = False
        self._partial.pop()

    def _unwind(self) -> None:
        # Undo every pending level in reverse, leaving the matrix as built.
        while self._frames:
            frame = self._frames.pop()
            if frame.selected:
                self._release(frame)
            uncover(frame.column)
        del self._partial[:]

    def search(self) -> Iterator[Solution]:
        observers = self.observers
        notify_steps = observers.wants(SearchStep)
        notify_solutions = observers.wants(SolutionFound)
        self._trace_columns = observers.wants(ColumnChosen)
        self._trace_rows = observers.wants(RowSelected) or observers.wants(RowReleased)
        root = self.matrix.root
        frames = self._frames

        try:
            descend = True
            while True:
                if descend:
                    iteration = self.iterations
                    self.iterations += 1
                    if notify_steps:
                        observers.emit(SearchStep(iteration))

                    if self._cancel_requested():
                        self.cancelled = True
                        return

                    # 1. Check if solved
                    if root.right is root:
                        if self._partial:
                            solution = Solution.from_partial(self.solutions_found, self._partial)
                            self.solutions_found += 1
                            if notify_solutions:
                                observers.emit(
                                    SolutionFound(solution.solution_index, solution.row_indexes)
                                )
                            yield solution
                        descend = False
                        continue

                    # 2. Choose column
                    column = self._choose_column()
                    if self._trace_columns:
                        observers.emit(ColumnChosen(iteration, column.index, column.size))
                    if column.size == 0:
                        descend = False
                        continue

                    # 3. Cover it and try its first row
                    cover(column)
                    frame = _Frame(column)
                    frames.append(frame)
                    self._select(frame)
                    continue

                # Back from a deeper level: release the row, try the next one.
                if not frames:
                    return
                frame = frames[-1]
                row = frame.row
                self._release(frame)
                frame.row = row.down
                exhausted = frame.row is frame.column
                if exhausted:
                    frames.pop()
                    uncover(frame.column)
                if self._trace_rows:
                    observers.emit(RowReleased(row.row_index, len(frames) - (0 if exhausted else 1)))
                if not exhausted:
                    self._select(frame)
                    descend = True
        finally:
            self._unwind()
