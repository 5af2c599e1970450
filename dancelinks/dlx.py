# dlx.py
# Public entry point: lazy exact cover enumeration with lifecycle events

from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional, Type

from .adapters import to_matrix
from .engine import SearchEngine
from .events import (
    Cancelled,
    E,
    Finished,
    Observers,
    SearchStep,
    SolutionFound,
    Started,
)
from .matrix import Matrix, build_matrix
from .solution import Solution

log = logging.getLogger(__name__)


class Dlx:
    """Exact cover solver using Dancing Links.

    Register observers first, then call :meth:`solve`. The returned iterator
    does no work until it is pulled; ``Started`` fires on the first pull and
    exactly one of ``Finished``/``Cancelled`` fires once it is exhausted, closed
    or dropped. ``cancellation`` is any object with ``is_set()``, usually a
    :class:`threading.Event` set from another thread.
    """

    def __init__(self, cancellation=None):
        self.cancellation = cancellation
        self.observers = Observers()

    # -- observer registration ------------------------------------------------

    def subscribe(self, event_type: Type[E], handler: Callable[[E], object]) -> Callable[[E], object]:
        return self.observers.subscribe(event_type, handler)

    def unsubscribe(self, event_type: Type[E], handler: Callable[[E], object]) -> None:
        self.observers.unsubscribe(event_type, handler)

    def on_started(self, handler: Callable[[Started], object]):
        return self.subscribe(Started, handler)

    def on_finished(self, handler: Callable[[Finished], object]):
        return self.subscribe(Finished, handler)

    def on_cancelled(self, handler: Callable[[Cancelled], object]):
        return self.subscribe(Cancelled, handler)

    def on_search_step(self, handler: Callable[[SearchStep], object]):
        return self.subscribe(SearchStep, handler)

    def on_solution_found(self, handler: Callable[[SolutionFound], object]):
        return self.subscribe(SolutionFound, handler)

    # -- solving --------------------------------------------------------------

    def solve(self, matrix, num_primary_columns: int | None = None) -> Iterator[Solution]:
        """Lazily enumerate the exact covers of ``matrix``.

        ``matrix`` is a sequence of equally long rows of truthy/falsy cells.
        Columns from ``num_primary_columns`` on are secondary: covered at most
        once. Raises :class:`~dancelinks.errors.InvalidArgumentError` right away
        for bad input.
        """
        built = build_matrix(matrix, num_primary_columns)
        return self._enumerate(built)

    def solve_data(
        self,
        data,
        cells: Optional[Callable] = None,
        predicate: Optional[Callable] = None,
        num_primary_columns: int | None = None,
    ) -> Iterator[Solution]:
        """Like :meth:`solve` for arbitrary row objects, see :func:`~dancelinks.adapters.to_matrix`."""
        return self.solve(to_matrix(data, cells, predicate), num_primary_columns)

    def solve_all(self, matrix, num_primary_columns: int | None = None) -> List[Solution]:
        return list(self.solve(matrix, num_primary_columns))

    def solve_first(self, matrix, num_primary_columns: int | None = None) -> Optional[Solution]:
        solutions = self.solve(matrix, num_primary_columns)
        try:
            return next(solutions, None)
        finally:
            solutions.close()

    def _enumerate(self, matrix: Matrix) -> Iterator[Solution]:
        engine = SearchEngine(matrix, self.observers, self.cancellation)
        log.debug(
            "starting search: %d rows, %d columns (%d primary), %d nodes",
            matrix.num_rows,
            matrix.num_columns,
            matrix.num_primary_columns,
            matrix.num_nodes,
        )
        search = engine.search()
        try:
            self.observers.emit(Started())
            for solution in search:
                log.debug("solution %d: rows %s", solution.solution_index, solution.row_indexes)
                yield solution
        finally:
            # Closing the search restores the matrix before it is checked.
            search.close()
            if log.isEnabledFor(logging.DEBUG):
                matrix.check_rings()
            if engine.cancelled:
                log.info(
                    "search cancelled after %d steps, %d solutions",
                    engine.iterations,
                    engine.solutions_found,
                )
                self.observers.emit(Cancelled())
            else:
                log.debug(
                    "search finished after %d steps, %d solutions",
                    engine.iterations,
                    engine.solutions_found,
                )
                self.observers.emit(Finished())
