# adapters.py
# Turn arbitrary row data into the boolean matrix the solver consumes

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

from .errors import InvalidArgumentError
from .solution import Solution


def to_matrix(
    data,
    cells: Optional[Callable[[Any], Sequence]] = None,
    predicate: Optional[Callable[[Any], bool]] = None,
) -> List[List[bool]]:
    """Normalize ``data`` into rows of booleans, keeping the row order.

    ``cells(row)`` extracts the cell sequence of one item of ``data`` (default:
    the item itself). ``predicate(cell)`` decides whether a cell is set
    (default: truthiness). Row ``i`` of the result corresponds to ``data[i]``,
    so :class:`~dancelinks.solution.Solution` indexes map straight back.

    >>> to_matrix(["XO", "OX"], predicate=lambda c: c == "X")
    [[True, False], [False, True]]
    """
    if data is None:
        raise InvalidArgumentError("data must not be None")
    if cells is None:
        cells = _identity
    if predicate is None:
        predicate = bool

    try:
        rows = iter(data)
    except TypeError as exc:
        raise InvalidArgumentError(f"data is not iterable: {exc}") from exc

    matrix: List[List[bool]] = []
    for row in rows:
        try:
            row_cells = iter(cells(row))
        except TypeError as exc:
            raise InvalidArgumentError(f"row {len(matrix)} has no iterable cells: {exc}") from exc
        matrix.append([bool(predicate(cell)) for cell in row_cells])
    return matrix


def select_rows(data: Sequence, solution: Solution) -> list:
    """Original row objects chosen by ``solution``, in ascending row order."""
    return [data[i] for i in solution.row_indexes]


def _identity(row):
    return row
