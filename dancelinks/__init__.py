"""Exact cover enumeration with Knuth's Dancing Links (Algorithm X)."""

from .adapters import select_rows, to_matrix
from .dlx import Dlx
from .errors import InvalidArgumentError
from .events import (
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
from .matrix import Matrix, build_matrix
from .solution import Solution

__all__ = [
    "Cancelled",
    "ColumnChosen",
    "Dlx",
    "Finished",
    "InvalidArgumentError",
    "Matrix",
    "RowReleased",
    "RowSelected",
    "SearchEvent",
    "SearchStep",
    "Solution",
    "SolutionFound",
    "Started",
    "build_matrix",
    "select_rows",
    "to_matrix",
]

__version__ = "0.1.0"
