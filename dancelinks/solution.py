# solution.py
# Immutable snapshot of one discovered exact cover

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class Solution:
    solution_index: int
    row_indexes: tuple[int, ...]  # sorted ascending, original row numbers

    @classmethod
    def from_partial(cls, solution_index: int, partial: Iterable[int]) -> "Solution":
        return cls(solution_index=solution_index, row_indexes=tuple(sorted(partial)))

    def __len__(self) -> int:
        return len(self.row_indexes)

    def __iter__(self) -> Iterator[int]:
        return iter(self.row_indexes)

    def __contains__(self, row_index: object) -> bool:
        return row_index in self.row_indexes
