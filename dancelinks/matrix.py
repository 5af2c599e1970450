# matrix.py
# Sparse toroidal linked matrix (Dancing Links) and its cover/uncover moves

from __future__ import annotations

import operator
from collections.abc import Sequence
from typing import Iterator, List, Optional

from .errors import InvalidArgumentError


class ColumnHeader:
    def __init__(self, index: int, primary: bool = True):
        self.index = index
        self.primary = primary
        self.size = 0
        self.left: ColumnHeader = self
        self.right: ColumnHeader = self
        self.up: "Node" = self  # type: ignore[assignment]
        self.down: "Node" = self  # type: ignore[assignment]

    def __repr__(self) -> str:
        kind = "primary" if self.primary else "secondary"
        return f"<ColumnHeader {self.index} {kind} size={self.size}>"


class RootHeader(ColumnHeader):
    """Sentinel anchoring the ring of primary column headers."""

    def __init__(self):
        super().__init__(-1, primary=False)

    def __repr__(self) -> str:
        return "<RootHeader>"


class Node:
    def __init__(self, column: ColumnHeader, row_index: int):
        self.column = column
        self.row_index = row_index
        self.left: Node = self
        self.right: Node = self
        self.up: Node = self
        self.down: Node = self

    def __repr__(self) -> str:
        return f"<Node row={self.row_index} col={self.column.index}>"


class Matrix:
    """Linked representation of one boolean matrix, built by :func:`build_matrix`."""

    def __init__(self, num_rows: int, num_columns: int, num_primary_columns: int):
        self.num_rows = num_rows
        self.num_columns = num_columns
        self.num_primary_columns = num_primary_columns
        self.num_nodes = 0
        self.root = RootHeader()
        self.columns = [
            ColumnHeader(i, primary=i < num_primary_columns) for i in range(num_columns)
        ]
        # First node of every row, None for all-zero rows.
        self.row_heads: List[Optional[Node]] = [None] * num_rows

        last: ColumnHeader = self.root
        for col in self.columns[:num_primary_columns]:
            col.left = last
            col.right = self.root
            last.right = col
            self.root.left = col
            last = col

    def add_row(self, row_index: int, column_indices: Sequence[int]) -> None:
        first_node: Node | None = None
        prev: Node | None = None

        for c_idx in column_indices:
            column = self.columns[c_idx]
            node = Node(column, row_index)

            # Insert into column (at bottom)
            node.down = column
            node.up = column.up
            column.up.down = node
            column.up = node
            column.size += 1
            self.num_nodes += 1

            # Link horizontally within row
            if first_node is None:
                first_node = node
            if prev is not None:
                node.left = prev
                node.right = first_node
                prev.right = node
                first_node.left = node
            prev = node

        self.row_heads[row_index] = first_node

    def primary_columns(self) -> Iterator[ColumnHeader]:
        """Walk the root ring; yields only primary columns not currently covered."""
        c = self.root.right
        while c is not self.root:
            yield c
            c = c.right

    def row_columns(self, row_index: int) -> List[int]:
        first = self.row_heads[row_index]
        if first is None:
            return []
        indexes = [first.column.index]
        node = first.right
        while node is not first:
            indexes.append(node.column.index)
            node = node.right
        return indexes

    def check_rings(self) -> None:
        """Assert that every ring is consistent and the matrix is fully uncovered.

        Only meaningful between runs (or after one finished), never in the middle
        of a cover/uncover pair.
        """
        ring = list(self.primary_columns())
        assert ring == self.columns[: self.num_primary_columns], "root ring damaged"
        prev: ColumnHeader = self.root
        for col in ring + [self.root]:
            assert col.left is prev and prev.right is col, f"bad header link at {col!r}"
            prev = col

        total = 0
        for col in self.columns:
            if not col.primary:
                assert col.left is col and col.right is col, f"{col!r} joined the root ring"
            count = 0
            last_row = -1
            node = col.down
            while node is not col:
                assert node.column is col, f"{node!r} hangs in the wrong column"
                assert node.down.up is node and node.up.down is node, f"bad vertical link at {node!r}"
                assert node.row_index > last_row, f"{col!r} lost its row order"
                last_row = node.row_index
                count += 1
                node = node.down
            assert count == col.size, f"{col!r} counts {count} nodes"
            total += count
        assert total == self.num_nodes, "nodes went missing"

        for first in self.row_heads:
            if first is None:
                continue
            node = first
            while True:
                assert node.right.left is node and node.left.right is node, f"bad row link at {node!r}"
                assert node.row_index == first.row_index, f"{node!r} strayed into another row"
                node = node.right
                if node is first:
                    break


def build_matrix(rows, num_primary_columns: int | None = None) -> Matrix:
    """Build the linked structure from a dense grid of truthy/falsy cells.

    Columns ``0 .. num_primary_columns - 1`` must be covered exactly once, the
    remaining (secondary) columns at most once. Defaults to all columns primary.
    """
    if rows is None:
        raise InvalidArgumentError("matrix must not be None")
    try:
        grid = [_as_row(row, r) for r, row in enumerate(rows)]
    except TypeError as exc:
        raise InvalidArgumentError(f"matrix must be a sequence of rows: {exc}") from exc

    num_columns = len(grid[0]) if grid else 0
    for r, row in enumerate(grid):
        if len(row) != num_columns:
            raise InvalidArgumentError(
                f"row {r} has {len(row)} cells, expected {num_columns}"
            )

    if num_primary_columns is None:
        num_primary_columns = num_columns
    if isinstance(num_primary_columns, bool):
        raise InvalidArgumentError(
            f"num_primary_columns must be an integer, got {num_primary_columns!r}"
        )
    try:
        num_primary_columns = operator.index(num_primary_columns)
    except TypeError:
        raise InvalidArgumentError(
            f"num_primary_columns must be an integer, got {num_primary_columns!r}"
        ) from None
    if not 0 <= num_primary_columns <= num_columns:
        raise InvalidArgumentError(
            f"num_primary_columns must be in [0, {num_columns}], got {num_primary_columns}"
        )

    matrix = Matrix(len(grid), num_columns, num_primary_columns)
    for r, row in enumerate(grid):
        matrix.add_row(r, [c for c, cell in enumerate(row) if cell])
    return matrix


def _as_row(row, row_index: int) -> list:
    if isinstance(row, (str, bytes)):
        raise InvalidArgumentError(
            f"row {row_index} is a string; convert it with dancelinks.adapters.to_matrix"
        )
    return list(row)


def cover(column: ColumnHeader) -> None:
    column.right.left = column.left
    column.left.right = column.right
    row = column.down
    while row is not column:
        node = row.right
        while node is not row:
            node.down.up = node.up
            node.up.down = node.down
            node.column.size -= 1
            node = node.right
        row = row.down


def uncover(column: ColumnHeader) -> None:
    row = column.up
    while row is not column:
        node = row.left
        while node is not row:
            node.column.size += 1
            node.down.up = node
            node.up.down = node
            node = node.left
        row = row.up
    column.right.left = column
    column.left.right = column
