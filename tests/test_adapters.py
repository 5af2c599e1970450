from dataclasses import FrozenInstanceError

import pytest

from dancelinks import Dlx, InvalidArgumentError, Solution, select_rows, to_matrix


def test_custom_predicate_on_characters():
    matrix = [
        ["X", "O", "O"],
        ["O", "X", "O"],
        ["O", "O", "X"],
    ]
    rows = to_matrix(matrix, predicate=lambda c: c == "X")
    assert rows == [[True, False, False], [False, True, False], [False, False, True]]
    assert [s.row_indexes for s in Dlx().solve(rows)] == [(0, 1, 2)]


def test_arbitrary_data_structure():
    data = [
        ([1, 0, 0], "Some data associated with row 0"),
        ([0, 1, 0], "Some data associated with row 1"),
        ([0, 0, 1], "Some data associated with row 2"),
    ]
    solutions = list(Dlx().solve_data(data, cells=lambda row: row[0]))
    assert [s.row_indexes for s in solutions] == [(0, 1, 2)]
    tags = [tag for _, tag in select_rows(data, solutions[0])]
    assert tags == [f"Some data associated with row {i}" for i in range(3)]


def test_arbitrary_data_structure_with_predicate_and_primary_columns():
    data = [
        ("XOOXO", "row 0"),
        ("OXOOO", "row 1"),
        ("OOXOO", "row 2"),
    ]
    solutions = Dlx().solve_data(
        data,
        cells=lambda row: row[0],
        predicate=lambda c: c == "X",
        num_primary_columns=3,
    )
    assert [s.row_indexes for s in solutions] == [(0, 1, 2)]


def test_secondary_column_conflict_through_adapter():
    data = [
        {"name": "a", "cells": "1001"},
        {"name": "b", "cells": "0101"},
        {"name": "c", "cells": "0100"},
    ]
    solutions = list(
        Dlx().solve_data(data, cells=lambda row: row["cells"], predicate=lambda c: c == "1", num_primary_columns=2)
    )
    # a and b share the secondary column 3, so only a + c remains.
    assert [[row["name"] for row in select_rows(data, s)] for s in solutions] == [["a", "c"]]


def test_to_matrix_keeps_row_order_and_length():
    rows = to_matrix([(0, 1), (1, 0), (0, 0)])
    assert rows == [[False, True], [True, False], [False, False]]


def test_to_matrix_rejects_bad_input():
    with pytest.raises(InvalidArgumentError):
        to_matrix(None)
    with pytest.raises(InvalidArgumentError):
        to_matrix(42)
    with pytest.raises(InvalidArgumentError):
        to_matrix([1, 2])


def test_ragged_adapter_rows_fail_in_solve():
    with pytest.raises(InvalidArgumentError):
        Dlx().solve_data(["XO", "X"], predicate=lambda c: c == "X")


def test_solution_value():
    solution = Solution.from_partial(4, [5, 1, 3])
    assert solution.solution_index == 4
    assert solution.row_indexes == (1, 3, 5)
    assert list(solution) == [1, 3, 5]
    assert len(solution) == 3
    assert 3 in solution and 2 not in solution
    with pytest.raises(FrozenInstanceError):
        solution.row_indexes = ()
