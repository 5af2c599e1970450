import os

import pytest

# The viewer tests draw on off-screen surfaces; no display is needed.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


@pytest.fixture
def knuth_matrix():
    """The example from Knuth's Dancing Links paper; its only cover is rows 0, 3, 4."""
    return [
        [0, 0, 1, 0, 1, 1, 0],
        [1, 0, 0, 1, 0, 0, 1],
        [0, 1, 1, 0, 0, 1, 0],
        [1, 0, 0, 1, 0, 0, 0],
        [0, 1, 0, 0, 0, 0, 1],
        [0, 0, 0, 1, 1, 0, 1],
    ]


@pytest.fixture
def three_solution_matrix():
    return [
        [1, 0, 0, 0],
        [0, 1, 1, 0],
        [1, 0, 0, 1],
        [0, 0, 1, 1],
        [0, 1, 0, 0],
        [0, 0, 1, 0],
    ]


@pytest.fixture
def doubling_matrix():
    """Every column offered by two identical rows: 2**20 solutions, far too many to finish."""
    rows = []
    for c in range(20):
        row = [0] * 20
        row[c] = 1
        rows.append(row)
        rows.append(list(row))
    return rows
