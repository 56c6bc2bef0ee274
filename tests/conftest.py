"""
Pytest fixtures shared across toruslife tests.
"""

import pytest

from toruslife.core.grid import Grid


@pytest.fixture
def grid() -> Grid:
    """Empty 5x5 torus."""
    return Grid(5, 5)


@pytest.fixture
def blinker_grid() -> Grid:
    """5x5 torus with a horizontal blinker across the middle row."""
    grid = Grid(5, 5)
    for column in (1, 2, 3):
        grid.set_cell(2, column, True)
    return grid


@pytest.fixture
def alive():
    """Helper returning the set of (row, column) pairs of a grid's live cells."""

    def alive_coordinates(grid: Grid) -> set:
        return {cell.position for cell in grid if cell.is_alive()}

    return alive_coordinates
