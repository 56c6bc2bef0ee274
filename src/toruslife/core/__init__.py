"""Core toroidal Game of Life logic."""

from .errors import LifeError, InvalidDimensionError, InvalidArgumentError
from .cell import Cell, CellState
from .grid import Grid, apply_rules
from .game import GameOfLife
from .patterns import Pattern, PatternLibrary

__all__ = [
    "LifeError",
    "InvalidDimensionError",
    "InvalidArgumentError",
    "Cell",
    "CellState",
    "Grid",
    "apply_rules",
    "GameOfLife",
    "Pattern",
    "PatternLibrary",
]
