"""Conway's Game of Life on a toroidal grid."""

import logging

__version__ = "0.1.0"

from .core.errors import LifeError, InvalidDimensionError, InvalidArgumentError
from .core.cell import Cell, CellState
from .core.grid import Grid
from .core.game import GameOfLife
from .core.patterns import Pattern, PatternLibrary
from .config import LifeConfig

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "LifeError",
    "InvalidDimensionError",
    "InvalidArgumentError",
    "Cell",
    "CellState",
    "Grid",
    "GameOfLife",
    "Pattern",
    "PatternLibrary",
    "LifeConfig",
]
