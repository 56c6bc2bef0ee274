"""Well-known Game of Life patterns for seeding a toroidal grid."""

from typing import Any, Dict, List, Optional, Tuple

from .cell import CellState
from .grid import Grid


class Pattern:
    """A named set of live cells, given as (row, column) pairs."""

    def __init__(
        self,
        name: str,
        cells: List[Tuple[int, int]],
        description: str = "",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (row, column) coordinates for living cells
            description: Optional description
            metadata: Optional metadata dictionary
        """
        self.name = name
        self.cells = cells
        self.description = description
        self.metadata = metadata or {}

    def apply_to_grid(
        self,
        grid: Grid,
        row_offset: int = 0,
        column_offset: int = 0,
        clear: bool = True,
    ) -> None:
        """Place this pattern on a grid.

        Coordinates wrap around the torus, so cells past an edge reappear on
        the opposite side.

        Args:
            grid: Target grid
            row_offset: Vertical offset
            column_offset: Horizontal offset
            clear: Whether to clear the grid first
        """
        if clear:
            grid.clear()
        for row, column in self.cells:
            grid.set_cell(row + row_offset, column + column_offset, CellState.ALIVE)

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_row, min_column, max_row, max_column)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        rows, columns = zip(*self.cells)
        return (min(rows), min(columns), max(rows), max(columns))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (rows, columns)."""
        min_row, min_column, max_row, max_column = self.get_bounding_box()
        return (max_row - min_row + 1, max_column - min_column + 1)

    def normalize(self) -> "Pattern":
        """Return a copy whose bounding box starts at (0, 0)."""
        if not self.cells:
            return Pattern(self.name, [], self.description, self.metadata.copy())

        min_row, min_column, _, _ = self.get_bounding_box()
        normalized_cells = [(row - min_row, column - min_column) for row, column in self.cells]

        return Pattern(self.name, normalized_cells, self.description, self.metadata.copy())

    def to_dict(self) -> Dict[str, Any]:
        """Convert the pattern to a plain dictionary."""
        return {
            "name": self.name,
            "cells": self.cells,
            "description": self.description,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pattern":
        """Create pattern from a dictionary produced by ``to_dict``."""
        cells = [(int(row), int(column)) for row, column in data["cells"]]

        return cls(
            name=data["name"],
            cells=cells,
            description=data.get("description", ""),
            metadata=data.get("metadata", {}),
        )

    @classmethod
    def from_grid(cls, grid: Grid, name: str, description: str = "") -> "Pattern":
        """Capture the live cells of a grid as a pattern."""
        cells = [cell.position for cell in grid if cell.is_alive()]
        metadata = {"source_grid_size": grid.shape, "population": len(cells)}

        return cls(name, cells, description, metadata)


# Pulsar is symmetric under both reflections; one quadrant is enough.
_PULSAR_QUADRANT = [(0, 2), (0, 3), (0, 4), (2, 0), (3, 0), (4, 0), (5, 2), (5, 3), (5, 4), (2, 5), (3, 5), (4, 5)]


def _pulsar_cells() -> List[Tuple[int, int]]:
    cells = set()
    for row, column in _PULSAR_QUADRANT:
        for mirrored_row in (row, 12 - row):
            for mirrored_column in (column, 12 - column):
                cells.add((mirrored_row, mirrored_column))
    return sorted(cells)


class PatternLibrary:
    """In-memory collection of patterns, preloaded with the classics."""

    CATEGORIES = {
        "Still Life": ["Block", "Beehive", "Loaf"],
        "Oscillators": ["Blinker", "Toad", "Beacon", "Pulsar"],
        "Spaceships": ["Glider", "Lightweight Spaceship"],
        "Methuselahs": ["R-pentomino", "Diehard", "Acorn"],
    }

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        # Still lifes
        self.add_pattern(Pattern("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], "2x2 still life block"))
        self.add_pattern(
            Pattern("Beehive", [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 2)], "Beehive still life")
        )
        self.add_pattern(
            Pattern("Loaf", [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 3), (3, 2)], "Loaf still life")
        )

        # Oscillators
        self.add_pattern(Pattern("Blinker", [(1, 0), (1, 1), (1, 2)], "Period-2 oscillator"))
        self.add_pattern(
            Pattern("Toad", [(0, 1), (0, 2), (0, 3), (1, 0), (1, 1), (1, 2)], "Period-2 oscillator")
        )
        self.add_pattern(
            Pattern("Beacon", [(0, 0), (0, 1), (1, 0), (2, 3), (3, 2), (3, 3)], "Period-2 oscillator")
        )
        self.add_pattern(Pattern("Pulsar", _pulsar_cells(), "Period-3 oscillator"))

        # Spaceships
        self.add_pattern(
            Pattern("Glider", [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)], "Smallest spaceship, period-4")
        )
        self.add_pattern(
            Pattern(
                "Lightweight Spaceship",
                [(0, 0), (0, 3), (1, 4), (2, 0), (2, 4), (3, 1), (3, 2), (3, 3), (3, 4)],
                "LWSS - Period-4 spaceship",
            )
        )

        # Methuselahs
        self.add_pattern(
            Pattern(
                "R-pentomino",
                [(0, 1), (0, 2), (1, 0), (1, 1), (2, 1)],
                "Methuselah that stabilizes after 1103 generations",
            )
        )
        self.add_pattern(
            Pattern(
                "Diehard",
                [(0, 6), (1, 0), (1, 1), (2, 1), (2, 5), (2, 6), (2, 7)],
                "Dies after exactly 130 generations",
            )
        )
        self.add_pattern(
            Pattern(
                "Acorn",
                [(0, 1), (1, 3), (2, 0), (2, 1), (2, 4), (2, 5), (2, 6)],
                "Takes 5206 generations to stabilize",
            )
        )

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern, replacing any pattern with the same name."""
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name, or None if not found."""
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        """Names of all patterns, in insertion order."""
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get pattern names grouped by category.

        Patterns outside the built-in categories are listed under "Custom".
        Empty categories are omitted.
        """
        categories = {name: list(members) for name, members in self.CATEGORIES.items()}
        builtin = {member for members in self.CATEGORIES.values() for member in members}
        categories["Custom"] = [name for name in self._patterns if name not in builtin]

        return {category: names for category, names in categories.items() if names}
