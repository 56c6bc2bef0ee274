"""Toroidal grid data structure for Conway's Game of Life."""

import logging
import numbers
import random
from typing import Any, Iterator, List, Optional, Tuple, Union
import numpy as np
import torch
import torch.nn.functional as F

from .cell import Cell, CellState
from .errors import InvalidArgumentError, InvalidDimensionError

logger = logging.getLogger(__name__)

RandomSource = Union[np.random.Generator, np.random.RandomState, random.Random]

# Row-major, centre excluded
NEIGHBOR_OFFSETS = tuple(
    (d_row, d_column)
    for d_row in (-1, 0, 1)
    for d_column in (-1, 0, 1)
    if (d_row, d_column) != (0, 0)
)


def apply_rules(alive: Any, neighbor_count: Any) -> Any:
    """Conway's rules on either scalars or numpy arrays.

    A cell is alive in the next generation when it has exactly three live
    neighbors, or when it is alive now and has exactly two. Every other cell
    is dead: underpopulation, overpopulation and dead-stays-dead.

    Args:
        alive: Current state (bool, CellState or array of either)
        neighbor_count: Live neighbor count (int or array of ints)

    Returns:
        True/False (or a boolean array) for the next state
    """
    return (neighbor_count == 3) | ((alive != 0) & (neighbor_count == 2))


class Grid:
    """A fixed-size rows x columns torus of cells.

    Every coordinate is wrapped modulo the grid dimensions before lookup, so
    any integer pair resolves to exactly one cell and edge cells always have
    eight neighbors. Cell states live in a single numpy matrix owned by the
    grid; ``get_cell`` hands out views onto it.
    """

    def __init__(self, rows: int, columns: int) -> None:
        """Initialize a new grid with every cell dead.

        Args:
            rows: Number of rows
            columns: Number of columns

        Raises:
            InvalidDimensionError: If rows or columns is not a positive integer
        """
        for name, value in (("rows", rows), ("columns", columns)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidDimensionError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise InvalidDimensionError(f"{name} must be > 0, got {value}")

        self._rows = int(rows)
        self._columns = int(columns)
        self._cells = np.zeros((self._rows, self._columns), dtype=np.int8)

        # Single-threaded torch; tensors reused across generations
        torch.set_num_threads(1)
        self._torch_input = torch.zeros(1, 1, self._rows, self._columns, dtype=torch.float32)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

        logger.debug("Created %dx%d grid", self._rows, self._columns)

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def columns(self) -> int:
        """Number of columns."""
        return self._columns

    @property
    def number_of_rows(self) -> int:
        """Number of rows (same as ``rows``)."""
        return self._rows

    @property
    def number_of_columns(self) -> int:
        """Number of columns (same as ``columns``)."""
        return self._columns

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions as (rows, columns)."""
        return (self._rows, self._columns)

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the state matrix."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    @property
    def population(self) -> int:
        """Number of living cells."""
        return int(np.count_nonzero(self._cells))

    def wrap(self, row: int, column: int) -> Tuple[int, int]:
        """Normalize any coordinate pair onto the torus.

        Python's ``%`` with a positive modulus is never negative, so -1 maps
        to the last row/column and ``rows``/``columns`` map to 0.
        """
        return (row % self._rows, column % self._columns)

    def get_cell(self, row: int, column: int) -> Cell:
        """Get the cell at a (possibly out-of-range) coordinate.

        Args:
            row: Row index, any integer
            column: Column index, any integer

        Returns:
            Cell view onto the wrapped position
        """
        wrapped_row, wrapped_column = self.wrap(row, column)
        return Cell.view(self._cells, wrapped_row, wrapped_column)

    def is_alive(self, row: int, column: int) -> bool:
        """Return True if the cell at the wrapped coordinate is alive."""
        return self.get_cell(row, column).is_alive()

    def set_cell(self, row: int, column: int, state: Union[CellState, bool]) -> None:
        """Set the state of the cell at the wrapped coordinate.

        Raises:
            InvalidArgumentError: If state is not a valid cell state
        """
        self.get_cell(row, column).set_state(state)

    def toggle_cell(self, row: int, column: int) -> bool:
        """Flip a cell between alive and dead.

        Returns:
            True if the cell is alive afterwards
        """
        cell = self.get_cell(row, column)
        cell.set_state(CellState.DEAD if cell.is_alive() else CellState.ALIVE)
        return cell.is_alive()

    def get_neighbors(self, row: int, column: int) -> List[Cell]:
        """Return the eight toroidal neighbors of a cell in row-major order.

        On grids narrower than three cells some entries resolve to the same
        cell (or to the centre cell itself); the list still has eight entries.
        """
        return [self.get_cell(row + d_row, column + d_column) for d_row, d_column in NEIGHBOR_OFFSETS]

    def count_alive_neighbors(self, row: int, column: int) -> int:
        """Count living neighbors of a cell (0-8)."""
        return sum(1 for cell in self.get_neighbors(row, column) if cell.is_alive())

    def count_all_neighbors(self) -> np.ndarray:
        """Count living neighbors for every cell at once.

        Uses a 3x3 convolution over a circularly padded board. Grids with a
        side below three are counted cell by cell instead.

        Returns:
            int8 array of shape (rows, columns)
        """
        if min(self.shape) < 3:
            counts = np.zeros(self.shape, dtype=np.int8)
            for row, column in self.coordinates():
                counts[row, column] = self.count_alive_neighbors(row, column)
            return counts

        self._torch_input[0, 0] = torch.from_numpy(self._cells.astype(np.float32))
        padded = F.pad(self._torch_input, (1, 1, 1, 1), mode="circular")
        neighbors = F.conv2d(padded, self._torch_kernel)
        return neighbors[0, 0].round().numpy().astype(np.int8)

    def calculate_next_state(self, row: int, column: int) -> CellState:
        """Compute the next state of one cell without changing the grid."""
        cell = self.get_cell(row, column)
        alive_neighbors = self.count_alive_neighbors(row, column)
        return CellState(int(apply_rules(cell.is_alive(), alive_neighbors)))

    def calculate_next_states(self) -> np.ndarray:
        """Compute the next generation for the whole grid.

        The grid is not modified; every next state is derived from the same
        current generation.

        Returns:
            New int8 array of shape (rows, columns) holding CellState values
        """
        return apply_rules(self._cells, self.count_all_neighbors()).astype(np.int8)

    def update_states(self, next_states: Any) -> None:
        """Overwrite every cell with a precomputed state matrix.

        Args:
            next_states: rows x columns array-like of CellState, bool or 0/1

        Raises:
            InvalidArgumentError: If the shape is wrong or a value is not a state
        """
        try:
            states = np.asarray(next_states)
        except ValueError as e:
            raise InvalidArgumentError(f"State matrix is not rectangular: {e}") from e
        if states.shape != self.shape:
            raise InvalidArgumentError(f"State shape {states.shape} doesn't match grid {self.shape}")
        if not np.isin(states, (0, 1)).all():
            raise InvalidArgumentError("State matrix may only contain DEAD (0) and ALIVE (1)")

        self._cells[:] = states

    def update_to_next_generation(self) -> None:
        """Advance the whole grid by one generation.

        The full next-state matrix is computed before any cell is written, so
        no neighbor count sees a partially updated board.
        """
        self.update_states(self.calculate_next_states())

    def clear(self) -> None:
        """Set every cell dead."""
        self._cells.fill(CellState.DEAD)
        logger.debug("Cleared %dx%d grid", self._rows, self._columns)

    def random_generation(self, source: Optional[RandomSource], probability: float = 0.5) -> None:
        """Set every cell independently alive or dead.

        Args:
            source: numpy Generator or RandomState (one vectorized draw), or
                random.Random (one draw per cell, row-major)
            probability: Chance each cell is alive (0.0 to 1.0)

        Raises:
            InvalidArgumentError: If source is missing or of an unsupported
                type, or probability is not a number in [0, 1]
        """
        if source is None:
            raise InvalidArgumentError("A randomness source is required")
        if isinstance(probability, bool) or not isinstance(probability, numbers.Real):
            raise InvalidArgumentError(f"probability must be a number, got {probability!r}")
        if not 0.0 <= probability <= 1.0:
            raise InvalidArgumentError(f"probability must be in [0, 1], got {probability}")

        if isinstance(source, (np.random.Generator, np.random.RandomState)):
            mask = source.random(self.shape) < probability
        elif isinstance(source, random.Random):
            draws = [source.random() < probability for _ in range(self._rows * self._columns)]
            mask = np.array(draws, dtype=bool).reshape(self.shape)
        else:
            raise InvalidArgumentError(f"Unsupported randomness source: {type(source).__name__}")

        self._cells[:] = mask
        logger.debug("Randomized grid (probability=%.3f, population=%d)", probability, self.population)

    def randomize(self, probability: float = 0.5, seed: Optional[int] = None) -> None:
        """Randomly populate the grid from a fresh numpy Generator."""
        self.random_generation(np.random.default_rng(seed), probability)

    def coordinates(self) -> Iterator[Tuple[int, int]]:
        """Yield every (row, column) in row-major order."""
        for row in range(self._rows):
            for column in range(self._columns):
                yield (row, column)

    def states(self) -> Iterator[CellState]:
        """Yield every cell state in row-major order."""
        for row, column in self.coordinates():
            yield CellState(int(self._cells[row, column]))

    def __iter__(self) -> Iterator[Cell]:
        """Yield a view of every cell in row-major order."""
        for row, column in self.coordinates():
            yield Cell.view(self._cells, row, column)

    def __len__(self) -> int:
        return self._rows * self._columns

    def copy_from(self, other: "Grid") -> None:
        """Copy cell states from another grid.

        Raises:
            InvalidArgumentError: If grids have different dimensions
        """
        if other.shape != self.shape:
            raise InvalidArgumentError(f"Grid dimensions don't match: {other.shape} vs {self.shape}")

        self._cells[:] = other._cells

    def to_list(self) -> List[List[int]]:
        """Convert the grid to a nested list, one inner list per row."""
        return self._cells.tolist()

    def from_list(self, data: List[List[Any]]) -> None:
        """Load cell states from a nested list, one inner list per row."""
        self.update_states(data)

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_row, min_column, max_row, max_column) or None if no
            living cells
        """
        living_rows, living_columns = np.nonzero(self._cells)
        if len(living_rows) == 0:
            return None

        return (
            int(living_rows.min()),
            int(living_columns.min()),
            int(living_rows.max()),
            int(living_columns.max()),
        )

    def __eq__(self, other: object) -> bool:
        """Check if two grids have the same shape and cell states."""
        if not isinstance(other, Grid):
            return False
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        return "\n".join("".join("*" if state else "." for state in row) for row in self._cells)

    def __repr__(self) -> str:
        return f"Grid(rows={self._rows}, columns={self._columns}, population={self.population})"
