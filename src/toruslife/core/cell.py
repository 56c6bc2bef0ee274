"""Cell state and the per-cell accessor."""

from enum import IntEnum
from typing import Any, Optional, Tuple
import numpy as np

from .errors import InvalidArgumentError


class CellState(IntEnum):
    """The two states a cell can be in."""

    DEAD = 0
    ALIVE = 1


def to_state(value: Any) -> CellState:
    """Coerce a CellState, bool or 0/1 integer to a CellState.

    Raises:
        InvalidArgumentError: If the value is not one of the two states
    """
    if isinstance(value, CellState):
        return value
    if isinstance(value, (bool, int, np.bool_, np.integer)) and value in (0, 1):
        return CellState(int(value))
    raise InvalidArgumentError(f"Invalid cell state: {value!r}")


class Cell:
    """A single alive/dead cell.

    A Cell built directly owns a one-slot buffer. Cells handed out by a Grid
    are views onto one slot of the grid's state matrix, so writing through
    them changes the grid.
    """

    __slots__ = ("_buffer", "_row", "_column", "_owned")

    def __init__(self, state: CellState = CellState.DEAD) -> None:
        """Initialize a standalone cell.

        Args:
            state: Initial state (dead by default)
        """
        self._buffer = np.zeros((1, 1), dtype=np.int8)
        self._row = 0
        self._column = 0
        self._owned = True
        self.set_state(state)

    @classmethod
    def view(cls, buffer: np.ndarray, row: int, column: int) -> "Cell":
        """Create a cell backed by ``buffer[row, column]``.

        Coordinates must already be in range; Grid normalizes them.
        """
        cell = cls.__new__(cls)
        cell._buffer = buffer
        cell._row = row
        cell._column = column
        cell._owned = False
        return cell

    @property
    def position(self) -> Optional[Tuple[int, int]]:
        """(row, column) inside the owning grid, or None for a standalone cell."""
        if self._owned:
            return None
        return (self._row, self._column)

    @property
    def state(self) -> CellState:
        return self.get_state()

    @state.setter
    def state(self, value: CellState) -> None:
        self.set_state(value)

    def get_state(self) -> CellState:
        """Return the current state."""
        return CellState(int(self._buffer[self._row, self._column]))

    def set_state(self, state: CellState) -> None:
        """Set the state.

        Args:
            state: CellState, bool or 0/1

        Raises:
            InvalidArgumentError: If state is not a valid cell state
        """
        self._buffer[self._row, self._column] = to_state(state)

    def is_alive(self) -> bool:
        """Return True iff the cell is alive."""
        return bool(self._buffer[self._row, self._column] == CellState.ALIVE)

    def __eq__(self, other: object) -> bool:
        """Cells are equal when they refer to the same slot of the same storage."""
        if not isinstance(other, Cell):
            return NotImplemented
        return (
            self._buffer is other._buffer
            and self._row == other._row
            and self._column == other._column
        )

    def __hash__(self) -> int:
        return hash((id(self._buffer), self._row, self._column))

    def __repr__(self) -> str:
        if self._owned:
            return f"Cell({self.get_state().name})"
        return f"Cell({self.get_state().name} at {self._row}, {self._column})"
