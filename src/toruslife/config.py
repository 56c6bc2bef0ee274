"""
Configuration dataclass for toroidal Game of Life runs.
"""

import numbers
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional

from .core.errors import InvalidArgumentError, InvalidDimensionError
from .core.game import GameOfLife
from .core.grid import Grid


def _is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass
class LifeConfig:
    """
    Parameters for building and running a simulation.

    Attributes:
        rows: Number of grid rows
        columns: Number of grid columns
        alive_probability: Chance each cell starts alive when randomized
        seed: Seed for the numpy Generator used to randomize (None = fresh entropy)
        max_generations: Upper bound for ``GameOfLife.run_until_stable``
        population_history_size: Population counts kept by the driver
        state_history_size: Past boards remembered for cycle detection
    """

    rows: int = 32
    columns: int = 32
    alive_probability: float = 0.5
    seed: Optional[int] = None
    max_generations: int = 10000
    population_history_size: int = 100
    state_history_size: int = 1000

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        self._validate()

    def _validate(self) -> None:
        """Check that all parameters have the right type and are in valid ranges."""
        for name in ("rows", "columns"):
            if not _is_integer(getattr(self, name)):
                raise InvalidDimensionError(f"{name} must be an integer, got {getattr(self, name)!r}")

        for name in ("max_generations", "population_history_size", "state_history_size"):
            if not _is_integer(getattr(self, name)):
                raise InvalidArgumentError(f"{name} must be an integer, got {getattr(self, name)!r}")

        if isinstance(self.alive_probability, bool) or not isinstance(self.alive_probability, numbers.Real):
            raise InvalidArgumentError(f"alive_probability must be a number, got {self.alive_probability!r}")

        if self.seed is not None and not _is_integer(self.seed):
            raise InvalidArgumentError(f"seed must be an integer or None, got {self.seed!r}")

        if self.rows <= 0:
            raise InvalidDimensionError(f"rows must be > 0, got {self.rows}")

        if self.columns <= 0:
            raise InvalidDimensionError(f"columns must be > 0, got {self.columns}")

        if not 0.0 <= self.alive_probability <= 1.0:
            raise InvalidArgumentError(f"alive_probability must be in [0, 1], got {self.alive_probability}")

        if self.max_generations < 0:
            raise InvalidArgumentError(f"max_generations must be >= 0, got {self.max_generations}")

        if self.population_history_size <= 0:
            raise InvalidArgumentError(f"population_history_size must be > 0, got {self.population_history_size}")

        if self.state_history_size <= 0:
            raise InvalidArgumentError(f"state_history_size must be > 0, got {self.state_history_size}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LifeConfig":
        """Create config from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in known_fields})

    def create_grid(self, randomize: bool = True) -> Grid:
        """Build a grid of the configured size, randomized unless told otherwise."""
        grid = Grid(self.rows, self.columns)
        if randomize:
            grid.randomize(self.alive_probability, seed=self.seed)
        return grid

    def create_game(self, randomize: bool = True) -> GameOfLife:
        """Build a driver around a freshly created grid."""
        return GameOfLife(
            self.create_grid(randomize=randomize),
            population_history_size=self.population_history_size,
            state_history_size=self.state_history_size,
        )
