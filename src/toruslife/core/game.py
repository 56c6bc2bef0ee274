"""Conway's Game of Life simulation driver."""

import logging
from typing import Any, Deque, Dict, List, Tuple
from collections import deque

from .errors import InvalidArgumentError
from .grid import Grid

logger = logging.getLogger(__name__)


class GameOfLife:
    """Runs a toroidal grid forward generation by generation.

    Implements the classic rules through ``Grid.update_to_next_generation``:
    - Live cell with 2-3 neighbors survives
    - Dead cell with exactly 3 neighbors becomes alive
    - All other cells die or stay dead

    On top of that it tracks the generation number, a bounded population
    history, and detects when the board repeats an earlier state.
    """

    def __init__(
        self,
        grid: Grid,
        population_history_size: int = 100,
        state_history_size: int = 1000,
    ) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The toroidal grid to simulate
            population_history_size: Number of population counts kept
            state_history_size: Number of past boards remembered for cycle detection

        Raises:
            InvalidArgumentError: If a history size is not positive
        """
        if population_history_size <= 0 or state_history_size <= 0:
            raise InvalidArgumentError("History sizes must be > 0")

        self.grid = grid
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=population_history_size)
        self._state_history: Deque[bytes] = deque(maxlen=state_history_size)
        self._seen_states: Dict[bytes, int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    @property
    def population_history(self) -> List[int]:
        """History of population counts, oldest first."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        """Whether a repeated board has been seen."""
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> None:
        """Advance the simulation by one generation."""
        self._check_for_cycles()
        self.grid.update_to_next_generation()
        self._generation += 1
        self._update_population_history()

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def _check_for_cycles(self) -> None:
        """Record the current board and flag a cycle if it was seen before."""
        if self._cycle_detected:
            return

        current_state = self.grid.cells.tobytes()

        if current_state in self._seen_states:
            first_occurrence = self._seen_states[current_state]
            self._cycle_detected = True
            self._cycle_length = self._generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            logger.info(
                "Cycle of length %d detected at generation %d (first seen at %d)",
                self._cycle_length,
                self._generation,
                first_occurrence,
            )
            return

        # Forget the board about to fall out of the bounded history
        if len(self._state_history) == self._state_history.maxlen:
            oldest = self._state_history[0]
            if self._seen_states.get(oldest) == self._generation - len(self._state_history):
                del self._seen_states[oldest]

        self._seen_states[current_state] = self._generation
        self._state_history.append(current_state)

    def reset(self, clear_grid: bool = True) -> None:
        """Reset the simulation.

        Args:
            clear_grid: Whether to clear the grid as well
        """
        if clear_grid:
            self.grid.clear()

        self._generation = 0
        self._population_history.clear()
        self.clear_cycle_detection()
        self._update_population_history()

    def clear_cycle_detection(self) -> None:
        """Forget remembered boards and any detected cycle.

        Call this after editing the grid by hand, since earlier boards no
        longer describe where the simulation came from.
        """
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0
        self._seen_states.clear()
        self._state_history.clear()

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run simulation until it becomes stable or cycles.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'

        Raises:
            InvalidArgumentError: If max_generations is negative
        """
        if max_generations < 0:
            raise InvalidArgumentError(f"max_generations must be >= 0, got {max_generations}")

        reason = "max_generations"
        for _ in range(max_generations):
            self.step()

            if self._cycle_detected:
                reason = "cycle"
                break

            if self.population == 0:
                logger.info("Population extinct at generation %d", self._generation)
                reason = "extinction"
                break

        logger.debug("Run finished at generation %d: %s", self._generation, reason)
        return self._generation, reason

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Net population change per generation across the last ``window_size`` records."""
        if window_size < 2:
            raise InvalidArgumentError(f"window_size must be >= 2, got {window_size}")

        window = list(self._population_history)[-window_size:]
        if len(window) < 2:
            return 0.0
        return (window[-1] - window[0]) / (len(window) - 1)

    def get_statistics(self) -> Dict[str, Any]:
        """Summary of the run.

        ``cycle`` is ``(start_generation, length)`` once a repeat has been seen
        and None before that. ``bounding_box`` is None on an empty board.
        """
        return {
            "generation": self._generation,
            "population": self.population,
            "population_density": self.population / len(self.grid),
            "population_change_rate": self.get_population_change_rate(),
            "grid_size": self.grid.shape,
            "cycle": (self._cycle_start_generation, self._cycle_length) if self._cycle_detected else None,
            "bounding_box": self.grid.get_bounding_box(),
        }
