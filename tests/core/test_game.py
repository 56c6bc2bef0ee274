"""Tests for the GameOfLife class."""

import logging

import pytest

from toruslife.core.errors import InvalidArgumentError
from toruslife.core.game import GameOfLife
from toruslife.core.grid import Grid
from toruslife.core.patterns import PatternLibrary


def vertical_blinker(grid, row=4, column=5):
    for offset in (-1, 0, 1):
        grid.set_cell(row + offset, column, True)


class TestGameOfLife:
    """Test cases for the GameOfLife class."""

    def test_initialization(self):
        """Test game initialization."""
        grid = Grid(10, 10)
        game = GameOfLife(grid)

        assert game.grid is grid
        assert game.generation == 0
        assert game.population == 0
        assert game.population_history == [0]
        assert not game.cycle_detected
        assert game.cycle_length == 0
        assert game.cycle_start_generation == 0

    @pytest.mark.parametrize("kwargs", [{"population_history_size": 0}, {"state_history_size": -1}])
    def test_invalid_history_sizes(self, kwargs):
        with pytest.raises(InvalidArgumentError):
            GameOfLife(Grid(3, 3), **kwargs)

    def test_still_life_block(self):
        """Test that a block pattern is stable (still life)."""
        grid = Grid(10, 10)
        game = GameOfLife(grid)

        for row, column in [(4, 4), (4, 5), (5, 4), (5, 5)]:
            grid.set_cell(row, column, True)

        for _ in range(5):
            game.step()

        assert game.population == 4
        assert grid.is_alive(4, 4)
        assert grid.is_alive(4, 5)
        assert grid.is_alive(5, 4)
        assert grid.is_alive(5, 5)
        assert game.generation == 5

    def test_oscillator_blinker(self):
        """Test blinker oscillator (period 2)."""
        grid = Grid(10, 10)
        game = GameOfLife(grid)
        vertical_blinker(grid, 5, 5)

        game.step()
        assert game.population == 3
        assert grid.is_alive(5, 4)
        assert grid.is_alive(5, 5)
        assert grid.is_alive(5, 6)
        assert not grid.is_alive(4, 5)
        assert not grid.is_alive(6, 5)

        game.step()
        assert grid.is_alive(4, 5)
        assert grid.is_alive(5, 5)
        assert grid.is_alive(6, 5)
        assert not grid.is_alive(5, 4)

    def test_extinction(self):
        """Test pattern that goes extinct."""
        grid = Grid(10, 10)
        game = GameOfLife(grid)
        grid.set_cell(5, 5, True)

        game.step()
        assert game.population == 0
        assert game.generation == 1

    def test_population_history(self):
        grid = Grid(10, 10)
        game = GameOfLife(grid)
        vertical_blinker(grid)

        for i in range(3):
            game.step()
            history = game.population_history
            assert len(history) == i + 2
            assert history[-1] == 3

    def test_population_history_is_bounded(self):
        game = GameOfLife(Grid(5, 5), population_history_size=3)
        for _ in range(10):
            game.step()
        assert len(game.population_history) == 3

    def test_cycle_detection(self):
        """Test cycle detection with blinker."""
        grid = Grid(10, 10)
        game = GameOfLife(grid)
        vertical_blinker(grid)

        for _ in range(10):
            if game.cycle_detected:
                break
            game.step()

        assert game.cycle_detected
        assert game.cycle_length == 2
        assert game.cycle_start_generation == 0

    def test_cycle_detection_logs(self, caplog):
        grid = Grid(10, 10)
        game = GameOfLife(grid)
        vertical_blinker(grid)

        with caplog.at_level(logging.INFO, logger="toruslife.core.game"):
            game.run_until_stable(max_generations=10)

        assert "Cycle of length 2" in caplog.text

    def test_short_state_history_forgets_old_boards(self):
        """A history shorter than the period cannot see the repeat."""
        grid = Grid(10, 10)
        game = GameOfLife(grid, state_history_size=1)
        vertical_blinker(grid)

        for _ in range(6):
            game.step()

        assert not game.cycle_detected

    def test_clear_cycle_detection(self):
        grid = Grid(10, 10)
        game = GameOfLife(grid)
        vertical_blinker(grid)
        game.run_until_stable(max_generations=10)
        assert game.cycle_detected

        generation = game.generation
        game.clear_cycle_detection()
        assert not game.cycle_detected
        assert game.cycle_length == 0
        assert game.generation == generation

    def test_reset(self):
        """Test game reset functionality."""
        grid = Grid(5, 5)
        game = GameOfLife(grid)
        vertical_blinker(grid, 2, 2)
        game.step()
        game.step()
        assert game.generation == 2

        game.reset(clear_grid=False)
        assert game.generation == 0
        assert game.population_history == [3]
        assert not game.cycle_detected
        assert game.population == 3

        game.reset(clear_grid=True)
        assert game.generation == 0
        assert game.population == 0
        assert game.population_history == [0]

    def test_run_until_stable_extinction(self):
        grid = Grid(10, 10)
        game = GameOfLife(grid)
        grid.set_cell(5, 5, True)

        final_gen, reason = game.run_until_stable(max_generations=100)

        assert reason == "extinction"
        assert final_gen == 1
        assert game.population == 0

    def test_run_until_stable_cycle(self):
        grid = Grid(10, 10)
        game = GameOfLife(grid)
        vertical_blinker(grid)

        final_gen, reason = game.run_until_stable(max_generations=100)

        assert reason == "cycle"
        assert final_gen == 3
        assert game.cycle_length == 2

    def test_run_until_stable_still_life_is_cycle_of_one(self):
        grid = Grid(6, 6)
        game = GameOfLife(grid)
        PatternLibrary().get_pattern("Block").apply_to_grid(grid, 2, 2)

        _, reason = game.run_until_stable(max_generations=10)

        assert reason == "cycle"
        assert game.cycle_length == 1

    def test_run_until_stable_max_generations(self):
        grid = Grid(40, 40)
        game = GameOfLife(grid)
        PatternLibrary().get_pattern("R-pentomino").apply_to_grid(grid, 18, 18)

        final_gen, reason = game.run_until_stable(max_generations=5)

        assert reason == "max_generations"
        assert final_gen == 5

    def test_run_until_stable_zero_generations(self):
        game = GameOfLife(Grid(3, 3))
        assert game.run_until_stable(max_generations=0) == (0, "max_generations")

    def test_run_until_stable_negative(self):
        game = GameOfLife(Grid(3, 3))
        with pytest.raises(InvalidArgumentError):
            game.run_until_stable(max_generations=-1)

    def test_population_change_rate(self):
        grid = Grid(10, 10)
        game = GameOfLife(grid)
        assert game.get_population_change_rate() == 0.0

        grid.set_cell(5, 5, True)
        game.step()
        # History is [0, 0]: the live cell was set after the first record
        assert game.get_population_change_rate() == 0.0

        vertical_blinker(grid)
        game.step()
        assert game.get_population_change_rate(window_size=2) == 3.0

    def test_get_statistics(self):
        grid = Grid(10, 10)
        game = GameOfLife(grid)
        vertical_blinker(grid, 5, 5)

        stats = game.get_statistics()
        assert stats["generation"] == 0
        assert stats["population"] == 3
        assert stats["grid_size"] == (10, 10)
        assert stats["population_density"] == pytest.approx(0.03)
        assert stats["bounding_box"] == (4, 5, 6, 5)
        assert stats["cycle"] is None

        game.run_until_stable(max_generations=10)
        assert game.get_statistics()["cycle"] == (0, 2)

    def test_get_statistics_empty(self):
        stats = GameOfLife(Grid(4, 4)).get_statistics()
        assert stats["bounding_box"] is None
        assert stats["population_density"] == 0.0

    def test_population_change_rate_rejects_short_window(self):
        game = GameOfLife(Grid(3, 3))
        with pytest.raises(InvalidArgumentError):
            game.get_population_change_rate(window_size=1)
