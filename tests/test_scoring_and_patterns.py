"""Tests for score keeping and the pattern library."""

import pytest
import numpy as np
from lifeduel import CellValue, RuleSet, Simulation, SimulationConfig
from lifeduel.core.engine import BirthYield
from lifeduel.core.grid import Grid
from lifeduel.core.scoring import Scoreboard
from lifeduel.patterns import LIBRARY, get_pattern, place_at_center, place_pattern
from lifeduel.patterns.library import BLINKER, GLIDER, GOSPER_GLIDER_GUN

A = CellValue.FACTION_A
B = CellValue.FACTION_B


class TestScoreboard:
    """Scoreboard bookkeeping."""

    def test_classic_population(self):
        board = Scoreboard(RuleSet.CLASSIC)
        grid = Grid(4, 4)
        grid[0, 0] = A
        grid[1, 1] = A

        board.record(grid, BirthYield(5, 5))
        assert board.scores() == 2

        grid.clear()
        board.record(grid, BirthYield())
        assert board.scores() == 0

    def test_pvp_cumulative_births(self):
        board = Scoreboard(RuleSet.PVP)
        grid = Grid(4, 4)

        board.record(grid, BirthYield(2, 1))
        board.record(grid, BirthYield(0, 3))
        assert board.scores() == (2, 4)

    def test_winner(self):
        board = Scoreboard(RuleSet.PVP)
        grid = Grid(2, 2)
        assert board.winner() is None

        board.record(grid, BirthYield(3, 1))
        assert board.winner() is A

        board.record(grid, BirthYield(0, 5))
        assert board.winner() is B

        assert Scoreboard(RuleSet.CLASSIC).winner() is None

    def test_reset(self):
        board = Scoreboard(RuleSet.PVP)
        board.record(Grid(2, 2), BirthYield(1, 1))
        board.reset(RuleSet.CLASSIC)
        assert board.rule_set is RuleSet.CLASSIC
        assert board.scores() == 0


class TestSimulationScores:
    """Scores as seen through the simulation."""

    def test_classic_score_is_population(self):
        sim = Simulation(5, 5, config=SimulationConfig(rule_set=RuleSet.CLASSIC))
        place_pattern(sim, BLINKER, 1, 2)
        sim.step()
        assert sim.scores() == 3

    def test_pvp_blinker_births(self):
        """Each blinker flip breeds two cells of the blinker's faction."""
        config = SimulationConfig(rule_set=RuleSet.PVP, stop_on_cycle=False)
        sim = Simulation(5, 5, config=config, seed=0)
        place_pattern(sim, BLINKER, 1, 2, B)

        sim.step()
        assert sim.scores() == (0, 2)
        sim.step()
        assert sim.scores() == (0, 4)

    def test_scores_reset_on_clear(self):
        config = SimulationConfig(rule_set=RuleSet.PVP, stop_on_cycle=False)
        sim = Simulation(5, 5, config=config)
        place_pattern(sim, BLINKER, 1, 2, A)
        sim.step()
        sim.clear()
        assert sim.scores() == (0, 0)


class TestPatternLibrary:
    """Built-in patterns."""

    def test_library_contents(self):
        names = [p.name for p in LIBRARY]
        assert names == ["Glider", "Blinker", "Block", "Toad", "Beacon", "Pulsar",
                         "LWSS", "Gosper Glider Gun", "Acorn"]

    def test_pattern_dimensions(self):
        assert (GLIDER.width, GLIDER.height) == (3, 3)
        assert (BLINKER.width, BLINKER.height) == (3, 1)
        assert (GOSPER_GLIDER_GUN.width, GOSPER_GLIDER_GUN.height) == (36, 9)
        assert len(GOSPER_GLIDER_GUN.live_offsets) == 36

    def test_get_pattern_case_insensitive(self):
        assert get_pattern("glider") is GLIDER
        assert get_pattern("GOSPER GLIDER GUN") is GOSPER_GLIDER_GUN

    def test_get_pattern_unknown(self):
        with pytest.raises(KeyError, match="Unknown pattern"):
            get_pattern("spaceship of theseus")

    def test_glider_offsets(self):
        assert GLIDER.live_offsets == ((1, 0), (2, 1), (0, 2), (1, 2), (2, 2))


class TestPatternPlacement:
    """Placement onto a simulation."""

    def test_place_pattern(self):
        sim = Simulation(6, 6)
        placed = place_pattern(sim, GLIDER, 1, 1, B)

        assert placed == 5
        assert sim.grid.count(B) == 5
        assert sim.get_cell(2, 1) is B
        assert sim.get_cell(1, 1) is CellValue.DEAD

    def test_placement_clips_at_edges(self):
        """Cells outside the grid are dropped without error."""
        sim = Simulation(4, 4)
        placed = place_pattern(sim, GLIDER, -1, -1, A)

        # (1,0) and (0,2) land at y=-1 and x=-1
        assert placed == 3
        assert sim.grid.count_alive() == 3
        assert sim.get_cell(1, 0) is A
        assert sim.get_cell(0, 1) is A
        assert sim.get_cell(1, 1) is A

    def test_placement_fully_outside(self):
        sim = Simulation(4, 4)
        assert place_pattern(sim, GOSPER_GLIDER_GUN, 10, 10) == 0
        assert sim.grid.is_empty()

    def test_classic_always_places_faction_a(self):
        sim = Simulation(5, 5, config=SimulationConfig(rule_set=RuleSet.CLASSIC))
        place_pattern(sim, BLINKER, 1, 2, B)
        assert sim.grid.count(A) == 3
        assert sim.grid.count(B) == 0

    def test_place_at_center(self):
        sim = Simulation(9, 9)
        place_at_center(sim, GLIDER, A)
        expected = np.zeros((9, 9), dtype=np.uint8)
        expected[3:6, 3:6] = GLIDER.cells
        np.testing.assert_array_equal(sim.grid.state, expected)

    def test_placement_does_not_reset_run(self):
        config = SimulationConfig(rule_set=RuleSet.CLASSIC, stop_on_cycle=False)
        sim = Simulation(8, 8, config=config)
        place_pattern(sim, BLINKER, 1, 2)
        sim.step()
        place_pattern(sim, BLINKER, 1, 6)
        assert sim.current_generation == 1
