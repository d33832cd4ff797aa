"""Execution governor for the duel simulator.

The Simulation owns the grid, the generation counter, the fingerprint history
and the scores. Every tick runs the same state machine:

1. generation budget check (halts before computing)
2. fingerprint + cycle check (halts before computing)
3. transition, timed with the injected clock
4. commit, generation += 1, scoring
5. slow-generation check (the slow generation stays committed)
6. extinction check (unconditional)
7. stability check, then change events

Halt reasons are returned as Status values, never raised.
"""

import time
from dataclasses import replace
from typing import Callable, List, Optional, Tuple, Union
import logging

import numpy as np

from .config import SimulationConfig, Status
from .engine import CellChange, Transition, TransitionEngine, diff_states
from .grid import CellValue, Grid, RuleSet
from .hashing import fingerprint
from .history import HistoryTracker
from .scoring import Scoreboard

logger = logging.getLogger(__name__)

ChangeListener = Callable[[Tuple[CellChange, ...]], None]

DEFAULT_FILL_PROBABILITY = 0.12


class Simulation:
    """Tick-driven simulation with cycle, stability and budget detection.

    Attributes:
        grid: Current generation
        config: Active immutable configuration
        history: Fingerprint history used for cycle detection
        scoreboard: Scores for the active rule set
        is_running: Whether tick() advances the simulation
    """

    def __init__(self, width: int, height: int,
                 config: Optional[SimulationConfig] = None,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None,
                 clock: Optional[Callable[[], float]] = None):
        """Initialize an empty simulation.

        Args:
            width: Grid width in cells
            height: Grid height in cells
            config: Configuration (defaults to SimulationConfig())
            rng: Random source for tie-breaks and randomize fill
            seed: Seed for a fresh numpy Generator when rng is not given
            clock: Monotonic seconds source used to time generations

        Raises:
            ValueError: If dimensions are invalid
        """
        self.grid = Grid(width, height)
        self.config = config if config is not None else SimulationConfig()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.clock = clock if clock is not None else time.perf_counter

        self.engine = TransitionEngine()
        self.history = HistoryTracker(self.config.max_seen_states)
        self.scoreboard = Scoreboard(self.config.rule_set)

        self.generation = 0
        self.is_running = False
        self._status = Status.running()
        self._running_detail = ""
        self._listeners: List[ChangeListener] = []

        logger.debug(f"Created simulation {width}x{height} with {self.config}")

    # -- queries ---------------------------------------------------------

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def rule_set(self) -> RuleSet:
        return self.config.rule_set

    @property
    def current_generation(self) -> int:
        return self.generation

    @property
    def status(self) -> Status:
        return self._status

    def scores(self) -> Union[int, Tuple[int, int]]:
        """Population in classic mode, cumulative (A, B) births in PvP."""
        return self.scoreboard.scores()

    def get_cell(self, x: int, y: int) -> CellValue:
        """Cell value at (x, y); raises OutOfBoundsError outside the grid."""
        return self.grid.get(x, y)

    # -- change events ---------------------------------------------------

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback receiving the CellChange tuple of every update."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        self._listeners.remove(listener)

    def _notify(self, changes: Tuple[CellChange, ...]) -> None:
        if not changes:
            return
        for listener in list(self._listeners):
            listener(changes)

    # -- configuration ---------------------------------------------------

    def configure(self, config: Optional[SimulationConfig] = None, **changes) -> SimulationConfig:
        """Install a new configuration.

        Either pass a full SimulationConfig, field overrides, or both (the
        overrides are applied on top of config). Switching rule set clears the
        board, since faction values do not carry over between modes.

        Returns:
            The configuration now in effect

        Raises:
            ValueError: If the resulting configuration is invalid
        """
        new_config = config if config is not None else self.config
        if changes:
            new_config = replace(new_config, **changes)

        previous = self.config
        self.config = new_config
        self.history.resize(new_config.max_seen_states)
        logger.debug(f"Configured {new_config}")

        if new_config.rule_set is not previous.rule_set:
            self.clear()

        return new_config

    # -- external edits and resets ---------------------------------------

    def set_cell(self, x: int, y: int, value: CellValue) -> None:
        """Set a cell; coordinates outside the grid are ignored.

        Classic mode has a single population, so any live value is stored as
        faction A.
        """
        if not self.grid.in_bounds(x, y):
            return

        old = self.grid.get(x, y)
        value = CellValue(value)
        if self.config.rule_set is RuleSet.CLASSIC and value is not CellValue.DEAD:
            value = CellValue.FACTION_A
        self.grid.set(x, y, value)
        if old is not value:
            self._notify((CellChange(x, y, old, value),))

    def _replace_state(self, new_state: np.ndarray) -> None:
        changes = diff_states(self.grid.state, new_state)
        self.grid.state[:] = new_state
        self._notify(changes)

    def _reset_run(self) -> None:
        self.is_running = False
        self.generation = 0
        self.history.clear()
        self.scoreboard.reset(self.config.rule_set)
        self._running_detail = ""
        self._status = Status.running()

    def reset(self, value: CellValue = CellValue.DEAD) -> None:
        """Fill the grid with value and start a fresh run."""
        new_state = np.full_like(self.grid.state, CellValue(value))
        self._replace_state(new_state)
        self._reset_run()
        logger.debug(f"Reset grid to {CellValue(value).name}")

    def clear(self) -> None:
        """Kill every cell and start a fresh run."""
        self.reset(CellValue.DEAD)

    def randomize(self, fill_probability: float = DEFAULT_FILL_PROBABILITY,
                  rule_set: Optional[RuleSet] = None,
                  rng: Optional[np.random.Generator] = None) -> None:
        """Random fill and fresh run.

        Args:
            fill_probability: Chance of a cell being occupied
            rule_set: Switch to this rule set first (None keeps the current one)
            rng: Random source for the fill (defaults to the simulation's)
        """
        target = rule_set if rule_set is not None else self.config.rule_set

        # Fill first so an invalid probability leaves the simulation untouched
        scratch = Grid(self.width, self.height)
        scratch.randomize(fill_probability, target,
                          rng if rng is not None else self.rng)

        if target is not self.config.rule_set:
            self.config = replace(self.config, rule_set=target)
        self._replace_state(scratch.state)
        self._reset_run()
        logger.debug(f"Randomized grid with fill probability {fill_probability}")

    def clear_detections(self) -> None:
        """Forget seen states and restart the generation count."""
        self.history.clear()
        self.generation = 0
        self._running_detail = ""
        self._status = Status.running()

    def resume_ignoring_detections(self) -> None:
        """Disable stable/cycle detection for the rest of the run and keep going."""
        self.config = replace(self.config, stop_on_stable=False, stop_on_cycle=False)
        self.history.clear()
        self._running_detail = "(detections ignored)"
        self._status = Status.running(self._running_detail)
        self.is_running = True

    def play_again(self) -> None:
        """Clear the board and re-enable both detections."""
        self.clear()
        self.config = replace(self.config, stop_on_stable=True, stop_on_cycle=True)

    # -- running ---------------------------------------------------------

    def start(self) -> None:
        self.is_running = True

    def pause(self) -> None:
        self.is_running = False

    def toggle_run(self) -> bool:
        self.is_running = not self.is_running
        return self.is_running

    def tick(self) -> Status:
        """Advance one generation if running; the hook for an external timer."""
        if not self.is_running:
            return self._status
        return self._advance()

    def step(self) -> Status:
        """Advance exactly one generation while paused.

        Does nothing while the run is active, so a manual step never
        interleaves with timer ticks.
        """
        if self.is_running:
            return self._status
        return self._advance()

    def run(self, max_ticks: Optional[int] = None) -> Status:
        """Tick until halted or until max_ticks ticks were taken."""
        self.start()
        ticks = 0
        while self.is_running and (max_ticks is None or ticks < max_ticks):
            self._advance()
            ticks += 1
        return self._status

    def _halt(self, status: Status) -> Status:
        self.is_running = False
        self._status = status
        logger.info(status.detail)
        return status

    def _advance(self) -> Status:
        config = self.config

        if config.max_generations > 0 and self.generation >= config.max_generations:
            return self._halt(Status.max_generations(config.max_generations))

        if config.hashing_enabled:
            previous = self.history.observe(fingerprint(self.grid), self.generation)
            if config.stop_on_cycle and previous is not None:
                return self._halt(Status.cycle(self.generation - previous))

        started = self.clock()
        transition = self.engine.compute(self.grid.state, config.rule_set, self.rng)
        elapsed = self.clock() - started

        self.grid.state[:] = transition.state
        self.generation += 1
        self.scoreboard.record(self.grid, transition.births)

        status = self._settle(config, transition, elapsed)
        # Listeners see the committed generation and its final status
        self._notify(transition.changes)
        return status

    def _settle(self, config: SimulationConfig, transition: Transition, elapsed: float) -> Status:
        """Decide the status of a just-committed generation."""
        if (config.stop_on_long_generation and config.max_generation_time > 0
                and elapsed > config.max_generation_time):
            return self._halt(Status.too_slow(elapsed))

        if self.grid.is_empty():
            return self._halt(Status.all_dead())

        if not transition.changed:
            if config.stop_on_stable:
                return self._halt(Status.stable_no_change())
            self._status = Status.running("Stable (no changes)", stable=True)
            return self._status

        self._status = Status.running(self._running_detail)
        return self._status

    def __repr__(self) -> str:
        return (f"Simulation({self.width}x{self.height}, {self.rule_set.value}, "
                f"generation={self.generation}, status={self._status.reason.value})")
