"""Simulation configuration and termination status types."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .grid import RuleSet


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable settings read by every governor tick.

    Attributes:
        rule_set: Transition policy
        max_generations: Halt once this many generations ran (0 = unlimited)
        max_seen_states: History capacity (0 = unbounded)
        max_generation_time: Seconds a single step may take (0 = no limit)
        stop_on_long_generation: Halt when a step exceeds max_generation_time
        stop_on_stable: Halt when a step changes nothing
        stop_on_cycle: Halt when a previously seen grid reappears
    """
    rule_set: RuleSet = RuleSet.PVP
    max_generations: int = 10000
    max_seen_states: int = 10000
    max_generation_time: float = 0.2
    stop_on_long_generation: bool = True
    stop_on_stable: bool = True
    stop_on_cycle: bool = True

    def __post_init__(self):
        if not isinstance(self.rule_set, RuleSet):
            raise ValueError(f"Unknown rule set: {self.rule_set!r}")
        if self.max_generations < 0:
            raise ValueError("max_generations cannot be negative")
        if self.max_seen_states < 0:
            raise ValueError("max_seen_states cannot be negative")
        if self.max_generation_time < 0:
            raise ValueError("max_generation_time cannot be negative")

    @property
    def hashing_enabled(self) -> bool:
        """Fingerprinting is only needed while one of the detections is active."""
        return self.stop_on_cycle or self.stop_on_stable


class TerminationReason(Enum):
    RUNNING = "running"
    MAX_GENERATIONS_REACHED = "max_generations_reached"
    CYCLE_DETECTED = "cycle_detected"
    STABLE_NO_CHANGE = "stable_no_change"
    GENERATION_TOO_SLOW = "generation_too_slow"
    ALL_CELLS_DEAD = "all_cells_dead"


@dataclass(frozen=True)
class Status:
    """Outcome of the latest tick.

    Attributes:
        reason: Why the simulation stopped, or RUNNING
        period: Cycle length, set only for CYCLE_DETECTED
        stable: Last step changed nothing (informational while running)
        detail: Human-readable status line
    """
    reason: TerminationReason = TerminationReason.RUNNING
    period: Optional[int] = None
    stable: bool = False
    detail: str = ""

    @property
    def halted(self) -> bool:
        return self.reason is not TerminationReason.RUNNING

    @classmethod
    def running(cls, detail: str = "", stable: bool = False) -> 'Status':
        return cls(TerminationReason.RUNNING, stable=stable, detail=detail)

    @classmethod
    def max_generations(cls, limit: int) -> 'Status':
        return cls(TerminationReason.MAX_GENERATIONS_REACHED,
                   detail=f"Stopped: reached max generations ({limit})")

    @classmethod
    def cycle(cls, period: int) -> 'Status':
        return cls(TerminationReason.CYCLE_DETECTED, period=period,
                   detail=f"Stopped: detected cycle (period {period})")

    @classmethod
    def stable_no_change(cls) -> 'Status':
        return cls(TerminationReason.STABLE_NO_CHANGE, stable=True,
                   detail="Stopped: stable (no changes)")

    @classmethod
    def too_slow(cls, seconds: float) -> 'Status':
        return cls(TerminationReason.GENERATION_TOO_SLOW,
                   detail=f"Stopped: generation too slow ({seconds:.3f}s)")

    @classmethod
    def all_dead(cls) -> 'Status':
        return cls(TerminationReason.ALL_CELLS_DEAD, detail="Stopped: all cells died")
