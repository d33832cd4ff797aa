"""
lifeduel: Game of Life with a two-faction duel mode.

Transition engine, state fingerprinting and the execution governor that
detects cycles, stability, extinction and runaway generations. Rendering and
input handling live outside this package and subscribe to cell change events.
"""

from .core.config import SimulationConfig, Status, TerminationReason
from .core.engine import BirthYield, CellChange, Transition, TransitionEngine
from .core.grid import CellValue, Grid, OutOfBoundsError, RuleSet
from .core.hashing import fingerprint
from .core.history import HistoryTracker
from .core.scoring import Scoreboard
from .core.simulation import Simulation

__version__ = "0.1.0"

__all__ = [
    'BirthYield',
    'CellChange',
    'CellValue',
    'Grid',
    'HistoryTracker',
    'OutOfBoundsError',
    'RuleSet',
    'Scoreboard',
    'Simulation',
    'SimulationConfig',
    'Status',
    'TerminationReason',
    'Transition',
    'TransitionEngine',
    'fingerprint',
]
