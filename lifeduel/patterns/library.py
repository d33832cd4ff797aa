"""Classic Game of Life patterns and clipped placement onto a simulation.

Placement writes only the live cells of a pattern and silently drops those
that fall outside the grid, so patterns can be dropped near the edges.
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, Tuple
import logging

from ..core.grid import CellValue, RuleSet
from ..core.simulation import Simulation

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Pattern:
    """Named template of live cells, indexed cells[row, column]."""
    name: str
    cells: np.ndarray

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    @property
    def live_offsets(self) -> Tuple[Tuple[int, int], ...]:
        """(dx, dy) offsets of live cells in row-major order."""
        ys, xs = np.nonzero(self.cells)
        return tuple((int(x), int(y)) for y, x in zip(ys, xs))


def _pattern(name: str, rows) -> Pattern:
    return Pattern(name, np.array(rows, dtype=np.uint8))


GLIDER = _pattern("Glider", [
    [0, 1, 0],
    [0, 0, 1],
    [1, 1, 1],
])

BLINKER = _pattern("Blinker", [
    [1, 1, 1],
])

BLOCK = _pattern("Block", [
    [1, 1],
    [1, 1],
])

TOAD = _pattern("Toad", [
    [0, 1, 1, 1],
    [1, 1, 1, 0],
])

BEACON = _pattern("Beacon", [
    [1, 1, 0, 0],
    [1, 1, 0, 0],
    [0, 0, 1, 1],
    [0, 0, 1, 1],
])

PULSAR = _pattern("Pulsar", [
    [0, 0, 1, 1, 1, 0, 0, 0, 1, 1, 1, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
    [1, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1],
    [1, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1],
    [1, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1],
    [0, 0, 1, 1, 1, 0, 0, 0, 1, 1, 1, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 1, 1, 1, 0, 0, 0, 1, 1, 1, 0, 0],
    [1, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1],
    [1, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1],
    [1, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 1, 1, 1, 0, 0, 0, 1, 1, 1, 0, 0],
])

LWSS = _pattern("LWSS", [
    [0, 1, 0, 0, 1],
    [1, 0, 0, 0, 0],
    [1, 0, 0, 0, 1],
    [1, 1, 1, 1, 0],
])

GOSPER_GLIDER_GUN = _pattern("Gosper Glider Gun", [
    [0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,1,0,0,0,0,0,0,0,0,0,0,0],
    [0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,1,0,1,0,0,0,0,0,0,0,0,0,0,0],
    [0,0,0,0,0,0,0,0,0,0,0,0,1,1,0,0,0,0,0,0,1,1,0,0,0,0,0,0,0,0,0,0,0,0,1,1],
    [0,0,0,0,0,0,0,0,0,0,0,1,0,0,0,1,0,0,0,0,1,1,0,0,0,0,0,0,0,0,0,0,0,0,1,1],
    [1,1,0,0,0,0,0,0,0,0,1,0,0,0,0,0,1,0,0,0,1,1,0,0,0,0,0,0,0,0,0,0,0,0,0,0],
    [1,1,0,0,0,0,0,0,0,0,1,0,0,0,1,0,1,1,0,0,0,0,1,0,1,0,0,0,0,0,0,0,0,0,0,0],
    [0,0,0,0,0,0,0,0,0,0,1,0,0,0,0,0,1,0,0,0,0,0,0,0,1,0,0,0,0,0,0,0,0,0,0,0],
    [0,0,0,0,0,0,0,0,0,0,0,1,0,0,0,1,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0],
    [0,0,0,0,0,0,0,0,0,0,0,0,1,1,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0],
])

ACORN = _pattern("Acorn", [
    [0, 1, 0, 0, 0, 0, 0],
    [0, 0, 0, 1, 0, 0, 0],
    [1, 1, 0, 0, 1, 1, 1],
])

LIBRARY: Tuple[Pattern, ...] = (
    GLIDER, BLINKER, BLOCK, TOAD, BEACON, PULSAR, LWSS, GOSPER_GLIDER_GUN, ACORN,
)

_BY_NAME: Dict[str, Pattern] = {p.name.lower(): p for p in LIBRARY}


def get_pattern(name: str) -> Pattern:
    """Look up a library pattern by name, case-insensitively.

    Raises:
        KeyError: If no pattern has that name
    """
    try:
        return _BY_NAME[name.lower()]
    except KeyError:
        raise KeyError(f"Unknown pattern {name!r}; available: {[p.name for p in LIBRARY]}") from None


def place_pattern(sim: Simulation, pattern: Pattern, x: int, y: int,
                  value: CellValue = CellValue.FACTION_A) -> int:
    """Write a pattern's live cells with its top-left corner at (x, y).

    Classic mode always places faction A. Cells landing outside the grid are
    skipped.

    Returns:
        Number of cells actually placed
    """
    if sim.rule_set is RuleSet.CLASSIC:
        value = CellValue.FACTION_A

    placed = 0
    for dx, dy in pattern.live_offsets:
        if sim.grid.in_bounds(x + dx, y + dy):
            sim.set_cell(x + dx, y + dy, value)
            placed += 1

    if placed < len(pattern.live_offsets):
        logger.debug(f"Clipped {pattern.name}: placed {placed}/{len(pattern.live_offsets)} cells")
    return placed


def place_at_center(sim: Simulation, pattern: Pattern,
                    value: CellValue = CellValue.FACTION_A) -> int:
    """Place pattern centred on the grid."""
    x = sim.width // 2 - pattern.width // 2
    y = sim.height // 2 - pattern.height // 2
    return place_pattern(sim, pattern, x, y, value)
