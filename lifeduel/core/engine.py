"""Transition engine for the classic and PvP rule sets.

Computes one generation for the whole grid. Neighbor counts are taken from the
frozen current buffer with shifted slices over a zero-padded copy, so every
cell sees exactly the same input regardless of evaluation order.
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Tuple
import logging

from .grid import CellValue, Grid, RuleSet
from .rules import BIRTH_SET, SURVIVAL_SET, count_faction_neighbors, next_cell_value

logger = logging.getLogger(__name__)

_SURVIVAL = np.array(sorted(SURVIVAL_SET))
_BIRTH = np.array(sorted(BIRTH_SET))

# Offsets of the 8 Moore neighbors
_NEIGHBOR_OFFSETS = [(dy, dx) for dy in (-1, 0, 1) for dx in (-1, 0, 1)
                     if not (dx == 0 and dy == 0)]


class CellChange(NamedTuple):
    """A single cell that changed value during a committed step."""
    x: int
    y: int
    old: CellValue
    new: CellValue


@dataclass(frozen=True)
class BirthYield:
    """Newborn counts per faction for one PvP generation."""
    faction_a: int = 0
    faction_b: int = 0


@dataclass
class Transition:
    """Result of computing one generation.

    Attributes:
        state: Next-generation array, same shape as the input
        births: Per-faction birth counts (zero in classic mode)
        changes: Changed cells in row-major order
    """
    state: np.ndarray
    births: BirthYield
    changes: Tuple[CellChange, ...]

    @property
    def changed(self) -> bool:
        return len(self.changes) > 0


def diff_states(old: np.ndarray, new: np.ndarray) -> Tuple[CellChange, ...]:
    """Cells whose value differs between two states, in row-major order."""
    ys, xs = np.nonzero(new != old)
    return tuple(
        CellChange(int(x), int(y), CellValue(int(old[y, x])), CellValue(int(new[y, x])))
        for y, x in zip(ys, xs)
    )


def _shifted_sum(mask: np.ndarray) -> np.ndarray:
    """Sum a boolean mask over the 8 neighbor offsets, without wrap-around."""
    height, width = mask.shape
    padded = np.zeros((height + 2, width + 2), dtype=np.uint8)
    padded[1:-1, 1:-1] = mask
    total = np.zeros((height, width), dtype=np.uint8)
    for dy, dx in _NEIGHBOR_OFFSETS:
        total += padded[1 + dy:1 + dy + height, 1 + dx:1 + dx + width]
    return total


class TransitionEngine:
    """Rules engine for both rule sets.

    - Occupied cell survives with 2-3 neighbors (in PvP it keeps its faction)
    - Empty cell is born with exactly 3 neighbors
    - In PvP the newborn joins the majority faction; ties are settled by a coin flip
    """

    def neighbor_counts(self, state: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Faction A and faction B neighbor counts for every cell.

        Args:
            state: 2D uint8 array indexed [y, x]

        Returns:
            (white, black) arrays with the same shape as state
        """
        white = _shifted_sum(state == CellValue.FACTION_A)
        black = _shifted_sum(state == CellValue.FACTION_B)
        return white, black

    def count_neighbors(self, grid: Grid, x: int, y: int) -> Tuple[int, int]:
        """Count faction neighbors of a single cell.

        Args:
            grid: The grid containing the cell
            x: X coordinate of cell (column)
            y: Y coordinate of cell (row)

        Returns:
            (white, black) neighbor counts
        """
        return count_faction_neighbors(grid.state, x, y)

    def update_cell(self, grid: Grid, x: int, y: int, rule_set: RuleSet,
                    coin: Optional[bool] = None) -> CellValue:
        """Next value of a single cell under rule_set."""
        white, black = self.count_neighbors(grid, x, y)
        return next_cell_value(rule_set, grid.get(x, y), white, black, coin)

    def compute(self, state: np.ndarray, rule_set: RuleSet,
                rng: Optional[np.random.Generator] = None) -> Transition:
        """Compute the next generation without touching state.

        Tie-break coin flips are drawn from rng, one per tied birth, in
        row-major order of the tied cells.

        Args:
            state: Current generation, 2D uint8 array indexed [y, x]
            rule_set: Rule set to apply
            rng: Random source for PvP tie-breaks

        Returns:
            Transition holding the next state, birth yield and changes

        Raises:
            ValueError: If rule_set is unknown, or a tie occurs without rng
        """
        if not isinstance(rule_set, RuleSet):
            raise ValueError(f"Unknown rule set: {rule_set!r}")

        white, black = self.neighbor_counts(state)
        total = white + black
        occupied = state != CellValue.DEAD
        survive = occupied & np.isin(total, _SURVIVAL)
        born = ~occupied & np.isin(total, _BIRTH)

        next_state = np.zeros_like(state)
        births = BirthYield()

        if rule_set is RuleSet.CLASSIC:
            next_state[survive | born] = CellValue.FACTION_A
        else:
            next_state[survive] = state[survive]

            born_a = born & (white > black)
            born_b = born & (black > white)
            tied = born & (white == black)

            if tied.any():
                if rng is None:
                    raise ValueError("PvP tie-break requires a random source")
                ys, xs = np.nonzero(tied)
                heads = rng.random(len(ys)) < 0.5
                born_a[ys[heads], xs[heads]] = True
                born_b[ys[~heads], xs[~heads]] = True

            next_state[born_a] = CellValue.FACTION_A
            next_state[born_b] = CellValue.FACTION_B
            births = BirthYield(int(np.count_nonzero(born_a)), int(np.count_nonzero(born_b)))

        return Transition(next_state, births, diff_states(state, next_state))

    def update_grid(self, grid: Grid, rule_set: RuleSet,
                    rng: Optional[np.random.Generator] = None) -> Grid:
        """Apply one generation to grid and return it as a new grid.

        The input grid is not modified.
        """
        transition = self.compute(grid.state, rule_set, rng)
        return Grid(grid.width, grid.height, transition.state)

    def step(self, grid: Grid, rule_set: RuleSet,
             rng: Optional[np.random.Generator] = None) -> Transition:
        """Update grid in-place with the next generation.

        Returns:
            The transition that was applied
        """
        transition = self.compute(grid.state, rule_set, rng)
        grid.state[:] = transition.state
        return transition

    def get_rule_table(self, rule_set: RuleSet) -> Dict[tuple, CellValue]:
        """Get the rule table for a rule set.

        Classic keys are (alive, neighbor_count), 2 x 9 entries. PvP keys are
        (current_value, white, black) for every white + black <= 8. A PvP birth
        needs exactly 3 neighbors, which can never split evenly, so the table
        never needs a coin flip.
        """
        rules = {}

        if rule_set is RuleSet.CLASSIC:
            for alive in (False, True):
                current = CellValue.FACTION_A if alive else CellValue.DEAD
                for neighbors in range(9):
                    rules[(alive, neighbors)] = next_cell_value(rule_set, current, neighbors, 0)
            return rules

        if rule_set is RuleSet.PVP:
            for current in CellValue:
                for white in range(9):
                    for black in range(9 - white):
                        rules[(current, white, black)] = next_cell_value(rule_set, current, white, black)
            return rules

        raise ValueError(f"Unknown rule set: {rule_set!r}")


# Singleton instance for convenience
default_engine = TransitionEngine()
