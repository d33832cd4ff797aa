"""
Per-cell transition rules for both rule sets.

Classic mode is plain Conway B3/S23. PvP keeps the same survival and birth
counts, but tracks which faction a cell belongs to: survivors keep their
faction and newborns take the faction of the local majority.
"""

from typing import Optional, Set, Tuple, TYPE_CHECKING

from .grid import CellValue, RuleSet

if TYPE_CHECKING:
    import numpy as np


# Standard Conway counts, shared by both rule sets
SURVIVAL_SET: Set[int] = {2, 3}  # Occupied cells survive with 2-3 neighbors
BIRTH_SET: Set[int] = {3}        # Empty cells are born with exactly 3 neighbors


def count_faction_neighbors(state: 'np.ndarray', x: int, y: int) -> Tuple[int, int]:
    """Count faction A and faction B neighbors of cell (x, y).

    Only the in-bounds cells of the Moore neighborhood are visited; there is
    no wrap-around at the edges.

    Args:
        state: 2D uint8 array indexed [y, x]
        x: Cell x-coordinate
        y: Cell y-coordinate

    Returns:
        (white, black) neighbor counts
    """
    height, width = state.shape
    white = 0
    black = 0

    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue

            nx, ny = x + dx, y + dy
            if not (0 <= nx < width and 0 <= ny < height):
                continue

            value = state[ny, nx]
            if value == CellValue.FACTION_A:
                white += 1
            elif value == CellValue.FACTION_B:
                black += 1

    return white, black


def next_cell_value(rule_set: RuleSet, current: CellValue, white: int, black: int,
                    coin: Optional[bool] = None) -> CellValue:
    """Apply a rule set to one cell.

    Args:
        rule_set: Rule set to apply
        current: Current value of the cell
        white: Faction A neighbor count
        black: Faction B neighbor count
        coin: Tie-break outcome for PvP births with white == black;
            True assigns faction A. Required only when a tie actually occurs.

    Returns:
        Next value of the cell

    Raises:
        ValueError: On an unknown rule set, or a PvP tie without a coin
    """
    total = white + black

    if rule_set is RuleSet.CLASSIC:
        if current != CellValue.DEAD:
            return CellValue.FACTION_A if total in SURVIVAL_SET else CellValue.DEAD
        return CellValue.FACTION_A if total in BIRTH_SET else CellValue.DEAD

    if rule_set is RuleSet.PVP:
        if current != CellValue.DEAD:
            # Survivors keep their faction whatever the neighbor majority
            return CellValue(current) if total in SURVIVAL_SET else CellValue.DEAD
        if total not in BIRTH_SET:
            return CellValue.DEAD
        if white > black:
            return CellValue.FACTION_A
        if black > white:
            return CellValue.FACTION_B
        if coin is None:
            raise ValueError("PvP tie-break requires a coin flip")
        return CellValue.FACTION_A if coin else CellValue.FACTION_B

    raise ValueError(f"Unknown rule set: {rule_set!r}")
