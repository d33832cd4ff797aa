"""Core grid state management for the duel cellular automaton.

This module implements the board that both rule sets evolve. The grid uses a
numpy uint8 array for compact state representation: 0 is dead, 1 belongs to
faction A (white) and 2 to faction B (black).
"""

import numpy as np
from enum import Enum, IntEnum
from typing import Tuple, Optional
import logging

logger = logging.getLogger(__name__)


class CellValue(IntEnum):
    """State of a single cell."""
    DEAD = 0
    FACTION_A = 1
    FACTION_B = 2


class RuleSet(Enum):
    """Transition policy applied to the whole grid."""
    CLASSIC = "classic"
    PVP = "pvp"


class OutOfBoundsError(IndexError):
    """Raised when a coordinate lies outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(f"Coordinates ({x}, {y}) out of bounds for {width}x{height} grid")
        self.x = x
        self.y = y


_VALID_VALUES = (CellValue.DEAD, CellValue.FACTION_A, CellValue.FACTION_B)


class Grid:
    """2D board of cell values.

    Attributes:
        width: Grid width in cells
        height: Grid height in cells
        state: 2D numpy uint8 array indexed state[y, x]
    """

    def __init__(self, width: int, height: int, initial_state: Optional[np.ndarray] = None):
        """Initialize grid with given dimensions.

        Args:
            width: Grid width (cells)
            height: Grid height (cells)
            initial_state: Optional initial grid state array of shape (height, width)

        Raises:
            ValueError: If dimensions are invalid or initial_state doesn't fit
        """
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height

        if initial_state is not None:
            if initial_state.shape != (height, width):
                raise ValueError(f"Initial state shape {initial_state.shape} doesn't match grid size {(height, width)}")
            if not np.isin(initial_state, _VALID_VALUES).all():
                raise ValueError("Initial state values must be 0 (dead), 1 or 2 (factions)")
            self.state = initial_state.astype(np.uint8, copy=True)
        else:
            self.state = np.zeros((height, width), dtype=np.uint8)

        logger.debug(f"Created grid {width}x{height}")

    @classmethod
    def from_pattern(cls, pattern: np.ndarray, pad: int = 4,
                     value: CellValue = CellValue.FACTION_A) -> 'Grid':
        """Create grid from pattern array with padding.

        Args:
            pattern: 2D array, non-zero entries are live cells
            pad: Padding cells around pattern
            value: Cell value written for live pattern entries

        Returns:
            Grid: New grid containing the pattern
        """
        pattern = np.asarray(pattern)
        height, width = pattern.shape
        grid = cls(width + 2*pad, height + 2*pad)
        region = grid.state[pad:pad+height, pad:pad+width]
        region[pattern != 0] = value
        return grid

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether (x, y) lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)

    def get(self, x: int, y: int) -> CellValue:
        """Get cell value at coordinates.

        Args:
            x: X coordinate (column)
            y: Y coordinate (row)

        Raises:
            OutOfBoundsError: If coordinates are out of bounds
        """
        self._check_bounds(x, y)
        return CellValue(int(self.state[y, x]))

    def set(self, x: int, y: int, value: CellValue) -> None:
        """Set cell value at coordinates.

        Args:
            x: X coordinate (column)
            y: Y coordinate (row)
            value: New cell value

        Raises:
            OutOfBoundsError: If coordinates are out of bounds
        """
        self._check_bounds(x, y)
        self.state[y, x] = CellValue(value)

    def reset_all(self, value: CellValue = CellValue.DEAD) -> None:
        """Overwrite every cell with value."""
        self.state.fill(CellValue(value))

    def clear(self) -> None:
        """Reset all cells to dead state."""
        self.reset_all(CellValue.DEAD)

    def randomize(self, fill_probability: float, rule_set: RuleSet,
                  rng: np.random.Generator) -> None:
        """Randomize grid state.

        In classic mode a cell is alive with probability fill_probability. In
        PvP mode the same probability is split evenly between the factions.

        Args:
            fill_probability: Probability of a cell being occupied (0.0 to 1.0)
            rule_set: Rule set deciding which factions are placed
            rng: Random source

        Raises:
            ValueError: If fill_probability lies outside [0, 1]
        """
        if not 0.0 <= fill_probability <= 1.0:
            raise ValueError(f"fill_probability must be within [0, 1], got {fill_probability}")

        r = rng.random((self.height, self.width))
        state = np.zeros((self.height, self.width), dtype=np.uint8)
        if rule_set is RuleSet.CLASSIC:
            state[r < fill_probability] = CellValue.FACTION_A
        else:
            half = fill_probability / 2.0
            state[r < half] = CellValue.FACTION_A
            state[(r >= half) & (r < fill_probability)] = CellValue.FACTION_B
        self.state[:] = state

    def count(self, value: CellValue) -> int:
        """Count cells holding value."""
        return int(np.count_nonzero(self.state == value))

    def count_alive(self) -> int:
        """Count total number of non-dead cells."""
        return int(np.count_nonzero(self.state))

    def density(self) -> float:
        """Get fraction of cells that are alive."""
        return self.count_alive() / (self.width * self.height)

    def is_empty(self) -> bool:
        """Check if all cells are dead."""
        return not np.any(self.state)

    def bounds(self) -> Tuple[int, int, int, int]:
        """Get bounding box of alive cells (min_x, min_y, max_x, max_y)."""
        if self.is_empty():
            return (0, 0, self.width-1, self.height-1)

        alive_rows, alive_cols = np.nonzero(self.state)
        return (int(alive_cols.min()), int(alive_rows.min()),
                int(alive_cols.max()), int(alive_rows.max()))

    def copy(self) -> 'Grid':
        """Create a deep copy of the grid."""
        return Grid(self.width, self.height, self.state)

    def to_array(self) -> np.ndarray:
        """Get grid as numpy array copy."""
        return self.state.copy()

    def __getitem__(self, key: Tuple[int, int]) -> CellValue:
        """Access cell value using grid[x, y] syntax."""
        x, y = key
        return self.get(x, y)

    def __setitem__(self, key: Tuple[int, int], value: CellValue) -> None:
        """Set cell value using grid[x, y] = value syntax."""
        x, y = key
        self.set(x, y, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return False
        return (self.width == other.width and
                self.height == other.height and
                np.array_equal(self.state, other.state))

    def __str__(self) -> str:
        """String representation: '.' dead, 'W' faction A, 'B' faction B."""
        chars = {CellValue.DEAD: '.', CellValue.FACTION_A: 'W', CellValue.FACTION_B: 'B'}
        return '\n'.join(
            ''.join(chars[CellValue(int(v))] for v in row)
            for row in self.state
        )

    def __repr__(self) -> str:
        a = self.count(CellValue.FACTION_A)
        b = self.count(CellValue.FACTION_B)
        return f"Grid({self.width}x{self.height}, a={a}, b={b})"
