"""Score keeping for both rule sets.

Classic mode scores the live population after each generation. PvP mode
accumulates births per faction and never decrements them.
"""

from typing import Optional, Tuple, Union

from .engine import BirthYield
from .grid import CellValue, Grid, RuleSet


class Scoreboard:
    """Per-faction scores updated once per committed generation."""

    def __init__(self, rule_set: RuleSet = RuleSet.PVP):
        self.rule_set = rule_set
        self.population = 0
        self.births_a = 0
        self.births_b = 0

    def reset(self, rule_set: Optional[RuleSet] = None) -> None:
        """Zero all scores, optionally switching rule set."""
        if rule_set is not None:
            self.rule_set = rule_set
        self.population = 0
        self.births_a = 0
        self.births_b = 0

    def record(self, grid: Grid, births: BirthYield) -> None:
        """Update scores after a generation was committed to grid."""
        if self.rule_set is RuleSet.PVP:
            self.births_a += births.faction_a
            self.births_b += births.faction_b
        else:
            self.population = grid.count_alive()

    def scores(self) -> Union[int, Tuple[int, int]]:
        """Population in classic mode, (faction A, faction B) births in PvP."""
        if self.rule_set is RuleSet.PVP:
            return (self.births_a, self.births_b)
        return self.population

    def winner(self) -> Optional[CellValue]:
        """Leading PvP faction, None on a tie or in classic mode."""
        if self.rule_set is not RuleSet.PVP or self.births_a == self.births_b:
            return None
        return CellValue.FACTION_A if self.births_a > self.births_b else CellValue.FACTION_B

    def __repr__(self) -> str:
        return f"Scoreboard({self.rule_set.value}, scores={self.scores()})"
