#!/usr/bin/env python3
"""
Duel Demonstration Script

Seeds a board (randomly or with a library pattern), runs it until the
governor halts and reports why it stopped along with the final scores.
"""

import sys
import os
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

from lifeduel import CellValue, RuleSet, Simulation, SimulationConfig
from lifeduel.patterns import get_pattern, place_at_center


def run_duel_demo(width=40, height=30, mode="pvp", fill=0.12, seed=None,
                  max_generations=2000, pattern=None):
    """Run one game to completion and return a summary dict."""
    rule_set = RuleSet(mode)
    config = SimulationConfig(rule_set=rule_set, max_generations=max_generations)
    sim = Simulation(width, height, config=config, seed=seed)

    logger.info("=== DUEL DEMONSTRATION ===")
    logger.info(f"Grid size: {width}x{height}, mode: {rule_set.value}, seed: {seed}")

    if pattern:
        place_at_center(sim, get_pattern(pattern), CellValue.FACTION_A)
        logger.info(f"Placed pattern: {pattern}")
    else:
        sim.randomize(fill)
        logger.info(f"Random fill probability: {fill}")

    logger.info(f"Initial live cells: {sim.grid.count_alive()}")

    status = sim.run()

    logger.info("\n=== FINAL RESULT ===")
    logger.info(f"Status: {status.detail}")
    logger.info(f"Generations: {sim.current_generation}")

    if rule_set is RuleSet.PVP:
        white, black = sim.scores()
        winner = sim.scoreboard.winner()
        logger.info(f"Score: First {white} - Second {black}")
        if winner is CellValue.FACTION_A:
            logger.info("First wins!")
        elif winner is CellValue.FACTION_B:
            logger.info("Second wins!")
        else:
            logger.info("It's a tie!")
    else:
        logger.info(f"Alive cells: {sim.scores()}")

    print(sim.grid)

    return {
        "mode": rule_set.value,
        "reason": status.reason.value,
        "period": status.period,
        "generations": sim.current_generation,
        "scores": sim.scores(),
    }


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Game of Life duel demonstration")
    parser.add_argument("--width", type=int, default=40, help="Grid width")
    parser.add_argument("--height", type=int, default=30, help="Grid height")
    parser.add_argument("--mode", choices=["classic", "pvp"], default="pvp", help="Rule set")
    parser.add_argument("--fill", type=float, default=0.12, help="Random fill probability")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--max-generations", type=int, default=2000, help="Generation budget (0 = unlimited)")
    parser.add_argument("--pattern", default=None, help="Library pattern to place instead of a random fill")

    args = parser.parse_args()

    try:
        run_duel_demo(
            width=args.width,
            height=args.height,
            mode=args.mode,
            fill=args.fill,
            seed=args.seed,
            max_generations=args.max_generations,
            pattern=args.pattern,
        )
    except (ValueError, KeyError) as e:
        logger.error(f"Demonstration failed: {e}")
        sys.exit(1)
