#!/usr/bin/env python3
"""
Tier-vs-Tier Match Runner

Plays a series of self-play games between two difficulty tiers and
prints a summary table.

Usage:
    python tools/play_match.py --first advanced --second beginner --games 10
    python tools/play_match.py --first intermediate --second beginner --depth 2 --seed 7
"""

import argparse
import logging
import random
import sys
from pathlib import Path

from tqdm import tqdm

sys.path.insert(0, str(Path(__file__).parent.parent))

from shogi_engine.config import EngineConfig
from shogi_engine.policy.difficulty import Difficulty, DifficultyPolicy
from shogi_engine.rules.cshogi_rules import CShogiRules
from shogi_engine.utils.match import run_match, summarize


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def play_match(first: Difficulty, second: Difficulty, games: int, depth: int, seed: int, max_plies: int):
    """
    Run the match and print results.

    Args:
        first: Tier with Black in even-numbered games
        second: Opposing tier
        games: Number of games
        depth: Search depth for the advanced tier
        seed: Base random seed (game i uses seed + i)
        max_plies: Move limit per game
    """
    rules = CShogiRules()

    def policy_factory(index: int) -> DifficultyPolicy:
        config = EngineConfig(search_depth=depth, random_seed=seed + index)
        return DifficultyPolicy(rules, config, rng=random.Random(seed + index))

    print("=" * 80)
    print(f"MATCH - {first.value} vs {second.value}")
    print("=" * 80)
    print(f"Games: {games}, advanced depth: {depth}, seed: {seed}, max plies: {max_plies}")
    print("=" * 80)

    records = run_match(
        rules, first, second, games, policy_factory,
        max_plies=max_plies,
        progress=lambda r: tqdm(r, desc="Games", unit="game"),
    )

    print(f"\n{'Game':<6} {'Black':<14} {'White':<14} {'Winner':<14} {'Plies':<7} {'Time':<10}")
    print("-" * 80)
    for index, record in enumerate(records):
        winner = record.winning_tier.value if record.winning_tier else "-"
        print(
            f"{index + 1:<6} {record.black.value:<14} {record.white.value:<14} "
            f"{winner:<14} {record.plies:<7} {format_time(record.time_taken):<10}"
        )

    print("\n" + "=" * 80)
    for tier, points in summarize(records).items():
        print(f"  {tier}: {points:.1f} / {games}")
    print("=" * 80)

    return records


def main():
    parser = argparse.ArgumentParser(description="Play difficulty tiers against each other")
    parser.add_argument("--first", default="advanced", help="First tier (default: advanced)")
    parser.add_argument("--second", default="beginner", help="Second tier (default: beginner)")
    parser.add_argument("--games", type=int, default=4, help="Number of games (default: 4)")
    parser.add_argument("--depth", type=int, default=2, help="Advanced search depth (default: 2)")
    parser.add_argument("--seed", type=int, default=0, help="Base random seed (default: 0)")
    parser.add_argument("--max-plies", type=int, default=256, help="Move limit per game (default: 256)")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()
    setup_logging(args.verbose)

    try:
        first = Difficulty.parse(args.first)
        second = Difficulty.parse(args.second)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        play_match(first, second, args.games, args.depth, args.seed, args.max_plies)
    except KeyboardInterrupt:
        print("\n\nMatch interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
