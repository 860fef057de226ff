"""
Self-Play Matches

Plays complete games between two difficulty tiers so the tiers can be
compared against each other.

Match Flow:
    1. Start from a position (default: the standard starting position)
    2. Each side's DifficultyPolicy chooses a move; the rules backend
       applies it
    3. Stop on a finished game (winner decided) or after max_plies

Evaluation Metrics:
    - Result per game: winning side or None (move limit reached)
    - Plies played and time per game
    - Aggregate score per tier over a match
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from shogi_engine.board.representation import Move, Side
from shogi_engine.policy.difficulty import Difficulty, DifficultyPolicy
from shogi_engine.rules.base import Position, RulesAuthority

logger = logging.getLogger(__name__)

DEFAULT_MAX_PLIES = 256


@dataclass
class GameRecord:
    """
    Outcome of one self-play game.

    Attributes:
        black: Tier playing Black (sente)
        white: Tier playing White (gote)
        winner: Winning side, None if the move limit was reached
        moves: Moves played, in order
        time_taken: Wall time for the game (seconds)
    """
    black: Difficulty
    white: Difficulty
    winner: Optional[Side]
    moves: List[Move] = field(default_factory=list)
    time_taken: float = 0.0

    @property
    def plies(self) -> int:
        return len(self.moves)

    @property
    def winning_tier(self) -> Optional[Difficulty]:
        if self.winner is None:
            return None
        return self.black if self.winner is Side.BLACK else self.white


def play_game(
    rules: RulesAuthority,
    position: Position,
    policies: Dict[Side, DifficultyPolicy],
    difficulties: Dict[Side, Difficulty],
    max_plies: int = DEFAULT_MAX_PLIES,
) -> GameRecord:
    """
    Play one game from `position` (which is advanced in place).

    Args:
        rules: Rules backend
        position: Starting position, mutated as the game goes on
        policies: Policy per side
        difficulties: Tier per side
        max_plies: Stop after this many plies without a result

    Returns:
        GameRecord for the finished (or truncated) game
    """
    start_time = time.time()
    record = GameRecord(
        black=difficulties[Side.BLACK],
        white=difficulties[Side.WHITE],
        winner=None,
    )

    while record.plies < max_plies:
        if rules.is_terminal(position):
            break

        side = rules.side_to_move(position)
        move = policies[side].choose_move(position, difficulties[side])
        if move is None:
            break

        rules.push(position, move)
        record.moves.append(move)

    record.winner = rules.winner(position)
    record.time_taken = time.time() - start_time

    logger.info(
        f"{record.black.value} vs {record.white.value}: "
        f"winner={record.winner.name if record.winner else 'none'}, plies={record.plies}"
    )
    return record


def run_match(
    rules: RulesAuthority,
    first: Difficulty,
    second: Difficulty,
    games: int,
    policy_factory,
    max_plies: int = DEFAULT_MAX_PLIES,
    progress=None,
) -> List[GameRecord]:
    """
    Play `games` games, alternating which tier has Black.

    Args:
        rules: Rules backend; it must provide new_position()
        first: Tier that plays Black in even-numbered games
        second: The other tier
        games: Number of games
        policy_factory: Callable(game_index) -> DifficultyPolicy, so every
            game can get its own seed
        max_plies: Move limit per game
        progress: Optional wrapper for the game range (e.g. tqdm)

    Returns:
        List of GameRecord, one per game
    """
    game_range = range(games)
    if progress is not None:
        game_range = progress(game_range)

    records = []
    for index in game_range:
        black, white = (first, second) if index % 2 == 0 else (second, first)
        policy = policy_factory(index)
        record = play_game(
            rules,
            rules.new_position(),
            {Side.BLACK: policy, Side.WHITE: policy},
            {Side.BLACK: black, Side.WHITE: white},
            max_plies=max_plies,
        )
        records.append(record)

    return records


def summarize(records: List[GameRecord]) -> Dict[str, float]:
    """Points per tier (win = 1, unfinished = 0.5 each)."""
    points: Dict[str, float] = {}
    for record in records:
        for tier in (record.black, record.white):
            points.setdefault(tier.value, 0.0)
        if record.winning_tier is None:
            points[record.black.value] += 0.5
            points[record.white.value] += 0.5
        else:
            points[record.winning_tier.value] += 1.0
    return points
