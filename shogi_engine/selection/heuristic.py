"""
Heuristic Selectors (beginner / intermediate)

No lookahead: both strategies only look at the candidate moves
themselves and run in O(number of legal moves).

    RandomCaptureStrategy (beginner):
        With probability capture_probability, and if any move captures,
        pick a random capture. Otherwise pick any legal move at random.

    CenterPreferenceStrategy (intermediate):
        Pick a random capture if there is one. Otherwise take the move
        landing closest (Manhattan distance) to the centre square 5e;
        ties go to the earliest move in the list.
"""

import random
from typing import List, Optional

from shogi_engine.board.representation import CENTER, Move
from shogi_engine.rules.base import Position, RulesAuthority
from shogi_engine.selection.base import Strategy

DEFAULT_CAPTURE_PROBABILITY = 0.3


def capturing_moves(moves: List[Move]) -> List[Move]:
    """Moves that take an opponent piece, in input order."""
    return [move for move in moves if move.is_capture]


class RandomCaptureStrategy(Strategy):
    """Mostly random play with an occasional preference for captures."""

    name = "beginner"

    def __init__(
        self,
        rules: RulesAuthority,
        rng: Optional[random.Random] = None,
        capture_probability: float = DEFAULT_CAPTURE_PROBABILITY,
    ):
        super().__init__(rules, rng)
        self.capture_probability = capture_probability

    def choose(self, legal_moves: List[Move], position: Position) -> Move:
        if self.rng.random() < self.capture_probability:
            captures = capturing_moves(legal_moves)
            if captures:
                return self.rng.choice(captures)
        return self.rng.choice(legal_moves)


class CenterPreferenceStrategy(Strategy):
    """Greedy captures, otherwise head for the centre."""

    name = "intermediate"

    def choose(self, legal_moves: List[Move], position: Position) -> Move:
        captures = capturing_moves(legal_moves)
        if captures:
            return self.rng.choice(captures)
        # min() keeps the first of equally close moves
        return min(legal_moves, key=lambda move: move.to_square.distance(CENTER))
