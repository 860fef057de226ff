"""
Search-Based Strategies (advanced tier)

    AdversarialSearchStrategy:
        Fixed-depth minimax with alpha-beta pruning. This is the
        "advanced" tier whenever the configured depth is 2 or more.

    SinglePlyStrategy:
        Highest single-ply heuristic score plus a small random jitter.
        Used as the "advanced" tier only when the depth is set to 1,
        where a one-ply material search would ignore promotion, checks
        and king safety.

Both strategies work on a private copy of the position, so the caller's
position is never touched even while moves are pushed and popped.
"""

import logging
import random
from typing import List, Optional

from shogi_engine.board.representation import Move
from shogi_engine.evaluation.base import Evaluator
from shogi_engine.evaluation.material import MaterialEvaluator
from shogi_engine.rules.base import Position, RulesAuthority
from shogi_engine.search.heuristic import score_moves
from shogi_engine.search.minimax import DEFAULT_DEPTH, find_best_move
from shogi_engine.selection.base import Strategy

logger = logging.getLogger(__name__)

DEFAULT_JITTER = 20


class AdversarialSearchStrategy(Strategy):
    """
    Minimax + alpha-beta to a fixed depth.

    Attributes:
        depth: Search depth in plies
        evaluator: Leaf evaluator (MaterialEvaluator by default)
    """

    name = "advanced"

    def __init__(
        self,
        rules: RulesAuthority,
        rng: Optional[random.Random] = None,
        depth: int = DEFAULT_DEPTH,
        evaluator: Optional[Evaluator] = None,
    ):
        super().__init__(rules, rng)
        if depth < 1:
            raise ValueError(f"depth must be at least 1, got {depth}")
        self.depth = depth
        self.evaluator = evaluator if evaluator else MaterialEvaluator(rules)

    def choose(self, legal_moves: List[Move], position: Position) -> Move:
        board = self.rules.copy(position)
        best_move, score, nodes, _pv = find_best_move(
            self.rules, board, self.depth, self.evaluator, rng=self.rng
        )
        logger.info(f"Search chose {best_move.usi()} (score={score}, nodes={nodes}, depth={self.depth})")
        # Hand back the caller's own Move object
        return next((move for move in legal_moves if move == best_move), best_move)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(depth={self.depth}, evaluator={self.evaluator!r})"


class SinglePlyStrategy(Strategy):
    """Best composite single-ply score; jitter breaks exact ties."""

    name = "advanced"

    def __init__(
        self,
        rules: RulesAuthority,
        rng: Optional[random.Random] = None,
        jitter: int = DEFAULT_JITTER,
    ):
        super().__init__(rules, rng)
        self.jitter = jitter

    def choose(self, legal_moves: List[Move], position: Position) -> Move:
        board = self.rules.copy(position)
        scored = score_moves(self.rules, board, legal_moves, rng=self.rng, jitter=self.jitter)

        # max() keeps the first of equal scores
        best = max(scored, key=lambda s: s.score)
        logger.debug(f"Single-ply choice {best.move.usi()} (score={best.score})")
        return best.move
