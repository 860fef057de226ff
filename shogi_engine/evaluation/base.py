"""
Abstract Evaluator Interface

This module defines the abstract base class for position evaluators.
The search only talks to this interface, so evaluators can be swapped
without touching the search algorithm.

Key Principles:
    1. Evaluators are stateless
    2. evaluate() scores a position from the point of view of a given side
    3. Positive = that side is ahead, Negative = its opponent is ahead
    4. Mated positions return +/-(MATE_SCORE - ply)

Convention:
    - Material units: pawn = 100, king = 100000
    - Return 0 for perfectly equal positions
    - evaluate(p, side) == -evaluate(p, side.opponent)
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from shogi_engine.board.representation import Move, Side
from shogi_engine.evaluation.tables import KING_VALUE
from shogi_engine.rules.base import Position, RulesAuthority

# Evaluation constants
INFINITY = 10 * KING_VALUE  # Larger than any reachable score
MATE_SCORE = KING_VALUE  # Being mated is as bad as losing the king


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    Evaluators read positions through the rules backend they are given at
    construction time and never modify them.

    Attributes:
        rules: RulesAuthority used to query positions
    """

    def __init__(self, rules: RulesAuthority):
        self.rules = rules

    @abstractmethod
    def evaluate(self, position: Position, side: Side) -> int:
        """
        Evaluate a position from `side`'s perspective.

        Args:
            position: Position to evaluate
            side: The side whose advantage is measured

        Returns:
            int: Score in material units

        Raises:
            NotImplementedError: If subclass doesn't implement this method
        """
        pass

    def evaluate_terminal(
        self,
        position: Position,
        side: Side,
        ply_from_root: int = 0,
        legal_moves: Optional[List[Move]] = None,
    ) -> Optional[int]:
        """
        Evaluate finished games (king captured or no legal move).

        Search algorithms call this to know when they can stop searching.

        Args:
            position: Position to test
            side: The side whose advantage is measured
            ply_from_root: Distance from root (for mate distance)
            legal_moves: Moves already generated for this position, if any

        Returns:
            int: Evaluation if terminal position
            None: If position is not terminal
        """
        rules = self.rules
        if rules.find_king(position, Side.BLACK) is None or rules.find_king(position, Side.WHITE) is None:
            # Material already swings by a king's worth
            return self.evaluate(position, side)

        if legal_moves is None:
            legal_moves = rules.legal_moves(position)
        if not legal_moves:
            # Side to move is mated; prefer faster mates
            if rules.side_to_move(position) is side:
                return -(MATE_SCORE - ply_from_root)
            return MATE_SCORE - ply_from_root

        return None

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
