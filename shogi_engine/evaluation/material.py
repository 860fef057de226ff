"""
Material Evaluation

Static evaluation used at every search leaf:
    1. Board material: own pieces add, opponent pieces subtract
    2. Reserve material: each piece in hand counts 0.8 x its value

Positional bonuses are deliberately left out; they only guide move
ranking (see shogi_engine.search.heuristic). Keeping evaluate() to one
pass over the board makes it cheap enough to call at every leaf.
"""

from shogi_engine.board.representation import Side
from shogi_engine.evaluation.base import Evaluator
from shogi_engine.evaluation.tables import PIECE_VALUES, reserve_value
from shogi_engine.rules.base import Position


class MaterialEvaluator(Evaluator):
    """
    Material-only evaluation of board pieces and reserves.

    Deterministic and antisymmetric: swapping the perspective negates
    the score.
    """

    def evaluate(self, position: Position, side: Side) -> int:
        """
        Evaluate position by material.

        Args:
            position: Position to evaluate
            side: Perspective of the score

        Returns:
            int: Material balance in `side`'s favour
        """
        score = 0

        for _square, kind, owner in self.rules.pieces(position):
            if owner is side:
                score += PIECE_VALUES[kind]
            else:
                score -= PIECE_VALUES[kind]

        for kind, count in self.rules.reserve(position, side).items():
            score += reserve_value(kind) * count
        for kind, count in self.rules.reserve(position, side.opponent).items():
            score -= reserve_value(kind) * count

        return score
