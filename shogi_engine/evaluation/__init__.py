"""
Evaluation Module

Position evaluation for the engine. Evaluators are SWAPPABLE: the search
works with anything implementing the Evaluator interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - MaterialEvaluator: board + reserve material
    - tables: constant material values and positional tables

Data Flow:
    position → evaluator.evaluate(position, side) → int
                                                    Positive = side ahead
                                                    Negative = opponent ahead
"""

from shogi_engine.evaluation.base import INFINITY, MATE_SCORE, Evaluator
from shogi_engine.evaluation.material import MaterialEvaluator
from shogi_engine.evaluation.tables import KING_VALUE, PIECE_VALUES, positional_value

__all__ = [
    'Evaluator',
    'INFINITY',
    'KING_VALUE',
    'MATE_SCORE',
    'MaterialEvaluator',
    'PIECE_VALUES',
    'positional_value',
]
