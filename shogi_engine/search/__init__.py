"""
Search Module

Adversarial search for the "advanced" tier: minimax with alpha-beta
pruning over moves generated by the rules backend, ordered by a cheap
single-ply heuristic.

Key Components:
    - minimax: Core search algorithm with alpha-beta pruning
    - find_best_move: Root-level search function
    - exhaustive_minimax: Unpruned reference search
    - score_move / score_moves / order_moves: single-ply heuristic and move ordering
    - AdversarialSearchStrategy / SinglePlyStrategy: tier strategies
"""

from shogi_engine.search.heuristic import order_moves, score_move, score_moves
from shogi_engine.search.minimax import exhaustive_minimax, find_best_move, minimax
from shogi_engine.search.strategies import AdversarialSearchStrategy, SinglePlyStrategy

__all__ = [
    'AdversarialSearchStrategy',
    'SinglePlyStrategy',
    'exhaustive_minimax',
    'find_best_move',
    'minimax',
    'order_moves',
    'score_move',
    'score_moves',
]
