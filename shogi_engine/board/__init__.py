"""
Board Representation Module

Value types shared by the evaluator, selectors and search.

Key Components:
    - Side, PieceKind, Square: the vocabulary of a shogi position
    - Move: immutable move or drop, produced only by the rules backend
    - ScoredMove: move paired with an engine-internal score
    - board_to_array: (9, 9) snapshot of a position's piece placement

Data Flow:
    rules backend → Move / (PieceKind, Side) → evaluator, selectors, search
"""

from shogi_engine.board.representation import (
    ALL_SQUARES,
    CENTER,
    Move,
    PieceKind,
    ScoredMove,
    Side,
    Square,
    board_to_array,
)

__all__ = [
    'ALL_SQUARES',
    'CENTER',
    'Move',
    'PieceKind',
    'ScoredMove',
    'Side',
    'Square',
    'board_to_array',
]
