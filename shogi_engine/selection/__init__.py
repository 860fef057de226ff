"""
Selection Module

Strategies that turn a list of legal moves into one chosen move.

Key Components:
    - Strategy (ABC): common select() contract
    - RandomCaptureStrategy: beginner tier
    - CenterPreferenceStrategy: intermediate tier

The search-based strategies live in shogi_engine.search.
"""

from shogi_engine.selection.base import Strategy
from shogi_engine.selection.heuristic import (
    CenterPreferenceStrategy,
    RandomCaptureStrategy,
    capturing_moves,
)

__all__ = [
    'CenterPreferenceStrategy',
    'RandomCaptureStrategy',
    'Strategy',
    'capturing_moves',
]
