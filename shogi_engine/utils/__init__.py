"""
Utilities Module

Self-play helpers for comparing difficulty tiers.

Key Components:
    - play_game: one game between two policies
    - run_match: a series of games with alternating colours
    - summarize: points per tier
"""

from shogi_engine.utils.match import GameRecord, play_game, run_match, summarize

__all__ = [
    'GameRecord',
    'play_game',
    'run_match',
    'summarize',
]
