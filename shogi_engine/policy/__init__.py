"""
Policy Module

Entry point for callers: pick a difficulty, get a move.

Key Components:
    - Difficulty: beginner / intermediate / advanced
    - DifficultyPolicy: choose_move(position, difficulty) -> Move | None
    - MoveWorker: runs the policy on a background thread with
      new-game cancellation
"""

from shogi_engine.policy.difficulty import Difficulty, DifficultyPolicy, build_strategy, choose_move
from shogi_engine.policy.worker import MoveWorker

__all__ = ['Difficulty', 'DifficultyPolicy', 'MoveWorker', 'build_strategy', 'choose_move']
