"""
USI Protocol Interface

This module implements the Universal Shogi Interface (USI) protocol,
which allows the engine to be driven by shogi GUIs.

Protocol Flow:
    GUI → "usi"
    Engine → "id name ShogiEngine 0.1.0"
    Engine → "id author ..."
    Engine → "option name Level type combo default beginner var ..."
    Engine → "usiok"
    GUI → "isready"
    Engine → "readyok"
    GUI → "position startpos moves 7g7f"
    GUI → "go btime 0 wtime 0 byoyomi 10000"
    Engine → "bestmove 3c3d"

Reference:
    USI Protocol: http://shogidokoro.starfree.jp/usi.html
"""

from shogi_engine.usi.interface import USIEngine

__all__ = ['USIEngine']
