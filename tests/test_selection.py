"""
Unit Tests for Heuristic Selectors

Tests for the beginner and intermediate strategies.
"""

import random

import pytest

from shogi_engine.board.representation import CENTER, Move, PieceKind, Square
from shogi_engine.errors import EmptyMoveListError
from shogi_engine.rules import CShogiRules
from shogi_engine.selection import CenterPreferenceStrategy, RandomCaptureStrategy, capturing_moves


def move(origin, target, piece=PieceKind.SILVER, captured=None):
    return Move(Square.from_usi(target), piece, Square.from_usi(origin), captured=captured)


class TestRandomCaptureStrategy:
    """Tests for the beginner tier."""

    @pytest.fixture
    def rules(self):
        return CShogiRules()

    @pytest.fixture
    def board(self, rules):
        """Bishop exchange on offer for Black."""
        board = rules.new_position()
        for usi in ["7g7f", "3c3d"]:
            rules.push(board, rules.move_from_usi(board, usi))
        return board

    def test_always_legal(self, rules, board):
        legal = rules.legal_moves(board)
        strategy = RandomCaptureStrategy(rules, random.Random(42))

        for _ in range(100):
            assert strategy.select(legal, board) in legal

    def test_sometimes_captures(self, rules, board):
        """Over 100 seeded trials at least one capture is chosen."""
        legal = rules.legal_moves(board)
        strategy = RandomCaptureStrategy(rules, random.Random(42))

        chosen = [strategy.select(legal, board) for _ in range(100)]

        assert any(m.is_capture for m in chosen), "Beginner should capture now and then"
        assert not all(m.is_capture for m in chosen), "Beginner should not always capture"

    def test_probability_one_always_captures(self, rules, board):
        legal = rules.legal_moves(board)
        strategy = RandomCaptureStrategy(rules, random.Random(1), capture_probability=1.0)

        assert all(strategy.select(legal, board).is_capture for _ in range(20))

    def test_no_captures_available(self, rules):
        board = rules.new_position()
        legal = rules.legal_moves(board)
        strategy = RandomCaptureStrategy(rules, random.Random(1), capture_probability=1.0)

        assert strategy.select(legal, board) in legal

    def test_seed_reproducible(self, rules, board):
        legal = rules.legal_moves(board)
        first_strategy = RandomCaptureStrategy(rules, random.Random(9))
        second_strategy = RandomCaptureStrategy(rules, random.Random(9))
        first = [first_strategy.select(legal, board) for _ in range(10)]
        second = [second_strategy.select(legal, board) for _ in range(10)]
        assert first == second

    def test_empty_move_list(self, rules, board):
        with pytest.raises(EmptyMoveListError):
            RandomCaptureStrategy(rules).select([], board)


class TestCenterPreferenceStrategy:
    """Tests for the intermediate tier."""

    @pytest.fixture
    def strategy(self):
        return CenterPreferenceStrategy(CShogiRules(), random.Random(0))

    def test_starting_position(self):
        """Without captures, the move landing nearest 5e is played."""
        rules = CShogiRules()
        board = rules.new_position()
        strategy = CenterPreferenceStrategy(rules, random.Random(0))

        assert strategy.select(rules.legal_moves(board), board).usi() == "5g5f"

    def test_nearest_to_center(self, strategy):
        moves = [move("1i", "1h"), move("6g", "6f"), move("9a", "9b")]
        assert strategy.select(moves, None).usi() == "6g6f"

    def test_tie_keeps_first(self, strategy):
        """Equal distance: the earlier move in the list wins."""
        moves = [move("9i", "9h"), move("4f", "4e"), move("5c", "5d")]
        assert moves[1].to_square.distance(CENTER) == moves[2].to_square.distance(CENTER)
        assert strategy.select(moves, None) is moves[1]

    def test_captures_first(self, strategy):
        capture = move("1a", "1b", captured=PieceKind.PAWN)
        moves = [move("5f", "5e"), capture]
        assert strategy.select(moves, None) is capture

    def test_random_among_captures(self):
        captures = [move("1a", "1b", captured=PieceKind.PAWN), move("9a", "9b", captured=PieceKind.ROOK)]
        moves = [move("5f", "5e")] + captures
        chosen = {
            CenterPreferenceStrategy(CShogiRules(), random.Random(seed)).select(moves, None).usi()
            for seed in range(30)
        }
        assert chosen == {"1a1b", "9a9b"}

    def test_empty_move_list(self, strategy):
        with pytest.raises(EmptyMoveListError):
            strategy.select([], None)


def test_capturing_moves_keeps_order():
    moves = [move("1a", "1b", captured=PieceKind.PAWN), move("5f", "5e"), move("9a", "9b", captured=PieceKind.GOLD)]
    assert capturing_moves(moves) == [moves[0], moves[2]]
