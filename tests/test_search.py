"""
Unit Tests for Search Module

Tests for minimax search, the single-ply heuristic and move ordering.
"""

import random

import pytest

from shogi_engine.board.representation import Move, PieceKind, ScoredMove, Side, Square
from shogi_engine.errors import EmptyMoveListError
from shogi_engine.evaluation import INFINITY, MaterialEvaluator, positional_value
from shogi_engine.rules import CShogiRules
from shogi_engine.search import (
    AdversarialSearchStrategy,
    SinglePlyStrategy,
    exhaustive_minimax,
    find_best_move,
    minimax,
    order_moves,
    score_move,
    score_moves,
)
from shogi_engine.search.heuristic import CHECK_BONUS, PROMOTION_BONUS
from shogi_engine.search.minimax import exhaustive_best_move
from tests.scripted_rules import StepRules, toy_position


def skirmish():
    """Kings plus one piece each, with an immediate capture on offer."""
    return toy_position({"5h": "K", "4e": "G", "5b": "k", "3d": "s"})


class TestMinimax:
    """Tests for minimax search algorithm."""

    @pytest.fixture
    def rules(self):
        return StepRules()

    @pytest.fixture
    def evaluator(self, rules):
        return MaterialEvaluator(rules)

    def test_captures_king(self, rules, evaluator):
        """A king next to the enemy king takes it."""
        position = toy_position({"5e": "K", "5d": "k", "1a": "g"})

        best_move, score, nodes, pv = find_best_move(rules, position, depth=3, evaluator=evaluator)

        assert best_move.captured is PieceKind.KING, f"Should capture the king, got {best_move}"
        assert score > 0
        assert nodes > 0, "Should search at least one node"
        assert pv == [best_move]

    def test_wins_free_piece(self, rules, evaluator):
        position = skirmish()

        best_move, score, nodes, pv = find_best_move(rules, position, depth=2, evaluator=evaluator)

        assert best_move.usi() == "4e3d", f"Should take the silver, got {best_move}"

    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_matches_exhaustive_search(self, rules, evaluator, depth):
        """Alpha-beta returns the same move and value as plain minimax."""
        position = skirmish()

        best_move, score, _nodes, _pv = find_best_move(rules, position, depth, evaluator)
        exhaustive_move, exhaustive_score = exhaustive_best_move(rules, position, depth, evaluator)

        assert score == exhaustive_score, "Pruning must not change the value"
        assert best_move == exhaustive_move, "Pruning must not change the move"

    def test_node_value_matches_exhaustive(self, rules, evaluator):
        position = skirmish()

        pruned = minimax(rules, position, 3, -INFINITY, INFINITY, True, evaluator, Side.BLACK)
        full = exhaustive_minimax(rules, position, 3, evaluator, Side.BLACK)

        assert pruned == full

    def test_pruning_visits_fewer_nodes(self, rules, evaluator):
        position = skirmish()
        pruned_nodes = [0]
        minimax(rules, position, 3, -INFINITY, INFINITY, True, evaluator, Side.BLACK,
                nodes_searched=pruned_nodes)

        moves = len(rules.legal_moves(position))
        assert 0 < pruned_nodes[0] < moves ** 3

    def test_position_restored(self, rules, evaluator):
        """Search leaves the position exactly as it found it."""
        position = skirmish()
        before = rules.copy(position)

        find_best_move(rules, position, depth=3, evaluator=evaluator)

        assert position == before

    def test_no_legal_moves_raises_error(self, rules, evaluator):
        position = toy_position({"5e": "K"})

        with pytest.raises(EmptyMoveListError):
            find_best_move(rules, position, depth=3, evaluator=evaluator)

    def test_real_shogi_matches_exhaustive(self):
        """Same check on a small cshogi endgame with drops."""
        rules = CShogiRules()
        evaluator = MaterialEvaluator(rules)
        board = rules.new_position("4k4/9/4p4/9/9/9/4P4/9/4K4 b G 1")
        before = board.sfen()

        best_move, score, _nodes, _pv = find_best_move(rules, board, 2, evaluator)
        exhaustive_move, exhaustive_score = exhaustive_best_move(rules, board, 2, evaluator)

        assert score == exhaustive_score
        assert best_move == exhaustive_move
        assert board.sfen() == before

    def test_seeded_tie_break_reproducible(self, rules, evaluator):
        position = toy_position({"5i": "K", "5a": "k"})

        first = find_best_move(rules, position, 2, evaluator, rng=random.Random(7))[0]
        second = find_best_move(rules, position, 2, evaluator, rng=random.Random(7))[0]

        assert first == second


class TestHeuristic:
    """Tests for score_move(), score_moves() and order_moves()."""

    @pytest.fixture
    def rules(self):
        return StepRules()

    def test_captures_ordered_first(self, rules):
        position = skirmish()
        ordered = order_moves(rules, position, rules.legal_moves(position))

        assert ordered[0].is_capture, f"Capture should come first, got {ordered[0]}"

    def test_order_is_permutation(self, rules):
        position = skirmish()
        moves = rules.legal_moves(position)
        ordered = order_moves(rules, position, moves)

        assert sorted(ordered, key=Move.usi) == sorted(moves, key=Move.usi)

    def test_king_capture_dominates(self, rules):
        position = toy_position({"5e": "K", "5d": "k", "4d": "r"})
        side = Side.BLACK
        own, enemy = rules.find_king(position, side), rules.find_king(position, side.opponent)
        scores = {
            move.usi(): score_move(rules, position, move, side, own, enemy)
            for move in rules.legal_moves(position)
        }

        assert max(scores, key=scores.get) == "5e5d"

    def test_promotion_and_check_bonus(self, rules):
        """Only the promotion flag differs; only the check differs."""
        position = toy_position({"9i": "K", "1a": "k"})
        side = Side.BLACK
        own, enemy = Square(9, 9), Square(1, 1)

        plain = Move(Square(5, 2), PieceKind.SILVER, Square(5, 3))
        promoting = Move(Square(5, 2), PieceKind.SILVER, Square(5, 3), promotion=True)
        base = score_move(rules, position, plain, side, own, enemy, detect_checks=False)
        promoted = score_move(rules, position, promoting, side, own, enemy, detect_checks=False)
        square = Square(5, 2)
        assert promoted - base == (
            PROMOTION_BONUS
            + positional_value(PieceKind.PROM_SILVER, square, side)
            - positional_value(PieceKind.SILVER, square, side)
        )

        position.board[Square(3, 3)] = (PieceKind.GOLD, Side.BLACK)
        quiet = Move(Square(3, 4), PieceKind.GOLD, Square(3, 3))
        checking = Move(Square(2, 2), PieceKind.GOLD, Square(3, 3))
        quiet_score = score_move(rules, position, quiet, side, own, enemy)
        check_score = score_move(rules, position, checking, side, own, enemy)
        assert check_score - quiet_score >= CHECK_BONUS

    def test_score_moves_pairs_each_move(self, rules):
        """One ScoredMove per input move, in input order, with score_move's score."""
        position = skirmish()
        moves = rules.legal_moves(position)
        own, enemy = Square(5, 8), Square(5, 2)

        scored = score_moves(rules, position, moves)

        assert all(isinstance(s, ScoredMove) for s in scored)
        assert [s.move for s in scored] == moves
        for s in scored:
            assert s.score == score_move(rules, position, s.move, Side.BLACK, own, enemy)

    def test_order_follows_scores(self, rules):
        position = skirmish()
        scored = score_moves(rules, position, rules.legal_moves(position))
        ordered = order_moves(rules, position, [s.move for s in scored])

        scores = {s.move: s.score for s in scored}
        ranked = [scores[m] for m in ordered]
        assert ranked == sorted(ranked, reverse=True)

    def test_score_move_restores_position(self, rules):
        position = skirmish()
        before = rules.copy(position)
        for move in rules.legal_moves(position):
            score_move(rules, position, move, Side.BLACK, Square(5, 8), Square(5, 2))
        assert position == before

    def test_jitter_bounded(self, rules):
        position = skirmish()
        move = rules.legal_moves(position)[0]
        own, enemy = Square(5, 8), Square(5, 2)
        base = score_move(rules, position, move, Side.BLACK, own, enemy)
        rng = random.Random(3)
        for _ in range(50):
            jittered = score_move(rules, position, move, Side.BLACK, own, enemy, rng=rng, jitter=20)
            assert base <= jittered < base + 20


class TestSearchStrategies:
    """Tests for the advanced-tier strategies."""

    def test_invalid_depth(self):
        with pytest.raises(ValueError):
            AdversarialSearchStrategy(StepRules(), depth=0)

    def test_adversarial_returns_listed_move(self):
        rules = StepRules()
        position = skirmish()
        legal = rules.legal_moves(position)
        before = rules.copy(position)

        move = AdversarialSearchStrategy(rules, random.Random(1), depth=2).select(legal, position)

        assert any(move is candidate for candidate in legal), "Should return the caller's Move object"
        assert position == before

    def test_single_ply_takes_king(self):
        rules = StepRules()
        position = toy_position({"5e": "K", "5d": "k", "4d": "r"})

        move = SinglePlyStrategy(rules, random.Random(1)).select(rules.legal_moves(position), position)

        assert move.captured is PieceKind.KING

    def test_empty_move_list(self):
        with pytest.raises(EmptyMoveListError):
            SinglePlyStrategy(StepRules()).select([], skirmish())
