"""
Unit Tests for Difficulty Policy

Tests for tier dispatch, the legal-move guarantee and fault handling.
"""

import logging
import random

import pytest

from shogi_engine.board.representation import Move, PieceKind, Side, Square, board_to_array
from shogi_engine.config import EngineConfig
from shogi_engine.errors import RulesAuthorityError
from shogi_engine.policy import Difficulty, DifficultyPolicy, build_strategy, choose_move
from shogi_engine.rules import CShogiRules
from shogi_engine.search import AdversarialSearchStrategy, SinglePlyStrategy
from shogi_engine.selection import CenterPreferenceStrategy, RandomCaptureStrategy, Strategy
from tests.scripted_rules import ExplodingEvaluator, RejectingRules, StepRules, toy_position

SINGLE_MOVE_SFEN = "8k/9/9/9/9/9/1g7/9/K8 b - 1"
MATED_SFEN = "8k/9/9/9/9/9/1s7/g8/K8 b - 1"

TIERS = list(Difficulty)


class BogusStrategy(Strategy):
    """Returns a move that was never offered."""

    def choose(self, legal_moves, position):
        return Move(Square(5, 5), PieceKind.DRAGON, Square(1, 1))


class TestDifficulty:
    """Tests for Difficulty parsing."""

    def test_parse_names(self):
        assert Difficulty.parse("beginner") is Difficulty.BEGINNER
        assert Difficulty.parse("Advanced") is Difficulty.ADVANCED
        assert Difficulty.parse(" INTERMEDIATE ") is Difficulty.INTERMEDIATE
        assert Difficulty.parse(Difficulty.ADVANCED) is Difficulty.ADVANCED

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            Difficulty.parse("grandmaster")


class TestBuildStrategy:
    """Tests for the tier → strategy mapping."""

    def test_mapping(self):
        rules = StepRules()
        config = EngineConfig()
        rng = random.Random(0)

        assert isinstance(build_strategy(Difficulty.BEGINNER, rules, config, rng), RandomCaptureStrategy)
        assert isinstance(build_strategy(Difficulty.INTERMEDIATE, rules, config, rng), CenterPreferenceStrategy)
        advanced = build_strategy(Difficulty.ADVANCED, rules, config, rng)
        assert isinstance(advanced, AdversarialSearchStrategy)
        assert advanced.depth == config.search_depth

    def test_depth_one_uses_single_ply(self):
        config = EngineConfig(search_depth=1)
        strategy = build_strategy(Difficulty.ADVANCED, StepRules(), config, random.Random(0))
        assert isinstance(strategy, SinglePlyStrategy)

    def test_beginner_uses_configured_probability(self):
        config = EngineConfig(capture_probability=0.75)
        strategy = build_strategy(Difficulty.BEGINNER, StepRules(), config, random.Random(0))
        assert strategy.capture_probability == 0.75


class TestDifficultyPolicy:
    """Tests for DifficultyPolicy.choose_move() with real shogi."""

    @pytest.fixture
    def rules(self):
        return CShogiRules()

    @pytest.fixture
    def policy(self, rules):
        return DifficultyPolicy(rules, EngineConfig(search_depth=2, random_seed=1))

    @pytest.mark.parametrize("tier", TIERS)
    def test_returns_legal_move(self, rules, policy, tier):
        board = rules.new_position()
        move = policy.choose_move(board, tier)
        assert move in rules.legal_moves(board), f"{tier.value} returned {move}"

    @pytest.mark.parametrize("tier", TIERS)
    def test_position_untouched(self, rules, policy, tier):
        """Selection never changes the caller's position."""
        board = rules.new_position()
        for usi in ["7g7f", "3c3d"]:
            rules.push(board, rules.move_from_usi(board, usi))
        sfen = board.sfen()
        array = board_to_array(rules, board)

        policy.choose_move(board, tier)

        assert board.sfen() == sfen
        assert (board_to_array(rules, board) == array).all()

    @pytest.mark.parametrize("tier", TIERS)
    def test_single_legal_move(self, rules, policy, tier):
        board = rules.new_position(SINGLE_MOVE_SFEN)
        assert policy.choose_move(board, tier).usi() == "9i8i"

    @pytest.mark.parametrize("tier", TIERS)
    def test_no_legal_move(self, rules, policy, tier):
        board = rules.new_position(MATED_SFEN)
        assert policy.choose_move(board, tier) is None

    def test_default_tier(self, rules):
        policy = DifficultyPolicy(rules, EngineConfig(default_difficulty="intermediate"))
        assert policy.difficulty is Difficulty.INTERMEDIATE
        assert policy.choose_move(rules.new_position()).usi() == "5g5f"

    def test_set_difficulty(self, rules, policy):
        policy.set_difficulty("ADVANCED")
        assert policy.difficulty is Difficulty.ADVANCED

        with pytest.raises(ValueError):
            policy.set_difficulty("expert")
        assert policy.difficulty is Difficulty.ADVANCED

    def test_strategies_cached(self, policy):
        assert policy.strategy_for("beginner") is policy.strategy_for(Difficulty.BEGINNER)

    def test_seeded_games_reproducible(self, rules):
        """Two policies with the same seed play the same moves."""

        def play(seed):
            policy = DifficultyPolicy(rules, EngineConfig(random_seed=seed))
            board = rules.new_position()
            moves = []
            for _ in range(10):
                move = policy.choose_move(board, "beginner")
                rules.push(board, move)
                moves.append(move.usi())
            return moves

        assert play(5) == play(5)

    def test_module_level_helper(self, rules):
        board = rules.new_position()
        assert choose_move(rules, board, "intermediate").usi() == "5g5f"


class TestAdvancedTier:
    """King captures and search depth, through StepRules."""

    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_takes_the_king(self, depth):
        rules = StepRules()
        policy = DifficultyPolicy(rules, EngineConfig(search_depth=depth, random_seed=0))
        position = toy_position({"5e": "K", "5d": "k", "4c": "r", "6c": "g"})

        move = policy.choose_move(position, "advanced")

        assert move.captured is PieceKind.KING, f"depth {depth} played {move}"

    def test_no_move_after_king_capture(self):
        rules = StepRules()
        policy = DifficultyPolicy(rules)
        position = toy_position({"5e": "K"}, turn=Side.WHITE)
        assert policy.choose_move(position, "advanced") is None


class TestFaultHandling:
    """Faults fall back to a random legal move; rules faults propagate."""

    def test_evaluator_fault_falls_back(self, caplog):
        rules = StepRules()
        policy = DifficultyPolicy(
            rules, EngineConfig(random_seed=3), evaluator=ExplodingEvaluator(rules)
        )
        position = toy_position({"5i": "K", "5a": "k", "4h": "G"})

        with caplog.at_level(logging.WARNING):
            move = policy.choose_move(position, "advanced")

        assert move in rules.legal_moves(position)
        assert "falling back" in caplog.text

    def test_illegal_strategy_result_falls_back(self, monkeypatch):
        rules = StepRules()
        policy = DifficultyPolicy(rules, EngineConfig(random_seed=3))
        monkeypatch.setattr(policy, "strategy_for", lambda difficulty: BogusStrategy(rules))
        position = toy_position({"5i": "K", "5a": "k"})

        move = policy.choose_move(position, "beginner")

        assert move in rules.legal_moves(position)

    def test_rules_fault_propagates(self):
        rules = RejectingRules()
        policy = DifficultyPolicy(rules, EngineConfig(search_depth=2))
        position = toy_position({"5i": "K", "5a": "k"})

        with pytest.raises(RulesAuthorityError):
            policy.choose_move(position, "advanced")
