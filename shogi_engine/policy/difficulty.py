"""
Difficulty Policy

Maps a difficulty tier to a Strategy and guarantees that a legal move
comes back whenever one exists.

Tiers:
    beginner      RandomCaptureStrategy
    intermediate  CenterPreferenceStrategy
    advanced      AdversarialSearchStrategy (depth >= 2)
                  SinglePlyStrategy (depth == 1)

Failure Handling:
    - No legal move: choose_move() returns None (game over)
    - Evaluation/search fault: logged, uniformly random legal move returned
    - RulesAuthorityError: logged and re-raised; the rules backend
      disagrees with itself and no move choice can repair that
"""

import logging
import random
from enum import Enum
from typing import Dict, Optional, Union

from shogi_engine.board.representation import Move
from shogi_engine.config import EngineConfig
from shogi_engine.errors import RulesAuthorityError, SearchError
from shogi_engine.evaluation.base import Evaluator
from shogi_engine.rules.base import Position, RulesAuthority
from shogi_engine.search.strategies import AdversarialSearchStrategy, SinglePlyStrategy
from shogi_engine.selection.base import Strategy
from shogi_engine.selection.heuristic import CenterPreferenceStrategy, RandomCaptureStrategy

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """Named difficulty tiers."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @classmethod
    def parse(cls, value: Union["Difficulty", str]) -> "Difficulty":
        """
        Accept a Difficulty or its name in any case.

        Raises:
            ValueError: If the name is not a known tier
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {value!r}, expected one of: {names}")


def build_strategy(
    difficulty: Difficulty,
    rules: RulesAuthority,
    config: EngineConfig,
    rng: random.Random,
    evaluator: Optional[Evaluator] = None,
) -> Strategy:
    """Create the Strategy that plays `difficulty`."""
    if difficulty is Difficulty.BEGINNER:
        return RandomCaptureStrategy(rules, rng, capture_probability=config.capture_probability)
    if difficulty is Difficulty.INTERMEDIATE:
        return CenterPreferenceStrategy(rules, rng)
    if config.search_depth == 1:
        return SinglePlyStrategy(rules, rng, jitter=config.jitter)
    return AdversarialSearchStrategy(rules, rng, depth=config.search_depth, evaluator=evaluator)


class DifficultyPolicy:
    """
    Chooses moves for the side to move at a given difficulty.

    Strategies are built once per tier and reused. The policy holds no
    per-game state, so it never has anything to roll back.

    Attributes:
        rules: Rules backend
        config: Engine configuration
        rng: Random source shared by all strategies and the fallback
        difficulty: Tier used when choose_move() gets no explicit tier
    """

    def __init__(
        self,
        rules: RulesAuthority,
        config: Optional[EngineConfig] = None,
        rng: Optional[random.Random] = None,
        evaluator: Optional[Evaluator] = None,
    ):
        self.rules = rules
        self.config = config if config else EngineConfig()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.evaluator = evaluator
        self.difficulty = Difficulty.parse(self.config.default_difficulty)
        self._strategies: Dict[Difficulty, Strategy] = {}

    def set_difficulty(self, difficulty: Union[Difficulty, str]) -> None:
        self.difficulty = Difficulty.parse(difficulty)
        logger.info(f"Difficulty set to {self.difficulty.value}")

    def strategy_for(self, difficulty: Union[Difficulty, str]) -> Strategy:
        difficulty = Difficulty.parse(difficulty)
        strategy = self._strategies.get(difficulty)
        if strategy is None:
            strategy = build_strategy(difficulty, self.rules, self.config, self.rng, self.evaluator)
            self._strategies[difficulty] = strategy
            logger.debug(f"Built {strategy!r} for {difficulty.value}")
        return strategy

    def choose_move(
        self,
        position: Position,
        difficulty: Union[Difficulty, str, None] = None,
    ) -> Optional[Move]:
        """
        Choose a move for the side to move.

        Args:
            position: Position to move in (not modified)
            difficulty: Tier to play; the policy's current tier if omitted

        Returns:
            Move: A move from the rules backend's legal list
            None: If there is no legal move

        Raises:
            RulesAuthorityError: If the backend rejects one of its own moves
        """
        legal_moves = self.rules.legal_moves(position)
        if not legal_moves:
            logger.info("No legal moves available, nothing to choose")
            return None

        tier = Difficulty.parse(difficulty) if difficulty is not None else self.difficulty
        strategy = self.strategy_for(tier)

        try:
            move = strategy.select(legal_moves, position)
            if move not in legal_moves:
                raise SearchError(f"{strategy!r} returned {move}, which is not a legal move")
            logger.debug(f"{tier.value}: chose {move.usi()} out of {len(legal_moves)} moves")
            return move

        except RulesAuthorityError:
            logger.error(f"Rules backend rejected its own move during {tier.value} selection", exc_info=True)
            raise

        except Exception as e:
            fallback = self.rng.choice(legal_moves)
            logger.warning(
                f"{tier.value} selection failed ({e}), falling back to random move {fallback.usi()}",
                exc_info=True,
            )
            return fallback


def choose_move(
    rules: RulesAuthority,
    position: Position,
    difficulty: Union[Difficulty, str] = Difficulty.BEGINNER,
    config: Optional[EngineConfig] = None,
) -> Optional[Move]:
    """One-shot helper: build a policy and choose a single move."""
    return DifficultyPolicy(rules, config).choose_move(position, difficulty)
