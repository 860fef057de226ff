"""
Abstract Strategy Interface

A Strategy picks one move out of the legal moves the rules backend
reported. Each difficulty tier is one Strategy; the difficulty policy
builds it once and then calls select() for every move request.

Key Principles:
    1. Strategies only rank and pick; they never build moves
    2. select() with an empty move list is a caller error
    3. Randomness comes from the injected random.Random, never the
       module-level generator, so runs are reproducible with a seed
    4. The caller's position is left exactly as it was given
"""

import random
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from shogi_engine.board.representation import Move
from shogi_engine.errors import EmptyMoveListError
from shogi_engine.rules.base import Position, RulesAuthority


class Strategy(ABC):
    """
    Base class for move-selection strategies.

    Attributes:
        rules: Rules backend used to query positions
        rng: Random source for every random decision of the strategy
    """

    name = "strategy"

    def __init__(self, rules: RulesAuthority, rng: Optional[random.Random] = None):
        self.rules = rules
        self.rng = rng if rng is not None else random.Random()

    def select(self, legal_moves: Sequence[Move], position: Position) -> Move:
        """
        Pick one of `legal_moves`.

        Args:
            legal_moves: Non-empty legal moves for the side to move
            position: Position the moves belong to

        Returns:
            Move: One element of legal_moves

        Raises:
            EmptyMoveListError: If legal_moves is empty
        """
        if not legal_moves:
            raise EmptyMoveListError()
        return self.choose(list(legal_moves), position)

    @abstractmethod
    def choose(self, legal_moves: list, position: Position) -> Move:
        """Strategy-specific choice; legal_moves is guaranteed non-empty."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
