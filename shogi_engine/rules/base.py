"""
Abstract Rules Authority Interface

The engine never decides what is legal. Everything it knows about a
position comes through this interface, and every move it returns was
produced by it. Concrete backends wrap a real shogi library (see
CShogiRules) or, in tests, a scripted game tree.

Key Principles:
    1. Positions are opaque; only the methods below are used on them
    2. push()/pop() mutate a position in place and must be paired
    3. apply() is the pure variant: it never touches its input
    4. A backend that refuses a move it listed itself raises
       RulesAuthorityError

Conventions:
    - Sides are Side.BLACK / Side.WHITE
    - Reserves are Counters of unpromoted PieceKinds
"""

import logging
from abc import ABC, abstractmethod
from collections import Counter
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Tuple

from shogi_engine.board.representation import ALL_SQUARES, Move, PieceKind, Side, Square

logger = logging.getLogger(__name__)

Position = Any


class RulesAuthority(ABC):
    """
    Move generation and legality for a shogi position.

    Subclasses implement the abstract primitives; the derived queries
    (apply, is_terminal, winner, gives_check, pieces, find_king) have
    generic implementations that a backend may override for speed.
    """

    @abstractmethod
    def legal_moves(self, position: Position) -> List[Move]:
        """All legal moves (board moves and drops) for the side to move."""
        pass

    @abstractmethod
    def push(self, position: Position, move: Move) -> None:
        """Apply `move` to `position` in place."""
        pass

    @abstractmethod
    def pop(self, position: Position) -> None:
        """Undo the last move pushed onto `position`."""
        pass

    @abstractmethod
    def copy(self, position: Position) -> Position:
        """Independent copy of `position`; mutating one never affects the other."""
        pass

    @abstractmethod
    def side_to_move(self, position: Position) -> Side:
        pass

    @abstractmethod
    def piece_at(self, position: Position, square: Square) -> Optional[Tuple[PieceKind, Side]]:
        """Kind and owner of the piece on `square`, or None if empty."""
        pass

    @abstractmethod
    def reserve(self, position: Position, side: Side) -> Counter:
        """Pieces held in hand by `side`, as a Counter of PieceKind."""
        pass

    @abstractmethod
    def in_check(self, position: Position) -> bool:
        """True if the side to move is in check."""
        pass

    def apply(self, position: Position, move: Move) -> Position:
        """Return a new position with `move` played; `position` is unchanged."""
        child = self.copy(position)
        self.push(child, move)
        return child

    def pieces(self, position: Position) -> Iterator[Tuple[Square, PieceKind, Side]]:
        """Yield (square, kind, side) for every occupied square."""
        for square in ALL_SQUARES:
            occupant = self.piece_at(position, square)
            if occupant is not None:
                yield square, occupant[0], occupant[1]

    def find_king(self, position: Position, side: Side) -> Optional[Square]:
        """Square of `side`'s king, or None if it is not on the board."""
        for square, kind, owner in self.pieces(position):
            if kind is PieceKind.KING and owner is side:
                return square
        return None

    def is_terminal(self, position: Position) -> bool:
        """
        Game over: a king has left the board or the side to move has no move.
        """
        if self.find_king(position, Side.BLACK) is None:
            return True
        if self.find_king(position, Side.WHITE) is None:
            return True
        return not self.legal_moves(position)

    def winner(self, position: Position) -> Optional[Side]:
        """Winning side of a finished game, None while the game goes on."""
        for side in (Side.BLACK, Side.WHITE):
            if self.find_king(position, side) is None:
                return side.opponent
        if not self.legal_moves(position):
            return self.side_to_move(position).opponent
        return None

    def gives_check(self, position: Position, move: Move) -> bool:
        """True if playing `move` leaves the opponent in check."""
        with applied(self, position, move):
            return self.in_check(position)

    def describe(self, position: Position) -> str:
        """Short text form of a position for log messages."""
        return repr(position)


@contextmanager
def applied(rules: RulesAuthority, position: Position, move: Move):
    """
    Play `move` on `position` for the duration of a with-block.

    The move is undone on every exit path: normal completion, break out of
    the enclosing loop, or an exception.
    """
    rules.push(position, move)
    try:
        yield position
    finally:
        rules.pop(position)
