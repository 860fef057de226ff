"""
Board Representation

Core value types shared by every engine component. None of them know how
moves are generated; that is the rules backend's job. They only describe
squares, pieces and moves so the evaluator, the selectors and the search
can talk about them.

Coordinates:
    - file 1-9, rank 1-9, the usual shogi notation
    - files decrease from left to right as seen by Black (sente)
    - rank 1 is White's (gote) back rank, rank 9 is Black's
    - USI square names: file digit + rank letter, e.g. "7g" = (7, 7)

Array Orientation (board_to_array):
    - Row 0 = rank 1, Row 8 = rank 9
    - Column 0 = file 9, Column 8 = file 1
    i.e. the diagram as printed for Black
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple

import numpy as np

RANK_LETTERS = "abcdefghi"


class Side(Enum):
    """The two players. BLACK (sente) moves first."""

    BLACK = 0
    WHITE = 1

    @property
    def opponent(self) -> "Side":
        return Side.WHITE if self is Side.BLACK else Side.BLACK

    @property
    def sign(self) -> int:
        """+1 for Black, -1 for White (used by board_to_array)."""
        return 1 if self is Side.BLACK else -1


class PieceKind(Enum):
    """The fourteen shogi piece kinds, valued by their CSA code."""

    PAWN = "FU"
    LANCE = "KY"
    KNIGHT = "KE"
    SILVER = "GI"
    GOLD = "KI"
    BISHOP = "KA"
    ROOK = "HI"
    KING = "OU"
    PROM_PAWN = "TO"
    PROM_LANCE = "NY"
    PROM_KNIGHT = "NK"
    PROM_SILVER = "NG"
    HORSE = "UM"
    DRAGON = "RY"

    @property
    def csa(self) -> str:
        return self.value

    @property
    def is_promoted(self) -> bool:
        return self in _UNPROMOTE

    @property
    def can_promote(self) -> bool:
        return self in _PROMOTE

    def promoted(self) -> "PieceKind":
        """Promoted form, or the kind itself if it cannot promote."""
        return _PROMOTE.get(self, self)

    def unpromoted(self) -> "PieceKind":
        """Base form; captured pieces go to the reserve in this form."""
        return _UNPROMOTE.get(self, self)

    @property
    def usi_letter(self) -> str:
        """Upper-case USI letter of the base kind (P, L, N, S, G, B, R, K)."""
        return _USI_LETTERS[self.unpromoted()]

    @classmethod
    def from_usi_letter(cls, letter: str) -> "PieceKind":
        try:
            return _FROM_USI_LETTER[letter.upper()]
        except KeyError:
            raise ValueError(f"Unknown USI piece letter: {letter!r}")


_PROMOTE = {
    PieceKind.PAWN: PieceKind.PROM_PAWN,
    PieceKind.LANCE: PieceKind.PROM_LANCE,
    PieceKind.KNIGHT: PieceKind.PROM_KNIGHT,
    PieceKind.SILVER: PieceKind.PROM_SILVER,
    PieceKind.BISHOP: PieceKind.HORSE,
    PieceKind.ROOK: PieceKind.DRAGON,
}
_UNPROMOTE = {v: k for k, v in _PROMOTE.items()}

_USI_LETTERS = {
    PieceKind.PAWN: "P",
    PieceKind.LANCE: "L",
    PieceKind.KNIGHT: "N",
    PieceKind.SILVER: "S",
    PieceKind.GOLD: "G",
    PieceKind.BISHOP: "B",
    PieceKind.ROOK: "R",
    PieceKind.KING: "K",
}
_FROM_USI_LETTER = {v: k for k, v in _USI_LETTERS.items()}

# Small integer code per kind for board_to_array (0 = empty square)
PIECE_TO_CODE = {kind: index + 1 for index, kind in enumerate(PieceKind)}


@dataclass(frozen=True, order=True)
class Square:
    """A board square as (file, rank), both in 1-9."""

    file: int
    rank: int

    def __post_init__(self):
        if not (1 <= self.file <= 9 and 1 <= self.rank <= 9):
            raise ValueError(f"Square out of range: file={self.file}, rank={self.rank}")

    def distance(self, other: "Square") -> int:
        """Manhattan distance between two squares."""
        return abs(self.file - other.file) + abs(self.rank - other.rank)

    def relative_rank(self, side: Side) -> int:
        """
        Rank as seen from `side`: 1 is the far edge, 9 the side's own back rank.

        Relative ranks 1-3 are the opponent's territory for `side`.
        """
        return self.rank if side is Side.BLACK else 10 - self.rank

    def relative_file(self, side: Side) -> int:
        """File as seen from `side` (the board rotated 180 degrees for White)."""
        return self.file if side is Side.BLACK else 10 - self.file

    @property
    def usi(self) -> str:
        return f"{self.file}{RANK_LETTERS[self.rank - 1]}"

    @classmethod
    def from_usi(cls, name: str) -> "Square":
        if len(name) != 2 or not name[0].isdigit() or name[1] not in RANK_LETTERS:
            raise ValueError(f"Invalid USI square: {name!r}")
        return cls(int(name[0]), RANK_LETTERS.index(name[1]) + 1)

    def __str__(self) -> str:
        return self.usi


CENTER = Square(5, 5)
ALL_SQUARES = tuple(Square(f, r) for r in range(1, 10) for f in range(9, 0, -1))


@dataclass(frozen=True)
class Move:
    """
    A move as reported by the rules backend.

    Board move: from_square is set, captured holds the kind on the
    destination square (if any), promotion tells whether the piece promotes.
    Drop: from_square is None, piece is the reserve kind being placed.

    `native` carries the backend's own move object so it can be applied
    without re-parsing. It does not take part in equality.
    """

    to_square: Square
    piece: PieceKind
    from_square: Optional[Square] = None
    promotion: bool = False
    captured: Optional[PieceKind] = None
    native: Any = field(default=None, compare=False, repr=False)

    @property
    def is_drop(self) -> bool:
        return self.from_square is None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def usi(self) -> str:
        """USI notation: 7g7f, 2b3c+, P*5e."""
        if self.is_drop:
            return f"{self.piece.usi_letter}*{self.to_square.usi}"
        suffix = "+" if self.promotion else ""
        return f"{self.from_square.usi}{self.to_square.usi}{suffix}"

    def __str__(self) -> str:
        return self.usi()


@dataclass(frozen=True)
class ScoredMove:
    """A move with its engine-internal score."""

    move: Move
    score: int


def square_to_coordinates(square: Square) -> Tuple[int, int]:
    """
    Convert a Square to (row, column) array coordinates.

    Returns:
        Tuple of (row, col) where:
            - row 0 = rank 1
            - col 0 = file 9
    """
    return square.rank - 1, 9 - square.file


def coordinates_to_square(row: int, col: int) -> Square:
    """Inverse of square_to_coordinates()."""
    return Square(9 - col, row + 1)


def board_to_array(rules, position) -> np.ndarray:
    """
    Snapshot the piece placement of a position as a (9, 9) int8 array.

    Black pieces are positive codes, White pieces negative, empty squares 0.
    Two positions with the same array and the same reserves have the same
    placement, which makes this handy for before/after comparisons.

    Args:
        rules: RulesAuthority that owns `position`
        position: Position to snapshot

    Returns:
        numpy array of shape (9, 9) with dtype int8
    """
    array = np.zeros((9, 9), dtype=np.int8)
    for square, kind, side in rules.pieces(position):
        row, col = square_to_coordinates(square)
        array[row, col] = side.sign * PIECE_TO_CODE[kind]
    return array
