"""
cshogi-backed Rules Authority

Wraps cshogi.Board so the engine can play real shogi. cshogi generates
fully legal moves (including the drop restrictions) in C++, so this
adapter only translates between cshogi's integer encoding and the
engine's value types.

cshogi Encoding:
    - Squares 0-80, index = (file - 1) * 9 + (rank - 1), so 0 = "1a"
    - Pieces are ints; White pieces are Black pieces + 16, 0 = empty
    - Moves are ints decoded with cshogi.move_from / move_to / ...
    - pieces_in_hand = (black_counts, white_counts), indexed by HPAWN..HROOK

Reference:
    https://github.com/TadaoYamaoka/cshogi
"""

import logging
import re
from collections import Counter
from typing import Iterator, List, Optional, Tuple

import cshogi

from shogi_engine.board.representation import Move, PieceKind, Side, Square
from shogi_engine.errors import RulesAuthorityError
from shogi_engine.rules.base import RulesAuthority

logger = logging.getLogger(__name__)

PIECE_TYPE_TO_KIND = {
    cshogi.PAWN: PieceKind.PAWN,
    cshogi.LANCE: PieceKind.LANCE,
    cshogi.KNIGHT: PieceKind.KNIGHT,
    cshogi.SILVER: PieceKind.SILVER,
    cshogi.GOLD: PieceKind.GOLD,
    cshogi.BISHOP: PieceKind.BISHOP,
    cshogi.ROOK: PieceKind.ROOK,
    cshogi.KING: PieceKind.KING,
    cshogi.PROM_PAWN: PieceKind.PROM_PAWN,
    cshogi.PROM_LANCE: PieceKind.PROM_LANCE,
    cshogi.PROM_KNIGHT: PieceKind.PROM_KNIGHT,
    cshogi.PROM_SILVER: PieceKind.PROM_SILVER,
    cshogi.PROM_BISHOP: PieceKind.HORSE,
    cshogi.PROM_ROOK: PieceKind.DRAGON,
}

EMPTY = 0

HAND_INDEX_TO_KIND = {
    cshogi.HPAWN: PieceKind.PAWN,
    cshogi.HLANCE: PieceKind.LANCE,
    cshogi.HKNIGHT: PieceKind.KNIGHT,
    cshogi.HSILVER: PieceKind.SILVER,
    cshogi.HGOLD: PieceKind.GOLD,
    cshogi.HBISHOP: PieceKind.BISHOP,
    cshogi.HROOK: PieceKind.ROOK,
}


def square_to_index(square: Square) -> int:
    """Convert a Square to cshogi's 0-80 index."""
    return (square.file - 1) * 9 + (square.rank - 1)


def index_to_square(index: int) -> Square:
    """Convert cshogi's 0-80 index to a Square."""
    return Square(index // 9 + 1, index % 9 + 1)


def decode_piece(piece: int) -> Optional[Tuple[PieceKind, Side]]:
    """cshogi piece int to (kind, side); None for an empty square."""
    if piece == EMPTY:
        return None
    side = Side.WHITE if piece >= cshogi.WPAWN else Side.BLACK
    return PIECE_TYPE_TO_KIND[cshogi.piece_to_piece_type(piece)], side


SFEN_PIECE = re.compile(r"\+?[PLNSGBRKplnsgbrk]")
SFEN_HAND = re.compile(r"(?:\d*[PLNSGBRplnsgbr])+")


def validate_sfen(sfen: str) -> None:
    """
    Check the shape of an SFEN string before it reaches cshogi.

    cshogi reports a malformed SFEN with a C++ exception that Python
    cannot catch, so every check happens here first.

    Raises:
        ValueError: If the string is not a well-formed SFEN
    """
    fields = sfen.split()
    if len(fields) not in (3, 4):
        raise ValueError(f"SFEN needs 3 or 4 fields, got {len(fields)}")

    placement, side, hand = fields[:3]
    ranks = placement.split("/")
    if len(ranks) != 9:
        raise ValueError(f"SFEN needs 9 ranks, got {len(ranks)}")

    for number, rank in enumerate(ranks, start=1):
        files = 0
        index = 0
        while index < len(rank):
            char = rank[index]
            if char.isdigit() and char != "0":
                files += int(char)
                index += 1
                continue
            match = SFEN_PIECE.match(rank, index)
            if match is None:
                raise ValueError(f"Bad piece {char!r} in rank {number}")
            files += 1
            index = match.end()
        if files != 9:
            raise ValueError(f"Rank {number} covers {files} files instead of 9")

    if side not in ("b", "w"):
        raise ValueError(f"Side to move must be 'b' or 'w', got {side!r}")

    if hand != "-" and SFEN_HAND.fullmatch(hand) is None:
        raise ValueError(f"Bad pieces in hand: {hand!r}")

    if len(fields) == 4 and not fields[3].isdigit():
        raise ValueError(f"Move number must be a positive integer, got {fields[3]!r}")


class CShogiRules(RulesAuthority):
    """
    Rules Authority backed by cshogi.

    Positions are cshogi.Board instances. Create them with new_position().
    """

    def new_position(self, sfen: Optional[str] = None) -> cshogi.Board:
        """
        Create a position from SFEN (starting position if omitted).

        Raises:
            ValueError: If the SFEN string cannot be parsed
        """
        if sfen is None:
            return cshogi.Board()
        try:
            validate_sfen(sfen)
        except ValueError as e:
            raise ValueError(f"Invalid SFEN {sfen!r}: {e}") from e
        board = cshogi.Board()
        board.set_sfen(sfen)
        return board

    def decode_move(self, board: cshogi.Board, move: int, pieces: Optional[List[int]] = None) -> Move:
        """
        Build a Move from a cshogi move int, in the context of `board`.

        `pieces` may carry board.pieces when decoding many moves at once.
        """
        to_square = index_to_square(cshogi.move_to(move))

        if cshogi.move_is_drop(move):
            return Move(
                to_square=to_square,
                piece=HAND_INDEX_TO_KIND[cshogi.move_drop_hand_piece(move)],
                native=move,
            )

        if pieces is None:
            pieces = board.pieces
        from_index = cshogi.move_from(move)
        moving = decode_piece(pieces[from_index])
        if moving is None:
            raise RulesAuthorityError(
                f"cshogi move {cshogi.move_to_usi(move)} starts on an empty square"
            )
        target = decode_piece(pieces[cshogi.move_to(move)])

        return Move(
            to_square=to_square,
            piece=moving[0],
            from_square=index_to_square(from_index),
            promotion=bool(cshogi.move_is_promotion(move)),
            captured=target[0] if target is not None else None,
            native=move,
        )

    def move_from_usi(self, board: cshogi.Board, usi: str) -> Move:
        """
        Parse a USI move string in the context of `board`.

        Raises:
            ValueError: If the string is malformed or the move is illegal
        """
        move = board.move_from_usi(usi)
        if not move or not board.is_legal(move):
            raise ValueError(f"Illegal move: {usi}")
        return self.decode_move(board, move)

    def legal_moves(self, board: cshogi.Board) -> List[Move]:
        pieces = board.pieces
        return [self.decode_move(board, move, pieces) for move in board.legal_moves]

    def push(self, board: cshogi.Board, move: Move) -> None:
        native = move.native if move.native is not None else board.move_from_usi(move.usi())
        if not native or not board.is_legal(native):
            logger.error(f"cshogi rejected move {move.usi()} in {board.sfen()}")
            raise RulesAuthorityError(f"Move {move.usi()} rejected by cshogi")
        board.push(native)

    def pop(self, board: cshogi.Board) -> None:
        board.pop()

    def copy(self, board: cshogi.Board) -> cshogi.Board:
        return cshogi.Board(board.sfen())

    def side_to_move(self, board: cshogi.Board) -> Side:
        return Side.BLACK if board.turn == cshogi.BLACK else Side.WHITE

    def piece_at(self, board: cshogi.Board, square: Square) -> Optional[Tuple[PieceKind, Side]]:
        return decode_piece(board.pieces[square_to_index(square)])

    def pieces(self, board: cshogi.Board) -> Iterator[Tuple[Square, PieceKind, Side]]:
        for index, piece in enumerate(board.pieces):
            decoded = decode_piece(piece)
            if decoded is not None:
                yield index_to_square(index), decoded[0], decoded[1]

    def reserve(self, board: cshogi.Board, side: Side) -> Counter:
        counts = board.pieces_in_hand[0 if side is Side.BLACK else 1]
        hand = Counter()
        for index, kind in HAND_INDEX_TO_KIND.items():
            if counts[index]:
                hand[kind] = counts[index]
        return hand

    def in_check(self, board: cshogi.Board) -> bool:
        return bool(board.is_check())

    def is_terminal(self, board: cshogi.Board) -> bool:
        # cshogi positions always carry both kings
        return bool(board.is_game_over())

    def describe(self, board: cshogi.Board) -> str:
        return board.sfen()
