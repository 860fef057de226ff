"""
Material and Positional Tables

Constant piece values and per-kind positional tables. Nothing here is
mutated at runtime.

Material Values:
    - Minor pieces: FU=100, KY=350, KE=400, GI=500, KI=600
    - Major pieces: KA=900, HI=1000, UM=1300, RY=1400
    - Promoted minors (TO, NY, NK, NG) move like gold: 600
    - King: 100000, more than all non-king material that can ever exist on
      one board, so no chain of captures is worth losing it

Positional Tables:
    9x9 arrays indexed [relative_rank - 1, relative_file - 1], i.e. from the
    point of view of the side that owns the piece. Relative rank 1 is the
    far edge (deep in enemy territory). The tables are only used to rank
    candidate moves; static evaluation is material only.
"""

import numpy as np

from shogi_engine.board.representation import CENTER, PieceKind, Side, Square

# fmt: off
PIECE_VALUES = {
    PieceKind.PAWN: 100,
    PieceKind.LANCE: 350,
    PieceKind.KNIGHT: 400,
    PieceKind.SILVER: 500,
    PieceKind.GOLD: 600,
    PieceKind.BISHOP: 900,
    PieceKind.ROOK: 1000,
    PieceKind.KING: 100000,
    PieceKind.PROM_PAWN: 600,
    PieceKind.PROM_LANCE: 600,
    PieceKind.PROM_KNIGHT: 600,
    PieceKind.PROM_SILVER: 600,
    PieceKind.HORSE: 1300,
    PieceKind.DRAGON: 1400,
}
# fmt: on

KING_VALUE = PIECE_VALUES[PieceKind.KING]

# Reserve pieces count 4/5 of their board value: they need a move to deploy
RESERVE_NUMERATOR = 4
RESERVE_DENOMINATOR = 5


def reserve_value(kind: PieceKind) -> int:
    """Value of one piece of `kind` held in hand (0.8 x material)."""
    return PIECE_VALUES[kind] * RESERVE_NUMERATOR // RESERVE_DENOMINATOR


def _center_bonus(square: Square) -> int:
    return max(0, 40 - square.distance(CENTER) * 5)


def _kind_bonus(kind: PieceKind, file: int, rank: int) -> int:
    """Extra positional value for `kind` on relative (file, rank)."""
    if kind is PieceKind.PAWN:
        # Pawns gain value as they advance
        return (9 - rank) * 15
    if kind is PieceKind.LANCE:
        return 30 if file in (1, 9) else 0
    if kind is PieceKind.KNIGHT:
        return 25 if abs(file - 5) <= 2 else 0
    if kind is PieceKind.SILVER:
        return 20 if rank <= 6 else 0
    if kind is PieceKind.GOLD:
        return 15
    if kind is PieceKind.BISHOP:
        # Long diagonal
        return 35 if abs(file - rank) <= 1 else 0
    if kind is PieceKind.ROOK:
        return 40 if file == 5 or rank == 5 else 0
    return 0


def _build_table(kind: PieceKind) -> np.ndarray:
    table = np.zeros((9, 9), dtype=np.int32)
    for rank in range(1, 10):
        for file in range(1, 10):
            table[rank - 1, file - 1] = (
                _center_bonus(Square(file, rank)) + _kind_bonus(kind, file, rank)
            )
    table.setflags(write=False)
    return table


POSITIONAL_TABLES = {kind: _build_table(kind) for kind in PieceKind}


def positional_value(kind: PieceKind, square: Square, side: Side) -> int:
    """
    Positional value of a `side` piece of `kind` standing on `square`.

    Args:
        kind: Piece kind
        square: Board square (absolute coordinates)
        side: Owner of the piece; the table is read from its point of view

    Returns:
        int: Bonus in material units (always >= 0)
    """
    table = POSITIONAL_TABLES[kind]
    return int(table[square.relative_rank(side) - 1, square.relative_file(side) - 1])
