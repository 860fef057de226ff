"""
Single-Ply Move Scoring

A one-ply composite score for a candidate move, built from cheap shogi
heuristics. It is used two ways:
    - as the ordering key for alpha-beta (good moves first, more cutoffs)
    - as the whole "advanced" strategy when the search depth is 1

Score Terms (mover's point of view):
    + 2 x material of the captured piece
    + 300 if the move promotes
    + 150 if the destination is within distance 3 of the enemy king
    + 200 for a drop, +100 more when dropped on relative ranks 1-3 or 7-9
    + positional table value of the piece on its destination
    + 120 if the destination is in enemy territory (relative ranks 1-3)
    + 500 if the move gives check
    + 250 if the destination is 1-2 squares from the own king (defensive)
    - 100 if the origin is within 2 squares of the own king
    + jitter in [0, jitter) to break ties, when requested

Capturing the king is worth 2 x 100000 and outweighs every other term.
"""

import random
from typing import List, Optional

from shogi_engine.board.representation import Move, ScoredMove, Side, Square
from shogi_engine.evaluation.tables import PIECE_VALUES, positional_value
from shogi_engine.rules.base import Position, RulesAuthority

CAPTURE_MULTIPLIER = 2
PROMOTION_BONUS = 300
KING_PRESSURE_BONUS = 150
KING_PRESSURE_DISTANCE = 3
DROP_BONUS = 200
DROP_EDGE_ZONE_BONUS = 100
ENEMY_TERRITORY_BONUS = 120
CHECK_BONUS = 500
DEFENSIVE_BONUS = 250
KING_SHELTER_PENALTY = 100


def score_move(
    rules: RulesAuthority,
    position: Position,
    move: Move,
    side: Side,
    own_king: Optional[Square],
    enemy_king: Optional[Square],
    rng: Optional[random.Random] = None,
    jitter: int = 0,
    detect_checks: bool = True,
) -> int:
    """
    Composite one-ply score of `move` for `side`.

    Args:
        rules: Rules backend (used for the check test)
        position: Position the move is played from; restored before return
        move: Candidate move
        side: Side making the move
        own_king: Square of side's king, None if it is gone
        enemy_king: Square of the opponent's king, None if it is gone
        rng: Random source for jitter (required when jitter > 0)
        jitter: Exclusive upper bound of the random tie-breaker
        detect_checks: Apply the move to test for check

    Returns:
        int: Heuristic score, higher is better
    """
    score = 0
    to_square = move.to_square
    relative_rank = to_square.relative_rank(side)

    if move.captured is not None:
        score += PIECE_VALUES[move.captured] * CAPTURE_MULTIPLIER

    if move.promotion:
        score += PROMOTION_BONUS

    if enemy_king is not None and to_square.distance(enemy_king) <= KING_PRESSURE_DISTANCE:
        score += KING_PRESSURE_BONUS

    if move.is_drop:
        score += DROP_BONUS
        if relative_rank <= 3 or relative_rank >= 7:
            score += DROP_EDGE_ZONE_BONUS

    placed = move.piece.promoted() if move.promotion else move.piece
    score += positional_value(placed, to_square, side)

    if relative_rank <= 3:
        score += ENEMY_TERRITORY_BONUS

    if detect_checks and enemy_king is not None and rules.gives_check(position, move):
        score += CHECK_BONUS

    if own_king is not None:
        if 1 <= to_square.distance(own_king) <= 2:
            score += DEFENSIVE_BONUS
        if move.from_square is not None and move.from_square.distance(own_king) <= 2:
            score -= KING_SHELTER_PENALTY

    if jitter > 0:
        score += rng.randrange(jitter)

    return score


def score_moves(
    rules: RulesAuthority,
    position: Position,
    moves: List[Move],
    rng: Optional[random.Random] = None,
    jitter: int = 0,
    detect_checks: bool = True,
) -> List[ScoredMove]:
    """
    Score every move for the side to move, in input order.

    Kings are located once for the whole list.
    """
    side = rules.side_to_move(position)
    own_king = rules.find_king(position, side)
    enemy_king = rules.find_king(position, side.opponent)

    return [
        ScoredMove(move, score_move(
            rules, position, move, side, own_king, enemy_king,
            rng=rng, jitter=jitter, detect_checks=detect_checks,
        ))
        for move in moves
    ]


def order_moves(
    rules: RulesAuthority,
    position: Position,
    moves: List[Move],
    detect_checks: bool = True,
) -> List[Move]:
    """
    Order moves to improve alpha-beta pruning efficiency.

    Sorting is stable: moves with equal scores keep their input order.

    Args:
        rules: Rules backend
        position: Current position (restored after check tests)
        moves: Legal moves of the side to move
        detect_checks: Include the check bonus in the ordering key

    Returns:
        Sorted list of moves (best moves first)
    """
    scored = score_moves(rules, position, moves, detect_checks=detect_checks)
    scored.sort(key=lambda s: s.score, reverse=True)
    return [s.move for s in scored]
