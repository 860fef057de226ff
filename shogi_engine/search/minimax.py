"""
Minimax Search with Alpha-Beta Pruning

Fixed-depth adversarial search used by the "advanced" difficulty tier.
Minimax explores the game tree to find the best move, and alpha-beta
pruning skips branches that cannot change the result.

Key Concepts:
    - Minimax: maximise the engine side's score on its turns, minimise on
      the opponent's
    - Alpha-Beta: stop searching a node's remaining children once
      beta <= alpha
    - Move Ordering: single-ply heuristic score, best first
    - Scoped apply/undo: every push is paired with a pop in a finally
      block, so siblings always see the parent position

Algorithm Complexity:
    - Minimax: O(b^d) where b=branching factor (~80 in shogi), d=depth
    - Alpha-Beta: O(b^(d/2)) with perfect move ordering

References:
    - Minimax: https://www.chessprogramming.org/Minimax
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
"""

import logging
import random
import time
from typing import List, Optional, Tuple

from shogi_engine.board.representation import Move, Side
from shogi_engine.errors import EmptyMoveListError
from shogi_engine.evaluation.base import INFINITY, Evaluator
from shogi_engine.rules.base import Position, RulesAuthority, applied
from shogi_engine.search.heuristic import order_moves

logger = logging.getLogger(__name__)

DEFAULT_DEPTH = 3


def minimax(
    rules: RulesAuthority,
    position: Position,
    depth: int,
    alpha: int,
    beta: int,
    maximizing_player: bool,
    evaluator: Evaluator,
    side: Side,
    ply_from_root: int = 0,
    nodes_searched: Optional[List[int]] = None,
) -> int:
    """
    Minimax search with alpha-beta pruning.

    Recursively explores the game tree, assuming both players play
    optimally, and returns the evaluation of the best line found.

    Args:
        rules: Rules backend that generates and applies moves
        position: Current position (mutated during search, restored on return)
        depth: Remaining search depth (decrements each recursive call)
        alpha: Best score the maximiser is already assured of
        beta: Best score the minimiser is already assured of
        maximizing_player: True if the side to move is `side`
        evaluator: Position evaluation function
        side: The engine's side; all scores are from its perspective
        ply_from_root: Distance from root (for mate distance)
        nodes_searched: Optional mutable list [count] of visited nodes

    Returns:
        int: Evaluation of the position from `side`'s perspective

    Algorithm:
        1. depth = 0 → evaluate position
        2. Finished game → terminal score
        3. For each ordered legal move:
            a. Push move (scoped)
            b. Recursively search (depth - 1)
            c. Pop move, restoring the parent position
            d. Update alpha/beta
            e. Prune if beta <= alpha
        4. Return best score found
    """
    if nodes_searched is not None:
        nodes_searched[0] += 1

    if depth == 0:
        return evaluator.evaluate(position, side)

    legal_moves = rules.legal_moves(position)
    terminal_score = evaluator.evaluate_terminal(position, side, ply_from_root, legal_moves)
    if terminal_score is not None:
        return terminal_score

    ordered_moves = order_moves(rules, position, legal_moves)

    if maximizing_player:
        max_eval = -INFINITY
        for move in ordered_moves:
            with applied(rules, position, move):
                eval_score = minimax(
                    rules,
                    position,
                    depth - 1,
                    alpha,
                    beta,
                    False,
                    evaluator,
                    side,
                    ply_from_root + 1,
                    nodes_searched,
                )

            max_eval = max(max_eval, eval_score)
            alpha = max(alpha, eval_score)

            # Beta cutoff: minimizing player won't allow this branch
            if beta <= alpha:
                break

        return max_eval

    else:
        min_eval = INFINITY
        for move in ordered_moves:
            with applied(rules, position, move):
                eval_score = minimax(
                    rules,
                    position,
                    depth - 1,
                    alpha,
                    beta,
                    True,
                    evaluator,
                    side,
                    ply_from_root + 1,
                    nodes_searched,
                )

            min_eval = min(min_eval, eval_score)
            beta = min(beta, eval_score)

            # Alpha cutoff: maximizing player won't allow this branch
            if beta <= alpha:
                break

        return min_eval


def _root_moves(
    rules: RulesAuthority,
    position: Position,
    rng: Optional[random.Random],
) -> List[Move]:
    legal_moves = rules.legal_moves(position)
    if not legal_moves:
        raise EmptyMoveListError("No legal moves available")
    if rng is not None:
        # Equal-scoring moves are tried in random order
        rng.shuffle(legal_moves)
    return order_moves(rules, position, legal_moves)


def find_best_move(
    rules: RulesAuthority,
    position: Position,
    depth: int,
    evaluator: Evaluator,
    rng: Optional[random.Random] = None,
) -> Tuple[Move, int, int, List[Move]]:
    """
    Find the best move for the side to move.

    The first move reaching the best score wins; with an rng, moves are
    shuffled before the (stable) ordering so equal candidates are picked
    at random.

    Args:
        rules: Rules backend
        position: Current position; searched in place and restored
        depth: Search depth in plies (>= 1)
        evaluator: Position evaluation function
        rng: Optional random source for tie-breaking

    Returns:
        Tuple of (best_move, evaluation, nodes, pv)
            - best_move: The best move found
            - evaluation: Score of the best move for the side to move
            - nodes: Number of positions visited
            - pv: Principal variation (first move only)

    Raises:
        EmptyMoveListError: If no legal moves available (game over)
    """
    start_time = time.perf_counter()
    side = rules.side_to_move(position)
    ordered_moves = _root_moves(rules, position, rng)

    best_move = ordered_moves[0]
    best_score = -INFINITY
    alpha = -INFINITY
    nodes = [1]

    for move in ordered_moves:
        with applied(rules, position, move):
            score = minimax(
                rules,
                position,
                depth - 1,
                alpha,
                INFINITY,
                False,
                evaluator,
                side,
                ply_from_root=1,
                nodes_searched=nodes,
            )

        logger.debug(f"Move: {move.usi()}, Score: {score}")

        if score > best_score:
            best_score = score
            best_move = move
        alpha = max(alpha, score)

    elapsed_ms = int((time.perf_counter() - start_time) * 1000)
    logger.debug(
        f"Search complete: depth={depth}, best_move={best_move.usi()}, "
        f"score={best_score}, nodes={nodes[0]}, time={elapsed_ms}ms"
    )

    return best_move, best_score, nodes[0], [best_move]


def exhaustive_minimax(
    rules: RulesAuthority,
    position: Position,
    depth: int,
    evaluator: Evaluator,
    side: Side,
    ply_from_root: int = 0,
) -> int:
    """
    Plain minimax without pruning.

    Reference implementation for checking that alpha-beta returns the same
    value; visits every node, so only use it on small trees.
    """
    if depth == 0:
        return evaluator.evaluate(position, side)

    legal_moves = rules.legal_moves(position)
    terminal_score = evaluator.evaluate_terminal(position, side, ply_from_root, legal_moves)
    if terminal_score is not None:
        return terminal_score

    maximizing = rules.side_to_move(position) is side
    scores = []
    for move in legal_moves:
        with applied(rules, position, move):
            scores.append(
                exhaustive_minimax(rules, position, depth - 1, evaluator, side, ply_from_root + 1)
            )
    return max(scores) if maximizing else min(scores)


def exhaustive_best_move(
    rules: RulesAuthority,
    position: Position,
    depth: int,
    evaluator: Evaluator,
) -> Tuple[Move, int]:
    """Root of exhaustive_minimax: first move in search order with the best score."""
    side = rules.side_to_move(position)
    best_move, best_score = None, -INFINITY
    for move in _root_moves(rules, position, None):
        with applied(rules, position, move):
            score = exhaustive_minimax(rules, position, depth - 1, evaluator, side, 1)
        if score > best_score:
            best_move, best_score = move, score
    return best_move, best_score
