"""
Plain depth-limited minimax without pruning or memory.

Too slow for play at useful depths, but its values are the reference that
alpha-beta and MTD-f must reproduce exactly.
"""

from typing import Callable, Tuple

import numpy as np

from kalah_search.engine.evaluation import SCORE_INF, evaluate
from kalah_search.game.kalah import SOUTH, Side, generate_moves, is_terminal


def minimax(
    state: np.ndarray,
    depth: int,
    side: Side = SOUTH,
    evaluator: Callable[[np.ndarray], int] = evaluate,
) -> Tuple[int, int]:
    """
    Returns:
        (score, best_move) - best_move is -1 at leaves
    """
    if depth == 0 or is_terminal(state):
        return evaluator(state), -1

    best_move = -1
    if side == SOUTH:
        value = -SCORE_INF
        for move, child in generate_moves(state, side):
            score, _ = minimax(child, depth - 1, side.opponent, evaluator)
            if score >= value:
                value = score
                best_move = move
    else:
        value = SCORE_INF
        for move, child in generate_moves(state, side):
            score, _ = minimax(child, depth - 1, side.opponent, evaluator)
            if score <= value:
                value = score
                best_move = move

    return value, best_move
