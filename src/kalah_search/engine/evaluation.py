"""
Static evaluation of Kalah positions for the search engine.

Scores are always from south's point of view (the side to move at the root).
Finished games score SCORE_WIN / SCORE_LOSS / SCORE_DRAW, which lie far
outside the range any unfinished position can reach, so a proven win is
preferred over every heuristic score.
"""

from dataclasses import dataclass

import numpy as np

from kalah_search.config import EVAL_CONFIG
from kalah_search.game.kalah import SOUTH, NORTH, is_terminal, opposite, side_totals


# Sentinel values for win/loss/draw
SCORE_WIN = 100000
SCORE_LOSS = -100000
SCORE_DRAW = 0
SCORE_INF = 1000000


def terminal_score(state: np.ndarray) -> int:
    """Outcome of a finished game once remaining house seeds are swept to their owners."""
    south, north = side_totals(state)
    if south > north:
        return SCORE_WIN
    if south < north:
        return SCORE_LOSS
    return SCORE_DRAW


@dataclass(frozen=True)
class HeuristicEvaluator:
    """
    Material evaluation.

    Each side counts its house seeds at ``house_weight`` and its store at
    ``store_weight``. With ``use_capture_potential`` an empty house facing a
    loaded opposite house is credited with half of that house plus one, the
    value of the capture it threatens.
    """
    house_weight: int = EVAL_CONFIG['house_weight']
    store_weight: int = EVAL_CONFIG['store_weight']
    use_capture_potential: bool = EVAL_CONFIG['use_capture_potential']

    def __call__(self, state: np.ndarray) -> int:
        if is_terminal(state):
            return terminal_score(state)
        return self._side_value(state, SOUTH) - self._side_value(state, NORTH)

    def _side_value(self, state: np.ndarray, side) -> int:
        value = 0
        for house in side.houses:
            facing = int(state[opposite(house)])
            if self.use_capture_potential and state[house] == 0 and facing > 0:
                value += facing // 2 + 1
            else:
                value += self.house_weight * int(state[house])
        return value + self.store_weight * int(state[side.store])


def evaluate(state: np.ndarray) -> int:
    """Evaluate ``state`` with the default weights."""
    return _DEFAULT_EVALUATOR(state)


_DEFAULT_EVALUATOR = HeuristicEvaluator()
