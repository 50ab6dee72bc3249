"""
Kalah board representation and rule engine.
"""

from kalah_search.game.game import Game
from kalah_search.game.kalah import (
    NUM_SLOTS,
    NUM_HOUSES,
    Side,
    SOUTH,
    NORTH,
    MoveOutcome,
    Kalah,
    to_state,
    validate_state,
    get_initial_state,
    is_terminal,
    valid_moves,
    sow,
    apply_capture_if_eligible,
    apply_move,
    generate_moves,
    side_totals,
    sweep,
    rotate,
    render,
)

__all__ = [
    'Game',
    'NUM_SLOTS',
    'NUM_HOUSES',
    'Side',
    'SOUTH',
    'NORTH',
    'MoveOutcome',
    'Kalah',
    'to_state',
    'validate_state',
    'get_initial_state',
    'is_terminal',
    'valid_moves',
    'sow',
    'apply_capture_if_eligible',
    'apply_move',
    'generate_moves',
    'side_totals',
    'sweep',
    'rotate',
    'render',
]
