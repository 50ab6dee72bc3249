"""
MTD-f search engine for Kalah.

This module contains the search components:
- Static evaluation with win/loss sentinels
- Zobrist hashing for fast position lookup
- Transposition table of search bounds
- Alpha-beta with memory driven by MTD-f and iterative deepening
- Plain minimax as the reference search
"""

from kalah_search.engine.evaluation import (
    SCORE_WIN,
    SCORE_LOSS,
    SCORE_DRAW,
    SCORE_INF,
    HeuristicEvaluator,
    evaluate,
    terminal_score,
)
from kalah_search.engine.zobrist import ZobristHasher
from kalah_search.engine.transposition_table import TranspositionTable, TTEntry
from kalah_search.engine.minimax import minimax
from kalah_search.engine.alphabeta import AlphaBetaEngine, SearchResult, SearchInvariantError

__all__ = [
    'SCORE_WIN',
    'SCORE_LOSS',
    'SCORE_DRAW',
    'SCORE_INF',
    'HeuristicEvaluator',
    'evaluate',
    'terminal_score',
    'ZobristHasher',
    'TranspositionTable',
    'TTEntry',
    'minimax',
    'AlphaBetaEngine',
    'SearchResult',
    'SearchInvariantError',
]
