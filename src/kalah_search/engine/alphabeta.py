"""
MTD-f search engine for Kalah.

The engine always searches for south, the side whose houses are 0-5 on the
board it is given. South maximizes, north minimizes, and every score is
from south's point of view.

Key features:
- Alpha-beta with memory: a transposition table of (depth, lower, upper)
  bounds short-circuits or narrows the window at every inner node
- MTD-f: a sequence of zero-window alpha-beta probes that bisects towards
  the exact minimax value
- Iterative deepening: depth 1, 2, 3... each seeded with the previous
  iteration's value, until the depth cap or the time budget is reached
- The transposition table is owned by the engine and survives between
  moves of a game; ``new_game`` clears it


Algorithm overview:

    def mtdf(root, f, depth):
        g = f
        lower, upper = -inf, +inf
        while lower < upper:
            beta = max(g, lower + 1)
            g = alpha_beta_with_memory(root, beta - 1, beta, depth)
            if g < beta:
                upper = g
            else:
                lower = g
        return g

The deadline is only checked between deepening iterations. An iteration
that has started always runs to completion, so the result returned is
always the one of the deepest completed iteration.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from kalah_search.config import SearchConfig
from kalah_search.engine.evaluation import (
    SCORE_WIN,
    SCORE_LOSS,
    SCORE_DRAW,
    SCORE_INF,
    HeuristicEvaluator,
)
from kalah_search.engine.transposition_table import TranspositionTable
from kalah_search.engine.zobrist import ZobristHasher
from kalah_search.game.kalah import (
    SOUTH,
    Side,
    generate_moves,
    is_terminal,
    to_state,
    valid_moves,
)


logger = logging.getLogger(__name__)

__all__ = [
    'AlphaBetaEngine',
    'SearchResult',
    'SearchInvariantError',
    'SCORE_WIN',
    'SCORE_LOSS',
    'SCORE_DRAW',
    'SCORE_INF',
]


class SearchInvariantError(RuntimeError):
    """A non-terminal position produced no moves, or the root search produced no legal move."""


@dataclass
class SearchResult:
    """Result of an iterative deepening MTD-f search."""
    best_move: int
    score: int
    depth_reached: int
    nodes_searched: int
    probes: int
    time_ms: int
    tt_stats: dict


class AlphaBetaEngine:
    """
    Memory-enhanced alpha-beta engine driven by MTD-f.

    One engine serves one game at a time: its Zobrist keys and transposition
    table are not shared with other engines and must not be used by two
    searches at once.
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        evaluator: Optional[Callable[[np.ndarray], int]] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Search settings (defaults from kalah_search.config)
            evaluator: Static evaluation (state) -> int from south's point of view
        """
        self.config = config if config is not None else SearchConfig()
        if evaluator is None:
            evaluator = HeuristicEvaluator(
                house_weight=self.config.house_weight,
                store_weight=self.config.store_weight,
                use_capture_potential=self.config.use_capture_potential,
            )
        self.evaluator = evaluator

        self.zobrist = ZobristHasher(max_seeds=self.config.max_seeds, seed=self.config.zobrist_seed)
        self.tt = TranspositionTable(max_entries=self.config.tt_max_entries)

        # Search statistics
        self.nodes_searched = 0
        self.probes = 0
        self.start_time = 0
        self.time_limit_ms = self.config.time_limit_ms

    def search(
        self,
        state,
        time_limit_ms: Optional[int] = None,
        max_depth: Optional[int] = None,
    ) -> SearchResult:
        """
        Pick a move for south with iterative deepening MTD-f.

        Strategy:
        - Search depth 1, then 2, then 3... until time expires
        - Seed each MTD-f run with the previous depth's value
        - Keep the best move from the last completed depth
        - Stop early once a win or loss is proven

        Args:
            state: 14 slot board from the mover's point of view
            time_limit_ms: Time budget in milliseconds (default from config)
            max_depth: Override maximum depth

        Returns:
            SearchResult with best move (-1 only if south has no seeds), score, statistics
        """
        state = to_state(state)
        self.start_time = time.time() * 1000  # Convert to ms
        self.time_limit_ms = time_limit_ms if time_limit_ms is not None else self.config.time_limit_ms
        self.nodes_searched = 0
        self.probes = 0

        effective_max_depth = max_depth if max_depth is not None else self.config.max_depth

        legal = valid_moves(state, SOUTH)

        # Initialize with first valid move (fallback)
        best_move = legal[0] if legal else -1
        best_score = self.evaluator(state)
        depth_reached = 0

        if is_terminal(state):
            # Nothing to search; still answer with a non-empty house if there is one
            return self._result(best_move, best_score, depth_reached)

        guess = self.config.first_guess

        # Iterative deepening
        for depth in range(1, effective_max_depth + 1):
            if depth > 1 and self._time_up():
                break

            score, move = self.mtdf(state, guess, depth)
            if move not in legal:
                raise SearchInvariantError(f"Search at depth {depth} returned illegal move {move}")

            best_move = move
            best_score = score
            depth_reached = depth
            guess = score

            logger.debug(
                "depth %d: score %d move %d (%d probes, %d nodes, %.0f ms)",
                depth, score, move, self.probes, self.nodes_searched,
                time.time() * 1000 - self.start_time,
            )

            # Stop if we found a forced win/loss
            if abs(score) >= SCORE_WIN:
                break

        result = self._result(best_move, best_score, depth_reached)
        logger.info(
            "Chose house %d (score %d, depth %d, %d nodes, %d ms)",
            result.best_move, result.score, result.depth_reached,
            result.nodes_searched, result.time_ms,
        )
        return result

    def mtdf(self, state: np.ndarray, first_guess: int, depth: int) -> Tuple[int, int]:
        """
        Converge on the minimax value of ``state`` with zero-window probes.

        Args:
            state: Root state, south to move
            first_guess: Estimate of the value (usually the previous depth's)
            depth: Search depth

        Returns:
            (score, best_move) - the exact value at this depth and the move
            found by the last probe that failed high

        A probe that fails low only bounds every root move from above, so the
        move it reports proves nothing. The move of the probe that raised the
        lower bound to the final value is the one known to reach it.
        """
        g = first_guess
        upper_bound = SCORE_INF
        lower_bound = -SCORE_INF
        best_move = -1
        fallback_move = -1

        while lower_bound < upper_bound:
            beta = max(g, lower_bound + 1)
            g, move = self.alpha_beta(state, beta - 1, beta, depth)
            self.probes += 1
            if g < beta:
                upper_bound = g
                fallback_move = move
            else:
                lower_bound = g
                best_move = move

        if best_move == -1:
            best_move = fallback_move
        return g, best_move

    def alpha_beta(
        self,
        state: np.ndarray,
        alpha: int,
        beta: int,
        depth: int,
        side: Side = SOUTH,
    ) -> Tuple[int, int]:
        """
        Fail-soft alpha-beta with memory from the root.

        The root itself is never answered from the table, since a cached bound
        carries no move.

        Returns:
            (score, best_move) - best_move is -1 when the root is a leaf
        """
        self._fit_hasher(state)
        return self._alpha_beta(state, alpha, beta, depth, side, root=True)

    def _fit_hasher(self, state: np.ndarray):
        """Grow the Zobrist table when the board holds more seeds than it covers."""
        total = int(np.sum(state))
        if total <= self.zobrist.max_seeds:
            return

        logger.info("Rebuilding Zobrist keys for %d seeds (was %d)", total, self.zobrist.max_seeds)
        self.zobrist = ZobristHasher(max_seeds=total, seed=self.config.zobrist_seed)
        # Old keys no longer match the new table
        self.tt.clear()

    def _alpha_beta(
        self,
        state: np.ndarray,
        alpha: int,
        beta: int,
        depth: int,
        side: Side,
        root: bool = False,
    ) -> Tuple[int, int]:
        self.nodes_searched += 1

        if depth == 0 or is_terminal(state):
            return self.evaluator(state), -1

        hash_val = self.zobrist.hash_position(state, side)
        original_alpha, original_beta = alpha, beta

        if not root:
            entry = self.tt.probe(hash_val, depth)
            if entry is not None:
                if entry.lower_bound >= beta:
                    return entry.lower_bound, -1
                if entry.upper_bound <= alpha:
                    return entry.upper_bound, -1
                alpha = max(alpha, entry.lower_bound)
                beta = min(beta, entry.upper_bound)

        children = generate_moves(state, side)
        if not children:
            raise SearchInvariantError(f"No moves for {side.name} in non-terminal state {state.tolist()}")

        best_move = -1
        if side == SOUTH:
            value = -SCORE_INF
            a = alpha
            for move, child in children:
                score, _ = self._alpha_beta(child, a, beta, depth - 1, side.opponent)
                # Ties go to the later move
                if score >= value:
                    value = score
                    best_move = move
                a = max(a, value)
                if value >= beta:
                    break
        else:
            value = SCORE_INF
            b = beta
            for move, child in children:
                score, _ = self._alpha_beta(child, alpha, b, depth - 1, side.opponent)
                if score <= value:
                    value = score
                    best_move = move
                b = min(b, value)
                if value <= alpha:
                    break

        self.tt.store(hash_val, depth, value, original_alpha, original_beta)

        return value, best_move

    def _result(self, best_move: int, score: int, depth_reached: int) -> SearchResult:
        return SearchResult(
            best_move=int(best_move),
            score=int(score),
            depth_reached=depth_reached,
            nodes_searched=self.nodes_searched,
            probes=self.probes,
            time_ms=int(time.time() * 1000 - self.start_time),
            tt_stats=self.tt.get_stats(),
        )

    def _time_up(self) -> bool:
        """Check if time limit exceeded."""
        if self.time_limit_ms <= 0:
            return True

        elapsed_ms = time.time() * 1000 - self.start_time
        return elapsed_ms >= self.time_limit_ms

    def new_game(self):
        """Forget everything learned about the previous game."""
        self.tt.clear()

    def get_stats(self) -> dict:
        """Get search statistics."""
        return {
            'nodes_searched': self.nodes_searched,
            'probes': self.probes,
            'tt_stats': self.tt.get_stats(),
        }
