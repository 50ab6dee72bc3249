"""
Transposition table for the memory-enhanced alpha-beta search.

Entries hold bounds rather than plain scores: MTD-f runs many zero-window
searches over the same positions, and each of them only proves that the
true value lies above or below the window.

Key concepts:
- An entry is usable only for a query at a depth no greater than its own
- Fail-low results tighten the upper bound, fail-high results the lower
  bound, results inside the window fix both
- Replacement policy: depth-preferred (a shallower search never degrades a
  deeper entry)
- Unbounded by default; the table lives for a whole game and is cleared by
  the engine when a new game starts
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from kalah_search.engine.evaluation import SCORE_INF


logger = logging.getLogger(__name__)


@dataclass
class TTEntry:
    """
    Transposition table entry.

    Attributes:
        zobrist_hash: Full 64-bit hash, checked on probe when slots are shared
        depth: Search depth at which the bounds were established
        lower_bound: The true value is at least this
        upper_bound: The true value is at most this
    """
    zobrist_hash: int
    depth: int = 0
    lower_bound: int = -SCORE_INF
    upper_bound: int = SCORE_INF

    @property
    def is_exact(self) -> bool:
        return self.lower_bound == self.upper_bound


class TranspositionTable:
    """
    Hash-keyed bound store with optional fixed capacity.

    Implementation:
    - Unbounded: one entry per distinct hash
    - Bounded: power-of-2 slot count, slot = hash & mask; a new position
      takes over an occupied slot only if it was searched at least as deep
      as the occupant
    """

    def __init__(self, max_entries: Optional[int] = None):
        """
        Initialize transposition table.

        Args:
            max_entries: Capacity (rounded down to a power of 2), None for unbounded
        """
        if max_entries is None:
            self.num_entries = None
            self.index_mask = None
        else:
            self.num_entries = 2 ** int(np.log2(max_entries))
            self.index_mask = self.num_entries - 1

        self.table: dict[int, TTEntry] = {}

        # Statistics
        self.hits = 0
        self.misses = 0
        self.collisions = 0
        self.stores = 0
        self.replacements = 0

    def __len__(self) -> int:
        return len(self.table)

    def _get_index(self, zobrist_hash: int) -> int:
        if self.index_mask is None:
            return zobrist_hash
        return zobrist_hash & self.index_mask

    def probe(self, zobrist_hash: int, depth: int) -> Optional[TTEntry]:
        """
        Look up bounds usable for a search of ``depth``.

        Returns:
            The entry if it exists for this position and was searched at least
            ``depth`` deep, None otherwise
        """
        entry = self.table.get(self._get_index(zobrist_hash))

        if entry is None:
            self.misses += 1
            return None

        if entry.zobrist_hash != zobrist_hash:
            self.collisions += 1
            self.misses += 1
            return None

        if entry.depth < depth:
            self.misses += 1
            return None

        self.hits += 1
        return entry

    def store(self, zobrist_hash: int, depth: int, value: int, alpha: int, beta: int):
        """
        Record the result of searching a position.

        Args:
            zobrist_hash: Position hash
            depth: Depth the position was searched to
            value: Value returned by the search
            alpha: Lower edge of the window the caller searched with
            beta: Upper edge of the window the caller searched with
        """
        index = self._get_index(zobrist_hash)
        existing = self.table.get(index)

        if existing is not None and existing.depth > depth:
            return  # Don't replace deeper search with shallower

        if existing is None or existing.zobrist_hash != zobrist_hash or existing.depth < depth:
            if existing is not None and existing.zobrist_hash != zobrist_hash:
                self.replacements += 1
            entry = TTEntry(zobrist_hash=zobrist_hash, depth=depth)
        else:
            entry = existing

        if value <= alpha:
            # Fail low: the true value is at most value
            entry.upper_bound = value
        elif value >= beta:
            # Fail high: the true value is at least value
            entry.lower_bound = value
        else:
            entry.lower_bound = value
            entry.upper_bound = value

        self.table[index] = entry
        self.stores += 1

    def clear(self):
        """Clear all entries (use between games)."""
        logger.debug("Clearing transposition table with %d entries", len(self.table))
        self.table = {}
        self._reset_stats()

    def _reset_stats(self):
        self.hits = 0
        self.misses = 0
        self.collisions = 0
        self.stores = 0
        self.replacements = 0

    def get_stats(self) -> dict:
        """
        Get transposition table statistics.

        Returns:
            Dictionary with hits, misses, hit rate, collisions, stores and size
        """
        total_queries = self.hits + self.misses
        hit_rate = self.hits / total_queries if total_queries > 0 else 0.0

        return {
            'hits': self.hits,
            'misses': self.misses,
            'hit_rate': hit_rate,
            'collisions': self.collisions,
            'stores': self.stores,
            'replacements': self.replacements,
            'size_entries': len(self.table),
            'capacity': self.num_entries,
        }
