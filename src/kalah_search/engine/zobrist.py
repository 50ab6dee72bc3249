"""
Zobrist hashing for Kalah positions.

Zobrist hashing gives every position a 64-bit key for transposition table
lookups:
- Pre-generate a random key for each (slot, seed count) combination
- Hash = XOR of the keys selected by the 14 slot counts
- A side-to-move key is XORed in when north is to move, so max and min
  nodes holding the same board never share a table entry

Identical boards always hash identically. Different boards collide only
with negligible probability; collisions are not detected.
"""

from typing import Optional

import numpy as np

from kalah_search.game.kalah import NUM_SLOTS, SOUTH, NORTH, Side


class ZobristHasher:
    """
    Zobrist keys for a 14 slot Kalah board.

    One hasher belongs to one engine and is never modified after construction.
    """

    def __init__(self, num_slots: int = NUM_SLOTS, max_seeds: int = 72, seed: Optional[int] = 42):
        """
        Initialize Zobrist hash table with random 64-bit keys.

        Args:
            num_slots: Number of slots on the board (houses and stores)
            max_seeds: Largest seed count a single slot may hold
            seed: Random seed for reproducibility (None for fresh keys)
        """
        self.num_slots = num_slots
        self.max_seeds = max_seeds

        rng = np.random.RandomState(seed)

        # Generate zobrist keys: [slot, seed_count]
        self.zobrist_table = rng.randint(
            0, 2**63 - 1,
            size=(num_slots, max_seeds + 1),
            dtype=np.uint64
        )

        # Side-to-move hash (XOR this if north is to move)
        self.side_to_move_hash = rng.randint(0, 2**63 - 1, dtype=np.uint64)

        self._slots = np.arange(num_slots)

    def hash_position(self, state: np.ndarray, side: Side = SOUTH) -> int:
        """
        Compute Zobrist hash for a board state.

        Args:
            state: Seed counts of every slot
            side: Side to move

        Returns:
            64-bit hash value (int)

        Raises:
            ValueError: if the state does not fit the table
        """
        counts = np.asarray(state)
        if counts.shape != (self.num_slots,):
            raise ValueError(f"Expected {self.num_slots} slots, got shape {counts.shape}")
        if counts.min() < 0 or counts.max() > self.max_seeds:
            raise ValueError(f"Seed counts must lie in 0-{self.max_seeds}: {counts.tolist()}")

        hash_value = np.bitwise_xor.reduce(self.zobrist_table[self._slots, counts])

        if side == NORTH:
            hash_value ^= self.side_to_move_hash

        return int(hash_value)

    def verify_hash(self, state: np.ndarray, side: Side, claimed_hash: int) -> bool:
        """Check that a claimed hash matches the actual board state."""
        return self.hash_position(state, side) == claimed_hash
