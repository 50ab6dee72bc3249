"""
Configuration for the Kalah MTD-f search engine.
"""

from dataclasses import dataclass, fields
from typing import Optional


# Game Configuration
GAME_CONFIG = {
    'num_houses': 6,                    # Houses per side
    'seeds_per_house': 4,               # Standard Kalah(6, 4): 48 seeds in play
    'max_seeds': 72,                    # Initial Zobrist key range per slot; the engine grows it for bigger boards
}

# Search Configuration
SEARCH_CONFIG = {
    'time_limit_ms': 100,               # Checked between deepening iterations only
    'max_depth': 100,                   # Hard cap on iterative deepening
    'first_guess': 0,                   # MTD-f guess for the depth 1 iteration
    'zobrist_seed': 42,                 # None draws fresh keys per engine
    'tt_max_entries': None,             # None keeps every entry for the whole game
}

# Evaluation Configuration
EVAL_CONFIG = {
    'house_weight': 1,                  # Seeds still in play
    'store_weight': 2,                  # Siloed seeds are worth double
    'use_capture_potential': True,      # Credit empty houses facing loaded opposite houses
}


@dataclass
class SearchConfig:
    time_limit_ms: int = SEARCH_CONFIG['time_limit_ms']
    max_depth: int = SEARCH_CONFIG['max_depth']
    first_guess: int = SEARCH_CONFIG['first_guess']
    zobrist_seed: Optional[int] = SEARCH_CONFIG['zobrist_seed']
    tt_max_entries: Optional[int] = SEARCH_CONFIG['tt_max_entries']
    max_seeds: int = GAME_CONFIG['max_seeds']
    house_weight: int = EVAL_CONFIG['house_weight']
    store_weight: int = EVAL_CONFIG['store_weight']
    use_capture_potential: bool = EVAL_CONFIG['use_capture_potential']

    def __post_init__(self):
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")
        if self.tt_max_entries is not None and self.tt_max_entries < 1:
            raise ValueError(f"tt_max_entries must be positive, got {self.tt_max_entries}")

    @classmethod
    def from_dict(cls, overrides: dict) -> 'SearchConfig':
        """
        Build a config from a flat dictionary of overrides.

        Raises:
            ValueError: if a key does not name a config field
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown search config keys: {', '.join(unknown)}")
        return cls(**overrides)
