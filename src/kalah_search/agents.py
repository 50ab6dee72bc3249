"""
Kalah agents.

Every agent is asked for a move with the board seen from its own side:
houses 0-5 and store 6 are its own, houses 7-12 and store 13 the
opponent's. It answers with the index of one of its non-empty houses.
"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from kalah_search.config import SearchConfig
from kalah_search.engine.alphabeta import AlphaBetaEngine, SearchResult
from kalah_search.engine.minimax import minimax
from kalah_search.game.kalah import SOUTH, to_state, valid_moves


class MancalaAgent(ABC):

    @abstractmethod
    def move(self, board) -> int:
        """
        Pick the house to sow from.

        Args:
            board: 14 seed counts from this agent's point of view

        Returns:
            House index 0-5; anything else, or an empty house, forfeits the game
        """
        pass

    @abstractmethod
    def name(self) -> str:
        pass

    def reset(self):
        """Prepare for a new game."""
        pass


class MTDFAgent(MancalaAgent):
    """
    Iterative deepening MTD-f player.

    The engine's transposition table is kept from move to move and cleared
    by ``reset`` when a new game starts.
    """

    def __init__(self, config: Optional[SearchConfig] = None, evaluator=None):
        self.engine = AlphaBetaEngine(config=config, evaluator=evaluator)
        self.last_result: Optional[SearchResult] = None

    def move(self, board) -> int:
        self.last_result = self.engine.search(board)
        return self.last_result.best_move

    def name(self) -> str:
        return "MTD-f Agent"

    def reset(self):
        self.engine.new_game()
        self.last_result = None


class MinimaxAgent(MancalaAgent):
    """Fixed-depth plain minimax, the slow reference player."""

    def __init__(self, depth: int = 4):
        self.depth = depth

    def move(self, board) -> int:
        state = to_state(board)
        legal = valid_moves(state, SOUTH)
        if not legal:
            raise ValueError("No valid moves available")

        _, house = minimax(state, self.depth)
        if house not in legal:
            # Finished position: the opponent's houses are empty
            house = legal[0]
        return house

    def name(self) -> str:
        return f"Minimax Agent (depth {self.depth})"


class RandomAgent(MancalaAgent):
    """Uniformly random legal moves."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self.rng = np.random.RandomState(seed)

    def move(self, board) -> int:
        legal = valid_moves(to_state(board), SOUTH)
        if not legal:
            raise ValueError("No valid moves available")
        return int(self.rng.choice(legal))

    def name(self) -> str:
        return "Random Agent"

    def reset(self):
        self.rng = np.random.RandomState(self.seed)
