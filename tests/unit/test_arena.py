"""
Unit tests for agents and the match driver.
"""

import numpy as np
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from kalah_search.agents import MancalaAgent, MTDFAgent, MinimaxAgent, RandomAgent
from kalah_search.arena import play_game, play_match
from kalah_search.config import SearchConfig


class FixedHouseAgent(MancalaAgent):
    """Always answers with the same house, legal or not."""

    def __init__(self, house):
        self.house = house

    def move(self, board):
        return self.house

    def name(self):
        return f"Fixed House {self.house}"


def fast_mtdf_agent():
    return MTDFAgent(SearchConfig(time_limit_ms=5, max_depth=3))


class TestAgents:
    """Test the agent move API."""

    def test_mtdf_agent_single_legal_house(self):
        agent = MTDFAgent()
        assert agent.move([0, 0, 0, 5, 0, 0, 10, 3, 3, 3, 3, 3, 3, 8]) == 3

    def test_mtdf_agent_reset_clears_table(self):
        agent = fast_mtdf_agent()
        agent.move([4, 4, 4, 4, 4, 4, 0, 4, 4, 4, 4, 4, 4, 0])
        assert agent.last_result is not None
        assert len(agent.engine.tt) > 0

        agent.reset()
        assert len(agent.engine.tt) == 0
        assert agent.last_result is None

    def test_minimax_agent_plays_legal_house(self):
        board = [3, 0, 5, 1, 0, 2, 6, 2, 4, 0, 3, 1, 5, 4]
        house = MinimaxAgent(depth=2).move(board)
        assert board[house] > 0

    def test_minimax_agent_finished_position(self):
        assert MinimaxAgent(depth=3).move([0, 3, 0, 0, 0, 0, 10, 0, 0, 0, 0, 0, 0, 20]) == 1

    def test_random_agent_is_reproducible(self):
        board = [4, 0, 4, 0, 4, 0, 0, 4, 4, 4, 4, 4, 4, 0]
        agent = RandomAgent(seed=11)
        first = [agent.move(board) for _ in range(10)]
        agent.reset()
        second = [agent.move(board) for _ in range(10)]

        assert first == second
        assert set(first) <= {0, 2, 4}


class TestArena:
    """Test full games."""

    def test_random_game_completes(self):
        record = play_game(RandomAgent(seed=1), RandomAgent(seed=2))

        assert record.forfeit is None
        assert record.winner in (-1, 0, 1)
        assert sum(record.scores) == 48
        assert record.final_state[:6].sum() == 0
        assert record.final_state[7:13].sum() == 0
        assert record.num_moves == len(record.moves)

    def test_mtdf_beats_random(self):
        agent = MTDFAgent(SearchConfig(time_limit_ms=60_000, max_depth=3))
        record = play_game(agent, RandomAgent(seed=3))

        assert record.forfeit is None
        assert sum(record.scores) == 48
        assert record.winner == 1

    def test_mtdf_plays_ten_seed_game(self):
        record = play_game(fast_mtdf_agent(), RandomAgent(seed=6), seeds_per_house=10)

        assert record.forfeit is None
        assert sum(record.scores) == 120
        assert record.winner in (-1, 0, 1)

    def test_out_of_range_move_forfeits(self):
        record = play_game(FixedHouseAgent(9), RandomAgent(seed=0))

        assert record.forfeit == 1
        assert record.winner == -1
        assert record.num_moves == 0

    def test_empty_house_forfeits(self):
        """South's house 0 is still empty on its second turn."""
        record = play_game(FixedHouseAgent(0), FixedHouseAgent(0))

        assert record.moves == [(1, 0), (-1, 0)]
        assert record.forfeit == 1
        assert record.winner == -1
        assert np.array_equal(record.final_state, [0, 5, 5, 5, 5, 4, 0, 0, 5, 5, 5, 5, 4, 0])

    def test_match_alternates_sides(self):
        results = play_match(RandomAgent(seed=4), RandomAgent(seed=5), num_games=4)

        assert results['wins'] + results['losses'] + results['draws'] == 4
        assert results['forfeits'] == 0
        assert len(results['games']) == 4
