"""
Match driver for Kalah agents.

Each agent only ever sees the board from its own side, with its houses at
0-5. An answer outside 0-5 or naming an empty house forfeits the game.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from kalah_search.agents import MancalaAgent
from kalah_search.game.kalah import Kalah, is_terminal, render, side_totals, sweep


logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    """
    Outcome of one game.

    Attributes:
        winner: 1 if south won, -1 if north won, 0 for a draw
        scores: Final (south, north) store counts after sweeping
        num_moves: Sows played, extra turns included
        forfeit: Player (1 or -1) that forfeited, None if the game was played out
        moves: (player, house) for every sow
        final_state: Board at the end, swept unless the game was forfeited
    """
    winner: int
    scores: Tuple[int, int]
    num_moves: int
    forfeit: Optional[int]
    moves: List[Tuple[int, int]]
    final_state: np.ndarray


def _is_legal(game: Kalah, state, action, player) -> bool:
    if isinstance(action, bool) or not isinstance(action, (int, np.integer)):
        return False
    if not 0 <= action < game.num_houses:
        return False
    return bool(game.get_valid_moves(state, player)[action])


def play_game(
    south_agent: MancalaAgent,
    north_agent: MancalaAgent,
    seeds_per_house: int = 4,
    verbose: bool = False,
) -> GameRecord:
    """
    Play one game, south moving first.

    Returns:
        GameRecord for the game
    """
    game = Kalah(seeds_per_house=seeds_per_house)
    agents = {1: south_agent, -1: north_agent}
    for agent in agents.values():
        agent.reset()

    state = game.get_initial_state()
    player = 1
    moves = []

    while not is_terminal(state):
        agent = agents[player]
        view = game.change_perspective(state, player)
        action = agent.move([int(seeds) for seeds in view])

        if not _is_legal(game, state, action, player):
            logger.warning("%s forfeits with illegal move %r", agent.name(), action)
            south, north = side_totals(state)
            return GameRecord(
                winner=-player,
                scores=(south, north),
                num_moves=len(moves),
                forfeit=player,
                moves=moves,
                final_state=state,
            )

        outcome = game.play(state, int(action), player)
        state = outcome.state
        moves.append((player, int(action)))

        if verbose:
            print(f"{agent.name()} ({'south' if player == 1 else 'north'}) plays house {action}"
                  f"{' and moves again' if outcome.extra_turn else ''}")
            print(render(state))

        if not outcome.extra_turn:
            player = game.get_opponent(player)

    final_state = sweep(state)
    scores = side_totals(final_state)
    value, _ = game.get_value_and_terminated(final_state, 1)

    logger.info("Game over after %d moves: %d-%d", len(moves), scores[0], scores[1])

    return GameRecord(
        winner=value,
        scores=scores,
        num_moves=len(moves),
        forfeit=None,
        moves=moves,
        final_state=final_state,
    )


def play_match(
    agent_a: MancalaAgent,
    agent_b: MancalaAgent,
    num_games: int = 2,
    seeds_per_house: int = 4,
    verbose: bool = False,
) -> dict:
    """
    Play ``num_games`` games, alternating who moves first.

    Returns:
        Dictionary with wins/losses/draws/forfeits from agent_a's point of view
        and the list of GameRecords
    """
    results = {'wins': 0, 'losses': 0, 'draws': 0, 'forfeits': 0, 'games': []}

    iterator = tqdm(range(num_games), desc="Games") if verbose else range(num_games)
    for game_num in iterator:
        a_is_south = game_num % 2 == 0
        if a_is_south:
            record = play_game(agent_a, agent_b, seeds_per_house)
        else:
            record = play_game(agent_b, agent_a, seeds_per_house)

        a_player = 1 if a_is_south else -1
        if record.forfeit == a_player:
            results['forfeits'] += 1

        if record.winner == a_player:
            results['wins'] += 1
        elif record.winner == 0:
            results['draws'] += 1
        else:
            results['losses'] += 1

        results['games'].append(record)

    return results
