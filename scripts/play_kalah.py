#!/usr/bin/env python3
"""
Run Kalah matches between the MTD-f agent and a baseline opponent.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from kalah_search.agents import MTDFAgent, MinimaxAgent, RandomAgent
from kalah_search.arena import play_game, play_match
from kalah_search.config import SearchConfig
from kalah_search.game import NUM_HOUSES


def build_opponent(args, max_seeds):
    if args.opponent == 'random':
        return RandomAgent(seed=args.seed)
    if args.opponent == 'minimax':
        return MinimaxAgent(depth=args.minimax_depth)
    return MTDFAgent(SearchConfig(time_limit_ms=args.time_ms, zobrist_seed=None, max_seeds=max_seeds))


def main():
    parser = argparse.ArgumentParser(description='Kalah MTD-f matches')
    parser.add_argument('--opponent', choices=['random', 'minimax', 'mtdf'], default='minimax')
    parser.add_argument('--games', type=int, default=10, help='Number of games (sides alternate)')
    parser.add_argument('--seeds', type=int, default=4, help='Seeds per house')
    parser.add_argument('--time-ms', type=int, default=100, help='MTD-f time budget per move')
    parser.add_argument('--max-depth', type=int, default=100, help='MTD-f depth cap')
    parser.add_argument('--minimax-depth', type=int, default=4)
    parser.add_argument('--seed', type=int, default=None, help='Random opponent seed')
    parser.add_argument('--show', action='store_true', help='Print every move of a single game')
    parser.add_argument('--log-level', default='WARNING')
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format='%(asctime)s %(name)s %(levelname)s %(message)s',
    )

    max_seeds = 2 * NUM_HOUSES * args.seeds
    agent = MTDFAgent(SearchConfig(time_limit_ms=args.time_ms, max_depth=args.max_depth, max_seeds=max_seeds))
    opponent = build_opponent(args, max_seeds)

    if args.show:
        record = play_game(agent, opponent, seeds_per_house=args.seeds, verbose=True)
        print(f"\nFinal score: {record.scores[0]}-{record.scores[1]} after {record.num_moves} moves")
        return

    results = play_match(agent, opponent, num_games=args.games, seeds_per_house=args.seeds, verbose=True)

    print("=" * 60)
    print(f"{agent.name()} vs {opponent.name()}")
    print("=" * 60)
    print(f"  Wins:     {results['wins']}")
    print(f"  Losses:   {results['losses']}")
    print(f"  Draws:    {results['draws']}")
    print(f"  Forfeits: {results['forfeits']}")
    margins = [
        (r.scores[0] - r.scores[1]) * (1 if i % 2 == 0 else -1)
        for i, r in enumerate(results['games'])
    ]
    if margins:
        print(f"  Mean seed margin: {sum(margins) / len(margins):+.1f}")


if __name__ == '__main__':
    main()
