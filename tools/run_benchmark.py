#!/usr/bin/env python3
"""
Puzzle and Self-Play Benchmark Runner

Runs the puzzle suite at multiple depths, then plays AI-vs-AI matches
between difficulty levels to check that stronger settings win more.

Usage:
    python tools/run_benchmark.py [--depths 1,2,4] [--games 10] [--matchups easy:hard,hard:easy] [--export positions.npz] [--verbose]
"""

import sys
import argparse
import logging
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from sheeps_kittens.evaluation.heuristic import HeuristicEvaluator
from sheeps_kittens.search.difficulty import Difficulty
from sheeps_kittens.utils.testing import run_puzzles, run_self_play, save_match_positions


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def run_puzzle_benchmark(depths: list[int], verbose: bool = False):
    """
    Run the puzzle suite at multiple depths.

    Args:
        depths: List of depths to test
        verbose: If True, print detailed results for each position
    """
    evaluator = HeuristicEvaluator()

    print("=" * 80)
    print("PUZZLE BENCHMARK - Sheeps & Kittens Engine")
    print("=" * 80)
    print("Evaluator: Heuristic (captures, mobility, centralization)")
    print("Search: Minimax with Alpha-Beta Pruning")
    print(f"Depths: {depths}")
    print("=" * 80)

    all_results = []

    for depth in depths:
        start_time = time.time()
        result = run_puzzles(evaluator=evaluator, depth=depth, verbose=verbose)
        total_time = time.time() - start_time

        total_nodes = sum(r.nodes_searched for r in result['results'])
        nodes_per_sec = total_nodes / total_time if total_time > 0 else 0

        all_results.append({
            'depth': depth,
            'score': result['score'],
            'total': result['total'],
            'percentage': result['percentage'],
            'avg_time': result['avg_time'],
            'nodes_per_sec': nodes_per_sec,
            'results': result['results'],
        })

        failed = [r for r in result['results'] if not r.correct]
        if failed and verbose:
            print("\n  Failed positions:")
            for r in failed:
                print(f"    {r.position.id}: Expected {r.position.best_moves}, got {r.found_move}")

    print("\n" + "=" * 80)
    print("SUMMARY TABLE")
    print("=" * 80)
    print(f"{'Depth':<8} {'Correct':<12} {'%':<8} {'Avg Time':<12} {'Nodes/sec':<15}")
    print("-" * 80)

    for r in all_results:
        print(f"{r['depth']:<8} {r['score']}/{r['total']:<10} {r['percentage']:<7.1f}% {format_time(r['avg_time']):<12} {r['nodes_per_sec']:>12,.0f}")

    return all_results


def run_match_benchmark(matchups: list[tuple], games: int, max_plies: int, seed: int):
    """
    Play self-play matches for each (sheep level, kitten level) pair.

    Args:
        matchups: List of (sheep_difficulty, kitten_difficulty) pairs
        games: Games per matchup
        max_plies: Ply limit per game
        seed: Seed for the shared random source
    """
    print("\n" + "=" * 80)
    print("SELF-PLAY")
    print("=" * 80)
    print(f"{'Sheep':<10} {'Kittens':<10} {'Sheep W':<9} {'Kitten W':<9} {'Draws':<7} {'Avg plies':<10} {'Avg capt.':<10}")
    print("-" * 80)

    all_results = []

    for sheep_level, kitten_level in matchups:
        result = run_self_play(sheep_level, kitten_level, games=games, max_plies=max_plies, seed=seed)
        all_results.append(result)
        print(
            f"{sheep_level.value:<10} {kitten_level.value:<10} {result['sheep_wins']:<9} "
            f"{result['kitten_wins']:<9} {result['draws']:<7} {result['avg_plies']:<10.1f} "
            f"{result['avg_captured']:<10.2f}"
        )

    print("=" * 80)
    return all_results


def parse_matchups(text: str) -> list[tuple]:
    """Parse "easy:hard,hard:easy" into (Difficulty, Difficulty) pairs."""
    matchups = []
    for item in text.split(","):
        sheep_level, _, kitten_level = item.strip().partition(":")
        matchups.append((Difficulty(sheep_level), Difficulty(kitten_level)))
    return matchups


def main():
    parser = argparse.ArgumentParser(
        description="Run the puzzle suite and self-play matches"
    )
    parser.add_argument(
        "--depths",
        type=str,
        default="1,2,4",
        help="Comma-separated list of depths to test (default: 1,2,4)"
    )
    parser.add_argument(
        "--games",
        type=int,
        default=10,
        help="Self-play games per matchup, 0 to skip (default: 10)"
    )
    parser.add_argument(
        "--matchups",
        type=str,
        default="easy:medium,medium:easy",
        help="Comma-separated sheep:kitten difficulty pairs (default: easy:medium,medium:easy)"
    )
    parser.add_argument(
        "--max-plies",
        type=int,
        default=200,
        help="Ply limit per self-play game (default: 200)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for easy-mode moves (default: 0)"
    )
    parser.add_argument(
        "--export",
        type=Path,
        default=None,
        help="Write self-play positions as numpy feature planes to this .npz file"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print detailed results and debug logs"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S',
    )

    try:
        depths = [int(d.strip()) for d in args.depths.split(",")]
        matchups = parse_matchups(args.matchups)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        run_puzzle_benchmark(depths, verbose=args.verbose)
        if args.games > 0:
            match_results = run_match_benchmark(matchups, args.games, args.max_plies, args.seed)
            if args.export:
                games = [game for result in match_results for game in result['results']]
                count = save_match_positions(games, args.export)
                print(f"\nExported {count:,} positions to {args.export}")
    except KeyboardInterrupt:
        print("\n\nBenchmark interrupted by user")
        sys.exit(1)
    except Exception as e:
        logging.getLogger(__name__).exception(f"Error running benchmark: {e}")
        sys.exit(1)

    print("\nBenchmark complete!")


if __name__ == "__main__":
    main()
