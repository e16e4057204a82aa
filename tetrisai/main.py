#!/usr/bin/env python3
"""
tetrisai: Tetris with an expectimax autoplayer.
Main entry point and command-line interface.
"""

import argparse
import logging
import time

from .ai.evaluation import BoardEvaluator
from .ai.search import PlacementSearch
from .core.storage import JsonScoreStore, MemoryScoreStore
from .game import Game, GameConfig
from .scheduler import TickScheduler


def build_game(args, **overrides) -> Game:
    """Create a game session from the shared command-line options."""
    config = GameConfig(rows=args.rows, cols=args.cols, tick_rate=args.tick_rate,
                        seed=args.seed, **overrides)
    store = JsonScoreStore(args.scores) if args.scores else MemoryScoreStore()
    return Game(config, store=store)


def play(args):
    """Open the tkinter window."""
    from .ui import launch

    launch(build_game(args, auto=args.auto))


def demo_game(args):
    """Run a headless demo game with the autoplayer."""
    print("tetrisai demo")
    print("=" * 50)

    game = build_game(args, paused=False, auto=True)
    scheduler = TickScheduler(game, interval=args.interval, ramp=False)
    shown = [0]

    def report(game):
        pieces = game.source.draws
        if pieces >= shown[0] + args.every:
            shown[0] = pieces
            print(f"\nPieces: {pieces}")
            print(str(game))
            print("-" * 30)

    start_time = time.time()
    while not game.over and (args.pieces is None or game.source.draws <= args.pieces):
        scheduler.run(max_ticks=1, on_tick=report)
    duration = time.time() - start_time

    print("\n" + "=" * 50)
    print("GAME OVER" if game.over else "PIECE LIMIT REACHED")
    print("=" * 50)
    stats = game.get_stats()
    print(f"Final Score: {stats['score']}")
    print(f"Lines Cleared: {stats['lines']}")
    print(f"Pieces: {stats['pieces']}")
    print(f"Ticks: {scheduler.ticks}")
    print(f"Duration: {duration:.2f} seconds")


def benchmark(args):
    """Run performance benchmarks."""
    print("tetrisai benchmark")
    print("=" * 50)

    game = build_game(args, paused=False)
    game.advance()
    evaluator = BoardEvaluator()
    search = PlacementSearch(game.source, evaluator)

    print("\nBenchmarking board evaluation...")
    grid = game.board.occupancy()
    start_time = time.time()
    for _ in range(args.evaluations):
        evaluator.evaluate(grid)
    eval_time = time.time() - start_time
    print(f"Board evaluation: {args.evaluations} evaluations in {eval_time:.3f}s "
          f"({args.evaluations / max(eval_time, 1e-9):.0f} eval/s)")

    print("\nBenchmarking placement search...")
    start_time = time.time()
    for _ in range(args.searches):
        search.best_move(game.board)
    search_time = time.time() - start_time
    print(f"Search: {args.searches} searches in {search_time:.3f}s "
          f"({args.searches / max(search_time, 1e-9):.1f} searches/s)")

    print("\nBenchmark completed")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="tetrisai: Tetris with an expectimax autoplayer")
    parser.add_argument('--rows', type=int, default=20, help='Board height')
    parser.add_argument('--cols', type=int, default=12, help='Board width')
    parser.add_argument('--tick-rate', type=int, default=8, help='Scheduler ticks per gravity step')
    parser.add_argument('--seed', type=int, default=None, help='Piece randomizer seed')
    parser.add_argument('--scores', default=None, help='JSON file for best score and lines')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging level')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    play_parser = subparsers.add_parser('play', help='Play in a tkinter window')
    play_parser.add_argument('--auto', action='store_true', help='Start in autoplay mode')

    demo_parser = subparsers.add_parser('demo', help='Run a headless autoplay game')
    demo_parser.add_argument('--pieces', type=int, default=None, help='Stop after this many pieces')
    demo_parser.add_argument('--every', type=int, default=25, help='Print the board every N pieces')
    demo_parser.add_argument('--interval', type=float, default=0.0, help='Seconds between ticks')

    benchmark_parser = subparsers.add_parser('benchmark', help='Run performance benchmarks')
    benchmark_parser.add_argument('--evaluations', type=int, default=1000,
                                  help='Number of board evaluations')
    benchmark_parser.add_argument('--searches', type=int, default=10,
                                  help='Number of placement searches')
    return parser


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    if args.command == 'play':
        play(args)
    elif args.command == 'demo':
        demo_game(args)
    elif args.command == 'benchmark':
        benchmark(args)
    else:
        parser.print_help()
        print("\nFor a quick demo, run: tetrisai demo")


if __name__ == "__main__":
    main()
