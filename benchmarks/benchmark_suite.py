"""
Benchmark suite for Reward Grid strategies.

Plays every strategy on the same sequence of seeded boards and compares:
- Mean final score (and spread)
- Best and worst board
- Wall-clock cost of the whole run

The strategies are ordered by sophistication, so each row should score at
least as well as the one above it on average.
"""

import argparse
from dataclasses import dataclass
from typing import Callable

from reward_grid import (
    BeamSearchStrategy,
    GreedyStrategy,
    GridConfig,
    RandomStrategy,
    Strategy,
    TimedBeamSearchStrategy,
    evaluate_strategy,
)


@dataclass
class BenchmarkEntry:
    """A strategy to benchmark, built fresh for each run."""
    name: str
    make: Callable[[], Strategy]


def default_entries(beam_width: int = 2, beam_depth: int = 100,
                    timed_width: int = 5,
                    time_threshold_ms: float = 10) -> list:
    return [
        BenchmarkEntry("random", lambda: RandomStrategy(seed=0)),
        BenchmarkEntry("greedy", GreedyStrategy),
        BenchmarkEntry(
            f"beam w={beam_width} d={beam_depth}",
            lambda: BeamSearchStrategy(beam_width, beam_depth),
        ),
        BenchmarkEntry(
            f"beam w={timed_width} t={time_threshold_ms}ms",
            lambda: TimedBeamSearchStrategy(timed_width, time_threshold_ms),
        ),
    ]


def run_benchmark(entry: BenchmarkEntry, game_number: int,
                  config: GridConfig, seed: int = 0) -> dict:
    """Run a single strategy over ``game_number`` boards."""
    result = evaluate_strategy(entry.make(), game_number=game_number,
                               config=config, seed=seed)
    return {
        "name": entry.name,
        "mean": result.mean,
        "std": result.std,
        "min": min(result.scores),
        "max": max(result.scores),
        "time_sec": result.elapsed,
    }


def run_all_benchmarks(game_number: int = 100,
                       config: GridConfig = GridConfig(),
                       seed: int = 0, verbose: bool = True, **kwargs):
    """Run all strategies and print a summary table."""
    print("=" * 72)
    print("  Reward Grid — Benchmark Suite")
    print(f"  {config.height}x{config.width} board, {config.end_turn} turns, "
          f"{game_number} games")
    print("=" * 72)

    results = []
    for entry in default_entries(**kwargs):
        r = run_benchmark(entry, game_number, config, seed=seed)
        results.append(r)
        if verbose:
            print(f"  {r['name']:24s} mean={r['mean']:8.2f}  "
                  f"std={r['std']:6.2f}  "
                  f"range=[{r['min']}, {r['max']}]  "
                  f"time={r['time_sec']:.1f}s")

    print("=" * 72)
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--games", type=int, default=100)
    parser.add_argument("--height", type=int, default=30)
    parser.add_argument("--width", type=int, default=40)
    parser.add_argument("--end-turn", type=int, default=100)
    parser.add_argument("--beam-width", type=int, default=2)
    parser.add_argument("--beam-depth", type=int, default=100)
    parser.add_argument("--timed-width", type=int, default=5)
    parser.add_argument("--time-ms", type=float, default=10)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args(argv)

    config = GridConfig(height=args.height, width=args.width,
                        end_turn=args.end_turn)
    return run_all_benchmarks(
        game_number=args.games,
        config=config,
        seed=args.seed,
        beam_width=args.beam_width,
        beam_depth=args.beam_depth,
        timed_width=args.timed_width,
        time_threshold_ms=args.time_ms,
    )


if __name__ == "__main__":
    main()
