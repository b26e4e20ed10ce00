"""
Quick start example for Reward Grid.

Demonstrates the core workflow:
1. Build a seeded board
2. Play it turn by turn with the greedy strategy, printing every turn
3. Replay the same board with beam search and compare final scores
"""

from reward_grid import (
    BeamSearchStrategy,
    GreedyStrategy,
    GridConfig,
    GridState,
    play_game,
)


def main():
    config = GridConfig(height=5, width=5, end_turn=10)
    seed = 1

    print("Reward Grid — Quick Start")
    print("=" * 50)
    print(f"Board: {config.height}x{config.width}, "
          f"{config.end_turn} turns, seed={seed}")
    print()

    # --- Greedy, shown turn by turn ---
    print("Greedy:")
    greedy_log = play_game(GridState.from_seed(seed, config),
                           GreedyStrategy(), verbose=True)

    # --- Beam search on the same board ---
    beam_log = play_game(GridState.from_seed(seed, config),
                         BeamSearchStrategy(beam_width=3, beam_depth=10))

    print()
    print(f"  Greedy final score:      {greedy_log.final_score}")
    print(f"  Beam search final score: {beam_log.final_score}")
    print(f"  Beam search path:        "
          f"{' '.join(f'({c.x},{c.y})' for c in beam_log.path)}")


if __name__ == "__main__":
    main()
