"""
Reward Grid: move-selection strategies for a turn-based collection game.

An agent walks a grid of small rewards, collecting each cell it enters, for
a fixed number of turns. Strategies of increasing strength pick its moves:
uniform random, one-step greedy, fixed-depth beam search, and beam search
bounded by a wall-clock budget.
"""

from reward_grid.grid_env import (
    Coord,
    Direction,
    GridConfig,
    GridState,
    IllegalMoveError,
)
from reward_grid.strategies import Strategy, RandomStrategy, GreedyStrategy
from reward_grid.search import (
    BeamSearchStrategy,
    SearchResult,
    SearchStatus,
    TimedBeamSearchStrategy,
    TimeKeeper,
    beam_search,
    timed_beam_search,
)
from reward_grid.game import (
    EpisodeLog,
    EvaluationResult,
    NoMoveError,
    evaluate_strategy,
    play_game,
)

__version__ = "0.1.0"
__all__ = [
    "Coord",
    "Direction",
    "GridConfig",
    "GridState",
    "IllegalMoveError",
    "Strategy",
    "RandomStrategy",
    "GreedyStrategy",
    "BeamSearchStrategy",
    "TimedBeamSearchStrategy",
    "SearchResult",
    "SearchStatus",
    "TimeKeeper",
    "beam_search",
    "timed_beam_search",
    "EpisodeLog",
    "EvaluationResult",
    "NoMoveError",
    "evaluate_strategy",
    "play_game",
]
