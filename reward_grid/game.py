"""
Driving loop and evaluation harness.

play_game runs one episode:

    ask strategy for a move → commit it → repeat until the horizon

evaluate_strategy plays many independently seeded boards with the same
strategy and reports the distribution of final scores. Board seeds are drawn
from a fixed-seed generator, so every strategy evaluated with the same seed
faces the same sequence of boards.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from reward_grid.grid_env import Coord, GridConfig, GridState
from reward_grid.strategies import Strategy


class NoMoveError(RuntimeError):
    """A strategy returned no move for a state that is not finished."""


@dataclass
class EpisodeLog:
    """Record of a single episode."""
    final_score: int
    turns: int
    path: List[Coord]
    moves: List[Coord]
    scores: List[int]  # Score after each turn, starting with the initial 0


@dataclass
class EvaluationResult:
    """Final scores of one strategy over many boards."""
    strategy: str
    scores: List[int] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def game_number(self) -> int:
        return len(self.scores)

    @property
    def mean(self) -> float:
        return float(np.mean(self.scores)) if self.scores else 0.0

    @property
    def std(self) -> float:
        return float(np.std(self.scores)) if self.scores else 0.0

    def summary(self) -> str:
        lines = [
            "═" * 55,
            f"  {self.strategy} — Evaluation Result",
            "═" * 55,
            f"  Games:         {self.game_number}",
            f"  Mean score:    {self.mean:.2f}",
            f"  Std score:     {self.std:.2f}",
        ]
        if self.scores:
            lines.append(f"  Min / max:     {min(self.scores)} / {max(self.scores)}")
        lines.append(f"  Time:          {self.elapsed:.2f}s")
        lines.append("═" * 55)
        return "\n".join(lines)


def play_game(state: GridState, strategy: Strategy,
              verbose: bool = False) -> EpisodeLog:
    """
    Drive ``state`` to the turn horizon, mutating it in place.

    Raises
    ------
    NoMoveError
        If the strategy returns no move before the horizon. The episode is
        abandoned; there is no retry.
    """
    path = [state.position]
    moves: List[Coord] = []
    scores = [state.score]

    if verbose:
        print(state.render())

    while not state.is_done():
        move = strategy.select(state)
        if move is None:
            detail = ""
            last_result = getattr(strategy, "last_result", None)
            if last_result is not None:
                detail = f" ({last_result.status.value})"
            raise NoMoveError(
                f"{strategy!r} found no move at turn {state.turn}{detail}"
            )
        state.commit(move)
        moves.append(move)
        path.append(move)
        scores.append(state.score)

        if verbose:
            print(state.render())

    return EpisodeLog(
        final_score=state.score,
        turns=state.turn,
        path=path,
        moves=moves,
        scores=scores,
    )


def evaluate_strategy(strategy: Strategy, game_number: int = 100,
                      config: Optional[GridConfig] = None, seed: int = 0,
                      verbose: bool = False) -> EvaluationResult:
    """
    Play ``game_number`` seeded boards with ``strategy``.

    Parameters
    ----------
    strategy : Strategy
        The strategy to evaluate. Stateful strategies (e.g. RandomStrategy)
        keep their state across games.
    game_number : int
        Number of boards to play.
    config : GridConfig, optional
        Board dimensions and horizon.
    seed : int
        Seed for the generator that draws each board's seed byte.
    verbose : bool
        Print the final score of every tenth game.
    """
    assert game_number >= 1, "game_number must be positive"
    config = config or GridConfig()
    board_rng = np.random.RandomState(seed)
    result = EvaluationResult(strategy=repr(strategy))

    t0 = time.perf_counter()
    for game in range(game_number):
        board_seed = int(board_rng.randint(256))
        state = GridState.from_seed(board_seed, config)
        log = play_game(state, strategy)
        result.scores.append(log.final_score)

        if verbose and game % 10 == 0:
            print(f"  [game {game:4d}] seed={board_seed:3d}  "
                  f"score={log.final_score:4d}  "
                  f"mean={np.mean(result.scores):7.2f}")
    result.elapsed = time.perf_counter() - t0

    return result
