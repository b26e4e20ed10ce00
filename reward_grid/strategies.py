"""
Move-selection strategies that need no lookahead beyond one step.

Every strategy exposes ``select(state) -> Optional[Coord]``. ``None`` means
"no move": the state offered no legal move (or, for the search strategies in
``reward_grid.search``, the search produced nothing usable). Strategies never
substitute a fallback move; deciding what to do with ``None`` is the caller's
job.
"""

from __future__ import annotations

import random
from typing import Optional

from reward_grid.grid_env import Coord, GridState


class Strategy:
    """Base class for move-selection strategies."""

    def select(self, state: GridState) -> Optional[Coord]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class RandomStrategy(Strategy):
    """Picks a legal move uniformly at random."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self.rng = random.Random(seed)

    def select(self, state: GridState) -> Optional[Coord]:
        moves = state.legal_moves()
        if not moves:
            return None
        return self.rng.choice(moves)

    def __repr__(self) -> str:
        return f"RandomStrategy(seed={self.seed})"


class GreedyStrategy(Strategy):
    """
    One-step lookahead: the legal move with the highest probed score.

    Ties go to the earliest move in legal-move order, since a later move
    only replaces the running best when strictly better.
    """

    def select(self, state: GridState) -> Optional[Coord]:
        best_score = None
        best_move = None
        for move in state.legal_moves():
            next_score = state.probe(move)
            if best_score is None or best_score < next_score:
                best_score = next_score
                best_move = move
        return best_move
