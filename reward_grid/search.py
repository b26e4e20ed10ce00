"""
Beam search over cloned game states.

Both searches grow a tree of states one turn per layer:
1. Start the frontier with a clone of the current state.
2. Pop at most ``beam_width`` of the highest-scoring states from the frontier.
3. Expand each one: clone it, commit every legal move on the clone, and push
   the child onto the next layer's frontier.
4. Replace the frontier with the next layer and repeat.

Children created in the first layer are stamped with the move that produced
them, and every later descendant inherits the stamp. The search answers with
the stamp of the best surviving state, i.e. the first move of the best
continuation it found, not the continuation itself.

The fixed variant runs a set number of layers. The timed variant keeps going
until a TimeKeeper budget runs out, then falls back to the best state of the
last layer it finished.

Neither search expands a state that has reached the turn horizon. All states
in a layer share the same turn, so the search simply stops once the frontier
is terminal.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from reward_grid.grid_env import Coord, GridState
from reward_grid.strategies import Strategy

logger = logging.getLogger(__name__)


class SearchStatus(Enum):
    """How a search ended."""
    FOUND = "found"                  # A first move was chosen
    EXHAUSTED = "exhausted"          # Root already terminal, or frontier emptied
    NO_LEGAL_MOVE = "no_legal_move"  # Unfinished root with no in-bounds neighbour
    TIMEOUT = "timeout"              # Budget ran out before any layer completed


@dataclass
class SearchResult:
    """Outcome of a single beam search."""
    move: Optional[Coord]
    status: SearchStatus
    score: Optional[int] = None  # Score of the best state found
    depth: int = 0               # Layers fully completed
    expanded: int = 0            # States popped and expanded

    def __repr__(self) -> str:
        return (f"SearchResult(move={self.move}, status={self.status.value}, "
                f"score={self.score}, depth={self.depth}, "
                f"expanded={self.expanded})")


class TimeKeeper:
    """
    A wall-clock budget that starts when the keeper is created.

    Uses a monotonic clock, so system clock adjustments cannot shorten or
    extend the budget.
    """

    def __init__(self, time_threshold_ms: float):
        assert time_threshold_ms >= 0, "time threshold must be non-negative"
        self.start_time = time.perf_counter()
        self.time_threshold = time_threshold_ms / 1000.0

    def is_time_over(self) -> bool:
        return self.start_time + self.time_threshold <= time.perf_counter()


class Frontier:
    """
    Max-heap of states by score.

    Equal scores come out in the order they went in, so a search over the
    same state always breaks ties the same way.
    """

    def __init__(self):
        self._heap: List[Tuple[int, int, GridState]] = []
        self._counter = itertools.count()

    def push(self, state: GridState) -> None:
        heapq.heappush(self._heap, (-state.score, next(self._counter), state))

    def pop(self) -> GridState:
        return heapq.heappop(self._heap)[2]

    def peek(self) -> GridState:
        return self._heap[0][2]

    def __len__(self) -> int:
        return len(self._heap)


def _root_frontier(initial_state: GridState) -> Frontier:
    root = initial_state.clone()
    root.first_move = None
    frontier = Frontier()
    frontier.push(root)
    return frontier


def _expand(state: GridState, depth: int, next_frontier: Frontier) -> None:
    """Push one child per legal move; first-layer children get their stamp."""
    for move in state.legal_moves():
        child = state.clone()
        child.commit(move)
        if depth == 0:
            child.first_move = move
        next_frontier.push(child)


def _stuck_root(initial_state: GridState) -> Optional[SearchResult]:
    """A no-move result when an unfinished root has nowhere to go."""
    if initial_state.is_done() or initial_state.legal_moves():
        return None
    logger.warning("no legal move from %s at turn %d",
                   initial_state.position, initial_state.turn)
    return SearchResult(None, SearchStatus.NO_LEGAL_MOVE)


def _is_finished(frontier: Frontier) -> bool:
    return len(frontier) == 0 or frontier.peek().is_done()


def _result(best: Optional[GridState], depth: int, expanded: int,
            timed_out: bool = False) -> SearchResult:
    if best is None or best.first_move is None:
        status = SearchStatus.TIMEOUT if timed_out else SearchStatus.EXHAUSTED
        return SearchResult(None, status, depth=depth, expanded=expanded)
    return SearchResult(best.first_move, SearchStatus.FOUND,
                        score=best.score, depth=depth, expanded=expanded)


# ---------------------------------------------------------------------------
# Fixed width x fixed depth
# ---------------------------------------------------------------------------

def beam_search(initial_state: GridState, beam_width: int,
                beam_depth: int) -> SearchResult:
    """
    Beam search limited to ``beam_depth`` layers.

    Parameters
    ----------
    initial_state : GridState
        The position to move from. Never modified.
    beam_width : int
        Maximum number of states expanded per layer.
    beam_depth : int
        Maximum number of turns simulated ahead.

    Returns
    -------
    SearchResult
        ``move`` is the first move of the best state in the final layer,
        or ``None`` when there was nothing to expand.
    """
    assert beam_width >= 1, "beam_width must be positive"
    assert beam_depth >= 1, "beam_depth must be positive"
    stuck = _stuck_root(initial_state)
    if stuck is not None:
        return stuck

    frontier = _root_frontier(initial_state)
    expanded = 0
    completed = 0

    for depth in range(beam_depth):
        if _is_finished(frontier):
            break
        next_frontier = Frontier()
        for _ in range(beam_width):
            if not frontier:
                break
            _expand(frontier.pop(), depth, next_frontier)
            expanded += 1
        frontier = next_frontier
        completed += 1

    best = frontier.peek() if frontier else None
    result = _result(best, completed, expanded)
    logger.debug("beam search (width=%d, depth=%d): %r",
                 beam_width, beam_depth, result)
    return result


# ---------------------------------------------------------------------------
# Fixed width, time-bounded depth
# ---------------------------------------------------------------------------

def timed_beam_search(initial_state: GridState, beam_width: int,
                      time_threshold_ms: Optional[float] = None,
                      time_keeper: Optional[TimeKeeper] = None
                      ) -> SearchResult:
    """
    Beam search that deepens until a wall-clock budget runs out.

    The budget is checked before every pop. When it has run out, the search
    answers with the best state of the last fully completed layer; a
    half-expanded layer is never used. If no layer has completed yet the
    result is ``SearchStatus.TIMEOUT`` with no move.

    The search also stops on its own once the frontier reaches the turn
    horizon or empties.

    Parameters
    ----------
    initial_state : GridState
        The position to move from. Never modified.
    beam_width : int
        Maximum number of states expanded per layer.
    time_threshold_ms : float, optional
        Budget in milliseconds, measured from the start of the call.
        Required unless ``time_keeper`` is given.
    time_keeper : TimeKeeper, optional
        An already-running budget to use instead of starting a new one.
        Takes precedence over ``time_threshold_ms``.
    """
    assert beam_width >= 1, "beam_width must be positive"
    if time_keeper is None:
        assert time_threshold_ms is not None, \
            "either time_threshold_ms or time_keeper is required"
        time_keeper = TimeKeeper(time_threshold_ms)
    stuck = _stuck_root(initial_state)
    if stuck is not None:
        return stuck

    frontier = _root_frontier(initial_state)
    best: Optional[GridState] = None
    expanded = 0

    for depth in itertools.count():
        if _is_finished(frontier):
            break
        next_frontier = Frontier()
        for _ in range(beam_width):
            if time_keeper.is_time_over():
                result = _result(best, depth, expanded, timed_out=True)
                logger.debug("timed beam search hit %.1f ms budget: %r",
                             time_keeper.time_threshold * 1000, result)
                return result
            if not frontier:
                break
            _expand(frontier.pop(), depth, next_frontier)
            expanded += 1
        frontier = next_frontier
        if frontier:
            best = frontier.peek()

    result = _result(best, depth, expanded)
    logger.debug("timed beam search finished before budget: %r", result)
    return result


# ---------------------------------------------------------------------------
# Strategy wrappers
# ---------------------------------------------------------------------------

class BeamSearchStrategy(Strategy):
    """Chooses each move with a fixed width x depth beam search."""

    def __init__(self, beam_width: int = 2, beam_depth: int = 100):
        assert beam_width >= 1, "beam_width must be positive"
        assert beam_depth >= 1, "beam_depth must be positive"
        self.beam_width = beam_width
        self.beam_depth = beam_depth
        self.last_result: Optional[SearchResult] = None

    def select(self, state: GridState) -> Optional[Coord]:
        self.last_result = beam_search(state, self.beam_width, self.beam_depth)
        return self.last_result.move

    def __repr__(self) -> str:
        return (f"BeamSearchStrategy(beam_width={self.beam_width}, "
                f"beam_depth={self.beam_depth})")


class TimedBeamSearchStrategy(Strategy):
    """Chooses each move with a beam search bounded by a time budget."""

    def __init__(self, beam_width: int = 5, time_threshold_ms: float = 10):
        assert beam_width >= 1, "beam_width must be positive"
        assert time_threshold_ms >= 0, "time threshold must be non-negative"
        self.beam_width = beam_width
        self.time_threshold_ms = time_threshold_ms
        self.last_result: Optional[SearchResult] = None

    def select(self, state: GridState) -> Optional[Coord]:
        self.last_result = timed_beam_search(
            state, self.beam_width, self.time_threshold_ms
        )
        return self.last_result.move

    def __repr__(self) -> str:
        return (f"TimedBeamSearchStrategy(beam_width={self.beam_width}, "
                f"time_threshold_ms={self.time_threshold_ms})")
