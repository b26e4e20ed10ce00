"""
Reward grid environment — the state every strategy plays on.

A board is an H x W grid of small non-negative rewards. A single agent
starts on an empty cell and moves one step orthogonally per turn, collecting
(and consuming) the reward of each cell it enters. The episode ends after a
fixed number of turns; the goal is to maximize the collected total.

The state supports two kinds of transition:
- commit(move): apply the move in place, advancing game time
- probe(move):  the score the move would yield, without touching the state

Search strategies explore by cloning a state and committing moves on the
clone. Clones own their reward array, so no lineage ever sees another
lineage's consumed cells.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np


# ---------------------------------------------------------------------------
# Coordinates and directions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Coord:
    """A cell on the board. x is the column, y is the row."""
    x: int
    y: int

    def __repr__(self) -> str:
        return f"Coord({self.x}, {self.y})"


class Direction(IntEnum):
    """The four orthogonal steps, in legal-move enumeration order."""
    LEFT = 0
    RIGHT = 1
    UP = 2
    DOWN = 3

    def delta(self) -> Tuple[int, int]:
        """Column, row displacement for this direction."""
        return {
            Direction.LEFT: (-1, 0),
            Direction.RIGHT: (1, 0),
            Direction.UP: (0, -1),
            Direction.DOWN: (0, 1),
        }[self]

    @staticmethod
    def all() -> List["Direction"]:
        return [Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN]


class IllegalMoveError(ValueError):
    """Raised when a move is committed that the rules do not allow."""


@dataclass(frozen=True)
class GridConfig:
    """Board dimensions and turn horizon."""
    height: int = 30
    width: int = 40
    end_turn: int = 100
    max_reward: int = 9  # Rendered as a single digit

    def __post_init__(self):
        assert self.height >= 2, "height must be at least 2"
        assert self.width >= 2, "width must be at least 2"
        assert self.end_turn >= 0, "end_turn must be non-negative"
        assert 0 <= self.max_reward <= 9, "max_reward must be a single digit"


# ---------------------------------------------------------------------------
# Game state
# ---------------------------------------------------------------------------

class GridState:
    """
    One board position: rewards, agent position, score, and turn count.

    Parameters
    ----------
    rewards : array-like
        Integer rewards of shape (height, width), indexed rewards[y, x].
    position : Coord or (x, y) tuple
        The agent's starting cell. Its reward is zeroed.
    config : GridConfig, optional
        Dimensions must match the shape of ``rewards``. Defaults to a
        config derived from the grid's shape with the default horizon.
    """

    def __init__(self, rewards, position: Coord,
                 config: Optional[GridConfig] = None):
        grid = np.array(rewards, dtype=np.int64)
        if grid.ndim != 2:
            raise ValueError(f"rewards must be 2-D, got shape {grid.shape}")
        if config is None:
            config = GridConfig(height=grid.shape[0], width=grid.shape[1])
        if grid.shape != (config.height, config.width):
            raise ValueError(
                f"rewards shape {grid.shape} does not match "
                f"config ({config.height}, {config.width})"
            )
        if grid.size and (grid.min() < 0 or grid.max() > config.max_reward):
            raise ValueError(
                f"rewards must lie in [0, {config.max_reward}]"
            )

        if not isinstance(position, Coord):
            if len(position) != 2:
                raise ValueError(f"position must be (x, y), got {position!r}")
            position = Coord(int(position[0]), int(position[1]))

        self.config = config
        self.rewards = grid
        self.turn = 0
        self.position = position
        self.score = 0
        self.first_move: Optional[Coord] = None

        if not self._in_bounds(position.x, position.y):
            raise ValueError(f"start position {position} is off the board")
        self.rewards[position.y, position.x] = 0

    @classmethod
    def from_seed(cls, seed: int,
                  config: Optional[GridConfig] = None) -> GridState:
        """
        Build a random board from a seed byte.

        The start cell is drawn first (column, then row), then every reward
        in row-major order. The same seed and config always give the same
        board.
        """
        if not 0 <= seed <= 255:
            raise ValueError(f"seed must be a byte value, got {seed}")
        config = config or GridConfig()
        rng = np.random.RandomState(seed)

        x = int(rng.randint(config.width))
        y = int(rng.randint(config.height))
        rewards = rng.randint(0, config.max_reward + 1,
                              size=(config.height, config.width))
        return cls(rewards, Coord(x, y), config=config)

    # --- Queries ---

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def width(self) -> int:
        return self.config.width

    def is_done(self) -> bool:
        return self.turn == self.config.end_turn

    def reward_at(self, coord: Coord) -> int:
        return int(self.rewards[coord.y, coord.x])

    def legal_moves(self) -> List[Coord]:
        """In-bounds orthogonal neighbours, ordered left, right, up, down."""
        moves = []
        for direction in Direction.all():
            dx, dy = direction.delta()
            nx, ny = self.position.x + dx, self.position.y + dy
            if self._in_bounds(nx, ny):
                moves.append(Coord(nx, ny))
        return moves

    # --- Transitions ---

    def commit(self, move: Coord) -> None:
        """Move the agent, collect and consume the reward, advance the turn."""
        if self.is_done():
            raise IllegalMoveError(
                f"game is over at turn {self.turn}; cannot move to {move}"
            )
        if not self._in_bounds(move.x, move.y):
            raise IllegalMoveError(f"{move} is off the board")
        if abs(move.x - self.position.x) + abs(move.y - self.position.y) != 1:
            raise IllegalMoveError(
                f"{move} is not adjacent to {self.position}"
            )

        self.score += int(self.rewards[move.y, move.x])
        self.rewards[move.y, move.x] = 0
        self.position = move
        self.turn += 1

    def probe(self, move: Coord) -> int:
        """The score committing ``move`` would give. Does not mutate."""
        return self.score + int(self.rewards[move.y, move.x])

    def clone(self) -> GridState:
        """An independent copy; mutating it never affects this state."""
        other = GridState.__new__(GridState)
        other.config = self.config
        other.rewards = self.rewards.copy()
        other.turn = self.turn
        other.position = self.position
        other.score = self.score
        other.first_move = self.first_move
        return other

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.config.width and 0 <= y < self.config.height

    # --- Presentation ---

    def render(self) -> str:
        """Turn and score headers, then the board with the agent as '@'."""
        lines = [f"turn: {self.turn}", f"score: {self.score}"]
        for y in range(self.config.height):
            row_str = ""
            for x in range(self.config.width):
                if x == self.position.x and y == self.position.y:
                    row_str += "@"
                else:
                    row_str += str(int(self.rewards[y, x]))
            lines.append(row_str)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (f"GridState(turn={self.turn}, score={self.score}, "
                f"position={self.position})")
