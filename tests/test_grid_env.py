"""Tests for the reward grid environment."""

import unittest

import numpy as np

from reward_grid.grid_env import (
    Coord, Direction, GridConfig, GridState, IllegalMoveError,
)
from reward_grid.strategies import RandomStrategy


def make_state(rewards, position, end_turn=10):
    grid = np.array(rewards)
    config = GridConfig(height=grid.shape[0], width=grid.shape[1],
                        end_turn=end_turn)
    return GridState(grid, position, config=config)


class TestCoordAndDirection(unittest.TestCase):
    """Test coordinate values and direction mechanics."""

    def test_coord_equality(self):
        self.assertEqual(Coord(1, 2), Coord(1, 2))
        self.assertNotEqual(Coord(1, 2), Coord(2, 1))
        self.assertEqual(len({Coord(0, 0), Coord(0, 0), Coord(1, 0)}), 2)

    def test_direction_deltas(self):
        self.assertEqual(Direction.LEFT.delta(), (-1, 0))
        self.assertEqual(Direction.RIGHT.delta(), (1, 0))
        self.assertEqual(Direction.UP.delta(), (0, -1))
        self.assertEqual(Direction.DOWN.delta(), (0, 1))

    def test_direction_order(self):
        self.assertEqual(
            Direction.all(),
            [Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN],
        )


class TestGridConfig(unittest.TestCase):

    def test_defaults(self):
        config = GridConfig()
        self.assertEqual((config.height, config.width, config.end_turn),
                         (30, 40, 100))

    def test_rejects_degenerate_grid(self):
        with self.assertRaises(AssertionError):
            GridConfig(height=1, width=5)
        with self.assertRaises(AssertionError):
            GridConfig(height=5, width=1)

    def test_rejects_negative_horizon(self):
        with self.assertRaises(AssertionError):
            GridConfig(end_turn=-1)


class TestConstruction(unittest.TestCase):
    """Test explicit and seeded board construction."""

    def test_start_cell_is_zeroed(self):
        state = make_state([[5, 5], [5, 5]], Coord(1, 0))
        self.assertEqual(state.reward_at(Coord(1, 0)), 0)
        self.assertEqual(state.reward_at(Coord(0, 0)), 5)
        self.assertEqual(state.score, 0)
        self.assertEqual(state.turn, 0)
        self.assertIsNone(state.first_move)

    def test_shape_mismatch(self):
        with self.assertRaises(ValueError):
            GridState(np.zeros((2, 3)), Coord(0, 0),
                      config=GridConfig(height=3, width=3))

    def test_reward_out_of_range(self):
        with self.assertRaises(ValueError):
            make_state([[0, 10], [1, 1]], Coord(0, 0))
        with self.assertRaises(ValueError):
            make_state([[0, -1], [1, 1]], Coord(0, 0))

    def test_start_off_board(self):
        with self.assertRaises(ValueError):
            make_state([[0, 1], [1, 1]], Coord(2, 0))

    def test_start_as_tuple(self):
        state = make_state([[5, 5], [5, 5]], (1, 0))
        self.assertEqual(state.position, Coord(1, 0))
        self.assertEqual(state.reward_at(Coord(1, 0)), 0)
        self.assertEqual(state.legal_moves(), [Coord(0, 0), Coord(1, 1)])

    def test_start_malformed(self):
        with self.assertRaises(ValueError):
            make_state([[5, 5], [5, 5]], (1, 0, 0))

    def test_seeded_board_is_reproducible(self):
        """A 3x4 board with horizon 4 is identical across constructions."""
        config = GridConfig(height=3, width=4, end_turn=4)
        a = GridState.from_seed(7, config)
        b = GridState.from_seed(7, config)
        self.assertEqual(a.position, b.position)
        np.testing.assert_array_equal(a.rewards, b.rewards)
        self.assertEqual(a.rewards.shape, (3, 4))

    def test_seeded_board_values(self):
        config = GridConfig(height=3, width=4, end_turn=4)
        for seed in range(20):
            state = GridState.from_seed(seed, config)
            self.assertEqual(state.reward_at(state.position), 0)
            self.assertTrue(0 <= state.position.x < 4)
            self.assertTrue(0 <= state.position.y < 3)
            self.assertGreaterEqual(state.rewards.min(), 0)
            self.assertLessEqual(state.rewards.max(), 9)

    def test_seeds_give_different_boards(self):
        config = GridConfig(height=3, width=4, end_turn=4)
        boards = {GridState.from_seed(s, config).rewards.tobytes()
                  for s in range(10)}
        self.assertGreater(len(boards), 1)

    def test_seed_must_be_byte(self):
        with self.assertRaises(ValueError):
            GridState.from_seed(256)
        with self.assertRaises(ValueError):
            GridState.from_seed(-1)


class TestLegalMoves(unittest.TestCase):

    def test_corner(self):
        state = make_state(np.ones((3, 3), dtype=int), Coord(0, 0))
        self.assertEqual(state.legal_moves(), [Coord(1, 0), Coord(0, 1)])

    def test_opposite_corner(self):
        state = make_state(np.ones((3, 3), dtype=int), Coord(2, 2))
        self.assertEqual(state.legal_moves(), [Coord(1, 2), Coord(2, 1)])

    def test_center_order(self):
        state = make_state(np.ones((3, 3), dtype=int), Coord(1, 1))
        self.assertEqual(
            state.legal_moves(),
            [Coord(0, 1), Coord(2, 1), Coord(1, 0), Coord(1, 2)],
        )


class TestTransitions(unittest.TestCase):
    """Test commit and probe."""

    def setUp(self):
        self.state = make_state(
            [[0, 3, 0],
             [5, 0, 7],
             [0, 9, 0]],
            Coord(1, 1),
            end_turn=3,
        )

    def test_probe_does_not_mutate(self):
        self.assertEqual(self.state.probe(Coord(1, 2)), 9)
        self.assertEqual(self.state.score, 0)
        self.assertEqual(self.state.turn, 0)
        self.assertEqual(self.state.position, Coord(1, 1))
        self.assertEqual(self.state.reward_at(Coord(1, 2)), 9)

    def test_commit_collects_and_consumes(self):
        self.state.commit(Coord(2, 1))
        self.assertEqual(self.state.score, 7)
        self.assertEqual(self.state.turn, 1)
        self.assertEqual(self.state.position, Coord(2, 1))
        self.assertEqual(self.state.reward_at(Coord(2, 1)), 0)

    def test_reward_consumed_once(self):
        self.state.commit(Coord(0, 1))
        self.state.commit(Coord(1, 1))
        score = self.state.score
        self.assertEqual(self.state.probe(Coord(0, 1)), score)
        self.state.commit(Coord(0, 1))
        self.assertEqual(self.state.score, score)

    def test_terminal_at_horizon(self):
        self.assertFalse(self.state.is_done())
        for move in [Coord(1, 0), Coord(1, 1), Coord(1, 2)]:
            self.state.commit(move)
        self.assertTrue(self.state.is_done())
        self.assertEqual(self.state.score, 12)

    def test_commit_after_horizon(self):
        for move in [Coord(1, 0), Coord(1, 1), Coord(1, 2)]:
            self.state.commit(move)
        with self.assertRaises(IllegalMoveError):
            self.state.commit(Coord(1, 1))

    def test_commit_non_adjacent(self):
        with self.assertRaises(IllegalMoveError):
            self.state.commit(Coord(0, 0))
        with self.assertRaises(IllegalMoveError):
            self.state.commit(Coord(1, 1))

    def test_commit_off_board(self):
        state = make_state(np.ones((2, 2), dtype=int), Coord(0, 0))
        with self.assertRaises(IllegalMoveError):
            state.commit(Coord(-1, 0))


class TestClone(unittest.TestCase):

    def test_clone_is_independent(self):
        state = GridState.from_seed(3, GridConfig(height=4, width=4,
                                                  end_turn=5))
        original = state.rewards.copy()
        child = state.clone()
        move = child.legal_moves()[0]
        child.commit(move)
        child.first_move = move

        np.testing.assert_array_equal(state.rewards, original)
        self.assertEqual(state.turn, 0)
        self.assertEqual(state.score, 0)
        self.assertIsNone(state.first_move)

        sibling = state.clone()
        self.assertEqual(sibling.reward_at(move), state.reward_at(move))


class TestInvariants(unittest.TestCase):
    """Properties that hold along any sequence of legal moves."""

    def test_bounds_and_monotonic_score(self):
        config = GridConfig(height=4, width=5, end_turn=60)
        for seed in range(5):
            state = GridState.from_seed(seed, config)
            walker = RandomStrategy(seed=seed)
            previous = state.score
            while not state.is_done():
                state.commit(walker.select(state))
                self.assertTrue(0 <= state.position.x < config.width)
                self.assertTrue(0 <= state.position.y < config.height)
                self.assertGreaterEqual(state.score, previous)
                previous = state.score

    def test_score_equals_collected_rewards(self):
        config = GridConfig(height=4, width=5, end_turn=40)
        state = GridState.from_seed(11, config)
        initial = state.rewards.copy()
        visited = set()
        walker = RandomStrategy(seed=1)
        while not state.is_done():
            move = walker.select(state)
            state.commit(move)
            visited.add(move)
        expected = sum(int(initial[c.y, c.x]) for c in visited)
        self.assertEqual(state.score, expected)


class TestRender(unittest.TestCase):

    def test_render_shape(self):
        config = GridConfig(height=3, width=4, end_turn=4)
        state = GridState.from_seed(5, config)
        lines = state.render().split("\n")
        self.assertEqual(lines[0], "turn: 0")
        self.assertEqual(lines[1], "score: 0")
        self.assertEqual(len(lines), 2 + 3)
        for line in lines[2:]:
            self.assertEqual(len(line), 4)
        self.assertEqual(state.render().count("@"), 1)
        self.assertEqual(str(state), state.render())

    def test_render_marks_agent(self):
        state = make_state([[1, 2], [3, 4]], Coord(1, 1))
        self.assertEqual(state.render(), "turn: 0\nscore: 0\n12\n3@")


if __name__ == "__main__":
    unittest.main()
