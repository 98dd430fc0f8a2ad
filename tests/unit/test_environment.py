"""
Unit tests for the gymnasium environment adapter.
"""
import numpy as np
import pytest
from minesweeper import Difficulty, GameConfig, MinesweeperEnv


@pytest.fixture
def env() -> MinesweeperEnv:
    """Beginner 9x9 environment, reset with a fixed seed."""
    environment = MinesweeperEnv(GameConfig(Difficulty.BEGINNER, 9), render_mode="ansi")
    environment.reset(seed=123)
    return environment


class TestEnvironment:
    """Test reset, step and masks."""

    def test_spaces(self, env: MinesweeperEnv) -> None:
        """Spaces match the board size."""
        assert env.action_space.n == 81
        assert env.observation_space.shape == (9, 9)

    def test_reset_observation_all_hidden(self) -> None:
        """A reset board is entirely hidden."""
        environment = MinesweeperEnv()
        obs, info = environment.reset(seed=1)
        assert obs.shape == (9, 9)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)
        assert info["phase"] == "FIRST_CLICK_PENDING"
        assert info["total_safe"] == 72

    def test_step_settles_flood_fill(self, env: MinesweeperEnv) -> None:
        """A step returns only after the reveal queue is empty."""
        center = 4 * 9 + 4
        obs, reward, terminated, truncated, info = env.step(center)

        assert env.session.pending_reveals == 0
        assert obs[4, 4] == 0
        assert np.all(obs[3:6, 3:6] >= 0)
        assert reward in (1.0, 10.0)
        assert truncated is False
        assert info["revealed"] >= 9

    def test_repeated_action_is_penalized(self, env: MinesweeperEnv) -> None:
        """Revealing a revealed cell costs a little."""
        center = 4 * 9 + 4
        _, _, terminated, _, _ = env.step(center)
        if terminated:
            pytest.skip("first click cleared the board")
        _, reward, _, _, _ = env.step(center)
        assert reward == pytest.approx(-0.1)

    def test_mine_ends_episode(self, env: MinesweeperEnv) -> None:
        """Stepping on a mine terminates with a penalty."""
        env.step(4 * 9 + 4)
        row, col = env.session.board.mine_positions()[0]

        _, reward, terminated, _, info = env.step((row - 1) * 9 + col - 1)

        assert terminated is True
        assert reward == -10.0
        assert info["phase"] == "LOST"

    def test_action_mask_tracks_hidden_cells(self, env: MinesweeperEnv) -> None:
        """Revealed cells drop out of the mask."""
        assert env.get_action_mask().sum() == 81
        env.step(0)
        mask = env.get_action_mask()
        assert not mask[0]
        assert mask.sum() == len(env.session.board.hidden_positions())

    def test_same_seed_same_board(self) -> None:
        """Seeding reset makes mine placement reproducible."""
        first = MinesweeperEnv()
        second = MinesweeperEnv()
        first.reset(seed=9)
        second.reset(seed=9)
        first.step(40)
        second.step(40)
        assert first.session.board.mine_positions() == second.session.board.mine_positions()

    def test_render_ansi(self, env: MinesweeperEnv) -> None:
        """ANSI rendering has one line per row."""
        text = env.render()
        assert len(text.splitlines()) == 9
        assert set(text.replace(" ", "").replace("\n", "")) == {"."}

    def test_step_after_win_is_penalized(self, monkeypatch) -> None:
        """Acting on a finished episode does not pay the win reward again."""
        environment = MinesweeperEnv(GameConfig(Difficulty.BEGINNER, 3))
        environment.reset(seed=0)
        board = environment.session.board
        monkeypatch.setattr(
            board, "place_mines", lambda count, row, col: board.lay_mines([(3, 3)])
        )

        _, reward, terminated, _, _ = environment.step(0)
        assert terminated is True
        assert reward == 10.0

        _, reward, terminated, _, _ = environment.step(0)
        assert terminated is True
        assert reward == pytest.approx(-0.1)
