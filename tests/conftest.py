"""
Pytest configuration and shared fixtures.
"""
import random

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import (
    Application,
    Board,
    Cell,
    Difficulty,
    GameConfig,
    SessionController,
)


def _drain(board: Board, limit: int = 10_000) -> int:
    """Drain a board's reveal queue completely; returns ticks used."""
    ticks = 0
    while board.scheduler and ticks < limit:
        board.scheduler.drain_one(board)
        ticks += 1
    return ticks


@pytest.fixture
def drain():
    """Function that empties a board's reveal queue one task per tick."""
    return _drain


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board without mines."""
    return Board(9, rng=random.Random(1234))


@pytest.fixture
def empty_board() -> Board:
    """Create a 5x5 board with no mines for cascade testing."""
    return Board(5)


@pytest.fixture
def diagonal_board() -> Board:
    """3x3 board with mines in the top-left and bottom-right corners."""
    board = Board(3)
    board.lay_mines([(1, 1), (3, 3)])
    return board


@pytest.fixture
def tiny_board() -> Board:
    """2x2 board with a single mine at (1, 1)."""
    board = Board(2)
    board.lay_mines([(1, 1)])
    return board


@pytest.fixture
def corner_mine_board() -> Board:
    """5x5 board with one mine at (5, 5)."""
    board = Board(5)
    board.lay_mines([(5, 5)])
    return board


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def session() -> SessionController:
    """Beginner 9x9 session with a fixed seed, ready for the first click."""
    controller = SessionController(GameConfig(Difficulty.BEGINNER, 9), seed=42)
    controller.start_new_game()
    return controller


@pytest.fixture
def app() -> Application:
    """Application on the main menu with an 800x600 viewport."""
    return Application(800, 600, seed=7)
