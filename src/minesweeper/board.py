"""
Board module for Minesweeper game.

Implements the square game board with mine placement, adjacency
counting, cell revealing and win/lose detection. Rows and columns are
1-indexed. Cascading reveals of empty regions are not recursive: the
neighbors of an empty cell are handed to a RevealScheduler and revealed
one per tick by whoever drives the board.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell
from .scheduler import RevealScheduler

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game on a board."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class RevealOutcome(Enum):
    """Result of a single reveal."""

    ALREADY_HANDLED = auto()
    REVEALED = auto()
    REVEALED_MINE = auto()
    REVEALED_WIN = auto()


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Manages the grid of cells, mine placement, revealing logic,
    and win/lose conditions.

    Attributes:
        size: Side length of the square grid.
        scheduler: Queue receiving the neighbors of revealed empty cells.
        rng: Random source used for mine placement.
    """

    size: int = 9
    scheduler: RevealScheduler = field(default_factory=RevealScheduler)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    mine_count: int = field(default=0, init=False)
    revealed_count: int = field(default=0, init=False)
    flagged_count: int = field(default=0, init=False)
    first_click_pending: bool = field(default=True, init=False)
    _grid: List[List[Cell]] = field(default_factory=list, init=False, repr=False)
    _game_state: GameState = field(default=GameState.PLAYING, init=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self.initialize(self.size)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def initialize(self, size: int) -> None:
        """
        Allocate an empty size x size grid and reset every counter.

        Args:
            size: Side length of the board, at least 1.
        """
        self.size = size
        self._grid = [[Cell() for _ in range(size)] for _ in range(size)]
        self.mine_count = 0
        self.revealed_count = 0
        self.flagged_count = 0
        self.first_click_pending = True
        self._game_state = GameState.PLAYING
        self.scheduler.clear()

    def place_mines(self, mine_count: int, avoid_row: int, avoid_col: int) -> None:
        """
        Randomly place mines outside the 3x3 block around a cell.

        Cells are drawn uniformly at random and skipped if they already
        hold a mine or lie within one step of (avoid_row, avoid_col).
        The caller must leave enough free cells outside that block,
        otherwise this never returns.

        Args:
            mine_count: Number of mines to place.
            avoid_row: Row of the first click.
            avoid_col: Column of the first click.
        """
        positions: Set[Tuple[int, int]] = set()
        while len(positions) < mine_count:
            row = self.rng.randint(1, self.size)
            col = self.rng.randint(1, self.size)
            if abs(row - avoid_row) <= 1 and abs(col - avoid_col) <= 1:
                continue
            if self._cell(row, col).is_mine:
                continue
            positions.add((row, col))

        logger.debug(
            "Placing %d mines on %dx%d board avoiding (%d, %d)",
            mine_count, self.size, self.size, avoid_row, avoid_col,
        )
        self.lay_mines(positions)

    def lay_mines(self, positions: Iterable[Tuple[int, int]]) -> None:
        """
        Mark the given cells as mines and recompute adjacency counts.

        Out-of-range positions are ignored. The board's mine count becomes
        the number of mines on the grid afterwards.

        Args:
            positions: 1-indexed (row, col) pairs.
        """
        for row, col in positions:
            if self.in_bounds(row, col):
                self._cell(row, col).is_mine = True

        self.mine_count = sum(
            1 for line in self._grid for cell in line if cell.is_mine
        )
        self.first_click_pending = False
        self._calculate_adjacent_mines()

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for row in range(1, self.size + 1):
            for col in range(1, self.size + 1):
                cell = self._cell(row, col)
                if not cell.is_mine:
                    cell.adjacent_mines = self._count_adjacent_mines(row, col)

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._cell(neighbor_row, neighbor_col).is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row of center cell.
            col: Column of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors.
        """
        result = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.in_bounds(new_row, new_col):
                    result.append((new_row, new_col))
        return result

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 1 <= row <= self.size and 1 <= col <= self.size

    def _cell(self, row: int, col: int) -> Cell:
        return self._grid[row - 1][col - 1]

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal_at(self, row: int, col: int) -> RevealOutcome:
        """
        Reveal a cell at the given position.

        Empty cells (0 adjacent mines) queue their neighbors on the
        scheduler instead of revealing them immediately.

        Args:
            row: Row to reveal.
            col: Column to reveal.

        Returns:
            ALREADY_HANDLED if nothing changed, otherwise what the reveal
            uncovered.
        """
        if self._game_state != GameState.PLAYING:
            return RevealOutcome.ALREADY_HANDLED
        if not self.in_bounds(row, col):
            return RevealOutcome.ALREADY_HANDLED

        cell = self._cell(row, col)
        if not cell.reveal():
            return RevealOutcome.ALREADY_HANDLED

        self.revealed_count += 1

        if cell.is_mine:
            self._game_state = GameState.LOST
            logger.debug("Mine revealed at (%d, %d)", row, col)
            return RevealOutcome.REVEALED_MINE

        if cell.adjacent_mines == 0:
            for neighbor_row, neighbor_col in self.neighbors(row, col):
                if self._cell(neighbor_row, neighbor_col).is_hidden:
                    self.scheduler.enqueue(neighbor_row, neighbor_col)

        if self.revealed_count == self.safe_cells:
            self._game_state = GameState.WON
            return RevealOutcome.REVEALED_WIN

        return RevealOutcome.REVEALED

    def toggle_flag(self, row: int, col: int) -> Optional[bool]:
        """
        Toggle flag on a cell.

        Args:
            row: Row of the cell.
            col: Column of the cell.

        Returns:
            New flagged state, or None if the cell cannot be flagged.
        """
        if self._game_state != GameState.PLAYING:
            return None
        if not self.in_bounds(row, col):
            return None

        cell = self._cell(row, col)
        if not cell.toggle_flag():
            return None

        self.flagged_count += 1 if cell.is_flagged else -1
        return cell.is_flagged

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def game_over(self) -> bool:
        """Check if the game has ended either way."""
        return self._game_state != GameState.PLAYING

    @property
    def game_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.size * self.size

    @property
    def safe_cells(self) -> int:
        """Number of cells that must be revealed to win."""
        return self.total_cells - self.mine_count

    @property
    def mines_remaining(self) -> int:
        """Mines left to find according to the flags placed."""
        return self.mine_count - self.flagged_count

    def cell_at(self, row: int, col: int) -> Cell:
        """
        Get cell at position.

        Raises:
            IndexError: If the position is off the board.
        """
        if not self.in_bounds(row, col):
            raise IndexError(
                f"Cell ({row}, {col}) is outside a {self.size}x{self.size} board"
            )
        return self._cell(row, col)

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a 0-indexed numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.size, self.size), dtype=np.int8)
        for row in range(self.size):
            for col in range(self.size):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def hidden_positions(self) -> List[Tuple[int, int]]:
        """
        Get cells that a reveal would act on.

        Returns:
            List of 1-indexed (row, col) positions that are hidden and
            unflagged.
        """
        positions = []
        for row in range(1, self.size + 1):
            for col in range(1, self.size + 1):
                if self._cell(row, col).is_hidden:
                    positions.append((row, col))
        return positions

    def mine_positions(self) -> List[Tuple[int, int]]:
        """1-indexed positions of every mine on the board."""
        return [
            (row, col)
            for row in range(1, self.size + 1)
            for col in range(1, self.size + 1)
            if self._cell(row, col).is_mine
        ]
