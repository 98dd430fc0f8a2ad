"""
Game session controller.

Owns one Board per game together with its reveal queue and visual
effects, tracks the game lifecycle and elapsed time, and turns pointer
input into board actions. Driven by one tick(dt) call per frame.
"""
import logging
import random
from enum import Enum, auto
from typing import Optional, Tuple

from .animation import (
    DETONATION_COLOR,
    VICTORY_COLOR,
    AnimationFrame,
    AnimationKind,
    AnimationTimeline,
    ParticleFrame,
    ParticleSystem,
)
from .board import Board, RevealOutcome
from .config import (
    DEFAULT_VIEWPORT,
    FLAG_DURATION,
    REVEAL_DURATION,
    Difficulty,
    GameConfig,
)
from .geometry import BoardGeometry

logger = logging.getLogger(__name__)

DETONATION_PARTICLES = 15
VICTORY_PARTICLES_PER_CELL = 2


# ============================================================================
# Session Phase
# ============================================================================

class SessionPhase(Enum):
    """Lifecycle of a single game."""

    NOT_STARTED = auto()
    FIRST_CLICK_PENDING = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_over(self) -> bool:
        """Check if the phase is terminal."""
        return self in (SessionPhase.WON, SessionPhase.LOST)

    @property
    def is_running(self) -> bool:
        """Check if the clock is running."""
        return self in (SessionPhase.FIRST_CLICK_PENDING, SessionPhase.IN_PROGRESS)


# ============================================================================
# Session Controller
# ============================================================================

class SessionController:
    """
    Orchestrates a Minesweeper game.

    Mines are placed on the first primary action so the first click and
    its neighbors are always safe. The first click is revealed
    immediately; any flood fill it starts is drained one cell per tick.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the session.

        Args:
            config: Difficulty and board size (default: beginner 9x9).
            seed: Random seed for mine placement and particles.
        """
        self.config = config or GameConfig()
        self.rng = random.Random(seed)
        self.board = Board(self.config.board_size, rng=self.rng)
        self.animations = AnimationTimeline()
        self.particles = ParticleSystem(seed)
        self.phase = SessionPhase.NOT_STARTED
        self.mine_count = self.config.mine_count
        self.elapsed_seconds = 0.0
        self.flag_mode = False
        self._viewport: Tuple[int, int] = DEFAULT_VIEWPORT
        self.geometry = BoardGeometry.fit(*self._viewport, self.config.board_size)

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def start_new_game(
        self,
        difficulty: Optional[Difficulty] = None,
        board_size: Optional[int] = None,
    ) -> None:
        """
        Discard the current game and start a fresh one.

        Args:
            difficulty: Mine density (default: keep current).
            board_size: Side of the board (default: keep current).

        Raises:
            ValueError: If board_size is not a positive integer.
        """
        self.config = GameConfig(
            difficulty if difficulty is not None else self.config.difficulty,
            board_size if board_size is not None else self.config.board_size,
        )
        self.mine_count = self.config.mine_count

        self.board = Board(self.config.board_size, rng=self.rng)
        self.animations.clear()
        self.particles.clear()
        self.elapsed_seconds = 0.0
        self.flag_mode = False
        self.geometry = BoardGeometry.fit(*self._viewport, self.config.board_size)
        self.phase = SessionPhase.FIRST_CLICK_PENDING

        logger.info(
            "New %s game on %dx%d board with %d mines",
            self.config.difficulty.label,
            self.config.board_size,
            self.config.board_size,
            self.mine_count,
        )

    def reset_game(self) -> None:
        """Start over with the current difficulty and board size."""
        self.start_new_game()

    def toggle_flag_mode(self) -> None:
        """Switch primary actions between revealing and flagging."""
        self.flag_mode = not self.flag_mode

    def set_viewport(self, width: int, height: int) -> None:
        """Recompute board placement for a new viewport size."""
        self._viewport = (width, height)
        self.geometry = BoardGeometry.fit(width, height, self.config.board_size)

    def tick(self, dt: float) -> None:
        """
        Advance the simulation by one frame.

        Runs the clock while the game is live, reveals at most one queued
        cell, then ages animations and particles.

        Args:
            dt: Seconds since the previous frame.
        """
        dt = max(0.0, dt)
        if self.phase.is_running:
            self.elapsed_seconds += dt

        pending = self.board.scheduler.peek()
        outcome = self.board.scheduler.drain_one(self.board)
        if pending is not None and outcome is not None:
            self._after_reveal(pending.row, pending.col, outcome)

        self.animations.tick(dt)
        self.particles.tick(dt)

    # ========================================================================
    # Input
    # ========================================================================

    def handle_primary_action(self, row: int, col: int) -> RevealOutcome:
        """
        Reveal a cell, or flag it while flag mode is on.

        The first reveal of a game lays the mines around it.

        Returns:
            Outcome of the reveal (ALREADY_HANDLED if nothing happened).
        """
        if self.flag_mode:
            self.handle_secondary_action(row, col)
            return RevealOutcome.ALREADY_HANDLED
        if self.phase not in (
            SessionPhase.FIRST_CLICK_PENDING, SessionPhase.IN_PROGRESS
        ):
            return RevealOutcome.ALREADY_HANDLED
        if not self.board.in_bounds(row, col):
            return RevealOutcome.ALREADY_HANDLED

        if self.phase == SessionPhase.FIRST_CLICK_PENDING:
            self.board.place_mines(self.mine_count, row, col)
            self.phase = SessionPhase.IN_PROGRESS

        outcome = self.board.reveal_at(row, col)
        self._after_reveal(row, col, outcome)
        return outcome

    def handle_secondary_action(self, row: int, col: int) -> Optional[bool]:
        """
        Toggle the flag on a cell.

        Returns:
            New flagged state, or None if nothing changed.
        """
        if self.phase not in (
            SessionPhase.FIRST_CLICK_PENDING, SessionPhase.IN_PROGRESS
        ):
            return None

        flagged = self.board.toggle_flag(row, col)
        if flagged is not None:
            self.animations.push(AnimationKind.FLAG_TOGGLE, row, col, FLAG_DURATION)
        return flagged

    def handle_pointer(self, x: float, y: float, secondary: bool = False) -> None:
        """
        Route a click at pixel (x, y) to the cell under it.

        Args:
            x: Pointer x in pixels.
            y: Pointer y in pixels.
            secondary: True for the flagging button.
        """
        position = self.map_pointer_to_cell(x, y)
        if position is None:
            return
        if secondary:
            self.handle_secondary_action(*position)
        else:
            self.handle_primary_action(*position)

    def map_pointer_to_cell(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        """Cell under pixel (x, y) for the current viewport."""
        return self.geometry.cell_at_point(x, y)

    def _after_reveal(self, row: int, col: int, outcome: RevealOutcome) -> None:
        """Record feedback for a reveal and settle the game state."""
        if outcome == RevealOutcome.ALREADY_HANDLED:
            return

        self.animations.push(AnimationKind.REVEAL, row, col, REVEAL_DURATION)

        if outcome == RevealOutcome.REVEALED_MINE:
            self.phase = SessionPhase.LOST
            x, y = self.geometry.cell_center(row, col)
            self.particles.emit(x, y, DETONATION_COLOR, DETONATION_PARTICLES)
            logger.info(
                "Game lost at (%d, %d) after %.1fs", row, col, self.elapsed_seconds
            )
        elif outcome == RevealOutcome.REVEALED_WIN:
            self.phase = SessionPhase.WON
            self._emit_victory_particles()
            logger.info("Game won in %.1fs", self.elapsed_seconds)

    def _emit_victory_particles(self) -> None:
        for row in range(1, self.board.size + 1):
            for col in range(1, self.board.size + 1):
                if not self.board.cell_at(row, col).is_mine:
                    x, y = self.geometry.cell_center(row, col)
                    self.particles.emit(
                        x, y, VICTORY_COLOR, VICTORY_PARTICLES_PER_CELL
                    )

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def difficulty(self) -> Difficulty:
        """Difficulty of the current game."""
        return self.config.difficulty

    @property
    def board_size(self) -> int:
        """Side length of the current board."""
        return self.config.board_size

    @property
    def game_over(self) -> bool:
        """Check if the game has ended either way."""
        return self.phase.is_over

    @property
    def game_won(self) -> bool:
        """Check if the game was won."""
        return self.phase == SessionPhase.WON

    @property
    def mines_remaining(self) -> int:
        """Mines still unflagged according to the counter display."""
        return self.mine_count - self.board.flagged_count

    @property
    def pending_reveals(self) -> int:
        """Number of cells queued for reveal."""
        return len(self.board.scheduler)

    def animation_frames(self) -> Tuple[AnimationFrame, ...]:
        """Read-only view of the running cell animations."""
        return self.animations.snapshot()

    def particle_frames(self) -> Tuple[ParticleFrame, ...]:
        """Read-only view of the live particles."""
        return self.particles.snapshot()
