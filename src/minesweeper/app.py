"""
Application shell around a game session.

Tracks which screen is showing (menu, options or the game itself),
holds the difficulty and board size picked on the options screen, and
routes keys and clicks to the session. Drawing and widget layout belong
to the front end.
"""
import logging
from enum import Enum, IntEnum
from typing import Optional, Tuple

from .config import BOARD_SIZES, DEFAULT_BOARD_SIZE, DEFAULT_VIEWPORT, Difficulty
from .session import SessionController

logger = logging.getLogger(__name__)

# In-game buttons, right-aligned: (right margin, width, top, height)
RESET_BUTTON = (20, 120, 20, 40)
FLAG_MODE_BUTTON = (20, 120, 80, 40)


class AppState(Enum):
    """Screen currently shown."""

    MENU = "menu"
    OPTIONS = "options"
    PLAYING = "playing"


class PointerButton(IntEnum):
    PRIMARY = 1
    SECONDARY = 2


def _button_hit(
    button: Tuple[int, int, int, int], x: float, y: float, screen_width: int
) -> bool:
    right_margin, width, top, height = button
    right = screen_width - right_margin
    left = right - width
    return left <= x <= right and top <= y <= top + height


class Application:
    """
    Screen state machine for the game.

    Starts on the menu. The session is created up front and restarted
    each time a game is started from the menu.
    """

    def __init__(
        self,
        width: int = DEFAULT_VIEWPORT[0],
        height: int = DEFAULT_VIEWPORT[1],
        seed: Optional[int] = None,
    ) -> None:
        self.state = AppState.MENU
        self.difficulty = Difficulty.BEGINNER
        self.board_size = DEFAULT_BOARD_SIZE
        self.quit_requested = False
        self.session = SessionController(seed=seed)
        self.resize(width, height)

    # ========================================================================
    # Screen Transitions
    # ========================================================================

    def _set_state(self, state: AppState) -> None:
        if state != self.state:
            logger.debug("Screen %s -> %s", self.state.value, state.value)
        self.state = state

    def start(self) -> None:
        """Start a game with the selected options."""
        if self.state != AppState.MENU:
            return
        self._set_state(AppState.PLAYING)
        self.session.start_new_game(self.difficulty, self.board_size)

    def open_options(self) -> None:
        """Go from the menu to the options screen."""
        if self.state == AppState.MENU:
            self._set_state(AppState.OPTIONS)

    def back(self) -> None:
        """Return to the main menu."""
        if self.state in (AppState.OPTIONS, AppState.PLAYING):
            self._set_state(AppState.MENU)

    def request_quit(self) -> None:
        """Ask the host loop to exit."""
        self.quit_requested = True

    # ========================================================================
    # Options
    # ========================================================================

    def select_board_size(self, size: int) -> None:
        """
        Choose the board size for the next game.

        Raises:
            ValueError: If size is not one of the offered sizes.
        """
        if size not in BOARD_SIZES:
            raise ValueError(f"Unsupported board size {size} (choose from {BOARD_SIZES})")
        if self.state == AppState.OPTIONS:
            self.board_size = size

    def select_difficulty(self, difficulty: Difficulty) -> None:
        """Choose the difficulty for the next game (options screen only)."""
        if self.state == AppState.OPTIONS:
            self.difficulty = difficulty

    # ========================================================================
    # Input and Frame Updates
    # ========================================================================

    def handle_key(self, key: str) -> None:
        """
        Handle a key press.

        Escape leaves the current screen (or quits from the menu), R
        restarts the game and F toggles flag mode.
        """
        key = key.lower()
        if key == "escape":
            if self.state in (AppState.PLAYING, AppState.OPTIONS):
                self.back()
            else:
                self.request_quit()
        elif key == "r" and self.state == AppState.PLAYING:
            self.session.reset_game()
        elif key == "f" and self.state == AppState.PLAYING:
            self.session.toggle_flag_mode()

    def handle_click(self, x: float, y: float, button: int = PointerButton.PRIMARY) -> None:
        """
        Handle a click on the game screen.

        Once the game is over any click returns to the menu.
        """
        if self.state != AppState.PLAYING:
            return
        if self.session.game_over:
            self.back()
            return

        if _button_hit(RESET_BUTTON, x, y, self.width):
            self.session.reset_game()
            return
        if _button_hit(FLAG_MODE_BUTTON, x, y, self.width):
            self.session.toggle_flag_mode()
            return

        self.session.handle_pointer(x, y, secondary=button == PointerButton.SECONDARY)

    def update(self, dt: float) -> None:
        """Advance one frame."""
        if self.state == AppState.PLAYING:
            self.session.tick(dt)

    def resize(self, width: int, height: int) -> None:
        """Track a new window size and refit the board."""
        self.width = width
        self.height = height
        self.session.set_viewport(width, height)
