"""
Unit tests for the Application screen state machine.
"""
import pytest
from minesweeper import (
    Application,
    AppState,
    Difficulty,
    PointerButton,
    SessionPhase,
)


def _start_and_lose(app: Application) -> None:
    app.start()
    app.handle_click(*app.session.geometry.cell_center(5, 5))
    mine = app.session.board.mine_positions()[0]
    app.handle_click(*app.session.geometry.cell_center(*mine))


# ============================================================================
# Screen Transition Tests
# ============================================================================

class TestScreens:
    """Test moving between menu, options and game."""

    def test_starts_on_menu(self, app: Application) -> None:
        """The application opens on the main menu."""
        assert app.state == AppState.MENU
        assert app.quit_requested is False

    def test_start_begins_game(self, app: Application) -> None:
        """Starting from the menu begins a fresh game."""
        app.start()
        assert app.state == AppState.PLAYING
        assert app.session.phase == SessionPhase.FIRST_CLICK_PENDING

    def test_options_selection_applies_to_next_game(self, app: Application) -> None:
        """Options chosen on the options screen are used by start."""
        app.open_options()
        assert app.state == AppState.OPTIONS
        app.select_board_size(12)
        app.select_difficulty(Difficulty.EXPERT)
        app.back()
        app.start()

        assert app.session.board_size == 12
        assert app.session.difficulty is Difficulty.EXPERT
        assert app.session.mine_count == 30

    def test_options_ignored_outside_options_screen(self, app: Application) -> None:
        """Selections only apply on the options screen."""
        app.select_board_size(16)
        app.select_difficulty(Difficulty.EXPERT)
        assert app.board_size == 9
        assert app.difficulty is Difficulty.BEGINNER

    def test_unsupported_board_size_raises(self, app: Application) -> None:
        """Only the offered sizes can be selected."""
        app.open_options()
        with pytest.raises(ValueError, match="Unsupported board size"):
            app.select_board_size(10)

    def test_start_only_from_menu(self, app: Application) -> None:
        """Start does nothing from the options screen."""
        app.open_options()
        app.start()
        assert app.state == AppState.OPTIONS


# ============================================================================
# Keyboard Tests
# ============================================================================

class TestKeys:
    """Test key bindings."""

    def test_escape_from_game_returns_to_menu(self, app: Application) -> None:
        """Escape leaves the game."""
        app.start()
        app.handle_key("escape")
        assert app.state == AppState.MENU

    def test_escape_from_options_returns_to_menu(self, app: Application) -> None:
        """Escape leaves the options screen."""
        app.open_options()
        app.handle_key("escape")
        assert app.state == AppState.MENU

    def test_escape_from_menu_quits(self, app: Application) -> None:
        """Escape on the menu asks to quit."""
        app.handle_key("escape")
        assert app.quit_requested is True

    def test_f_toggles_flag_mode(self, app: Application) -> None:
        """F toggles flag mode while playing."""
        app.start()
        app.handle_key("f")
        assert app.session.flag_mode is True
        app.handle_key("F")
        assert app.session.flag_mode is False

    def test_r_resets_game(self, app: Application) -> None:
        """R starts over."""
        app.start()
        app.handle_click(*app.session.geometry.cell_center(5, 5))
        app.handle_key("r")
        assert app.session.phase == SessionPhase.FIRST_CLICK_PENDING
        assert app.session.board.revealed_count == 0

    def test_game_keys_ignored_on_menu(self, app: Application) -> None:
        """R and F do nothing outside the game."""
        app.handle_key("f")
        assert app.session.flag_mode is False


# ============================================================================
# Click Tests
# ============================================================================

class TestClicks:
    """Test click routing while playing."""

    def test_click_reveals_cell(self, app: Application) -> None:
        """Clicking a cell reveals it."""
        app.start()
        app.handle_click(*app.session.geometry.cell_center(3, 4))
        assert app.session.board.cell_at(3, 4).is_revealed is True
        assert app.session.phase == SessionPhase.IN_PROGRESS

    def test_right_click_flags(self, app: Application) -> None:
        """The secondary button flags."""
        app.start()
        x, y = app.session.geometry.cell_center(3, 4)
        app.handle_click(x, y, PointerButton.SECONDARY)
        assert app.session.board.cell_at(3, 4).is_flagged is True

    def test_reset_button(self, app: Application) -> None:
        """The reset button starts over."""
        app.start()
        app.handle_click(*app.session.geometry.cell_center(5, 5))
        app.handle_click(800 - 80, 40)
        assert app.session.board.revealed_count == 0

    def test_flag_mode_button(self, app: Application) -> None:
        """The flag button toggles flag mode, then clicks flag."""
        app.start()
        app.handle_click(800 - 80, 100)
        assert app.session.flag_mode is True

        app.handle_click(*app.session.geometry.cell_center(2, 2))
        assert app.session.board.cell_at(2, 2).is_flagged is True

    def test_click_after_game_over_returns_to_menu(self, app: Application) -> None:
        """Any click on the game-over screen goes back to the menu."""
        _start_and_lose(app)
        assert app.session.phase == SessionPhase.LOST

        app.handle_click(400, 300)
        assert app.state == AppState.MENU

    def test_clicks_ignored_on_menu(self, app: Application) -> None:
        """Board clicks only count while playing."""
        app.handle_click(400, 300)
        assert app.session.phase == SessionPhase.NOT_STARTED


# ============================================================================
# Frame Update Tests
# ============================================================================

class TestUpdate:
    """Test frame updates and resizing."""

    def test_update_only_while_playing(self, app: Application) -> None:
        """The session clock runs only on the game screen."""
        app.start()
        app.update(1.0)
        app.back()
        app.update(1.0)
        assert app.session.elapsed_seconds == pytest.approx(1.0)

    def test_resize_moves_board_and_buttons(self, app: Application) -> None:
        """A resize recomputes geometry and button positions."""
        app.start()
        app.resize(1200, 900)
        assert app.session.geometry.cell_size == 80

        app.handle_click(1200 - 80, 100)
        assert app.session.flag_mode is True
