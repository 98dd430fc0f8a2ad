"""Plain-text rendering of a board."""
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .board import Board
    from .session import SessionController


def render_ansi(board: "Board", coordinates: bool = False) -> str:
    """
    Render board as ASCII string.

    Args:
        board: Board to draw.
        coordinates: Prefix rows and columns with their 1-based numbers.

    Returns:
        One line per row: '.' hidden, 'F' flagged, '*' mine, ' ' empty,
        digits for adjacent counts.
    """
    lines: List[str] = []
    width = len(str(board.size))

    if coordinates:
        header = " ".join(str(col % 10) for col in range(1, board.size + 1))
        lines.append(" " * (width + 1) + header)

    for row in range(1, board.size + 1):
        row_str = " ".join(
            board.cell_at(row, col).to_char() for col in range(1, board.size + 1)
        )
        if coordinates:
            row_str = f"{row:>{width}} {row_str}"
        lines.append(row_str)

    return "\n".join(lines)


def render_status(session: "SessionController") -> str:
    """One-line summary of mines left, time and flag mode."""
    flag_mode = "ON" if session.flag_mode else "OFF"
    return (
        f"Mines: {session.mines_remaining}  "
        f"Time: {int(session.elapsed_seconds)}s  "
        f"Flag Mode: {flag_mode}  "
        f"Difficulty: {session.difficulty.label}  "
        f"Board: {session.board_size}x{session.board_size}"
    )
