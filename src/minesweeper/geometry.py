"""
Screen geometry for the board.

Converts between pixel coordinates supplied by the input layer and
1-indexed board cells.
"""
import math
from dataclasses import dataclass
from typing import Optional, Tuple

# Share of the shorter viewport side taken by the board
BOARD_FILL = 0.8

# Board is pushed down to leave room for the status lines
TOP_OFFSET = 20


def map_pointer_to_cell(
    x: float,
    y: float,
    origin_x: float,
    origin_y: float,
    cell_size: float,
    board_size: int,
) -> Optional[Tuple[int, int]]:
    """
    Map a pixel position to the board cell under it.

    Args:
        x: Pointer x in pixels.
        y: Pointer y in pixels.
        origin_x: Left edge of the board.
        origin_y: Top edge of the board.
        cell_size: Side of one cell in pixels.
        board_size: Cells per side.

    Returns:
        (row, col) of the cell, or None if the pointer is off the board.
    """
    if cell_size <= 0:
        return None
    col = math.floor((x - origin_x) / cell_size) + 1
    row = math.floor((y - origin_y) / cell_size) + 1
    if 1 <= row <= board_size and 1 <= col <= board_size:
        return row, col
    return None


@dataclass(frozen=True)
class BoardGeometry:
    """
    Placement of the board on screen.

    Attributes:
        origin_x: Left edge of the board in pixels.
        origin_y: Top edge of the board in pixels.
        cell_size: Side of one cell in pixels.
        board_size: Cells per side.
    """

    origin_x: float
    origin_y: float
    cell_size: int
    board_size: int

    @classmethod
    def fit(cls, width: int, height: int, board_size: int) -> "BoardGeometry":
        """
        Centre a board of board_size cells in a width x height viewport.

        The board takes 80% of the shorter side, cells are whole pixels.
        """
        max_extent = min(width, height) * BOARD_FILL
        cell_size = math.floor(max_extent / board_size)
        extent = cell_size * board_size
        origin_x = (width - extent) / 2
        origin_y = (height - extent) / 2 + TOP_OFFSET
        return cls(origin_x, origin_y, cell_size, board_size)

    @property
    def extent(self) -> int:
        """Side of the whole board in pixels."""
        return self.cell_size * self.board_size

    def cell_at_point(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        """Cell under a screen point, or None."""
        return map_pointer_to_cell(
            x, y, self.origin_x, self.origin_y, self.cell_size, self.board_size
        )

    def cell_center(self, row: int, col: int) -> Tuple[float, float]:
        """Pixel centre of a cell."""
        x = self.origin_x + (col - 0.5) * self.cell_size
        y = self.origin_y + (row - 0.5) * self.cell_size
        return x, y
