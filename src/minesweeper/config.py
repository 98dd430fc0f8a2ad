"""
Game configuration for Minesweeper.

Difficulty levels map to a mine density applied to a square board.
"""
import math
from dataclasses import dataclass
from enum import Enum


# ============================================================================
# Constants
# ============================================================================

# Board side lengths offered by the options screen
BOARD_SIZES = (9, 12, 16)
DEFAULT_BOARD_SIZE = 9

# Animation lifetimes in seconds
REVEAL_DURATION = 0.2
FLAG_DURATION = 0.15

# Default viewport in pixels
DEFAULT_VIEWPORT = (800, 600)


class Difficulty(Enum):
    """Difficulty levels and their mine densities."""

    BEGINNER = 0.12
    INTERMEDIATE = 0.16
    EXPERT = 0.21

    @property
    def density(self) -> float:
        """Fraction of the board covered by mines."""
        return self.value

    @property
    def label(self) -> str:
        """Lowercase display name."""
        return self.name.lower()

    def mine_count(self, board_size: int) -> int:
        """Mines for a square board of the given side, never fewer than 1."""
        return max(1, math.floor(board_size * board_size * self.density))

    @classmethod
    def from_name(cls, name: str) -> "Difficulty":
        """
        Look up a difficulty by case-insensitive name.

        Raises:
            ValueError: If the name is not a known difficulty.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            choices = ", ".join(d.label for d in cls)
            raise ValueError(
                f"Unknown difficulty {name!r} (expected one of: {choices})"
            ) from None


# ============================================================================
# Game Configuration
# ============================================================================

@dataclass
class GameConfig:
    """
    Configuration for a Minesweeper game.

    Attributes:
        difficulty: Mine density level.
        board_size: Side length of the square board.
    """

    difficulty: Difficulty = Difficulty.BEGINNER
    board_size: int = DEFAULT_BOARD_SIZE

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if not isinstance(self.difficulty, Difficulty):
            raise ValueError(f"Invalid difficulty: {self.difficulty!r}")
        if isinstance(self.board_size, bool) or not isinstance(
            self.board_size, int
        ):
            raise ValueError("Board size must be an integer")
        if self.board_size < 1:
            raise ValueError("Board size must be positive")

    @property
    def mine_count(self) -> int:
        """Number of mines for this configuration."""
        return self.difficulty.mine_count(self.board_size)


# Preset configurations
BEGINNER = GameConfig(Difficulty.BEGINNER, 9)
INTERMEDIATE = GameConfig(Difficulty.INTERMEDIATE, 12)
EXPERT = GameConfig(Difficulty.EXPERT, 16)
