"""
Minesweeper game engine.

Provides the board, frame-paced reveal queue, visual effect timelines,
session and application controllers, and a gymnasium adapter.
"""
from .cell import Cell, CellState
from .config import (
    BOARD_SIZES,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    Difficulty,
    GameConfig,
)
from .scheduler import RevealScheduler, RevealTask
from .board import Board, GameState, RevealOutcome
from .animation import (
    AnimationFrame,
    AnimationKind,
    AnimationRecord,
    AnimationTimeline,
    ParticleFrame,
    ParticleSystem,
)
from .geometry import BoardGeometry, map_pointer_to_cell
from .session import SessionController, SessionPhase
from .app import Application, AppState, PointerButton
from .render import render_ansi, render_status
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "BOARD_SIZES",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "Difficulty",
    "GameConfig",
    "RevealScheduler",
    "RevealTask",
    "Board",
    "GameState",
    "RevealOutcome",
    "AnimationFrame",
    "AnimationKind",
    "AnimationRecord",
    "AnimationTimeline",
    "ParticleFrame",
    "ParticleSystem",
    "BoardGeometry",
    "map_pointer_to_cell",
    "SessionController",
    "SessionPhase",
    "Application",
    "AppState",
    "PointerButton",
    "render_ansi",
    "render_status",
    "MinesweeperEnv",
]
