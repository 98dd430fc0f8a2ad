"""
Time-bounded visual effects.

AnimationTimeline tracks short per-cell effects (reveal flash, flag
pulse). ParticleSystem tracks cosmetic particles thrown off by a
detonation or a victory. Both advance once per tick and drop records
whose time is up; neither affects gameplay.
"""
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np


# ============================================================================
# Cell Animations
# ============================================================================

class AnimationKind(Enum):
    """Kinds of per-cell animation."""

    REVEAL = auto()
    FLAG_TOGGLE = auto()


@dataclass
class AnimationRecord:
    """
    A live animation on one cell.

    Attributes:
        kind: Which effect is playing.
        row: Row of the animated cell.
        col: Column of the animated cell.
        duration: Total lifetime in seconds.
        elapsed: Seconds played so far.
    """

    kind: AnimationKind
    row: int
    col: int
    duration: float
    elapsed: float = 0.0

    @property
    def progress(self) -> float:
        """Fraction of the animation played, clamped to [0, 1]."""
        if self.duration <= 0:
            return 1.0
        return min(1.0, max(0.0, self.elapsed / self.duration))

    @property
    def finished(self) -> bool:
        """Check if the animation has run its full duration."""
        return self.elapsed >= self.duration


@dataclass(frozen=True)
class AnimationFrame:
    """Read-only view of an animation for the renderer."""

    kind: AnimationKind
    row: int
    col: int
    progress: float


class AnimationTimeline:
    """Collection of live cell animations."""

    def __init__(self) -> None:
        self._records: List[AnimationRecord] = []

    def push(
        self, kind: AnimationKind, row: int, col: int, duration: float
    ) -> AnimationRecord:
        """
        Start a new animation.

        Args:
            kind: Effect to play.
            row: Row of the animated cell.
            col: Column of the animated cell.
            duration: Lifetime in seconds.

        Returns:
            The record that was added.
        """
        record = AnimationRecord(kind, row, col, duration)
        self._records.append(record)
        return record

    def tick(self, dt: float) -> None:
        """Advance every animation by dt and drop the finished ones."""
        for record in self._records:
            record.elapsed += dt
        self._records = [r for r in self._records if not r.finished]

    def snapshot(self) -> Tuple[AnimationFrame, ...]:
        """Frames for every live animation."""
        return tuple(
            AnimationFrame(r.kind, r.row, r.col, r.progress)
            for r in self._records
        )

    def clear(self) -> None:
        """Drop every running animation."""
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)


# ============================================================================
# Particles
# ============================================================================

Color = Tuple[float, float, float]

DETONATION_COLOR: Color = (1.0, 0.2, 0.2)
VICTORY_COLOR: Color = (0.2, 1.0, 0.2)

PARTICLE_SPEED = 40.0
PARTICLE_SPIN = 4.0
PARTICLE_LIFE = (0.5, 1.2)
PARTICLE_SIZE = (2, 5)


@dataclass(frozen=True)
class ParticleFrame:
    """Read-only view of a particle for the renderer."""

    x: float
    y: float
    rotation: float
    size: int
    color: Color
    alpha: float


class ParticleSystem:
    """
    Cosmetic particles stored as parallel numpy arrays.

    Each particle has a position, a velocity, a rotation with angular
    velocity, and a remaining lifetime. A tick integrates all of them at
    once and removes the ones whose lifetime has run out.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        """
        Initialize an empty particle system.

        Args:
            seed: Random seed for reproducibility.
        """
        self.rng = np.random.default_rng(seed)
        self.clear()

    def clear(self) -> None:
        """Remove every particle."""
        self._pos = np.zeros((0, 2), dtype=np.float64)
        self._vel = np.zeros((0, 2), dtype=np.float64)
        self._rotation = np.zeros(0, dtype=np.float64)
        self._spin = np.zeros(0, dtype=np.float64)
        self._life = np.zeros(0, dtype=np.float64)
        self._size = np.zeros(0, dtype=np.int64)
        self._color = np.zeros((0, 3), dtype=np.float64)

    def emit(self, x: float, y: float, color: Color, count: int = 8) -> None:
        """
        Spawn particles at a point, flying outward in random directions.

        Args:
            x: Horizontal pixel position.
            y: Vertical pixel position.
            color: RGB color in [0, 1].
            count: Number of particles.
        """
        if count <= 0:
            return

        pos = np.tile(np.array([x, y], dtype=np.float64), (count, 1))
        vel = self.rng.uniform(-PARTICLE_SPEED, PARTICLE_SPEED, size=(count, 2))
        spin = self.rng.uniform(-PARTICLE_SPIN, PARTICLE_SPIN, size=count)
        life = self.rng.uniform(*PARTICLE_LIFE, size=count)
        size = self.rng.integers(PARTICLE_SIZE[0], PARTICLE_SIZE[1], size=count,
                                 endpoint=True)
        rotation = self.rng.uniform(0.0, 2 * math.pi, size=count)
        colors = np.tile(np.array(color, dtype=np.float64), (count, 1))

        self._pos = np.concatenate([self._pos, pos])
        self._vel = np.concatenate([self._vel, vel])
        self._rotation = np.concatenate([self._rotation, rotation])
        self._spin = np.concatenate([self._spin, spin])
        self._life = np.concatenate([self._life, life])
        self._size = np.concatenate([self._size, size])
        self._color = np.concatenate([self._color, colors])

    def tick(self, dt: float) -> None:
        """Integrate motion by dt and drop expired particles."""
        if not len(self):
            return

        self._life -= dt
        self._pos += self._vel * dt
        self._rotation += self._spin * dt

        alive = self._life > 0
        if not alive.all():
            self._pos = self._pos[alive]
            self._vel = self._vel[alive]
            self._rotation = self._rotation[alive]
            self._spin = self._spin[alive]
            self._life = self._life[alive]
            self._size = self._size[alive]
            self._color = self._color[alive]

    def snapshot(self) -> Tuple[ParticleFrame, ...]:
        """Frames for every live particle, fading out over the last 0.5s."""
        return tuple(
            ParticleFrame(
                x=float(self._pos[i, 0]),
                y=float(self._pos[i, 1]),
                rotation=float(self._rotation[i]),
                size=int(self._size[i]),
                color=tuple(float(c) for c in self._color[i]),
                alpha=min(1.0, float(self._life[i]) * 2),
            )
            for i in range(len(self))
        )

    def __len__(self) -> int:
        return int(self._life.shape[0])
