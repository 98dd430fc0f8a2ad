"""
Reveal scheduler for frame-paced flood fill.

Cells queued here are revealed one per simulation tick, which turns
the cascade over an empty region into a visible ripple.
"""
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Deque, Optional, Set, Tuple

if TYPE_CHECKING:
    from .board import Board, RevealOutcome


@dataclass(frozen=True)
class RevealTask:
    """A cell waiting to be revealed."""

    row: int
    col: int


class RevealScheduler:
    """
    FIFO queue of pending reveals.

    A cell already waiting in the queue is not queued a second time, so a
    cell bordering two empty cells is drained once.
    """

    def __init__(self) -> None:
        self._queue: Deque[RevealTask] = deque()
        self._pending: Set[Tuple[int, int]] = set()

    def enqueue(self, row: int, col: int) -> bool:
        """
        Append a cell to the back of the queue.

        Returns:
            True if queued, False if the cell was already waiting.
        """
        if (row, col) in self._pending:
            return False
        self._pending.add((row, col))
        self._queue.append(RevealTask(row, col))
        return True

    def drain_one(self, board: "Board") -> Optional["RevealOutcome"]:
        """
        Pop the front task and reveal it on the board.

        Args:
            board: Board that owns the queued cells.

        Returns:
            Outcome of the reveal, or None if the queue was empty.
        """
        if not self._queue:
            return None
        task = self._queue.popleft()
        self._pending.discard((task.row, task.col))
        return board.reveal_at(task.row, task.col)

    def peek(self) -> Optional[RevealTask]:
        """Next task to be drained, if any."""
        return self._queue[0] if self._queue else None

    def clear(self) -> None:
        """Discard every pending task."""
        self._queue.clear()
        self._pending.clear()

    def __contains__(self, position: Tuple[int, int]) -> bool:
        return position in self._pending

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)
