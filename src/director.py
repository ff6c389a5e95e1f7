# director.py
# The move director owns a game session's board and is its only writer.

from dataclasses import dataclass
from typing import Optional
import logging
import random

import core

logger = logging.getLogger(__name__)

class MoveInProgress(RuntimeError):
    """Raised when a move is requested while another one is still being applied."""

@dataclass
class MoveResult:
    """What a directional command produced, handed back to the caller for rendering."""
    board: core.Board
    changed: bool
    spawned_id: Optional[int]
    # Cosmetic pacing hint in seconds. The board is already final when this is returned.
    settle_delay: float

class MoveDirector:
    """
    Routes directional commands to a single board, one move at a time.
    Args:
        board (core.Board): The board of the running session.
        settle_delay (float): Pacing hint attached to every result; never slept on here.
    """

    def __init__(self, board: core.Board, settle_delay: float = 0.05):
        self.board = board
        self.settle_delay = settle_delay
        self._in_flight = False

    @classmethod
    def new_session(cls, height: int, width: int, settle_delay: float = 0.05,
                    rng: Optional[random.Random] = None) -> "MoveDirector":
        return cls(core.create_board(height, width, rng), settle_delay)

    def apply(self, direction: core.DIRECTION) -> MoveResult:
        """
        Applies one directional command to the board.
        Args:
            direction (core.DIRECTION): The requested direction. Other values leave the board as is.
        Returns:
            MoveResult: The mutated board, whether it changed and where a tile spawned.
        Raises:
            MoveInProgress: If called again before the current move has finished.
        """
        if self._in_flight:
            raise MoveInProgress("A move is already being applied to this board.")
        self._in_flight = True
        try:
            spawned_id = self.board.move(direction)
        finally:
            self._in_flight = False
        changed = spawned_id is not None
        logger.debug("Move %s: changed=%s spawned=%s", getattr(direction, "name", direction), changed, spawned_id)
        return MoveResult(self.board, changed, spawned_id, self.settle_delay)

    def reset(self) -> core.Board:
        """Replaces the board with a freshly seeded one of the same size."""
        return self.new_game(self.board.height, self.board.width)

    def new_game(self, height: int, width: int) -> core.Board:
        self.board = core.create_board(height, width, self.board.rng)
        logger.info("Started %dx%d game", height, width)
        return self.board
