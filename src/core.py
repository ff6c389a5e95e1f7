# core.py
# This file holds the board engine: cells, the four-direction move pipeline and tile spawning.

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional
import logging
import random

logger = logging.getLogger(__name__)

# Ten equally likely slots: 90% chance of a 2, 10% chance of a 4.
TWO_OR_FOUR = (2, 2, 2, 2, 2, 2, 2, 2, 2, 4)
INITIAL_TILES = 2

class DIRECTION(Enum):
    """Represents the possible move directions."""
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4

class InvalidDimensions(ValueError):
    """Raised when a board is requested with non-positive or non-integer dimensions."""

class InvalidBoard(ValueError):
    """Raised when client-held cell values cannot form a board."""

@dataclass
class Cell:
    """One grid slot. `id` is fixed at construction, only `value` changes."""
    id: int
    value: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.value is None

# --- Helpers ---

def cell_index(row: int, column: int, width: int) -> int:
    """Row-major flat index of (row, column)."""
    return column + row * width

def _check_dimensions(height: int, width: int) -> None:
    for name, dim in (("height", height), ("width", width)):
        # bool is an int subclass but never a dimension
        if isinstance(dim, bool) or not isinstance(dim, int) or dim <= 0:
            raise InvalidDimensions(f"Board {name} must be a positive integer, got {dim!r}.")

def _is_tile_value(value: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) \
        and value >= 2 and value & (value - 1) == 0

def draw_tile_value(rng: random.Random) -> int:
    """Draws a new tile value (2 or 4) from the fixed weighting."""
    return rng.choice(TWO_OR_FOUR)

# --- Board ---

class Board:
    """
    A fixed-size grid of cells stored as one row-major list indexed by cell id.

    The board is mutated in place by `move`. Two boards are equal when they have
    the same dimensions and every cell holds the same value.
    """

    def __init__(self, height: int, width: int, cells: List[Cell], rng: Optional[random.Random] = None):
        _check_dimensions(height, width)
        if len(cells) != height * width:
            raise InvalidBoard(f"Expected {height * width} cells for a {height}x{width} board, got {len(cells)}.")
        self.height = height
        self.width = width
        self.cells = cells
        self.rng = rng if rng is not None else random.Random()

    @classmethod
    def empty(cls, height: int, width: int, rng: Optional[random.Random] = None) -> "Board":
        return cls(height, width, [Cell(id) for id in range(height * width)], rng)

    @classmethod
    def from_values(cls, height: int, width: int, values: Iterable[Optional[int]],
                    rng: Optional[random.Random] = None) -> "Board":
        """
        Rebuilds a board from a flat row-major list of optional tile values.
        Args:
            height (int): Number of rows.
            width (int): Number of columns.
            values (Iterable[Optional[int]]): One entry per cell, None for empty.
            rng (Optional[random.Random]): Source of randomness for later spawns.
        Returns:
            Board: A board whose cell ids are the positions in `values`.
        Raises:
            InvalidDimensions: If height or width is not a positive integer.
            InvalidBoard: If the value count is wrong or a value is not a power of two >= 2.
        """
        _check_dimensions(height, width)
        values = list(values)
        for id, value in enumerate(values):
            if value is not None and not _is_tile_value(value):
                raise InvalidBoard(f"Cell {id} holds {value!r}; tiles must be powers of two >= 2.")
        return cls(height, width, [Cell(id, value) for id, value in enumerate(values)], rng)

    # --- Views ---

    def values(self) -> List[Optional[int]]:
        return [cell.value for cell in self.cells]

    def rows(self) -> List[List[Optional[int]]]:
        return [
            [self.cells[cell_index(row, column, self.width)].value for column in range(self.width)]
            for row in range(self.height)
        ]

    def empty_ids(self) -> List[int]:
        return [cell.id for cell in self.cells if cell.is_empty]

    def copy(self) -> "Board":
        """Snapshot of the cells. The copy shares this board's random source."""
        return Board(self.height, self.width, [Cell(cell.id, cell.value) for cell in self.cells], self.rng)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.height, self.width, self.cells) == (other.height, other.width, other.cells)

    def __repr__(self) -> str:
        return f"Board(height={self.height}, width={self.width}, values={self.values()!r})"

    # --- Line traversal ---

    def lines(self, direction: DIRECTION) -> List[List[int]]:
        """
        Lists the cell ids of every line for a direction, each ordered from the
        target edge outward (the first id is where tiles pile up).
        """
        if direction in (DIRECTION.LEFT, DIRECTION.RIGHT):
            lines = [[cell_index(row, column, self.width) for column in range(self.width)]
                     for row in range(self.height)]
            reverse = direction == DIRECTION.RIGHT
        else:
            lines = [[cell_index(row, column, self.width) for row in range(self.height)]
                     for column in range(self.width)]
            reverse = direction == DIRECTION.DOWN
        if reverse:
            lines = [line[::-1] for line in lines]
        return lines

    def _collapse(self, lines: List[List[int]]) -> None:
        """Packs the non-empty values of each line toward its first id, keeping their order."""
        for line in lines:
            packed = [self.cells[id].value for id in line if not self.cells[id].is_empty]
            if len(packed) == len(line):
                continue  # full line, nothing to close
            packed += [None] * (len(line) - len(packed))
            for id, value in zip(line, packed):
                self.cells[id].value = value

    def _merge(self, lines: List[List[int]]) -> None:
        # One pass per line. After a merge the cleared cell becomes `previous`,
        # so the doubled tile cannot take part in a second merge this move.
        for line in lines:
            previous = self.cells[line[0]]
            for id in line[1:]:
                current = self.cells[id]
                if not previous.is_empty and previous.value == current.value:
                    previous.value *= 2
                    current.value = None
                previous = current

    # --- Moves ---

    def slide(self, direction: DIRECTION) -> bool:
        """
        Collapses, merges and collapses again every line toward `direction`, without spawning.
        Args:
            direction (DIRECTION): The direction to move. Anything else is ignored.
        Returns:
            bool: True if any cell value changed.
        """
        if not isinstance(direction, DIRECTION):
            return False
        before = self.values()
        lines = self.lines(direction)
        self._collapse(lines)
        self._merge(lines)
        self._collapse(lines)
        return self.values() != before

    def spawn(self) -> Optional[int]:
        """
        Places one new tile (2 or 4) on a uniformly chosen empty cell.
        Returns:
            Optional[int]: The id of the new tile, or None if the board is full.
        """
        empty_ids = self.empty_ids()
        if not empty_ids:
            return None
        id = self.rng.choice(empty_ids)
        self.cells[id].value = draw_tile_value(self.rng)
        logger.debug("Spawned %d at cell %d", self.cells[id].value, id)
        return id

    def move(self, direction: DIRECTION) -> Optional[int]:
        """
        Applies a full move: slide toward `direction` and, if the board changed, spawn one tile.
        Args:
            direction (DIRECTION): The direction to move. Anything else is a no-op.
        Returns:
            Optional[int]: The id of the spawned tile, or None if the move changed nothing.
        """
        snapshot = self.copy()
        self.slide(direction)
        if self == snapshot:
            return None
        return self.spawn()

# --- Public entry points ---

def create_board(height: int, width: int, rng: Optional[random.Random] = None) -> Board:
    """
    Creates a new board seeded with two random tiles (one on a single-cell board).
    Args:
        height (int): Number of rows.
        width (int): Number of columns.
        rng (Optional[random.Random]): Source of randomness. A fresh one is used if omitted.
    Returns:
        Board: The seeded board.
    Raises:
        InvalidDimensions: If height or width is not a positive integer.
    """
    board = Board.empty(height, width, rng)
    seed_ids = board.rng.sample(range(height * width), min(INITIAL_TILES, height * width))
    for id in seed_ids:
        board.cells[id].value = draw_tile_value(board.rng)
    logger.debug("Created %dx%d board seeded at %s", height, width, seed_ids)
    return board

def apply_move(board: Board, direction: DIRECTION) -> Board:
    """Moves `board` in place and returns it."""
    board.move(direction)
    return board
