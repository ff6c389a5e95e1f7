# cli_driver.py
# This file is intended to be run to play the tile board on the CLI

from typing import Optional
import time

from core import DIRECTION, Board
from director import MoveDirector
from settings import Settings, configure_logging, load_settings

DIRECTION_KEYS = {'W': DIRECTION.UP, 'A': DIRECTION.LEFT, 'S': DIRECTION.DOWN, 'D': DIRECTION.RIGHT}

def main(settings: Optional[Settings] = None):
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    # 1. Setup menu: ask for the board size
    dimensions = ask_dimensions(settings)
    if dimensions is None:
        print("Quitting game.")
        return
    height, width = dimensions
    director = MoveDirector.new_session(height, width, settings.settle_delay)
    display_board_state(director.board)

    # 2. Game Loop
    while True:
        move_input = input("Enter move (W/A/S/D, R to reset, M for menu, Q to quit): ").strip().upper()

        if move_input == 'Q':
            print("Quitting game.")
            break

        if move_input == 'R':
            director.reset()
            display_board_state(director.board)
            continue

        if move_input == 'M':
            dimensions = ask_dimensions(settings)
            if dimensions is None:
                print("Quitting game.")
                break
            director.new_game(*dimensions)
            display_board_state(director.board)
            continue

        chosen_direction = DIRECTION_KEYS.get(move_input)
        if not chosen_direction:
            print("Unknown command. Use W, A, S, D, R, M or Q.")
            continue

        # 3. Process the move; a tile is spawned only if the board changed
        result = director.apply(chosen_direction)
        if not result.changed:
            print("Move did not change the board. Try a different direction.")
        time.sleep(result.settle_delay)

        display_board_state(result.board)


def parse_dimension(text: str, default: int) -> int:
    """
    Parses one board dimension typed by the user.
    Args:
        text (str): Raw input. Blank input selects `default`.
        default (int): Value used for blank input.
    Returns:
        int: A positive integer.
    Raises:
        ValueError: If the text is not a positive integer.
    """
    text = text.strip()
    if not text:
        return default
    value = int(text)
    if value <= 0:
        raise ValueError(f"Dimension must be positive, got {value}.")
    return value

def ask_dimensions(settings: Settings):
    """Prompts until valid width and height are entered. Returns None if the user quits."""
    print("\n--- New Board ---")
    answers = {}
    for name, default in (("Width", settings.default_width), ("Height", settings.default_height)):
        while True:
            raw = input(f"{name} (default {default}, Q to quit): ")
            if raw.strip().upper() == 'Q':
                return None
            try:
                answers[name] = parse_dimension(raw, default)
                break
            except ValueError:
                print(f"Invalid {name.lower()}: enter a positive whole number.")
    return answers["Height"], answers["Width"]


# --- Display Function ---
def display_board_state(board: Board):
    """Prints the board, one row per line, '.' for empty cells."""
    print()
    for row in board.rows():
        print("\t".join("." if value is None else str(value) for value in row))
    print("-" * (board.width * 8))

if __name__ == "__main__":
    main()
