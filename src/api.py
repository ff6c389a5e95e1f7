from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field
from typing import List, Optional
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
import logging

import core
from director import MoveDirector
from settings import configure_logging, load_settings

settings = load_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Initialize the rate limiter
limiter = Limiter(key_func=get_remote_address)
app = FastAPI(
    title="Tile Board API",
    description="A stateless API for a sliding-tile board. "\
                "Keep the board (dimensions and cell values) on the client side.",
    version="1.0.0"
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# --- Pydantic Models for API requests and responses ---

class NewGameSettings(BaseModel):
    """Settings for creating a new board."""
    height: Optional[int] = Field(
        default=None,
        gt=0,
        description="Number of rows. Defaults to the server's configured height."
    )
    width: Optional[int] = Field(
        default=None,
        gt=0,
        description="Number of columns. Defaults to the server's configured width."
    )

class CellData(BaseModel):
    """One cell of the board in row-major order."""
    id: int = Field(..., ge=0, description="Row-major position index (row * width + column).")
    value: Optional[int] = Field(default=None, description="Tile value, or null for an empty cell.")

class BoardStateData(BaseModel):
    """Represents the complete state of a board."""
    height: int = Field(..., gt=0, description="Number of rows.")
    width: int = Field(..., gt=0, description="Number of columns.")
    cells: List[CellData] = Field(..., description="Every cell of the board, ordered by id.")

class MoveRequestData(BaseModel):
    """Data required to make a move."""
    height: int = Field(..., gt=0, description="Number of rows of the current board.")
    width: int = Field(..., gt=0, description="Number of columns of the current board.")
    cells: List[Optional[int]] = Field(
        ...,
        description="Row-major cell values before the move, null for empty cells."
    )
    direction: core.DIRECTION = Field(
        ...,
        description="Direction of the move (UP, DOWN, LEFT, RIGHT)."
    )

class MoveResponseData(BoardStateData):
    """Response after a move, including the new board and move effectiveness."""
    move_was_effective: bool = Field(
        ...,
        description="True if the move changed the board (a new tile was spawned), False otherwise."
    )
    spawned_id: Optional[int] = Field(
        default=None,
        description="Id of the cell that received the new tile, if any."
    )
    settle_delay_ms: int = Field(
        ...,
        ge=0,
        description="Suggested pause before rendering the next move. Purely cosmetic."
    )
    message: Optional[str] = Field(
        default=None,
        description="An optional message, e.g. when the move did not change the board."
    )

def _board_state(board: core.Board) -> dict:
    return {
        "height": board.height,
        "width": board.width,
        "cells": [CellData(id=cell.id, value=cell.value) for cell in board.cells],
    }

# --- API Endpoints ---

@app.post("/game/new", response_model=BoardStateData, summary="Start a New Board")
@limiter.limit(settings.rate_limit)
async def start_new_game(request: Request, new_game: NewGameSettings):
    """
    Creates a new board seeded with two random tiles.

    - **height**: Number of rows. Default comes from TILEBOARD_DEFAULT_HEIGHT.
    - **width**: Number of columns. Default comes from TILEBOARD_DEFAULT_WIDTH.
    """
    height = new_game.height if new_game.height is not None else settings.default_height
    width = new_game.width if new_game.width is not None else settings.default_width
    try:
        board = core.create_board(height, width)
        return BoardStateData(**_board_state(board))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Unexpected error in /game/new")
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred during board creation: {str(e)}")


@app.post("/game/move", response_model=MoveResponseData, summary="Make a Move")
@limiter.limit(settings.rate_limit)
async def make_move(request: Request, request_data: MoveRequestData):
    """
    Applies a move to the board sent by the client.

    The API will:
    1. Slide the tiles toward the direction, merging equal neighbours once.
    2. If the board changed, place a new tile (2 or 4) on a random empty cell.

    Returns the updated board, whether the move was effective and where the new tile landed.
    """
    try:
        board = core.Board.from_values(request_data.height, request_data.width, request_data.cells)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid board in request: {str(e)}")

    try:
        result = MoveDirector(board, settings.settle_delay).apply(request_data.direction)
    except Exception as e:
        logger.exception("Unexpected error in /game/move")
        raise HTTPException(status_code=500, detail=f"An unexpected server error occurred while processing the move: {str(e)}")

    message_for_client = None
    if not result.changed:
        message_for_client = "Move was not effective; board state unchanged."

    return MoveResponseData(
        **_board_state(result.board),
        move_was_effective=result.changed,
        spawned_id=result.spawned_id,
        settle_delay_ms=int(round(result.settle_delay * 1000)),
        message=message_for_client
    )
