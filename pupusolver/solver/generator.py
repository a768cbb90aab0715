"""
Move Generator Module - Enumerates the slides available on a board.
"""

from typing import Iterator, List, Optional

from .board import BoardState
from .move import Move
from .tiles import Tile, MOBILE_TILES

# Left first, then right
DIRECTIONS = (-1, 1)


def _reachable_columns(board: BoardState, row: int, col: int, direction: int) -> Iterator[int]:
    """
    Yield the columns the tile at (row, col) may be slid to in one direction.

    The tile travels over empty cells. Each empty cell is a stop; travel
    ends after a stop with nothing underneath (the tile would fall) or
    with a tile of the same kind underneath (it would match).
    """
    tile = board.get_cell(row, col)
    target = col + direction
    while board.get_cell(row, target) == Tile.EMPTY:
        yield target
        below = board.get_cell(row + 1, target)
        if below == Tile.EMPTY or below == tile:
            break
        target += direction


def possible_moves(board: BoardState) -> List[Move]:
    """
    Find all slides available on the board.

    Tiles are visited in row-major order, each trying left then right,
    so the result is deterministic for a given grid.

    Args:
        board: Current board state

    Returns:
        List of Move objects, none targeting a non-empty cell
    """
    moves = []
    for row_idx, row in enumerate(board.grid):
        for col_idx, tile in enumerate(row):
            if tile not in MOBILE_TILES:
                continue
            for direction in DIRECTIONS:
                for target in _reachable_columns(board, row_idx, col_idx, direction):
                    moves.append(Move(row=row_idx, from_col=col_idx, to_col=target))
    return moves


def illegal_move_reason(board: BoardState, move: Move) -> Optional[str]:
    """
    Explain why a move would not be offered by possible_moves().

    Args:
        board: Board the move is meant for
        move: Move to check

    Returns:
        None if the move is legal, otherwise a short reason
    """
    if not (0 <= move.row < board.rows and 0 <= move.from_col < board.cols):
        return "source outside the playfield"
    if board.get_cell(move.row, move.from_col) not in MOBILE_TILES:
        return "source tile cannot be moved"
    if move.to_col == move.from_col:
        return "destination equals source"
    if move.to_col not in _reachable_columns(board, move.row, move.from_col, move.direction):
        return "destination not reachable"
    return None


def is_legal_move(board: BoardState, move: Move) -> bool:
    """True if possible_moves(board) would include move."""
    return illegal_move_reason(board, move) is None
