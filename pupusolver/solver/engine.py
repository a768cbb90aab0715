"""
Transition Engine Module - Applies a move and resolves gravity and matches.

All functions here work on a mutable working copy (list of row lists)
of a board grid. Boards themselves are never modified; apply_move()
copies the grid, mutates the copy and freezes it into a new BoardState.
"""

from typing import List, Set, Tuple

from .board import BoardState, Grid
from .errors import IllegalMove
from .generator import illegal_move_reason
from .move import Move
from .tiles import Tile, MOBILE_TILES, ERASABLE_TILES

Cells = List[List[Tile]]

# Minimum size of a connected group of equal tiles that vanishes
MIN_GROUP_SIZE = 2


def apply_move(board: BoardState, move: Move) -> BoardState:
    """
    Slide a tile and let the board settle.

    Args:
        board: Board to start from (not modified)
        move: Move to apply, as produced by possible_moves()

    Returns:
        New stable BoardState whose path ends with move

    Raises:
        IllegalMove: If the generator would not offer this move
    """
    reason = illegal_move_reason(board, move)
    if reason:
        raise IllegalMove(move, reason)

    cells = board.to_list()
    row = cells[move.row]
    tile = row[move.from_col]
    row[move.from_col] = Tile.EMPTY
    row[move.to_col] = tile

    settle(cells)
    return BoardState(grid=_freeze(cells), path=board.path + (move,))


def settle_board(board: BoardState) -> BoardState:
    """Return board brought to its fixed point, keeping its path."""
    cells = board.to_list()
    if not settle(cells):
        return board
    return BoardState(grid=_freeze(cells), path=board.path)


def settle(cells: Cells) -> bool:
    """
    Run gravity and removal passes until neither changes anything.

    Gravity can open up new matches and removals can leave tiles
    hanging, so both passes repeat until one full cycle is quiet.

    Args:
        cells: Working grid, modified in place

    Returns:
        True if any cell changed
    """
    changed_any = False
    while True:
        dropped = drop_tiles(cells)
        removed = remove_tiles(cells)
        if not (dropped or removed):
            return changed_any
        changed_any = True


def drop_tiles(cells: Cells) -> bool:
    """
    Gravity pass: let every hanging mobile tile fall.

    Rows are scanned bottom-up, starting one above the bottom row, and
    each tile drops straight to the lowest empty cell of the run below
    it, so a single pass leaves no tile hanging.

    Args:
        cells: Working grid, modified in place

    Returns:
        True if any tile fell
    """
    height = len(cells)
    changed = False
    for y in range(height - 2, -1, -1):
        row = cells[y]
        for x, tile in enumerate(row):
            if tile not in MOBILE_TILES or cells[y + 1][x] != Tile.EMPTY:
                continue
            target = y + 1
            while target + 1 < height and cells[target + 1][x] == Tile.EMPTY:
                target += 1
            row[x] = Tile.EMPTY
            cells[target][x] = tile
            changed = True
    return changed


def remove_tiles(cells: Cells) -> bool:
    """
    Removal pass: clear every group of 2+ connected equal erasable tiles.

    Each cell is assigned to at most one group per pass.

    Args:
        cells: Working grid, modified in place

    Returns:
        True if any tile was removed
    """
    decided: Set[Tuple[int, int]] = set()
    changed = False
    for y, row in enumerate(cells):
        for x in range(len(row)):
            if row[x] not in ERASABLE_TILES or (y, x) in decided:
                continue
            group = connected_group(cells, y, x)
            decided |= group
            if len(group) >= MIN_GROUP_SIZE:
                for gy, gx in group:
                    cells[gy][gx] = Tile.EMPTY
                changed = True
    return changed


def connected_group(cells: Cells, row: int, col: int) -> Set[Tuple[int, int]]:
    """
    Flood-fill the 4-connected group of tiles equal to the one at (row, col).

    Uses an explicit stack so large groups cannot hit the recursion limit.

    Args:
        cells: Working grid
        row: Start row
        col: Start column

    Returns:
        Set of (row, col) positions in the group, including the start
    """
    height = len(cells)
    width = len(cells[0]) if height else 0
    tile = cells[row][col]

    group = {(row, col)}
    stack = [(row, col)]
    while stack:
        r, c = stack.pop()
        for nr, nc in ((r, c - 1), (r, c + 1), (r - 1, c), (r + 1, c)):
            if not (0 <= nr < height and 0 <= nc < width):
                continue
            if (nr, nc) in group or cells[nr][nc] != tile:
                continue
            group.add((nr, nc))
            stack.append((nr, nc))
    return group


def _freeze(cells: Cells) -> Grid:
    return tuple(tuple(row) for row in cells)
