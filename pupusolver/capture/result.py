"""
Capture Result Dataclasses

Shared data structures for screenshot level capture results.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..solver import BoardState, Tile


@dataclass
class GridInfo:
    """Playfield location within the screenshot."""
    origin: Tuple[int, int]  # (x, y) top-left pixel of cell (0, 0)
    rows: int
    cols: int
    tile_size: int  # Edge length of one square cell in pixels

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """(x, y, width, height) of the playfield area."""
        x, y = self.origin
        return (x, y, self.cols * self.tile_size, self.rows * self.tile_size)

    def cell_origin(self, row: int, col: int) -> Tuple[int, int]:
        """(x, y) top-left pixel of a cell."""
        x, y = self.origin
        return (x + col * self.tile_size, y + row * self.tile_size)


@dataclass
class CellResult:
    """Per-cell capture result."""
    row: int
    col: int
    tile: Tile
    matched: bool              # False if no glyph matched and the cell defaulted
    position: Tuple[int, int]  # (x, y) top-left pixel


@dataclass
class CaptureResult:
    """Complete capture result for a screenshot."""
    tiles: List[List[Tile]]            # 2D array [row][col] of tiles
    grid_info: Optional[GridInfo]      # Playfield location
    cell_results: List[CellResult] = field(default_factory=list)
    unmatched_count: int = 0           # Cells that matched no glyph
    processing_time_ms: float = 0.0    # Time taken

    @property
    def total_cells(self) -> int:
        return len(self.cell_results)

    def to_board(self) -> BoardState:
        """
        Build the initial board from the captured tiles.

        Returns:
            BoardState with the dimensions of the captured grid
        """
        rows = len(self.tiles)
        cols = len(self.tiles[0]) if rows else 0
        return BoardState.from_tiles(self.tiles, width=cols, height=rows)
