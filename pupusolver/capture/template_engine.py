"""
Template Matching Capture Engine

Reads a level from a screenshot by comparing each playfield cell with the
glyphs of a tile atlas. Pixels are reduced to black / not black before
comparison, so palette differences between the atlas and the screenshot
do not matter.
"""

import time
import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np
from PIL import Image

from ..solver import BoardState, Tile, LevelDataError, InvalidLevelDimensions, PLAYFIELD_WIDTH, PLAYFIELD_HEIGHT
from .result import GridInfo, CellResult, CaptureResult

logger = logging.getLogger(__name__)


# Glyph geometry (pixels)
TILE_SIZE = 16

# Pixels ignored along each cell edge, where the game may draw its cursor
CELL_BORDER = 2

# The atlas holds glyphs HEART..BACKGROUND; EMPTY is plain black
ATLAS_GLYPHS = Tile.BACKGROUND + 1

# Cells matching no glyph
FALLBACK_TILE = Tile.BACKGROUND


def binarize(image: Image.Image) -> np.ndarray:
    """
    Reduce an image to a 0/1 array: 0 for pure black pixels, 1 otherwise.

    Args:
        image: PIL Image in any mode

    Returns:
        uint8 array of shape (height, width)
    """
    rgb = np.asarray(image.convert("RGB"))
    return rgb.any(axis=2).astype(np.uint8)


class TileAtlas:
    """Binarized tile glyphs, indexed by tile value."""

    def __init__(self, glyphs: np.ndarray, tile_size: int = TILE_SIZE, border: int = CELL_BORDER):
        """
        Args:
            glyphs: Array of shape (len(Tile), tile_size, tile_size)
            tile_size: Glyph edge length in pixels
            border: Pixels ignored along each glyph edge when matching
        """
        if glyphs.shape != (len(Tile), tile_size, tile_size):
            raise ValueError(f"Expected glyphs of shape {(len(Tile), tile_size, tile_size)}, got {glyphs.shape}")
        if not 0 <= border < tile_size // 2:
            raise ValueError(f"Border {border} too large for tile size {tile_size}")
        self.glyphs = glyphs
        self.tile_size = tile_size
        self.border = border
        inner = slice(border, tile_size - border)
        self._interiors = glyphs[:, inner, inner]

    @classmethod
    def from_image(cls, image: Image.Image, tile_size: int = TILE_SIZE, border: int = CELL_BORDER) -> 'TileAtlas':
        """
        Load glyphs laid out left to right in tile order.

        Args:
            image: Atlas image, at least ATLAS_GLYPHS glyphs wide

        Returns:
            TileAtlas with an all-black EMPTY glyph

        Raises:
            LevelDataError: If the atlas image is too small
        """
        bits = binarize(image)
        height, width = bits.shape
        if height < tile_size or width < ATLAS_GLYPHS * tile_size:
            raise LevelDataError(
                f"Tile atlas must be at least {ATLAS_GLYPHS * tile_size}x{tile_size} pixels, got {width}x{height}"
            )

        glyphs = np.zeros((len(Tile), tile_size, tile_size), dtype=np.uint8)
        for index in range(ATLAS_GLYPHS):
            glyphs[index] = bits[:tile_size, index * tile_size:(index + 1) * tile_size]
        return cls(glyphs, tile_size=tile_size, border=border)

    @classmethod
    def from_file(cls, path: Union[str, Path], **kwargs) -> 'TileAtlas':
        """Load the atlas from an image file."""
        with Image.open(path) as image:
            return cls.from_image(image, **kwargs)

    def match(self, cell_bits: np.ndarray) -> Optional[Tile]:
        """
        Find the first glyph whose interior equals the cell interior.

        Args:
            cell_bits: Binarized cell of shape (tile_size, tile_size)

        Returns:
            Matching Tile, or None if no glyph matches exactly
        """
        inner = slice(self.border, self.tile_size - self.border)
        equal = (self._interiors == cell_bits[inner, inner]).all(axis=(1, 2))
        hits = np.flatnonzero(equal)
        if hits.size == 0:
            return None
        return Tile(int(hits[0]))


class ScreenshotLoader:
    """
    Reads the playfield from a screenshot with a tile atlas.

    The playfield origin is the first row and first column of the
    screenshot that contain a non-black pixel.
    """

    def __init__(self, atlas: TileAtlas, rows: int = PLAYFIELD_HEIGHT, cols: int = PLAYFIELD_WIDTH):
        """
        Args:
            atlas: Glyphs to match cells against
            rows: Playfield rows
            cols: Playfield columns
        """
        self.atlas = atlas
        self.rows = rows
        self.cols = cols

    def process(self, image: Image.Image) -> CaptureResult:
        """
        Process a screenshot and extract the playfield tiles.

        Args:
            image: PIL Image of the game screen

        Returns:
            CaptureResult with one tile per cell

        Raises:
            LevelDataError: If the screenshot is entirely black
            InvalidLevelDimensions: If the playfield does not fit the image
        """
        start_time = time.perf_counter()
        bits = binarize(image)
        grid_info = self._detect_grid(bits)

        tiles: List[List[Tile]] = []
        cell_results: List[CellResult] = []
        unmatched = 0
        size = self.atlas.tile_size

        for row in range(self.rows):
            tile_row = []
            for col in range(self.cols):
                x, y = grid_info.cell_origin(row, col)
                tile = self.atlas.match(bits[y:y + size, x:x + size])
                matched = tile is not None
                if not matched:
                    tile = FALLBACK_TILE
                    unmatched += 1
                tile_row.append(tile)
                cell_results.append(CellResult(row=row, col=col, tile=tile, matched=matched, position=(x, y)))
            tiles.append(tile_row)

        if unmatched:
            logger.warning(f"{unmatched} cells matched no glyph, read as {FALLBACK_TILE.name}")

        processing_time = (time.perf_counter() - start_time) * 1000
        logger.debug(f"Captured {self.rows}x{self.cols} playfield at {grid_info.origin} in {processing_time:.1f}ms")

        return CaptureResult(
            tiles=tiles,
            grid_info=grid_info,
            cell_results=cell_results,
            unmatched_count=unmatched,
            processing_time_ms=processing_time
        )

    def _detect_grid(self, bits: np.ndarray) -> GridInfo:
        """Locate the playfield: top-most and left-most non-black pixels."""
        filled_rows = np.flatnonzero(bits.any(axis=1))
        filled_cols = np.flatnonzero(bits.any(axis=0))
        if filled_rows.size == 0:
            raise LevelDataError("Screenshot is entirely black, no playfield found")

        top = int(filled_rows[0])
        left = int(filled_cols[0])
        size = self.atlas.tile_size
        height, width = bits.shape
        available: Tuple[int, int] = ((height - top) // size, (width - left) // size)
        if available[0] < self.rows or available[1] < self.cols:
            raise InvalidLevelDimensions(
                (self.rows, self.cols), available,
                f"Screenshot holds {available[0]}x{available[1]} cells from ({left},{top}), "
                f"needs {self.rows}x{self.cols}"
            )

        return GridInfo(origin=(left, top), rows=self.rows, cols=self.cols, tile_size=size)


def load_board_from_screenshot(screenshot: Union[str, Path], atlas: Union[str, Path]) -> BoardState:
    """
    Read the initial board from screenshot and atlas image files.

    Args:
        screenshot: Path to the game screenshot
        atlas: Path to the tile atlas image

    Returns:
        BoardState read from the screenshot
    """
    loader = ScreenshotLoader(TileAtlas.from_file(atlas))
    with Image.open(screenshot) as image:
        result = loader.process(image)
    return result.to_board()
