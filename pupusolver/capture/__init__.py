"""
Capture Module for Pupu Solver

Reads a level from a game screenshot by template matching against a
tile atlas.

Usage:
    from pupusolver.capture import TileAtlas, ScreenshotLoader

    atlas = TileAtlas.from_file("tiles.png")
    loader = ScreenshotLoader(atlas)

    result = loader.process(image)
    board = result.to_board()
"""

# Public API - Result types
from .result import (
    GridInfo,
    CellResult,
    CaptureResult,
)

# Public API - Template engine
from .template_engine import (
    TileAtlas,
    ScreenshotLoader,
    binarize,
    load_board_from_screenshot,
    TILE_SIZE,
    CELL_BORDER,
    ATLAS_GLYPHS,
)

__all__ = [
    # Result types
    "GridInfo",
    "CellResult",
    "CaptureResult",
    # Engine
    "TileAtlas",
    "ScreenshotLoader",
    # Functions
    "binarize",
    "load_board_from_screenshot",
    # Constants
    "TILE_SIZE",
    "CELL_BORDER",
    "ATLAS_GLYPHS",
]
