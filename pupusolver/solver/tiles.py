"""
Tiles Module - Tile kinds and the fixed symbol table for level data.
"""

from enum import IntEnum
from types import MappingProxyType
from typing import Mapping


class Tile(IntEnum):
    """
    Closed set of cell kinds on the playfield.

    Values follow the glyph order of the tile atlas, so a tile value is
    also its glyph index in a screenshot atlas. Erasable kinds come first
    and double as counting indices 0..ERASABLE_KINDS-1.
    """
    HEART = 0
    DIAMOND = 1
    TRIANGLE = 2
    RING = 3
    CROSS1 = 4
    SANDGLASS = 5
    CROSS2 = 6
    FRAME = 7
    GLASS = 8
    WALL = 9
    BACKGROUND = 10
    EMPTY = 11

    @property
    def is_mobile(self) -> bool:
        """True if the tile falls under gravity and can be slid."""
        return self <= Tile.GLASS

    @property
    def is_erasable(self) -> bool:
        """True if the tile takes part in match removal."""
        return self <= Tile.FRAME

    @property
    def symbol(self) -> str:
        return TILE_TO_SYMBOL[self]


# Number of erasable kinds (HEART..FRAME)
ERASABLE_KINDS = Tile.FRAME + 1

# Lookup sets for the hot loops of the transition engine
MOBILE_TILES = frozenset(t for t in Tile if t.is_mobile)
ERASABLE_TILES = frozenset(t for t in Tile if t.is_erasable)

SYMBOL_TO_TILE: Mapping[str, Tile] = MappingProxyType({
    'H': Tile.HEART,
    'D': Tile.DIAMOND,
    'T': Tile.TRIANGLE,
    'R': Tile.RING,
    '1': Tile.CROSS1,
    'S': Tile.SANDGLASS,
    '2': Tile.CROSS2,
    'F': Tile.FRAME,
    'G': Tile.GLASS,
    '#': Tile.WALL,
    'P': Tile.BACKGROUND,
    '.': Tile.EMPTY,
})

TILE_TO_SYMBOL: Mapping[Tile, str] = MappingProxyType(
    {tile: symbol for symbol, tile in SYMBOL_TO_TILE.items()}
)

SYMBOL_HELP = """Valid characters:

'H' -> Heart tile
'D' -> Diamond tile
'T' -> Triangle tile
'R' -> Ring tile
'1' -> Cross #1 tile
'S' -> Sandglass tile
'2' -> Cross #2 tile
'F' -> Frame tile
'G' -> Glass block (falls, never matches)
'#' -> Wall
'P' -> Background/Pattern
'.' -> Empty

Example data (Level 93):

PPPPPPPPPPPP
PPPPPPPPPPPP
PPPPP##PPPPP
PPPP#.R#PPPP
PPP#..2R#PPP
PP#...S2F#PP
PP#...FS1#PP
PPP#..1R#PPP
PPPP#.F#PPPP
PPPPP##PPPPP
PPPPPPPPPPPP
PPPPPPPPPPPP
"""
