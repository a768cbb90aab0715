"""
Board State Module - Immutable playfield representation for the Pupu puzzle.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple, TYPE_CHECKING

from .errors import InvalidLevelDimensions, UnknownTileSymbol
from .tiles import Tile, SYMBOL_TO_TILE, ERASABLE_KINDS, ERASABLE_TILES

if TYPE_CHECKING:
    from .move import Move


PLAYFIELD_WIDTH = 12
PLAYFIELD_HEIGHT = 12

Grid = Tuple[Tuple[Tile, ...], ...]


@dataclass(frozen=True)
class BoardState:
    """
    Immutable board state representation.

    Uses tuple-of-tuples for hashability and immutability. Coordinates
    outside the grid read as Tile.WALL, which acts as the one-cell wall
    border around the playfield without being stored.

    Equality and hashing only look at the grid: two boards reached by
    different move sequences are the same search state.

    Attributes:
        grid: Tuple of rows, each a tuple of Tile values (row 0 = top)
        path: Moves that led from the initial board to this one
    """
    grid: Grid
    path: Tuple['Move', ...] = ()

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        width: int = PLAYFIELD_WIDTH,
        height: int = PLAYFIELD_HEIGHT,
    ) -> 'BoardState':
        """
        Create BoardState from rows of level symbols.

        Args:
            rows: One string per row, one symbol per cell
            width: Required number of columns
            height: Required number of rows

        Returns:
            BoardState with an empty path

        Raises:
            InvalidLevelDimensions: Wrong number of rows or columns
            UnknownTileSymbol: A character is not in the symbol table
        """
        if len(rows) != height:
            raise InvalidLevelDimensions((height, width), (len(rows), len(rows[0]) if rows else 0))

        grid = []
        for r, line in enumerate(rows):
            if len(line) != width:
                raise InvalidLevelDimensions((height, width), (len(rows), len(line)))
            row = []
            for c, symbol in enumerate(line):
                tile = SYMBOL_TO_TILE.get(symbol)
                if tile is None:
                    raise UnknownTileSymbol(symbol, r, c)
                row.append(tile)
            grid.append(tuple(row))

        return cls(grid=tuple(grid))

    @classmethod
    def from_text(
        cls,
        text: str,
        width: int = PLAYFIELD_WIDTH,
        height: int = PLAYFIELD_HEIGHT,
    ) -> 'BoardState':
        """
        Create BoardState from level text.

        Lines are stripped and blank lines are ignored, so indented
        or blank-padded level files load as-is.

        Args:
            text: Level data, one row per line
            width: Required number of columns
            height: Required number of rows

        Returns:
            BoardState with an empty path
        """
        lines = [line.strip() for line in text.split("\n")]
        return cls.from_rows([line for line in lines if line], width=width, height=height)

    @classmethod
    def from_tiles(
        cls,
        rows: Sequence[Sequence[int]],
        width: int = PLAYFIELD_WIDTH,
        height: int = PLAYFIELD_HEIGHT,
    ) -> 'BoardState':
        """
        Create BoardState from a 2D list of tile values.

        Args:
            rows: 2D list of Tile (or int tile values)
            width: Required number of columns
            height: Required number of rows

        Returns:
            BoardState with an empty path
        """
        if len(rows) != height:
            raise InvalidLevelDimensions((height, width), (len(rows), len(rows[0]) if rows else 0))
        for row in rows:
            if len(row) != width:
                raise InvalidLevelDimensions((height, width), (len(rows), len(row)))
        return cls(grid=tuple(tuple(Tile(value) for value in row) for row in rows))

    @property
    def key(self) -> Grid:
        """Visited-set key: the raw grid, without history."""
        return self.grid

    @property
    def rows(self) -> int:
        """Get number of rows in board."""
        return len(self.grid)

    @property
    def cols(self) -> int:
        """Get number of columns in board."""
        return len(self.grid[0]) if self.rows > 0 else 0

    @property
    def move_count(self) -> int:
        return len(self.path)

    def get_cell(self, row: int, col: int) -> Tile:
        """
        Get tile at specific cell position.

        Args:
            row: Row index
            col: Column index

        Returns:
            Tile at the position, Tile.WALL outside the playfield
        """
        if 0 <= row < len(self.grid) and 0 <= col < len(self.grid[row]):
            return self.grid[row][col]
        return Tile.WALL

    def tile_counts(self) -> List[int]:
        """
        Count cells of each erasable kind.

        Returns:
            List indexed by erasable tile value (HEART..FRAME)
        """
        counts = [0] * ERASABLE_KINDS
        for row in self.grid:
            for tile in row:
                if tile in ERASABLE_TILES:
                    counts[tile] += 1
        return counts

    def erasable_count(self) -> int:
        """Number of erasable tiles left on the board."""
        return sum(self.tile_counts())

    def is_solved(self) -> bool:
        """True when no erasable tiles remain (glass blocks may stay)."""
        for row in self.grid:
            for tile in row:
                if tile in ERASABLE_TILES:
                    return False
        return True

    def is_solvable(self) -> bool:
        """
        Cheap necessary condition for the board to still be clearable.

        A kind with exactly one tile left can never be matched, so such
        a board is a dead end. A True result does not guarantee that a
        solution exists.

        Returns:
            False if any erasable kind has a count of exactly 1
        """
        return 1 not in self.tile_counts()

    def apply_move(self, move: 'Move') -> 'BoardState':
        """
        Apply a move to create a new, stabilized board state.

        Original board is unchanged.

        Args:
            move: Move to apply

        Returns:
            New BoardState with the move appended to its path

        Raises:
            IllegalMove: If the move is not available on this board
        """
        from .engine import apply_move
        return apply_move(self, move)

    def settled(self) -> 'BoardState':
        """
        Return this board after gravity and removal reach a fixed point.

        Level data taken from a screenshot mid-animation may not be
        stable; search boards always are.
        """
        from .engine import settle_board
        return settle_board(self)

    def diff(self, other: 'BoardState') -> List[Tuple[int, int]]:
        """
        Find cells that differ between this board and another.

        Args:
            other: Another BoardState to compare against

        Returns:
            List of (row, col) tuples where cells differ
        """
        if not isinstance(other, BoardState):
            raise TypeError("Can only diff against another BoardState")

        differences = []
        for r in range(self.rows):
            for c in range(self.cols):
                if self.grid[r][c] != other.get_cell(r, c):
                    differences.append((r, c))

        return differences

    def to_text(self) -> str:
        """Render the board as level text, one line per row."""
        return "".join(
            "".join(tile.symbol for tile in row) + "\n" for row in self.grid
        )

    def to_list(self) -> List[List[Tile]]:
        """
        Convert to mutable 2D list representation.

        Returns:
            2D list representation of the board
        """
        return [list(row) for row in self.grid]

    def __hash__(self):
        """Enable using BoardState as dict key or in sets."""
        return hash(self.grid)

    def __eq__(self, other):
        """Boards are equal when their grids are, whatever their paths."""
        if not isinstance(other, BoardState):
            return False
        return self.grid == other.grid
