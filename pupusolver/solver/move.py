"""
Move Module - Represents a horizontal slide of one tile.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Move:
    """
    Represents a tile sliding horizontally along its row.

    Falling is never an explicit move; it follows from gravity once
    the slide has been applied.

    Attributes:
        row: Row of the moved tile (0 = top)
        from_col: Column the tile starts in
        to_col: Column the tile is slid to
    """
    row: int
    from_col: int
    to_col: int

    @property
    def direction(self) -> int:
        """-1 for a slide to the left, 1 for a slide to the right."""
        return -1 if self.to_col < self.from_col else 1

    @property
    def distance(self) -> int:
        """Number of cells the tile travels."""
        return abs(self.to_col - self.from_col)

    def __str__(self) -> str:
        # (x,y) notation: column first, as the level editor shows it
        return f"({self.from_col},{self.row})->({self.to_col},{self.row})"


def format_move(index: int, move: Move) -> str:
    """
    Format a move as a numbered solution step.

    Args:
        index: 0-based position in the solution
        move: Move to describe

    Returns:
        e.g. "Step 1: (6,3)->(5,3)"
    """
    return f"Step {index + 1}: {move}"
