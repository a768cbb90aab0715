"""
Errors Module - Exceptions raised for bad level data and illegal moves.
"""

from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .move import Move


class LevelDataError(ValueError):
    """Level data could not be turned into a board."""


class InvalidLevelDimensions(LevelDataError):
    """
    Level data has the wrong number of rows or columns.

    Attributes:
        expected: (rows, cols) the board requires
        actual: (rows, cols) found, cols is the offending row length
    """

    def __init__(self, expected: Tuple[int, int], actual: Tuple[int, int], message: str = ""):
        self.expected = expected
        self.actual = actual
        if not message:
            message = (
                f"Bad level data, needs to be {expected[0]} lines of "
                f"{expected[1]} chars per line (got {actual[0]}x{actual[1]})"
            )
        super().__init__(message)


class UnknownTileSymbol(LevelDataError):
    """
    Level data contains a character outside the symbol table.

    Attributes:
        symbol: The offending character
        row: Row index of the character
        col: Column index of the character
    """

    def __init__(self, symbol: str, row: int, col: int):
        self.symbol = symbol
        self.row = row
        self.col = col
        super().__init__(f"'{symbol}' is not a valid tile (row {row}, column {col})")


class IllegalMove(ValueError):
    """
    Move cannot be applied to the board.

    Attributes:
        move: The rejected move
    """

    def __init__(self, move: 'Move', reason: str):
        self.move = move
        super().__init__(f"Illegal move {move}: {reason}")
