"""
Solution Module - Result of strategy computation and solution replay.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .board import BoardState
from .move import Move


@dataclass
class SolutionMetrics:
    """
    Performance metrics for solution computation.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        boards_examined: Boards taken from the frontier and expanded
        states_visited: Distinct boards recorded in the visited set
        pruned_branches: Candidates dropped as unsolvable
        duplicates: Candidates dropped as already visited
        max_frontier: Largest frontier size seen
        strategy_name: Name of strategy that computed this solution
    """
    computation_time_ms: float = 0.0
    boards_examined: int = 0
    states_visited: int = 0
    pruned_branches: int = 0
    duplicates: int = 0
    max_frontier: int = 0
    strategy_name: str = ""


@dataclass
class Solution:
    """
    Result of a strategy computation.

    Attributes:
        initial_board: Board the search started from
        final_board: Cleared board if solved, else None
        solved: True if a board without erasable tiles was reached
        was_cancelled: True if stopped by cancellation or timeout
        limit_reached: True if stopped by the max_states cap
        metrics: Performance statistics
    """
    initial_board: BoardState
    final_board: Optional[BoardState] = None
    solved: bool = False
    was_cancelled: bool = False
    limit_reached: bool = False
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def moves(self) -> List[Move]:
        """Ordered moves leading from the initial board to the solution."""
        if self.final_board is None:
            return []
        return list(self.final_board.path)

    @property
    def move_count(self) -> int:
        """Number of moves in solution."""
        return len(self.moves)

    @property
    def exhausted(self) -> bool:
        """True if the whole reachable space was searched without success."""
        return not (self.solved or self.was_cancelled or self.limit_reached)

    @property
    def board_states(self) -> List[BoardState]:
        """Board before the first move followed by the board after each move."""
        return self.replay()

    def replay(self) -> List[BoardState]:
        """
        Re-apply the solution moves to the initial board.

        Returns:
            [initial_board, board after move 1, ..., final board]
        """
        return replay_moves(self.initial_board, self.moves)

    def get_board_after_move(self, index: int) -> BoardState:
        """
        Get board state after executing move at index.

        Args:
            index: Move index (0-based)

        Returns:
            BoardState after move (index+1 in board_states)

        Raises:
            IndexError: If index out of range
        """
        return self.board_states[index + 1]


def replay_moves(board: BoardState, moves: Iterable[Move]) -> List[BoardState]:
    """
    Apply moves one after another.

    Args:
        board: Starting board
        moves: Moves to apply in order

    Returns:
        Starting board followed by the board after each move

    Raises:
        IllegalMove: If a move does not fit the board it is applied to
    """
    boards = [board]
    for move in moves:
        board = board.apply_move(move)
        boards.append(board)
    return boards
