"""
Base Strategy Module - Abstract base class for solving strategies.
"""

import time
from abc import ABC, abstractmethod
from typing import List, Optional

from .board import BoardState
from .context import SolutionContext
from .generator import possible_moves
from .move import Move
from .solution import Solution, SolutionMetrics


class SolverStrategy(ABC):
    """
    Abstract base class for all solving strategies.

    Subclasses must implement the solve() method and define
    name and description class attributes.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description for the CLI
        timeout_sec: Default timeout for this strategy (None = unbounded)
    """
    name: str = "base"
    description: str = "Base strategy"
    timeout_sec: Optional[float] = None

    @abstractmethod
    def solve(self, context: SolutionContext) -> Solution:
        """
        Search for a move sequence that clears the board.

        Must periodically check context.is_cancelled() and return
        an unsolved Solution if True.

        Args:
            context: Solution context with board, cancellation, limits

        Returns:
            Solution with path and metrics
        """
        pass

    def find_all_valid_moves(self, board: BoardState) -> List[Move]:
        """
        Find all slides available on the board.

        Args:
            board: Current board state

        Returns:
            List of valid Move objects
        """
        return possible_moves(board)

    def _check_cancelled(self, context: SolutionContext) -> bool:
        """
        Convenience method to check cancellation.

        Args:
            context: Solution context

        Returns:
            True if strategy should stop
        """
        return context.is_cancelled()

    def _build_solution(
        self,
        context: SolutionContext,
        final_board: Optional[BoardState],
        metrics: SolutionMetrics,
        start_time: float,
        was_cancelled: bool = False,
        limit_reached: bool = False
    ) -> Solution:
        """Build Solution object from computation results."""
        metrics.computation_time_ms = (time.perf_counter() - start_time) * 1000
        metrics.strategy_name = self.name

        return Solution(
            initial_board=context.board,
            final_board=final_board,
            solved=final_board is not None,
            was_cancelled=was_cancelled,
            limit_reached=limit_reached,
            metrics=metrics
        )
