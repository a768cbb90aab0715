"""
Breadth-First Strategy - Exhaustive FIFO search with visited-state deduplication.

Explores boards in order of path length. Every distinct stable board is
recorded in a visited set the moment it is first produced, so each board
content is expanded at most once. The first board found without erasable
tiles ends the search; shorter or alternative solutions are not sought.
"""

import time
import logging
from collections import deque
from enum import Enum, auto
from typing import Deque, List, Optional, Set

from ..base import SolverStrategy
from ..board import BoardState, Grid
from ..context import SolutionContext
from ..solution import Solution, SolutionMetrics
from ..factory import register_strategy

logger = logging.getLogger(__name__)


class Admission(Enum):
    """
    What happened to a candidate board produced by a move.

    States:
        DUPLICATE: Board content was reached before
        PRUNED: Board can never be cleared
        SOLVED: Board has no erasable tiles left
        QUEUED: Board goes to the frontier
    """
    DUPLICATE = auto()
    PRUNED = auto()
    SOLVED = auto()
    QUEUED = auto()


@register_strategy
class BreadthFirstStrategy(SolverStrategy):
    """
    Breadth-first search over all reachable stable boards.

    Algorithm:
        1. Seed the frontier and the visited set with the initial board
        2. Pop the front board and generate its moves
        3. Apply each move; drop candidates already visited, mark the
           rest visited, drop unsolvable ones
        4. Stop at the first cleared candidate, enqueue the others
        5. Repeat until solved or the frontier is empty

    Memory grows with the number of distinct reachable boards; use
    SolutionContext.max_states to cap it.
    """
    name = "bfs"
    description = "Breadth-first search - First clearing sequence in FIFO order"

    def solve(self, context: SolutionContext) -> Solution:
        """
        Search for a clearing move sequence.

        Args:
            context: Solution context with board, cancellation and limits

        Returns:
            Solution, solved or not, with metrics
        """
        start_time = time.perf_counter()
        metrics = SolutionMetrics()
        start = context.board

        if start.is_solved():
            logger.info(f"[{self.name}] Board has no erasable tiles, nothing to do")
            return self._build_solution(context, start, metrics, start_time)

        visited: Set[Grid] = {start.key}
        frontier: Deque[BoardState] = deque([start])
        metrics.states_visited = 1
        metrics.max_frontier = 1

        while frontier:
            if self._check_cancelled(context):
                logger.info(f"[{self.name}] Cancelled after {metrics.boards_examined} boards")
                return self._build_solution(context, None, metrics, start_time, was_cancelled=True)
            if context.state_limit_reached(len(visited)):
                logger.info(f"[{self.name}] State limit {context.max_states} reached")
                return self._build_solution(context, None, metrics, start_time, limit_reached=True)

            board = frontier.popleft()
            self._count_examined(context, metrics, len(frontier))

            for candidate in self._expand(board):
                admission = self._admit(candidate, visited, metrics)
                if admission is Admission.SOLVED:
                    return self._finish(context, candidate, metrics, start_time)
                if admission is Admission.QUEUED:
                    frontier.append(candidate)

            metrics.max_frontier = max(metrics.max_frontier, len(frontier))

        return self._finish(context, None, metrics, start_time)

    def _expand(self, board: BoardState) -> List[BoardState]:
        """Apply every available move to board."""
        return [board.apply_move(move) for move in self.find_all_valid_moves(board)]

    def _admit(
        self,
        candidate: BoardState,
        visited: Set[Grid],
        metrics: SolutionMetrics
    ) -> Admission:
        """
        Decide what to do with a freshly produced board.

        The key is recorded before the solvability check so that sibling
        moves reaching the same content are dropped as duplicates too.

        Args:
            candidate: Board produced by a move
            visited: Keys of all boards produced so far (updated)
            metrics: Counters to update

        Returns:
            Admission for the candidate
        """
        key = candidate.key
        if key in visited:
            metrics.duplicates += 1
            return Admission.DUPLICATE

        visited.add(key)
        metrics.states_visited = len(visited)

        if not candidate.is_solvable():
            metrics.pruned_branches += 1
            return Admission.PRUNED
        if candidate.is_solved():
            return Admission.SOLVED
        return Admission.QUEUED

    def _count_examined(self, context: SolutionContext, metrics: SolutionMetrics, queued: int) -> None:
        metrics.boards_examined += 1
        if metrics.boards_examined % context.progress_interval == 0:
            message = f"{metrics.boards_examined} boards analysed, current queue size {queued}"
            logger.info(f"[{self.name}] {message}")
            context.report_progress(metrics.boards_examined, message)

    def _finish(
        self,
        context: SolutionContext,
        final_board: Optional[BoardState],
        metrics: SolutionMetrics,
        start_time: float
    ) -> Solution:
        """Log the outcome and build the Solution."""
        if final_board is not None:
            logger.info(
                f"[{self.name}] Solution complete: {final_board.move_count} moves, "
                f"{metrics.boards_examined} boards analysed, {metrics.states_visited} states visited"
            )
        else:
            logger.info(
                f"[{self.name}] No solution: {metrics.boards_examined} boards analysed, "
                f"{metrics.pruned_branches} pruned"
            )
        return self._build_solution(context, final_board, metrics, start_time)
