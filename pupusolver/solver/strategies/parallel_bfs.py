"""
Parallel Breadth-First Strategy - Level-synchronous BFS with threaded expansion.

Boards of one BFS level are expanded on a thread pool; their candidates
are then merged on the calling thread in frontier order. Because the
visited set is only touched during the merge, it stays the single point
where a board content is claimed, and the search visits boards in the
same order as the serial strategy. Both find the same solution.
"""

import time
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Set, Tuple

from ..board import BoardState, Grid
from ..context import SolutionContext
from ..solution import Solution, SolutionMetrics
from ..factory import register_strategy
from .bfs import Admission, BreadthFirstStrategy

logger = logging.getLogger(__name__)


@register_strategy
class ParallelBreadthFirstStrategy(BreadthFirstStrategy):
    """
    Breadth-first search expanding each level on worker threads.

    Parameters:
        workers: Number of expansion threads (default 4)
    """
    name = "parallel_bfs"
    description = "Parallel breadth-first search - Threaded move expansion per level"

    def __init__(self, workers: int = 4):
        """
        Initialize parallel BFS strategy.

        Args:
            workers: Number of threads applying moves
        """
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.workers = workers

    def solve(self, context: SolutionContext) -> Solution:
        """
        Search for a clearing move sequence one level at a time.

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
        level: List[BoardState] = [start]
        metrics.states_visited = 1
        metrics.max_frontier = 1

        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="bfs") as pool:
            depth = 0
            while level:
                logger.debug(f"[{self.name}] Expanding depth {depth}: {len(level)} boards")
                result, level = self._merge_level(
                    context, pool.map(self._expand, level), level, visited, metrics, start_time
                )
                if result is not None:
                    # Expansions of this level not started yet are not needed
                    pool.shutdown(wait=False, cancel_futures=True)
                    return result

                metrics.max_frontier = max(metrics.max_frontier, len(level))
                depth += 1

        return self._finish(context, None, metrics, start_time)

    def _merge_level(
        self,
        context: SolutionContext,
        expansions: Iterable[List[BoardState]],
        level: List[BoardState],
        visited: Set[Grid],
        metrics: SolutionMetrics,
        start_time: float
    ) -> Tuple[Optional[Solution], List[BoardState]]:
        """
        Admit the candidates of one level in frontier order.

        Cancellation and the state cap are checked before each board of
        the level, at the same points as the serial strategy checks them.

        Returns:
            (Solution if the search stops here else None, boards of the next level)
        """
        next_level: List[BoardState] = []
        remaining = len(level)

        for candidates in expansions:
            if self._check_cancelled(context):
                logger.info(f"[{self.name}] Cancelled after {metrics.boards_examined} boards")
                return self._build_solution(context, None, metrics, start_time, was_cancelled=True), next_level
            if context.state_limit_reached(len(visited)):
                logger.info(f"[{self.name}] State limit {context.max_states} reached")
                return self._build_solution(context, None, metrics, start_time, limit_reached=True), next_level

            remaining -= 1
            self._count_examined(context, metrics, remaining + len(next_level))
            for candidate in candidates:
                admission = self._admit(candidate, visited, metrics)
                if admission is Admission.SOLVED:
                    return self._finish(context, candidate, metrics, start_time), next_level
                if admission is Admission.QUEUED:
                    next_level.append(candidate)

        return None, next_level
