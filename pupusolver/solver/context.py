"""
Solution Context Module - Shared context for strategy execution.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .board import BoardState


@dataclass
class SolutionContext:
    """
    Shared context passed to strategies containing board state,
    cancellation, limits and progress reporting.

    The search itself has no timeout; timeout_sec and max_states are
    opt-in bounds for callers that need them.

    Attributes:
        board: Initial board state to solve
        cancel_flag: Threading event for cancellation
        timeout_sec: Maximum computation time in seconds (None = unbounded)
        max_states: Maximum number of distinct boards to keep (None = unbounded)
        progress_interval: Examined boards between progress reports
        start_time: When computation started
        progress_callback: Optional callback for progress updates
    """
    board: BoardState
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    timeout_sec: Optional[float] = None
    max_states: Optional[int] = None
    progress_interval: int = 100000
    start_time: float = field(default_factory=time.time)
    progress_callback: Optional[Callable[[int, str], None]] = None

    def is_cancelled(self) -> bool:
        """
        Check if cancellation requested or timeout exceeded.

        Returns:
            True if strategy should stop execution
        """
        if self.cancel_flag.is_set():
            return True
        if self.timeout_sec is not None and time.time() - self.start_time > self.timeout_sec:
            return True
        return False

    def cancel(self) -> None:
        """Request the running strategy to stop."""
        self.cancel_flag.set()

    def state_limit_reached(self, states: int) -> bool:
        """True once the number of distinct boards reaches the configured cap."""
        return self.max_states is not None and states >= self.max_states

    def report_progress(self, boards_examined: int, message: str = "") -> None:
        """
        Report progress to the caller.

        The total size of the search space is unknown, so progress is
        the number of boards examined so far rather than a percentage.

        Args:
            boards_examined: Boards taken from the frontier so far
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(boards_examined, message)

    def elapsed_time(self) -> float:
        """
        Get seconds elapsed since computation started.

        Returns:
            Elapsed time in seconds
        """
        return time.time() - self.start_time

    def remaining_time(self) -> Optional[float]:
        """
        Get seconds remaining before timeout.

        Returns:
            Remaining time in seconds (may be negative if exceeded),
            None without a timeout
        """
        if self.timeout_sec is None:
            return None
        return self.timeout_sec - self.elapsed_time()
