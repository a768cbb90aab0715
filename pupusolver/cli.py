"""
Pupu Solver - Command Line Interface

Loads a level, runs the selected search strategy and prints the moves.

Example:
    pupusolver --level-file level93.txt
    pupusolver --screenshot shot.png --atlas tiles.png --strategy parallel_bfs
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

from .settings import load_settings, save_settings, SETTINGS_FILE
from .solver import (
    BoardState,
    LevelDataError,
    Solution,
    SolutionContext,
    SYMBOL_HELP,
    create_strategy,
    format_move,
    get_strategy_info,
    get_strategy_names,
    strategy_options,
)

logger = logging.getLogger(__name__)

EXIT_SOLVED = 0
EXIT_BAD_INPUT = 1
EXIT_NO_SOLUTION = 2

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(debug: bool, log_file: Optional[str] = None) -> None:
    """
    Configure logging - output to console and optionally to a file.

    Args:
        debug: Log at DEBUG level instead of INFO
        log_file: Also write the log to this file
    """
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )


class SolverApp:
    """
    Command-line application controller.

    Merges saved settings with command-line overrides, loads the level
    from the chosen source, runs the strategy and reports the result.
    """

    def __init__(self, args: argparse.Namespace):
        """
        Initialize the application.

        Args:
            args: Parsed command-line arguments
        """
        self.args = args
        self.settings_path = Path(args.settings)
        self.settings = load_settings(self.settings_path)

        # CLI flags override saved settings
        overrides: Dict[str, Any] = {
            "strategy_name": args.strategy,
            "max_states": args.max_states,
            "timeout_sec": args.timeout,
            "workers": args.workers,
        }
        for key, value in overrides.items():
            if value is not None:
                self.settings[key] = value
        if args.debug:
            self.settings["debug_enabled"] = True

    @property
    def debug_mode(self) -> bool:
        return bool(self.settings.get("debug_enabled", False))

    def load_board(self) -> BoardState:
        """
        Load the initial board from the selected source.

        Raises:
            LevelDataError: If the level data is malformed
            OSError: If a level or image file cannot be read
        """
        if self.args.screenshot:
            # Imported lazily: only screenshot loading needs PIL/numpy
            from .capture import load_board_from_screenshot
            logger.info(f"Reading level from screenshot {self.args.screenshot}")
            return load_board_from_screenshot(self.args.screenshot, self.args.atlas)

        if self.args.level_file:
            logger.info(f"Reading level from {self.args.level_file}")
            text = Path(self.args.level_file).read_text(encoding='utf-8')
        else:
            text = self.args.level
        return BoardState.from_text(text)

    def solve(self, board: BoardState) -> Solution:
        """Run the configured strategy on board."""
        name = self.settings["strategy_name"]
        strategy = create_strategy(name, **strategy_options(name, self.settings))

        context = SolutionContext(
            board=board,
            timeout_sec=self.settings.get("timeout_sec"),
            max_states=self.settings.get("max_states"),
            progress_interval=self.settings.get("progress_interval") or 100000,
        )
        logger.info(f"Solving with strategy '{strategy.name}'")
        return strategy.solve(context)

    def report(self, solution: Solution) -> None:
        """Print the outcome and, if solved, the numbered steps."""
        metrics = solution.metrics
        print(f"{metrics.boards_examined} boards analysed.")

        if not solution.solved:
            if solution.was_cancelled:
                print("Search cancelled or timed out, no solution found.")
            elif solution.limit_reached:
                print(f"State limit reached after {metrics.states_visited} states, no solution found.")
            else:
                print("No solution found.")
            return

        print("Solution found:")
        for index, move in enumerate(solution.moves):
            print(format_move(index, move))

        if self.args.show_boards:
            for index, board in enumerate(solution.replay()):
                title = "Initial board" if index == 0 else f"After step {index}"
                print(f"\n{title}:")
                print(board.to_text(), end="")

    def run(self) -> int:
        """
        Run the application.

        Returns:
            Exit code
        """
        try:
            board = self.load_board()
        except LevelDataError as e:
            logger.error(str(e))
            print(SYMBOL_HELP, file=sys.stderr)
            return EXIT_BAD_INPUT
        except OSError as e:
            logger.error(f"Cannot read level: {e}")
            return EXIT_BAD_INPUT

        if self.args.save_settings:
            save_settings(self.settings, self.settings_path)

        try:
            solution = self.solve(board)
        except ValueError as e:
            # Bad strategy name or options from the settings file
            logger.error(str(e))
            return EXIT_BAD_INPUT
        self.report(solution)
        return EXIT_SOLVED if solution.solved else EXIT_NO_SOLUTION


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    strategies = ", ".join(f"{info['name']} ({info['description']})" for info in get_strategy_info())
    parser = argparse.ArgumentParser(
        description="Pupu Solver - Finds a move sequence that clears a Pupu level",
        epilog=f"Strategies: {strategies}",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--level", "-l", help="Level data: 12 lines of 12 symbols")
    source.add_argument("--level-file", "-f", help="File containing the level data")
    source.add_argument("--screenshot", "-s", help="Load level data from a screenshot")
    parser.add_argument("--atlas", "-a", help="Tile atlas image (required with --screenshot)")
    parser.add_argument("--strategy", choices=get_strategy_names(), help="Search strategy (default from settings: bfs)")
    parser.add_argument("--max-states", type=int, help="Stop after this many distinct boards")
    parser.add_argument("--timeout", type=float, help="Stop after this many seconds")
    parser.add_argument("--workers", type=int, help="Threads for the parallel_bfs strategy")
    parser.add_argument("--show-boards", action="store_true", help="Print the board after every step")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Also write the log to this file (default solver.log in debug mode)")
    parser.add_argument("--settings", default=str(SETTINGS_FILE), help="Settings file (default: config.json)")
    parser.add_argument("--save-settings", action="store_true", help="Persist the effective settings")

    args = parser.parse_args(argv)
    if args.screenshot and not args.atlas:
        parser.error("--atlas is required with --screenshot")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, configure logging and run the solver."""
    args = parse_args(argv)

    # Loading settings logs, so handlers must exist first
    configure_logging(args.debug, args.log_file or ("solver.log" if args.debug else None))
    app = SolverApp(args)
    if app.debug_mode and not args.debug:
        # Debug enabled by the settings file
        configure_logging(True, args.log_file or "solver.log")

    return app.run()


if __name__ == "__main__":
    sys.exit(main())
