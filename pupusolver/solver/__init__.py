"""
Solver Package - State-space search for clearing Pupu puzzle boards.

This package provides the board model, the move transition rules
(slide, gravity, match removal) and a pluggable strategy framework
whose default strategy is an exhaustive breadth-first search.

Public API:
    - Tile: Tile kinds and symbol table
    - BoardState: Immutable board representation
    - Move: Horizontal slide definition
    - possible_moves(): Move generator
    - apply_move(): Transition function
    - Solution: Result of strategy computation
    - SolutionMetrics: Performance statistics
    - SolutionContext: Shared context for strategies
    - SolverStrategy: Abstract base for strategies
    - create_strategy(): Factory function
    - solve_board(): One-call search with the default strategy

Usage:
    from pupusolver.solver import BoardState, SolutionContext, create_strategy

    board = BoardState.from_text(level_text)

    context = SolutionContext(board=board)
    strategy = create_strategy("bfs")
    solution = strategy.solve(context)

    if solution.solved:
        for move in solution.moves:
            print(move)
"""

from typing import Any, Optional

# Core data structures
from .tiles import Tile, SYMBOL_TO_TILE, TILE_TO_SYMBOL, SYMBOL_HELP
from .errors import LevelDataError, InvalidLevelDimensions, UnknownTileSymbol, IllegalMove
from .board import BoardState, PLAYFIELD_WIDTH, PLAYFIELD_HEIGHT
from .move import Move, format_move
from .generator import possible_moves, is_legal_move
from .engine import apply_move, settle
from .solution import Solution, SolutionMetrics, replay_moves
from .context import SolutionContext

# Strategy framework
from .base import SolverStrategy
from .factory import (
    create_strategy,
    get_strategy_class,
    strategy_options,
    get_strategy_names,
    get_strategy_info,
    get_default_strategy_name,
    register_strategy,
)

# Import strategies to register them
from . import strategies


def solve_board(board: BoardState, strategy_name: Optional[str] = None, **context_options: Any) -> Solution:
    """
    Search a board with a registered strategy.

    Args:
        board: Initial board
        strategy_name: Registered strategy (default strategy if None)
        **context_options: SolutionContext fields such as max_states

    Returns:
        Solution from the strategy
    """
    strategy = create_strategy(strategy_name or get_default_strategy_name())
    return strategy.solve(SolutionContext(board=board, **context_options))


__all__ = [
    # Data structures
    "Tile",
    "SYMBOL_TO_TILE",
    "TILE_TO_SYMBOL",
    "SYMBOL_HELP",
    "BoardState",
    "PLAYFIELD_WIDTH",
    "PLAYFIELD_HEIGHT",
    "Move",
    "format_move",
    "Solution",
    "SolutionMetrics",
    "SolutionContext",
    "replay_moves",
    # Errors
    "LevelDataError",
    "InvalidLevelDimensions",
    "UnknownTileSymbol",
    "IllegalMove",
    # Rules
    "possible_moves",
    "is_legal_move",
    "apply_move",
    "settle",
    # Strategy framework
    "SolverStrategy",
    "create_strategy",
    "get_strategy_class",
    "strategy_options",
    "get_strategy_names",
    "get_strategy_info",
    "get_default_strategy_name",
    "register_strategy",
    "solve_board",
]
