"""
Strategies Package - Concrete strategy implementations.

Import this module to register all built-in strategies.
"""

from .bfs import BreadthFirstStrategy
from .parallel_bfs import ParallelBreadthFirstStrategy

__all__ = [
    "BreadthFirstStrategy",
    "ParallelBreadthFirstStrategy",
]
