"""
Pupu Solver - Finds a move sequence that clears a Pupu puzzle level.

Packages:
- solver: board model, transition rules and search strategies
- capture: level capture from screenshots
"""

__version__ = "1.0.0"
