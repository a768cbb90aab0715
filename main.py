"""
Pupu Solver - Entry Point

Example:
    python main.py --level-file level93.txt
    python main.py --screenshot shot.png --atlas tiles.png --debug
"""

import sys

from pupusolver.cli import main


if __name__ == "__main__":
    sys.exit(main())
