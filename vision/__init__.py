"""
Vision chess AI package.

A computer chess opponent with ten difficulty tiers, built on depth-limited
minimax with alpha-beta pruning and a material + pawn-placement evaluation.
Legal move generation and board state come from python-chess.

Modules:
    constants - Piece values, pawn table, search sentinels, level tuning
    rules     - Rules engine adapter (legal moves, apply/undo, board grid)
    evaluate  - Static position evaluation from White's perspective
    levels    - The difficulty catalogue (depth and mistake rate per tier)
    search    - Minimax search and level-based move selection
"""

from vision.levels import LEVELS, InvalidTierError, Level, get_level
from vision.search import MoveDecision, MoveSource, choose_move, select_move

__all__ = [
    "LEVELS",
    "InvalidTierError",
    "Level",
    "MoveDecision",
    "MoveSource",
    "choose_move",
    "get_level",
    "select_move",
]
