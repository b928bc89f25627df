"""
Engine constants: piece values, pawn table, search sentinels, level tuning.

All numeric constants used by the evaluator, the search and the level policy
are defined here. They are plain module-level values, created once at import
time and never mutated.

Piece values use a coarse scale where 1 pawn = 10. The king value is large
enough that no combination of other material outweighs it.
"""

import chess

# ---------------------------------------------------------------------------
# Piece values
# ---------------------------------------------------------------------------

PAWN_VALUE: int = 10
KNIGHT_VALUE: int = 30
BISHOP_VALUE: int = 33
ROOK_VALUE: int = 50
QUEEN_VALUE: int = 90
KING_VALUE: int = 900

# Mapping from python-chess piece type constants to material values.
PIECE_VALUES: dict[int, int] = {
    chess.PAWN:   PAWN_VALUE,
    chess.KNIGHT: KNIGHT_VALUE,
    chess.BISHOP: BISHOP_VALUE,
    chess.ROOK:   ROOK_VALUE,
    chess.QUEEN:  QUEEN_VALUE,
    chess.KING:   KING_VALUE,
}

# ---------------------------------------------------------------------------
# Pawn positional bonus
# ---------------------------------------------------------------------------
# Indexed [rank-from-own-side][file]. The evaluator reads row 7 - i for White
# pawns and row i for Black pawns, where i is the grid row (row 0 = rank 8).
# Only pawns get a positional table.

# fmt: off
PAWN_POSITION_WEIGHTS: tuple[tuple[float, ...], ...] = (
    (0.0,  0.0,  0.0,  0.0,  0.0,  0.0,  0.0, 0.0),
    (5.0,  5.0,  5.0,  5.0,  5.0,  5.0,  5.0, 5.0),
    (1.0,  1.0,  2.0,  3.0,  3.0,  2.0,  1.0, 1.0),
    (0.5,  0.5,  1.0,  2.5,  2.5,  1.0,  0.5, 0.5),
    (0.0,  0.0,  0.0,  2.0,  2.0,  0.0,  0.0, 0.0),
    (0.5, -0.5, -1.0,  0.0,  0.0, -1.0, -0.5, 0.5),
    (0.5,  1.0,  1.0, -2.0, -2.0,  1.0,  1.0, 0.5),
    (0.0,  0.0,  0.0,  0.0,  0.0,  0.0,  0.0, 0.0),
)
# fmt: on

# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
# SEARCH_SENTINEL is the initial best value of a node before any child has
# been scored. A node with no legal moves returns it unchanged, so it is not a
# real evaluation. ROOT_WINDOW is the (alpha, beta) window opened at the root
# and must stay strictly wider than the sentinel.

SEARCH_SENTINEL: int = 9_999
ROOT_WINDOW: int = 10_000

# ---------------------------------------------------------------------------
# Difficulty levels
# ---------------------------------------------------------------------------

MIN_TIER: int = 1
MAX_TIER: int = 10

# Tier thresholds for search depth (plies). Anything below DEPTH_2_TIER
# searches a single ply.
DEPTH_3_TIER: int = 8
DEPTH_2_TIER: int = 4

# At the easiest tier this share of moves is a uniformly random legal move,
# decided before any search happens.
EASIEST_TIER_RANDOM_RATE: float = 0.8

# mistake probability = max(0, (MAX_TIER - tier) / MISTAKE_DIVISOR)
MISTAKE_DIVISOR: int = 15

LEVEL_NAME_PREFIX: str = "Vision"

LEVEL_DESCRIPTIONS: dict[int, str] = {
    1:  "Very Easy - Beginner",
    2:  "Easy",
    3:  "Novice",
    4:  "Early Intermediate",
    5:  "Intermediate",
    6:  "Advanced Intermediate",
    7:  "Experienced",
    8:  "Expert",
    9:  "Master",
    10: "Champion - Near-perfect",
}
