"""
Static position evaluation: material plus a pawn placement bonus.

The score is always from White's perspective: positive means White is ahead,
negative means Black is ahead. The search decides which side it is playing
for and orients the score itself.

Only pawns get a positional term. Knights, bishops, rooks, queens and kings
are scored on material alone.

Terminal positions (checkmate, stalemate) are scored like any other position.
Recognising them is up to the caller.
"""

import chess

from vision.constants import PAWN_POSITION_WEIGHTS, PIECE_VALUES
from vision.rules import DEFAULT_RULES, RulesEngine


def evaluate(board: chess.Board, rules: RulesEngine = DEFAULT_RULES) -> float:
    """
    Material + pawn-table score from White's perspective.

    The pawn table is indexed by rank counted from the pawn's own side, so the
    row is mirrored by colour: ``7 - i`` for White, ``i`` for Black, where
    ``i`` is the grid row (row 0 = rank 8).

    Args:
        board: The position to score. Not modified.
        rules: Rules adapter used to read the board grid.

    Returns:
        Score in pawn = 10 units. The starting position scores 0.

    Example:
        >>> evaluate(chess.Board())
        0.0
    """
    total = 0.0

    for i, row in enumerate(rules.board(board)):
        for j, piece in enumerate(row):
            if piece is None:
                continue

            value = PIECE_VALUES[piece.piece_type]
            if piece.piece_type == chess.PAWN:
                table_row = 7 - i if piece.color == chess.WHITE else i
                value += PAWN_POSITION_WEIGHTS[table_row][j]

            total += value if piece.color == chess.WHITE else -value

    return total
