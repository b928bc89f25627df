"""
Rules Engine adapter: the narrow interface the search and evaluator use.

Legal move generation, check/mate/stalemate detection and board state are
owned by python-chess. The engine never touches a ``chess.Board`` directly;
it goes through a ``RulesEngine`` so that every mutation is an explicit
apply/undo pair and so tests can inject an instrumented implementation.

Board grid convention:
    ``board()`` returns an 8x8 list of rows. Row 0 is rank 8 (Black's back
    rank) and column 0 is the a-file, which is how the evaluator's pawn table
    is oriented.
"""

from contextlib import contextmanager
from typing import Iterator, Protocol

import chess

Grid = list[list[chess.Piece | None]]


class IllegalUndoError(IndexError):
    """Raised when undo is requested with no applied move pending."""


class RulesEngine(Protocol):
    """Operations the engine needs from a chess rules implementation."""

    def legal_moves(self, position: chess.Board) -> list[chess.Move]: ...

    def apply(self, position: chess.Board, move: chess.Move) -> None: ...

    def undo(self, position: chess.Board) -> chess.Move: ...

    def piece_at(self, position: chess.Board, square: chess.Square) -> chess.Piece | None: ...

    def side_to_move(self, position: chess.Board) -> chess.Color: ...

    def board(self, position: chess.Board) -> Grid: ...


class ChessRules:
    """``RulesEngine`` backed by python-chess."""

    def legal_moves(self, position: chess.Board) -> list[chess.Move]:
        # python-chess generates moves in a fixed order for a given position,
        # which keeps tie-breaking in the search reproducible.
        return list(position.legal_moves)

    def apply(self, position: chess.Board, move: chess.Move) -> None:
        position.push(move)

    def undo(self, position: chess.Board) -> chess.Move:
        if not position.move_stack:
            raise IllegalUndoError("undo called with no applied move pending")
        return position.pop()

    def piece_at(self, position: chess.Board, square: chess.Square) -> chess.Piece | None:
        return position.piece_at(square)

    def side_to_move(self, position: chess.Board) -> chess.Color:
        return position.turn

    def board(self, position: chess.Board) -> Grid:
        return [
            [position.piece_at(chess.square(file, 7 - row)) for file in range(8)]
            for row in range(8)
        ]


DEFAULT_RULES = ChessRules()


@contextmanager
def applied(
    position: chess.Board,
    move: chess.Move,
    rules: RulesEngine = DEFAULT_RULES,
) -> Iterator[chess.Board]:
    """
    Apply ``move`` for the duration of the ``with`` block.

    The move is undone on every exit path, including an early ``break`` out of
    the enclosing move loop or an exception raised by the body, so the position
    is always handed back exactly as it was received.

    Example:
        >>> b = chess.Board()
        >>> with applied(b, chess.Move.from_uci("e2e4")):
        ...     b.turn == chess.BLACK
        True
        >>> b.fen() == chess.STARTING_FEN
        True
    """
    rules.apply(position, move)
    try:
        yield position
    finally:
        rules.undo(position)
