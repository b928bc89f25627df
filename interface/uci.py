"""
UCI (Universal Chess Interface) protocol handler.

UCI is the standard text-based protocol that lets chess GUIs and testing
tools (like cutechess-cli) talk to chess engines. The engine reads commands
from stdin and writes responses to stdout. Every output line is flushed
immediately; GUIs read line by line and would otherwise hang.

Protocol overview:
    GUI -> Engine: uci, isready, ucinewgame, position, setoption, go, stop, quit
    Engine -> GUI: id name, id author, option, uciok, readyok, info, bestmove

Playing strength is chosen with the ``Level`` spin option (1..10), which maps
to the Vision difficulty tiers. Clock parameters on ``go`` are accepted but
ignored: a search always runs to its tier's fixed depth.

Threading model:
    The UCI loop runs on the main thread and never blocks on the search.
    "go" starts the search in a daemon thread so stdin keeps being read.
    A search cannot be interrupted, so "stop" waits for it to finish and
    the thread always answers with a "bestmove" line.

Critical rule: NEVER print to stdout except for valid UCI responses.
Diagnostics go through ``logging``, which is configured to write to stderr.
"""

import logging
import random
import sys
import threading

import chess

from vision.constants import MAX_TIER, MIN_TIER
from vision.levels import InvalidTierError, get_level
from vision.search import MoveSource, choose_move

_log = logging.getLogger(__name__)

ENGINE_NAME = "Vision"
ENGINE_AUTHOR = "Vision Chess Project"


def _send(line: str) -> None:
    """
    Write a line to stdout and flush immediately.

    Args:
        line: The UCI response line to send (without trailing newline).
    """
    print(line, flush=True)


def _to_centipawns(score: float) -> int:
    # Internal scores use pawn = 10; UCI reports pawn = 100.
    return int(round(score * 10))


class UciHandler:
    """
    Stateful handler for the UCI protocol.

    Holds the current board position and playing level, and manages the
    search thread lifecycle. The main UCI loop creates one instance and
    dispatches commands to it.

    Attributes:
        board:         The current position, updated by "position" commands.
        level:         Difficulty tier used for the next "go".
        rng:           Random source handed to the level policy.
        search_thread: The active search thread, or None if none is running.
    """

    def __init__(self, level: int = MAX_TIER, rng: random.Random | None = None) -> None:
        self.board: chess.Board = chess.Board()
        self.level: int = get_level(level).tier
        self.rng: random.Random = rng or random.Random()
        self.search_thread: threading.Thread | None = None

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_uci(self) -> None:
        """Identify the engine, advertise the Level option, then "uciok"."""
        _send(f"id name {ENGINE_NAME}")
        _send(f"id author {ENGINE_AUTHOR}")
        _send(f"option name Level type spin default {MAX_TIER} min {MIN_TIER} max {MAX_TIER}")
        _send("uciok")

    def handle_isready(self) -> None:
        """
        Respond to the "isready" command.

        Used by the GUI as a synchronization barrier. There is no lazy
        initialization, so we answer immediately.
        """
        _send("readyok")

    def handle_ucinewgame(self) -> None:
        """Wait for any running search, then reset to the starting position."""
        self._wait_for_search()
        self.board = chess.Board()

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Command formats:
            position startpos
            position startpos moves e2e4 e7e5 ...
            position fen <FEN>
            position fen <FEN> moves e2e4 e7e5 ...

        A malformed FEN leaves the current position unchanged. An illegal
        move in the move list stops the replay at that move.

        Args:
            tokens: The command tokens with "position" already stripped.
        """
        if not tokens:
            return

        if tokens[0] == "startpos":
            board = chess.Board()
            move_tokens = tokens[2:] if len(tokens) > 1 and tokens[1] == "moves" else []
        elif tokens[0] == "fen":
            # FEN strings have 6 space-separated fields; find where "moves" appears
            if "moves" in tokens:
                moves_idx = tokens.index("moves")
                fen = " ".join(tokens[1:moves_idx])
                move_tokens = tokens[moves_idx + 1:]
            else:
                fen = " ".join(tokens[1:])
                move_tokens = []
            try:
                board = chess.Board(fen)
            except ValueError as exc:
                _log.warning("uci: invalid FEN in position command: %s", exc)
                return
        else:
            _log.warning("uci: unknown position type: %s", tokens[0])
            return

        for uci_move in move_tokens:
            try:
                move = chess.Move.from_uci(uci_move)
            except ValueError:
                _log.warning("uci: malformed move in position command: %s", uci_move)
                break
            if move not in board.legal_moves:
                _log.warning("uci: illegal move in position command: %s", uci_move)
                break
            board.push(move)

        self.board = board

    def handle_setoption(self, tokens: list[str]) -> None:
        """
        Apply a "setoption name <id> [value <x>]" command.

        Only the "Level" option is recognised; other options are ignored.
        Out-of-range or non-numeric levels keep the current level.

        Args:
            tokens: The command tokens with "setoption" already stripped.
        """
        if "name" not in tokens:
            return
        name_idx = tokens.index("name")
        if "value" in tokens:
            value_idx = tokens.index("value")
            name = " ".join(tokens[name_idx + 1:value_idx])
            value = " ".join(tokens[value_idx + 1:])
        else:
            name = " ".join(tokens[name_idx + 1:])
            value = ""

        if name.lower() != "level":
            _log.info("uci: ignoring unknown option %r", name)
            return

        try:
            self.level = get_level(int(value)).tier
        except (ValueError, InvalidTierError):
            _log.warning("uci: invalid Level value %r, keeping %d", value, self.level)

    def handle_go(self, tokens: list[str]) -> None:
        """
        Start choosing a move for the current position in a background thread.

        Clock and depth parameters are ignored: the level decides how deep
        to search. The board is copied so that a following "position"
        command cannot race with the running search.

        Args:
            tokens: The command tokens with "go" already stripped.
        """
        self._wait_for_search()
        if tokens:
            _log.debug("uci: ignoring go parameters %s", " ".join(tokens))

        board_copy = self.board.copy()
        level = self.level
        rng = self.rng

        def search_and_reply() -> None:
            """Run the level policy and emit the info + bestmove lines."""
            try:
                decision = choose_move(board_copy, level, rng)
            except Exception:
                _log.exception("search error")
                _send("bestmove (none)")
                return

            if decision.move is None:
                # No legal moves: checkmate or stalemate. "(none)" is the standard reply.
                _send("bestmove (none)")
                return

            if decision.source is MoveSource.SEARCH:
                _send(
                    f"info depth {decision.depth} score cp {_to_centipawns(decision.score)} "
                    f"nodes {decision.nodes}"
                )
            else:
                _send(f"info string {decision.source.value} move")
            _send(f"bestmove {decision.move.uci()}")

        self.search_thread = threading.Thread(target=search_and_reply, daemon=True)
        self.search_thread.start()

    def handle_stop(self) -> None:
        """Wait for the running search; it answers with its own bestmove."""
        self._wait_for_search()

    def handle_quit(self) -> None:
        """Finish the running search and exit without a reply."""
        self._wait_for_search()
        sys.exit(0)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _wait_for_search(self) -> None:
        if self.search_thread is not None and self.search_thread.is_alive():
            self.search_thread.join()
        self.search_thread = None


def run_uci_loop() -> None:
    """
    Main UCI protocol loop.

    Reads lines from stdin and dispatches each command to the UciHandler.
    Runs until "quit" is received or stdin is closed.

    Each command is wrapped in a try/except so that a bug in one handler does
    not crash the engine; the error is logged to stderr and the loop goes on.
    """
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)
    handler = UciHandler()

    for raw_line in sys.stdin:
        line = raw_line.strip()
        if not line:
            continue

        tokens = line.split()
        command = tokens[0]
        args = tokens[1:]

        try:
            if command == "uci":
                handler.handle_uci()
            elif command == "isready":
                handler.handle_isready()
            elif command == "ucinewgame":
                handler.handle_ucinewgame()
            elif command == "position":
                handler.handle_position(args)
            elif command == "setoption":
                handler.handle_setoption(args)
            elif command == "go":
                handler.handle_go(args)
            elif command == "stop":
                handler.handle_stop()
            elif command == "quit":
                handler.handle_quit()
            else:
                # UCI engines must ignore unrecognised commands.
                _log.info("uci: ignoring unknown command: %r", command)

        except Exception:
            _log.exception("uci: unhandled error for command %r", command)

    handler.handle_stop()


if __name__ == "__main__":
    run_uci_loop()
