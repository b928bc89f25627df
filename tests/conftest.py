"""Shared positions and test doubles."""

import chess
import pytest

from vision.rules import ChessRules

# Positions used across the suite.
FOOLS_MATE_FEN = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 0 1"
STALEMATE_FEN = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"
SINGLE_MOVE_FEN = "k7/8/1Q5p/8/8/8/8/7K b - - 0 1"  # only h6h5
WHITE_MATE_IN_ONE_FEN = "6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1"  # a1a8#
BLACK_MATE_IN_ONE_FEN = "r5k1/8/8/8/8/8/5PPP/6K1 b - - 0 1"  # a8a1#
WHITE_WINS_QUEEN_FEN = "4k3/8/8/3q4/8/8/8/3RK3 w - - 0 1"  # d1d5
BLACK_WINS_QUEEN_FEN = "3rk3/8/8/8/3Q4/8/8/4K3 b - - 0 1"  # d8d4
ITALIAN_FEN = "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"


class ScriptedRng:
    """
    Random source that replays fixed draws.

    ``random()`` returns the scripted values in order and fails loudly when
    they run out, so a test also pins down how many draws the code makes.
    ``choice()`` records the sequence it was offered and returns
    ``seq[pick]``.
    """

    def __init__(self, draws=(), pick=0):
        self.draws = list(draws)
        self.pick = pick
        self.offered = []

    def random(self):
        if not self.draws:
            raise AssertionError("unexpected random() draw")
        return self.draws.pop(0)

    def choice(self, seq):
        self.offered.append(list(seq))
        return seq[self.pick]


class CountingRules(ChessRules):
    """ChessRules that counts apply/undo calls and tracks nesting."""

    def __init__(self):
        self.applies = 0
        self.undos = 0
        self.pending = 0
        self.max_pending = 0

    def apply(self, position, move):
        self.applies += 1
        self.pending += 1
        self.max_pending = max(self.max_pending, self.pending)
        super().apply(position, move)

    def undo(self, position):
        self.undos += 1
        self.pending -= 1
        return super().undo(position)


@pytest.fixture
def counting_rules():
    return CountingRules()


@pytest.fixture
def start_board():
    return chess.Board()
