"""
Search entry points: minimax with alpha-beta pruning and level-based move
selection.

The search explores the move tree by applying a move to the shared board,
recursing, and undoing the move before looking at the next sibling. Nothing is
copied. Every apply goes through ``vision.rules.applied`` so the matching undo
also runs when a node stops early on a cut-off.

Score orientation:
    The evaluator scores from White's perspective. The search plays for one
    colour (``color``) and orients leaf scores towards it, so larger values
    are always better for the side that moved at the root. The root move has
    already been made when ``minimax`` is first called, so the root caller
    starts it as a minimizing node (the opponent replies next).

Level policy:
    ``choose_move`` turns a difficulty tier into behaviour. Depending on the
    tier and a draw from the random source it either plays a random legal
    move or runs the search at the tier's depth. The random source is
    injectable so games can be replayed in tests.
"""

import enum
import logging
import random
from dataclasses import dataclass

import chess

from vision.constants import ROOT_WINDOW, SEARCH_SENTINEL
from vision.evaluate import evaluate
from vision.levels import get_level
from vision.rules import DEFAULT_RULES, RulesEngine, applied

_log = logging.getLogger(__name__)

_rng = random.Random()


class MoveSource(enum.Enum):
    """How ``choose_move`` arrived at its answer."""

    NO_MOVES = "none"
    RANDOM = "random"    # easiest-tier random move
    MISTAKE = "mistake"  # searched move discarded for a random one
    SEARCH = "search"


@dataclass
class SearchStats:
    """
    Counters for a single move search.

    Attributes:
        node_count: Number of ``minimax`` calls made, leaves included.
    """

    node_count: int = 0


@dataclass(frozen=True)
class MoveDecision:
    """
    Result of ``choose_move``.

    Attributes:
        move:   The chosen move, or None if the side to move has no legal move.
        source: Which branch of the level policy produced the move.
        tier:   Difficulty tier the move was chosen for.
        depth:  Plies searched; 0 when no search ran.
        score:  Root score of the searched move for the side to move, or None
                when no search ran.
        nodes:  Nodes visited by the search.
    """

    move: chess.Move | None
    source: MoveSource
    tier: int
    depth: int = 0
    score: float | None = None
    nodes: int = 0


def minimax(
    board: chess.Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    *,
    color: chess.Color = chess.BLACK,
    rules: RulesEngine = DEFAULT_RULES,
    stats: SearchStats | None = None,
) -> float:
    """
    Depth-limited minimax with alpha-beta pruning.

    Maximizing nodes are the ``color`` side's turns, minimizing nodes the
    opponent's. Each node narrows the (alpha, beta) window; as soon as
    ``beta <= alpha`` the remaining siblings cannot change the result at the
    parent and are skipped.

    A node with no legal moves returns its initial value unchanged:
    -SEARCH_SENTINEL for a maximizing node, +SEARCH_SENTINEL for a minimizing
    one. Checkmate and stalemate are not told apart.

    Args:
        board:      Current position. Mutated during the call and restored
                    before it returns.
        depth:      Remaining plies. At 0 the position is evaluated statically.
        alpha:      Lower bound of the search window.
        beta:       Upper bound of the search window.
        maximizing: True if the ``color`` side is to move at this node.
        color:      Side the search is playing for. Leaf scores are oriented
                    towards it; with the default (Black) a leaf returns the
                    negated White-perspective evaluation.
        rules:      Rules adapter used for move generation and apply/undo.
        stats:      Optional node counter.

    Returns:
        The minimax value of the node from ``color``'s point of view.
    """
    if stats is not None:
        stats.node_count += 1

    if depth == 0:
        score = evaluate(board, rules)
        return score if color == chess.WHITE else -score

    if maximizing:
        best = -SEARCH_SENTINEL
        for move in rules.legal_moves(board):
            with applied(board, move, rules):
                best = max(best, minimax(
                    board, depth - 1, alpha, beta, False,
                    color=color, rules=rules, stats=stats,
                ))
            alpha = max(alpha, best)
            if beta <= alpha:
                break
        return best

    best = SEARCH_SENTINEL
    for move in rules.legal_moves(board):
        with applied(board, move, rules):
            best = min(best, minimax(
                board, depth - 1, alpha, beta, True,
                color=color, rules=rules, stats=stats,
            ))
        beta = min(beta, best)
        if beta <= alpha:
            break
    return best


def find_best_move(
    board: chess.Board,
    depth: int,
    *,
    rules: RulesEngine = DEFAULT_RULES,
    stats: SearchStats | None = None,
) -> tuple[chess.Move | None, float]:
    """
    Search every root move to ``depth`` plies and return the best one.

    Root moves are tried in the rules engine's enumeration order and a move
    only replaces the current best if it scores strictly higher, so the first
    of several equally good moves wins. If no move scores above
    -SEARCH_SENTINEL (every reply line ran out of moves for us) the first legal
    move is returned.

    Args:
        board: The position to move from. Restored before returning.
        depth: Total plies to search, root move included. Must be >= 1.
        rules: Rules adapter.
        stats: Optional node counter.

    Returns:
        ``(move, score)``. ``(None, 0)`` if there are no legal moves.

    Raises:
        ValueError: ``depth`` is less than 1.
    """
    if depth < 1:
        raise ValueError(f"search depth must be at least 1, got {depth}")

    moves = rules.legal_moves(board)
    if not moves:
        return None, 0

    color = rules.side_to_move(board)
    best_move = None
    best_value: float = -SEARCH_SENTINEL

    for move in moves:
        with applied(board, move, rules):
            value = minimax(
                board, depth - 1, -ROOT_WINDOW, ROOT_WINDOW, False,
                color=color, rules=rules, stats=stats,
            )
        if value > best_value:
            best_value = value
            best_move = move

    if best_move is None:
        return moves[0], best_value
    return best_move, best_value


def choose_move(
    board: chess.Board,
    tier: int,
    rng: random.Random | None = None,
    *,
    rules: RulesEngine = DEFAULT_RULES,
) -> MoveDecision:
    """
    Pick a move for the side to move, playing at difficulty ``tier``.

    In order:
        1. No legal moves: return a decision with ``move=None``.
        2. Easiest tier: with probability ``random_rate`` play a random move.
        3. With probability ``mistake_probability`` play a random move.
        4. Otherwise search at the tier's depth and play the best move.

    Args:
        board: Current position. Restored before returning.
        tier:  Difficulty tier, 1..10.
        rng:   Random source with ``random()`` and ``choice()``. Defaults to a
               module-level ``random.Random``.
        rules: Rules adapter.

    Returns:
        A ``MoveDecision`` describing the move and how it was chosen.

    Raises:
        InvalidTierError: ``tier`` is out of range.
    """
    level = get_level(tier)
    if rng is None:
        rng = _rng

    moves = rules.legal_moves(board)
    if not moves:
        _log.debug("%s: no legal moves", level.name)
        return MoveDecision(move=None, source=MoveSource.NO_MOVES, tier=tier)

    if level.random_rate and rng.random() < level.random_rate:
        move = rng.choice(moves)
        _log.debug("%s: random move %s", level.name, move.uci())
        return MoveDecision(move=move, source=MoveSource.RANDOM, tier=tier)

    if rng.random() < level.mistake_probability:
        move = rng.choice(moves)
        _log.debug("%s: mistake move %s", level.name, move.uci())
        return MoveDecision(move=move, source=MoveSource.MISTAKE, tier=tier)

    stats = SearchStats()
    move, score = find_best_move(board, level.depth, rules=rules, stats=stats)
    _log.debug(
        "%s: searched move %s score=%s depth=%d nodes=%d",
        level.name, move.uci(), score, level.depth, stats.node_count,
    )
    return MoveDecision(
        move=move,
        source=MoveSource.SEARCH,
        tier=tier,
        depth=level.depth,
        score=score,
        nodes=stats.node_count,
    )


def select_move(
    board: chess.Board,
    tier: int,
    rng: random.Random | None = None,
    *,
    rules: RulesEngine = DEFAULT_RULES,
) -> chess.Move | None:
    """
    Return the move ``choose_move`` picks, or None if no legal move exists.

    None is not an error: it means the side to move is checkmated or
    stalemated.
    """
    return choose_move(board, tier, rng, rules=rules).move
