"""
Search entry point: fixed-depth minimax with alpha-beta pruning.

The engine explores every line of play to a fixed depth, assuming both sides
reply with their best move, and scores the leaves with the static evaluation
from chess_ai.evaluate. Alpha-beta pruning skips replies that provably cannot
change the result, and ordering moves by their immediate evaluation makes
those skips happen early.

Perspective:
    evaluate() is White-positive. The search instead works with scores "from
    the point of view of perspective", an explicit colour passed to every
    node. A leaf returns evaluate() for White and -evaluate() for Black.
    Maximizing nodes pick the highest of those scores, minimizing nodes the
    lowest, and the two roles alternate with every ply.

    find_best_move() picks the perspective from its maximizing flag: with
    maximizing=True the side to move is the perspective and the root
    maximizes; with maximizing=False the opponent is the perspective and the
    root minimizes. Either way the same move comes out; only the sign of the
    reported score differs.

Tie-break:
    A root move replaces the current best only if it is strictly better, so
    among equally scored moves the first one in search order wins. Search
    order is the evaluation order of order_moves(), and Python's sort is
    stable, so equal evaluations keep the collaborator's generation order.

Deliberately absent: transposition table, iterative deepening, quiescence
search, opening book, time management.
"""

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional, Union

import chess

from chess_ai.errors import BoardCorruptionError, InvalidDepthError
from chess_ai.evaluate import evaluate
from chess_ai.game import GameState, applied, as_game

_log = logging.getLogger(__name__)


class ScoredMove(NamedTuple):
    """A candidate move and the evaluation of the position it leads to."""

    move: chess.Move
    score: float


@dataclass
class SearchStats:
    """
    Per-search state, threaded through the recursion.

    One instance belongs to exactly one find_best_move() call, so two
    searches never share a counter.

    Attributes:
        node_count: Number of search() calls, leaves included.
        stop_event: Cancellation flag polled at every node, or None. The root
                    only arms it once its first move has been fully
                    searched, so a stopped search always has a move to return.
    """

    node_count: int = 0
    stop_event: Optional[threading.Event] = None


class _SearchStopped(Exception):
    """Unwinds the recursion when the stop flag is seen below the root."""


@dataclass
class SearchResult:
    """
    Outcome of a root search.

    Attributes:
        move:  Best move found, or None when the position has no legal moves.
        score: Score of that move from the search perspective. With no legal
               moves this is the static leaf score of the position.
        depth: Requested search depth in plies.
        nodes: Number of positions visited below the root.
    """

    move: Optional[chess.Move]
    score: float
    depth: int
    nodes: int


def _leaf_score(game: GameState, perspective: chess.Color) -> float:
    score = evaluate(game.board_snapshot())
    return score if perspective == chess.WHITE else -score


def evaluate_move(game: GameState, move: chess.Move, perspective: chess.Color) -> ScoredMove:
    """Score a move by the static evaluation of the position it leads to."""
    with applied(game, move):
        score = _leaf_score(game, perspective)
    return ScoredMove(move, score)


def order_moves(
    game: GameState,
    moves: Iterable[chess.Move],
    maximizing: bool,
    perspective: chess.Color,
) -> list[ScoredMove]:
    """
    Order moves most promising first for a node with the given role.

    A maximizing node wants the highest-scoring replies first, a minimizing
    node the lowest. Ordering never changes the search result, only how many
    siblings get cut off.

    Args:
        game:        Current position. Each move is applied and undone once.
        moves:       Candidate moves, legal in the current position.
        maximizing:  Role of the node the moves belong to.
        perspective: Colour the scores are expressed for.

    Returns:
        ScoredMove list, descending when maximizing, ascending otherwise.
    """
    scored = [evaluate_move(game, move, perspective) for move in moves]
    scored.sort(key=lambda scored_move: scored_move.score, reverse=maximizing)
    return scored


def search(
    depth: int,
    game: GameState,
    alpha: float,
    beta: float,
    maximizing: bool,
    perspective: chess.Color,
    stats: SearchStats,
) -> float:
    """
    Minimax with alpha-beta pruning.

    Args:
        depth:       Remaining plies. At 0 the static evaluation is returned.
        game:        Current position. Modified in place during the call and
                     restored before it returns.
        alpha:       Best score the maximizing side can already guarantee.
        beta:        Best score the minimizing side can already guarantee.
        maximizing:  True if this node picks the highest child score.
        perspective: Colour the scores are expressed for; fixed for the whole
                     search.
        stats:       Per-search counters.

    Returns:
        Best score reachable from this node, from perspective's point of view.
        A node with no legal moves (mate or stalemate) returns its static
        score; the rules collaborator is responsible for finished games.
    """
    if stats.stop_event is not None and stats.stop_event.is_set():
        raise _SearchStopped

    stats.node_count += 1

    if depth == 0:
        return _leaf_score(game, perspective)

    moves = game.legal_moves()
    if not moves:
        return _leaf_score(game, perspective)

    if maximizing:
        best_score = -math.inf
        for move, _ in order_moves(game, moves, maximizing, perspective):
            with applied(game, move):
                score = search(depth - 1, game, alpha, beta, False, perspective, stats)
            best_score = max(best_score, score)
            alpha = max(alpha, best_score)
            # Beta cutoff: the minimizing side already has a better option
            # elsewhere and will never let play reach here.
            if beta <= alpha:
                break
    else:
        best_score = math.inf
        for move, _ in order_moves(game, moves, maximizing, perspective):
            with applied(game, move):
                score = search(depth - 1, game, alpha, beta, True, perspective, stats)
            best_score = min(best_score, score)
            beta = min(beta, best_score)
            # Alpha cutoff, mirror image of the above.
            if beta <= alpha:
                break

    return best_score


def find_best_move(
    depth: int,
    game: Union[GameState, chess.Board],
    maximizing: bool = True,
    stop_event: Optional[threading.Event] = None,
) -> SearchResult:
    """
    Search the position to a fixed depth and return the best move with its score.

    Each root move is searched with a full (-inf, +inf) window, so every root
    score is exact and the choice between root moves never depends on
    pruning.

    Args:
        depth:      Search depth in plies; must be a positive integer.
        game:       Position to search. A bare chess.Board is wrapped in
                    ChessGame. Left exactly as it was on return.
        maximizing: True to score from the side-to-move's perspective and
                    maximize at the root; False to score from the opponent's
                    perspective and minimize.
        stop_event: Optional cancellation flag. Once it is set, the root move
                    being searched is abandoned (its subtree unwinds, undoing
                    every move) and the best of the root moves already
                    searched in full is returned. The first root move is
                    always searched in full.

    Returns:
        SearchResult. Its move is None when the position has no legal moves.

    Raises:
        InvalidDepthError:    depth is not a positive integer.
        BoardCorruptionError: the collaborator did not restore the board.
        CollaboratorError:    the collaborator rejected a move or an undo.
    """
    if isinstance(depth, bool) or not isinstance(depth, int) or depth <= 0:
        raise InvalidDepthError(depth)

    game = as_game(game)
    stats = SearchStats()
    perspective = game.turn if maximizing else not game.turn
    before = game.board_snapshot()
    started = time.monotonic()

    best_move: Optional[chess.Move] = None
    best_score = -math.inf if maximizing else math.inf

    moves = game.legal_moves()
    if not moves:
        return SearchResult(None, _leaf_score(game, perspective), depth, 0)

    for move, _ in order_moves(game, moves, maximizing, perspective):
        try:
            with applied(game, move):
                score = search(depth - 1, game, -math.inf, math.inf, not maximizing, perspective, stats)
        except _SearchStopped:
            _log.info("search stopped after partial root scan; keeping %s", best_move)
            break

        improved = score > best_score if maximizing else score < best_score
        if improved:
            best_score = score
            best_move = move

        stats.stop_event = stop_event

    if game.board_snapshot() != before:
        raise BoardCorruptionError("board differs from its pre-search state after the search")

    _log.debug(
        "depth=%d move=%s score=%.1f nodes=%d time=%.3fs",
        depth,
        best_move,
        best_score,
        stats.node_count,
        time.monotonic() - started,
    )
    return SearchResult(best_move, best_score, depth, stats.node_count)


def get_best_move(
    depth: int,
    game: Union[GameState, chess.Board],
    maximizing: bool = True,
) -> Optional[chess.Move]:
    """Return the best move at the given depth, or None if there is no legal move."""
    return find_best_move(depth, game, maximizing).move
