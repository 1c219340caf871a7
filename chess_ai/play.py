"""
Bot-move driver used by the front ends.

Wraps one engine turn: refuse a finished game, search, read the win
probability off the searched position, play the chosen move and report what
happened.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import chess

from chess_ai.constants import DEFAULT_SEARCH_DEPTH
from chess_ai.errors import GameOverError
from chess_ai.game import ChessGame
from chess_ai.probability import win_probability
from chess_ai.search import find_best_move

_log = logging.getLogger(__name__)


@dataclass
class MoveReport:
    """
    Result of one engine turn.

    Attributes:
        move:            The move played.
        san:             The move in standard algebraic notation.
        score:           Search score from the mover's perspective.
        nodes:           Positions visited by the search.
        win_probability: White's 0-100 readout for the position searched.
        game_over:       True if the move ended the game.
    """

    move: chess.Move
    san: str
    score: float
    nodes: int
    win_probability: float
    game_over: bool


def make_best_move(game: ChessGame, depth: int = DEFAULT_SEARCH_DEPTH) -> MoveReport:
    """
    Search the current position and play the best move on the game's board.

    Raises:
        GameOverError:     the game had already finished.
        InvalidDepthError: depth is not a positive integer.
    """
    if game.is_game_over():
        raise GameOverError(f"game is already over: {game.board.result()}")

    result = find_best_move(depth, game)
    if result.move is None:
        # Unreachable with python-chess: no legal moves means the game is over.
        raise GameOverError("no legal moves in a position reported as in progress")

    probability = win_probability(game)
    san = game.board.san(result.move)
    game.apply_move(result.move)

    _log.info(
        "played %s score=%.1f nodes=%d winprob=%.2f",
        san,
        result.score,
        result.nodes,
        probability,
    )
    return MoveReport(
        move=result.move,
        san=san,
        score=result.score,
        nodes=result.nodes,
        win_probability=probability,
        game_over=game.is_game_over(),
    )


def move_history(board: chess.Board) -> list[str]:
    """
    Numbered SAN move pairs for the game so far, e.g. ["1. e4 e5", "2. Nf3"].

    Numbering follows the board's starting position, so a game set up from a
    FEN with Black to move starts with "N... move".
    """
    replay = board.root()
    lines: list[str] = []
    current: Optional[str] = None

    for move in board.move_stack:
        san = replay.san(move)
        if replay.turn == chess.WHITE:
            current = f"{replay.fullmove_number}. {san}"
        elif current is None:
            current = f"{replay.fullmove_number}... {san}"
        else:
            current = f"{current} {san}"
        replay.push(move)
        if replay.turn == chess.WHITE:
            lines.append(current)
            current = None

    if current is not None:
        lines.append(current)
    return lines
