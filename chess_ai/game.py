"""
Game-state collaborator: the only way the search touches the rules of chess.

The search never generates moves, applies them or detects the end of the game
itself. It goes through the small GameState protocol below, which ChessGame
implements on top of python-chess. Any other object with the same methods
(a test double, a variant board) works just as well.

Mutation discipline:
    The search shares one mutable board across the whole recursion. Every
    apply_move() is paired with exactly one undo_last_move() in strict stack
    order. Use the applied() context manager rather than calling the pair by
    hand so the board is restored on every exit path, including alpha-beta
    cutoffs and exceptions.
"""

from contextlib import contextmanager
from typing import Iterator, Optional, Protocol, Sequence, runtime_checkable

import chess

from chess_ai.errors import CollaboratorError

# 8x8 grid of pieces. Row 0 is rank 8, column 0 is the a-file.
Board = tuple[tuple[Optional[chess.Piece], ...], ...]


@runtime_checkable
class GameState(Protocol):
    """Operations the search needs from the surrounding game."""

    @property
    def turn(self) -> chess.Color:
        ...

    def legal_moves(self) -> Sequence[chess.Move]:
        ...

    def apply_move(self, move: chess.Move) -> None:
        ...

    def undo_last_move(self) -> None:
        ...

    def board_snapshot(self) -> Board:
        ...

    def is_game_over(self) -> bool:
        ...


def snapshot(board: chess.BaseBoard) -> Board:
    """
    Return the 8x8 piece grid of a python-chess board.

    python-chess numbers squares from a1 = 0 upwards, so row r of the grid
    holds rank 8 - r.
    """
    piece_map = board.piece_map()
    return tuple(
        tuple(piece_map.get(chess.square(col, 7 - row)) for col in range(8))
        for row in range(8)
    )


class ChessGame:
    """
    GameState adapter over a chess.Board.

    The board is shared, not copied: moves applied through the adapter show
    up on the wrapped board.

    Attributes:
        board:    The wrapped python-chess board.
        validate: When True, apply_move() rejects moves that are not legal in
                  the current position before touching the board. Off by
                  default; the search only feeds back moves it got from
                  legal_moves(), so the check is only worth paying for when
                  moves come from elsewhere.
    """

    def __init__(self, board: Optional[chess.Board] = None, validate: bool = False) -> None:
        self.board: chess.Board = board if board is not None else chess.Board()
        self.validate = validate

    @classmethod
    def from_fen(cls, fen: str, validate: bool = False) -> "ChessGame":
        return cls(chess.Board(fen), validate=validate)

    @property
    def turn(self) -> chess.Color:
        return self.board.turn

    def legal_moves(self) -> list[chess.Move]:
        return list(self.board.legal_moves)

    def apply_move(self, move: chess.Move) -> None:
        if self.validate and not self.board.is_legal(move):
            raise CollaboratorError(f"illegal move {move} in position {self.board.fen()}")
        self.board.push(move)

    def undo_last_move(self) -> None:
        if not self.board.move_stack:
            raise CollaboratorError("undo requested with no move to undo")
        self.board.pop()

    def board_snapshot(self) -> Board:
        return snapshot(self.board)

    def is_game_over(self) -> bool:
        return self.board.is_game_over()

    def __repr__(self) -> str:
        return f"ChessGame({self.board.fen()!r})"


def as_game(state: "GameState | chess.Board") -> GameState:
    """Wrap a bare chess.Board in ChessGame; pass any other GameState through."""
    if isinstance(state, chess.Board):
        return ChessGame(state)
    return state


@contextmanager
def applied(game: GameState, move: chess.Move) -> Iterator[None]:
    """Apply a move for the duration of a with-block, then undo it."""
    game.apply_move(move)
    try:
        yield
    finally:
        game.undo_last_move()
