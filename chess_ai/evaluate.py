"""
Static evaluation: material plus piece-square tables.

Every occupied square contributes the piece's material value plus the
positional bonus its piece-square table assigns to that square. White pieces
count positive and Black pieces negative, so the total is White-positive no
matter whose turn it is. Turning that into "good for the side the search is
working for" is the search's job (see chess_ai.search), not this module's.

There is no interpolation, no game phase and no mobility term: the score is
a plain sum, so evaluating a board square by square and adding the parts
gives exactly the same number as evaluate().
"""

from typing import Optional, Union

import chess

from chess_ai.constants import PIECE_SQUARE_TABLES, PIECE_VALUES
from chess_ai.game import Board, snapshot


def piece_value(piece: Optional[chess.Piece], row: int, col: int) -> float:
    """
    Signed value of one square of a board snapshot.

    Args:
        piece: The piece on the square, or None for an empty square.
        row:   Snapshot row, 0 = rank 8.
        col:   Snapshot column, 0 = a-file.

    Returns:
        Material plus positional bonus, negated for a Black piece; 0.0 for
        an empty square.
    """
    if piece is None:
        return 0.0

    table = PIECE_SQUARE_TABLES[piece.color][piece.piece_type]
    value = PIECE_VALUES[piece.piece_type] + table[row][col]
    return value if piece.color == chess.WHITE else -value


def evaluate(board: Union[Board, chess.BaseBoard]) -> float:
    """
    White-positive static evaluation of a position.

    Args:
        board: A board snapshot (8x8 grid, row 0 = rank 8) or a python-chess
               board, which is snapshotted first. Not modified.

    Returns:
        Sum of piece_value() over all 64 squares. Positive favours White.

    Example:
        >>> import chess
        >>> evaluate(chess.Board())
        0.0
    """
    if isinstance(board, chess.BaseBoard):
        board = snapshot(board)

    total = 0.0
    for row, rank in enumerate(board):
        for col, piece in enumerate(rank):
            total += piece_value(piece, row, col)
    return total
