import chess
import pytest

from chess_ai.constants import KNIGHT_TABLE
from chess_ai.evaluate import evaluate, piece_value
from chess_ai.game import snapshot
from conftest import ENDGAME_FEN, HANGING_QUEEN_FEN, ITALIAN_FEN

POSITIONS = [
    chess.STARTING_FEN,
    ITALIAN_FEN,
    HANGING_QUEEN_FEN,
    ENDGAME_FEN,
    "r2q1rk1/ppp2ppp/2np1n2/2b1p1B1/2B1P1b1/2NP1N2/PPP2PPP/R2Q1RK1 w - - 0 8",
    "4k3/8/8/2n5/3B4/8/8/4K3 w - - 0 1",
    "3qk3/8/8/8/8/5N2/8/2Q1K3 b - - 0 1",
]


def test_start_position_is_level() -> None:
    assert evaluate(chess.Board()) == 0.0


def test_empty_board_scores_zero() -> None:
    assert evaluate(chess.Board(None)) == 0.0


def test_empty_square_contributes_nothing() -> None:
    assert piece_value(None, 3, 3) == 0.0


def test_white_piece_adds_material_and_table_bonus() -> None:
    knight = chess.Piece(chess.KNIGHT, chess.WHITE)
    # d4 is row 4, column 3.
    assert piece_value(knight, 4, 3) == 30 + KNIGHT_TABLE[4][3]


def test_black_piece_is_negated_and_uses_mirrored_table() -> None:
    white_pawn = chess.Piece(chess.PAWN, chess.WHITE)
    black_pawn = chess.Piece(chess.PAWN, chess.BLACK)
    # e2 for White and e7 for Black are the same square from each side.
    assert piece_value(white_pawn, 6, 4) == 8.0
    assert piece_value(black_pawn, 1, 4) == -8.0


def test_lone_knight_position_value() -> None:
    # Kings on e1/e8 sit on 0.0 squares of their tables; Nd4 is 30 + 2.0.
    board = chess.Board("4k3/8/8/8/3N4/8/8/4K3 w - - 0 1")
    assert evaluate(board) == 32.0


@pytest.mark.parametrize("fen", POSITIONS)
def test_evaluation_is_sum_of_square_contributions(fen: str) -> None:
    board = chess.Board(fen)
    expected = 0.0
    for square, piece in board.piece_map().items():
        row = 7 - chess.square_rank(square)
        col = chess.square_file(square)
        expected += piece_value(piece, row, col)
    assert evaluate(board) == pytest.approx(expected)


@pytest.mark.parametrize("fen", POSITIONS)
def test_colour_mirror_negates_score(fen: str) -> None:
    board = chess.Board(fen)
    # mirror() flips the ranks and swaps the colours of every piece.
    assert evaluate(board.mirror()) == pytest.approx(-evaluate(board))


def test_snapshot_and_board_evaluate_identically() -> None:
    board = chess.Board(ITALIAN_FEN)
    assert evaluate(snapshot(board)) == evaluate(board)


def test_score_ignores_side_to_move() -> None:
    white_to_move = chess.Board(ITALIAN_FEN)
    black_to_move = chess.Board(ITALIAN_FEN.replace(" w ", " b "))
    assert evaluate(white_to_move) == evaluate(black_to_move)


def test_centralised_knight_beats_rim_knight() -> None:
    center = chess.Board("4k3/8/8/8/3N4/8/8/4K3 w - - 0 1")
    rim = chess.Board("4k3/8/8/8/8/8/8/N3K3 w - - 0 1")
    assert evaluate(center) > evaluate(rim)


def test_extra_queen_favours_its_owner() -> None:
    white_up = chess.Board("4k3/8/8/8/8/8/8/3QK3 w - - 0 1")
    black_up = chess.Board("3qk3/8/8/8/8/8/8/4K3 w - - 0 1")
    assert evaluate(white_up) > 80
    assert evaluate(black_up) < -80


def test_evaluate_does_not_touch_the_board() -> None:
    board = chess.Board(ITALIAN_FEN)
    evaluate(board)
    assert board.fen() == ITALIAN_FEN
