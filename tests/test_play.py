import chess
import pytest

from chess_ai.errors import GameOverError, InvalidDepthError
from chess_ai.game import ChessGame
from chess_ai.play import make_best_move, move_history
from conftest import CHECKMATED_FEN, HANGING_QUEEN_FEN, STALEMATE_FEN


def test_make_best_move_plays_on_the_board() -> None:
    game = ChessGame()
    report = make_best_move(game, depth=1)

    assert game.board.move_stack == [report.move]
    assert report.san == chess.Board().san(report.move)
    assert report.win_probability == 50.0
    assert report.nodes == 20
    assert report.game_over is False


def test_make_best_move_wins_hanging_queen() -> None:
    game = ChessGame.from_fen(HANGING_QUEEN_FEN)
    report = make_best_move(game, depth=2)

    assert report.san == "exd5"
    assert report.score > 50
    assert game.board.piece_at(chess.D5) == chess.Piece(chess.PAWN, chess.WHITE)


@pytest.mark.parametrize("fen", [CHECKMATED_FEN, STALEMATE_FEN])
def test_make_best_move_refuses_finished_game(fen: str) -> None:
    game = ChessGame.from_fen(fen)
    with pytest.raises(GameOverError):
        make_best_move(game, depth=2)
    assert game.board.fen() == fen


def test_make_best_move_rejects_bad_depth() -> None:
    game = ChessGame()
    with pytest.raises(InvalidDepthError):
        make_best_move(game, depth=0)
    assert game.board.move_stack == []


def test_make_best_move_reports_game_over() -> None:
    # Kxb2 is forced and leaves bare kings: insufficient material.
    game = ChessGame.from_fen("7k/8/8/8/8/8/1r6/K7 w - - 0 1")
    report = make_best_move(game, depth=2)
    assert report.san == "Kxb2"
    assert report.game_over is True


def test_move_history_pairs_moves_by_number() -> None:
    board = chess.Board()
    for san in ("e4", "e5", "Nf3"):
        board.push_san(san)
    assert move_history(board) == ["1. e4 e5", "2. Nf3"]


def test_move_history_from_black_to_move_position() -> None:
    board = chess.Board("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1")
    board.push_san("e5")
    board.push_san("Nf3")
    assert move_history(board) == ["1... e5", "2. Nf3"]


def test_move_history_of_new_game_is_empty() -> None:
    assert move_history(chess.Board()) == []
