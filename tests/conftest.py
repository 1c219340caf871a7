import os
import sys

import chess
import pytest

# Ensure repo-local imports (chess_ai, interface, web) resolve without an install.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from chess_ai.game import ChessGame  # noqa: E402

# Italian game, White to move.
ITALIAN_FEN = "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"
# Black queen hangs on d5; exd5 wins it outright.
HANGING_QUEEN_FEN = "rnb1kbnr/pppp1ppp/8/3q4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 3"
# Black to move, few pieces: small enough for exhaustive depth-3 search.
ENDGAME_FEN = "8/5pk1/6p1/3n3p/7P/4B1P1/5PK1/8 b - - 0 1"
# White is checkmated (fool's mate).
CHECKMATED_FEN = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
# Black to move, stalemated.
STALEMATE_FEN = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"


@pytest.fixture
def start_game() -> ChessGame:
    return ChessGame(chess.Board(), validate=True)


@pytest.fixture
def italian_game() -> ChessGame:
    return ChessGame.from_fen(ITALIAN_FEN, validate=True)


@pytest.fixture
def endgame_game() -> ChessGame:
    return ChessGame.from_fen(ENDGAME_FEN, validate=True)
