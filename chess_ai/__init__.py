"""
Chess AI package.

A small chess engine: fixed-depth minimax search with alpha-beta pruning and
a material plus piece-square-table evaluation. The rules of chess (move
generation, make/unmake, game-over detection) come from python-chess through
the GameState protocol in chess_ai.game.

Modules:
    constants   — Piece values, piece-square tables, search and display constants
    errors      — Exception hierarchy
    game        — GameState protocol, ChessGame adapter, board snapshots
    evaluate    — Static position evaluation
    probability — Evaluation to 0-100 win-probability readout
    search      — Move ordering and minimax with alpha-beta pruning
    play        — One engine turn: search, play, report
"""

from chess_ai.evaluate import evaluate
from chess_ai.game import ChessGame, GameState
from chess_ai.probability import map_to_probability
from chess_ai.search import SearchResult, find_best_move, get_best_move

__all__ = [
    "ChessGame",
    "GameState",
    "SearchResult",
    "evaluate",
    "find_best_move",
    "get_best_move",
    "map_to_probability",
]
