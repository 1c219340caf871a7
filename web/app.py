"""
FastAPI web application for the Chess AI engine.

Exposes two JSON endpoints:
    POST /api/move      — search a FEN position and play the engine's move
    POST /api/evaluate  — static evaluation and win probability of a FEN

Architecture notes:
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  which is the right place for a CPU-bound search.
- Stateless per request: the client sends the full FEN (or, to keep the move
  history, a starting FEN plus the moves played) each time; the server keeps
  no board state between requests.
- The board UI itself is not served here; any chessboard front end can call
  the API.
"""

import logging

import chess
import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from chess_ai.constants import DEFAULT_SEARCH_DEPTH, MAX_SEARCH_DEPTH, MIN_SEARCH_DEPTH
from chess_ai.errors import ChessAIError
from chess_ai.evaluate import evaluate
from chess_ai.game import ChessGame
from chess_ai.play import make_best_move, move_history
from chess_ai.probability import map_to_probability

_log = logging.getLogger(__name__)

app = FastAPI(title="Chess AI", version="1.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class MoveRequest(BaseModel):
    """
    Client request to the engine.

    Fields:
        fen:   FEN of the position before `moves` are replayed.
        moves: Moves in UCI notation played from `fen`, oldest first. Sent
               so the response can carry a numbered move history.
        depth: Search depth in plies, clamped to [1, MAX_SEARCH_DEPTH].
    """

    fen: str = chess.STARTING_FEN
    moves: list[str] = []
    depth: int = DEFAULT_SEARCH_DEPTH

    @field_validator("depth")
    @classmethod
    def clamp_depth(cls, v: int) -> int:
        """Clamp depth to the range the engine answers in reasonable time."""
        return max(MIN_SEARCH_DEPTH, min(v, MAX_SEARCH_DEPTH))


class MoveResponse(BaseModel):
    """
    Engine response after playing its move.

    Fields:
        move:            Engine move in UCI notation (e.g. "e7e5").
        san:             Engine move in SAN (e.g. "e5").
        fen:             FEN after the engine's move.
        score:           Search score from the engine's perspective (pawn = 10).
        nodes:           Positions visited by the search.
        win_probability: White's 0-100 readout for the position searched.
        game_over:       True if the engine's move ended the game.
        history:         Numbered SAN move pairs, engine move included.
    """

    move: str
    san: str
    fen: str
    score: float
    nodes: int
    win_probability: float
    game_over: bool
    history: list[str]


class EvaluateRequest(BaseModel):
    fen: str


class EvaluateResponse(BaseModel):
    """White-positive static score and the matching win-probability readout."""

    score: float
    win_probability: float


def _load_board(fen: str, moves: list[str]) -> chess.Board:
    try:
        board = chess.Board(fen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {exc}") from exc

    for uci_move in moves:
        try:
            move = chess.Move.from_uci(uci_move)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=f"Invalid move: {uci_move}") from exc
        if not board.is_legal(move):
            raise HTTPException(status_code=400, detail=f"Illegal move: {uci_move}")
        board.push(move)
    return board


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute and play the engine's move for the given position.

    Raises:
        HTTPException 400: Malformed FEN or move, or game already over.
        HTTPException 500: Engine failure.
    """
    board = _load_board(request.fen, request.moves)

    if board.is_game_over():
        raise HTTPException(
            status_code=400,
            detail=f"Game is already over: {board.result()}",
        )

    game = ChessGame(board)
    try:
        report = make_best_move(game, request.depth)
    except ChessAIError as exc:
        _log.exception("Engine search failed for FEN=%s", board.fen())
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    _log.info(
        "Move=%s score=%.1f depth=%d nodes=%d fen=%s",
        report.move.uci(),
        report.score,
        request.depth,
        report.nodes,
        request.fen[:40],
    )

    return MoveResponse(
        move=report.move.uci(),
        san=report.san,
        fen=board.fen(),
        score=report.score,
        nodes=report.nodes,
        win_probability=report.win_probability,
        game_over=report.game_over,
        history=move_history(board),
    )


@app.post("/api/evaluate", response_model=EvaluateResponse)
def api_evaluate(request: EvaluateRequest) -> EvaluateResponse:
    """Static evaluation of a position, without searching."""
    board = _load_board(request.fen, [])
    score = evaluate(board)
    return EvaluateResponse(score=score, win_probability=map_to_probability(score))


def serve(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Run the API under uvicorn."""
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host=host, port=port)
