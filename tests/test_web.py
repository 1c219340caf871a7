import chess
import pytest
from fastapi.testclient import TestClient

from conftest import CHECKMATED_FEN, HANGING_QUEEN_FEN
from web import app as web_app
from web.app import MoveRequest, app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_move_from_start_position(client: TestClient) -> None:
    response = client.post("/api/move", json={"depth": 1})
    assert response.status_code == 200
    body = response.json()

    move = chess.Move.from_uci(body["move"])
    assert move in chess.Board().legal_moves
    assert body["nodes"] == 20
    assert body["win_probability"] == 50.0
    assert body["game_over"] is False
    assert body["history"] == [f"1. {body['san']}"]
    assert chess.Board(body["fen"]).turn is chess.BLACK


def test_move_replays_history_before_searching(client: TestClient) -> None:
    response = client.post("/api/move", json={"moves": ["e2e4"], "depth": 1})
    assert response.status_code == 200
    body = response.json()
    assert body["history"] == [f"1. e4 {body['san']}"]
    assert chess.Board(body["fen"]).turn is chess.WHITE


def test_engine_takes_hanging_queen(client: TestClient) -> None:
    response = client.post("/api/move", json={"fen": HANGING_QUEEN_FEN, "depth": 2})
    assert response.status_code == 200
    body = response.json()
    assert body["move"] == "e4d5"
    assert body["san"] == "exd5"
    assert body["score"] > 50


def test_invalid_fen_is_rejected(client: TestClient) -> None:
    response = client.post("/api/move", json={"fen": "not a fen"})
    assert response.status_code == 400
    assert "Invalid FEN" in response.json()["detail"]


def test_illegal_move_is_rejected(client: TestClient) -> None:
    response = client.post("/api/move", json={"moves": ["e2e5"]})
    assert response.status_code == 400
    assert "Illegal move" in response.json()["detail"]


def test_finished_game_is_rejected(client: TestClient) -> None:
    response = client.post("/api/move", json={"fen": CHECKMATED_FEN})
    assert response.status_code == 400
    assert "already over" in response.json()["detail"]


@pytest.mark.parametrize(("requested", "clamped"), [(0, 1), (-3, 1), (2, 2), (50, 5)])
def test_depth_is_clamped(requested: int, clamped: int) -> None:
    assert MoveRequest(depth=requested).depth == clamped


def test_evaluate_start_position(client: TestClient) -> None:
    response = client.post("/api/evaluate", json={"fen": chess.STARTING_FEN})
    assert response.status_code == 200
    assert response.json() == {"score": 0.0, "win_probability": 50.0}


def test_evaluate_rejects_invalid_fen(client: TestClient) -> None:
    response = client.post("/api/evaluate", json={"fen": "8/8/8"})
    assert response.status_code == 400


def test_serve_runs_app_under_uvicorn(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    monkeypatch.setattr(web_app.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))
    web_app.serve(port=9001)
    assert calls == [((app,), {"host": "127.0.0.1", "port": 9001})]
