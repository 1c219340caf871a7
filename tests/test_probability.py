import chess
import pytest

from chess_ai.game import ChessGame
from chess_ai.probability import map_to_probability, win_probability


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (0.0, 50.0),
        (100.0, 60.0),
        (-90.0, 41.0),
        (500.0, 100.0),
        (-500.0, 0.0),
    ],
)
def test_affine_mapping(score: float, expected: float) -> None:
    assert map_to_probability(score) == pytest.approx(expected)


def test_extreme_scores_clamp_to_bounds() -> None:
    assert map_to_probability(100_000) == 100.0
    assert map_to_probability(-100_000) == 0.0
    assert map_to_probability(float("inf")) == 100.0
    assert map_to_probability(float("-inf")) == 0.0


def test_mapping_is_monotonic() -> None:
    scores = [-2000.0, -600.0, -499.5, -10.0, -0.5, 0.0, 0.5, 37.0, 499.5, 501.0, 9000.0]
    mapped = [map_to_probability(s) for s in scores]
    assert mapped == sorted(mapped)
    assert all(0.0 <= p <= 100.0 for p in mapped)


def test_win_probability_of_start_position_is_even() -> None:
    assert win_probability(ChessGame()) == 50.0


def test_win_probability_tracks_material() -> None:
    game = ChessGame(chess.Board("4k3/8/8/8/8/8/8/3QK3 w - - 0 1"))
    assert win_probability(game) > 55.0
