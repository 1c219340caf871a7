"""Map a raw evaluation onto a 0-100 "chance of winning" readout for display."""

from chess_ai.constants import (
    PROBABILITY_MAX,
    PROBABILITY_MIDPOINT,
    PROBABILITY_MIN,
    PROBABILITY_SCALE,
)
from chess_ai.evaluate import evaluate
from chess_ai.game import GameState


def map_to_probability(score: float) -> float:
    """
    Affine map of a White-positive score onto [0, 100], clamped at both ends.

    A level position reads 50. The mapping is cosmetic: it is monotonic in
    the score and carries no meaning for the search.
    """
    probability = score / PROBABILITY_SCALE + PROBABILITY_MIDPOINT
    return max(PROBABILITY_MIN, min(PROBABILITY_MAX, probability))


def win_probability(game: GameState) -> float:
    """White's win-probability readout for the game's current position."""
    return map_to_probability(evaluate(game.board_snapshot()))
