"""
Exception hierarchy for the chess AI core.

Only programmer errors and broken collaborator contracts are exceptions.
A position with no legal moves is a normal search outcome (no move), not an
error.
"""


class ChessAIError(Exception):
    """Base class for every error raised by the chess_ai package."""


class InvalidDepthError(ChessAIError, ValueError):
    """Search depth is not a positive integer."""

    def __init__(self, depth: object) -> None:
        super().__init__(f"search depth must be a positive integer, got {depth!r}")
        self.depth = depth


class GameOverError(ChessAIError):
    """A move was requested for a game that has already finished."""


class CollaboratorError(ChessAIError):
    """
    The game-state collaborator broke its contract.

    Raised for a move that is not legal in the current position or an undo
    with nothing to undo. The search cannot recover from this: every later
    evaluation would read a corrupted board.
    """


class BoardCorruptionError(CollaboratorError):
    """The board was not restored to its pre-search state after a search."""
