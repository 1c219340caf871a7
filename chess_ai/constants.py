"""
Engine constants: piece values, piece-square tables, and search parameters.

All numeric constants used throughout the engine are defined here so that
other modules never need to introduce new magic numbers.

Piece values use a "pawn = 10" scale. The piece-square tables add a small
positional bonus (usually between -5 and +5) on top of the material value,
so one table point is a tenth of a pawn.

Table orientation:
    Every table is written as seen from White's side of a diagram: row 0 is
    the 8th rank, row 7 is the 1st rank, and column 0 is the a-file. Board
    snapshots (see chess_ai.game) use the same orientation, so a piece on
    snapshot[row][col] reads table[row][col] with no index arithmetic.
"""

import chess

# ---------------------------------------------------------------------------
# Piece values
# ---------------------------------------------------------------------------

PAWN_VALUE: int = 10
KNIGHT_VALUE: int = 30
BISHOP_VALUE: int = 30
ROOK_VALUE: int = 50
QUEEN_VALUE: int = 90
KING_VALUE: int = 900  # Never captured; weights the king-safety table

PIECE_VALUES: dict[int, int] = {
    chess.PAWN:   PAWN_VALUE,
    chess.KNIGHT: KNIGHT_VALUE,
    chess.BISHOP: BISHOP_VALUE,
    chess.ROOK:   ROOK_VALUE,
    chess.QUEEN:  QUEEN_VALUE,
    chess.KING:   KING_VALUE,
}

# ---------------------------------------------------------------------------
# Piece-square tables (White's point of view)
# ---------------------------------------------------------------------------
# Source: https://www.chessprogramming.org/Simplified_Evaluation_Function,
# scaled down by 10 to match the pawn = 10 material scale.

Table = tuple[tuple[float, ...], ...]

# fmt: off
PAWN_TABLE: Table = (
    (0.0,  0.0,  0.0,  0.0,  0.0,  0.0,  0.0,  0.0),
    (5.0,  5.0,  5.0,  5.0,  5.0,  5.0,  5.0,  5.0),
    (1.0,  1.0,  2.0,  3.0,  3.0,  2.0,  1.0,  1.0),
    (0.5,  0.5,  1.0,  2.5,  2.5,  1.0,  0.5,  0.5),
    (0.0,  0.0,  0.0,  2.0,  2.0,  0.0,  0.0,  0.0),
    (0.5, -0.5, -1.0,  0.0,  0.0, -1.0, -0.5,  0.5),
    (0.5,  1.0,  1.0, -2.0, -2.0,  1.0,  1.0,  0.5),
    (0.0,  0.0,  0.0,  0.0,  0.0,  0.0,  0.0,  0.0),
)

KNIGHT_TABLE: Table = (
    (-5.0, -4.0, -3.0, -3.0, -3.0, -3.0, -4.0, -5.0),
    (-4.0, -2.0,  0.0,  0.0,  0.0,  0.0, -2.0, -4.0),
    (-3.0,  0.0,  1.0,  1.5,  1.5,  1.0,  0.0, -3.0),
    (-3.0,  0.5,  1.5,  2.0,  2.0,  1.5,  0.5, -3.0),
    (-3.0,  0.0,  1.5,  2.0,  2.0,  1.5,  0.0, -3.0),
    (-3.0,  0.5,  1.0,  1.5,  1.5,  1.0,  0.5, -3.0),
    (-4.0, -2.0,  0.0,  0.5,  0.5,  0.0, -2.0, -4.0),
    (-5.0, -4.0, -3.0, -3.0, -3.0, -3.0, -4.0, -5.0),
)

BISHOP_TABLE: Table = (
    (-2.0, -1.0, -1.0, -1.0, -1.0, -1.0, -1.0, -2.0),
    (-1.0,  0.0,  0.0,  0.0,  0.0,  0.0,  0.0, -1.0),
    (-1.0,  0.0,  0.5,  1.0,  1.0,  0.5,  0.0, -1.0),
    (-1.0,  0.5,  0.5,  1.0,  1.0,  0.5,  0.5, -1.0),
    (-1.0,  0.0,  1.0,  1.0,  1.0,  1.0,  0.0, -1.0),
    (-1.0,  1.0,  1.0,  1.0,  1.0,  1.0,  1.0, -1.0),
    (-1.0,  0.5,  0.0,  0.0,  0.0,  0.0,  0.5, -1.0),
    (-2.0, -1.0, -1.0, -1.0, -1.0, -1.0, -1.0, -2.0),
)

ROOK_TABLE: Table = (
    ( 0.0,  0.0,  0.0,  0.0,  0.0,  0.0,  0.0,  0.0),
    ( 0.5,  1.0,  1.0,  1.0,  1.0,  1.0,  1.0,  0.5),
    (-0.5,  0.0,  0.0,  0.0,  0.0,  0.0,  0.0, -0.5),
    (-0.5,  0.0,  0.0,  0.0,  0.0,  0.0,  0.0, -0.5),
    (-0.5,  0.0,  0.0,  0.0,  0.0,  0.0,  0.0, -0.5),
    (-0.5,  0.0,  0.0,  0.0,  0.0,  0.0,  0.0, -0.5),
    (-0.5,  0.0,  0.0,  0.0,  0.0,  0.0,  0.0, -0.5),
    ( 0.0,  0.0,  0.0,  0.5,  0.5,  0.0,  0.0,  0.0),
)

QUEEN_TABLE: Table = (
    (-2.0, -1.0, -1.0, -0.5, -0.5, -1.0, -1.0, -2.0),
    (-1.0,  0.0,  0.0,  0.0,  0.0,  0.0,  0.0, -1.0),
    (-1.0,  0.0,  0.5,  0.5,  0.5,  0.5,  0.0, -1.0),
    (-0.5,  0.0,  0.5,  0.5,  0.5,  0.5,  0.0, -0.5),
    ( 0.0,  0.0,  0.5,  0.5,  0.5,  0.5,  0.0, -0.5),
    (-1.0,  0.5,  0.5,  0.5,  0.5,  0.5,  0.0, -1.0),
    (-1.0,  0.0,  0.5,  0.0,  0.0,  0.0,  0.0, -1.0),
    (-2.0, -1.0, -1.0, -0.5, -0.5, -1.0, -1.0, -2.0),
)

KING_TABLE: Table = (
    (-3.0, -4.0, -4.0, -5.0, -5.0, -4.0, -4.0, -3.0),
    (-3.0, -4.0, -4.0, -5.0, -5.0, -4.0, -4.0, -3.0),
    (-3.0, -4.0, -4.0, -5.0, -5.0, -4.0, -4.0, -3.0),
    (-3.0, -4.0, -4.0, -5.0, -5.0, -4.0, -4.0, -3.0),
    (-2.0, -3.0, -3.0, -4.0, -4.0, -3.0, -3.0, -2.0),
    (-1.0, -2.0, -2.0, -2.0, -2.0, -2.0, -2.0, -1.0),
    ( 2.0,  2.0,  0.0,  0.0,  0.0,  0.0,  2.0,  2.0),
    ( 2.0,  3.0,  1.0,  0.0,  0.0,  1.0,  3.0,  2.0),
)
# fmt: on


def mirror_table(table: Table) -> Table:
    """Flip a table vertically so it reads from Black's side of the board."""
    return tuple(reversed(table))


WHITE_TABLES: dict[int, Table] = {
    chess.PAWN:   PAWN_TABLE,
    chess.KNIGHT: KNIGHT_TABLE,
    chess.BISHOP: BISHOP_TABLE,
    chess.ROOK:   ROOK_TABLE,
    chess.QUEEN:  QUEEN_TABLE,
    chess.KING:   KING_TABLE,
}

# Every black table is the rank mirror of the white one, including knight and
# queen, so a colour-swapped, rank-mirrored position evaluates to exactly the
# negated score.
BLACK_TABLES: dict[int, Table] = {
    piece_type: mirror_table(table) for piece_type, table in WHITE_TABLES.items()
}

# Indexed as PIECE_SQUARE_TABLES[color][piece_type]; chess.BLACK is 0 and
# chess.WHITE is 1, so a two-element tuple covers both colours.
PIECE_SQUARE_TABLES: tuple[dict[int, Table], dict[int, Table]] = (
    BLACK_TABLES,
    WHITE_TABLES,
)

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------
# The search has no time management: a caller bounds latency by depth alone.
# Depth 5 is already several seconds per move in pure Python at the opening.

DEFAULT_SEARCH_DEPTH: int = 3
MIN_SEARCH_DEPTH: int = 1
MAX_SEARCH_DEPTH: int = 5

# ---------------------------------------------------------------------------
# Win-probability display
# ---------------------------------------------------------------------------
# probability = score / PROBABILITY_SCALE + PROBABILITY_MIDPOINT, clamped to
# [PROBABILITY_MIN, PROBABILITY_MAX]. A full queen (90) moves the needle by 9%.

PROBABILITY_SCALE: float = 10.0
PROBABILITY_MIDPOINT: float = 50.0
PROBABILITY_MIN: float = 0.0
PROBABILITY_MAX: float = 100.0

# UCI reports centipawns (pawn = 100); internal scores use pawn = 10.
CENTIPAWNS_PER_POINT: int = 10
