"""
UCI (Universal Chess Interface) protocol handler.

UCI is the standard text-based protocol that lets chess GUIs and testing
tools (like cutechess-cli) talk to chess engines. The engine reads commands
from stdin and writes responses to stdout, flushing every line.

Protocol overview:
    GUI → Engine: uci, isready, ucinewgame, setoption, position, go, stop, quit
    Engine → GUI: id, option, uciok, readyok, info, bestmove

Search control:
    The engine searches to a fixed depth; there is no time management. The
    depth comes from "go depth N" or, failing that, from the Depth option
    ("setoption name Depth value N"). Clock parameters such as wtime/btime
    are accepted and ignored.

Threading model:
    The UCI loop runs on the main thread and keeps reading stdin while a
    search runs; only "stop", "go", "ucinewgame" and "quit" wait for the
    running search to reply. "go" starts a daemon thread on a copy of the board; "stop" sets a
    threading.Event that the search polls at every node once its first
    root move is complete. The stopped search still replies with "bestmove"
    before the next command is handled.

Critical rule: NEVER print to stdout except for valid UCI responses.
Logging goes to stderr.
"""

import logging
import os
import sys
import threading
import time

# ---------------------------------------------------------------------------
# Path setup: make 'chess_ai' importable when this script is run directly
# as `python interface/uci.py` from a source checkout.
# ---------------------------------------------------------------------------
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

import chess

from chess_ai.constants import (
    CENTIPAWNS_PER_POINT,
    DEFAULT_SEARCH_DEPTH,
    MAX_SEARCH_DEPTH,
    MIN_SEARCH_DEPTH,
)
from chess_ai.evaluate import evaluate
from chess_ai.game import ChessGame
from chess_ai.probability import map_to_probability
from chess_ai.search import find_best_move

_log = logging.getLogger(__name__)


def _send(line: str) -> None:
    """
    Write a line to stdout and flush immediately.

    GUIs read line by line; an unflushed buffer leaves them waiting for
    output that has already been produced.
    """
    print(line, flush=True)


def _clamp_depth(depth: int) -> int:
    return max(MIN_SEARCH_DEPTH, min(depth, MAX_SEARCH_DEPTH))


class UciHandler:
    """
    Stateful handler for the UCI protocol.

    Attributes:
        board:         The current position, updated by "position" commands.
        depth:         Search depth used when "go" does not name one.
        search_thread: The active search thread, or None.
        stop_event:    Event shared with the search thread; set to stop it.
    """

    def __init__(self) -> None:
        self.board: chess.Board = chess.Board()
        self.depth: int = DEFAULT_SEARCH_DEPTH
        self.search_thread: threading.Thread | None = None
        self.stop_event: threading.Event = threading.Event()

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_uci(self) -> None:
        """Identify the engine and advertise the Depth option."""
        _send("id name ChessAI-PST")
        _send("id author Chess AI Project")
        _send(
            f"option name Depth type spin default {DEFAULT_SEARCH_DEPTH} "
            f"min {MIN_SEARCH_DEPTH} max {MAX_SEARCH_DEPTH}"
        )
        _send("uciok")

    def handle_isready(self) -> None:
        # The tables are built at import; nothing to wait for.
        _send("readyok")

    def handle_ucinewgame(self) -> None:
        """Stop any running search and reset the board."""
        self._stop_search()
        self.board = chess.Board()

    def handle_setoption(self, tokens: list[str]) -> None:
        """
        Parse "setoption name <id> value <x>".

        Only Depth is supported. Out-of-range values are clamped; anything
        unparseable is logged and ignored.
        """
        if "name" not in tokens or "value" not in tokens:
            _log.warning("uci: malformed setoption: %s", " ".join(tokens))
            return

        name_idx = tokens.index("name")
        value_idx = tokens.index("value")
        name = " ".join(tokens[name_idx + 1:value_idx]).lower()
        value = " ".join(tokens[value_idx + 1:])

        if name != "depth":
            _log.warning("uci: unknown option: %s", name)
            return

        try:
            self.depth = _clamp_depth(int(value))
        except ValueError:
            _log.warning("uci: invalid Depth value: %r", value)

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Command formats:
            position startpos [moves e2e4 e7e5 ...]
            position fen <FEN> [moves e2e4 e7e5 ...]

        An invalid FEN leaves the previous position in place; an illegal
        move stops the replay at that move.
        """
        if not tokens:
            return

        if tokens[0] == "startpos":
            board = chess.Board()
            move_tokens = tokens[2:] if len(tokens) > 1 and tokens[1] == "moves" else []
        elif tokens[0] == "fen":
            if "moves" in tokens:
                moves_idx = tokens.index("moves")
                fen = " ".join(tokens[1:moves_idx])
                move_tokens = tokens[moves_idx + 1:]
            else:
                fen = " ".join(tokens[1:])
                move_tokens = []
            try:
                board = chess.Board(fen)
            except ValueError as exc:
                _log.warning("uci: invalid FEN %r: %s", fen, exc)
                return
        else:
            _log.warning("uci: unknown position type: %s", tokens[0])
            return

        for uci_move in move_tokens:
            try:
                move = chess.Move.from_uci(uci_move)
            except ValueError:
                _log.warning("uci: unparseable move in position command: %s", uci_move)
                break
            if not board.is_legal(move):
                _log.warning("uci: illegal move in position command: %s", uci_move)
                break
            board.push(move)

        self.board = board

    def handle_go(self, tokens: list[str]) -> None:
        """
        Start a fixed-depth search in a background thread.

        The search runs on a copy of the board, so a "position" command that
        arrives mid-search cannot race with it.
        """
        self._stop_search()

        depth = self._parse_go_depth(tokens)
        self.stop_event = threading.Event()
        board_copy = self.board.copy()
        stop_event = self.stop_event

        def search_and_reply() -> None:
            try:
                start = time.monotonic()
                result = find_best_move(depth, ChessGame(board_copy), stop_event=stop_event)
                elapsed_ms = max(1, int((time.monotonic() - start) * 1000))

                if result.move is not None:
                    score_cp = round(result.score * CENTIPAWNS_PER_POINT)
                    _send(
                        f"info depth {result.depth} score cp {score_cp} "
                        f"nodes {result.nodes} time {elapsed_ms}"
                    )
                    _send(f"bestmove {result.move.uci()}")
                else:
                    # No legal moves: checkmate or stalemate.
                    _send("bestmove (none)")

            except Exception:
                _log.exception("search error")
                _send("bestmove (none)")

        self.search_thread = threading.Thread(target=search_and_reply, daemon=True)
        self.search_thread.start()

    def handle_eval(self) -> None:
        """
        Print the static evaluation of the current position.

        Not part of UCI; useful from a terminal. The score is White-positive
        in internal points (pawn = 10).
        """
        score = evaluate(self.board)
        _send(f"info string eval {score:.1f} winprob {map_to_probability(score):.2f}")

    def handle_stop(self) -> None:
        self._stop_search()

    def handle_quit(self) -> None:
        self._stop_search()
        sys.exit(0)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _stop_search(self) -> None:
        """
        Signal the current search thread to stop and wait for it to exit.

        The search polls the flag at every node once its first root move is
        fully searched, then answers with the best completed root move. The
        join has no timeout: the old search must print its bestmove before a
        new "go" may start, so every "go" gets exactly one reply, in order.
        """
        self.stop_event.set()
        if self.search_thread is not None and self.search_thread.is_alive():
            self.search_thread.join()
        self.search_thread = None

    def _parse_go_depth(self, tokens: list[str]) -> int:
        """
        Extract the search depth from "go" command tokens.

        "go depth N" wins; otherwise the Depth option applies. Clock
        parameters are ignored since the search has no time management.
        """
        if "depth" in tokens:
            idx = tokens.index("depth")
            try:
                return _clamp_depth(int(tokens[idx + 1]))
            except (ValueError, IndexError):
                _log.warning("uci: invalid go depth, using %d", self.depth)
        return self.depth


def run_uci_loop() -> None:
    """
    Main UCI protocol loop.

    Reads lines from stdin and dispatches each command to a UciHandler until
    "quit" or end of input. A failing command is logged and the loop carries
    on, so one bad line never kills the engine mid-game.
    """
    logging.basicConfig(stream=sys.stderr, level=logging.WARNING)
    handler = UciHandler()

    for raw_line in sys.stdin:
        line = raw_line.strip()
        if not line:
            continue

        tokens = line.split()
        command = tokens[0]
        args = tokens[1:]

        try:
            if command == "uci":
                handler.handle_uci()
            elif command == "isready":
                handler.handle_isready()
            elif command == "ucinewgame":
                handler.handle_ucinewgame()
            elif command == "setoption":
                handler.handle_setoption(args)
            elif command == "position":
                handler.handle_position(args)
            elif command == "go":
                handler.handle_go(args)
            elif command == "eval":
                handler.handle_eval()
            elif command == "stop":
                handler.handle_stop()
            elif command == "quit":
                handler.handle_quit()
            else:
                # The UCI specification says engines must ignore unknown commands.
                _log.info("uci: ignoring unknown command: %r", command)

        except Exception:
            _log.exception("uci: unhandled error for command %r", command)

    # End of input without "quit": let a running search finish its reply.
    if handler.search_thread is not None:
        handler.search_thread.join()


if __name__ == "__main__":
    run_uci_loop()
