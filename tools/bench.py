#!/usr/bin/env python3
"""
Benchmark: depth sweep over a fixed set of positions.

For every position the engine is asked for depths 1..N in turn, and each
depth reports its best move, score, node count and time. The growth column
is nodes(d) / nodes(d-1), the effective branching factor; a lower number at
the same depth means move ordering is producing more cutoffs. A "*" next to
the move marks a depth where the best move changed from the depth before.

The engine runs as a UCI subprocess, one process per position, so the
numbers include nothing but the search itself.

Usage: python3 tools/bench.py [max_depth]
"""
import os
import subprocess
import sys
from dataclasses import dataclass
from typing import Iterator, Optional

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
PYTHON = sys.executable
ENGINE = os.path.join(REPO, "interface", "uci.py")
DEFAULT_MAX_DEPTH = 3

# Opening, middlegame and endgame positions; keep the list stable so sweeps
# stay comparable between runs.
POSITIONS = [
    ("Start",        "startpos"),
    ("Italian",      "startpos moves e2e4 e7e5 g1f3 b8c6 f1c4 g8f6"),
    ("Queen hangs",  "fen rnb1kbnr/pppp1ppp/8/3q4/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 3"),
    ("Complex mid",  "fen r2q1rk1/ppp2ppp/2np1n2/2b1p1B1/2B1P1b1/2NP1N2/PPP2PPP/R2Q1RK1 w - - 0 8"),
    ("Minor ending", "fen 8/5pk1/6p1/3n3p/7P/4B1P1/5PK1/8 b - - 0 1"),
    ("Pawn race",    "fen 8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1"),
]


@dataclass
class DepthRow:
    depth: int
    move: str
    score_cp: int
    nodes: int
    time_ms: int
    growth: Optional[float] = None
    move_changed: bool = False


def parse_info(line: str) -> dict[str, int]:
    """Pull the integer fields out of an "info depth ..." line."""
    parts = line.split()
    fields = {}
    for key in ("depth", "cp", "nodes", "time"):
        if key in parts:
            try:
                fields[key] = int(parts[parts.index(key) + 1])
            except (ValueError, IndexError):
                pass
    return fields


class EngineProcess:
    """A UCI engine subprocess that answers successive fixed-depth searches."""

    def __init__(self, pos_spec: str) -> None:
        self.proc = subprocess.Popen(
            [PYTHON, ENGINE],
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            env={**os.environ, "PYTHONPATH": REPO},
        )
        self._send(f"uci\nisready\nposition {pos_spec}")

    def _send(self, text: str) -> None:
        self.proc.stdin.write(text + "\n")
        self.proc.stdin.flush()

    def search(self, depth: int) -> DepthRow:
        self._send(f"go depth {depth}")
        info: dict[str, int] = {}
        for line in self.proc.stdout:
            line = line.strip()
            if line.startswith("info depth"):
                info = parse_info(line)
            elif line.startswith("bestmove"):
                return DepthRow(
                    depth=depth,
                    move=line.split()[1],
                    score_cp=info.get("cp", 0),
                    nodes=info.get("nodes", 0),
                    time_ms=info.get("time", 0),
                )
        raise RuntimeError(f"engine exited before answering go depth {depth}")

    def close(self) -> None:
        self._send("quit")
        self.proc.wait(timeout=5)


def sweep(pos_spec: str, max_depth: int) -> Iterator[DepthRow]:
    """Search one position at depths 1..max_depth, yielding a row per depth."""
    engine = EngineProcess(pos_spec)
    previous: Optional[DepthRow] = None
    try:
        for depth in range(1, max_depth + 1):
            row = engine.search(depth)
            if previous is not None:
                if previous.nodes > 0:
                    row.growth = row.nodes / previous.nodes
                row.move_changed = row.move != previous.move
            previous = row
            yield row
    finally:
        engine.close()


def _format_row(label: str, row: DepthRow) -> str:
    growth = f"{row.growth:.1f}x" if row.growth is not None else "-"
    marker = "*" if row.move_changed else " "
    return (
        f"{label:<14} {row.depth:>5} {row.move:<6}{marker} {row.score_cp:>6} "
        f"{row.nodes:>9,} {growth:>7} {row.time_ms:>9,}"
    )


def main() -> None:
    """Sweep every benchmark position and print one table."""
    max_depth = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_MAX_DEPTH

    print(f"Chess AI depth sweep 1..{max_depth} ({PYTHON})")
    print()
    print(
        f"{'Position':<14} {'Depth':>5} {'Move':<7} {'cp':>6} "
        f"{'Nodes':>9} {'Growth':>7} {'Time(ms)':>9}"
    )
    print("-" * 64)

    growth_by_depth: dict[int, list[float]] = {}
    for label, pos in POSITIONS:
        for row in sweep(pos, max_depth):
            print(_format_row(label if row.depth == 1 else "", row))
            if row.growth is not None:
                growth_by_depth.setdefault(row.depth, []).append(row.growth)
        print()

    if growth_by_depth:
        print("Mean growth per depth:")
        for depth, factors in sorted(growth_by_depth.items()):
            print(f"  {depth - 1} -> {depth}: {sum(factors) / len(factors):.1f}x")


if __name__ == "__main__":
    main()
