"""
Interface package: communication protocols for the chess engine.

Modules:
    uci — Universal Chess Interface (UCI) protocol handler.
          Reads commands from stdin, writes responses to stdout.
          Run as `chess-ai-uci` or `python interface/uci.py`.
"""
