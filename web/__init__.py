"""
Web application package for the Chess AI engine.

Provides a FastAPI-based JSON API for playing against the engine from a
browser board. Run with `chess-ai-web`.
"""
