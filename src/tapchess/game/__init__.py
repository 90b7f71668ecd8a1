"""Game layer — the board engine that runs one game.

Quick start::

    from tapchess.core import Position
    from tapchess.game import BoardEngine

    engine = BoardEngine()
    engine.select_piece(Position(6, 4))
    engine.select_piece(Position(4, 4))
"""

from tapchess.game.engine import BoardEngine, BoardEvents

__all__ = [
    "BoardEngine",
    "BoardEvents",
]
