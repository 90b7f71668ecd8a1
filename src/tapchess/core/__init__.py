"""Core domain layer — board, pieces and movement rules, no external dependencies.

Quick start::

    from tapchess.core import Board, Position, Rules

    board = Board.initial()
    move = Rules.resolve(board, Position(6, 4), Position(4, 4))
"""

from tapchess.core.board import Board, Snapshot
from tapchess.core.enums import Color, MoveFlag, PieceType
from tapchess.core.move import Move
from tapchess.core.piece import Piece
from tapchess.core.rules import PawnGeometry, Rules, pawn_geometry
from tapchess.core.types import BOARD_SIZE, Position, is_on_board

__all__ = [
    # Enums / flags
    "Color",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "BOARD_SIZE",
    "Position",
    "Snapshot",
    "is_on_board",
    # Domain objects
    "Board",
    "Move",
    "PawnGeometry",
    "Piece",
    "Rules",
    "pawn_geometry",
]
