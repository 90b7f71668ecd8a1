"""Core enumerations for the board domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Piece kinds."""

    KING = 1
    QUEEN = 2
    ROOK = 3
    KNIGHT = 4
    BISHOP = 5
    PAWN = 6


class MoveFlag(IntEnum):
    """Special move classification."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE = 3
