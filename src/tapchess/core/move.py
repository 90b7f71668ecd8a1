"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from tapchess.core.enums import MoveFlag
from tapchess.core.types import Position


@dataclass(frozen=True, slots=True)
class Move:
    """A fully resolved move, ready to be applied to a board.

    ``to_pos`` is where the moving piece lands.  For a castle this differs
    from the tapped square: the tapped rook sits on ``rook_from`` and is
    relocated to ``rook_to``.  ``capture_pos`` names the square of the
    captured piece, which for en passant is not ``to_pos``.
    """

    from_pos: Position
    to_pos: Position
    flag: MoveFlag = MoveFlag.NORMAL
    capture_pos: Position | None = None
    rook_from: Position | None = None
    rook_to: Position | None = None

    def __str__(self) -> str:
        return f"{self.from_pos}->{self.to_pos}"
