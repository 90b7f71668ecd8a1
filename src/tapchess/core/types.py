"""Grid coordinates.

Board layout (row-major, as seen from White's side):
    row 0 = Black back rank, row 7 = White back rank
    col 0 = left edge,       col 7 = right edge
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8


def is_on_board(row: int, col: int) -> bool:
    """Check whether *row*/*col* address a grid cell."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


@dataclass(frozen=True, slots=True)
class Position:
    """Zero-based ``(row, col)`` cell address."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not is_on_board(self.row, self.col):
            raise ValueError(f"Position out of range: ({self.row}, {self.col})")

    def offset(self, d_row: int, d_col: int) -> Position | None:
        """Neighbouring cell, or ``None`` when it falls off the grid."""
        row, col = self.row + d_row, self.col + d_col
        if not is_on_board(row, col):
            return None
        return Position(row, col)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"
