"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Sequence

from tapchess.core.enums import Color, PieceType
from tapchess.core.piece import Piece
from tapchess.core.types import BOARD_SIZE, Position

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

Snapshot = tuple[tuple[tuple[PieceType, Color] | None, ...], ...]


class Board:
    """Mutable 8x8 grid of optional pieces."""

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        return self._cells[pos.row][pos.col]

    def __setitem__(self, pos: Position, piece: Piece | None) -> None:
        self._cells[pos.row][pos.col] = piece

    def is_empty(self, pos: Position) -> bool:
        return self._cells[pos.row][pos.col] is None

    def snapshot(self) -> Snapshot:
        """Immutable ``(piece_type, color)`` view of the grid."""
        return tuple(
            tuple(
                None if piece is None else (piece.piece_type, piece.color)
                for piece in row
            )
            for row in self._cells
        )

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting layout, Black at the top (row 0)."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b[Position(0, col)] = Piece(Color.BLACK, pt)
            b[Position(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Position(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
            b[Position(7, col)] = Piece(Color.WHITE, pt)
        return b

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> Board:
        """Build a board from eight 8-character row strings.

        Uppercase letters are white, lowercase black, ``.`` is empty::

            Board.from_rows([
                "....k...",
                "........",
                ...
                "....K...",
            ])

        Pawns placed off their starting row are marked as moved.
        """
        if len(rows) != BOARD_SIZE:
            raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(rows)}")
        b = cls()
        for r, line in enumerate(rows):
            if len(line) != BOARD_SIZE:
                raise ValueError(f"Row {r} must have {BOARD_SIZE} cells: {line!r}")
            for c, char in enumerate(line):
                if char == ".":
                    continue
                piece = Piece.from_char(char)
                if piece.piece_type == PieceType.PAWN:
                    start_row = 6 if piece.color == Color.WHITE else 1
                    piece.has_moved = r != start_row
                b[Position(r, c)] = piece
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        rows: list[str] = []
        for r, row in enumerate(self._cells):
            cells = [p.symbol if p is not None else "." for p in row]
            rows.append(f"{r} {' '.join(cells)}")
        rows.append("  " + " ".join(str(c) for c in range(BOARD_SIZE)))
        return "\n".join(rows)
