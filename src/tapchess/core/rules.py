"""Per-piece movement rules.

Everything here is read-only with respect to the board: :meth:`Rules.resolve`
either returns a fully described :class:`Move` or ``None``.  The engine
applies the move afterwards, so a rejected attempt can never leave a
half-updated board behind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tapchess.core.enums import Color, MoveFlag, PieceType
from tapchess.core.move import Move
from tapchess.core.types import Position

if TYPE_CHECKING:
    from tapchess.core.board import Board
    from tapchess.core.piece import Piece


@dataclass(frozen=True, slots=True)
class PawnGeometry:
    """Color-dependent pawn constants."""

    direction: int  # row delta of a single forward step
    start_row: int
    end_row: int  # promotion rank


_PAWN_GEOMETRY: dict[Color, PawnGeometry] = {
    Color.WHITE: PawnGeometry(direction=-1, start_row=6, end_row=0),
    Color.BLACK: PawnGeometry(direction=1, start_row=1, end_row=7),
}


def pawn_geometry(color: Color) -> PawnGeometry:
    return _PAWN_GEOMETRY[color]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    @staticmethod
    def resolve(
        board: Board,
        from_pos: Position,
        to_pos: Position,
        en_passant_target: Piece | None = None,
    ) -> Move | None:
        """Resolve a tap from *from_pos* onto *to_pos* into a legal move.

        Returns ``None`` when there is no piece at *from_pos* or the piece
        may not go to *to_pos*.  Turn order is the caller's concern.
        """
        piece = board[from_pos]
        if piece is None or from_pos == to_pos:
            return None

        if piece.piece_type == PieceType.KING:
            return Rules._king_move(board, piece, from_pos, to_pos)

        target = board[to_pos]
        if target is not None and target.color == piece.color:
            return None
        capture_pos = to_pos if target is not None else None

        if piece.piece_type == PieceType.PAWN:
            return Rules._pawn_move(board, piece, from_pos, to_pos, en_passant_target)

        if piece.piece_type == PieceType.KNIGHT:
            legal = Rules.is_knight_jump(from_pos, to_pos)
        elif piece.piece_type == PieceType.ROOK:
            legal = Rules.can_move_in_line(board, from_pos, to_pos)
        elif piece.piece_type == PieceType.BISHOP:
            legal = Rules.can_move_diagonally(board, from_pos, to_pos)
        else:  # queen
            legal = Rules.can_move_in_line(
                board, from_pos, to_pos
            ) or Rules.can_move_diagonally(board, from_pos, to_pos)

        if not legal:
            return None
        return Move(from_pos, to_pos, capture_pos=capture_pos)

    # -- Geometry -------------------------------------------------------------

    @staticmethod
    def is_knight_jump(from_pos: Position, to_pos: Position) -> bool:
        d_row = abs(from_pos.row - to_pos.row)
        d_col = abs(from_pos.col - to_pos.col)
        return (d_row, d_col) in ((2, 1), (1, 2))

    @staticmethod
    def can_move_in_line(board: Board, from_pos: Position, to_pos: Position) -> bool:
        """Same row or column, nothing strictly between."""
        if from_pos.row != to_pos.row and from_pos.col != to_pos.col:
            return False
        return Rules.is_path_clear(board, from_pos, to_pos)

    @staticmethod
    def can_move_diagonally(
        board: Board, from_pos: Position, to_pos: Position
    ) -> bool:
        """Same diagonal, nothing strictly between."""
        if abs(from_pos.row - to_pos.row) != abs(from_pos.col - to_pos.col):
            return False
        return Rules.is_path_clear(board, from_pos, to_pos)

    @staticmethod
    def is_path_clear(board: Board, from_pos: Position, to_pos: Position) -> bool:
        """Whether every cell strictly between two aligned cells is empty.

        The cells must share a row, a column or a diagonal.
        """
        step_row = _sign(to_pos.row - from_pos.row)
        step_col = _sign(to_pos.col - from_pos.col)
        row, col = from_pos.row + step_row, from_pos.col + step_col
        while (row, col) != (to_pos.row, to_pos.col):
            if not board.is_empty(Position(row, col)):
                return False
            row += step_row
            col += step_col
        return True

    # -- Piece handlers -------------------------------------------------------

    @staticmethod
    def _pawn_move(
        board: Board,
        pawn: Piece,
        from_pos: Position,
        to_pos: Position,
        en_passant_target: Piece | None,
    ) -> Move | None:
        geo = pawn_geometry(pawn.color)
        d_row = to_pos.row - from_pos.row
        d_col = to_pos.col - from_pos.col
        target = board[to_pos]

        if d_col == 0:
            if target is not None:
                return None
            if d_row == geo.direction:
                return Move(from_pos, to_pos)
            if d_row == 2 * geo.direction and not pawn.has_moved:
                passed = Position(from_pos.row + geo.direction, from_pos.col)
                if board.is_empty(passed):
                    return Move(from_pos, to_pos, MoveFlag.DOUBLE_PAWN)
            return None

        if abs(d_col) != 1 or d_row != geo.direction:
            return None

        if target is not None:
            return Move(from_pos, to_pos, capture_pos=to_pos)

        # En passant: the victim stands beside us, not on the destination.
        beside = Position(from_pos.row, to_pos.col)
        victim = board[beside]
        if (
            en_passant_target is not None
            and victim is en_passant_target
            and victim.color != pawn.color
            and victim.piece_type == PieceType.PAWN
        ):
            return Move(from_pos, to_pos, MoveFlag.EN_PASSANT, capture_pos=beside)
        return None

    @staticmethod
    def _king_move(
        board: Board, king: Piece, from_pos: Position, to_pos: Position
    ) -> Move | None:
        target = board[to_pos]
        if target is None or target.color != king.color:
            d_row = abs(from_pos.row - to_pos.row)
            d_col = abs(from_pos.col - to_pos.col)
            if max(d_row, d_col) != 1:
                return None
            capture_pos = to_pos if target is not None else None
            return Move(from_pos, to_pos, capture_pos=capture_pos)

        if target.piece_type != PieceType.ROOK or from_pos.row != to_pos.row:
            return None
        return Rules._castle(board, from_pos, to_pos)

    @staticmethod
    def _castle(board: Board, king_from: Position, rook_from: Position) -> Move | None:
        """King slides two cells toward its own rook, rook hops to its inside.

        Simplified castling: neither piece has to be unmoved and the king may
        pass through attacked cells.
        """
        if not Rules.is_path_clear(board, king_from, rook_from):
            return None

        step = _sign(rook_from.col - king_from.col)
        king_to = king_from.offset(0, 2 * step)
        if king_to is None:
            return None
        rook_to = Position(king_to.row, king_to.col - step)

        vacated = (king_from, rook_from)
        for landing in (king_to, rook_to):
            if landing not in vacated and not board.is_empty(landing):
                return None

        return Move(
            king_from,
            king_to,
            MoveFlag.CASTLE,
            rook_from=rook_from,
            rook_to=rook_to,
        )
