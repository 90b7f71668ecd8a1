"""BoardEngine — selection state machine, turn order and move application.

The presentation layer drives a game through two entry points,
:meth:`BoardEngine.select_piece` (a tap on a cell) and
:meth:`BoardEngine.promote` (the choice made in a promotion dialog), and reads
everything else back through read-only properties.

Thread-safety: not thread-safe.  All calls are expected from one thread
(the UI thread); hosts with several threads must serialize access.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from tapchess.core.board import Board, Snapshot
from tapchess.core.enums import Color, MoveFlag, PieceType
from tapchess.core.move import Move
from tapchess.core.piece import Piece
from tapchess.core.rules import Rules, pawn_geometry
from tapchess.core.types import Position

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move], None]
PromotionCallback = Callable[[Position], None]  # square awaiting a choice
KingCapturedCallback = Callable[[Color], None]  # color of the fallen king


@dataclass
class BoardEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion_pending: list[PromotionCallback] = field(default_factory=list)
    on_king_captured: list[KingCapturedCallback] = field(default_factory=list)


# ── Engine ───────────────────────────────────────────────────────────────────


class BoardEngine:
    """Owns one game: the grid, whose turn it is, the selection and flags.

    Args:
        board: Starting layout; the standard one when omitted.
        current_turn: Side to move first.
    """

    __slots__ = (
        "_board",
        "_current_turn",
        "_selected",
        "_en_passant_target",
        "_pending_promotion",
        "_captured",
        "_king_captured",
        "events",
    )

    def __init__(
        self,
        board: Board | None = None,
        *,
        current_turn: Color = Color.WHITE,
    ) -> None:
        self._board = board if board is not None else Board.initial()
        self._current_turn = current_turn
        self._selected: Position | None = None
        self._en_passant_target: Piece | None = None
        self._pending_promotion: Position | None = None
        # [capturing color] -> pieces taken, in capture order.
        self._captured: dict[Color, list[Piece]] = {Color.WHITE: [], Color.BLACK: []}
        # [king color] -> has that king been taken.
        self._king_captured: dict[Color, bool] = {
            Color.WHITE: False,
            Color.BLACK: False,
        }
        self.events = BoardEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        """The live grid.  Treat as read-only; mutate through the engine."""
        return self._board

    @property
    def current_turn(self) -> Color:
        return self._current_turn

    @property
    def selected(self) -> Position | None:
        return self._selected

    @property
    def en_passant_target(self) -> Piece | None:
        """Pawn that may be taken en passant on this ply, if any."""
        return self._en_passant_target

    @property
    def pending_promotion(self) -> Position | None:
        return self._pending_promotion

    @property
    def is_piece_promoted(self) -> bool:
        """Whether a pawn is waiting for :meth:`promote`."""
        return self._pending_promotion is not None

    @property
    def white_captured(self) -> tuple[Piece, ...]:
        """Pieces captured by White."""
        return tuple(self._captured[Color.WHITE])

    @property
    def black_captured(self) -> tuple[Piece, ...]:
        """Pieces captured by Black."""
        return tuple(self._captured[Color.BLACK])

    def captured_by(self, color: Color) -> tuple[Piece, ...]:
        return tuple(self._captured[color])

    @property
    def is_white_king_captured(self) -> bool:
        return self._king_captured[Color.WHITE]

    @property
    def is_black_king_captured(self) -> bool:
        return self._king_captured[Color.BLACK]

    @property
    def winner(self) -> Color | None:
        """Side that has taken the opposing king, or ``None``."""
        if self._king_captured[Color.BLACK]:
            return Color.WHITE
        if self._king_captured[Color.WHITE]:
            return Color.BLACK
        return None

    def is_selected(self, position: Position) -> bool:
        return self._selected == position

    def piece_at(self, position: Position) -> Piece | None:
        return self._board[position]

    def snapshot(self) -> Snapshot:
        return self._board.snapshot()

    # ── Selection state machine ──────────────────────────────────────────

    def select_piece(self, target: Position) -> None:
        """Handle a tap on *target*.

        With nothing selected, a tap on one of the mover's pieces selects it.
        With a selection, a tap on the same cell deselects, a tap on another
        friendly piece switches the selection (or castles, king onto rook)
        and a tap on an empty or enemy cell attempts the move.  A failed
        attempt keeps the current selection.
        """
        from_pos = self._selected
        target_piece = self._board[target]

        if from_pos is None:
            if target_piece is not None and target_piece.color == self._current_turn:
                self._selected = target
            return

        if target == from_pos:
            self._selected = None
            return

        if target_piece is None:
            self.move_piece(from_pos, target)
            return

        selected_piece = self._board[from_pos]
        if selected_piece is not None and selected_piece.color == target_piece.color:
            if (
                selected_piece.piece_type == PieceType.KING
                and target_piece.piece_type == PieceType.ROOK
            ):
                if not self.move_piece(from_pos, target):
                    self._selected = target
            else:
                self._selected = target
            return

        self.move_piece(from_pos, target)

    # ── Moves ────────────────────────────────────────────────────────────

    def move_piece(self, from_pos: Position, to_pos: Position) -> bool:
        """Try to move the piece on *from_pos* to *to_pos*.

        Returns True if the move was legal and applied.  On False nothing
        about the game has changed.  A committed move also clears the
        selection.  UIs reach this through :meth:`select_piece`.
        """
        piece = self._board[from_pos]
        if piece is None:
            _LOGGER.debug("Rejected %s->%s: no piece", from_pos, to_pos)
            return False
        if piece.color != self._current_turn:
            _LOGGER.debug(
                "Rejected %s->%s: %s to move", from_pos, to_pos, self._current_turn
            )
            return False

        move = Rules.resolve(self._board, from_pos, to_pos, self._en_passant_target)
        if move is None:
            _LOGGER.debug(
                "Rejected %s->%s: illegal for %s", from_pos, to_pos, piece.symbol
            )
            return False

        captured = self._apply(piece, move)
        self._change_turn(piece.color)
        self._selected = None

        _LOGGER.debug("Moved %s %s\n%r", piece.symbol, move, self._board)
        for move_cb in self.events.on_move:
            move_cb(move)
        if captured is not None and captured.piece_type == PieceType.KING:
            _LOGGER.info("%s king captured", captured.color)
            for king_cb in self.events.on_king_captured:
                king_cb(captured.color)
        if self._pending_promotion == move.to_pos:
            _LOGGER.info("Promotion pending on %s", move.to_pos)
            for promo_cb in self.events.on_promotion_pending:
                promo_cb(move.to_pos)
        return True

    def promote(self, piece_type: PieceType) -> None:
        """Resolve a pending promotion; does nothing when none is pending.

        Any piece type is accepted.
        """
        position = self._pending_promotion
        if position is None:
            return
        piece = self._board[position]
        if piece is None:
            return
        piece.piece_type = piece_type
        self._pending_promotion = None
        _LOGGER.info("Promoted %s to %s", position, piece_type.name.lower())

    # ── Internals ────────────────────────────────────────────────────────

    def _apply(self, piece: Piece, move: Move) -> Piece | None:
        """Commit *move*; returns the captured piece, if any."""
        board = self._board

        captured: Piece | None = None
        if move.capture_pos is not None:
            captured = board[move.capture_pos]
            board[move.capture_pos] = None

        rook: Piece | None = None
        if move.flag == MoveFlag.CASTLE:
            assert move.rook_from is not None and move.rook_to is not None
            rook = board[move.rook_from]
            board[move.rook_from] = None

        board[move.from_pos] = None
        board[move.to_pos] = piece
        if rook is not None and move.rook_to is not None:
            board[move.rook_to] = rook

        if captured is not None:
            self._captured[piece.color].append(captured)
            if captured.piece_type == PieceType.KING:
                self._king_captured[captured.color] = True

        if piece.piece_type == PieceType.PAWN:
            piece.has_moved = True
            if move.flag == MoveFlag.DOUBLE_PAWN:
                self._en_passant_target = piece
            elif move.flag == MoveFlag.EN_PASSANT:
                self._en_passant_target = None
            if move.to_pos.row == pawn_geometry(piece.color).end_row:
                self._pending_promotion = move.to_pos

        return captured

    def _change_turn(self, mover: Color) -> None:
        target = self._en_passant_target
        if target is not None and target.color != mover:
            self._en_passant_target = None
        self._current_turn = mover.opposite

    def __repr__(self) -> str:
        header = f"BoardEngine(turn={self._current_turn}, selected={self._selected})"
        return f"{header}\n{self._board!r}"
