"""Qt bridge exposing a :class:`BoardEngine` through signals and slots."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from tapchess.core.enums import Color, PieceType
from tapchess.core.types import Position, is_on_board
from tapchess.game.engine import BoardEngine

_LOGGER = logging.getLogger(__name__)


class BoardBridge(QObject):
    """Thread-affine adapter between board widgets and the engine.

    Views connect to the signals and re-render; taps arrive through
    :meth:`select` and promotion choices through :meth:`promote`.
    """

    board_changed = pyqtSignal()
    selection_changed = pyqtSignal(object)  # Position | None
    turn_changed = pyqtSignal(object)  # Color
    promotion_requested = pyqtSignal(object)  # Position
    king_captured = pyqtSignal(object)  # Color of the captured king
    selection_rejected = pyqtSignal(str)

    __slots__ = ("_engine", "_pending_promotions", "_captured_kings")

    def __init__(self, engine: BoardEngine | None = None) -> None:
        super().__init__()
        self._engine = engine if engine is not None else BoardEngine()
        # Engine events are held back until board_changed has gone out.
        self._pending_promotions: list[Position] = []
        self._captured_kings: list[Color] = []
        self._engine.events.on_promotion_pending.append(self._pending_promotions.append)
        self._engine.events.on_king_captured.append(self._captured_kings.append)

    @property
    def engine(self) -> BoardEngine:
        return self._engine

    @pyqtSlot(int, int)
    def select(self, row: int, col: int) -> None:
        """Forward a tap on cell (*row*, *col*) to the engine."""
        if not is_on_board(row, col):
            self.selection_rejected.emit(f"Cell out of range: ({row}, {col})")
            return

        engine = self._engine
        turn_before = engine.current_turn
        selected_before = engine.selected

        engine.select_piece(Position(row, col))

        if engine.current_turn != turn_before:
            self.board_changed.emit()
            self.turn_changed.emit(engine.current_turn)
        if engine.selected != selected_before:
            self.selection_changed.emit(engine.selected)

        self._flush_engine_events()

    @pyqtSlot(int)
    def promote(self, piece_type: int) -> None:
        """Resolve a pending promotion with *piece_type*."""
        try:
            chosen = PieceType(piece_type)
        except ValueError:
            self.selection_rejected.emit(f"Unknown piece type: {piece_type}")
            return

        if not self._engine.is_piece_promoted:
            _LOGGER.debug("Ignoring promotion to %s: nothing pending", chosen.name)
            return
        self._engine.promote(chosen)
        self.board_changed.emit()


    def _flush_engine_events(self) -> None:
        captured = self._captured_kings[:]
        self._captured_kings.clear()
        for color in captured:
            self.king_captured.emit(color)
        pending = self._pending_promotions[:]
        self._pending_promotions.clear()
        for position in pending:
            self.promotion_requested.emit(position)
