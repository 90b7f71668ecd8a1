"""Tests for the Qt board bridge."""

from __future__ import annotations

import pytest
from PyQt6.QtTest import QSignalSpy

from tapchess.core.board import Board
from tapchess.core.enums import Color, PieceType
from tapchess.core.types import Position
from tapchess.game.engine import BoardEngine
from tapchess.ui.qt_bridge import BoardBridge

_EMPTY = "........"

pytestmark = pytest.mark.usefixtures("qapp")


class TestBoardBridge:
    def test_selection_emits(self) -> None:
        bridge = BoardBridge()
        selection = QSignalSpy(bridge.selection_changed)
        board = QSignalSpy(bridge.board_changed)

        bridge.select(6, 4)

        assert len(selection) == 1
        assert selection[0][0] == Position(6, 4)
        assert len(board) == 0

    def test_move_emits_board_and_turn(self) -> None:
        bridge = BoardBridge()
        board = QSignalSpy(bridge.board_changed)
        turn = QSignalSpy(bridge.turn_changed)
        selection = QSignalSpy(bridge.selection_changed)

        bridge.select(6, 4)
        bridge.select(4, 4)

        assert len(board) == 1
        assert len(turn) == 1
        assert turn[0][0] == Color.BLACK
        assert selection[len(selection) - 1][0] is None

    def test_out_of_range_rejected(self) -> None:
        bridge = BoardBridge()
        rejected = QSignalSpy(bridge.selection_rejected)

        bridge.select(8, 0)

        assert len(rejected) == 1
        assert bridge.engine.selected is None

    def test_king_capture_emits(self) -> None:
        engine = BoardEngine(
            Board.from_rows(["....k...", "....Q..."] + [_EMPTY] * 5 + ["K......."])
        )
        bridge = BoardBridge(engine)
        captured = QSignalSpy(bridge.king_captured)

        bridge.select(1, 4)
        bridge.select(0, 4)

        assert len(captured) == 1
        assert captured[0][0] == Color.BLACK
        assert bridge.engine.winner == Color.WHITE

    def test_promotion_round_trip(self) -> None:
        engine = BoardEngine(
            Board.from_rows(["....k...", "P......."] + [_EMPTY] * 5 + ["....K..."])
        )
        bridge = BoardBridge(engine)
        requested = QSignalSpy(bridge.promotion_requested)

        bridge.select(1, 0)
        bridge.select(0, 0)
        assert len(requested) == 1
        assert requested[0][0] == Position(0, 0)

        board = QSignalSpy(bridge.board_changed)
        bridge.promote(int(PieceType.ROOK))
        assert len(board) == 1
        assert engine.piece_at(Position(0, 0)).piece_type == PieceType.ROOK

    def test_promote_unknown_type_rejected(self) -> None:
        bridge = BoardBridge()
        rejected = QSignalSpy(bridge.selection_rejected)
        bridge.promote(99)
        assert len(rejected) == 1

    def test_promote_without_pending_is_silent(self) -> None:
        bridge = BoardBridge()
        board = QSignalSpy(bridge.board_changed)
        bridge.promote(int(PieceType.QUEEN))
        assert len(board) == 0

    def test_board_changed_precedes_dialog_signals(self) -> None:
        engine = BoardEngine(
            Board.from_rows(
                ["....k...", "P...Q..."] + [_EMPTY] * 4 + ["r.......", "....K..."]
            )
        )
        bridge = BoardBridge(engine)
        order: list[str] = []
        bridge.board_changed.connect(lambda: order.append("board"))
        bridge.king_captured.connect(lambda _color: order.append("king"))
        bridge.promotion_requested.connect(lambda _pos: order.append("promotion"))

        bridge.select(1, 4)
        bridge.select(0, 4)
        assert order == ["board", "king"]

        bridge.select(6, 0)
        bridge.select(6, 1)
        order.clear()
        bridge.select(1, 0)
        bridge.select(0, 0)
        assert order == ["board", "promotion"]
