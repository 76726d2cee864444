"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable, Mapping

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color
from chessrules.core.piece import Piece
from chessrules.core.state import GameState
from chessrules.core.types import Square

StateFactory = Callable[..., GameState]


@pytest.fixture()
def make_state() -> StateFactory:
    """Build a :class:`GameState` from a ``{square: piece}`` mapping on an empty board."""

    def _make(
        pieces: Mapping[Square, Piece],
        turn: Color = Color.WHITE,
        **fields: object,
    ) -> GameState:
        board = Board()
        for sq, piece in pieces.items():
            board.place_piece(sq, piece)
        return GameState(board=board, current_turn=turn, **fields)  # type: ignore[arg-type]

    return _make
