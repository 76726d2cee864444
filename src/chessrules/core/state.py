"""Immutable game snapshot: board, side to move, history and status."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from chessrules.core.board import Board
from chessrules.core.enums import (
    CastlingRights,
    Color,
    GameStatus,
    PieceType,
    SpecialMove,
)
from chessrules.core.move import MoveRecord
from chessrules.core.types import Square

# Home squares of each castling right: (right, color, rook square).
CASTLING_CORNERS: tuple[tuple[CastlingRights, Color, Square], ...] = (
    (CastlingRights.WHITE_KINGSIDE, Color.WHITE, Square(7, 7)),
    (CastlingRights.WHITE_QUEENSIDE, Color.WHITE, Square(0, 7)),
    (CastlingRights.BLACK_KINGSIDE, Color.BLACK, Square(7, 0)),
    (CastlingRights.BLACK_QUEENSIDE, Color.BLACK, Square(0, 0)),
)
KING_HOME: dict[Color, Square] = {Color.WHITE: Square(4, 7), Color.BLACK: Square(4, 0)}


def castling_rights_from_board(board: Board) -> CastlingRights:
    """Rights implied by unmoved kings and rooks on their home squares."""
    rights = CastlingRights.NONE
    for right, color, rook_sq in CASTLING_CORNERS:
        king = board[KING_HOME[color]]
        rook = board[rook_sq]
        if (
            king is not None
            and king.color == color
            and king.piece_type == PieceType.KING
            and not king.has_moved
            and rook is not None
            and rook.color == color
            and rook.piece_type == PieceType.ROOK
            and not rook.has_moved
        ):
            rights |= right
    return rights


def calculate_halfmove_clock(history: tuple[MoveRecord, ...] | list[MoveRecord]) -> int:
    """Plies since the last pawn move or capture, counted back through *history*."""
    halfmoves = 0
    for record in reversed(history):
        if record.piece.piece_type == PieceType.PAWN or record.captured is not None:
            break
        halfmoves += 1
    return halfmoves


@dataclass(frozen=True, slots=True)
class GameState:
    """Value object handed to and returned by every rules operation.

    Callers must treat ``board`` as read-only; transitions always build a
    fresh :class:`Board` for the state they return.

    The last four fields are optional. ``None`` means "not tracked
    explicitly", in which case FEN export derives the value from the board
    and the move history instead.
    """

    board: Board
    current_turn: Color = Color.WHITE
    move_history: tuple[MoveRecord, ...] = ()
    is_check: bool = False
    is_checkmate: bool = False
    is_stalemate: bool = False
    castling_rights: CastlingRights | None = None
    en_passant_target: Square | None = None
    halfmove_clock: int | None = None
    fullmove_number: int | None = None

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def current_player(self) -> Color:
        return self.current_turn

    @property
    def last_move(self) -> MoveRecord | None:
        return self.move_history[-1] if self.move_history else None

    @property
    def ply_count(self) -> int:
        """Number of half-moves recorded in this state's history."""
        return len(self.move_history)

    @property
    def is_game_over(self) -> bool:
        return self.is_checkmate or self.is_stalemate

    @property
    def status(self) -> GameStatus:
        if self.is_checkmate:
            return GameStatus.CHECKMATE
        if self.is_stalemate:
            return GameStatus.STALEMATE
        if self.is_check:
            return GameStatus.CHECK
        return GameStatus.NORMAL

    # ── Derived bookkeeping ──────────────────────────────────────────────

    def resolved_castling_rights(self) -> CastlingRights:
        """Explicit castling rights, else what the ``has_moved`` flags allow."""
        if self.castling_rights is not None:
            return self.castling_rights
        return castling_rights_from_board(self.board)

    def resolved_en_passant_target(self) -> Square | None:
        """Explicit en passant target, else the square behind a pawn that
        just advanced two squares."""
        if self.en_passant_target is not None:
            return self.en_passant_target
        last = self.last_move
        if (
            last is None
            or last.piece.piece_type != PieceType.PAWN
            or last.special != SpecialMove.TWO_SQUARE_ADVANCE
        ):
            return None
        return Square(last.to_sq.col, (last.from_sq.row + last.to_sq.row) // 2)

    def resolved_halfmove_clock(self) -> int:
        if self.halfmove_clock is not None:
            return self.halfmove_clock
        return calculate_halfmove_clock(self.move_history)

    def resolved_fullmove_number(self) -> int:
        if self.fullmove_number is not None:
            return self.fullmove_number
        return len(self.move_history) // 2 + 1

    # ── Copy helpers ─────────────────────────────────────────────────────

    def replace(self, **changes: object) -> GameState:
        """New state with *changes* applied (board is shared, not copied)."""
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]

    def with_turn(self, color: Color) -> GameState:
        if color == self.current_turn:
            return self
        return self.replace(current_turn=color)
