"""Game-state transitions: start a game, apply a move, bookkeeping helpers.

Every function here returns a *new* :class:`GameState`. The state passed in
is never modified, and rejected moves are signalled by ``None`` rather than
by an exception.
"""

from __future__ import annotations

import logging

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, PieceType, SpecialMove
from chessrules.core.move import Move, MoveRecord
from chessrules.core.move_generator import (
    KINGSIDE_ROOK_COL,
    QUEENSIDE_ROOK_COL,
    MoveGenerator,
)
from chessrules.core.piece import Piece
from chessrules.core.rules import Rules
from chessrules.core.state import CASTLING_CORNERS, GameState
from chessrules.core.types import Square, is_valid_square

_LOGGER = logging.getLogger(__name__)

PROMOTION_CHOICES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)
DEFAULT_PROMOTION = PieceType.QUEEN


# ── Construction ─────────────────────────────────────────────────────────────


def init_game_state() -> GameState:
    """Standard starting position, White to move, empty history."""
    return GameState(board=Board.initial(), current_turn=Color.WHITE)


# ── Move application ─────────────────────────────────────────────────────────


def is_valid_move(from_sq: Square, to_sq: Square, state: GameState) -> bool:
    """Whether the piece on *from_sq* may legally move to *to_sq*."""
    return _find_legal_move(from_sq, to_sq, state) is not None


def move_piece(
    from_sq: Square,
    to_sq: Square,
    state: GameState,
    promotion_type: PieceType | None = None,
) -> GameState | None:
    """Apply the move *from_sq* → *to_sq* and return the resulting state.

    Returns ``None`` when the move is rejected: a square off the board, an
    empty or wrong-colored source, a destination no legal move reaches, or a
    game that is already over. *promotion_type* only matters for a pawn
    reaching the last rank; anything other than queen, rook, bishop or
    knight (including ``None``) promotes to a queen.
    """
    if state.is_game_over:
        _LOGGER.debug("Rejected %s -> %s: game is over", from_sq, to_sq)
        return None
    if not is_valid_square(from_sq) or not is_valid_square(to_sq):
        _LOGGER.debug("Rejected %s -> %s: square off the board", from_sq, to_sq)
        return None

    piece = state.board[from_sq]
    if piece is None or piece.color != state.current_turn:
        _LOGGER.debug(
            "Rejected %s -> %s: no %s piece there", from_sq, to_sq, state.current_turn
        )
        return None

    move = _find_legal_move(from_sq, to_sq, state)
    if move is None:
        _LOGGER.debug("Rejected %s -> %s: not a legal move", from_sq, to_sq)
        return None

    board = state.board.copy()
    captured = board.remove_piece(move.capture_square) if move.capture else None
    board.clear_square(from_sq)

    placed = piece.moved()
    promoted_to: PieceType | None = None
    if move.special == SpecialMove.PROMOTION:
        promoted_to = (
            promotion_type if promotion_type in PROMOTION_CHOICES else DEFAULT_PROMOTION
        )
        placed = placed.promoted(promoted_to)
    board.place_piece(to_sq, placed)

    if move.special == SpecialMove.CASTLING:
        _castle_rook(board, move)

    record = MoveRecord(
        from_sq=from_sq,
        to_sq=to_sq,
        piece=piece,
        captured=captured,
        special=move.special,
        promoted_to=promoted_to,
    )

    halfmove = state.resolved_halfmove_clock()
    if piece.piece_type == PieceType.PAWN or captured is not None:
        halfmove = 0
    else:
        halfmove += 1

    fullmove = state.resolved_fullmove_number()
    if piece.color == Color.BLACK:
        fullmove += 1

    en_passant: Square | None = None
    if move.special == SpecialMove.TWO_SQUARE_ADVANCE:
        en_passant = Square(to_sq.col, (from_sq.row + to_sq.row) // 2)

    next_state = GameState(
        board=board,
        current_turn=state.current_turn.opposite,
        move_history=(*state.move_history, record),
        castling_rights=_next_castling_rights(state, piece, move),
        en_passant_target=en_passant,
        halfmove_clock=halfmove,
        fullmove_number=fullmove,
    )
    next_state = Rules.update_game_status(next_state)

    if next_state.is_checkmate:
        _LOGGER.info("Checkmate: %s wins", piece.color)
    elif next_state.is_stalemate:
        _LOGGER.info("Stalemate after %s", move)
    return next_state


# ── Turn / history helpers ───────────────────────────────────────────────────


def switch_turn(state: GameState) -> GameState:
    """Hand the move to the other side without touching the board."""
    return state.replace(current_turn=state.current_turn.opposite)


def add_move_to_history(
    state: GameState,
    from_sq: Square,
    to_sq: Square,
    piece: Piece,
    captured: Piece | None = None,
    special: SpecialMove | None = None,
    promoted_to: PieceType | None = None,
) -> GameState:
    """Append a :class:`MoveRecord` to the history of a copy of *state*."""
    record = MoveRecord(from_sq, to_sq, piece, captured, special, promoted_to)
    return state.replace(move_history=(*state.move_history, record))


def get_current_player(state: GameState) -> Color:
    return state.current_turn


def get_move_history(state: GameState) -> list[MoveRecord]:
    """The move history as a fresh list the caller may modify."""
    return list(state.move_history)


# ── Internal ─────────────────────────────────────────────────────────────────


def _find_legal_move(from_sq: Square, to_sq: Square, state: GameState) -> Move | None:
    for move in MoveGenerator(state).legal_moves(from_sq):
        if move.to_sq == to_sq:
            return move
    return None


def _castle_rook(board: Board, king_move: Move) -> None:
    """Slide the castling rook to the square the king jumped over."""
    row = king_move.from_sq.row
    if king_move.to_sq.col > king_move.from_sq.col:
        rook_from = Square(KINGSIDE_ROOK_COL, row)
        rook_to = Square(king_move.to_sq.col - 1, row)
    else:
        rook_from = Square(QUEENSIDE_ROOK_COL, row)
        rook_to = Square(king_move.to_sq.col + 1, row)
    board.relocate(rook_from, rook_to)


def _next_castling_rights(state: GameState, piece: Piece, move: Move) -> CastlingRights:
    rights = state.resolved_castling_rights()
    if piece.piece_type == PieceType.KING:
        rights &= ~CastlingRights.for_color(piece.color)
    # A rook leaving its corner, or anything captured on one, ends that right.
    for right, _, rook_sq in CASTLING_CORNERS:
        if rook_sq in (move.from_sq, move.to_sq):
            rights &= ~right
    return rights
