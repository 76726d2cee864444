"""FEN parsing and serialization."""

from __future__ import annotations

import logging

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, PieceType
from chessrules.core.move_generator import PAWN_START_ROW
from chessrules.core.piece import Piece
from chessrules.core.rules import Rules
from chessrules.core.state import (
    CASTLING_CORNERS,
    KING_HOME,
    GameState,
    calculate_halfmove_clock,
)
from chessrules.core.types import Square, parse_square, square_name

_LOGGER = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)

__all__ = [
    "STARTING_FEN",
    "board_to_fen_pieces",
    "calculate_halfmove_clock",
    "castling_rights_to_fen",
    "en_passant_target",
    "fen_pieces_to_board",
    "fen_to_game_state",
    "game_state_to_fen",
    "parse_castling_rights",
]


# ── Piece placement ──────────────────────────────────────────────────────────


def board_to_fen_pieces(board: Board) -> str:
    """Serialise piece placement, rank 8 first."""
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = board[Square(col, row)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    return "/".join(rows)


def fen_pieces_to_board(placement: str) -> Board:
    """Parse the piece-placement field into a fresh :class:`Board`."""
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError("Invalid FEN: must have 8 rows")

    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if "1" <= ch <= "8":
                col += int(ch)
                continue
            try:
                piece = Piece.from_char(ch)
            except ValueError:
                raise ValueError(
                    f"Invalid FEN: unrecognized character '{ch}' in row {row + 1}"
                ) from None
            if col < 8:
                board.place_piece(Square(col, row), piece)
            col += 1
        if col != 8:
            raise ValueError(
                f"Invalid FEN: row {row + 1} describes {col} squares instead of 8"
            )
    return board


# ── Castling / en passant / clocks ───────────────────────────────────────────


def castling_rights_to_fen(state: GameState) -> str:
    """Castling field: explicit rights if tracked, else from ``has_moved`` flags."""
    rights = state.resolved_castling_rights()
    text = "".join(ch for ch, right in _CASTLING_CHARS if rights & right)
    return text or "-"


def parse_castling_rights(text: str) -> CastlingRights:
    """Parse the castling field (``KQkq`` subset or ``-``)."""
    rights = CastlingRights.NONE
    if text == "-":
        return rights
    lookup = dict(_CASTLING_CHARS)
    for ch in text:
        right = lookup.get(ch)
        if right is None:
            raise ValueError(f"Invalid FEN castling field: {text!r}")
        rights |= right
    return rights


def en_passant_target(state: GameState) -> str:
    """En passant field: the square behind a pawn that just double-stepped, or ``-``."""
    target = state.resolved_en_passant_target()
    return square_name(target) if target is not None else "-"


def _parse_counter(text: str, name: str, minimum: int) -> int:
    try:
        value = int(text)
    except ValueError:
        raise ValueError(f"Invalid FEN {name}: {text!r}") from None
    if value < minimum:
        raise ValueError(f"Invalid FEN {name}: {text!r}")
    return value


# ── Full game state ──────────────────────────────────────────────────────────


def game_state_to_fen(state: GameState) -> str:
    """Serialise a :class:`GameState` to FEN."""
    pieces = board_to_fen_pieces(state.board)
    side = "w" if state.current_turn == Color.WHITE else "b"
    castling = castling_rights_to_fen(state)
    ep = en_passant_target(state)
    halfmove = state.resolved_halfmove_clock()
    fullmove = state.resolved_fullmove_number()
    return f"{pieces} {side} {castling} {ep} {halfmove} {fullmove}"


def fen_to_game_state(fen: str) -> GameState:
    """Parse a FEN string into a :class:`GameState` with an empty history."""
    parts = fen.split()
    if len(parts) != 6:
        raise ValueError("Invalid FEN: must have 6 space-separated parts")

    placement, side_part, castling_part, ep_part, halfmove_part, fullmove_part = parts

    board = fen_pieces_to_board(placement)

    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    castling = parse_castling_rights(castling_part)

    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise ValueError(f"Invalid FEN en-passant square: {ep_part!r}") from None

    halfmove = _parse_counter(halfmove_part, "halfmove clock", 0)
    fullmove = _parse_counter(fullmove_part, "fullmove number", 1)

    _restore_move_flags(board, castling)

    state = GameState(
        board=board,
        current_turn=side,
        castling_rights=castling,
        en_passant_target=ep,
        halfmove_clock=halfmove,
        fullmove_number=fullmove,
    )
    if board.has_king(Color.WHITE) and board.has_king(Color.BLACK):
        state = Rules.update_game_status(state)
    return state


def _restore_move_flags(board: Board, castling: CastlingRights) -> None:
    """Mark pieces as moved where the FEN proves they have left home.

    Kings and rooks keep ``has_moved=False`` only while a matching castling
    right survives; pawns only while they stand on their starting row.
    """
    unmoved_rooks = {
        rook_sq for right, _, rook_sq in CASTLING_CORNERS if castling & right
    }
    moved = 0
    for sq, piece in list(board.pieces()):
        if piece.piece_type == PieceType.KING:
            keeps_rights = bool(castling & CastlingRights.for_color(piece.color))
            stays = sq == KING_HOME[piece.color] and keeps_rights
        elif piece.piece_type == PieceType.ROOK:
            stays = sq in unmoved_rooks
        elif piece.piece_type == PieceType.PAWN:
            stays = sq.row == PAWN_START_ROW[piece.color]
        else:
            stays = True
        if not stays:
            board.place_piece(sq, piece.moved())
            moved += 1
    _LOGGER.debug("Restored has_moved on %d pieces from FEN", moved)
