"""Per-piece move generation and the king-safety legality filter."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chessrules.core.attacks import PAWN_DIRECTION, is_king_in_check
from chessrules.core.enums import CastlingRights, Color, PieceType, SpecialMove
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.types import Square, is_valid_square

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.state import GameState


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Row a pawn starts on / promotes on, per color.
PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
PAWN_PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}

KINGSIDE_ROOK_COL = 7
QUEENSIDE_ROOK_COL = 0


def castling_right(color: Color, kingside: bool) -> CastlingRights:
    """The single :class:`CastlingRights` bit for *color* on one wing."""
    if color == Color.WHITE:
        return (
            CastlingRights.WHITE_KINGSIDE if kingside else CastlingRights.WHITE_QUEENSIDE
        )
    return CastlingRights.BLACK_KINGSIDE if kingside else CastlingRights.BLACK_QUEENSIDE


class MoveGenerator:
    """Generates moves for the pieces of a :class:`GameState`.

    The per-piece generators return *geometric* candidates and know nothing
    about check. :meth:`legal_moves` adds the king-safety filter by playing
    each candidate on a scratch copy of the board. The state's own board is
    never touched.
    """

    __slots__ = ("_state", "_board")

    def __init__(self, state: GameState) -> None:
        self._state = state
        self._board: Board = state.board

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, sq: Square) -> list[Move]:
        """Strictly legal moves for the piece on *sq*.

        Empty when *sq* is off the board, empty, or holds a piece of the side
        not to move.
        """
        if not is_valid_square(sq):
            return []
        piece = self._board[sq]
        if piece is None or piece.color != self._state.current_turn:
            return []

        return [
            move
            for move in self.pseudo_legal_moves(sq)
            if self._leaves_king_safe(move, piece)
        ]

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        legal: list[Move] = []
        for sq, _ in self._board.pieces(self._state.current_turn):
            legal.extend(self.legal_moves(sq))
        return legal

    def has_legal_move(self) -> bool:
        """Whether the side to move has at least one legal move."""
        for sq, _ in self._board.pieces(self._state.current_turn):
            if self.legal_moves(sq):
                return True
        return False

    def pseudo_legal_moves(self, sq: Square) -> list[Move]:
        """Geometric candidates for the piece on *sq* (may leave own king in check)."""
        piece = self._board[sq]
        if piece is None:
            return []
        return _GENERATORS[piece.piece_type](self, sq)

    # -- Piece-specific generators -----------------------------------------

    def pawn_moves(self, sq: Square) -> list[Move]:
        board = self._board
        piece = board[sq]
        if piece is None or piece.piece_type != PieceType.PAWN:
            return []

        moves: list[Move] = []
        color = piece.color
        direction = PAWN_DIRECTION[color]
        promotion_row = PAWN_PROMOTION_ROW[color]

        one_step = sq.offset(0, direction)
        if is_valid_square(one_step) and board.is_empty(one_step):
            special = SpecialMove.PROMOTION if one_step.row == promotion_row else None
            moves.append(Move(sq, one_step, special=special))

            if sq.row == PAWN_START_ROW[color]:
                two_step = sq.offset(0, 2 * direction)
                if is_valid_square(two_step) and board.is_empty(two_step):
                    moves.append(
                        Move(sq, two_step, special=SpecialMove.TWO_SQUARE_ADVANCE)
                    )

        for dcol in (-1, 1):
            cap_sq = sq.offset(dcol, direction)
            if not is_valid_square(cap_sq):
                continue
            target = board[cap_sq]
            if target is not None and target.color != color:
                special = SpecialMove.PROMOTION if cap_sq.row == promotion_row else None
                moves.append(Move(sq, cap_sq, capture=True, special=special))

        ep_move = self._en_passant_move(sq, color)
        if ep_move is not None:
            moves.append(ep_move)
        return moves

    def knight_moves(self, sq: Square) -> list[Move]:
        piece = self._board[sq]
        if piece is None or piece.piece_type != PieceType.KNIGHT:
            return []
        return self._step_moves(sq, piece.color, KNIGHT_OFFSETS)

    def bishop_moves(self, sq: Square) -> list[Move]:
        piece = self._board[sq]
        if piece is None or piece.piece_type != PieceType.BISHOP:
            return []
        return self._slide_moves(sq, piece.color, BISHOP_DIRS)

    def rook_moves(self, sq: Square) -> list[Move]:
        piece = self._board[sq]
        if piece is None or piece.piece_type != PieceType.ROOK:
            return []
        return self._slide_moves(sq, piece.color, ROOK_DIRS)

    def queen_moves(self, sq: Square) -> list[Move]:
        piece = self._board[sq]
        if piece is None or piece.piece_type != PieceType.QUEEN:
            return []
        return self._slide_moves(sq, piece.color, QUEEN_DIRS)

    def king_moves(self, sq: Square) -> list[Move]:
        piece = self._board[sq]
        if piece is None or piece.piece_type != PieceType.KING:
            return []

        moves = self._step_moves(sq, piece.color, KING_OFFSETS)
        if piece.has_moved:
            return moves

        for rook_col in (KINGSIDE_ROOK_COL, QUEENSIDE_ROOK_COL):
            rook_sq = Square(rook_col, sq.row)
            if self.can_castle(sq, rook_sq):
                direction = 1 if rook_col > sq.col else -1
                moves.append(
                    Move(sq, sq.offset(2 * direction, 0), special=SpecialMove.CASTLING)
                )
        return moves

    # -- Castling -----------------------------------------------------------

    def can_castle(self, king_sq: Square, rook_sq: Square) -> bool:
        """Whether the king on *king_sq* may castle with the rook on *rook_sq*."""
        board = self._board
        king = board[king_sq]
        rook = board[rook_sq]

        if king is None or king.piece_type != PieceType.KING or king.has_moved:
            return False
        if rook is None or rook.piece_type != PieceType.ROOK or rook.has_moved:
            return False
        if king.color != rook.color or king_sq.row != rook_sq.row:
            return False

        kingside = rook_sq.col > king_sq.col
        rights = self._state.castling_rights
        if rights is not None and not rights & castling_right(king.color, kingside):
            return False

        if not board.is_path_clear(king_sq, rook_sq):
            return False
        if is_king_in_check(board, king.color):
            return False

        # The king may not pass through, nor land on, an attacked square.
        direction = 1 if kingside else -1
        for step in (1, 2):
            trial = board.copy()
            trial.clear_square(king_sq)
            trial.place_piece(king_sq.offset(direction * step, 0), king)
            if is_king_in_check(trial, king.color):
                return False
        return True

    # -- Internals ----------------------------------------------------------

    def _leaves_king_safe(self, move: Move, piece: Piece) -> bool:
        trial = self._board.copy()
        trial.clear_square(move.from_sq)
        if move.capture:
            trial.clear_square(move.capture_square)
        trial.place_piece(move.to_sq, piece.moved())
        return not is_king_in_check(trial, piece.color)

    def _step_moves(
        self,
        sq: Square,
        color: Color,
        offsets: tuple[tuple[int, int], ...],
    ) -> list[Move]:
        board = self._board
        moves: list[Move] = []
        for dcol, drow in offsets:
            to_sq = sq.offset(dcol, drow)
            if not is_valid_square(to_sq):
                continue
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
            elif target.color != color:
                moves.append(Move(sq, to_sq, capture=True))
        return moves

    def _slide_moves(
        self,
        sq: Square,
        color: Color,
        directions: tuple[tuple[int, int], ...],
    ) -> list[Move]:
        board = self._board
        moves: list[Move] = []
        for dcol, drow in directions:
            to_sq = sq.offset(dcol, drow)
            while is_valid_square(to_sq):
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    to_sq = to_sq.offset(dcol, drow)
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq, capture=True))
                break
        return moves

    def _en_passant_victim(self, color: Color) -> Square | None:
        """Square of an enemy pawn that may be taken en passant right now."""
        last = self._state.last_move
        if last is not None:
            if (
                last.special == SpecialMove.TWO_SQUARE_ADVANCE
                and last.piece.piece_type == PieceType.PAWN
                and last.piece.color != color
                and abs(last.from_sq.row - last.to_sq.row) == 2
            ):
                return last.to_sq
            return None

        # No history (e.g. decoded from FEN): fall back to the explicit target.
        target = self._state.en_passant_target
        if target is None:
            return None
        victim = target.offset(0, -PAWN_DIRECTION[color])
        occupant = self._board[victim]
        if (
            occupant is None
            or occupant.piece_type != PieceType.PAWN
            or occupant.color == color
        ):
            return None
        return victim

    def _en_passant_move(self, sq: Square, color: Color) -> Move | None:
        victim = self._en_passant_victim(color)
        if victim is None:
            return None
        if victim.row != sq.row or abs(victim.col - sq.col) != 1:
            return None

        to_sq = Square(victim.col, sq.row + PAWN_DIRECTION[color])
        if not is_valid_square(to_sq) or not self._board.is_empty(to_sq):
            return None
        return Move(
            sq,
            to_sq,
            capture=True,
            special=SpecialMove.EN_PASSANT,
            captured_square=victim,
        )


_GENERATORS: dict[PieceType, Callable[[MoveGenerator, Square], list[Move]]] = {
    PieceType.PAWN: MoveGenerator.pawn_moves,
    PieceType.KNIGHT: MoveGenerator.knight_moves,
    PieceType.BISHOP: MoveGenerator.bishop_moves,
    PieceType.ROOK: MoveGenerator.rook_moves,
    PieceType.QUEEN: MoveGenerator.queen_moves,
    PieceType.KING: MoveGenerator.king_moves,
}
