"""Attack detection.

Everything here answers "does a piece threaten a square" straight from the
board. Nothing in this module generates move lists or filters for legality;
the legality filter is built on top of it.
"""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import Square

PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}


def can_piece_attack_square(
    piece: Piece, from_sq: Square, target: Square, board: Board
) -> bool:
    """Whether *piece* standing on *from_sq* geometrically threatens *target*.

    Whose turn it is does not matter, and the occupant of *target* is not
    inspected. Pawns threaten only their two forward diagonals.
    """
    dcol = target.col - from_sq.col
    drow = target.row - from_sq.row
    adx = abs(dcol)
    ady = abs(drow)
    if adx == 0 and ady == 0:
        return False

    ptype = piece.piece_type
    if ptype == PieceType.PAWN:
        return drow == PAWN_DIRECTION[piece.color] and adx == 1
    if ptype == PieceType.KNIGHT:
        return (adx, ady) in ((1, 2), (2, 1))
    if ptype == PieceType.KING:
        return adx <= 1 and ady <= 1

    diagonal = adx == ady
    straight = adx == 0 or ady == 0
    if ptype == PieceType.BISHOP:
        on_line = diagonal
    elif ptype == PieceType.ROOK:
        on_line = straight
    else:
        on_line = diagonal or straight
    return on_line and board.is_path_clear(from_sq, target)


def is_square_attacked(board: Board, target: Square, by_color: Color) -> bool:
    """Is *target* attacked by any piece of *by_color*?"""
    for sq, piece in board.pieces(by_color):
        if can_piece_attack_square(piece, sq, target, board):
            return True
    return False


def is_king_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?

    Raises ``ValueError`` when *color* has no king on the board.
    """
    king_sq = board.find_king(color)
    return is_square_attacked(board, king_sq, color.opposite)
