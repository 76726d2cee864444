"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import Square, is_valid_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class Board:
    """Mutable 8x8 grid of optional pieces, indexed ``[row][col]``.

    All accessors are bounds-checked: reads outside the board return ``None``
    and writes outside the board are ignored.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self.piece_at(sq)

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        if piece is None:
            self.clear_square(sq)
        else:
            self.place_piece(sq, piece)

    def piece_at(self, sq: Square) -> Piece | None:
        if not is_valid_square(sq):
            return None
        return self._grid[sq.row][sq.col]

    def place_piece(self, sq: Square, piece: Piece) -> None:
        if is_valid_square(sq):
            self._grid[sq.row][sq.col] = piece

    def clear_square(self, sq: Square) -> None:
        if is_valid_square(sq):
            self._grid[sq.row][sq.col] = None

    def remove_piece(self, sq: Square) -> Piece | None:
        """Clear *sq* and return whatever stood there."""
        piece = self.piece_at(sq)
        self.clear_square(sq)
        return piece

    def relocate(self, from_sq: Square, to_sq: Square) -> bool:
        """Move the piece on *from_sq* to *to_sq* without any rules check.

        Whatever stands on *to_sq* is overwritten. Returns ``False`` when
        either square is off the board or *from_sq* is empty.
        """
        piece = self.piece_at(from_sq)
        if piece is None or not is_valid_square(to_sq):
            return False
        self.clear_square(from_sq)
        self.place_piece(to_sq, piece.moved())
        return True

    def is_empty(self, sq: Square) -> bool:
        return self.piece_at(sq) is None

    # -- Query helpers ------------------------------------------------------

    def is_path_clear(self, from_sq: Square, to_sq: Square) -> bool:
        """Whether every square strictly between *from_sq* and *to_sq* is empty.

        Only meaningful on a straight or diagonal line; callers establish
        that before asking.
        """
        dcol = _sign(to_sq.col - from_sq.col)
        drow = _sign(to_sq.row - from_sq.row)
        if dcol == 0 and drow == 0:
            return True

        sq = from_sq.offset(dcol, drow)
        while sq != to_sq:
            if not is_valid_square(sq):
                return False
            if self._grid[sq.row][sq.col] is not None:
                return False
            sq = sq.offset(dcol, drow)
        return True

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares in row-major order, optionally filtered by *color*."""
        for row in range(8):
            for col in range(8):
                piece = self._grid[row][col]
                if piece is None:
                    continue
                if color is not None and piece.color != color:
                    continue
                yield Square(col, row), piece

    def find_king(self, color: Color) -> Square:
        """Return the king square for *color*."""
        for sq, piece in self.pieces(color):
            if piece.piece_type == PieceType.KING:
                return sq
        raise ValueError(f"No {color.name} king on board")

    def has_king(self, color: Color) -> bool:
        return any(
            piece.piece_type == PieceType.KING for _, piece in self.pieces(color)
        )

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        return b

    def clear(self) -> None:
        self._grid = [[None] * 8 for _ in range(8)]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col in range(8):
            b.place_piece(Square(col, 1), Piece(Color.BLACK, PieceType.PAWN))
            b.place_piece(Square(col, 6), Piece(Color.WHITE, PieceType.PAWN))

        for col, pt in enumerate(_BACK_RANK):
            b.place_piece(Square(col, 0), Piece(Color.BLACK, pt))
            b.place_piece(Square(col, 7), Piece(Color.WHITE, pt))
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                p = self._grid[row][col]
                cells.append(str(p) if p else ".")
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
