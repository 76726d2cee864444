"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from chessrules.core.enums import Color, PieceType

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

# FEN character -> (Color, PieceType); white pieces are uppercase.
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    (letter.upper() if color == Color.WHITE else letter): (color, ptype)
    for color in Color
    for ptype, letter in _LETTERS.items()
}
_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece.

    ``has_moved`` drives castling eligibility; it flips to ``True`` the first
    time the piece is relocated. It does not take part in equality, so two
    white knights compare equal whatever their history.
    """

    color: Color
    piece_type: PieceType
    has_moved: bool = field(default=False, compare=False)

    def moved(self) -> Piece:
        """Copy of this piece flagged as having moved."""
        if self.has_moved:
            return self
        return replace(self, has_moved=True)

    def promoted(self, piece_type: PieceType) -> Piece:
        return replace(self, piece_type=piece_type)

    def __str__(self) -> str:
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Unmoved piece for a FEN letter, e.g. ``'n'`` gives a black knight."""
        if char not in _CHAR_MAP:
            raise ValueError(f"Invalid piece character: {char!r}")
        color, ptype = _CHAR_MAP[char]
        return cls(color, ptype)
