"""Move candidates and move-history records."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import PieceType, SpecialMove
from chessrules.core.piece import Piece
from chessrules.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """A candidate move produced by the move generator.

    ``captured_square`` is only set for en passant, where the captured pawn
    stands beside the destination rather than on it.
    """

    from_sq: Square
    to_sq: Square
    capture: bool = False
    special: SpecialMove | None = None
    captured_square: Square | None = None

    @property
    def capture_square(self) -> Square:
        """Square whose occupant is removed when the move is applied."""
        if self.captured_square is not None:
            return self.captured_square
        return self.to_sq

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    special: SpecialMove | None = None
    promoted_to: PieceType | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None
