"""Square value type and coordinate helpers.

Board layout (row 0 is Black's back rank):
    a8=(0, 0), b8=(1, 0), ..., h8=(7, 0)
    ...
    a1=(0, 7), b1=(1, 7), ..., h1=(7, 7)
"""

from __future__ import annotations

from dataclasses import dataclass

_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True)
class Square:
    """A board coordinate. ``col`` is the file, ``row`` counts down from rank 8."""

    col: int
    row: int

    def offset(self, dcol: int, drow: int) -> Square:
        return Square(self.col + dcol, self.row + drow)

    def __str__(self) -> str:
        if not is_valid_square(self):
            return f"({self.col}, {self.row})"
        return square_name(self)


def is_valid_square(sq: Square) -> bool:
    """Whether both coordinates are inside the 8x8 board."""
    return 0 <= sq.col < 8 and 0 <= sq.row < 8


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. ``Square(4, 6)`` → ``'e2'``."""
    if not is_valid_square(sq):
        raise ValueError(
            f"Invalid square {sq.col, sq.row}: coordinates must be between 0 and 7"
        )
    return _FILES[sq.col] + str(8 - sq.row)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. ``'e4'`` → ``Square(4, 4)``."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(_FILES.index(name[0]), 8 - int(name[1]))


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Square(c, 0) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(c, 1) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(c, 2) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(c, 3) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(c, 4) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(c, 5) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(c, 6) for c in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Square(c, 7) for c in range(8))
