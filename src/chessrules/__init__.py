"""chessrules: a chess rules engine.

Legal move generation, immutable move application, check / checkmate /
stalemate classification and FEN conversion.
"""

from chessrules.core import (
    STARTING_FEN,
    Board,
    CastlingRights,
    Color,
    GameState,
    GameStatus,
    Move,
    MoveGenerator,
    MoveRecord,
    Piece,
    PieceType,
    Rules,
    SpecialMove,
    Square,
    fen_to_game_state,
    game_state_to_fen,
    parse_square,
    square_name,
)
from chessrules.game import init_game_state, is_valid_move, move_piece

__version__ = "0.1.0"

__all__ = [
    "STARTING_FEN",
    "Board",
    "CastlingRights",
    "Color",
    "GameState",
    "GameStatus",
    "Move",
    "MoveGenerator",
    "MoveRecord",
    "Piece",
    "PieceType",
    "Rules",
    "SpecialMove",
    "Square",
    "fen_to_game_state",
    "game_state_to_fen",
    "init_game_state",
    "is_valid_move",
    "move_piece",
    "parse_square",
    "square_name",
]
