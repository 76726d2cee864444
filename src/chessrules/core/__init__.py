"""Core domain layer, pure chess rules with no external dependencies.

Quick start::

    from chessrules.core import MoveGenerator, fen_to_game_state, STARTING_FEN

    state = fen_to_game_state(STARTING_FEN)
    for move in MoveGenerator(state).generate_legal_moves():
        print(move)
"""

from chessrules.core.attacks import (
    can_piece_attack_square,
    is_king_in_check,
    is_square_attacked,
)
from chessrules.core.board import Board
from chessrules.core.enums import (
    CastlingRights,
    Color,
    GameStatus,
    PieceType,
    SpecialMove,
)
from chessrules.core.move import Move, MoveRecord
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.notation import (
    STARTING_FEN,
    fen_to_game_state,
    game_state_to_fen,
)
from chessrules.core.piece import Piece
from chessrules.core.rules import Rules
from chessrules.core.state import GameState
from chessrules.core.types import (
    Square,
    is_valid_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameStatus",
    "PieceType",
    "SpecialMove",
    # Types / helpers
    "Square",
    "is_valid_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "GameState",
    "Move",
    "MoveGenerator",
    "MoveRecord",
    "Piece",
    "Rules",
    # Attack detection
    "can_piece_attack_square",
    "is_king_in_check",
    "is_square_attacked",
    # Notation
    "STARTING_FEN",
    "fen_to_game_state",
    "game_state_to_fen",
]
