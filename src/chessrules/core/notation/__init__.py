"""Notation package: FEN parsing and serialization."""

from chessrules.core.notation.fen import (
    STARTING_FEN,
    board_to_fen_pieces,
    calculate_halfmove_clock,
    castling_rights_to_fen,
    en_passant_target,
    fen_pieces_to_board,
    fen_to_game_state,
    game_state_to_fen,
    parse_castling_rights,
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
