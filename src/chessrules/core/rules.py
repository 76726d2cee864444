"""High-level chess rules: check, checkmate, stalemate classification."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.attacks import is_king_in_check
from chessrules.core.enums import Color, GameStatus
from chessrules.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessrules.core.state import GameState


class Rules:
    """Static rule-checker that operates on a :class:`GameState`.

    Every query takes the color to evaluate explicitly. When that color is
    not the side to move, the state is viewed with the turn handed to it.
    """

    @staticmethod
    def is_player_in_check(state: GameState, color: Color) -> bool:
        return is_king_in_check(state.board, color)

    @staticmethod
    def has_legal_moves(state: GameState, color: Color) -> bool:
        return MoveGenerator(state.with_turn(color)).has_legal_move()

    @staticmethod
    def is_checkmate(state: GameState, color: Color) -> bool:
        if not Rules.is_player_in_check(state, color):
            return False
        return not Rules.has_legal_moves(state, color)

    @staticmethod
    def is_stalemate(state: GameState, color: Color) -> bool:
        if Rules.is_player_in_check(state, color):
            return False
        return not Rules.has_legal_moves(state, color)

    @staticmethod
    def status(state: GameState) -> GameStatus:
        """Classify the position for the side to move."""
        color = state.current_turn
        in_check = Rules.is_player_in_check(state, color)
        if Rules.has_legal_moves(state, color):
            return GameStatus.CHECK if in_check else GameStatus.NORMAL
        return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE

    @staticmethod
    def update_game_status(state: GameState) -> GameState:
        """Return *state* with check / checkmate / stalemate recomputed."""
        status = Rules.status(state)
        return state.replace(
            is_check=status in (GameStatus.CHECK, GameStatus.CHECKMATE),
            is_checkmate=status == GameStatus.CHECKMATE,
            is_stalemate=status == GameStatus.STALEMATE,
        )
