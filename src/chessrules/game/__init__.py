"""Game layer: immutable state transitions built on the core rules.

Quick start::

    from chessrules.core.types import E2, E4
    from chessrules.game import init_game_state, move_piece

    state = init_game_state()
    state = move_piece(E2, E4, state)
"""

from chessrules.game.transition import (
    DEFAULT_PROMOTION,
    PROMOTION_CHOICES,
    add_move_to_history,
    get_current_player,
    get_move_history,
    init_game_state,
    is_valid_move,
    move_piece,
    switch_turn,
)

__all__ = [
    "DEFAULT_PROMOTION",
    "PROMOTION_CHOICES",
    "add_move_to_history",
    "get_current_player",
    "get_move_history",
    "init_game_state",
    "is_valid_move",
    "move_piece",
    "switch_turn",
]
