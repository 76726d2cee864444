"""Tests for game-state transitions: move_piece and the bookkeeping helpers."""

from collections.abc import Callable

import pytest

from chessrules.core.attacks import is_king_in_check
from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, GameStatus, PieceType, SpecialMove
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.notation import fen_to_game_state, game_state_to_fen
from chessrules.core.piece import Piece
from chessrules.core.state import GameState
from chessrules.core.types import (
    A1, A5, A6, A7, A8, B8, C1, D1, D5, D6, D7, D8, E1, E2, E3, E4, E5,
    E7, E8, F1, F2, F3, F6, F7, G1, G2, G4, H1, H2, H3, H4, H5, H6, H8,
    Square,
)
from chessrules.game.transition import (
    DEFAULT_PROMOTION,
    add_move_to_history,
    get_current_player,
    get_move_history,
    init_game_state,
    is_valid_move,
    move_piece,
    switch_turn,
)

StateFactory = Callable[..., GameState]

WK = Piece(Color.WHITE, PieceType.KING)
BK = Piece(Color.BLACK, PieceType.KING)
WR = Piece(Color.WHITE, PieceType.ROOK)
BR = Piece(Color.BLACK, PieceType.ROOK)
WP = Piece(Color.WHITE, PieceType.PAWN)


def play(state: GameState, *moves: tuple[Square, Square]) -> GameState:
    for from_sq, to_sq in moves:
        next_state = move_piece(from_sq, to_sq, state)
        assert next_state is not None, f"{from_sq}{to_sq} was rejected"
        state = next_state
    return state


class TestInitGameState:
    def test_standard_setup(self) -> None:
        state = init_game_state()
        assert state.board == Board.initial()
        assert state.current_turn == Color.WHITE
        assert state.move_history == ()
        assert not state.is_check
        assert not state.is_checkmate
        assert not state.is_stalemate

    def test_fresh_board_each_call(self) -> None:
        assert init_game_state().board is not init_game_state().board


class TestMovePiece:
    def test_simple_pawn_move(self) -> None:
        start = init_game_state()
        state = move_piece(E2, E4, start)
        assert state is not None
        assert state.board[E4] == WP
        assert state.board[E4].has_moved  # type: ignore[union-attr]
        assert state.board[E2] is None
        assert state.current_turn == Color.BLACK
        assert len(state.move_history) == 1
        record = state.move_history[0]
        assert (record.from_sq, record.to_sq) == (E2, E4)
        assert record.piece == WP
        assert not record.piece.has_moved
        assert record.special == SpecialMove.TWO_SQUARE_ADVANCE
        assert record.captured is None

    def test_input_state_untouched(self) -> None:
        start = init_game_state()
        before = game_state_to_fen(start)
        state = move_piece(E2, E4, start)
        assert state is not None
        assert state.board is not start.board
        assert game_state_to_fen(start) == before
        assert start.board[E2] == WP
        assert start.move_history == ()

    def test_capture_recorded(self) -> None:
        state = play(init_game_state(), (E2, E4), (D7, D5), (E4, D5))
        record = state.move_history[-1]
        assert record.captured == Piece(Color.BLACK, PieceType.PAWN)
        assert record.is_capture
        assert state.board[D5] == WP


class TestRejectedMoves:
    def test_illegal_geometry(self) -> None:
        assert move_piece(E2, E5, init_game_state()) is None

    def test_empty_source(self) -> None:
        assert move_piece(E4, E5, init_game_state()) is None

    def test_wrong_turn(self) -> None:
        assert move_piece(E7, E5, init_game_state()) is None

    def test_off_board(self) -> None:
        assert move_piece(Square(4, 8), E4, init_game_state()) is None
        assert move_piece(E2, Square(-1, 4), init_game_state()) is None

    def test_own_piece_on_target(self) -> None:
        assert move_piece(D1, E2, init_game_state()) is None

    def test_move_into_check(self, make_state: StateFactory) -> None:
        state = make_state({E1: WK, D8: BR, H6: BK})
        assert move_piece(E1, D1, state) is None

    def test_rejection_leaves_state_unchanged(self) -> None:
        start = init_game_state()
        before = game_state_to_fen(start)
        assert move_piece(E2, E5, start) is None
        assert game_state_to_fen(start) == before

    def test_refused_after_checkmate(self) -> None:
        state = play(init_game_state(), (F2, F3), (E7, E5), (G2, G4), (D8, H4))
        assert state.is_checkmate
        assert move_piece(E1, F2, state) is None

    def test_refused_once_flagged_over(self) -> None:
        state = init_game_state()
        assert move_piece(E2, E4, state.replace(is_checkmate=True)) is None
        assert move_piece(E2, E4, state.replace(is_stalemate=True)) is None


class TestStatusAfterMove:
    def test_fools_mate(self) -> None:
        state = play(init_game_state(), (F2, F3), (E7, E5), (G2, G4), (D8, H4))
        assert state.is_check
        assert state.is_checkmate
        assert not state.is_stalemate
        assert state.status == GameStatus.CHECKMATE
        assert state.current_turn == Color.WHITE

    def test_check_with_defence(self) -> None:
        state = play(init_game_state(), (E2, E4), (F7, F6), (D1, H5))
        assert state.is_check
        assert not state.is_checkmate
        assert state.status == GameStatus.CHECK

    def test_stalemating_move(self, make_state: StateFactory) -> None:
        state = make_state(
            {H8: BK, D7: Piece(Color.WHITE, PieceType.QUEEN), A6: WR, E1: WK}
        )
        result = move_piece(D7, F7, state)
        assert result is not None
        assert result.is_stalemate
        assert not result.is_check
        assert result.is_game_over

    def test_mover_never_left_in_check(self) -> None:
        state = fen_to_game_state(
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
        )
        for move in MoveGenerator(state).generate_legal_moves():
            result = move_piece(move.from_sq, move.to_sq, state)
            assert result is not None
            assert not is_king_in_check(result.board, Color.WHITE)
            assert result.current_turn == Color.BLACK


class TestEnPassant:
    def test_capture_removes_passed_pawn(self) -> None:
        state = play(init_game_state(), (E2, E4), (A7, A6), (E4, E5), (D7, D5))
        result = move_piece(E5, D6, state)
        assert result is not None
        assert result.board[D5] is None
        assert result.board[D6] == WP
        assert result.board[E5] is None
        record = result.move_history[-1]
        assert record.special == SpecialMove.EN_PASSANT
        assert record.captured == Piece(Color.BLACK, PieceType.PAWN)
        assert result.halfmove_clock == 0

    def test_not_after_delay(self) -> None:
        state = play(
            init_game_state(),
            (E2, E4), (A7, A6), (E4, E5), (D7, D5), (H2, H3), (A6, A5),
        )
        assert move_piece(E5, D6, state) is None

    def test_target_set_after_double_step(self) -> None:
        state = play(init_game_state(), (E2, E4))
        assert state.en_passant_target == E3
        state = play(state, (A7, A6))
        assert state.en_passant_target is None

    def test_from_fen(self) -> None:
        state = fen_to_game_state("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2")
        result = move_piece(E5, D6, state)
        assert result is not None
        assert result.board[D5] is None
        assert result.board[D6] == WP


class TestPromotion:
    def _state(self, make_state: StateFactory) -> GameState:
        return make_state({A7: WP, B8: BR, E1: WK, H6: BK})

    def test_defaults_to_queen(self, make_state: StateFactory) -> None:
        result = move_piece(A7, A8, self._state(make_state))
        assert result is not None
        assert result.board[A8] == Piece(Color.WHITE, DEFAULT_PROMOTION)
        record = result.move_history[-1]
        assert record.special == SpecialMove.PROMOTION
        assert record.promoted_to == PieceType.QUEEN
        assert record.piece == WP

    @pytest.mark.parametrize(
        "choice", [PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT, PieceType.QUEEN]
    )
    def test_underpromotion(self, make_state: StateFactory, choice: PieceType) -> None:
        result = move_piece(A7, A8, self._state(make_state), choice)
        assert result is not None
        assert result.board[A8] == Piece(Color.WHITE, choice)

    @pytest.mark.parametrize("choice", [PieceType.KING, PieceType.PAWN])
    def test_invalid_choice_falls_back_to_queen(
        self, make_state: StateFactory, choice: PieceType
    ) -> None:
        result = move_piece(A7, A8, self._state(make_state), choice)
        assert result is not None
        assert result.board[A8] == Piece(Color.WHITE, PieceType.QUEEN)

    def test_capture_promotion(self, make_state: StateFactory) -> None:
        result = move_piece(A7, B8, self._state(make_state), PieceType.KNIGHT)
        assert result is not None
        assert result.board[B8] == Piece(Color.WHITE, PieceType.KNIGHT)
        assert result.board[A7] is None
        record = result.move_history[-1]
        assert record.captured == BR
        assert record.promoted_to == PieceType.KNIGHT

    def test_promotion_type_ignored_for_normal_moves(self) -> None:
        result = move_piece(E2, E4, init_game_state(), PieceType.KNIGHT)
        assert result is not None
        assert result.board[E4] == WP
        assert result.move_history[-1].promoted_to is None


class TestCastling:
    def _state(self, make_state: StateFactory) -> GameState:
        return make_state({E1: WK, A1: WR, H1: WR, E8: BK})

    def test_kingside(self, make_state: StateFactory) -> None:
        result = move_piece(E1, G1, self._state(make_state))
        assert result is not None
        assert result.board[G1] == WK
        assert result.board[F1] == WR
        assert result.board[H1] is None
        assert result.board[E1] is None
        assert result.board[F1].has_moved  # type: ignore[union-attr]
        assert result.move_history[-1].special == SpecialMove.CASTLING
        assert not result.castling_rights & CastlingRights.WHITE_BOTH  # type: ignore[operator]

    def test_queenside(self, make_state: StateFactory) -> None:
        result = move_piece(E1, C1, self._state(make_state))
        assert result is not None
        assert result.board[C1] == WK
        assert result.board[D1] == WR
        assert result.board[A1] is None

    def test_rook_move_clears_one_side(self, make_state: StateFactory) -> None:
        result = move_piece(H1, H2, self._state(make_state))
        assert result is not None
        rights = result.resolved_castling_rights()
        assert not rights & CastlingRights.WHITE_KINGSIDE
        assert rights & CastlingRights.WHITE_QUEENSIDE

    def test_no_castling_after_king_returns(self, make_state: StateFactory) -> None:
        state = self._state(make_state)
        state = play(state, (E1, F2), (E8, D8), (F2, E1), (D8, E8))
        assert move_piece(E1, G1, state) is None

    def test_capture_on_corner_clears_right(self) -> None:
        state = fen_to_game_state("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        result = move_piece(A1, A8, state)
        assert result is not None
        assert game_state_to_fen(result).split()[2] == "Kk"


class TestClocks:
    def test_halfmove_and_fullmove(self) -> None:
        state = play(init_game_state(), (E2, E4))
        assert (state.halfmove_clock, state.fullmove_number) == (0, 1)
        state = play(state, (E7, E5))
        assert (state.halfmove_clock, state.fullmove_number) == (0, 2)
        state = play(state, (G1, F3))
        assert (state.halfmove_clock, state.fullmove_number) == (1, 2)
        state = play(state, (B8, A6))
        assert (state.halfmove_clock, state.fullmove_number) == (2, 3)
        state = play(state, (F3, E5))
        assert (state.halfmove_clock, state.fullmove_number) == (0, 3)

    def test_counts_continue_from_fen(self) -> None:
        state = fen_to_game_state("4k3/8/8/8/8/8/8/4K3 b - - 10 41")
        result = move_piece(E8, E7, state)
        assert result is not None
        assert result.halfmove_clock == 11
        assert result.fullmove_number == 42


class TestHelpers:
    def test_is_valid_move(self) -> None:
        state = init_game_state()
        assert is_valid_move(E2, E4, state)
        assert is_valid_move(G1, F3, state)
        assert not is_valid_move(E2, E5, state)
        assert not is_valid_move(E7, E5, state)

    def test_switch_turn(self) -> None:
        state = init_game_state()
        switched = switch_turn(state)
        assert switched.current_turn == Color.BLACK
        assert state.current_turn == Color.WHITE
        assert switched.board is state.board

    def test_get_current_player(self) -> None:
        assert get_current_player(init_game_state()) == Color.WHITE
        assert get_current_player(play(init_game_state(), (E2, E4))) == Color.BLACK

    def test_add_move_to_history(self) -> None:
        state = init_game_state()
        updated = add_move_to_history(state, E2, E4, WP, special=SpecialMove.TWO_SQUARE_ADVANCE)
        assert state.move_history == ()
        assert len(updated.move_history) == 1
        assert updated.move_history[0].special == SpecialMove.TWO_SQUARE_ADVANCE
        assert updated.board is state.board

    def test_get_move_history_is_a_copy(self) -> None:
        state = play(init_game_state(), (E2, E4), (E7, E5))
        history = get_move_history(state)
        assert [r.to_sq for r in history] == [E4, E5]
        history.clear()
        assert len(state.move_history) == 2
