"""Unit tests for /src/games/checkers.py"""

import random

import pytest

from src.core.exceptions import (
    GameDefectError,
    GameOverError,
    IllegalMoveError,
    InvalidMoveError,
    NotYourPieceError,
    NotYourTurnError,
)
from src.core.models import CONTINUE, DRAW, HOST_BOT, Player, RemotePlayer, Win
from src.core.shared_types import PieceShade, Status
from src.games.board import Board
from src.games.checkers import INITIAL_POSITION, CheckersGame, CheckersState
from src.games.moves import Move, jump, single
from src.games.pieces import CheckersPiece
from src.games.square import Shade, Square
from src.games.tictactoe import TicTacToeGame

DARK = CheckersPiece.DARK
LIGHT = CheckersPiece.LIGHT
DARK_KING = CheckersPiece.DARK_KING
LIGHT_KING = CheckersPiece.LIGHT_KING

PLAYER = RemotePlayer("P1")


def s(name: str) -> Square:
    return Square.from_algebraic(name)


def state(
    board: dict[str, CheckersPiece],
    next_shade: PieceShade = PieceShade.DARK,
    status: Status = Status.WAITING_FOR_PLAYER,
) -> CheckersState:
    """Dark is the remote player, light the bot (like in a real game)"""
    players = {PieceShade.DARK: PLAYER, PieceShade.LIGHT: HOST_BOT}
    return CheckersState(
        session_id="test",
        status=status,
        player_shades=players,
        next_player=players[next_shade],
        board=Board.from_algebraic(board),
    )


@pytest.fixture
def game() -> CheckersGame:
    return CheckersGame(rng=random.Random(7))


# --- LEGAL MOVE ENUMERATION ---
@pytest.mark.parametrize(
    "board, expected_dark, expected_light",
    [
        pytest.param({"d6": DARK}, [single("d6", "c5"), single("d6", "e5")], [], id="dark-singles-down"),
        pytest.param(
            {"d6": DARK, "c5": DARK},
            [single("d6", "e5"), single("c5", "b4"), single("c5", "d4")],
            [],
            id="occupied-target",
        ),
        pytest.param(
            {"d6": DARK, "e5": LIGHT},
            [jump("d6", "f4")],
            [jump("e5", "c7")],
            id="jump-takes-precedence",
        ),
        pytest.param(
            {"d6": DARK, "e5": DARK},
            [single("d6", "c5"), single("e5", "d4"), single("e5", "f4")],
            [],
            id="cannot-jump-own-piece",
        ),
        pytest.param({"d3": LIGHT}, [], [single("d3", "c4"), single("d3", "e4")], id="light-singles-up"),
        pytest.param(
            {"d4": LIGHT_KING},
            [],
            [single("d4", "c3"), single("d4", "e3"), single("d4", "c5"), single("d4", "e5")],
            id="king-both-directions",
        ),
        pytest.param(
            {"d5": DARK_KING, "c6": LIGHT},
            [jump("d5", "b7")],
            [single("c6", "b7"), single("c6", "d7")],
            id="king-jumps-backward",
        ),
        pytest.param(
            {"d5": DARK_KING, "e6": LIGHT},
            [jump("d5", "f7")],
            [single("e6", "d7"), single("e6", "f7")],
            id="king-jumps-forward",
        ),
        pytest.param(
            {"d6": DARK, "e5": LIGHT, "a3": DARK},
            [jump("d6", "f4")],
            [jump("e5", "c7")],
            id="jump-suppresses-other-singles",
        ),
        pytest.param(
            {"d6": DARK, "e5": LIGHT, "f4": LIGHT},
            [single("d6", "c5")],
            [jump("e5", "c7")],
            id="landing-square-occupied",
        ),
        pytest.param(
            {"d6": DARK, "b6": DARK, "e5": LIGHT, "c5": LIGHT},
            [jump("d6", "f4"), jump("d6", "b4"), jump("b6", "d4")],
            [jump("e5", "c7"), jump("c5", "a7"), jump("c5", "e7")],
            id="multiple-jumps",
        ),
        pytest.param(
            {"a1": DARK, "c1": DARK, "b2": DARK, "g7": LIGHT},
            [],
            [single("g7", "h8"), single("g7", "f8")],
            id="dark-stuck",
        ),
        pytest.param(
            {"b2": DARK, "g7": LIGHT},
            [single("b2", "a1"), single("b2", "c1")],
            [single("g7", "h8"), single("g7", "f8")],
            id="moves-onto-promotion-rank",
        ),
        pytest.param(
            {"d4": DARK_KING, "b6": DARK, "c3": LIGHT, "e5": LIGHT},
            [jump("d4", "b2"), jump("d4", "f6")],
            [single("c3", "b4"), single("e5", "f6"), single("e5", "d6")],
            id="king-jumps-suppress-men-singles",
        ),
    ],
)
def test_legal_moves(
    board: dict[str, CheckersPiece], expected_dark: list[Move], expected_light: list[Move]
) -> None:
    """Legal move sets for both sides, order does not matter"""
    st = state(board)
    assert sorted(st.legal_moves(PieceShade.DARK), key=repr) == sorted(expected_dark, key=repr)
    assert sorted(st.legal_moves(PieceShade.LIGHT), key=repr) == sorted(expected_light, key=repr)


def test_initial_position() -> None:
    """12 men per side on the dark squares of the first/last three ranks"""
    dark_squares = [sq for sq, piece in INITIAL_POSITION.items() if piece == DARK]
    light_squares = [sq for sq, piece in INITIAL_POSITION.items() if piece == LIGHT]
    assert len(dark_squares) == len(light_squares) == 12
    assert all(sq.shade == Shade.DARK for sq in INITIAL_POSITION)
    assert {sq.rank_value + 1 for sq in dark_squares} == {6, 7, 8}
    assert {sq.rank_value + 1 for sq in light_squares} == {1, 2, 3}


def test_initial_legal_moves(game: CheckersGame) -> None:
    initial = game.create_initial_state("s1", PLAYER, None)
    assert len(initial.legal_moves(PieceShade.DARK)) == 7
    assert len(initial.legal_moves(PieceShade.LIGHT)) == 7
    assert initial.next_player == PLAYER
    assert initial.player_shades == {PieceShade.DARK: PLAYER, PieceShade.LIGHT: HOST_BOT}
    assert initial.status == Status.WAITING_FOR_PLAYER


# --- MOVE VALIDATION ---
def test_non_diagonal_move_is_rejected(game: CheckersGame) -> None:
    initial = game.create_initial_state("s1", PLAYER, None)
    with pytest.raises(IllegalMoveError, match="Move must be a single or jump: d6 to d5"):
        game.process_move(initial, PLAYER, "d6 to d5")


def test_unparsable_move(game: CheckersGame) -> None:
    initial = game.create_initial_state("s1", PLAYER, None)
    with pytest.raises(InvalidMoveError):
        game.process_move(initial, PLAYER, "let me think")


def test_out_of_turn(game: CheckersGame) -> None:
    initial = game.create_initial_state("s1", PLAYER, None)
    with pytest.raises(NotYourTurnError):
        game.process_move(initial, HOST_BOT, "c3 to d4")


def test_no_piece_on_from_square(game: CheckersGame) -> None:
    initial = game.create_initial_state("s1", PLAYER, None)
    with pytest.raises(InvalidMoveError, match="No piece at d4"):
        game.process_move(initial, PLAYER, "d4 to e3")


def test_moving_opponents_piece(game: CheckersGame) -> None:
    initial = game.create_initial_state("s1", PLAYER, None)
    with pytest.raises(NotYourPieceError, match="Not your piece at c3"):
        game.process_move(initial, PLAYER, "c3 to d4")


def test_man_cannot_move_backward(game: CheckersGame) -> None:
    st = state({"d6": DARK, "h2": LIGHT})
    with pytest.raises(IllegalMoveError, match="not a legal move"):
        game.process_move(st, PLAYER, "d6 to e7")


def test_capture_is_mandatory(game: CheckersGame) -> None:
    st = state({"d6": DARK, "e5": LIGHT, "a7": DARK})
    with pytest.raises(IllegalMoveError, match="must jump"):
        game.process_move(st, PLAYER, "a7 to b6")


def test_finished_game_accepts_no_moves(game: CheckersGame) -> None:
    st = state({"d6": DARK, "h2": LIGHT}, status=Status.COMPLETED)
    with pytest.raises(GameOverError):
        game.process_move(st, PLAYER, "d6 to c5")


def test_state_of_another_game_is_a_defect(game: CheckersGame) -> None:
    other = TicTacToeGame().create_initial_state("s1", PLAYER, None)
    with pytest.raises(GameDefectError):
        game.process_move(other, PLAYER, "d6 to c5")


# --- APPLYING MOVES ---
def test_single_move_passes_the_turn(game: CheckersGame) -> None:
    """...and leaves the previous state untouched"""
    initial = game.create_initial_state("s1", PLAYER, None)
    before = Board(dict(initial.board.position))
    after = game.process_move(initial, PLAYER, "b6 to a5")

    assert after.board.piece(s("a5")) == DARK
    assert after.board.is_empty(s("b6"))
    assert after.next_player == HOST_BOT
    assert after.status == Status.WAITING_FOR_BOT
    assert after.last_move == single("b6", "a5")

    # no mutation of the old state
    assert initial.board == before
    assert initial.next_player == PLAYER
    assert initial.last_move is None
    assert initial.status == Status.WAITING_FOR_PLAYER


def test_jump_removes_the_jumped_piece(game: CheckersGame) -> None:
    st = state({"d6": DARK, "e5": LIGHT, "a1": LIGHT})
    after = game.process_move(st, PLAYER, "d6 to f4")
    assert after.board.position == {s("f4"): DARK, s("a1"): LIGHT}
    # no further jump available for the piece on f4: turn passes
    assert after.next_player == HOST_BOT
    assert after.chain_square is None


def test_jump_keeps_the_turn_while_the_piece_can_jump_again(game: CheckersGame) -> None:
    st = state({"d6": DARK, "e5": LIGHT, "e3": LIGHT, "b6": DARK, "c5": LIGHT, "a1": LIGHT})
    after = game.process_move(st, PLAYER, "d6 to f4")
    assert after.next_player == PLAYER
    assert after.status == Status.WAITING_FOR_PLAYER
    assert after.chain_square == s("f4")
    # only the piece that just jumped may continue, even though b6 could jump as well
    assert after.legal_moves(PieceShade.DARK) == [jump("f4", "d2")]
    with pytest.raises(IllegalMoveError, match="keep jumping"):
        game.process_move(after, PLAYER, "b6 to d4")

    final = game.process_move(after, PLAYER, "f4 to d2")
    assert final.board.is_empty(s("e3"))
    assert final.next_player == HOST_BOT
    assert final.chain_square is None


def test_crowning_ends_the_turn(game: CheckersGame) -> None:
    """The new king could jump g2 from f1, but crowning ends the move"""
    st = state({"d3": DARK, "e2": LIGHT, "g2": LIGHT})
    after = game.process_move(st, PLAYER, "d3 to f1")
    assert after.board.piece(s("f1")) == DARK_KING
    assert after.next_player == HOST_BOT


@pytest.mark.parametrize(
    "board, next_shade, player, move, square, expected",
    [
        ({"b2": DARK, "h2": LIGHT}, PieceShade.DARK, PLAYER, "b2 to a1", "a1", DARK_KING),
        ({"g7": LIGHT, "a7": DARK}, PieceShade.LIGHT, HOST_BOT, "g7 to h8", "h8", LIGHT_KING),
        ({"d6": DARK, "h2": LIGHT}, PieceShade.DARK, PLAYER, "d6 to c5", "c5", DARK),
        ({"c3": LIGHT, "a7": DARK}, PieceShade.LIGHT, HOST_BOT, "c3 to d4", "d4", LIGHT),
        ({"c2": DARK_KING, "h2": LIGHT}, PieceShade.DARK, PLAYER, "c2 to d3", "d3", DARK_KING),
    ],
)
def test_promotion_only_on_the_last_rank(
    game: CheckersGame,
    board: dict[str, CheckersPiece],
    next_shade: PieceShade,
    player: Player,
    move: str,
    square: str,
    expected: CheckersPiece,
) -> None:
    after = game.process_move(state(board, next_shade), player, move)
    assert after.board.piece(s(square)) == expected


# --- GAME RESULT ---
def test_game_continues(game: CheckersGame) -> None:
    assert game.game_move_result(game.create_initial_state("s1", PLAYER, None)) == CONTINUE


def test_win_when_opponent_cannot_move(game: CheckersGame) -> None:
    assert game.game_move_result(state({"d6": DARK})) == Win(PLAYER)
    assert game.game_move_result(state({"d3": LIGHT})) == Win(HOST_BOT)


def test_draw_when_nobody_can_move(game: CheckersGame) -> None:
    """Dark man stuck on rank 1, light man stuck on rank 8"""
    assert game.game_move_result(state({"a1": DARK, "h8": LIGHT})) == DRAW


def test_capturing_the_last_piece_completes_the_game(game: CheckersGame) -> None:
    after = game.process_move(state({"d6": DARK, "e5": LIGHT}), PLAYER, "d6 to f4")
    assert after.status == Status.COMPLETED
    assert game.game_move_result(after) == Win(PLAYER)


# --- BOT ---
def test_bot_plays_a_legal_light_move(game: CheckersGame) -> None:
    initial = game.create_initial_state("s1", PLAYER, None)
    after_player = game.process_move(initial, PLAYER, "b6 to a5")
    assert game.is_bot_turn(after_player)
    bot_move = game.generate_bot_move(after_player)
    assert Move.from_text(bot_move) in after_player.legal_moves(PieceShade.LIGHT)
    after_bot = game.process_move(after_player, HOST_BOT, bot_move)
    assert not game.is_bot_turn(after_bot)


def test_bot_without_moves_is_a_defect(game: CheckersGame) -> None:
    with pytest.raises(GameDefectError):
        game.generate_bot_move(state({"d6": DARK}, next_shade=PieceShade.LIGHT))


# --- RESPONSES ---
def test_response_for_new_game(game: CheckersGame) -> None:
    initial = game.create_initial_state("s1", PLAYER, None)
    response = game.generate_response(initial)
    assert response.startswith("@P1, it's your turn:\n\n+X+a+b+c+d+e+f+g+h+X+")
    assert response.count("⚫") == 12
    assert response.count("🔴") == 12


def test_response_names_the_last_move(game: CheckersGame) -> None:
    after_player = game.process_move(state({"d6": DARK, "a1": LIGHT}), PLAYER, "d6 to c5")
    after_bot = game.process_move(after_player, HOST_BOT, "a1 to b2")
    assert game.generate_response(after_bot).startswith("@P1, it's your turn, I moved a1 to b2:")
