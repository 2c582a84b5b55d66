"""
Checkers (English draughts) played against the host bot.

The player who starts the game plays the dark pieces (top of the board) and moves first. The host bot plays light.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from functools import cached_property

from src.core.exceptions import (
    GameDefectError,
    GameOverError,
    IllegalMoveError,
    InvalidMoveError,
    NotYourPieceError,
    NotYourTurnError,
)
from src.core.models import (
    ABANDON,
    CONTINUE,
    DRAW,
    HOST_BOT,
    GameMoveResult,
    GameState,
    Player,
    RemotePlayer,
    Win,
)
from src.core.shared_types import PieceShade, Status
from src.games.board import Board
from src.games.game import own_state
from src.games.moves import (
    JumpMove,
    Move,
    candidate_jump_moves,
    candidate_single_moves,
)
from src.games.pieces import CheckersPiece
from src.games.square import RANKS, Shade, Square

logger = logging.getLogger(__name__)


def _starting_squares(rank_indices: range) -> list[Square]:
    """Pieces only ever stand on the dark squares"""
    return [
        square
        for rank_idx in rank_indices
        for square in RANKS[rank_idx].squares
        if square.shade == Shade.DARK
    ]


INITIAL_POSITION: dict[Square, CheckersPiece] = {
    **{square: CheckersPiece.man(PieceShade.LIGHT) for square in _starting_squares(range(0, 3))},
    **{square: CheckersPiece.man(PieceShade.DARK) for square in _starting_squares(range(5, 8))},
}


@dataclass(frozen=True)
class CheckersState(GameState):
    """
    One position of a checkers game + who plays which side and whose turn it is.
    ----

    * chain_square: set while a piece that just captured can capture again. Its owner keeps the turn,
      and may only continue jumping with that piece.
    """

    player_shades: dict[PieceShade, Player]
    next_player: Player
    board: Board
    last_move: Move | None = None
    chain_square: Square | None = None

    # --- WHO IS WHO ---
    def shade_of(self, player: Player) -> PieceShade | None:
        return next(
            (shade for shade, shade_player in self.player_shades.items() if shade_player == player),
            None,
        )

    @property
    def next_shade(self) -> PieceShade:
        shade = self.shade_of(self.next_player)
        if shade is None:
            raise GameDefectError(f"{self.next_player} does not play in this game")
        return shade

    @property
    def player_not_next(self) -> Player:
        return self.player_shades[self.next_shade.opponent()]

    @property
    def last_mover(self) -> Player | None:
        """Whoever owns the piece that made the last move"""
        if self.last_move is None:
            return None
        piece = self.board.piece(self.last_move.to_square)
        return self.player_shades[piece.shade]

    # --- LEGAL MOVES ---
    @cached_property
    def legal_dark_moves(self) -> list[Move]:
        return self._enumerate_legal_moves(PieceShade.DARK)

    @cached_property
    def legal_light_moves(self) -> list[Move]:
        return self._enumerate_legal_moves(PieceShade.LIGHT)

    def legal_moves(self, shade: PieceShade) -> list[Move]:
        """Empty list: that side cannot move."""
        return self.legal_dark_moves if shade == PieceShade.DARK else self.legal_light_moves

    def move(self, piece: CheckersPiece, move: Move) -> CheckersState:
        """
        Apply an (already validated) move
        ----

        1. move the piece, removing the jumped piece if this was a jump
        2. a man reaching the far end of the board becomes a king
        3. decide who moves next: after a jump, the same piece keeps going if it can jump again (unless it was just crowned)
        4. update the status
        """
        crowned = not piece.is_king and move.to_square.rank_value.is_board_end()
        new_piece = piece.promote() if crowned else piece
        captured = [move.jumped_square] if isinstance(move, JumpMove) else []
        board = self.board.move_piece(
            move.from_square, move.to_square, captured=captured, new_piece=new_piece
        )

        moved = replace(
            self,
            board=board,
            last_move=move,
            chain_square=move.to_square,
            next_player=self.player_shades[piece.shade],
        )
        keeps_turn = (
            isinstance(move, JumpMove)
            and not crowned
            and bool(moved._legal_jumps_from(move.to_square, piece.shade))
        )
        if keeps_turn:
            logger.debug("%s keeps jumping from %s", piece.shade, move.to_square.short_string)
        else:
            moved = replace(
                moved,
                chain_square=None,
                next_player=self.player_shades[piece.shade.opponent()],
            )
        return replace(moved, status=moved._status_after_move())

    # -- PRIVATE HELPERS ---
    def _status_after_move(self) -> Status:
        if not self.legal_dark_moves or not self.legal_light_moves:
            return Status.COMPLETED
        return Status.WAITING_FOR_BOT if self.next_player == HOST_BOT else Status.WAITING_FOR_PLAYER

    def _enumerate_legal_moves(self, shade: PieceShade) -> list[Move]:
        """
        Legal moves for one side
        ----

        1. collect every legal jump of every piece of that side
        2. if there is any, those are the only legal moves: capturing is mandatory
        3. otherwise collect the legal single steps

        While a capture chain is going on, only the chaining piece's jumps count for the side to move.
        """
        if self.chain_square is not None and shade == self.next_shade:
            return list(self._legal_jumps_from(self.chain_square, shade))

        player_squares = self.board.locate_shade(shade)
        logger.debug("%s owns %d squares", shade, len(player_squares))
        if not player_squares:
            return []

        jump_moves: list[Move] = [
            move
            for square in player_squares
            for move in self._legal_jumps_from(square, shade)
        ]
        if jump_moves:
            logger.debug("Legal jump moves for %s: %s", shade, [m.short_string for m in jump_moves])
            return jump_moves

        single_moves: list[Move] = [
            move
            for square in player_squares
            for move in candidate_single_moves(square)
            if self._is_legal(move, shade)
        ]
        if single_moves:
            logger.debug("Legal single moves for %s: %s", shade, [m.short_string for m in single_moves])
        else:
            logger.debug("No legal moves for %s", shade)
        return single_moves

    def _legal_jumps_from(self, square: Square, shade: PieceShade) -> list[JumpMove]:
        return [move for move in candidate_jump_moves(square) if self._is_legal(move, shade)]

    def _is_legal(self, move: Move, shade: PieceShade) -> bool:
        piece = self.board.piece(move.from_square)
        if piece.shade != shade:
            raise GameDefectError(f"{move.from_square.short_string} does not hold a {shade} piece")
        if not self.board.is_empty(move.to_square):
            return False
        if not piece.is_king and move.direction != shade:
            # men only move forward
            return False
        if isinstance(move, JumpMove):
            jumped = self.board.piece_at(move.jumped_square)
            if jumped is None or jumped.shade != shade.opponent():
                return False
        return True


class CheckersGame:
    game_id = "checkers"
    game_name = "Checkers"

    # the host bot's side
    bot_shade = PieceShade.LIGHT

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def create_initial_state(
        self, session_id: str, player: RemotePlayer, params: str | None
    ) -> CheckersState:
        return CheckersState(
            session_id=session_id,
            status=Status.WAITING_FOR_PLAYER,
            player_shades={
                self.bot_shade.opponent(): player,
                self.bot_shade: HOST_BOT,
            },
            next_player=player,
            board=Board(dict(INITIAL_POSITION)),
        )

    def process_move(self, state: GameState, player: Player, move: str) -> CheckersState:
        """
        Validate the move, then apply it
        ----

        In order: is the game still on, is it your turn, can the text be read as a move, is there a piece,
        is it yours, is the move in the legal move set.
        """
        logger.debug("process_move(%s, %s, %r)", state.session_id, player, move)
        checkers = own_state(state, CheckersState)
        if checkers.is_terminal:
            raise GameOverError("Game is over")
        if checkers.next_player != player:
            raise NotYourTurnError("Not your turn")

        parsed = Move.from_text(move)
        piece = checkers.board.piece_at(parsed.from_square)
        if piece is None:
            raise InvalidMoveError(f"No piece at {parsed.from_square.short_string}")
        if checkers.player_shades.get(piece.shade) != player:
            raise NotYourPieceError(f"Not your piece at {parsed.from_square.short_string}")

        legal_moves = checkers.legal_moves(piece.shade)
        if not legal_moves:
            raise IllegalMoveError(f"No legal moves for {piece.shade}")
        if parsed not in legal_moves:
            raise IllegalMoveError(self._illegal_move_reason(checkers, parsed, legal_moves))

        return checkers.move(piece, parsed)

    def generate_response(self, state: GameState) -> str:
        checkers = own_state(state, CheckersState)
        board = checkers.board.render()
        last_move = checkers.last_move
        mover = checkers.last_mover
        if checkers.is_terminal:
            if last_move is None or mover is None:
                return f"Final position:\n\n{board}"
            return f"Final position, {mover.mention} moved {last_move.short_string}:\n\n{board}"

        next_player = checkers.next_player
        if last_move is None or mover is None:
            return f"{next_player.mention}, it's your turn:\n\n{board}"
        if mover == next_player:
            return (
                f"{next_player.mention}, it's your turn again, keep jumping with the piece on "
                f"{last_move.to_square.short_string} (last move {last_move.short_string}):\n\n{board}"
            )
        return f"{next_player.mention}, it's your turn, {mover.mention} moved {last_move.short_string}:\n\n{board}"

    def game_move_result(self, state: GameState) -> GameMoveResult:
        checkers = own_state(state, CheckersState)
        if checkers.status == Status.ABANDONED:
            return ABANDON
        dark_moves = checkers.legal_moves(PieceShade.DARK)
        light_moves = checkers.legal_moves(PieceShade.LIGHT)
        if not dark_moves and not light_moves:
            return DRAW
        if not dark_moves:
            return Win(checkers.player_shades[PieceShade.LIGHT])
        if not light_moves:
            return Win(checkers.player_shades[PieceShade.DARK])
        return CONTINUE

    def is_bot_turn(self, state: GameState) -> bool:
        return own_state(state, CheckersState).next_player == HOST_BOT

    def generate_bot_move(self, state: GameState) -> str:
        """Uniformly random legal move"""
        checkers = own_state(state, CheckersState)
        legal_moves = checkers.legal_moves(self.bot_shade)
        if not legal_moves:
            raise GameDefectError("Game is over: the bot has no legal moves")
        return self.rng.choice(legal_moves).short_string

    # -- PRIVATE HELPERS ---
    def _illegal_move_reason(
        self, state: CheckersState, move: Move, legal_moves: list[Move]
    ) -> str:
        if state.chain_square is not None:
            return (
                f"Move {move.short_string} is not a legal move: keep jumping with the piece on "
                f"{state.chain_square.short_string}"
            )
        if not isinstance(move, JumpMove) and isinstance(legal_moves[0], JumpMove):
            return f"Move {move.short_string} is not a legal move: a jump is available, so you must jump"
        shade = state.board.piece(move.from_square).shade
        return f"Move {move.short_string} is not a legal move for {shade}"
