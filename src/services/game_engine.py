"""Orchestration of one interaction: look up / start the session, play the player's move, let the bot answer, build the response."""

import logging
import re
from typing import Callable, Sequence

from src.api.models import GameInteraction, GameResponse
from src.core.exceptions import GameDefectError, GameError, UnknownGameError
from src.core.models import HOST_BOT, Abandon, Continue, Draw, GameMoveResult, GameSession, Win
from src.db.repository import GameSessionStore
from src.games.game import Game

logger = logging.getLogger(__name__)

PLAY_COMMAND = re.compile(r"play\s+(\w+)(?:\s+(.+))?", re.IGNORECASE)

# No game lets the bot move this often in a row. Hitting it means a game keeps handing the turn back to the bot.
MAX_BOT_MOVES_PER_TURN = 64

ABANDONED_MESSAGE = "The game was abandoned. No further moves will be accepted."


def parse_new_game_command(content: str) -> tuple[str, str | None] | None:
    """
    'play <gameId> [params]' anywhere in the text (case-insensitive)

    Returns the lower cased game id and the (optional) rest of the line, or None if there is no such command.
    """
    match = PLAY_COMMAND.search(content)
    if match is None:
        return None
    params = match.group(2).strip() if match.group(2) else None
    return match.group(1).lower(), params


class GameEngine:
    """Runs every registered game against the session store."""

    def __init__(self, games: Sequence[Game], store: GameSessionStore) -> None:
        if not games:
            raise ValueError("The engine needs at least one game")
        game_ids = [game.game_id for game in games]
        if len(set(game_ids)) != len(game_ids):
            raise ValueError(f"Game ids must be unique, got: {game_ids}")
        self.games = tuple(games)
        self.store = store

    # -- Entry points --
    def available_games(self) -> tuple[Game, ...]:
        return self.games

    def game_by_id(self, game_id: str) -> Game:
        for game in self.games:
            if game.game_id == game_id.lower():
                return game
        raise UnknownGameError(f"Unknown game: {game_id!r}")

    def process(self, interaction: GameInteraction) -> GameResponse:
        """
        Handle one message
        ----

        * a reply to a message of a running game -> it is a move in that game
        * anything else -> try to start a new game ('play <gameId>'), or list the games
        """
        logger.debug("Processing interaction: %s", interaction)
        session = (
            self.store.get(interaction.in_reply_to_id)
            if interaction.in_reply_to_id is not None
            else None
        )
        if session is not None:
            return self._process_game_move(session, interaction)
        return self._start_new_game(interaction)

    def game_list_response(self) -> str:
        game_list = "\n".join(f"- {game.game_name} (play {game.game_id})" for game in self.games)
        return f"Available games:\n{game_list}\n\nTo start a game, reply with 'play <gameId>'."

    # -- Internal helpers --
    def _start_new_game(self, interaction: GameInteraction) -> GameResponse:
        command = parse_new_game_command(interaction.content)
        if command is None:
            logger.debug("No game command in interaction %s", interaction.interaction_id)
            return GameResponse.no_progress(self.game_list_response())

        game_id, params = command
        try:
            game = self.game_by_id(game_id)
        except UnknownGameError:
            logger.warning("Requested unknown game %r", game_id)
            return GameResponse.no_progress(self.game_list_response())

        logger.info(
            "Starting new game: %s for player %s in thread %s",
            game.game_name,
            interaction.player,
            interaction.interaction_id,
        )
        initial_state = game.create_initial_state(interaction.interaction_id, interaction.player, params)
        session = GameSession(game, initial_state)
        return GameResponse(
            body=f"Starting a new game of {game.game_name}!\n\n{game.generate_response(initial_state)}",
            id_callback=self._remember(session),
        )

    def _process_game_move(self, session: GameSession, interaction: GameInteraction) -> GameResponse:
        """
        Play one exchange of an existing game
        ----

        1. already finished? -> say so (the session stays as it is, but the new message becomes an alias)
        2. apply the player's move -> a problem gets echoed back, again without changing the session
        3. while it is the bot's turn (and the game is not over), let the bot move
        4. respond with the bot's moves, the result if the game ended, and the game's own rendering
        """
        game = session.game
        state = session.state
        logger.debug("Processing move for game %s in session %s", game.game_name, state.session_id)

        already_over = self._finished_message(game.game_move_result(state))
        if already_over is None and state.is_terminal:
            already_over = "The game is over."
        if already_over is not None:
            return GameResponse(body=already_over, id_callback=self._remember(session))

        try:
            current = game.process_move(state, interaction.player, interaction.content)
        except GameError as error:
            logger.info("Rejected move %r in session %s: %s", interaction.content, state.session_id, error)
            return GameResponse(
                body=f"Invalid move: {error}\n\n{game.generate_response(state)}",
                id_callback=self._remember(session),
            )

        messages: list[str] = []
        result = game.game_move_result(current)
        bot_moves = 0
        while isinstance(result, Continue) and game.is_bot_turn(current):
            if bot_moves >= MAX_BOT_MOVES_PER_TURN:
                raise GameDefectError(f"{game.game_name} keeps giving the bot the turn")
            bot_move = game.generate_bot_move(current)
            try:
                current = game.process_move(current, HOST_BOT, bot_move)
            except GameError as error:
                raise GameDefectError(f"The bot's own move {bot_move!r} got rejected: {error}") from error
            logger.debug("Bot played %s in session %s", bot_move, state.session_id)
            messages.append(f"I made my move: {bot_move}")
            bot_moves += 1
            result = game.game_move_result(current)

        if isinstance(result, Abandon):
            body = ABANDONED_MESSAGE
        else:
            game_over = self._game_over_message(result)
            if game_over is not None:
                logger.info("Session %s ended: %s", state.session_id, game_over)
                messages.append(game_over)
            messages.append(game.generate_response(current))
            body = "\n\n".join(messages)

        return GameResponse(body=body, id_callback=self._remember(session.update(current)))

    def _remember(self, session: GameSession) -> Callable[[str], None]:
        """Callback: store the session under the id of the message that carried the response"""

        def store_session(response_id: str) -> None:
            self.store.put(response_id, session)

        return store_session

    @staticmethod
    def _finished_message(result: GameMoveResult) -> str | None:
        """Reply to a move sent into a game that already ended"""
        if isinstance(result, Win):
            return f"The game is over. {result.winner.mention} won!"
        if isinstance(result, Draw):
            return "The game is over. It was a draw!"
        if isinstance(result, Abandon):
            return ABANDONED_MESSAGE
        return None

    @staticmethod
    def _game_over_message(result: GameMoveResult) -> str | None:
        """Announce the end of the game, right after the move that ended it"""
        if isinstance(result, Win):
            return f"Game over! {result.winner.mention} won!"
        if isinstance(result, Draw):
            return "Game over! It's a draw!"
        return None
