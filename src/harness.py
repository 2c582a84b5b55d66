"""
Talk to the engine without a social platform.

Plays the part of the bot: makes up message ids, sends the interaction to the engine and "posts" the response by
calling its id callback with a fresh response id. Used by the CLI and by the end-to-end tests.
"""

import itertools
import logging
from dataclasses import dataclass

from src.api.models import GameInteraction
from src.core.models import RemotePlayer
from src.services.game_engine import GameEngine

logger = logging.getLogger(__name__)

DEFAULT_PLAYER = RemotePlayer("harness-default-player")


class Harness:
    def __init__(
        self,
        engine: GameEngine,
        player: RemotePlayer = DEFAULT_PLAYER,
        post_suffix: str = "",
    ) -> None:
        self.engine = engine
        self.player = player
        self.post_suffix = post_suffix
        self._request_ids = itertools.count()
        self._response_ids = itertools.count()

    def first_request(self, content: str, player: RemotePlayer | None = None) -> "HarnessResponse":
        """A message that does not reply to anything (e.g. 'play checkers')"""
        return self.request(content, None, player)

    def request(
        self, content: str, in_reply_to: str | None, player: RemotePlayer | None = None
    ) -> "HarnessResponse":
        player = player or self.player
        interaction = GameInteraction(
            interaction_id=f"harness-request-id-{next(self._request_ids)}",
            player=player,
            content=content,
            in_reply_to_id=in_reply_to,
        )
        response = self.engine.process(interaction)
        response_id = f"harness-response-id-{next(self._response_ids)}"
        logger.debug(
            "%s sent %r in reply to %s and received %s: %r",
            player,
            content,
            in_reply_to,
            response_id,
            response.body,
        )
        response.send(response_id)
        body = f"{response.body}\n\n{self.post_suffix}" if self.post_suffix else response.body
        return HarnessResponse(self, response_id, body)


@dataclass(frozen=True)
class HarnessResponse:
    """What the 'bot' posted. Reply to it to continue the conversation."""

    harness: Harness
    response_id: str
    body: str

    def request(self, content: str, player: RemotePlayer | None = None) -> "HarnessResponse":
        return self.harness.request(content, self.response_id, player)
