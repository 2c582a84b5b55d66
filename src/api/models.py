"""Request (inbound interaction) and Response models at the boundary between the bot and the engine"""

from typing import Callable, Optional, Self

from pydantic import BaseModel, field_validator

from src.core.models import RemotePlayer


def _ignore_response_id(response_id: str) -> None:
    """Callback for responses that do not move any game forward"""


# --- REQUEST MODELS ---
class GameInteraction(BaseModel):
    """A message somebody sent to the bot"""

    interaction_id: str
    player: RemotePlayer
    content: str
    in_reply_to_id: Optional[str] = None

    @field_validator("interaction_id")
    @classmethod
    def validate_interaction_id(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("interaction_id must not be blank")
        return value

    @field_validator("in_reply_to_id")
    @classmethod
    def validate_in_reply_to_id(cls, value: Optional[str]) -> Optional[str]:
        # some platforms send an empty string instead of leaving the field out
        if value is None or not value.strip():
            return None
        return value

    @field_validator("content")
    @classmethod
    def strip_content(cls, value: str) -> str:
        return value.strip()


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    """
    Text to send back + what to do once it has been sent.
    ----

    The id of the message carrying this text only exists after it was posted, and replies to the game will arrive
    as replies to that id. So the caller posts the body, then calls send() with the id the platform gave the post.
    """

    body: str
    id_callback: Callable[[str], None]

    @classmethod
    def no_progress(cls, body: str) -> Self:
        """A response that does not need to remember anything once sent"""
        return cls(body=body, id_callback=_ignore_response_id)

    def send(self, response_id: str) -> None:
        self.id_callback(response_id)
