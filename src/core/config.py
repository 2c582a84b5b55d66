"""Settings loaded from environment variables (prefix FEDIGAME_) or a ``.env`` file."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.logging_config import LOG_LEVELS

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FEDIGAME_",
        env_file=str(_PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Logging ---
    log_level: str = "INFO"
    debug: bool = False

    # --- Games ---
    enabled_games: list[str] = Field(
        default_factory=lambda: ["guess", "tictactoe", "checkers"],
        description="Ids of the games the engine offers, in the order they get listed",
    )
    guess_min: int = 1
    guess_max: int = 10

    # --- Responses ---
    post_suffix: str = ""

    # NOTE: declared policy only. The engine does not expire games or limit how many a player runs at once.
    game_timeout_minutes: int = 60
    max_games_per_player: int = 5

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @model_validator(mode="after")
    def validate_guess_range(self) -> "Settings":
        if self.guess_min > self.guess_max:
            raise ValueError(
                f"guess_min ({self.guess_min}) must not exceed guess_max ({self.guess_max})"
            )
        return self

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level


@lru_cache
def get_settings() -> Settings:
    return Settings()
