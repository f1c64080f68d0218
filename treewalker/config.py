import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


@dataclass(slots=True)
class Settings:
    """Container for environment-driven configuration with sane defaults."""

    bot_token: Optional[str] = field(default_factory=lambda: os.getenv("BOT_TOKEN"))
    default_tree: str = field(default_factory=lambda: os.getenv("DEFAULT_TREE", "car"))
    log_level: str = field(default_factory=lambda: _log_level(os.getenv("LOG_LEVEL")))

    def require_bot_token(self) -> str:
        return self.bot_token or _require("BOT_TOKEN")


def _log_level(value: Optional[str]) -> str:
    name = (value or "").strip().upper()
    if isinstance(logging.getLevelName(name), int):
        return name
    return "WARNING"


def _require(key: str) -> str:
    value = os.getenv(key)
    if not value:
        raise RuntimeError(f"{key} environment variable is required")
    return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
