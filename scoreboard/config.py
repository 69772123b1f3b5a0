"""Environment-driven settings for the scoreboard.

Values come from the process environment, with a `.env` file from the
working directory loaded first via python-dotenv. Variables already set in
the environment win over the file.

- SCOREBOARD_LOG_LEVEL: level for the `scoreboard` logger (default WARNING)
- SCOREBOARD_MAX_SCORE: optional inclusive cap on a single score
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_LOG_LEVEL = "WARNING"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    log_level: str = DEFAULT_LOG_LEVEL
    max_score: Optional[int] = None


def _read_log_level() -> str:
    level = (os.getenv("SCOREBOARD_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"SCOREBOARD_LOG_LEVEL: unknown log level {level!r}")
    return level


def _read_max_score() -> Optional[int]:
    raw = (os.getenv("SCOREBOARD_MAX_SCORE") or "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"SCOREBOARD_MAX_SCORE: expected an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"SCOREBOARD_MAX_SCORE: must not be negative, got {value}")
    return value


def load_settings(dotenv: bool = True) -> Settings:
    """Build Settings from the environment.

    Set ``dotenv=False`` to skip reading a `.env` file (tests do this to keep
    the environment fully under monkeypatch control).
    """
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))
    settings = Settings(log_level=_read_log_level(), max_score=_read_max_score())
    logger.debug(f"Loaded settings: {settings}")
    return settings


def configure_logging(settings: Settings) -> logging.Logger:
    """Apply the configured level to the package logger and return it.

    Handlers are left to the embedding application.
    """
    pkg_logger = logging.getLogger("scoreboard")
    pkg_logger.setLevel(settings.log_level)
    return pkg_logger
