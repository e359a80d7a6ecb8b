"""
Settings for the sleep tracker, read from the environment (and backend/.env).
"""
import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///sleep_history.db"
DEFAULT_CORS_ORIGINS = ("http://localhost:3000",)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    sql_echo: bool = False
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            database_url=(os.getenv("SLEEP_TRACKER_DATABASE_URL") or DEFAULT_DATABASE_URL).strip(),
            sql_echo=_env_bool("SLEEP_TRACKER_SQL_ECHO"),
            log_level=(os.getenv("SLEEP_TRACKER_LOG_LEVEL") or "INFO").strip().upper(),
            cors_origins=_env_list("SLEEP_TRACKER_CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
