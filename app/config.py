import logging
import os
from functools import lru_cache

from dotenv import load_dotenv


load_dotenv()


def _bool_env(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes", "y", "on"}


def _int_env(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or not v.strip():
        return default
    return int(v)


class Settings:
    """Application settings loaded from environment variables.

    Read once per process; tests clear the get_settings cache after patching env.
    """

    def __init__(self) -> None:
        self.app_name: str = os.getenv("APP_NAME", "AI Health Assistant")
        self.demo_password: str = os.getenv("DEMO_PASSWORD", "").strip()  # optional
        self.allow_logging: bool = _bool_env("ALLOW_LOGGING", default=False)  # do NOT log message text by default
        self.response_delay_ms: int = _int_env("RESPONSE_DELAY_MS", 0)
        self.max_sessions: int = _int_env("MAX_SESSIONS", 1000)
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()

    @property
    def require_password(self) -> bool:
        return bool(self.demo_password)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings) -> logging.Logger:
    logging.basicConfig(level=settings.log_level, format="[%(asctime)s] %(levelname)s - %(message)s")
    return logging.getLogger("medassist")
