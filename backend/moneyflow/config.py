"""
Application configuration from environment variables.
Loads .env from the backend directory so the bot token is found regardless of cwd.
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Telegram rejects sendMessage text longer than this.
TELEGRAM_MAX_MESSAGE_LENGTH = 4096

_PAID_TIERS = ("essential", "premium", "vip")

# .env next to backend/ (parent of moneyflow/); load explicitly so the token is set even when run from repo root
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_ENV_FILE = _BACKEND_DIR / ".env"

if _ENV_FILE.exists():
    from dotenv import load_dotenv
    load_dotenv(_ENV_FILE, override=False)
else:
    # Fallback: try backend/.env relative to cwd (e.g. when running from repo root)
    import os
    _cwd_env = Path(os.getcwd()) / "backend" / ".env"
    if _cwd_env.exists():
        from dotenv import load_dotenv
        load_dotenv(_cwd_env, override=False)


class Settings(BaseSettings):
    """Load and validate config from env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # User store: sqlite for local runs, postgresql for production
    database_url: str = "sqlite:///./moneyflow_dev.db"

    env: str = ""
    debug: bool = False

    # Telegram Bot API. Without a token the mock transport is used (messages are only logged).
    telegram_bot_token: str = ""
    telegram_api_base: str = "https://api.telegram.org"
    # When set, webhook calls must carry X-Telegram-Bot-Api-Secret-Token with this value.
    telegram_webhook_secret: str = ""
    telegram_timeout_seconds: float = 10.0

    # Long replies are split to this length and sent with a pause between parts.
    max_message_length: int = TELEGRAM_MAX_MESSAGE_LENGTH
    long_message_delay_seconds: float = 0.5
    part_prefix: str = "Part"

    # Quiz: marketing follow-up after results; abandoned sessions expire after the TTL (0 = never).
    quiz_follow_up_delay_seconds: float = 10.0
    quiz_session_ttl_seconds: int = 86400
    follow_up_max_attempts: int = 3

    # Tier assumed for paid users whose tier column is empty.
    default_paid_tier: str = "essential"

    @field_validator("max_message_length")
    @classmethod
    def _cap_message_length(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("max_message_length must be positive")
        return min(v, TELEGRAM_MAX_MESSAGE_LENGTH)

    @field_validator("default_paid_tier", mode="before")
    @classmethod
    def _resolve_default_tier(cls, v: str) -> str:
        s = (v or "").strip().lower() if isinstance(v, str) else ""
        return s if s in _PAID_TIERS else "essential"

    @property
    def session_ttl(self) -> float | None:
        """TTL for quiz sessions in seconds, or None when expiry is disabled."""
        return float(self.quiz_session_ttl_seconds) if self.quiz_session_ttl_seconds > 0 else None


settings = Settings()
