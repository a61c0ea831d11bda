"""
Runtime configuration.
Reads SMTP, AI and upload settings from the environment (.env supported).
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

# Cheapest / fastest first. The summarizer walks this list in order.
DEFAULT_SUMMARY_MODELS = [
    "claude-haiku-4-5",
    "claude-3-5-haiku-latest",
    "claude-sonnet-4-5",
    "claude-sonnet-4-5-20250929",
]


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _list_env(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    port: int = 3000
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    email_from: Optional[str] = None
    smtp_timeout: int = 10
    anthropic_api_key: Optional[str] = None
    summary_models: List[str] = field(default_factory=lambda: list(DEFAULT_SUMMARY_MODELS))
    max_file_size_mb: int = 10
    upload_dir: str = "uploads"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        EMAIL_FROM falls back to SMTP_USER, which is what most relays expect
        as the envelope sender anyway.

        Raises:
            ValueError: If a numeric variable is not an integer.
        """
        smtp_user = os.getenv("SMTP_USER") or None
        return cls(
            port=_int_env("PORT", 3000),
            smtp_host=os.getenv("SMTP_HOST") or None,
            smtp_port=_int_env("SMTP_PORT", 587),
            smtp_user=smtp_user,
            smtp_password=os.getenv("SMTP_PASS") or None,
            email_from=os.getenv("EMAIL_FROM") or smtp_user,
            smtp_timeout=_int_env("SMTP_TIMEOUT", 10),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            summary_models=_list_env("SUMMARY_MODELS", DEFAULT_SUMMARY_MODELS),
            max_file_size_mb=_int_env("MAX_FILE_SIZE_MB", 10),
            upload_dir=os.getenv("UPLOAD_DIR", "").strip() or "uploads",
            cors_origins=_list_env("CORS_ORIGINS", ["*"]),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read once."""
    return Settings.from_env()
