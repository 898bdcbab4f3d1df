"""
Project-wide configuration.

Settings are read once, at process start, from the environment (and a
``.env`` file when the CLI loads one). Everything below the CLI receives
a Settings object instead of reading the environment itself.

Module Contents:
    APP_NAME: Application name for display purposes
    DEFAULT_BACKEND_URL: Translation service base URL
    POLL_INTERVAL: Seconds between translation status checks
    MAX_POLLING_TIME: Seconds before a running translation is given up on
    Settings: Resolved settings for one invocation

Example:
    >>> from frenglish.config import Settings
    >>> settings = Settings.from_env({"FRENGLISH_API_KEY": "k", "TRANSLATION_PATH": "locales"})
    >>> settings.translation_path
    'locales'
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from frenglish.errors import ConfigurationError
from frenglish.keys import KeyManager, mask_key

# Application name for display and identification
APP_NAME = "Frenglish"

# Translation service
DEFAULT_BACKEND_URL = "https://api.frenglish.ai"

# Polling: every 0.5s, for at most 30 minutes
POLL_INTERVAL = 0.5
MAX_POLLING_TIME = 30 * 60

# Per-request HTTP timeout (seconds)
REQUEST_TIMEOUT = 30.0


def _parse_list(value: Optional[str]) -> list[str]:
    """Parse a JSON list or a comma-separated string."""
    if not value or not value.strip():
        return []
    value = value.strip()
    if value.startswith("["):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON list: {value}") from e
        if not isinstance(parsed, list):
            raise ConfigurationError(f"Expected a JSON list, got: {value}")
        return [str(item) for item in parsed if str(item)]
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


@dataclass
class Settings:
    """Resolved settings for one invocation."""
    api_key: Optional[str] = None
    backend_url: str = DEFAULT_BACKEND_URL
    translation_path: str = "."
    output_path: Optional[str] = None  # defaults to translation_path
    excluded_paths: list[str] = field(default_factory=list)
    poll_interval: float = POLL_INTERVAL
    poll_timeout: float = MAX_POLLING_TIME
    request_timeout: float = REQUEST_TIMEOUT

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        key_manager: Optional[KeyManager] = None,
    ) -> Settings:
        """Build settings from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)
            key_manager: Where to look up the API key (defaults to one
                reading the same mapping, the OS keychain and ~/.frenglish)
        """
        env = os.environ if env is None else env
        key_manager = key_manager or KeyManager(environ=env)

        translation_path = (
            env.get("TRANSLATION_PATH")
            or env.get("ORIGIN_LANGUAGE_TRANSLATION_PATH")
            or "."
        )
        return cls(
            api_key=key_manager.get_key(),
            backend_url=(env.get("FRENGLISH_BACKEND_URL") or DEFAULT_BACKEND_URL).rstrip("/"),
            translation_path=translation_path,
            output_path=env.get("TRANSLATION_OUTPUT_PATH") or None,
            excluded_paths=_parse_list(env.get("EXCLUDED_TRANSLATION_PATH")),
            poll_interval=_parse_float(env, "FRENGLISH_POLL_INTERVAL", POLL_INTERVAL),
            poll_timeout=_parse_float(env, "FRENGLISH_POLL_TIMEOUT", MAX_POLLING_TIME),
            request_timeout=_parse_float(env, "FRENGLISH_REQUEST_TIMEOUT", REQUEST_TIMEOUT),
        )

    @property
    def resolved_output_path(self) -> str:
        return self.output_path or self.translation_path

    def to_dict(self) -> dict:
        """Serialize settings for display (API key masked)."""
        return {
            "api_key": mask_key(self.api_key) if self.api_key else "",
            "backend_url": self.backend_url,
            "translation_path": self.translation_path,
            "output_path": self.resolved_output_path,
            "excluded_paths": list(self.excluded_paths),
            "poll_interval": self.poll_interval,
            "poll_timeout": self.poll_timeout,
        }
