"""
API key management for Frenglish.

Keys are looked up in this order:
1. The FRENGLISH_API_KEY environment variable (preferred for CI)
2. OS keychain via keyring (secure local storage)
3. Local config file (~/.frenglish/keys.json, fallback)

Usage:
    from frenglish.keys import KeyManager

    km = KeyManager()
    km.set_key("sk-...")
    key = km.get_key()
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from frenglish.errors import ConfigurationError

logger = logging.getLogger(__name__)

API_KEY_ENV = "FRENGLISH_API_KEY"


@dataclass
class KeyInfo:
    """Information about the stored API key."""
    is_set: bool
    source: str  # 'env', 'keyring', 'config', 'none'
    masked_value: str  # e.g., "frg_...abcd"


class KeyManager:
    """Read and store the Frenglish API key.

    Args:
        config_dir: Folder holding keys.json (default: ~/.frenglish)
        environ: Environment mapping (default: os.environ)
        backend: Keyring backend (default: keyring.get_keyring())
        use_keyring: Set False to only use the environment and config file
    """

    SERVICE_NAME = "Frenglish"
    CONFIG_DIR = Path.home() / ".frenglish"
    KEY_NAME = "api_key"

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
        backend: Any = None,
        use_keyring: bool = True,
    ):
        self.config_dir = Path(config_dir) if config_dir else self.CONFIG_DIR
        self.environ = os.environ if environ is None else environ
        self._backend = backend
        self.use_keyring = use_keyring

    @property
    def config_file(self) -> Path:
        return self.config_dir / "keys.json"

    @property
    def backend(self):
        if self._backend is None:
            self._backend = keyring.get_keyring()
        return self._backend

    def _env_key(self) -> Optional[str]:
        return (self.environ.get(API_KEY_ENV) or "").strip() or None

    def _keyring_key(self) -> Optional[str]:
        if not self.use_keyring:
            return None
        try:
            key = self.backend.get_password(self.SERVICE_NAME, self.KEY_NAME)
        except KeyringError as e:
            logger.debug("Keyring unavailable: %s", e)
            return None
        return (key or "").strip() or None

    def _config_key(self) -> Optional[str]:
        key = self._load_config().get(self.KEY_NAME)
        return (str(key).strip() or None) if key else None

    def _load_config(self) -> dict:
        if not self.config_file.exists():
            return {}
        try:
            data = json.loads(self.config_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable key file %s: %s", self.config_file, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _save_config(self, config: dict) -> None:
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(json.dumps(config, indent=2), encoding="utf-8")
        self.config_file.chmod(0o600)  # Restrict permissions

    def get_key(self) -> Optional[str]:
        """Return the API key, or None if it is not configured anywhere."""
        return self._env_key() or self._keyring_key() or self._config_key()

    def set_key(self, key: str) -> str:
        """Store the API key.

        Returns:
            Storage location used ('keyring' or 'config')
        """
        key = key.strip()
        if self.use_keyring:
            try:
                self.backend.set_password(self.SERVICE_NAME, self.KEY_NAME, key)
                return "keyring"
            except KeyringError as e:
                logger.warning("Could not store key in keyring, using %s: %s", self.config_file, e)

        config = self._load_config()
        config[self.KEY_NAME] = key
        self._save_config(config)
        return "config"

    def delete_key(self) -> bool:
        """Remove the stored key everywhere. Returns True if something was deleted."""
        deleted = False
        if self.use_keyring:
            try:
                self.backend.delete_password(self.SERVICE_NAME, self.KEY_NAME)
                deleted = True
            except PasswordDeleteError:
                pass  # nothing stored
            except KeyringError as e:
                logger.debug("Keyring unavailable: %s", e)

        config = self._load_config()
        if self.KEY_NAME in config:
            del config[self.KEY_NAME]
            self._save_config(config)
            deleted = True
        return deleted

    def get_key_info(self) -> KeyInfo:
        if key := self._env_key():
            return KeyInfo(is_set=True, source="env", masked_value=mask_key(key))
        if key := self._keyring_key():
            return KeyInfo(is_set=True, source="keyring", masked_value=mask_key(key))
        if key := self._config_key():
            return KeyInfo(is_set=True, source="config", masked_value=mask_key(key))
        return KeyInfo(is_set=False, source="none", masked_value="")


def mask_key(key: str) -> str:
    """Mask a key for display (show first 4 and last 4 chars)."""
    if len(key) <= 12:
        return "*" * len(key)
    return f"{key[:4]}...{key[-4:]}"


def require_key(api_key: Optional[str]) -> str:
    """Return ``api_key`` or raise ConfigurationError if it is missing."""
    if not api_key:
        raise ConfigurationError(
            f"{API_KEY_ENV} environment variable is not set. "
            f"Set it or run: frenglish keys set"
        )
    return api_key
