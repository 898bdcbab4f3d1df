"""
Exception hierarchy for Frenglish.

Everything raised on purpose by the SDK or the workflows derives from
FrenglishError, so the CLI and the pipeline top level can catch one type.
"""

from __future__ import annotations

from typing import Optional


class FrenglishError(Exception):
    """Base exception for Frenglish errors."""
    pass


class ConfigurationError(FrenglishError):
    """Raised when required settings (e.g. the API key) are missing or invalid."""
    pass


class PartialConfigError(ConfigurationError):
    """Raised when a partial configuration is neither JSON nor a JSON file."""
    pass


class RemoteRequestError(FrenglishError):
    """Raised when the translation service answers with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: str = "",
        body: str = "",
    ):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        if status_code is not None:
            message = f"{message}: {status_code} {reason} - {body}".rstrip(" -")
        super().__init__(message)


class TranslationCancelledError(RemoteRequestError):
    """Raised when the service reports the translation as cancelled."""

    def __init__(self, translation_id: Optional[int] = None):
        self.translation_id = translation_id
        super().__init__("Translation cancelled")


class PollTimeoutError(FrenglishError):
    """Raised when a translation is still running after the polling ceiling."""

    def __init__(self, translation_id: int, waited: float):
        self.translation_id = translation_id
        self.waited = waited
        super().__init__(
            f"Translation {translation_id} not completed after {waited:.1f}s"
        )
