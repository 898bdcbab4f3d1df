"""
Frenglish: translate project files with the Frenglish translation service.

Discovers origin-language files in a project, submits them for
translation, and writes the results under per-language folders.

License: MIT
"""

__version__ = "0.1.0"

from frenglish.config import Settings
from frenglish.errors import (
    ConfigurationError,
    FrenglishError,
    PollTimeoutError,
    RemoteRequestError,
    TranslationCancelledError,
)
from frenglish.pipeline import TranslateResult, UploadResult, translate, upload
from frenglish.sdk import FrenglishClient

__all__ = [
    "Settings",
    "FrenglishClient",
    "FrenglishError",
    "ConfigurationError",
    "RemoteRequestError",
    "TranslationCancelledError",
    "PollTimeoutError",
    "TranslateResult",
    "UploadResult",
    "translate",
    "upload",
]
