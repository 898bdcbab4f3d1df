"""
Core data models for Frenglish.

These models mirror the JSON exchanged with the translation service and the
intermediate records passed between discovery, reading and writing.

Design Philosophy:
- Plain dataclasses, converted to/from the service's camelCase JSON
  with to_dict()/from_dict()
- A FileRecord's file_id is either a source path (before translation)
  or a language-neutral relative identity (after); the pipeline owns
  the transform between the two
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class TranslationStatus(str, Enum):
    """Status values reported by the translation service."""
    QUEUED = "QUEUED"
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    FAILED = "FAILED"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["TranslationStatus"]:
        """Return the matching status, or None for values we don't know."""
        if value is None:
            return None
        try:
            return cls(str(value).upper())
        except ValueError:
            return None


@dataclass
class FileRecord:
    """A file's identity and its text content."""
    file_id: str
    content: str

    def to_dict(self) -> dict:
        return {"fileId": self.file_id, "content": self.content}

    @classmethod
    def from_dict(cls, data: dict) -> FileRecord:
        return cls(
            file_id=str(data.get("fileId", "")),
            content=data.get("content") or "",
        )


@dataclass
class FileContentWithLanguage:
    """A baseline file sent by the upload workflow."""
    language: str
    file_id: str
    content: str

    def to_dict(self) -> dict:
        return {
            "language": self.language,
            "fileId": self.file_id,
            "content": self.content,
        }


@dataclass
class TranslationRequest:
    """Body of a translation submission.

    ``filenames[i]`` names ``content[i]``; the service correlates the two
    arrays by position. ``filenames`` may be empty for anonymous content.
    """
    content: list[str]
    filenames: list[str] = field(default_factory=list)
    is_full_translation: bool = False
    partial_config: Optional[dict] = None

    def __post_init__(self):
        if self.filenames and len(self.content) != len(self.filenames):
            raise ValueError(
                f"content ({len(self.content)}) and filenames "
                f"({len(self.filenames)}) must have the same length"
            )

    def to_dict(self) -> dict:
        body: dict[str, Any] = {
            "content": list(self.content),
            "isFullTranslation": self.is_full_translation,
        }
        if self.filenames:
            body["filenames"] = list(self.filenames)
        if self.partial_config is not None:
            body["partialConfig"] = self.partial_config
        return body


@dataclass
class LanguageTranslation:
    """All translated files for one target language."""
    language: str
    files: list[FileRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> LanguageTranslation:
        return cls(
            language=str(data.get("language", "")),
            files=[FileRecord.from_dict(f) for f in data.get("files") or []],
        )


@dataclass
class TranslationResponse:
    """Result of a completed translation."""
    translation_id: int
    content: list[LanguageTranslation] = field(default_factory=list)

    @classmethod
    def from_content(cls, translation_id: int, content: Optional[list]) -> TranslationResponse:
        return cls(
            translation_id=translation_id,
            content=[LanguageTranslation.from_dict(c) for c in content or []],
        )


@dataclass
class Configuration:
    """Project configuration as returned by the service.

    Only the fields the client uses are typed; everything else is kept
    in ``extra`` so it round-trips untouched.
    """
    origin_language: str
    languages: list[str] = field(default_factory=list)
    id: Optional[int] = None
    rules: str = ""
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> Configuration:
        known = {"id", "originLanguage", "languages", "rules"}
        return cls(
            origin_language=str(data.get("originLanguage") or "").lower(),
            languages=[str(lang).lower() for lang in data.get("languages") or []],
            id=data.get("id"),
            rules=data.get("rules") or "",
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data.update({
            "id": self.id,
            "originLanguage": self.origin_language,
            "languages": list(self.languages),
            "rules": self.rules,
        })
        return data
