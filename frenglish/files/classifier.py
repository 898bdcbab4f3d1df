"""
Language-aware file discovery.

Scans a project directory for files of the supported types and buckets
each one by the language folder found in its path:

    locales/en/app.json       -> "en"
    locales/fr/app.json       -> "fr"
    docs/README.md            -> no language segment, see the policy

What happens to files without a language segment is decided by an
UnmatchedLanguagePolicy:

- DefaultTo(language): translate discovery. Untagged files belong to the
  origin language, and files tagged with any *other* supported language
  are dropped so previously written translations are never re-submitted.
- RequireExplicit(): upload discovery. Only files that already sit under
  a language folder are kept.

Limitation: a directory that happens to be named like a language code
(e.g. ``data/es/``) is treated as a language folder.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from frenglish.files.patterns import ExcludeMatcher
from frenglish.utils import normalize_path, path_segments

logger = logging.getLogger(__name__)


# Skip reasons recorded on LanguageFileSet.skipped
SKIP_EXCLUDED = "excluded"
SKIP_OTHER_LANGUAGE = "other-language"
SKIP_NO_LANGUAGE = "no-language"


@dataclass(frozen=True)
class DefaultTo:
    """Assign untagged files to ``language``; drop files of other languages."""
    language: str

    def __post_init__(self):
        object.__setattr__(self, "language", self.language.lower())


@dataclass(frozen=True)
class RequireExplicit:
    """Keep only files whose path carries a language segment."""
    pass


UnmatchedLanguagePolicy = Union[DefaultTo, RequireExplicit]


@dataclass
class SkippedPath:
    path: str
    reason: str
    detail: str = ""


@dataclass
class LanguageFileSet:
    """Discovered files grouped by language code.

    Attributes:
        files: language code -> absolute paths, in discovery order
        skipped: paths intentionally left out, with the reason
    """
    files: dict[str, list[str]] = field(default_factory=dict)
    skipped: list[SkippedPath] = field(default_factory=list)

    def add(self, language: str, path: str) -> None:
        self.files.setdefault(language, []).append(path)

    def get(self, language: str) -> list[str]:
        return self.files.get(language.lower(), [])

    @property
    def languages(self) -> list[str]:
        return list(self.files)

    def all_paths(self) -> list[str]:
        """Flatten every bucket into one ordered list."""
        return [path for paths in self.files.values() for path in paths]

    def __len__(self) -> int:
        return sum(len(paths) for paths in self.files.values())

    def __bool__(self) -> bool:
        return len(self) > 0


def has_supported_extension(name: str, file_types: Iterable[str]) -> bool:
    """True if ``name`` ends with ``.<ext>`` for one of ``file_types``.

    The comparison is case-sensitive and multi-part types such as
    ``ja.md`` work.
    """
    return any(name.endswith(f".{ext.lstrip('.')}") for ext in file_types if ext)


def iter_candidate_files(base_path: Path, file_types: Iterable[str]) -> Iterator[Path]:
    """Yield files under ``base_path`` (or ``base_path`` itself) with a supported type."""
    file_types = [ext for ext in file_types if ext]
    if not file_types:
        return
    if base_path.is_file():
        if has_supported_extension(base_path.name, file_types):
            yield base_path
        return
    for path in sorted(base_path.rglob("*")):
        if path.is_file() and has_supported_extension(path.name, file_types):
            yield path


def detect_language(path: str, supported_languages: Iterable[str]) -> Optional[str]:
    """Return the first path segment that is a supported language code."""
    languages = {lang.lower() for lang in supported_languages}
    for segment in path_segments(path):
        if segment.lower() in languages:
            return segment.lower()
    return None


def classify(
    base_path: Union[str, Path],
    supported_languages: Iterable[str],
    supported_file_types: Iterable[str],
    exclude_patterns: Optional[Iterable[str]] = None,
    policy: UnmatchedLanguagePolicy = RequireExplicit(),
) -> LanguageFileSet:
    """
    Discover the files under ``base_path`` and bucket them by language.

    Args:
        base_path: Directory (or single file) to scan
        supported_languages: Language codes recognised as path segments
        supported_file_types: File extensions to include, without dots
        exclude_patterns: Globs or substrings of paths to leave out
        policy: What to do with files that have no language segment

    Returns:
        LanguageFileSet with absolute, forward-slash paths
    """
    result = LanguageFileSet()
    base = Path(base_path).resolve()
    languages = [lang.lower() for lang in supported_languages]
    matcher = ExcludeMatcher.from_patterns(exclude_patterns)

    if not base.exists():
        logger.warning("Path does not exist: %s", base)
        return result

    for candidate in iter_candidate_files(base, supported_file_types):
        path = normalize_path(candidate)

        pattern = matcher.match(path)
        if pattern is not None:
            result.skipped.append(SkippedPath(path, SKIP_EXCLUDED, pattern))
            continue

        language = detect_language(path, languages)

        if isinstance(policy, DefaultTo):
            other = [
                seg.lower() for seg in path_segments(path)
                if seg.lower() in languages and seg.lower() != policy.language
            ]
            if other:
                result.skipped.append(SkippedPath(path, SKIP_OTHER_LANGUAGE, other[0]))
                continue
            result.add(language or policy.language, path)
        elif language is not None:
            result.add(language, path)
        else:
            result.skipped.append(SkippedPath(path, SKIP_NO_LANGUAGE))

    logger.debug(
        "Classified %d file(s) under %s into %s (%d skipped)",
        len(result), base, result.languages, len(result.skipped),
    )
    return result


def find_language_files_to_translate(
    base_path: Union[str, Path],
    origin_language: str,
    supported_languages: Iterable[str],
    supported_file_types: Iterable[str],
    exclude_patterns: Optional[Iterable[str]] = None,
) -> LanguageFileSet:
    """Translate discovery: origin-language files, untagged files included."""
    return classify(
        base_path,
        supported_languages,
        supported_file_types,
        exclude_patterns,
        policy=DefaultTo(origin_language),
    )


def find_language_files(
    base_path: Union[str, Path],
    supported_languages: Iterable[str],
    supported_file_types: Iterable[str],
    exclude_patterns: Optional[Iterable[str]] = None,
) -> LanguageFileSet:
    """Upload discovery: only files under an explicit language folder."""
    return classify(
        base_path,
        supported_languages,
        supported_file_types,
        exclude_patterns,
        policy=RequireExplicit(),
    )
