"""
Language-neutral file identities.

A file's identity is its path relative to the project root with the
leading language folder removed, so ``locales/en/home/app.json`` and
``locales/fr/home/app.json`` share the identity ``home/app.json``. That
identity is the ``fileId`` sent to the service and used to place each
translation back on disk.
"""

from __future__ import annotations

import posixpath
from typing import Iterable, Optional

from frenglish.files.patterns import ExcludeMatcher
from frenglish.utils import normalize_path, path_segments


def resolve_relative_identity(
    base_path: str,
    file_path: str,
    supported_languages: Iterable[str],
    exclude_patterns: Optional[Iterable[str]] = None,
) -> Optional[str]:
    """
    Compute the language-neutral identity of ``file_path``.

    Pure function of its arguments: the filesystem is never touched.

    Args:
        base_path: Project root the identity is relative to
        file_path: File to resolve (either separator style)
        supported_languages: Codes that count as a leading language folder
        exclude_patterns: Globs or substrings; a match yields None

    Returns:
        Forward-slash relative path without the language folder, or None
        if the file is excluded or nothing remains after stripping

    Example:
        >>> resolve_relative_identity("/b", "/b/en/x/y.json", ["en", "fr"])
        'x/y.json'
        >>> resolve_relative_identity("/b", "/b/x/y.json", ["en", "fr"])
        'x/y.json'
    """
    base = normalize_path(base_path)
    path = normalize_path(file_path)

    if ExcludeMatcher.from_patterns(exclude_patterns).matches(path):
        return None

    relative = posixpath.relpath(path, base) if base else path
    parts = path_segments(relative)

    languages = {lang.lower() for lang in supported_languages}
    if parts and parts[0].lower() in languages:
        parts = parts[1:]

    if not parts:
        return None
    return "/".join(parts)

