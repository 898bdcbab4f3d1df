"""
File discovery, identity resolution and batch reading.

Usage:
    from frenglish.files import find_language_files_to_translate, read_files

    found = find_language_files_to_translate("locales", "en", ["en", "fr"], ["json"])
    batch = read_files(found.all_paths())
"""

from frenglish.files.patterns import ExcludeMatcher
from frenglish.files.classifier import (
    DefaultTo,
    LanguageFileSet,
    RequireExplicit,
    SkippedPath,
    UnmatchedLanguagePolicy,
    classify,
    find_language_files,
    find_language_files_to_translate,
)
from frenglish.files.identity import resolve_relative_identity
from frenglish.files.reader import ReadBatch, ReadFailure, read_file, read_files

__all__ = [
    "ExcludeMatcher",
    "DefaultTo",
    "RequireExplicit",
    "UnmatchedLanguagePolicy",
    "LanguageFileSet",
    "SkippedPath",
    "classify",
    "find_language_files",
    "find_language_files_to_translate",
    "resolve_relative_identity",
    "ReadBatch",
    "ReadFailure",
    "read_file",
    "read_files",
]
