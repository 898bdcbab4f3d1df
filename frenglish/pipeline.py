"""
Translate and upload workflows.

translate():
1. Ask the service for the origin language, supported languages and
   supported file types
2. Discover origin-language files under the project path
3. Read them concurrently
4. Compute each file's language-neutral identity (its fileId)
5. Submit one translation request and wait for it to complete
6. Write every translated file to ``<output>/<language>/<fileId>``

upload():
    Discover files that already sit under a language folder and send them,
    tagged with their language, as the project's baseline.

Both workflows are best effort. Any error (missing API key, failed
request, cancelled translation) is logged and recorded on the returned
result instead of propagating, and partial success (some files written,
others skipped) is a normal outcome.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from frenglish.config import Settings
from frenglish.errors import ConfigurationError
from frenglish.files import (
    find_language_files,
    find_language_files_to_translate,
    read_files,
    resolve_relative_identity,
)
from frenglish.models import FileContentWithLanguage, TranslationResponse
from frenglish.sdk import FrenglishClient
from frenglish.utils import normalize_path, parse_partial_config

logger = logging.getLogger(__name__)


@dataclass
class SkippedFile:
    """A file intentionally left out of a workflow."""
    file_id: str
    reason: str
    language: Optional[str] = None


@dataclass
class TranslateResult:
    """Outcome of a translate() run.

    Attributes:
        translation_id: Id assigned by the service, if a request was sent
        submitted: fileIds sent to the service, in request order
        written: Paths of translated files written to disk
        skipped: Files left out on purpose (excluded, unmatched, empty)
        errors: Errors that stopped the run or failed a single write
    """
    translation_id: Optional[int] = None
    submitted: list[str] = field(default_factory=list)
    written: list[str] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0

    @property
    def stats(self) -> dict:
        return {
            "submitted": len(self.submitted),
            "written": len(self.written),
            "skipped": len(self.skipped),
            "errors": len(self.errors),
        }


@dataclass
class UploadResult:
    """Outcome of an upload() run."""
    uploaded: list[FileContentWithLanguage] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    response: Optional[object] = None

    @property
    def success(self) -> bool:
        return len(self.errors) == 0


def _identity_base(base_path: Union[str, Path]) -> str:
    """Directory identities are relative to (a single file's parent)."""
    base = Path(base_path).resolve()
    if base.is_file():
        base = base.parent
    return normalize_path(base)


def translate(
    settings: Settings,
    path: Optional[str] = None,
    is_full_translation: bool = False,
    partial_config: Union[str, dict, None] = None,
    excluded_paths: Optional[list[str]] = None,
    output_path: Optional[str] = None,
    client: Optional[FrenglishClient] = None,
) -> TranslateResult:
    """
    Translate every origin-language file under ``path``.

    Args:
        settings: Process-wide settings (API key, default paths)
        path: Project directory or single file (default: settings.translation_path)
        is_full_translation: Retranslate everything, not only changes
        partial_config: Per-request config override (dict, JSON, or JSON file path)
        excluded_paths: Exclude patterns (default: settings.excluded_paths)
        output_path: Root of the per-language output folders
            (default: settings output path, else the project directory)
        client: Client to use (default: one built from settings)

    Returns:
        TranslateResult; never raises for workflow errors
    """
    result = TranslateResult()
    try:
        _run_translate(
            result,
            settings,
            path=path,
            is_full_translation=is_full_translation,
            partial_config=partial_config,
            excluded_paths=excluded_paths,
            output_path=output_path,
            client=client,
        )
    except Exception as e:
        logger.error("Error: %s", e, exc_info=logger.isEnabledFor(logging.DEBUG))
        result.errors.append(str(e))
    return result


def _run_translate(
    result: TranslateResult,
    settings: Settings,
    path: Optional[str],
    is_full_translation: bool,
    partial_config: Union[str, dict, None],
    excluded_paths: Optional[list[str]],
    output_path: Optional[str],
    client: Optional[FrenglishClient],
) -> None:
    client = client or FrenglishClient.from_settings(settings)
    base_path = path or settings.translation_path
    excludes = list(settings.excluded_paths if excluded_paths is None else excluded_paths)
    config_override = parse_partial_config(partial_config)
    identity_base = _identity_base(base_path)
    output_root = Path(output_path or settings.output_path or identity_base)

    configuration = client.get_default_configuration()
    origin_language = (
        (config_override or {}).get("originLanguage") or configuration.origin_language
    ).lower()
    if not origin_language:
        raise ConfigurationError("Project has no origin language configured")
    supported_languages = client.get_supported_languages()
    supported_file_types = client.get_supported_file_types()

    found = find_language_files_to_translate(
        base_path,
        origin_language,
        supported_languages,
        supported_file_types,
        excludes,
    )
    files_to_translate = found.all_paths()
    if not files_to_translate:
        logger.info("No files found to translate.")
        return

    batch = read_files(files_to_translate)
    if not batch:
        logger.info("No valid files to translate after reading.")
        return

    # Contents and fileIds are filtered together so index i of one
    # always names index i of the other.
    contents: list[str] = []
    file_ids: list[str] = []
    for record in batch:
        file_id = resolve_relative_identity(
            identity_base, record.file_id, supported_languages, excludes
        )
        if file_id is None:
            result.skipped.append(SkippedFile(record.file_id, "excluded"))
            continue
        if file_id in file_ids:
            logger.warning("Duplicate file id %s (from %s). Skipping.", file_id, record.file_id)
            result.skipped.append(SkippedFile(record.file_id, "duplicate"))
            continue
        contents.append(record.content)
        file_ids.append(file_id)

    if not file_ids:
        logger.info("No valid files to translate after resolving file ids.")
        return

    logger.info("Files to translate: %s", file_ids)
    result.submitted = list(file_ids)

    response = client.translate(
        contents,
        is_full_translation=is_full_translation,
        filenames=file_ids,
        partial_config=config_override or {},
    )
    result.translation_id = response.translation_id

    if not response.content:
        logger.warning("No content in translation response")
        return

    write_translations(response, set(file_ids), supported_languages, output_root, result)


def write_translations(
    response: TranslationResponse,
    known_file_ids: set[str],
    supported_languages: Iterable[str],
    output_root: Union[str, Path],
    result: TranslateResult,
) -> None:
    """Write each translated file to ``<output_root>/<language>/<fileId>``.

    Entries for a language outside ``supported_languages``, or whose
    target would land outside ``<output_root>/<language>``, are skipped.
    """
    output_root = Path(output_root)
    allowed = {lang.lower() for lang in supported_languages}
    for entry in response.content:
        language = entry.language
        if language.lower() not in allowed:
            logger.warning(
                "Unsupported language in translation response: %r. Skipping %d file(s).",
                language, len(entry.files),
            )
            for translated in entry.files:
                result.skipped.append(SkippedFile(translated.file_id, "language", language))
            continue

        logger.info("Processing language: %s (%d files)", language, len(entry.files))
        language_root = (output_root / language).resolve()

        for translated in entry.files:
            if translated.file_id not in known_file_ids:
                logger.warning(
                    "Original file not found for translated file: %s", translated.file_id
                )
                result.skipped.append(SkippedFile(translated.file_id, "unmatched", language))
                continue

            if len(translated.content) == 0:
                logger.warning("Empty content for file: %s. Skipping.", translated.file_id)
                result.skipped.append(SkippedFile(translated.file_id, "empty", language))
                continue

            target = output_root / language / translated.file_id
            if not target.resolve().is_relative_to(language_root):
                logger.warning("Refusing to write outside %s: %s", language_root, target)
                result.skipped.append(SkippedFile(translated.file_id, "outside output", language))
                continue

            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                with open(target, "w", encoding="utf-8", newline="") as f:
                    f.write(translated.content)
            except OSError as e:
                logger.error("Failed to write %s: %s", target, e)
                result.errors.append(f"{target}: {e}")
                continue

            logger.info("Translated file written: %s", target)
            result.written.append(normalize_path(target))


def upload(
    settings: Settings,
    path: Optional[str] = None,
    excluded_paths: Optional[list[str]] = None,
    client: Optional[FrenglishClient] = None,
) -> UploadResult:
    """
    Upload existing files under language folders as the project's baseline.

    Unlike translate(), a file must already sit under a language folder
    (``locales/fr/app.json``); untagged files are skipped.
    """
    result = UploadResult()
    try:
        _run_upload(result, settings, path, excluded_paths, client)
    except Exception as e:
        logger.error("Error uploading files: %s", e, exc_info=logger.isEnabledFor(logging.DEBUG))
        result.errors.append(str(e))
    return result


def _run_upload(
    result: UploadResult,
    settings: Settings,
    path: Optional[str],
    excluded_paths: Optional[list[str]],
    client: Optional[FrenglishClient],
) -> None:
    client = client or FrenglishClient.from_settings(settings)
    base_path = path or settings.translation_path
    excludes = list(settings.excluded_paths if excluded_paths is None else excluded_paths)
    identity_base = _identity_base(base_path)

    supported_languages = client.get_supported_languages()
    supported_file_types = client.get_supported_file_types()

    found = find_language_files(
        base_path, supported_languages, supported_file_types, excludes
    )
    for skipped in found.skipped:
        result.skipped.append(SkippedFile(skipped.path, skipped.reason))

    if not found:
        logger.info("No files to upload")
        return

    files: list[FileContentWithLanguage] = []
    for language, paths in found.files.items():
        for record in read_files(paths):
            file_id = resolve_relative_identity(
                identity_base, record.file_id, supported_languages, excludes
            )
            if file_id is None:
                result.skipped.append(SkippedFile(record.file_id, "excluded", language))
                continue
            files.append(FileContentWithLanguage(language, file_id, record.content))

    if not files:
        logger.info("No valid files to upload after reading.")
        return

    logger.info("Files to upload: %s", [f"{f.language}/{f.file_id}" for f in files])
    result.response = client.upload(files)
    result.uploaded = files
    logger.info("Files uploaded successfully")
