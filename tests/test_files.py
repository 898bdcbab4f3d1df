"""
Tests for file discovery, identity resolution and batch reading.

Tests cover:
- Exclude pattern matching (globs and substrings)
- Language classification in translate and upload modes
- Language-neutral file identities
- Concurrent reading with per-file failures

Run with: pytest tests/test_files.py -v
"""

from pathlib import Path

import pytest

from frenglish.files import (
    DefaultTo,
    ExcludeMatcher,
    RequireExplicit,
    classify,
    find_language_files,
    find_language_files_to_translate,
    read_files,
    resolve_relative_identity,
)
from frenglish.files.classifier import (
    SKIP_EXCLUDED,
    SKIP_NO_LANGUAGE,
    SKIP_OTHER_LANGUAGE,
    detect_language,
    has_supported_extension,
)
from frenglish.utils import normalize_path


LANGUAGES = ["en", "fr", "es"]


def write(root: Path, relative: str, content: str = "{}") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def norm(path: Path) -> str:
    return normalize_path(path.resolve())


@pytest.fixture
def project(tmp_path):
    """A locales tree with origin, translated and untagged files."""
    root = tmp_path / "locales"
    write(root, "en/app.json")
    write(root, "en/home/intro.md")
    write(root, "fr/app.json")
    write(root, "es/app.json")
    write(root, "shared/common.json")
    write(root, "en/notes.txt")
    write(root, "en/excluded/skip.json")
    return root


class TestExcludeMatcher:
    """Tests for glob and substring exclude patterns."""

    def test_substring_pattern(self):
        """A pattern without * is a containment test."""
        matcher = ExcludeMatcher.from_patterns(["node_modules"])
        assert matcher.matches("/repo/node_modules/pkg/en.json")
        assert not matcher.matches("/repo/src/en.json")

    def test_glob_pattern(self):
        """Globs match the whole normalized path."""
        matcher = ExcludeMatcher.from_patterns(["**/excluded/**"])
        assert matcher.matches("/base/en/excluded/file2.json")
        assert not matcher.matches("/base/en/file1.json")

    def test_glob_is_case_insensitive(self):
        matcher = ExcludeMatcher.from_patterns(["**/Drafts/**"])
        assert matcher.matches("/base/en/drafts/a.json")
        assert matcher.matches("/base/en/DRAFTS/a.json")

    def test_glob_matches_dot_directories(self):
        matcher = ExcludeMatcher.from_patterns(["**/.cache/**"])
        assert matcher.matches("/base/.cache/en/a.json")

    def test_backslash_paths_are_normalized(self):
        matcher = ExcludeMatcher.from_patterns(["en/excluded"])
        assert matcher.matches("C:\\base\\en\\excluded\\a.json")

    def test_match_returns_pattern(self):
        matcher = ExcludeMatcher.from_patterns(["vendor", "**/tmp/**"])
        assert matcher.match("/a/tmp/b.json") == "**/tmp/**"
        assert matcher.match("/a/vendor/b.json") == "vendor"
        assert matcher.match("/a/b.json") is None

    def test_empty_patterns(self):
        """No patterns excludes nothing."""
        assert not ExcludeMatcher.from_patterns(None)
        assert not ExcludeMatcher.from_patterns([]).matches("/a/b.json")
        assert not ExcludeMatcher.from_patterns([""]).matches("/a/b.json")


class TestHelpers:
    """Tests for extension and language detection helpers."""

    def test_supported_extension(self):
        assert has_supported_extension("app.json", ["json", "po"])
        assert has_supported_extension("README.ja.md", ["ja.md"])
        assert not has_supported_extension("app.JSON", ["json"])
        assert not has_supported_extension("app.json", [])

    def test_detect_language_first_segment_wins(self):
        assert detect_language("/base/en/fr/a.json", LANGUAGES) == "en"

    def test_detect_language_is_case_insensitive(self):
        assert detect_language("/base/FR/a.json", LANGUAGES) == "fr"

    def test_detect_language_none(self):
        assert detect_language("/base/shared/a.json", LANGUAGES) is None


class TestClassifier:
    """Tests for language classification."""

    def test_translate_mode_collects_origin_files(self, project):
        """Origin files and untagged files land in the origin bucket."""
        result = find_language_files_to_translate(project, "en", LANGUAGES, ["json", "md"])

        assert result.languages == ["en"]
        en_files = result.get("en")
        assert norm(project / "en/app.json") in en_files
        assert norm(project / "en/home/intro.md") in en_files
        assert norm(project / "shared/common.json") in en_files

    def test_translate_mode_drops_other_languages(self, project):
        """Already translated output is never picked up as source."""
        result = find_language_files_to_translate(project, "en", LANGUAGES, ["json"])

        all_paths = result.all_paths()
        assert norm(project / "fr/app.json") not in all_paths
        assert norm(project / "es/app.json") not in all_paths
        reasons = {s.path: s.reason for s in result.skipped}
        assert reasons[norm(project / "fr/app.json")] == SKIP_OTHER_LANGUAGE

    def test_upload_mode_requires_language_segment(self, project):
        """Untagged files are skipped when a language folder is required."""
        result = find_language_files(project, LANGUAGES, ["json"])

        assert set(result.languages) == {"en", "fr", "es"}
        assert norm(project / "fr/app.json") in result.get("fr")
        assert norm(project / "shared/common.json") not in result.all_paths()
        reasons = {s.path: s.reason for s in result.skipped}
        assert reasons[norm(project / "shared/common.json")] == SKIP_NO_LANGUAGE

    def test_unsupported_types_are_ignored(self, project):
        result = classify(project, LANGUAGES, ["json", "md"], policy=DefaultTo("en"))
        assert norm(project / "en/notes.txt") not in result.all_paths()

    def test_exclude_patterns(self, project):
        result = classify(
            project, LANGUAGES, ["json"], ["**/excluded/**"], policy=DefaultTo("en")
        )
        assert norm(project / "en/excluded/skip.json") not in result.all_paths()
        reasons = {s.path: s.reason for s in result.skipped}
        assert reasons[norm(project / "en/excluded/skip.json")] == SKIP_EXCLUDED

    def test_substring_exclude(self, project):
        result = classify(project, LANGUAGES, ["json"], ["shared"], policy=DefaultTo("en"))
        assert norm(project / "shared/common.json") not in result.all_paths()

    def test_no_file_types_is_empty(self, project):
        """Zero supported types gives an empty result, not an error."""
        result = classify(project, LANGUAGES, [], policy=DefaultTo("en"))
        assert len(result) == 0
        assert not result

    def test_missing_base_path_is_empty(self, tmp_path):
        result = classify(tmp_path / "missing", LANGUAGES, ["json"])
        assert len(result) == 0

    def test_single_file_base_path(self, project):
        target = project / "en/app.json"
        result = classify(target, LANGUAGES, ["json"], policy=DefaultTo("en"))
        assert result.all_paths() == [norm(target)]

    def test_paths_are_absolute_and_forward_slash(self, project):
        result = classify(project, LANGUAGES, ["json"], policy=RequireExplicit())
        for path in result.all_paths():
            assert "\\" not in path
            assert Path(path).is_absolute()

    def test_default_policy_language_is_lowercased(self):
        assert DefaultTo("EN").language == "en"


class TestRelativeIdentity:
    """Tests for language-neutral file identities."""

    def test_strips_language_segment(self):
        assert resolve_relative_identity("/b", "/b/en/x/y.json", ["en", "fr"]) == "x/y.json"

    def test_passthrough_without_language(self):
        assert resolve_relative_identity("/b", "/b/x/y.json", ["en", "fr"]) == "x/y.json"

    def test_language_segment_is_case_insensitive(self):
        assert resolve_relative_identity("/b", "/b/EN/y.json", ["en"]) == "y.json"

    def test_only_leading_language_is_stripped(self):
        """A language code deeper in the path is part of the identity."""
        assert resolve_relative_identity("/b", "/b/docs/fr/y.json", ["en", "fr"]) == "docs/fr/y.json"

    def test_excluded_substring_returns_none(self):
        assert resolve_relative_identity("/base", "/base/en/excluded/file.json", ["en"], ["excluded"]) is None

    def test_excluded_glob_returns_none(self):
        assert resolve_relative_identity("/base", "/base/en/tmp/a.json", ["en"], ["**/tmp/**"]) is None

    def test_normalizes_separators(self):
        result = resolve_relative_identity("/base", "/base\\en\\path\\to\\file.json", ["en"])
        assert result == "path/to/file.json"

    def test_language_folder_alone_is_none(self):
        """Nothing left after stripping the language folder."""
        assert resolve_relative_identity("/b", "/b/en", ["en"]) is None

    def test_same_path_is_none(self):
        assert resolve_relative_identity("/b", "/b", ["en"]) is None

    @pytest.mark.parametrize("path,excludes", [
        ("/b/en/x/y.json", []),
        ("/b/x/y.json", []),
        ("/b/en/skip/y.json", ["skip"]),
    ])
    def test_idempotent(self, path, excludes):
        first = resolve_relative_identity("/b", path, ["en", "fr"], excludes)
        second = resolve_relative_identity("/b", path, ["en", "fr"], excludes)
        assert first == second


class TestBatchReader:
    """Tests for concurrent file reading."""

    def test_reads_in_input_order(self, tmp_path):
        paths = [write(tmp_path, f"f{i}.json", f"content{i}") for i in range(20)]
        batch = read_files(paths)

        assert [r.file_id for r in batch.records] == [str(p) for p in paths]
        assert [r.content for r in batch.records] == [f"content{i}" for i in range(20)]
        assert batch.failures == []

    def test_failed_read_is_omitted(self, tmp_path):
        good = write(tmp_path, "good.json", "ok")
        missing = tmp_path / "missing.json"

        batch = read_files([good, missing])

        assert len(batch) == 1
        assert batch.records[0].file_id == str(good)
        assert [f.path for f in batch.failures] == [str(missing)]

    def test_line_endings_preserved(self, tmp_path):
        path = tmp_path / "crlf.json"
        path.write_bytes(b'{\r\n"a": 1\r\n}')

        batch = read_files([path])

        assert batch.records[0].content == '{\r\n"a": 1\r\n}'

    def test_empty_input(self):
        batch = read_files([])
        assert len(batch) == 0
        assert not batch
