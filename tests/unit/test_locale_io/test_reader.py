"""Unit tests for LocaleReader."""

import json
from pathlib import Path

import pytest

from locale_translate.errors import (
    FileError,
    FormatError,
    JsonFormatError,
    YamlFormatError,
)
from locale_translate.locale_io.reader import LocaleReader, unwrap_root


class TestLocaleReaderRead:
    """Tests for LocaleReader.read."""

    def test_reads_yaml(self, tmp_path: Path) -> None:
        """YAML files parse into nested mappings."""
        path = tmp_path / "en.yml"
        path.write_text("en:\n  hello: Hello\n", encoding="utf-8")
        assert LocaleReader().read(path) == {"en": {"hello": "Hello"}}

    def test_reads_json(self, tmp_path: Path) -> None:
        """JSON files parse into nested mappings."""
        path = tmp_path / "en.json"
        path.write_text(json.dumps({"en": {"hello": "Hello"}}), encoding="utf-8")
        assert LocaleReader().read(path) == {"en": {"hello": "Hello"}}

    def test_empty_file_is_empty_mapping(self, tmp_path: Path) -> None:
        """An empty file has no keys."""
        path = tmp_path / "en.yaml"
        path.write_text("", encoding="utf-8")
        assert LocaleReader().read(path) == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises FileError."""
        with pytest.raises(FileError, match="File not found"):
            LocaleReader().read(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Malformed YAML raises YamlFormatError."""
        path = tmp_path / "en.yml"
        path.write_text("en:\n  hello: [unclosed\n", encoding="utf-8")
        with pytest.raises(YamlFormatError):
            LocaleReader().read(path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Malformed JSON raises JsonFormatError with the line."""
        path = tmp_path / "en.json"
        path.write_text('{"en": {"hello": }', encoding="utf-8")
        with pytest.raises(JsonFormatError) as exc_info:
            LocaleReader().read(path)
        assert exc_info.value.context["line"] == 1

    def test_top_level_list_rejected(self, tmp_path: Path) -> None:
        """Locale files must contain a mapping."""
        path = tmp_path / "en.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(FormatError, match="mapping"):
            LocaleReader().read(path)

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        """Unknown extensions are rejected."""
        path = tmp_path / "en.txt"
        path.write_text("hello", encoding="utf-8")
        with pytest.raises(FormatError, match="Unsupported"):
            LocaleReader().read(path)


class TestLocaleReaderStrings:
    """Tests for flat source and target reading."""

    def test_source_strips_language_root(self, source_file: Path) -> None:
        """The source language root key is removed before flattening."""
        strings = LocaleReader().read_source_strings(source_file, "en")

        assert strings["app.name"] == "Acme Notes"
        assert strings["users.profile.title"] == "Profile"
        assert strings["app.version"] == 3
        assert "en.app.name" not in strings

    def test_source_without_root(self, tmp_path: Path) -> None:
        """Files without a language root are read as-is."""
        path = tmp_path / "en.json"
        path.write_text('{"hello": "Hello"}', encoding="utf-8")
        assert LocaleReader().read_source_strings(path, "en") == {"hello": "Hello"}

    def test_target_missing_is_empty(self, tmp_path: Path) -> None:
        """A target that does not exist yet has no keys."""
        assert LocaleReader().read_target_strings(tmp_path / "it.yml", "it") == {}

    def test_target_strips_its_root(self, tmp_path: Path) -> None:
        """Existing target files are unwrapped from their language key."""
        path = tmp_path / "it.yml"
        path.write_text("it:\n  hello: Ciao\n", encoding="utf-8")
        assert LocaleReader().read_target_strings(path, "it") == {"hello": "Ciao"}


class TestUnwrapRoot:
    """Tests for unwrap_root."""

    def test_only_single_root_is_unwrapped(self) -> None:
        """A language key next to other keys is content, not a root."""
        data = {"en": {"a": "b"}, "other": "x"}
        assert unwrap_root(data, "en") == data
