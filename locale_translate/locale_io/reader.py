"""Locale file reading for YAML and JSON sources."""

import json
from pathlib import Path
from typing import Any

import structlog
import yaml

from locale_translate.errors import (
    FileError,
    FormatError,
    JsonFormatError,
    YamlFormatError,
)
from locale_translate.locale_io.flattener import flatten


logger = structlog.get_logger()

YAML_SUFFIXES = (".yml", ".yaml")
JSON_SUFFIXES = (".json",)


class LocaleReader:
    """Reads locale files into nested mappings.

    The format is chosen from the file suffix. Missing files raise
    ``FileError`` and malformed content raises a ``FormatError`` subclass,
    so callers can tell the two apart.
    """

    def __init__(self) -> None:
        """Initialize the reader."""
        self._log = logger.bind(component="locale_io", subcomponent="reader")

    def read(self, path: Path) -> dict[str, Any]:
        """Read and parse a locale file.

        Args:
            path: Path to a .yml, .yaml or .json file.

        Returns:
            Parsed content; empty files yield an empty mapping.

        Raises:
            FileError: If the file does not exist or cannot be read.
            FormatError: If the content is malformed or not a mapping.
        """
        path = Path(path)
        if not path.is_file():
            msg = f"File not found: {path}"
            raise FileError(msg, {"file_path": str(path)})

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Cannot read file: {path}"
            raise FileError(msg, {"file_path": str(path), "error": str(exc)}) from exc

        data = self._parse(path, content)
        if not isinstance(data, dict):
            msg = f"Locale file must contain a mapping at the top level: {path}"
            raise FormatError(
                msg, {"file_path": str(path), "type": type(data).__name__}
            )

        self._log.debug("locale_file_read", file_path=str(path), keys=len(data))
        return data

    def read_source_strings(self, path: Path, source_language: str) -> dict[str, Any]:
        """Read a source locale file as a flat map.

        A root key equal to the source language (``en:``) is stripped.

        Args:
            path: Source locale file.
            source_language: Source language code.

        Returns:
            Dot-key to value map in file order.
        """
        return flatten(unwrap_root(self.read(path), source_language))

    def read_target_strings(self, path: Path, language_code: str) -> dict[str, Any]:
        """Read an existing target locale file as a flat map.

        Args:
            path: Target locale file.
            language_code: Target language code used as root key.

        Returns:
            Dot-key to value map, empty when the file does not exist yet.
        """
        if not Path(path).exists():
            return {}
        return flatten(unwrap_root(self.read(path), language_code))

    @staticmethod
    def _parse(path: Path, content: str) -> Any:
        suffix = path.suffix.lower()
        if suffix in YAML_SUFFIXES:
            try:
                return yaml.safe_load(content) or {}
            except yaml.YAMLError as exc:
                msg = f"Invalid YAML syntax in {path}"
                raise YamlFormatError(
                    msg, {"file_path": str(path), "error": str(exc)}
                ) from exc
        if suffix in JSON_SUFFIXES:
            if not content.strip():
                return {}
            try:
                return json.loads(content)
            except json.JSONDecodeError as exc:
                msg = f"Invalid JSON syntax in {path}"
                raise JsonFormatError(
                    msg,
                    {"file_path": str(path), "error": exc.msg, "line": exc.lineno},
                ) from exc

        msg = f"Unsupported locale file format: {path.suffix or '(none)'}"
        raise FormatError(msg, {"file_path": str(path)})


def unwrap_root(data: dict[str, Any], language_code: str) -> dict[str, Any]:
    """Strip a top-level language key when present.

    Args:
        data: Parsed locale content.
        language_code: Expected root key.

    Returns:
        The subtree under the root key, or the data unchanged.
    """
    inner = data.get(language_code)
    if len(data) == 1 and isinstance(inner, dict):
        return inner
    return data
