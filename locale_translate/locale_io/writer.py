"""Locale file writing with backup rotation and dry-run summaries."""

import json
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

from locale_translate.errors import FileError, FormatError
from locale_translate.locale_io.flattener import flatten
from locale_translate.locale_io.reader import (
    JSON_SUFFIXES,
    YAML_SUFFIXES,
    LocaleReader,
)


logger = structlog.get_logger()

BACKUP_SUFFIX = ".bak"


@dataclass
class WriteSummary:
    """Outcome of a single locale write.

    Attributes:
        path: Destination file.
        written: Whether the file was actually written.
        added: Keys absent from the previous file.
        changed: Keys whose value differs from the previous file.
        removed: Keys present before and absent now.
        backup_path: Backup created before overwriting, if any.
        unchanged: Whether the existing file already holds these strings.
    """

    path: Path
    written: bool
    added: list[str] = field(default_factory=list)
    changed: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    backup_path: Path | None = None
    unchanged: bool = False

    @property
    def has_changes(self) -> bool:
        """Check whether any key was added, changed or removed."""
        return bool(self.added or self.changed or self.removed)

    def describe(self) -> str:
        """Render a one-line summary."""
        if self.unchanged:
            return f"unchanged {self.path}"
        verb = "wrote" if self.written else "would write"
        return (
            f"{verb} {self.path}: {len(self.added)} added, "
            f"{len(self.changed)} changed, {len(self.removed)} removed"
        )


class LocaleWriter:
    """Serializes nested locale trees to YAML or JSON.

    Output is wrapped under a root language key, parent directories are
    created on demand, and an existing file can be rotated into numbered
    backups before it is replaced.
    """

    def __init__(
        self,
        dry_run: bool = False,
        create_backup: bool = False,
        max_backups: int = 1,
    ) -> None:
        """Initialize the writer.

        Args:
            dry_run: Compute summaries without touching the filesystem.
            create_backup: Back up existing files before overwriting.
            max_backups: Number of backups kept per file.
        """
        if max_backups < 1:
            msg = f"max_backups must be at least 1, got {max_backups}"
            raise ValueError(msg)
        self.dry_run = dry_run
        self.create_backup = create_backup
        self.max_backups = max_backups
        self._reader = LocaleReader()
        self._log = logger.bind(component="locale_io", subcomponent="writer")

    def write(
        self, path: Path, nested: dict[str, Any], *, root_key: str | None = None
    ) -> WriteSummary:
        """Write a locale tree.

        Args:
            path: Destination file; the suffix selects the format.
            nested: Nested locale tree.
            root_key: Optional language code to wrap the tree under.

        Returns:
            WriteSummary describing the change against the previous file.

        Raises:
            FileError: If the file or its backup cannot be written.
            FormatError: If the suffix is not a supported format.
        """
        path = Path(path)
        document = {root_key: nested} if root_key else nested
        content = self._serialize(path, document)
        summary = self._diff(path, nested, root_key)

        if path.exists() and not summary.has_changes:
            summary.unchanged = True
            self._log.info("locale_write_skipped_unchanged", file_path=str(path))
            return summary

        if self.dry_run:
            self._log.info(
                "locale_write_dry_run",
                file_path=str(path),
                added=len(summary.added),
                changed=len(summary.changed),
                removed=len(summary.removed),
            )
            return summary

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if self.create_backup and path.exists():
                summary.backup_path = self._rotate_backups(path)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            msg = f"Cannot write file: {path}"
            raise FileError(msg, {"file_path": str(path), "error": str(exc)}) from exc

        summary.written = True
        self._log.info(
            "locale_file_written",
            file_path=str(path),
            keys=len(flatten(nested)),
            backup=str(summary.backup_path) if summary.backup_path else None,
        )
        return summary

    def _diff(
        self, path: Path, nested: dict[str, Any], root_key: str | None
    ) -> WriteSummary:
        new_flat = flatten(nested)
        old_flat: dict[str, Any] = {}
        if path.exists():
            old_flat = (
                self._reader.read_target_strings(path, root_key)
                if root_key
                else flatten(self._reader.read(path))
            )
        return WriteSummary(
            path=path,
            written=False,
            added=[key for key in new_flat if key not in old_flat],
            changed=[
                key
                for key, value in new_flat.items()
                if key in old_flat and old_flat[key] != value
            ],
            removed=[key for key in old_flat if key not in new_flat],
        )

    def _rotate_backups(self, path: Path) -> Path:
        """Shift existing backups and copy the current file to ``.bak``.

        Keeps ``.bak`` plus ``.bak.1`` through ``.bak.{max_backups - 1}``.
        """
        primary = backup_path(path)
        if self.max_backups > 1:
            for stale in path.parent.glob(f"{path.name}{BACKUP_SUFFIX}.*"):
                index = stale.name.rsplit(".", 1)[-1]
                if index.isdigit() and int(index) >= self.max_backups - 1:
                    stale.unlink()
            for index in range(self.max_backups - 2, 0, -1):
                source = backup_path(path, index)
                if source.exists():
                    source.replace(backup_path(path, index + 1))
            if primary.exists():
                primary.replace(backup_path(path, 1))

        shutil.copy2(path, primary)
        self._log.debug("locale_backup_created", backup_path=str(primary))
        return primary

    @staticmethod
    def _serialize(path: Path, document: dict[str, Any]) -> str:
        suffix = path.suffix.lower()
        if suffix in YAML_SUFFIXES:
            return yaml.safe_dump(
                document,
                allow_unicode=True,
                sort_keys=False,
                default_flow_style=False,
                width=float("inf"),
            )
        if suffix in JSON_SUFFIXES:
            return json.dumps(document, ensure_ascii=False, indent=2) + "\n"
        msg = f"Unsupported locale file format: {path.suffix or '(none)'}"
        raise FormatError(msg, {"file_path": str(path)})


def backup_path(path: Path, index: int = 0) -> Path:
    """Get the backup file path for a locale file.

    Args:
        path: Original locale file.
        index: Rotation index; 0 is the most recent ``.bak``.

    Returns:
        Backup path next to the original.
    """
    suffix = BACKUP_SUFFIX if index == 0 else f"{BACKUP_SUFFIX}.{index}"
    return path.with_name(f"{path.name}{suffix}")


def build_output_path(output_folder: Path, language_code: str, fmt: str) -> Path:
    """Build the output path for a target language.

    Args:
        output_folder: Directory receiving locale files.
        language_code: Target language code.
        fmt: File extension without dot, e.g. ``yml`` or ``json``.

    Returns:
        ``<output_folder>/<language_code>.<fmt>``.
    """
    return Path(output_folder) / f"{language_code}.{fmt.lstrip('.')}"
