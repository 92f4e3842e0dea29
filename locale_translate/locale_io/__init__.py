"""Locale file reading, writing and key flattening."""

from locale_translate.locale_io.flattener import flatten, unflatten
from locale_translate.locale_io.reader import LocaleReader, unwrap_root
from locale_translate.locale_io.writer import (
    LocaleWriter,
    WriteSummary,
    backup_path,
    build_output_path,
)


__all__ = [
    "LocaleReader",
    "LocaleWriter",
    "WriteSummary",
    "backup_path",
    "build_output_path",
    "flatten",
    "unflatten",
    "unwrap_root",
]
