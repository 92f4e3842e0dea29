"""Command-line interface."""

from locale_translate.cli.main import cli


__all__ = ["cli"]
