"""CLI commands for locale translation."""

import json
import logging
import sys
import uuid
from pathlib import Path

import click
import structlog

from locale_translate import __version__
from locale_translate.config.loader import ConfigLoader
from locale_translate.config.schema import TranslationConfig
from locale_translate.config.settings import get_api_key_settings
from locale_translate.errors import (
    ConfigurationError,
    FileError,
    FormatError,
    LocaleTranslateError,
)
from locale_translate.observability.logging import bind_run_context, configure_logging
from locale_translate.observability.progress import ProgressEvent, format_duration
from locale_translate.providers.factory import available_providers
from locale_translate.translator.direct import DirectTranslator
from locale_translate.translator.models import TranslationReport
from locale_translate.translator.orchestrator import Translator


logger = structlog.get_logger()

EXIT_FAILURE = 1


def _setup_logging(verbose: bool, json_logs: bool, run_id: str) -> None:
    configure_logging(
        level=logging.DEBUG if verbose else logging.INFO, json_format=json_logs
    )
    bind_run_context(run_id)


def _echo_reasons(header: str, reasons: list[str]) -> None:
    click.echo(header, err=True)
    for reason in reasons:
        click.echo(f"  - {reason}", err=True)


def _load_config(
    config_path: Path, run_id: str, overrides: dict[str, object]
) -> TranslationConfig:
    """Load configuration, exit on failure."""
    loader = ConfigLoader(run_id=run_id)
    try:
        return loader.load(config_path, overrides)
    except ConfigurationError as e:
        logger.warning("config_load_failed", error=str(e), reasons=e.reasons)
        _echo_reasons("Configuration validation failed:", e.reasons)
        sys.exit(EXIT_FAILURE)


def _print_progress(event: ProgressEvent) -> None:
    click.echo(
        f"[{event.language}] {event.progress:5.1f}% {event.current_key} "
        f"(elapsed {format_duration(event.elapsed_seconds)}, "
        f"remaining {format_duration(event.remaining_seconds)})",
        err=True,
    )


def _print_report(report: TranslationReport) -> None:
    for result in report.results:
        if result.succeeded:
            line = result.write_summary.describe() if result.write_summary else ""
            click.echo(f"  ok   {result.language.code}: {line}")
        else:
            click.echo(f"  FAIL {result.language.code}: {result.error}", err=True)
    click.echo(
        f"Done in {report.duration:.2f}s: {report.success_count} succeeded, "
        f"{report.failure_count} failed."
    )


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Translate locale files through LLM backends."""


@cli.command()
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to the YAML translation configuration.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Translate but do not write any locale file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.option(
    "--json-logs/--no-json-logs",
    default=False,
    help="Use JSON format for logs (default: false).",
)
@click.option(
    "--progress/--no-progress",
    default=True,
    help="Print per-language progress to stderr (default: true).",
)
@click.option(
    "--json-report",
    is_flag=True,
    default=False,
    help="Print the run report as JSON.",
)
def translate(  # noqa: PLR0913
    config_path: Path,
    dry_run: bool,
    verbose: bool,
    json_logs: bool,
    progress: bool,
    json_report: bool,
) -> None:
    """Translate the configured source file into every target language.

    Exits non-zero when the configuration is invalid or any language fails.
    """
    run_id = uuid.uuid4().hex[:12]
    _setup_logging(verbose, json_logs, run_id)

    overrides: dict[str, object] = {}
    if dry_run:
        overrides["dry_run"] = True
    if verbose:
        overrides["verbose"] = True
    config = _load_config(config_path, run_id, overrides)

    translator = Translator(
        config,
        progress_callback=_print_progress if progress else None,
        run_id=run_id,
    )
    try:
        report = translator.run()
    except (ConfigurationError, FileError, FormatError) as e:
        logger.error("translation_aborted", **e.to_dict())
        _echo_reasons("Translation aborted:", getattr(e, "reasons", [e.message]))
        sys.exit(EXIT_FAILURE)

    if json_report:
        click.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        _print_report(report)

    if not report.succeeded:
        sys.exit(EXIT_FAILURE)


@cli.command()
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to the YAML translation configuration.",
)
def validate(config_path: Path) -> None:
    """Validate a configuration file without translating."""
    run_id = uuid.uuid4().hex[:12]
    _setup_logging(verbose=False, json_logs=False, run_id=run_id)
    config = _load_config(config_path, run_id, {})

    click.echo("Configuration is valid!")
    click.echo(f"  Provider: {config.provider}")
    click.echo(f"  Source: {config.source_language} ({config.input_file})")
    click.echo(f"  Targets: {', '.join(config.target_codes())}")
    click.echo(f"  Mode: {config.translation_mode.value}")


@cli.command()
@click.argument("texts", nargs=-1, required=True)
@click.option("--to", "target", required=True, help="Target language code.")
@click.option(
    "--name",
    "language_name",
    default=None,
    help="Target language display name (defaults to the code).",
)
@click.option(
    "--provider",
    type=click.Choice(available_providers() + ["chatgpt", "claude"]),
    default="openai",
    show_default=True,
    help="Translation backend.",
)
@click.option("--model", default=None, help="Override the provider's default model.")
@click.option("--context", "translation_context", default=None, help="Domain context.")
@click.option(
    "--skip-errors",
    is_flag=True,
    default=False,
    help="Print an empty line for failed strings instead of aborting.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
def text(  # noqa: PLR0913
    texts: tuple[str, ...],
    target: str,
    language_name: str | None,
    provider: str,
    model: str | None,
    translation_context: str | None,
    skip_errors: bool,
    verbose: bool,
) -> None:
    """Translate strings given on the command line, one result per line."""
    _setup_logging(verbose, json_logs=False, run_id=uuid.uuid4().hex[:12])

    try:
        config = TranslationConfig(
            provider=provider,
            model=model,
            translation_context=translation_context,
        ).with_api_keys(**get_api_key_settings().as_config_keys())
        with DirectTranslator(config) as translator:
            results = translator.translate_batch(
                list(texts),
                to=target,
                language_name=language_name or target,
                skip_errors=skip_errors,
            )
    except ConfigurationError as e:
        logger.error("direct_translation_failed", **e.to_dict())
        _echo_reasons(f"Error: {e.message}", [r for r in e.reasons if r != e.message])
        sys.exit(EXIT_FAILURE)
    except LocaleTranslateError as e:
        logger.error("direct_translation_failed", **e.to_dict())
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(EXIT_FAILURE)

    for result in results:
        click.echo(result or "")
