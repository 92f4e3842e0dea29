"""Translation orchestrator with per-language failure isolation."""

import time
import uuid
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any

import structlog

from locale_translate.config.schema import (
    TargetLanguage,
    TranslationConfig,
    TranslationMode,
)
from locale_translate.locale_io.flattener import unflatten
from locale_translate.locale_io.reader import LocaleReader
from locale_translate.locale_io.writer import LocaleWriter, build_output_path
from locale_translate.observability.metrics import TranslationMetrics
from locale_translate.observability.progress import ProgressEvent, ProgressTracker
from locale_translate.providers.factory import create_provider_from_config
from locale_translate.providers.protocols import TranslationBackend
from locale_translate.strategies.selector import select_strategy
from locale_translate.translator.exclusions import ExclusionSet
from locale_translate.translator.merge import merge
from locale_translate.translator.models import (
    TranslationJob,
    TranslationReport,
    TranslationResult,
)
from locale_translate.translator.state_machine import JobStateMachine


logger = structlog.get_logger()


class Translator:
    """Translates a source locale file into every configured language.

    Each language runs as an isolated job: a failure is recorded in the
    report and never stops the other languages. Jobs run in a thread pool
    bounded by ``max_concurrent_requests`` and share one backend, so the
    backend's cache and rate limiter span all languages.
    """

    def __init__(  # noqa: PLR0913
        self,
        config: TranslationConfig,
        *,
        provider: TranslationBackend | None = None,
        reader: LocaleReader | None = None,
        writer: LocaleWriter | None = None,
        progress_callback: Callable[[ProgressEvent], None] | None = None,
        run_id: str | None = None,
    ) -> None:
        """Initialize the translator.

        Args:
            config: Run configuration.
            provider: Backend to use; built from the configuration when omitted.
            reader: Locale reader.
            writer: Locale writer; built from the configuration when omitted.
            progress_callback: Receiver for per-language progress events.
            run_id: Identifier for log correlation; generated when omitted.
        """
        self.config = config
        self.run_id = run_id or uuid.uuid4().hex[:12]
        self._provider = provider
        self._owns_provider = provider is None
        self._reader = reader or LocaleReader()
        self._writer = writer or LocaleWriter(
            dry_run=config.dry_run,
            create_backup=config.create_backup,
            max_backups=config.max_backups,
        )
        self._progress_callback = progress_callback
        self._exclusions = ExclusionSet.from_config(config)
        self._metrics = TranslationMetrics.get_instance()
        self._log = logger.bind(component="translator", run_id=self.run_id)

    def run(self) -> TranslationReport:
        """Run every language job.

        Returns:
            Report with one result per target language.

        Raises:
            ConfigurationError: If the configuration is invalid; raised
                before any backend call.
            FileError: If the source file is missing or unreadable.
            FormatError: If the source file is malformed.
        """
        self.config.validate(check_files=False)
        started = time.perf_counter()

        source = self._reader.read_source_strings(
            self.config.input_file, self.config.source_language
        )
        languages = self.config.target_languages
        max_workers = min(self.config.max_concurrent_requests, len(languages))

        self._log.info(
            "translation_started",
            source_file=str(self.config.input_file),
            source_keys=len(source),
            languages=[lang.code for lang in languages],
            mode=self.config.translation_mode.value,
            max_workers=max_workers,
            dry_run=self.config.dry_run,
        )

        provider = self._get_provider()
        try:
            results = self._run_jobs(provider, source, languages, max_workers)
        finally:
            if self._owns_provider:
                close = getattr(provider, "close", None)
                if callable(close):
                    close()
                self._provider = None

        report = TranslationReport(
            results=results, duration=time.perf_counter() - started
        )
        self._log.info(
            "translation_finished",
            success_count=report.success_count,
            failure_count=report.failure_count,
            duration_s=round(report.duration, 3),
            metrics=self._metrics.to_dict(),
        )
        return report

    def _get_provider(self) -> TranslationBackend:
        if self._provider is None:
            self._provider = create_provider_from_config(self.config)
        return self._provider

    def _run_jobs(
        self,
        provider: TranslationBackend,
        source: dict[str, Any],
        languages: list[TargetLanguage],
        max_workers: int,
    ) -> list[TranslationResult]:
        if max_workers <= 1:
            return [self._run_language(provider, source, lang) for lang in languages]

        by_code: dict[str, TranslationResult] = {}
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_language = {
                executor.submit(self._run_language, provider, source, lang): lang
                for lang in languages
            }
            for future in as_completed(future_to_language):
                lang = future_to_language[future]
                by_code[lang.code] = future.result()
        return [by_code[lang.code] for lang in languages]

    def _run_language(
        self,
        provider: TranslationBackend,
        source: dict[str, Any],
        language: TargetLanguage,
    ) -> TranslationResult:
        """Run one language job; never raises."""
        started = time.perf_counter()
        machine = JobStateMachine(language.code, self.run_id)
        job = TranslationJob(language=language)
        tracker = ProgressTracker(callback=self._progress_callback)
        log = self._log.bind(language=language.code)
        output_path = build_output_path(
            self.config.output_folder,
            language.code,
            self.config.resolved_output_format().value,
        )

        try:
            filtered = self._exclusions.filter(source, language.code)
            job.strings, job.passthrough = split_translatable(filtered)
            if self.config.translation_mode == TranslationMode.INCREMENTAL:
                job.existing = self._reader.read_target_strings(
                    output_path, language.code
                )
                job.strings = {
                    key: text
                    for key, text in job.strings.items()
                    if key not in job.existing
                }
            machine.to_filtered()
            log.info(
                "language_job_filtered",
                strings=len(job.strings),
                excluded=len(source) - len(filtered),
                existing=len(job.existing),
            )

            translated: dict[str, str] = {}
            if job.strings:
                strategy = select_strategy(
                    len(job.strings),
                    provider,
                    tracker,
                    threshold=self.config.strategy_threshold,
                    batch_size=self.config.batch_size,
                )
                job.strategy = strategy.kind
                log.info("language_job_dispatched", strategy=strategy.kind.value)
                translated = strategy.translate(
                    job.strings, language.code, language.name
                )
            machine.to_dispatched()

            fresh = {
                key: translated[key] if key in translated else job.passthrough[key]
                for key in filtered
                if key in translated or key in job.passthrough
            }
            merged = merge(
                self.config.translation_mode,
                job.existing,
                fresh,
                source_keys=source.keys(),
                prune=self.config.prune_removed_keys,
            )
            machine.to_merged()

            summary = self._writer.write(
                output_path, unflatten(merged), root_key=language.code
            )
            if summary.written:
                machine.to_persisted()
            machine.to_done()
        except Exception as e:  # noqa: BLE001
            duration_ms = (time.perf_counter() - started) * 1000
            if not machine.is_terminal():
                machine.to_failed()
            self._metrics.record_failure(language.code, type(e).__name__)
            log.error(
                "language_job_failed",
                error_type=type(e).__name__,
                error=str(e),
                duration_ms=round(duration_ms, 2),
            )
            tracker.error(language.name, e)
            return TranslationResult(
                language=language,
                succeeded=False,
                error=str(e),
                error_type=type(e).__name__,
                strategy=job.strategy,
                strings_count=len(job.strings),
                output_path=output_path,
                duration_ms=duration_ms,
            )

        duration_ms = (time.perf_counter() - started) * 1000
        self._metrics.record_strings(language.code, len(translated))
        self._metrics.record_duration(language.code, duration_ms)
        tracker.complete(language.name, len(translated))
        log.info(
            "language_job_done",
            strings=len(translated),
            keys_written=len(merged),
            written=summary.written,
            unchanged=summary.unchanged,
            duration_ms=round(duration_ms, 2),
        )
        return TranslationResult(
            language=language,
            succeeded=True,
            translated=merged,
            strategy=job.strategy,
            strings_count=len(job.strings),
            output_path=output_path,
            write_summary=summary,
            duration_ms=duration_ms,
        )


def split_translatable(
    strings: dict[str, Any],
) -> tuple[dict[str, str], dict[str, Any]]:
    """Separate translatable text from values copied as-is.

    Args:
        strings: Flat dot-key map.

    Returns:
        Tuple of (non-blank strings, every other value).
    """
    translatable: dict[str, str] = {}
    passthrough: dict[str, Any] = {}
    for key, value in strings.items():
        if isinstance(value, str) and value.strip():
            translatable[key] = value
        else:
            passthrough[key] = value
    return translatable, passthrough
