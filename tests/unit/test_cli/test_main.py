"""Unit tests for the command line interface."""

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from locale_translate import __version__
from locale_translate.cli import main
from tests.helpers.fakes import FakeBackend


@pytest.fixture
def logging_calls(monkeypatch: pytest.MonkeyPatch) -> Iterator[list[dict[str, Any]]]:
    """Silence structlog and record configure_logging calls."""
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(main, "configure_logging", lambda **kw: calls.append(kw))
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL)
    )
    yield calls
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.fixture
def workdir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run from an empty directory with no provider keys in the environment."""
    for name in ("OPENAI_API_KEY", "GEMINI_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch) -> FakeBackend:
    """Route every provider lookup to an in-memory backend."""
    fake = FakeBackend()
    monkeypatch.setattr(
        "locale_translate.translator.orchestrator.create_provider_from_config",
        lambda config: fake,
    )
    monkeypatch.setattr(
        "locale_translate.translator.direct.create_provider_from_config",
        lambda config: fake,
    )
    return fake


def _config_file(workdir: Path, source_file: Path, extra: str = "") -> Path:
    path = workdir / "translate.yml"
    output_folder = workdir / "out"
    path.write_text(
        f"""\
provider: openai
openai_api_key: sk-test
input_file: {source_file}
output_folder: {output_folder}
create_backup: false
target_languages:
  - code: it
    name: Italian
  - code: fr
    name: French
{extra}""",
        encoding="utf-8",
    )
    return path


@pytest.mark.usefixtures("logging_calls")
class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid(self, workdir: Path, source_file: Path) -> None:
        """A valid file prints a summary."""
        result = CliRunner().invoke(
            main.cli, ["validate", "--config", str(_config_file(workdir, source_file))]
        )

        assert result.exit_code == 0, result.output
        assert "Configuration is valid!" in result.output
        assert "Targets: it, fr" in result.output

    def test_invalid(self, workdir: Path, source_file: Path) -> None:
        """Problems are listed and the exit code is non-zero."""
        path = _config_file(workdir, source_file, "max_retries: 0\n")

        result = CliRunner().invoke(main.cli, ["validate", "--config", str(path)])

        assert result.exit_code == 1
        assert "Configuration validation failed:" in result.output
        assert "max_retries" in result.output


@pytest.mark.usefixtures("backend")
class TestTranslateCommand:
    """Tests for the translate command."""

    def test_translates(
        self,
        workdir: Path,
        source_file: Path,
        logging_calls: list[dict[str, Any]],
    ) -> None:
        """Every language is written and summarized."""
        path = _config_file(workdir, source_file)

        result = CliRunner().invoke(
            main.cli, ["translate", "--config", str(path), "--no-progress"]
        )

        assert result.exit_code == 0, result.output
        assert (workdir / "out" / "it.yml").exists()
        assert (workdir / "out" / "fr.yml").exists()
        assert "2 succeeded, 0 failed" in result.output
        assert logging_calls == [{"level": logging.INFO, "json_format": False}]

    def test_failed_language_exits_non_zero(
        self,
        workdir: Path,
        source_file: Path,
        backend: FakeBackend,
        logging_calls: list[dict[str, Any]],
    ) -> None:
        """A failing language is reported and sets the exit code."""
        backend.failing_languages = {"fr"}
        path = _config_file(workdir, source_file)

        result = CliRunner().invoke(
            main.cli, ["translate", "--config", str(path), "--no-progress"]
        )

        assert result.exit_code == 1
        assert "FAIL fr" in result.output
        assert (workdir / "out" / "it.yml").exists()

    def test_dry_run_flag(
        self,
        workdir: Path,
        source_file: Path,
        logging_calls: list[dict[str, Any]],
    ) -> None:
        """--dry-run leaves the output folder untouched."""
        path = _config_file(workdir, source_file)

        result = CliRunner().invoke(
            main.cli, ["translate", "--config", str(path), "--dry-run", "--no-progress"]
        )

        assert result.exit_code == 0, result.output
        assert not (workdir / "out").exists()
        assert "would write" in result.output

    def test_json_report(
        self,
        workdir: Path,
        source_file: Path,
        logging_calls: list[dict[str, Any]],
    ) -> None:
        """--json-report prints a machine-readable report."""
        path = _config_file(workdir, source_file)

        result = CliRunner().invoke(
            main.cli,
            ["translate", "--config", str(path), "--no-progress", "--json-report"],
        )

        report = json.loads(result.stdout)
        assert report["success_count"] == 2
        assert [r["language"] for r in report["results"]] == ["it", "fr"]

    def test_progress_lines(
        self,
        workdir: Path,
        source_file: Path,
        logging_calls: list[dict[str, Any]],
    ) -> None:
        """Progress is printed per language by default."""
        path = _config_file(workdir, source_file, "max_concurrent_requests: 1\n")

        result = CliRunner().invoke(main.cli, ["translate", "--config", str(path)])

        assert result.exit_code == 0, result.output
        assert "[Italian] 100.0%" in result.output

    def test_missing_source_aborts(
        self,
        workdir: Path,
        source_file: Path,
        logging_calls: list[dict[str, Any]],
    ) -> None:
        """Configuration problems stop the run before translation."""
        path = _config_file(workdir, source_file)
        source_file.unlink()

        result = CliRunner().invoke(main.cli, ["translate", "--config", str(path)])

        assert result.exit_code == 1
        assert "Input file does not exist" in result.output

    def test_verbose_sets_debug(
        self,
        workdir: Path,
        source_file: Path,
        logging_calls: list[dict[str, Any]],
    ) -> None:
        """-v switches logging to debug."""
        path = _config_file(workdir, source_file)

        CliRunner().invoke(
            main.cli, ["translate", "--config", str(path), "-v", "--no-progress"]
        )

        assert logging_calls[0]["level"] == logging.DEBUG


@pytest.mark.usefixtures("logging_calls")
class TestTextCommand:
    """Tests for the text command."""

    def test_translates_arguments(
        self,
        workdir: Path,
        backend: FakeBackend,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Each argument is translated on its own line."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

        result = CliRunner().invoke(
            main.cli, ["text", "Hello", "Goodbye", "--to", "it", "--name", "Italian"]
        )

        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines() == ["[it] Hello", "[it] Goodbye"]
        assert backend.closed

    def test_shared_dotenv_file(self, workdir: Path, backend: FakeBackend) -> None:
        """Keys come from a .env that also holds unrelated variables."""
        (workdir / ".env").write_text(
            "DATABASE_URL=postgres://x\nOPENAI_API_KEY=sk-dotenv\n", encoding="utf-8"
        )

        result = CliRunner().invoke(main.cli, ["text", "Hello", "--to", "it"])

        assert result.exit_code == 0, result.output
        assert result.stdout.splitlines() == ["[it] Hello"]

    def test_requires_api_key(self, workdir: Path, backend: FakeBackend) -> None:
        """Without a key the command fails."""
        result = CliRunner().invoke(main.cli, ["text", "Hello", "--to", "it"])

        assert result.exit_code == 1
        assert "API key is required" in result.output
        assert backend.text_calls == []

    def test_skip_errors(
        self,
        workdir: Path,
        backend: FakeBackend,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Failed strings print as empty lines with --skip-errors."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        backend.failing_languages = {"it"}

        result = CliRunner().invoke(
            main.cli, ["text", "Hello", "--to", "it", "--skip-errors"]
        )

        assert result.exit_code == 0, result.output
        assert result.stdout == "\n"

    def test_invalid_language(
        self,
        workdir: Path,
        backend: FakeBackend,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Malformed language codes are rejected."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

        result = CliRunner().invoke(main.cli, ["text", "Hello", "--to", "italian"])

        assert result.exit_code == 1
        assert "Language code" in result.output


def test_version() -> None:
    """--version prints the package version."""
    result = CliRunner().invoke(main.cli, ["--version"])
    assert __version__ in result.output
