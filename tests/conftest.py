"""Shared fixtures for locale translation tests."""

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from locale_translate.config.schema import TranslationConfig
from locale_translate.observability.metrics import TranslationMetrics


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def reset_metrics() -> Iterator[None]:
    """Give every test a fresh metrics singleton."""
    TranslationMetrics.reset()
    yield
    TranslationMetrics.reset()


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    """Write the sample English locale file into a temp directory."""
    path = tmp_path / "config" / "locales" / "en.yml"
    path.parent.mkdir(parents=True)
    path.write_text(
        (FIXTURES_DIR / "locales" / "en.yml").read_text(encoding="utf-8"),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def make_config(
    tmp_path: Path, source_file: Path
) -> Callable[..., TranslationConfig]:
    """Build a valid configuration pointing at the temp source file."""

    def _make(**overrides: Any) -> TranslationConfig:
        values: dict[str, Any] = {
            "provider": "openai",
            "openai_api_key": "sk-test",
            "source_language": "en",
            "target_languages": [
                {"code": "it", "name": "Italian"},
                {"code": "fr", "name": "French"},
            ],
            "input_file": source_file,
            "output_folder": tmp_path / "out",
            "create_backup": False,
        }
        values.update(overrides)
        return TranslationConfig.model_validate(values)

    return _make
