"""Unit tests for the HTTP provider pipeline using a mock transport."""

import json
import random
import threading
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import ClassVar

import httpx
import pytest

from locale_translate.errors import (
    ApiError,
    RateLimitError,
    TranslationError,
    ValidationError,
)
from locale_translate.observability.metrics import TranslationMetrics
from locale_translate.providers import base as base_module
from locale_translate.providers.base import ProviderOptions, classify_response
from locale_translate.providers.openai_provider import OpenAIProvider


Handler = Callable[[httpx.Request], httpx.Response]


def _completion(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


def _make_provider(
    handler: Handler,
    sleeps: list[float] | None = None,
    **options: object,
) -> OpenAIProvider:
    values: dict[str, object] = {"api_key": "sk-test", "rate_limit_delay": 0}
    values.update(options)
    return OpenAIProvider(
        ProviderOptions(**values),  # type: ignore[arg-type]
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        sleep=(sleeps.append if sleeps is not None else lambda _: None),
        rng=random.Random(7),
    )


class _Scripted:
    """Handler returning scripted responses and recording requests."""

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self.responses) > 1:
            response = self.responses.pop(0)
        else:
            response = self.responses[0]
        if isinstance(response, Exception):
            raise response
        return httpx.Response(
            response.status_code, headers=response.headers, content=response.content
        )


class TestTranslateText:
    """Tests for single-string translation."""

    def test_success(self) -> None:
        """The generated text is returned."""
        handler = _Scripted(_completion("Ciao"))
        provider = _make_provider(handler)

        assert provider.translate_text("Hello", "it", "Italian") == "Ciao"

        request = handler.requests[0]
        body = json.loads(request.content)
        assert request.headers["Authorization"] == "Bearer sk-test"
        assert body["model"] == "gpt-4o-mini"
        assert body["messages"][1]["content"] == "Hello"
        assert "Italian" in body["messages"][0]["content"]

    def test_translation_context_in_prompt(self) -> None:
        """Domain context is injected into the system instruction."""
        handler = _Scripted(_completion("Fattura"))
        provider = _make_provider(handler, translation_context="medical billing")
        provider.translate_text("Invoice", "it", "Italian")

        body = json.loads(handler.requests[0].content)
        assert "medical billing" in body["messages"][0]["content"]

    def test_cache_hit_skips_request(self) -> None:
        """A repeated string is served from the cache."""
        handler = _Scripted(_completion("Ciao"))
        provider = _make_provider(handler)

        provider.translate_text("Hello", "it", "Italian")
        provider.translate_text("Hello", "it", "Italian")

        assert len(handler.requests) == 1
        metrics = TranslationMetrics.get_instance()
        assert metrics.cache_hits_total == 1
        assert metrics.api_calls_total == 1

    def test_cache_disabled_always_requests(self) -> None:
        """With caching off every call reaches the backend."""
        handler = _Scripted(_completion("Ciao"))
        provider = _make_provider(handler, cache_enabled=False)

        provider.translate_text("Hello", "it", "Italian")
        provider.translate_text("Hello", "it", "Italian")

        assert len(handler.requests) == 2
        assert provider.cache.size == 0

    def test_invalid_input_makes_no_request(self) -> None:
        """Validation happens before any network activity."""
        handler = _Scripted(_completion("Ciao"))
        provider = _make_provider(handler)

        with pytest.raises(ValidationError):
            provider.translate_text("   ", "it", "Italian")
        with pytest.raises(ValidationError):
            provider.translate_text("Hello", "italian", "Italian")
        assert handler.requests == []

    def test_variables_are_protected(self) -> None:
        """Placeholders are sent as tokens and restored in the result."""
        handler = _Scripted(_completion("Ciao __VAR_0__"))
        provider = _make_provider(handler)

        assert provider.translate_text("Hello %{name}", "it", "Italian") == (
            "Ciao %{name}"
        )
        body = json.loads(handler.requests[0].content)
        assert body["messages"][1]["content"] == "Hello __VAR_0__"

    def test_lost_variable_raises_validation_error(self) -> None:
        """A translation missing a placeholder is rejected."""
        provider = _make_provider(_Scripted(_completion("Ciao")))
        with pytest.raises(ValidationError, match="Missing variables"):
            provider.translate_text("Hello %{name}", "it", "Italian")

    def test_empty_response_raises_translation_error(self) -> None:
        """A response without text is a terminal failure."""
        provider = _make_provider(
            _Scripted(httpx.Response(200, json={"choices": []}))
        )
        with pytest.raises(TranslationError, match="No translation"):
            provider.translate_text("Hello", "it", "Italian")


class TestRetry:
    """Tests for the bounded retry loop."""

    def test_two_server_errors_then_success(self) -> None:
        """Backoff sleeps at least base*1 + base*2 before succeeding."""
        handler = _Scripted(
            httpx.Response(503, text="unavailable"),
            httpx.Response(503, text="unavailable"),
            _completion("Ciao"),
        )
        sleeps: list[float] = []
        provider = _make_provider(handler, sleeps, retry_delay=2.0)

        assert provider.translate_text("Hello", "it", "Italian") == "Ciao"

        assert len(handler.requests) == 3
        assert len(sleeps) == 2
        assert 2.0 <= sleeps[0] < 2.6
        assert 4.0 <= sleeps[1] < 5.2
        assert sum(sleeps) >= 6.0
        assert TranslationMetrics.get_instance().retries_total == 2

    def test_rate_limit_exhausts_attempts(self) -> None:
        """Persistent 429s end in a TranslationError wrapping RateLimitError."""
        handler = _Scripted(httpx.Response(429, text="slow down"))
        sleeps: list[float] = []
        provider = _make_provider(handler, sleeps, max_retries=3)

        with pytest.raises(TranslationError) as exc_info:
            provider.translate_text("Hello", "it", "Italian")

        assert len(handler.requests) == 3
        assert len(sleeps) == 2
        error = exc_info.value
        assert isinstance(error.original_error, RateLimitError)
        assert error.context["text"] == "Hello"
        assert error.context["target_language"] == "it"

    def test_client_error_not_retried(self) -> None:
        """A 400 fails on the first attempt."""
        handler = _Scripted(httpx.Response(400, text="bad request"))
        sleeps: list[float] = []
        provider = _make_provider(handler, sleeps)

        with pytest.raises(TranslationError) as exc_info:
            provider.translate_text("Hello", "it", "Italian")

        assert len(handler.requests) == 1
        assert sleeps == []
        original = exc_info.value.original_error
        assert isinstance(original, ApiError)
        assert original.status_code == 400

    def test_timeout_is_retried(self) -> None:
        """Transport timeouts count as transient failures."""
        handler = _Scripted(httpx.ReadTimeout("timed out"), _completion("Ciao"))
        sleeps: list[float] = []
        provider = _make_provider(handler, sleeps)

        assert provider.translate_text("Hello", "it", "Italian") == "Ciao"
        assert len(sleeps) == 1

    def test_connection_error_exhausts_attempts(self) -> None:
        """Connection failures are retried then surface as TranslationError."""
        handler = _Scripted(httpx.ConnectError("refused"))
        provider = _make_provider(handler, max_retries=2)

        with pytest.raises(TranslationError, match="request failed"):
            provider.translate_text("Hello", "it", "Italian")
        assert len(handler.requests) == 2


class TestTranslateBatch:
    """Tests for batch translation."""

    def test_returns_in_order(self) -> None:
        """Outputs correspond positionally to inputs."""
        handler = _Scripted(_completion('["Uno", "Due", "Tre"]'))
        provider = _make_provider(handler)

        result = provider.translate_batch(["One", "Two", "Three"], "it", "Italian")

        assert result == ["Uno", "Due", "Tre"]
        body = json.loads(handler.requests[0].content)
        assert json.loads(body["messages"][1]["content"]) == ["One", "Two", "Three"]

    def test_empty_input(self) -> None:
        """An empty batch makes no request."""
        handler = _Scripted(_completion("[]"))
        provider = _make_provider(handler)
        assert provider.translate_batch([], "it", "Italian") == []
        assert handler.requests == []

    def test_cached_items_not_resent(self) -> None:
        """Only cache misses are sent to the backend."""
        handler = _Scripted(_completion('["Due"]'))
        provider = _make_provider(handler)
        provider.cache.set("One", "it", "Uno")

        result = provider.translate_batch(["One", "Two"], "it", "Italian")

        assert result == ["Uno", "Due"]
        body = json.loads(handler.requests[0].content)
        assert json.loads(body["messages"][1]["content"]) == ["Two"]
        assert provider.cache.get("Two", "it") == "Due"

    def test_fully_cached_batch_makes_no_request(self) -> None:
        """A batch answered entirely from cache skips the network."""
        handler = _Scripted(_completion("[]"))
        provider = _make_provider(handler)
        provider.cache.set("One", "it", "Uno")

        assert provider.translate_batch(["One"], "it", "Italian") == ["Uno"]
        assert handler.requests == []

    def test_length_mismatch_raises(self) -> None:
        """A short response fails the whole batch."""
        provider = _make_provider(_Scripted(_completion('["Uno"]')))
        with pytest.raises(TranslationError, match="1 translations for 2 inputs"):
            provider.translate_batch(["One", "Two"], "it", "Italian")

    def test_unparseable_response_raises(self) -> None:
        """Non-JSON output fails the batch."""
        provider = _make_provider(_Scripted(_completion("Sorry, no.")))
        with pytest.raises(TranslationError, match="parse"):
            provider.translate_batch(["One"], "it", "Italian")

    def test_batch_variables_restored(self) -> None:
        """Placeholders are protected per item."""
        provider = _make_provider(_Scripted(_completion('["Ciao __VAR_0__"]')))
        assert provider.translate_batch(["Hi {{user}}"], "it", "Italian") == [
            "Ciao {{user}}"
        ]


class TestClassifyResponse:
    """Tests for response classification."""

    @pytest.mark.parametrize("status", [200, 201, 204])
    def test_success(self, status: int) -> None:
        """2xx responses pass."""
        classify_response(httpx.Response(status))

    def test_rate_limit(self) -> None:
        """429 raises a retryable RateLimitError."""
        with pytest.raises(RateLimitError) as exc_info:
            classify_response(httpx.Response(429))
        assert exc_info.value.retryable
        assert exc_info.value.status_code == 429

    @pytest.mark.parametrize("status", [400, 401, 403, 404])
    def test_client_errors(self, status: int) -> None:
        """Other 4xx are not retryable."""
        with pytest.raises(ApiError) as exc_info:
            classify_response(httpx.Response(status))
        assert not exc_info.value.retryable
        assert exc_info.value.status_code == status

    @pytest.mark.parametrize("status", [500, 502, 503])
    def test_server_errors(self, status: int) -> None:
        """5xx are retryable."""
        with pytest.raises(ApiError) as exc_info:
            classify_response(httpx.Response(status))
        assert exc_info.value.retryable


class _CountingClient:
    """Stand-in for httpx.Client that records construction and closing."""

    created: ClassVar[list["_CountingClient"]] = []

    def __init__(self, **_: object) -> None:
        time.sleep(0.01)
        self.closed = False
        _CountingClient.created.append(self)

    def close(self) -> None:
        self.closed = True


class TestHttpClientLifecycle:
    """Tests for lazy HTTP client creation and closing."""

    def test_concurrent_access_creates_one_client(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Threads racing on first use share a single client."""
        _CountingClient.created = []
        monkeypatch.setattr(base_module.httpx, "Client", _CountingClient)
        provider = OpenAIProvider(ProviderOptions(api_key="sk-test"))
        barrier = threading.Barrier(8)

        def _grab(_: int) -> object:
            barrier.wait()
            return provider.http_client

        with ThreadPoolExecutor(max_workers=8) as executor:
            clients = list(executor.map(_grab, range(8)))

        assert len(_CountingClient.created) == 1
        assert all(client is clients[0] for client in clients)

        provider.close()
        assert _CountingClient.created[0].closed
