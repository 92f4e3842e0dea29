"""Base class for HTTP-based translation providers."""

import random
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, ClassVar

import httpx
import structlog

from locale_translate.cache.lru import DEFAULT_CAPACITY, TranslationCache
from locale_translate.errors import (
    ApiError,
    RateLimitError,
    TranslationError,
)
from locale_translate.observability.metrics import TranslationMetrics
from locale_translate.providers.json_utils import (
    parse_string_array,
    strip_markdown_fences,
)
from locale_translate.providers.prompts import (
    build_batch_prompt,
    build_system_instruction,
)
from locale_translate.providers.rate_limiter import (
    DEFAULT_DELAY,
    IntervalRateLimiter,
    RateLimiterProtocol,
)
from locale_translate.providers.retry import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_RETRIES,
    RetryPolicy,
)
from locale_translate.providers.validation import (
    validate_language_code,
    validate_text,
)
from locale_translate.providers.variables import VariableExtractor


logger = structlog.get_logger()

DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_CONNECT_TIMEOUT = 10.0

_BODY_PREVIEW_LENGTH = 200


@dataclass(frozen=True)
class ProviderOptions:
    """Settings shared by every HTTP provider.

    Attributes:
        api_key: Vendor API key.
        source_language: Language the source strings are written in.
        model: Vendor model identifier; the provider default when None.
        translation_context: Optional domain context injected into prompts.
        preserve_variables: Whether interpolation variables are protected.
        cache_enabled: Whether translations are cached in memory.
        cache_size: LRU capacity.
        cache_ttl: Cache time to live in seconds, None for no expiry.
        rate_limit_delay: Minimum seconds between request starts.
        max_retries: Total attempts per request.
        retry_delay: Base backoff delay in seconds.
        request_timeout: Per-request timeout in seconds.
        connect_timeout: Connection-open timeout in seconds.
    """

    api_key: str
    source_language: str = "en"
    model: str | None = None
    translation_context: str | None = None
    preserve_variables: bool = True
    cache_enabled: bool = True
    cache_size: int = DEFAULT_CAPACITY
    cache_ttl: float | None = None
    rate_limit_delay: float = DEFAULT_DELAY
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = DEFAULT_BASE_DELAY
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT


@dataclass(frozen=True)
class HttpRequest:
    """A vendor-specific request ready to be posted."""

    url: str
    headers: dict[str, str]
    body: dict[str, Any]


class BaseHttpProvider(ABC):
    """Common machinery for HTTP translation backends.

    Every call goes through: input validation, cache lookup, rate-limiter
    wait, HTTP request with bounded retries, response classification and
    cache store. Subclasses only describe the vendor request and response
    shapes.
    """

    name: ClassVar[str] = "base"
    display_name: ClassVar[str] = "Base"
    default_model: ClassVar[str] = ""

    def __init__(  # noqa: PLR0913
        self,
        options: ProviderOptions,
        *,
        cache: TranslationCache | None = None,
        rate_limiter: RateLimiterProtocol | None = None,
        http_client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            options: Provider settings.
            cache: Shared cache; one is created from options when omitted.
            rate_limiter: Shared limiter; one is created when omitted.
            http_client: Preconfigured HTTP client (tests inject a mock
                transport here).
            sleep: Sleep function used for retry backoff.
            rng: Random source for backoff jitter.
        """
        self.options = options
        self.model = options.model or self.default_model
        self.cache = cache or TranslationCache(
            capacity=options.cache_size, ttl=options.cache_ttl
        )
        self.rate_limiter = rate_limiter or IntervalRateLimiter(
            delay=options.rate_limit_delay
        )
        self.retry_policy = RetryPolicy(
            max_attempts=options.max_retries, base_delay=options.retry_delay
        )
        self._http_client = http_client
        self._client_lock = threading.Lock()
        self._sleep = sleep
        self._rng = rng
        self._metrics = TranslationMetrics.get_instance()
        self._log = logger.bind(component="provider", subcomponent=self.name)

    @property
    def http_client(self) -> httpx.Client:
        """Get or lazily create the HTTP client, once across threads."""
        with self._client_lock:
            if self._http_client is None:
                self._http_client = httpx.Client(
                    timeout=httpx.Timeout(
                        self.options.request_timeout,
                        connect=self.options.connect_timeout,
                    )
                )
            return self._http_client

    def close(self) -> None:
        """Close the underlying HTTP client."""
        with self._client_lock:
            if self._http_client is not None:
                self._http_client.close()
                self._http_client = None

    def __enter__(self) -> "BaseHttpProvider":
        """Enter context manager."""
        return self

    def __exit__(self, *args: object) -> None:
        """Exit context manager and close the HTTP client."""
        self.close()

    def translate_text(
        self, text: str, target_lang_code: str, target_lang_name: str
    ) -> str:
        """Translate a single string.

        Args:
            text: Source text.
            target_lang_code: Target language code.
            target_lang_name: Target language display name.

        Returns:
            Translated text.

        Raises:
            ValidationError: If text or language code is malformed, or if
                the translation lost interpolation variables.
            TranslationError: If the backend call fails terminally.
        """
        validate_text(text)
        validate_language_code(target_lang_code)

        cached = self._cache_get(text, target_lang_code)
        if cached is not None:
            return cached

        extractor = self._extractor(text)
        prepared = extractor.extract() if extractor else text
        system_instruction = build_system_instruction(
            self.options.source_language,
            target_lang_name,
            self.options.translation_context,
        )

        try:
            raw = self.generate(system_instruction, prepared)
        except ApiError as exc:
            msg = f"Failed to translate text with {self.display_name}: {exc}"
            raise TranslationError(
                msg,
                {
                    "text": text,
                    "target_language": target_lang_code,
                    "original_error": exc,
                },
            ) from exc

        translation = strip_markdown_fences(raw)
        if extractor:
            translation = extractor.restore(translation)

        self._cache_set(text, target_lang_code, translation)
        return translation

    def translate_batch(
        self, texts: list[str], target_lang_code: str, target_lang_name: str
    ) -> list[str]:
        """Translate several strings in one request, preserving order.

        Cached strings are answered locally; only the misses are sent.

        Args:
            texts: Source texts.
            target_lang_code: Target language code.
            target_lang_name: Target language display name.

        Returns:
            Translations in input order.

        Raises:
            ValidationError: If any text or the language code is malformed.
            TranslationError: If the call fails or the response does not
                contain one translation per input.
        """
        if not texts:
            return []
        for text in texts:
            validate_text(text)
        validate_language_code(target_lang_code)

        results: list[str | None] = [
            self._cache_get(text, target_lang_code) for text in texts
        ]
        pending = [i for i, value in enumerate(results) if value is None]
        if not pending:
            return [str(value) for value in results]

        extractors = [self._extractor(texts[i]) for i in pending]
        prepared = [
            extractor.extract() if extractor else texts[i]
            for i, extractor in zip(pending, extractors, strict=True)
        ]
        system_instruction = build_system_instruction(
            self.options.source_language,
            target_lang_name,
            self.options.translation_context,
            batch=True,
        )

        pending_texts = [texts[i] for i in pending]
        try:
            raw = self.generate(system_instruction, build_batch_prompt(prepared))
        except ApiError as exc:
            msg = f"Failed to translate batch with {self.display_name}: {exc}"
            raise TranslationError(
                msg,
                {
                    "text": pending_texts[0],
                    "batch_size": len(pending_texts),
                    "target_language": target_lang_code,
                    "original_error": exc,
                },
            ) from exc

        translations = parse_string_array(raw)
        if translations is None:
            msg = f"Failed to parse {self.display_name} batch response"
            raise TranslationError(
                msg,
                {
                    "target_language": target_lang_code,
                    "body": raw[:_BODY_PREVIEW_LENGTH],
                },
            )
        if len(translations) != len(pending):
            msg = (
                f"{self.display_name} returned {len(translations)} translations "
                f"for {len(pending)} inputs"
            )
            raise TranslationError(
                msg,
                {
                    "target_language": target_lang_code,
                    "expected": len(pending),
                    "received": len(translations),
                },
            )

        for index, extractor, translation in zip(
            pending, extractors, translations, strict=True
        ):
            value = translation.strip()
            if extractor:
                value = extractor.restore(value)
            self._cache_set(texts[index], target_lang_code, value)
            results[index] = value

        return [str(value) for value in results]

    def generate(self, system_instruction: str, prompt: str) -> str:
        """Send one prompt to the vendor and return the generated text.

        Args:
            system_instruction: System-level instruction.
            prompt: User prompt.

        Returns:
            Generated text.

        Raises:
            ApiError: If the request fails after all retries.
            TranslationError: If the response body cannot be interpreted.
        """
        request = self.build_request(system_instruction, prompt)
        response = self._post_with_retry(request)
        try:
            payload = response.json()
        except ValueError as exc:
            msg = f"Failed to parse {self.display_name} response"
            raise TranslationError(
                msg, {"body": response.text[:_BODY_PREVIEW_LENGTH], "error": str(exc)}
            ) from exc

        text = self.extract_text(payload)
        if not text or not text.strip():
            msg = f"No translation in {self.display_name} response"
            raise TranslationError(msg, {"body": response.text[:_BODY_PREVIEW_LENGTH]})
        return text.strip()

    @abstractmethod
    def build_request(self, system_instruction: str, prompt: str) -> HttpRequest:
        """Build the vendor request for a prompt."""

    @abstractmethod
    def extract_text(self, payload: dict[str, Any]) -> str | None:
        """Pull the generated text out of a decoded response body."""

    def _post_with_retry(self, request: HttpRequest) -> httpx.Response:
        """Execute the retry loop for a request.

        Returns:
            Successful HTTP response.

        Raises:
            ApiError: If the request fails after all retries, or at once
                for non-retryable failures.
        """
        policy = self.retry_policy
        last_error: ApiError | None = None

        for attempt in range(1, policy.max_attempts + 1):
            try:
                return self._send(request)
            except ApiError as exc:
                last_error = exc
                if not policy.should_retry(exc, attempt):
                    raise

                delay = policy.next_delay(attempt, self._rng)
                self._log.warning(
                    "provider_retryable_error",
                    status=exc.status_code,
                    error_type=type(exc).__name__,
                    attempt=attempt,
                    max_attempts=policy.max_attempts,
                    retry_delay=round(delay, 2),
                )
                self._metrics.record_retry()
                self._sleep(delay)

        raise last_error or ApiError("All retries exhausted")

    def _send(self, request: HttpRequest) -> httpx.Response:
        """Send a single rate-limited HTTP request.

        Raises:
            ApiError: On transport errors or non-2xx responses.
        """
        self.rate_limiter.wait()
        self.rate_limiter.record_request()
        self._metrics.record_api_call()

        try:
            response = self.http_client.post(
                request.url, headers=request.headers, json=request.body
            )
        except httpx.TimeoutException as exc:
            msg = f"{self.display_name} request timed out: {exc}"
            raise ApiError(msg, retryable=True) from exc
        except httpx.TransportError as exc:
            msg = f"{self.display_name} request failed: {exc}"
            raise ApiError(msg, retryable=True) from exc

        classify_response(response)
        return response

    def _extractor(self, text: str) -> VariableExtractor | None:
        if not self.options.preserve_variables:
            return None
        return VariableExtractor(text)

    def _cache_get(self, text: str, target_lang_code: str) -> str | None:
        if not self.options.cache_enabled:
            return None
        cached = self.cache.get(text, target_lang_code)
        self._metrics.record_cache_lookup(hit=cached is not None)
        return cached

    def _cache_set(self, text: str, target_lang_code: str, value: str) -> None:
        if self.options.cache_enabled:
            self.cache.set(text, target_lang_code, value)


def classify_response(response: httpx.Response) -> None:
    """Raise the error matching a non-2xx response.

    Args:
        response: HTTP response to classify.

    Raises:
        RateLimitError: On 429.
        ApiError: On other 4xx (non-retryable), 5xx (retryable) or any
            other unexpected status.
    """
    status = response.status_code
    if HTTPStatus.OK <= status < HTTPStatus.MULTIPLE_CHOICES:
        return

    context = {"status": status, "body": response.text[:_BODY_PREVIEW_LENGTH]}
    if status == HTTPStatus.TOO_MANY_REQUESTS:
        msg = "Rate limit exceeded"
        raise RateLimitError(msg, context)
    if HTTPStatus.BAD_REQUEST <= status < HTTPStatus.INTERNAL_SERVER_ERROR:
        msg = f"Client error: {status}"
        raise ApiError(msg, status_code=status, context=context)
    if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
        msg = f"Server error: {status}"
        raise ApiError(msg, status_code=status, context=context, retryable=True)

    msg = f"Unexpected status: {status}"
    raise ApiError(msg, status_code=status, context=context)

