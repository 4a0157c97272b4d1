"""HTTP client abstraction for the release index and installer scripts.

This module provides:
- RetryPolicy: explicit, tunable retry policy for transient failures
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import json
import ssl
import time
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, cast, runtime_checkable

from dotsetup import __version__
from dotsetup.core.result import Err, Ok, Result
from dotsetup.core.structured import as_str_dict

if TYPE_CHECKING:
    from collections.abc import Callable


__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    "RetryPolicy",
    "with_retry",
]

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    @property
    def is_transient(self) -> bool:
        """Network errors, throttling and server errors may succeed on retry."""
        return self.status == 0 or self.status == 429 or self.status >= 500

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Retry policy for transient HTTP failures.

    Attributes:
        max_retries: Retries after the first attempt
        backoff: Base delay in seconds; attempt n waits backoff * 2**n
    """

    max_retries: int = 3
    backoff: float = 1.0

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay(self, attempt: int) -> float:
        """Seconds to wait after the given (0-based) failed attempt."""
        return self.backoff * (2**attempt)

    def should_retry(self, error: HttpError, attempt: int) -> bool:
        return error.is_transient and attempt < self.max_retries


def with_retry(
    operation: Callable[[], Result[T, HttpError]],
    policy: RetryPolicy,
    *,
    sleep: Callable[[float], None] = time.sleep,
    on_retry: Callable[[int, HttpError], None] | None = None,
) -> Result[T, HttpError]:
    """Run operation, retrying transient failures according to policy.

    A well-formed 4xx answer (e.g. 404) is returned immediately.

    Args:
        operation: Zero-argument callable performing one attempt
        policy: Retry policy
        sleep: Sleep function (injectable for tests)
        on_retry: Called with (attempt number starting at 1, error) before each retry

    Returns:
        The first Ok, or the last Err
    """
    attempt = 0
    while True:
        result = operation()
        if isinstance(result, Ok):
            return result
        if not policy.should_retry(result.error, attempt):
            return result
        if on_retry is not None:
            on_retry(attempt + 1, result.error)
        sleep(policy.delay(attempt))
        attempt += 1


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    Allows injecting mock clients in tests, so unit tests never hit the
    network.
    """

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        """Fetch URL and parse as a JSON object."""
        ...

    def download(self, url: str, dest: Path) -> Result[Path, HttpError]:
        """Download URL to file."""
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Every request goes through with_retry() using the configured policy.
    """

    def __init__(
        self,
        *,
        retry: RetryPolicy = RetryPolicy(),
        timeout: float = 30.0,
        user_agent: str = f"dotsetup/{__version__}",
        on_retry: Callable[[int, HttpError], None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.retry = retry
        self.timeout = timeout
        self.user_agent = user_agent
        self._on_retry = on_retry
        self._sleep = sleep
        self._ssl_context = ssl.create_default_context()

    def _request_once(self, url: str) -> Result[bytes, HttpError]:
        try:
            req = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def _request(self, url: str) -> Result[bytes, HttpError]:
        return with_retry(
            lambda: self._request_once(url),
            self.retry,
            sleep=self._sleep,
            on_retry=self._on_retry,
        )

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        """Fetch URL and parse as a JSON object."""
        result = self._request(url)
        if isinstance(result, Err):
            return result

        try:
            data_obj: object = json.loads(result.value.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))

        data = as_str_dict(data_obj)
        if data is None:
            return Err(HttpError(url=url, status=0, message="Expected JSON object"))
        return Ok(cast(dict[str, Any], data))

    def download(self, url: str, dest: Path) -> Result[Path, HttpError]:
        """Download URL to dest (parent directories are created)."""
        result = self._request(url)
        if isinstance(result, Err):
            return result

        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_bytes(result.value)
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=f"Cannot write {dest}: {e}"))
        return Ok(dest)


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_json(INDEX_URL, {"releases-index": [{"channel-version": "8.0"}]})
        result = client.get_json(INDEX_URL)
    """

    def __init__(self) -> None:
        self._json_responses: dict[str, dict[str, Any] | HttpError] = {}
        self._download_responses: dict[str, bytes | HttpError] = {}
        self.calls: list[tuple[str, str]] = []

    def set_json(self, url: str, response: dict[str, Any] | HttpError) -> None:
        self._json_responses[url] = response

    def set_download(self, url: str, response: bytes | HttpError) -> None:
        self._download_responses[url] = response

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        self.calls.append(("get_json", url))

        if url not in self._json_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._json_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def download(self, url: str, dest: Path) -> Result[Path, HttpError]:
        self.calls.append(("download", url))

        if url not in self._download_responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._download_responses[url]
        if isinstance(response, HttpError):
            return Err(response)

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(response)
        return Ok(dest)
