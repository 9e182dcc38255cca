from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

import requests

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Statuses worth a second attempt; every other non-2xx is the caller's fault.
RETRYABLE_STATUSES = frozenset({408, 429})


class UpstreamError(RuntimeError):
    """Base class for failed calls to the Kakao Local API."""


class TransientUpstreamError(UpstreamError):
    """Network trouble or a server-side status. Safe to retry."""


class TerminalUpstreamError(UpstreamError):
    """Client error or an unreadable body. Retrying will not help."""


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 2
    delay_seconds: float = 2.0


DEFAULT_RETRY_POLICY = RetryPolicy()


def call_with_retry(
    func: Callable[[], T],
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Run ``func`` until it succeeds or the policy is exhausted.

    Only ``TransientUpstreamError`` triggers another attempt, after a fixed
    delay. Terminal errors and the last transient error are re-raised.
    """
    attempts = max(1, policy.max_attempts)
    attempt = 1
    while True:
        try:
            return func()
        except TransientUpstreamError as exc:
            if attempt >= attempts:
                raise
            logger.warning(
                "Transient upstream failure (attempt %d/%d): %s; retrying in %.1fs",
                attempt,
                attempts,
                exc,
                policy.delay_seconds,
            )
            sleep(policy.delay_seconds)
            attempt += 1


def fetch_json(
    session: requests.Session,
    url: str,
    params: dict[str, Any],
    headers: dict[str, str],
    timeout: float,
) -> dict[str, Any]:
    """Perform one GET and classify every failure as transient or terminal."""
    try:
        response = session.get(url, params=params, headers=headers, timeout=timeout)
    except (requests.ConnectionError, requests.Timeout, requests.exceptions.ChunkedEncodingError) as exc:
        raise TransientUpstreamError(f"request to {url} failed: {exc}") from exc
    except requests.RequestException as exc:
        # Bad redirects, malformed URLs, undecodable bodies: retrying will not help.
        raise TerminalUpstreamError(f"request to {url} failed: {exc}") from exc

    status = response.status_code
    if status >= 500 or status in RETRYABLE_STATUSES:
        raise TransientUpstreamError(f"{url} answered {status}")
    if not 200 <= status < 300:
        raise TerminalUpstreamError(f"{url} answered {status}")

    try:
        body = response.json()
    except ValueError as exc:
        raise TerminalUpstreamError(f"{url} returned a non-JSON body") from exc
    if not isinstance(body, dict):
        raise TerminalUpstreamError(f"{url} returned an unexpected payload")
    return body
