"""HTTP client with optional exponential backoff retry.

Exchange calls are not retried by default (HTTP_MAX_ATTEMPTS=1). Raising the
limit retries transport-level failures only; HTTP status errors and bad
payloads always surface on the first attempt.
"""

import logging
from typing import Any

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    wait_exponential,
)

logger = logging.getLogger(__name__)

# JSON can be any of these types
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None

DEFAULT_TIMEOUT = 15.0

_max_attempts = 1


def configure_retries(max_attempts: int) -> None:
    """Set the attempt limit for all exchange calls (1 disables retry)."""
    global _max_attempts
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")
    _max_attempts = max_attempts
    logger.debug(f"HTTP max attempts set to {max_attempts}")


def _stop_after_configured_attempts(retry_state: RetryCallState) -> bool:
    return retry_state.attempt_number >= _max_attempts


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(f"HTTP attempt {retry_state.attempt_number} failed, retrying: {exc}")


RETRY_CONFIG = {
    "retry": retry_if_exception_type((httpx.TransportError,)),
    "stop": _stop_after_configured_attempts,
    "wait": wait_exponential(multiplier=1, max=10),
    "before_sleep": _log_retry,
    "reraise": True,
}


@retry(**RETRY_CONFIG)
async def get(
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> JsonValue:
    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await client.get(url, params=params, headers=headers)
        response.raise_for_status()
        return response.json()


@retry(**RETRY_CONFIG)
async def post(
    url: str,
    json: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> JsonValue:
    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await client.post(url, json=json, headers=headers)
        response.raise_for_status()
        return response.json()
