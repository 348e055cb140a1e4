from __future__ import annotations
import time
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Optional

from tenacity import (
    Retrying,
    stop_after_attempt,
    wait_exponential_jitter,
    retry_if_exception,
)

MAX_ATTEMPTS = 3

# Lock contention on SQLite, dropped or slow Postgres connections.
TRANSIENT_MARKERS = (
    "database is locked",
    "database is busy",
    "timeout",
    "timed out",
    "could not connect",
    "server closed the connection",
    "connection refused",
)


@dataclass
class SafeResult:
    ok: bool
    request_id: str
    value: Any = None
    error_user: Optional[str] = None
    error_debug: Optional[str] = None
    latency_ms: Optional[int] = None
    retry_count: int = 0


def is_transient_storage_error(e: BaseException) -> bool:
    if isinstance(e, (TimeoutError, ConnectionError)):
        return True
    msg = str(e).lower()
    return any(k in msg for k in TRANSIENT_MARKERS)


def _describe(e: Optional[BaseException]) -> str:
    return f"{type(e).__name__}:{e}" if e is not None else "unknown"


def safe_call(
    logger,
    *,
    user_error: str,
    fn: Callable[[], Any],
    operation: str = "storage",
) -> SafeResult:
    """
    Run one storage operation on a best-effort basis.

    A busy database or a dropped connection is retried up to MAX_ATTEMPTS
    times. Anything else (malformed stored data, missing driver) fails on
    the first attempt. Errors are logged and handed back in the result;
    the saved-poem list is never worth crashing the page for.
    """
    request_id = str(uuid.uuid4())[:8]
    start = time.monotonic()
    attempts = 0

    retrying = Retrying(
        reraise=True,
        stop=stop_after_attempt(MAX_ATTEMPTS),
        wait=wait_exponential_jitter(initial=0.5, max=3.0),
        retry=retry_if_exception(is_transient_storage_error),
        before_sleep=lambda state: logger.warning(
            f"request_id={request_id} op={operation} storage_busy "
            f"attempt={state.attempt_number} err={_describe(state.outcome.exception())}"
        ),
    )

    try:
        for attempt in retrying:
            with attempt:
                attempts = attempt.retry_state.attempt_number
                value = fn()
    except Exception as e:
        latency = int((time.monotonic() - start) * 1000)
        logger.error(
            f"request_id={request_id} op={operation} storage_failed "
            f"attempts={attempts} latency_ms={latency} err={_describe(e)}"
        )
        return SafeResult(
            ok=False,
            request_id=request_id,
            error_user=user_error,
            error_debug=f"{type(e).__name__}: {e}",
            latency_ms=latency,
            retry_count=max(0, attempts - 1),
        )

    latency = int((time.monotonic() - start) * 1000)
    logger.debug(f"request_id={request_id} op={operation} storage_ok latency_ms={latency}")
    return SafeResult(
        ok=True,
        request_id=request_id,
        value=value,
        latency_ms=latency,
        retry_count=attempts - 1,
    )
