"""Resilient reads of projection documents.

A flaky or stalled connection to the document store must not wedge the
append path. Every read is bounded by a deadline; a read that times out
triggers a best-effort reconnect of the shared store client before the
next attempt, and attempts are separated by a linear backoff.
"""

import asyncio
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings

from ..documents import DocumentReference, DocumentStore
from ..domain.exceptions import ReadTimeout, RetriesExhausted
from ..observability import DEFAULT_OBSERVABILITY, Observability


class ReadRetryPolicy(BaseSettings):
    """Timeout ladder and backoff for projection document reads.

    The values are tunable policy, not correctness requirements: the only
    guarantee is a bounded number of attempts with increasing patience.

    All settings can be configured via environment variables with the
    LEDGERLINE_READ_ prefix. For example:
    - LEDGERLINE_READ_TIMEOUTS='[2, 4, 8]'
    - LEDGERLINE_READ_BACKOFF_BASE=0.25

    Attributes:
        timeouts: Deadline of each attempt in seconds, in attempt order.
            The number of entries is the number of attempts.
        backoff_base: Base delay in seconds. After failed attempt ``n``
            (1-based) the reader sleeps ``n * backoff_base`` before the next
            attempt. There is no sleep after the last attempt.

    Examples:
        >>> policy = ReadRetryPolicy()
        >>> policy.timeouts
        (5.0, 8.0, 12.0)
        >>> fast = ReadRetryPolicy(timeouts=(0.1, 0.2), backoff_base=0.0)
    """

    timeouts: tuple[float, ...] = (5.0, 8.0, 12.0)
    backoff_base: float = 0.5

    model_config = {"env_prefix": "LEDGERLINE_READ_", "frozen": True}

    @field_validator("timeouts")
    @classmethod
    def _validate_timeouts(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        if not value:
            raise ValueError("at least one read timeout is required")
        if any(timeout <= 0 for timeout in value):
            raise ValueError("read timeouts must be positive")
        return value

    @field_validator("backoff_base")
    @classmethod
    def _validate_backoff_base(cls, value: float) -> float:
        if value < 0:
            raise ValueError("backoff_base must not be negative")
        return value

    @property
    def attempts(self) -> int:
        return len(self.timeouts)

    def backoff_delays(self) -> list[float]:
        """Delays slept between consecutive attempts.

        Examples:
            >>> ReadRetryPolicy().backoff_delays()
            [0.5, 1.0]
        """
        return [(attempt + 1) * self.backoff_base for attempt in range(self.attempts - 1)]


async def read_with_timeout(reference: DocumentReference, timeout: float) -> Any:
    """Read a document, giving up once the deadline passes.

    Args:
        reference: Document to read
        timeout: Deadline in seconds

    Returns:
        The stored value, or None if nothing is stored.

    Raises:
        ReadTimeout: If the deadline elapsed before the read completed.
        Exception: Any other error raised by the store, unchanged.
    """
    deadline = asyncio.timeout(timeout)
    try:
        async with deadline:
            snapshot = await reference.get()
    except TimeoutError as err:
        if deadline.expired():
            raise ReadTimeout(reference.path, timeout) from err
        raise
    return snapshot.value()


async def reset_connection(
    store: DocumentStore,
    observability: Observability,
    projection_name: str,
    stream_id: str,
) -> None:
    """Disconnect and reconnect the shared store client.

    Failures are logged and swallowed.
    """
    extra = {"projection_name": projection_name, "stream_id": stream_id}
    observability.logger.warning("Resetting document store connection after timeout", extra=extra)
    try:
        await store.disconnect()
        await store.reconnect()
    except Exception:
        observability.logger.exception("Failed to reset document store connection", extra=extra)


class RetryingReader:
    """Reads projection documents with bounded retries.

    Each attempt races the read against the policy's deadline for that
    attempt. Timeouts reset the store connection before retrying; any other
    failure is retried as is. Once every attempt has failed, the last error
    is raised (or RetriesExhausted if none was captured).

    Attributes:
        store: Store whose connection is reset after timeouts
        policy: Timeout ladder and backoff
        observability: Logger and tracer

    Examples:
        >>> reader = RetryingReader(store, ReadRetryPolicy(timeouts=(1.0, 2.0)))
        >>> document = await reader.read(
        ...     store.ref("projections/cart/cart-1"),
        ...     projection_name="cart",
        ...     stream_id="cart-1",
        ... )
    """

    def __init__(
        self,
        store: DocumentStore,
        policy: ReadRetryPolicy | None = None,
        observability: Observability | None = None,
    ):
        self.store = store
        self.policy = policy or ReadRetryPolicy()
        self.observability = observability or DEFAULT_OBSERVABILITY

    async def read(
        self,
        reference: DocumentReference,
        *,
        projection_name: str,
        stream_id: str,
    ) -> Any:
        """Read the current document at a reference.

        Args:
            reference: Document to read
            projection_name: Projection being read, for diagnostics
            stream_id: Stream being read, for diagnostics

        Returns:
            The stored value, or None if nothing is stored.

        Raises:
            Exception: The last read error once all attempts have failed.
            RetriesExhausted: If attempts failed without a captured error.
        """
        logger = self.observability.logger
        last_error: Exception | None = None
        delays = self.policy.backoff_delays()

        for attempt, timeout in enumerate(self.policy.timeouts):
            try:
                return await read_with_timeout(reference, timeout)
            except Exception as err:
                last_error = err
                logger.warning(
                    "Document read failed, retrying",
                    extra={
                        "projection_name": projection_name,
                        "stream_id": stream_id,
                        "attempt": attempt + 1,
                        "timeout": timeout,
                        "error_type": type(err).__name__,
                    },
                )
                if isinstance(err, ReadTimeout):
                    await reset_connection(self.store, self.observability, projection_name, stream_id)
                if attempt < len(delays):
                    await asyncio.sleep(delays[attempt])

        logger.error(
            "Document read failed after retries",
            extra={
                "projection_name": projection_name,
                "stream_id": stream_id,
                "attempts": self.policy.attempts,
            },
        )
        if last_error is not None:
            raise last_error
        raise RetriesExhausted(reference.path, self.policy.attempts)
