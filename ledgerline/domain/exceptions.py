"""Exceptions raised by event stores and the projection read path."""


class ConcurrencyError(Exception):
    """Raised when an optimistic concurrency check fails.

    This exception indicates that another writer appended to the stream
    between when its version was read and when new events were appended.
    """

    pass


class ProjectionReadError(Exception):
    """Base class for failures while fetching a projection document."""

    pass


class ReadTimeout(ProjectionReadError):
    """A single document read did not complete before its deadline.

    Attributes:
        path: Document path that was being read
        timeout: Deadline of the attempt, in seconds
    """

    def __init__(self, path: str, timeout: float):
        super().__init__(f"Document read of {path!r} timed out after {timeout}s")
        self.path = path
        self.timeout = timeout


class RetriesExhausted(ProjectionReadError):
    """Every read attempt failed and no underlying error was captured."""

    def __init__(self, path: str, attempts: int):
        super().__init__(f"Document read of {path!r} failed after {attempts} attempts")
        self.path = path
        self.attempts = attempts
