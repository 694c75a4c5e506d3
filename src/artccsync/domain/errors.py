"""Error kinds raised while reconciling local state with external sources."""

from __future__ import annotations


class ReconciliationError(RuntimeError):
    """Base class for reconciliation failures."""


class ExternalServiceError(ReconciliationError):
    """An external API was unreachable or answered with a non-success status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitedError(ExternalServiceError):
    """The external API refused the call because of its rate limit."""


class RecordFormatError(ValueError):
    """A single external record could not be interpreted."""


class OperatingInitialsExhaustedError(ReconciliationError):
    """Every two-letter combination is already assigned."""
