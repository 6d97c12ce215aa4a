# =============================================================================
# Exception Taxonomy
# =============================================================================
#
#   FibcalcError
#   ├── IndexTooHighError            : validation, surfaced as HTTP 422
#   └── BackingStoreUnavailableError : startup probe exhausted, fatal
#
# Request-time failures from Postgres or Redis are NOT wrapped: the driver
# exception propagates and the API's global handler turns it into a 500.
# =============================================================================

from __future__ import annotations


class FibcalcError(Exception):
    """Base class for errors raised by this package."""


class IndexTooHighError(FibcalcError):
    """The submitted index is above the admission limit."""

    reason = "Index too high"

    def __init__(self, index: int, limit: int) -> None:
        self.index = index
        self.limit = limit
        super().__init__(f"Index {index} exceeds the maximum of {limit}")


class BackingStoreUnavailableError(FibcalcError):
    """A backing store did not answer its startup probe within the retry budget."""

    def __init__(self, name: str, attempts: int) -> None:
        self.name = name
        self.attempts = attempts
        super().__init__(f"{name} unavailable after {attempts} attempts")
