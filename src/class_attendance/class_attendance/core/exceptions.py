from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..classes.model import BatchSaveResult


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class StoreError(DomainError):
    """Raised when a record store operation fails."""


class PartialBatchError(DomainError):
    """Raised when some items of a batch write failed.

    Items that succeeded are not rolled back; ``result`` lists every outcome.
    """

    def __init__(self, result: "BatchSaveResult"):
        failed = [o for o in result.outcomes if o.error]
        super().__init__(f"{len(failed)} of {len(result.outcomes)} slots failed to save")
        self.result = result


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""
