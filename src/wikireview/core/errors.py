"""Error taxonomy shared by the services and the HTTP layer.

Services raise these exceptions; the API layer maps each class onto its
``status_code`` and renders ``{"error": message}``.
"""

from __future__ import annotations


class WikiReviewError(RuntimeError):
    """Base exception for all WikiReview failures."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(WikiReviewError):
    """Raised when input is malformed or out of range."""

    status_code = 400


class ConflictError(WikiReviewError):
    """Raised when a uniqueness rule would be violated."""

    status_code = 409


class NotFoundError(WikiReviewError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class UnauthenticatedError(WikiReviewError):
    """Raised when an action requires a resolved identity."""

    status_code = 401


class ForbiddenError(WikiReviewError):
    """Raised when the resolved identity lacks permission."""

    status_code = 403


class StoreError(WikiReviewError):
    """Raised when the underlying persistence layer fails unexpectedly."""

    status_code = 500

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error


class WikiApiError(WikiReviewError):
    """Raised when the external wiki engine reports an error."""

    status_code = 502

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class WikiTokenError(WikiApiError):
    """Raised when a capability token cannot be acquired from the wiki."""

    status_code = 401
