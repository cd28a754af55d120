"""Custom exception hierarchy for Casework."""

from __future__ import annotations

from fastapi import status


class ApplicationError(Exception):
    """Base application error with HTTP semantics."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        self.message = message


class BadRequestError(ApplicationError):
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ApplicationError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(ApplicationError):
    status_code = status.HTTP_404_NOT_FOUND


class StorageError(ApplicationError):
    """Raised when the backing record store cannot serve a request."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class LLMUnavailableError(RuntimeError):
    """Raised when no configured language-model provider produced an answer."""
