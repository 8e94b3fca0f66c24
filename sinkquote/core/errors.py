# sinkquote/core/errors.py
from typing import Any, Optional

from fastapi import HTTPException


class QuotingError(HTTPException):
    """Base class for every error the quoting engine reports to a caller."""

    status_code = 400

    def __init__(self, detail: Any = None):
        super().__init__(status_code=self.status_code, detail=detail)


class NotFound(QuotingError):
    status_code = 404


class ValidationFailure(QuotingError):
    status_code = 422


class DuplicateSku(QuotingError):
    status_code = 409


class InvalidStateTransition(QuotingError):
    status_code = 400

    def __init__(self, current_status: str, target_status: str, detail: Optional[str] = None):
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(
            detail or f"Cannot transition quote from '{current_status}' to '{target_status}'"
        )


class QuoteExpired(QuotingError):
    status_code = 400


class VersionConflict(QuotingError):
    status_code = 409

    def __init__(self, server_version: int, client_version: int, server_data: Any = None):
        self.server_version = server_version
        self.client_version = client_version
        self.server_data = server_data
        super().__init__({
            "message": "This record was modified by another user. Please refresh and try again.",
            "server_version": server_version,
            "client_version": client_version,
            "server_data": server_data,
        })


class TransactionFailure(QuotingError):
    status_code = 500
