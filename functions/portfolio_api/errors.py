"""
Error taxonomy shared by the storage adapter and the HTTP layer.
"""

from __future__ import annotations

from typing import Optional


class PortfolioApiError(Exception):
    """Base class for failures raised inside the service."""


class ConfigurationError(PortfolioApiError):
    """The storage binding is missing or unusable."""


class StorageError(PortfolioApiError):
    """The underlying store rejected a query or could not be reached."""


class ApiError(Exception):
    """A failure that should be returned to the caller as-is."""

    def __init__(
        self, status_code: int, error: str, details: Optional[str] = None
    ):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details

    def as_dict(self) -> dict:
        body = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body
