"""
Service error taxonomy.

Each error knows the HTTP status it maps to; the API layer renders them as
``{"error": ..., "message": ..., "details": ...}`` bodies.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class ResourceServiceError(Exception):
    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        detail: Optional[str] = None,
        details: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.detail:
            body["message"] = self.detail
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(ResourceServiceError):
    """Malformed or missing client input."""

    status_code = 400


class NotFoundError(ResourceServiceError):
    """Referenced resource does not exist."""

    status_code = 404


class StorageError(ResourceServiceError):
    """Engine-level failure while reading or writing the resources table."""

    status_code = 500


class PriceFeedError(ResourceServiceError):
    """The configured price feed could not be fetched or parsed."""

    status_code = 500
