"""
Error taxonomy for the catalog explorer.

Fatal load errors bubble to the caller of ``FetchOrchestrator.load()``;
per-item errors are absorbed at the fan-out boundary.
"""

from enum import Enum


class FetchFailure(str, Enum):
    """Why a whole load cycle failed."""

    LIST_UNAVAILABLE = "list_unavailable"
    EMPTY_RESULT = "empty_result"


class FetchError(Exception):
    """Raised when a load cycle cannot produce a record store."""

    def __init__(self, reason: FetchFailure, message: str = ""):
        self.reason = reason
        super().__init__(message or reason.value)


class ItemFetchError(Exception):
    """A single detail request failed or returned an unusable payload."""

    def __init__(self, location: str, message: str, error_type: str = "InvalidPayload"):
        self.location = location
        self.error_type = error_type
        super().__init__(message)


class InvalidCriteria(ValueError):
    """Malformed filter criteria, e.g. a range whose min exceeds its max."""
    pass
