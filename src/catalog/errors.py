"""
Catalog Errors

Exception hierarchy for the catalog API and the product list pipeline,
plus the mapping from exceptions to user-facing messages.
"""

from typing import Dict, List, Optional


class CatalogError(Exception):
    """Base class for every error raised by the catalog layer."""


class InvalidStoreError(CatalogError):
    """No usable store identifier. Needs user action, never retried."""

    def __init__(self, message: str = "No store selected"):
        super().__init__(message)


class UnexpectedResponseFormat(CatalogError):
    """The catalog API broke its response contract."""

    def __init__(self, message: str = "Unexpected response format from the catalog API"):
        super().__init__(message)


class TransportError(CatalogError):
    """Network or HTTP failure talking to the catalog API."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ApiError(TransportError):
    """The API answered with an HTTP error status."""

    def __init__(self, message: str, status: int, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message, status)
        self.errors = errors or {}


class ValidationError(ApiError):
    """HTTP 422 carrying field-keyed validation messages."""

    def __init__(self, message: str, errors: Dict[str, List[str]]):
        super().__init__(message, 422, errors)

    @property
    def validation_errors(self) -> Dict[str, List[str]]:
        return self.errors


class ClipboardError(CatalogError):
    """Writing the rendered list to the clipboard failed."""


class LoadSuperseded(CatalogError):
    """A newer refresh replaced this load before it finished."""


STATUS_MESSAGES = {
    401: "Your session has expired. Please log in again.",
    403: "You do not have permission to perform this action.",
    404: "Resource not found.",
    422: "Invalid data. Check the form fields.",
    500: "Internal server error. Please try again later.",
}

DEFAULT_MESSAGE = "An unexpected error occurred. Please try again."


def flatten_validation_errors(errors: Dict[str, List[str]]) -> List[str]:
    """Flatten {"field": ["msg", ...]} into a plain list of messages."""
    messages = []
    for field_messages in errors.values():
        if isinstance(field_messages, str):
            field_messages = [field_messages]
        for msg in field_messages or []:
            if isinstance(msg, str) and msg:
                messages.append(msg)
    return messages


def user_message(err: BaseException) -> str:
    """
    Convert an exception into a message fit for the single error slot.

    Args:
        err: Exception raised while loading or exporting

    Returns:
        Human readable message
    """
    if isinstance(err, ValidationError):
        messages = flatten_validation_errors(err.validation_errors)
        if messages:
            return ", ".join(messages)
        return str(err) or STATUS_MESSAGES[422]

    if isinstance(err, ApiError):
        # 409 keeps the server's explanation when there is one
        if err.status == 409:
            return str(err) or "This resource is in use elsewhere and cannot be removed."
        if err.status in STATUS_MESSAGES:
            return STATUS_MESSAGES[err.status]
        return str(err) or "Request failed"

    return str(err) or DEFAULT_MESSAGE


def load_error_message(err: BaseException) -> str:
    """
    Message for a failed product list load.

    Unlike user_message, HTTP errors keep the server's own message; only
    validation errors are flattened.
    """
    if isinstance(err, ValidationError):
        messages = flatten_validation_errors(err.validation_errors)
        if messages:
            return ", ".join(messages)

    return str(err) or DEFAULT_MESSAGE
