"""
Error types surfaced to HTTP callers.

Callers only ever see two classes of failure: a validation error for missing
input and a generic conversion error for anything that goes wrong while
driving the rendering engine.
"""

from typing import Optional

HTML_REQUIRED_MESSAGE = "HTML content is required"
CONVERSION_FAILED_MESSAGE = "Failed to convert HTML to PDF"


class ServiceError(Exception):
    """Base error carrying the HTTP status and the message returned to the caller."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.message
        self.status_code = status_code or self.status_code
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Required input is missing or malformed."""

    status_code = 400
    message = HTML_REQUIRED_MESSAGE


class ConversionError(ServiceError):
    """The rendering engine failed to produce a document."""

    status_code = 500
    message = CONVERSION_FAILED_MESSAGE
