"""
Unit tests for caller-facing error types.
"""

from html_pdf_service.errors import ConversionError, ServiceError, ValidationError


class TestServiceErrors:
    """Tests for ServiceError and its subclasses."""

    def test_defaults_without_arguments(self):
        """Test that omitted message and status fall back to class defaults."""
        error = ServiceError()
        assert error.status_code == 500
        assert error.message == "Internal server error"

    def test_explicit_message_and_status(self):
        """Test that message and status can be overridden."""
        error = ServiceError("Request body too large", status_code=413)
        assert error.status_code == 413
        assert error.message == "Request body too large"
        assert str(error) == "Request body too large"

    def test_validation_error(self):
        """Test the fixed missing-HTML error."""
        error = ValidationError()
        assert error.status_code == 400
        assert error.message == "HTML content is required"

    def test_conversion_error(self):
        """Test the fixed conversion failure error."""
        error = ConversionError()
        assert error.status_code == 500
        assert error.message == "Failed to convert HTML to PDF"
