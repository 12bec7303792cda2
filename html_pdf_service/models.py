"""
Request/response models for the HTML to PDF service.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class ConvertRequest(BaseModel):
    """HTML to PDF conversion request."""
    html: Optional[str] = Field(None, description="HTML content to render")
    options: Optional[Dict[str, Any]] = Field(
        default_factory=dict,
        description="PDF layout overrides (format, printBackground, margin, ...)"
    )

    @field_validator("options", mode="before")
    @classmethod
    def ignore_non_object_options(cls, v: Any) -> Any:
        """Treat anything other than a JSON object as no overrides."""
        if v is None or isinstance(v, dict):
            return v
        logger.warning(f"Ignoring non-object options of type {type(v).__name__}")
        return {}

    @property
    def has_markup(self) -> bool:
        return bool(self.html)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "OK"
    message: str = "HTML to PDF service is running"


class ErrorResponse(BaseModel):
    """Error body returned for every non-2xx response."""
    error: str
