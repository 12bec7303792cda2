"""
HTML to PDF Service - FastAPI application.

Provides an endpoint that renders raw HTML to PDF using Playwright/Chromium,
a liveness endpoint, and a static file mount at the service root.
"""

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from . import __version__
from .config import get_settings, validate_config_on_startup
from .engine import render_pdf
from .errors import ConversionError, ServiceError, ValidationError
from .models import ConvertRequest, ErrorResponse, HealthResponse

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

PDF_FILENAME = "converted.pdf"

app = FastAPI(
    title="HTML to PDF Service",
    version=__version__,
    description="Converts raw HTML to PDF using Playwright/Chromium"
)

# Configure CORS using validated settings
if settings.cors_origins_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# ============================================================================
# Startup Event
# ============================================================================

@app.on_event("startup")
async def log_startup():
    """Validate configuration and announce the listening port."""
    validate_config_on_startup()
    logger.info(f"HTML to PDF service running on port {settings.port}")


# ============================================================================
# Error Handling
# ============================================================================

class BodySizeLimitMiddleware:
    """
    Refuse requests whose body exceeds ``settings.max_body_bytes``.

    The declared Content-Length is checked first; the body is then read and
    counted as it arrives, so chunked uploads are limited too. Accepted
    bodies are replayed to the application unchanged.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = settings.max_body_bytes
        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > limit:
            logger.warning(f"Rejected request body of {content_length} bytes")
            await self._reject(scope, receive, send)
            return

        chunks = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body = message.get("body", b"")
            received += len(body)
            if received > limit:
                logger.warning(f"Rejected streamed request body above {limit} bytes")
                await self._reject(scope, receive, send)
                return
            chunks.append(body)
            more_body = message.get("more_body", False)

        body = b"".join(chunks)
        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    @staticmethod
    async def _reject(scope: Scope, receive: Receive, send: Send) -> None:
        response = JSONResponse(status_code=413, content={"error": "Request body too large"})
        await response(scope, receive, send)


app.add_middleware(BodySizeLimitMiddleware)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are reported the same way as missing HTML."""
    logger.warning(f"Rejected malformed conversion request: {exc.errors()}")
    error = ValidationError()
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


# ============================================================================
# Health Check Endpoint
# ============================================================================

@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness check. Always reports the service as operational."""
    return HealthResponse()


# ============================================================================
# PDF Conversion Endpoint
# ============================================================================

@app.post(
    "/convert",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def convert(request: ConvertRequest) -> Response:
    """
    HTML to PDF endpoint.

    Launches a dedicated Chromium instance, renders the HTML and returns the
    PDF as an attachment.

    Args:
        request: HTML content and optional layout overrides

    Returns:
        Response with PDF binary data

    Raises:
        ValidationError: 400 when HTML is missing
        ConversionError: 500 for any rendering failure
    """
    if not request.has_markup:
        logger.warning("Rejected conversion request without HTML content")
        raise ValidationError()

    options = request.options or {}
    try:
        logger.info(f"Starting PDF conversion ({len(request.html)} chars, options={sorted(options)})")
        result = await render_pdf(request.html, options, settings)
    except Exception as e:
        logger.exception(f"PDF conversion error: {e}")
        raise ConversionError() from e

    logger.info(f"PDF conversion completed ({result.byte_length} bytes)")

    return Response(
        content=result.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{PDF_FILENAME}"'
        }
    )


# ============================================================================
# Static Files
# ============================================================================

# Mounted last so the API routes above take precedence.
_static_path = Path(settings.static_dir)
if _static_path.is_dir():
    app.mount("/", StaticFiles(directory=str(_static_path), html=True), name="static")
else:
    logger.warning(f"Static directory not found, skipping mount: {_static_path.resolve()}")
