"""
Rendering engine driver.

Every conversion launches its own Chromium instance through Playwright,
loads the markup, waits for it to settle and prints it to PDF. Browsers are
never shared or reused between requests.
"""

import inspect
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, Optional, Set

from .config import ServiceSettings, get_settings
from .layout import build_pdf_kwargs, drop_unsupported_options

logger = logging.getLogger(__name__)

FONTS_READY_SCRIPT = "() => document.fonts.ready.then(() => true)"


def supported_pdf_options() -> Set[str]:
    """Keyword names accepted by Playwright's ``Page.pdf()``."""
    from playwright.async_api import Page

    return set(inspect.signature(Page.pdf).parameters) - {"self"}


@dataclass
class ConversionResult:
    """PDF bytes produced by a single conversion."""

    content: bytes

    @property
    def byte_length(self) -> int:
        return len(self.content)


@asynccontextmanager
async def launch_page(settings: ServiceSettings) -> AsyncIterator[Any]:
    """
    Launch an isolated Chromium instance and yield a fresh page.

    The browser is closed when the block exits, whether it exits normally
    or with an exception.
    """
    # Import here to avoid loading Playwright on startup
    from playwright.async_api import async_playwright

    async with async_playwright() as p:
        browser = await p.chromium.launch(
            headless=settings.playwright_headless,
            args=settings.chromium_args_list,
        )
        try:
            page = await browser.new_page()
            page.set_default_timeout(settings.playwright_timeout_ms)
            yield page
        finally:
            await browser.close()
            logger.debug("Chromium instance closed")


async def wait_for_settle(page: Any, settings: ServiceSettings) -> None:
    """
    Block until the loaded document is considered settled.

    Waits for DOM readiness, then optionally for web fonts, then sleeps for
    the configured grace delay to absorb late layout shifts. This is a
    best-effort heuristic: script-driven or slow-loading content can still
    change after it returns.
    """
    await page.wait_for_load_state("domcontentloaded")

    if settings.wait_for_fonts:
        await page.evaluate(FONTS_READY_SCRIPT)

    if settings.settle_delay_ms > 0:
        await page.wait_for_timeout(settings.settle_delay_ms)


async def render_pdf(
    html: str,
    options: Optional[Dict[str, Any]] = None,
    settings: Optional[ServiceSettings] = None,
) -> ConversionResult:
    """
    Render HTML markup to PDF.

    Args:
        html: HTML content to render
        options: Caller layout overrides, merged over the defaults
        settings: Service settings (defaults to the cached settings)

    Returns:
        ConversionResult with the PDF bytes

    Raises:
        Any exception raised by Playwright; callers map these to a
        conversion error.
    """
    settings = settings or get_settings()
    pdf_kwargs = drop_unsupported_options(build_pdf_kwargs(options), supported_pdf_options())

    async with launch_page(settings) as page:
        await page.set_content(html, wait_until=settings.settle_wait_until)
        await wait_for_settle(page, settings)
        pdf_bytes = await page.pdf(**pdf_kwargs)

    return ConversionResult(content=pdf_bytes)
