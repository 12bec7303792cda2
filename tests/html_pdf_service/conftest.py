"""
Pytest fixtures for HTML to PDF service tests.

Playwright is replaced with mocks so no Chromium process is ever launched.
"""

import asyncio
import os
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch, MagicMock, AsyncMock

# Set STATIC_DIR BEFORE any imports from html_pdf_service so the static
# mount is created regardless of the directory pytest runs from.
os.environ["STATIC_DIR"] = str(Path(__file__).resolve().parents[2] / "public")

import pytest
from fastapi.testclient import TestClient


FAKE_PDF = b"%PDF-1.4 fake pdf content"


def build_page(pdf_bytes=FAKE_PDF, pdf_error=None):
    """Create a mock Playwright page whose async methods are awaitable."""
    page = MagicMock()
    page.set_content = AsyncMock()
    page.wait_for_load_state = AsyncMock()
    page.evaluate = AsyncMock(return_value=True)
    page.wait_for_timeout = AsyncMock()
    if pdf_error is not None:
        page.pdf = AsyncMock(side_effect=pdf_error)
    else:
        page.pdf = AsyncMock(return_value=pdf_bytes)
    return page


def build_playwright(launch):
    """Wrap a chromium.launch mock in an async_playwright() replacement."""
    mock_playwright = MagicMock()
    mock_playwright.return_value.__aenter__ = AsyncMock(
        return_value=MagicMock(chromium=MagicMock(launch=launch))
    )
    mock_playwright.return_value.__aexit__ = AsyncMock(return_value=False)
    return mock_playwright


@pytest.fixture
def fake_engine():
    """Patch Playwright with a single browser/page pair that returns a fake PDF."""
    page = build_page()
    browser = AsyncMock()
    browser.new_page = AsyncMock(return_value=page)
    launch = AsyncMock(return_value=browser)
    mock_playwright = build_playwright(launch)

    with patch("playwright.async_api.async_playwright", mock_playwright):
        yield SimpleNamespace(
            playwright=mock_playwright,
            launch=launch,
            browser=browser,
            page=page,
        )


@pytest.fixture
def isolated_engine():
    """
    Patch Playwright so every launch gets its own browser and page.

    Each page echoes the markup it was given back inside the PDF bytes,
    which lets tests detect data leaking between concurrent requests.
    """
    browsers = []

    async def new_page():
        page = build_page()
        loaded = {}

        async def set_content(html, **kwargs):
            loaded["html"] = html
            await asyncio.sleep(0.01)

        async def pdf(**kwargs):
            await asyncio.sleep(0.01)
            return b"%PDF-" + loaded["html"].encode()

        page.set_content = AsyncMock(side_effect=set_content)
        page.pdf = AsyncMock(side_effect=pdf)
        return page

    async def launch(**kwargs):
        browser = AsyncMock()
        browser.new_page = AsyncMock(side_effect=new_page)
        browsers.append(browser)
        return browser

    mock_playwright = build_playwright(AsyncMock(side_effect=launch))

    with patch("playwright.async_api.async_playwright", mock_playwright):
        yield SimpleNamespace(playwright=mock_playwright, browsers=browsers)


@pytest.fixture
def client():
    """Create test client for the HTML to PDF service."""
    from html_pdf_service.app import app
    return TestClient(app)
