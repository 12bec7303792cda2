"""
HTML to PDF Service - Convert raw HTML markup to PDF documents.

Each request drives a fresh headless Chromium instance through Playwright;
all layout, font handling and PDF encoding happen inside the browser.
"""

__version__ = "1.0.0"
