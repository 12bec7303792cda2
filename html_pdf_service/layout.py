"""
Helper functions for building PDF export parameters.

Callers send layout options in the browser print style (camelCase keys such
as ``printBackground``). These helpers overlay them on the service defaults
and translate the result into keyword arguments for Playwright's
``page.pdf()``.
"""

import logging
from typing import Any, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

DEFAULT_LAYOUT_OPTIONS: Dict[str, Any] = {
    "format": "A4",
    "printBackground": True,
    "margin": {
        "top": "1cm",
        "right": "1cm",
        "bottom": "1cm",
        "left": "1cm",
    },
}

# camelCase option name -> page.pdf() keyword
OPTION_ALIASES: Dict[str, str] = {
    "printBackground": "print_background",
    "displayHeaderFooter": "display_header_footer",
    "headerTemplate": "header_template",
    "footerTemplate": "footer_template",
    "pageRanges": "page_ranges",
    "preferCSSPageSize": "prefer_css_page_size",
}

# Never forwarded: the engine would write the document to the host filesystem.
BLOCKED_OPTIONS = frozenset({"path"})


def merge_layout_options(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Overlay caller options on the defaults, key by key.

    The merge is shallow: a caller-supplied ``margin`` replaces the whole
    default margin mapping rather than individual sides.

    Args:
        overrides: Caller-supplied layout options (may be None or empty)

    Returns:
        New dict with defaults overlaid by the overrides

    Example:
        >>> merge_layout_options({"format": "Letter"})["format"]
        'Letter'
    """
    merged = {
        key: dict(value) if isinstance(value, dict) else value
        for key, value in DEFAULT_LAYOUT_OPTIONS.items()
    }
    merged.update(overrides or {})
    return merged


def to_pdf_kwargs(options: Dict[str, Any]) -> Dict[str, Any]:
    """
    Translate merged layout options into ``page.pdf()`` keyword arguments.

    Known camelCase names are mapped to Playwright's snake_case keywords.
    Anything else is passed through untouched for the engine to interpret.
    Blocked options are dropped with a warning.

    Args:
        options: Merged layout options

    Returns:
        Keyword arguments for ``page.pdf()``
    """
    kwargs: Dict[str, Any] = {}
    for key, value in options.items():
        if key in BLOCKED_OPTIONS:
            logger.warning(f"Ignoring blocked PDF option: {key}")
            continue
        kwargs[OPTION_ALIASES.get(key, key)] = value
    return kwargs


def build_pdf_kwargs(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Merge caller overrides with the defaults and translate them for the engine."""
    return to_pdf_kwargs(merge_layout_options(overrides))


def drop_unsupported_options(kwargs: Dict[str, Any], supported: Iterable[str]) -> Dict[str, Any]:
    """
    Remove keywords the engine's export call does not accept.

    Browser print options from other engines (``omitBackground``,
    ``timeout``) would otherwise make ``page.pdf()`` raise ``TypeError``.

    Args:
        kwargs: Translated ``page.pdf()`` keyword arguments
        supported: Keyword names accepted by ``page.pdf()``

    Returns:
        New dict holding only the supported keywords
    """
    supported = set(supported)
    accepted = {}
    for key, value in kwargs.items():
        if key not in supported:
            logger.warning(f"Ignoring PDF option not supported by the engine: {key}")
            continue
        accepted[key] = value
    return accepted
