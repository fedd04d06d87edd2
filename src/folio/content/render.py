"""Markdown → HTML rendering.

The output is *raw* HTML: inline HTML in the source passes through untouched,
so callers must run it through ``sanitize_html`` before embedding it.
"""

from __future__ import annotations

import html
import logging

import markdown

logger = logging.getLogger(__name__)

EXTENSIONS = ["fenced_code", "tables", "sane_lists"]


def render_markdown(body: str) -> str:
    """Convert *body* to HTML.

    A new converter is built per call (``markdown.Markdown`` instances keep
    state between conversions), so concurrent callers never share one.
    """
    try:
        return markdown.markdown(body, extensions=EXTENSIONS, output_format="html")
    except Exception:
        logger.exception("Markdown conversion failed; rendering source as text")
        return f"<pre>{html.escape(body)}</pre>"
