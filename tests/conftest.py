# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import pagesignal  # noqa: F401
except ImportError:
    raise ImportError("pagesignal is not installed. Run: pip install -e '.[dev]'") from None

import logging

import pytest
import structlog

from pagesignal.document import HtmlDocument


@pytest.fixture
def make_doc():
    """Build an HtmlDocument from a body fragment (and optional head markup)."""

    def _make(body: str = "", *, head: str = "", url: str = "https://example.com/page", **kwargs) -> HtmlDocument:
        html = f"<html><head>{head}</head><body>{body}</body></html>"
        return HtmlDocument.from_html(html, url=url, **kwargs)

    return _make


@pytest.fixture
def reset_logging():
    """Restore root logger + structlog state around tests that call configure()."""
    root = logging.getLogger()
    old_handlers = root.handlers[:]
    old_level = root.level
    yield
    root.handlers = old_handlers
    root.setLevel(old_level)
    structlog.reset_defaults()
