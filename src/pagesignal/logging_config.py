# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Log rendering for pagesignal: stdlib records rendered through structlog.

Analyzer modules only call ``logging.getLogger(__name__)``. The analyzer binds
the document URL as ``page_url`` while a report is being built, so every
record emitted during analysis (section failures included) names the page it
came from. Output goes to stderr; stdout is reserved for JSON reports.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

PAGE_URL_KEY = "page_url"

# Run for structlog-native and stdlib records alike
_PRE_CHAIN: tuple = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.format_exc_info,
)


@contextmanager
def page_context(url: str) -> Iterator[None]:
    """Tag records logged inside the block with the analyzed page URL."""
    with structlog.contextvars.bound_contextvars(**{PAGE_URL_KEY: url or "<no url>"}):
        yield


def _renderer(json_output: bool):
    if json_output:
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=False)


def configure(*, json_output: bool = False, level: str = "INFO") -> None:
    """Route all logging to stderr through structlog.

    Args:
        json_output: JSON lines when True, console lines otherwise.
        level: Root logger level name; unknown names fall back to INFO.
    """
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, _renderer(json_output)],
            foreign_pre_chain=list(_PRE_CHAIN),
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
