# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Static API / webhook discovery over inline script text and page markup.

Regex scan, not a JavaScript parser. Recall over precision: any quoted
string that looks like an API or webhook URL is reported.

Passes, in priority order (earlier passes win on duplicate URLs):
  1. inline <script> text: quoted /api/ and /webhook(s)/ URLs
  2. inline <script> text: fetch(), XMLHttpRequest.open(), $.ajax({url})
  3. serialized markup: quoted /api/ and /webhook(s)/ URLs again
  4. serialized markup: apiUrl / baseUrl style config assignments
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from . import HTTP_METHODS, ApiInventory, EndpointRef
from .dedup import dedupe_endpoints
from .document import PageDocument
from .http_method import guess_http_method

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_API_URL_RE = re.compile(r"""(["'])((https?://[^"']+/api/[^"']+)|(/api/[^"']+))\1""")
_WEBHOOK_URL_RE = re.compile(r"""(["'])((https?://[^"']+/webhooks?/[^"']+)|(/webhooks?/[^"']+))\1""")

_FETCH_RE = re.compile(r"""fetch\s*\(\s*(["'])(.*?)\1""")
_XHR_RE = re.compile(r"""XMLHttpRequest\(\).*?\.open\s*\(\s*["'](\w+)["']\s*,\s*["'](.*?)["']""")
_AJAX_RE = re.compile(r"""\.ajax\s*\(\s*\{[^}]*url\s*:\s*(["'])(.*?)\1""")

_CONFIG_RE = re.compile(r"""(?:apiUrl|apiEndpoint|apiBase|baseUrl|baseAPI|apiPath)\s*[:=]\s*(["'])([^"']+)\1""")

# Call-site URLs must mention this to count as an API
_CALL_SITE_HINT = "api"

# ---------------------------------------------------------------------------
# Text-level extraction
# ---------------------------------------------------------------------------


def _scan(pattern: re.Pattern[str], text: str) -> Iterator[EndpointRef]:
    for m in pattern.finditer(text):
        yield EndpointRef(url=m.group(2), method=guess_http_method(text, m.start()))


def extract_urls(text: str) -> ApiInventory:
    """Quoted API and webhook URLs in ``text``."""
    return ApiInventory(
        endpoints=dedupe_endpoints(_scan(_API_URL_RE, text)),
        webhooks=dedupe_endpoints(_scan(_WEBHOOK_URL_RE, text)),
    )


def _xhr_method(declared: str, text: str, position: int) -> str:
    method = declared.upper()
    return method if method in HTTP_METHODS else guess_http_method(text, position)


def extract_call_sites(text: str) -> tuple[EndpointRef, ...]:
    """URLs passed to fetch / XMLHttpRequest.open / $.ajax that mention ``api``."""
    refs: list[EndpointRef] = []
    refs.extend(r for r in _scan(_FETCH_RE, text) if _CALL_SITE_HINT in r.url)
    for m in _XHR_RE.finditer(text):
        url = m.group(2)
        if _CALL_SITE_HINT in url:
            refs.append(EndpointRef(url=url, method=_xhr_method(m.group(1), text, m.start())))
    refs.extend(r for r in _scan(_AJAX_RE, text) if _CALL_SITE_HINT in r.url)
    return dedupe_endpoints(refs)


def is_api_base_url(value: str) -> bool:
    if "/api/" in value or value.endswith("/api"):
        return True
    host = value.split("//", 1)[1] if "//" in value else value
    return host.startswith("api.")


def extract_config_urls(text: str) -> tuple[EndpointRef, ...]:
    """Base-URL assignments (``apiUrl: "..."``, ``baseUrl = '...'``) tagged as config."""
    return dedupe_endpoints(
        EndpointRef(url=m.group(2), method="GET", type="config")
        for m in _CONFIG_RE.finditer(text)
        if is_api_base_url(m.group(2))
    )


# ---------------------------------------------------------------------------
# Document-level extraction
# ---------------------------------------------------------------------------


def inline_scripts(document: PageDocument) -> list[str]:
    """Text of every <script> without a src attribute, empty ones skipped."""
    return [text for s in document.iter_elements("script") if not s.has("src") and (text := s.text())]


def extract_javascript_apis(document: PageDocument) -> ApiInventory:
    endpoints: list[EndpointRef] = []
    webhooks: list[EndpointRef] = []

    scripts = inline_scripts(document)
    for text in scripts:
        found = extract_urls(text)
        endpoints.extend(found.endpoints)
        webhooks.extend(found.webhooks)
    for text in scripts:
        endpoints.extend(extract_call_sites(text))

    try:
        markup = document.outer_html()
    except Exception:  # nosec B110
        logger.warning("Markup serialization failed; inline script results only", exc_info=True)
    else:
        found = extract_urls(markup)
        endpoints.extend(found.endpoints)
        webhooks.extend(found.webhooks)
        endpoints.extend(extract_config_urls(markup))

    inventory = ApiInventory(endpoints=dedupe_endpoints(endpoints), webhooks=dedupe_endpoints(webhooks))
    logger.debug(
        "Extracted %d endpoint(s), %d webhook(s) from %d inline script(s)",
        len(inventory.endpoints),
        len(inventory.webhooks),
        len(scripts),
    )
    return inventory
