# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Proximity guess of the HTTP verb used with a URL found in script text.

Looks only at the few characters before the URL. It is a keyword sniff, not
a parser: ``address`` contains ``add`` and reads as POST, ``input`` contains
``put`` and reads as PUT. Those misfires are accepted.
"""

from __future__ import annotations

CONTEXT_WINDOW = 50

# Checked in order; first group with a hit wins
_METHOD_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("POST", ("post", "create", "save", "add")),
    ("PUT", ("put", "update", "edit")),
    ("DELETE", ("delete", "remove")),
    ("PATCH", ("patch",)),
)


def guess_http_method(text: str, position: int) -> str:
    """Infer the verb from ``text[position - CONTEXT_WINDOW:position]``. Defaults to GET."""
    window = text[max(0, position - CONTEXT_WINDOW) : max(0, position)].lower()
    for method, keywords in _METHOD_KEYWORDS:
        if any(k in window for k in keywords):
            return method
    return "GET"
