# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Interactive controls and "interesting" links.

Buttons and standalone inputs are only counted. Links whose href looks like
an API / export / download target are counted, and the first few are
sampled into the report so link-heavy pages stay bounded.
"""

from __future__ import annotations

from dataclasses import dataclass

from . import LinkRef
from .document import PageDocument, PageElement
from .forms import FIELD_TAGS, field_type, is_hidden_field

# Substrings matched against the raw href (case-sensitive, like [href*=...])
LINK_KEYWORDS: tuple[str, ...] = ("api", "download", "export", "csv", "json", "xlsx")

MAX_LINK_SAMPLES = 5
MAX_LINK_TEXT = 50

_BUTTON_CLASSES = frozenset({"btn", "button"})
_BUTTON_INPUT_TYPES = frozenset({"button", "submit"})


@dataclass(frozen=True, slots=True)
class LinkSummary:
    count: int
    samples: tuple[LinkRef, ...]


def is_button(element: PageElement) -> bool:
    if element.tag == "button":
        return True
    if element.tag == "input" and field_type(element) in _BUTTON_INPUT_TYPES:
        return True
    if element.get("role") == "button":
        return True
    return not _BUTTON_CLASSES.isdisjoint(element.classes)


def count_buttons(document: PageDocument) -> int:
    return sum(1 for el in document.iter_elements() if is_button(el))


def count_standalone_inputs(document: PageDocument) -> int:
    """Visible input/textarea/select elements outside any <form>."""
    return sum(
        1
        for el in document.iter_elements(*FIELD_TAGS)
        if not is_hidden_field(el) and not el.has_ancestor("form")
    )


def is_interesting_link(element: PageElement) -> bool:
    href = element.get("href")
    if href is None:
        return False
    return any(keyword in href for keyword in LINK_KEYWORDS)


def collect_interesting_links(document: PageDocument) -> LinkSummary:
    count = 0
    samples: list[LinkRef] = []
    for anchor in document.iter_elements("a"):
        if not is_interesting_link(anchor):
            continue
        count += 1
        if len(samples) < MAX_LINK_SAMPLES:
            samples.append(
                LinkRef(
                    text=anchor.text().strip()[:MAX_LINK_TEXT],
                    href=document.resolve_url(anchor.get("href") or ""),
                )
            )
    return LinkSummary(count=count, samples=tuple(samples))
