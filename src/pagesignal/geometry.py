# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Element geometry and fallback locators."""

from __future__ import annotations

from . import BoundingBox
from .document import PageDocument, PageElement


def element_position(element: PageElement, document: PageDocument) -> BoundingBox:
    """Viewport rect shifted by the document scroll offsets."""
    rect = element.rect()
    return BoundingBox(
        top=rect.top + document.scroll_y,
        left=rect.left + document.scroll_x,
        width=rect.width,
        height=rect.height,
    )


def build_selector(element: PageElement) -> str:
    """CSS-like locator: #id → .first-class → tag:nth-child(n) → tag."""
    if element.element_id:
        return f"#{element.element_id}"
    classes = element.classes
    if classes:
        return f".{classes[0]}"
    parent = element.parent
    if parent is None:
        return element.tag
    for position, sibling in enumerate(parent.children(), start=1):
        if sibling == element:
            return f"{element.tag}:nth-child({position})"
    return element.tag


def element_ref_id(element: PageElement) -> str:
    """Raw element id when present, synthesized selector otherwise."""
    return element.element_id or build_selector(element)
