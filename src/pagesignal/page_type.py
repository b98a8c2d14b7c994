# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Coarse page-type classifier: ordered rules, last match wins.

Rules run in order and a later match overwrites an earlier one, so a
storefront with a login form reports ``ecommerce``. The result is a single
label; pages matching no rule get ``None`` rather than a sentinel string.
"""

from __future__ import annotations

import logging

from .document import PageDocument, PageElement
from .forms import field_type

logger = logging.getLogger(__name__)

# Class-attribute substrings (case-sensitive, like [class*=...])
PRICE_CLASS_HINTS: tuple[str, ...] = ("price", "cost", "valor")
CART_CLASS_HINTS: tuple[str, ...] = ("cart", "comprar", "buy")

# More than this many price-like elements marks a storefront
PRICE_DENSITY_THRESHOLD = 3


def _class_contains(element: PageElement, hints: tuple[str, ...]) -> bool:
    cls = element.class_name
    return bool(cls) and any(h in cls for h in hints)


def _has_password_field(document: PageDocument) -> bool:
    return any(field_type(el) == "password" for el in document.iter_elements("input"))


def _looks_like_store(document: PageDocument) -> bool:
    price_count = 0
    for el in document.iter_elements():
        if _class_contains(el, CART_CLASS_HINTS):
            return True
        if _class_contains(el, PRICE_CLASS_HINTS):
            price_count += 1
    return price_count > PRICE_DENSITY_THRESHOLD


def classify_page_type(document: PageDocument) -> str | None:
    page_type: str | None = None
    if _has_password_field(document):
        page_type = "login"
    if _looks_like_store(document):
        if page_type is not None:
            logger.debug("Page type %s overridden by ecommerce rule", page_type)
        page_type = "ecommerce"
    return page_type
