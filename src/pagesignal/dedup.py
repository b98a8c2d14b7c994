# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""One entry per URL, first occurrence wins."""

from __future__ import annotations

from collections.abc import Iterable

from . import EndpointRef


def dedupe_endpoints(refs: Iterable[EndpointRef]) -> tuple[EndpointRef, ...]:
    """Collapse refs to unique URLs, keeping first-seen order, method and type."""
    unique: dict[str, EndpointRef] = {}
    for ref in refs:
        unique.setdefault(ref.url, ref)
    return tuple(unique.values())
