# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Already-observed API traffic from buffered resource-timing entries.

A secondary signal next to the static script scan: entries are read once,
as the host buffered them, and never subscribed to.
"""

from __future__ import annotations

from . import NetworkObservation
from .document import PageDocument, ResourceEntry

MAX_OBSERVATIONS = 5

_API_NAME_HINTS: tuple[str, ...] = ("/api/", ".json")
_API_INITIATORS = frozenset({"xmlhttprequest", "fetch"})


def is_api_call(entry: ResourceEntry) -> bool:
    if any(hint in entry.name for hint in _API_NAME_HINTS):
        return True
    return entry.initiator_type in _API_INITIATORS


def detect_network_observations(document: PageDocument) -> tuple[NetworkObservation, ...] | None:
    """First few API-looking entries, or None when there are none."""
    calls = [e for e in document.resource_entries() if is_api_call(e)]
    if not calls:
        return None
    return tuple(NetworkObservation(url=e.name, type=e.initiator_type) for e in calls[:MAX_OBSERVATIONS])
