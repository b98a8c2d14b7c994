# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Page Signal exception hierarchy.

All Page Signal errors inherit from PageSignalError, allowing callers
to catch the base class for any failure or specific subclasses
for targeted handling.

Analyzer failures inside a single report section never surface here;
they degrade that section and are recorded in ``report.warnings``.
"""

from __future__ import annotations


class PageSignalError(Exception):
    """Base exception for all Page Signal errors."""


class InvalidDocumentError(PageSignalError):
    """The object handed to the analyzer is not a usable document."""


class ResourceExhaustionError(PageSignalError):
    """Input exceeds a caller-side resource limit (markup size)."""

    def __init__(self, message: str, *, size: int = 0, limit: int = 0) -> None:
        super().__init__(message)
        self.size = size
        self.limit = limit
