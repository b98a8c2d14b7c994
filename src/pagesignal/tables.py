# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Table structure: all tables counted, the first few summarized."""

from __future__ import annotations

from dataclasses import dataclass

from . import TableRef
from .document import PageDocument, PageElement

MAX_TABLE_SAMPLES = 3
MAX_HEADERS = 5


@dataclass(frozen=True, slots=True)
class TableSummary:
    count: int
    samples: tuple[TableRef, ...]


def summarize_table(table: PageElement) -> TableRef | None:
    """Header/row summary, or None for single-row headerless layout tables."""
    headers = [th.text().strip() for th in table.iter_descendants("th")]
    row_count = sum(1 for _ in table.iter_descendants("tr"))
    if not headers and row_count <= 1:
        return None
    return TableRef(headers=tuple(headers[:MAX_HEADERS]), row_count=row_count)


def analyze_tables(document: PageDocument) -> TableSummary:
    tables = list(document.iter_elements("table"))
    samples: list[TableRef] = []
    for table in tables[:MAX_TABLE_SAMPLES]:
        summary = summarize_table(table)
        if summary is not None:
            samples.append(summary)
    return TableSummary(count=len(tables), samples=tuple(samples))
