# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Page analysis orchestrator: one document in, one PageAnalysisReport out.

Every section runs isolated. A failing analyzer (detached node, odd markup,
a buggy PageDocument implementation) degrades only its own section to empty
values and leaves a warning; the rest of the report is still produced.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from . import ApiInventory, PageAnalysisReport, ReportDetails, VisualElements
from .controls import LinkSummary, collect_interesting_links, count_buttons, count_standalone_inputs
from .document import PageDocument
from .endpoint_extractor import extract_javascript_apis
from .errors import InvalidDocumentError
from .forms import FormSummary, analyze_forms
from .logging_config import page_context
from .network import detect_network_observations
from .page_type import classify_page_type
from .tables import TableSummary, analyze_tables
from .visual_detector import detect_charts, detect_dashboards, detect_data_visualizations

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _run_section(name: str, func: Callable[[PageDocument], T], document: PageDocument, fallback: T, warnings: list[str]) -> T:
    try:
        return func(document)
    except Exception as e:
        logger.error("Section %s failed: %s", name, e, exc_info=True)
        warnings.append(f"{name} analysis failed ({type(e).__name__}): section left empty")
        return fallback


def analyze_page(document: PageDocument) -> PageAnalysisReport:
    """Build the automatable-surface report for ``document``.

    Raises:
        InvalidDocumentError: ``document`` is not a PageDocument, or its url/title
            cannot be read.
    """
    if not isinstance(document, PageDocument):
        raise InvalidDocumentError(f"Expected a PageDocument, got {type(document).__name__}")
    try:
        url = document.url
        title = document.title
    except Exception as e:
        raise InvalidDocumentError(f"Document handle is unusable: {e}") from e

    warnings: list[str] = []

    with page_context(url):
        forms = _run_section("forms", analyze_forms, document, FormSummary(0, ()), warnings)
        buttons = _run_section("buttons", count_buttons, document, 0, warnings)
        inputs = _run_section("inputs", count_standalone_inputs, document, 0, warnings)
        links = _run_section("links", collect_interesting_links, document, LinkSummary(0, ()), warnings)
        tables = _run_section("tables", analyze_tables, document, TableSummary(0, ()), warnings)
        page_type = _run_section("page_type", classify_page_type, document, None, warnings)
        detected_apis = _run_section("network", detect_network_observations, document, None, warnings)
        visual = VisualElements(
            charts=_run_section("charts", detect_charts, document, (), warnings),
            dashboards=_run_section("dashboards", detect_dashboards, document, (), warnings),
            data_visualizations=_run_section("data_visualizations", detect_data_visualizations, document, (), warnings),
        )
        apis = _run_section("apis", extract_javascript_apis, document, ApiInventory(), warnings)

    report = PageAnalysisReport(
        url=url,
        title=title,
        forms=forms.count,
        inputs=inputs,
        buttons=buttons,
        links=links.count,
        tables=tables.count,
        visual_elements=visual,
        apis=apis,
        details=ReportDetails(
            forms=forms.details,
            important_elements=(*links.samples, *tables.samples),
            page_type=page_type,
            detected_apis=detected_apis,
        ),
        warnings=tuple(warnings),
    )
    logger.info(
        "Analyzed %s: %d element(s), %d endpoint(s), %d webhook(s), page_type=%s",
        url or "<no url>",
        report.element_count,
        len(apis.endpoints),
        len(apis.webhooks),
        page_type,
    )
    return report
