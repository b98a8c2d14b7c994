# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Page Signal: automatable-surface report for a single web document.

Turns an arbitrary page into a typed PageAnalysisReport containing:
- forms, controls, interesting links and tables (counts + bounded samples)
- visual widgets: charts, dashboards, data visualizations
- API endpoints and webhooks recovered from inline script text
"""

from __future__ import annotations

from dataclasses import dataclass, field

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Page-relative (scroll-adjusted) rectangle."""

    top: float = 0.0
    left: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True, slots=True)
class FieldDetail:
    type: str
    name: str
    placeholder: str = ""
    required: bool = False


@dataclass(frozen=True, slots=True)
class FormDetail:
    index: int  # position among all forms on the page
    action: str
    method: str
    fields: tuple[FieldDetail, ...] = ()


@dataclass(frozen=True, slots=True)
class EndpointRef:
    """A URL believed to denote an HTTP API call."""

    url: str
    method: str = "GET"  # one of HTTP_METHODS
    type: str | None = None  # "config" for base-URL assignments


@dataclass(frozen=True, slots=True)
class VisualElementRef:
    id: str  # element id, or a synthesized selector
    position: BoundingBox
    width: int | None = None  # canvas only
    height: int | None = None  # canvas only
    children: int | None = None  # descendant element count
    type: str | None = None  # "svg" for data visualizations


@dataclass(frozen=True, slots=True)
class LinkRef:
    text: str
    href: str
    type: str = "link"


@dataclass(frozen=True, slots=True)
class TableRef:
    headers: tuple[str, ...]
    row_count: int
    type: str = "table"


@dataclass(frozen=True, slots=True)
class NetworkObservation:
    """A resource-timing entry that looks like an API call."""

    url: str
    type: str  # initiator type: fetch, xmlhttprequest, script, ...


@dataclass(frozen=True, slots=True)
class VisualElements:
    charts: tuple[VisualElementRef, ...] = ()
    dashboards: tuple[VisualElementRef, ...] = ()
    data_visualizations: tuple[VisualElementRef, ...] = ()


@dataclass(frozen=True, slots=True)
class ApiInventory:
    endpoints: tuple[EndpointRef, ...] = ()
    webhooks: tuple[EndpointRef, ...] = ()


@dataclass(frozen=True, slots=True)
class ReportDetails:
    forms: tuple[FormDetail, ...] = ()
    important_elements: tuple[LinkRef | TableRef, ...] = ()
    page_type: str | None = None  # "login" | "ecommerce"; None when no rule fired
    detected_apis: tuple[NetworkObservation, ...] | None = None


@dataclass(frozen=True, slots=True)
class PageAnalysisReport:
    """Structured description of a page's automatable surface area."""

    url: str
    title: str
    forms: int = 0
    inputs: int = 0  # standalone inputs only (not inside a form)
    buttons: int = 0
    links: int = 0  # interesting links only
    tables: int = 0
    visual_elements: VisualElements = field(default_factory=VisualElements)
    apis: ApiInventory = field(default_factory=ApiInventory)
    details: ReportDetails = field(default_factory=ReportDetails)
    warnings: tuple[str, ...] = ()  # degraded sections

    @property
    def element_count(self) -> int:
        return self.forms + self.buttons + self.inputs + self.links + self.tables


from .analyzer import analyze_page  # noqa: E402
from .endpoint_extractor import extract_javascript_apis  # noqa: E402

__all__ = [
    "HTTP_METHODS",
    "ApiInventory",
    "BoundingBox",
    "EndpointRef",
    "FieldDetail",
    "FormDetail",
    "LinkRef",
    "NetworkObservation",
    "PageAnalysisReport",
    "ReportDetails",
    "TableRef",
    "VisualElementRef",
    "VisualElements",
    "analyze_page",
    "extract_javascript_apis",
]
