# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""PageAnalysisReport serialization to the camelCase wire format.

The wire shape is what the side panel and the workflow generator consume:
``elementCount``, ``visualElements.dataVisualizations``,
``details.importantElements`` and so on. Optional fields (``pageType``,
``detectedAPIs``, endpoint ``type``, ``warnings``) are omitted when unset.
"""

from __future__ import annotations

import json
from typing import Any

from . import (
    ApiInventory,
    BoundingBox,
    EndpointRef,
    FormDetail,
    LinkRef,
    PageAnalysisReport,
    TableRef,
    VisualElementRef,
)


def _box(box: BoundingBox) -> dict[str, float]:
    return {"top": box.top, "left": box.left, "width": box.width, "height": box.height}


def _endpoint(ref: EndpointRef) -> dict[str, str]:
    return {"url": ref.url, "method": ref.method, **({"type": ref.type} if ref.type else {})}


def _visual(ref: VisualElementRef) -> dict[str, Any]:
    return {
        "id": ref.id,
        **({"type": ref.type} if ref.type else {}),
        **({"width": ref.width} if ref.width is not None else {}),
        **({"height": ref.height} if ref.height is not None else {}),
        **({"children": ref.children} if ref.children is not None else {}),
        "position": _box(ref.position),
    }


def _form(form: FormDetail) -> dict[str, Any]:
    return {
        "index": form.index,
        "action": form.action,
        "method": form.method,
        "fields": [
            {"type": f.type, "name": f.name, "placeholder": f.placeholder, "required": f.required}
            for f in form.fields
        ],
    }


def _important(ref: LinkRef | TableRef) -> dict[str, Any]:
    if isinstance(ref, TableRef):
        return {"type": ref.type, "headers": list(ref.headers), "rowCount": ref.row_count}
    return {"type": ref.type, "text": ref.text, "href": ref.href}


def apis_to_dict(apis: ApiInventory) -> dict[str, list[dict[str, str]]]:
    return {
        "endpoints": [_endpoint(e) for e in apis.endpoints],
        "webhooks": [_endpoint(w) for w in apis.webhooks],
    }


def to_dict(report: PageAnalysisReport) -> dict[str, Any]:
    """Serialize a report to plain JSON-compatible data."""
    details = report.details
    visual = report.visual_elements
    return {
        "url": report.url,
        "title": report.title,
        "elementCount": report.element_count,
        "forms": report.forms,
        "inputs": report.inputs,
        "buttons": report.buttons,
        "links": report.links,
        "tables": report.tables,
        "visualElements": {
            "charts": [_visual(v) for v in visual.charts],
            "dashboards": [_visual(v) for v in visual.dashboards],
            "dataVisualizations": [_visual(v) for v in visual.data_visualizations],
        },
        "apis": apis_to_dict(report.apis),
        "details": {
            "forms": [_form(f) for f in details.forms],
            "importantElements": [_important(i) for i in details.important_elements],
            **({"pageType": details.page_type} if details.page_type else {}),
            **(
                {"detectedAPIs": [{"url": o.url, "type": o.type} for o in details.detected_apis]}
                if details.detected_apis
                else {}
            ),
        },
        **({"warnings": list(report.warnings)} if report.warnings else {}),
    }


def to_json(report: PageAnalysisReport, indent: int | None = 2) -> str:
    """Serialize a report to a JSON string."""
    return json.dumps(to_dict(report), ensure_ascii=False, indent=indent)
