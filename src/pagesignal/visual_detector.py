# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Chart / dashboard / SVG data-visualization detection.

Three structural heuristics, none of which look at pixels:

  canvas  → chart               parent class names a chart library container,
                                or the canvas declares data-chart-type
  widget  → dashboard           class/id says dashboard|widget AND the subtree
                                holds more than DASHBOARD_MIN_DESCENDANTS elements
  svg     → dataVisualization   more than SVG_MIN_SHAPES drawing primitives,
                                or parent class names a chart container
"""

from __future__ import annotations

import re

from . import VisualElementRef
from .document import PageDocument, PageElement
from .geometry import element_position, element_ref_id

_CANVAS_PARENT_HINTS: tuple[str, ...] = ("chart", "graph", "plot")
_SVG_PARENT_HINTS: tuple[str, ...] = ("chart", "graph")
_DASHBOARD_HINTS: tuple[str, ...] = ("dashboard", "widget")
_SVG_SHAPE_TAGS: tuple[str, ...] = ("path", "rect", "circle")

# Empty placeholders named "widget" are common; real widgets are dense
DASHBOARD_MIN_DESCENDANTS = 10
SVG_MIN_SHAPES = 5

# HTML canvas default intrinsic size
_CANVAS_DEFAULT_WIDTH = 300
_CANVAS_DEFAULT_HEIGHT = 150

# HTML rules for parsing non-negative integers: whitespace, optional "+", digits
_LEADING_DIGITS_RE = re.compile(r"[\t\n\f\r ]*\+?([0-9]+)")


def _parent_class_contains(element: PageElement, hints: tuple[str, ...]) -> bool:
    parent = element.parent
    if parent is None:
        return False
    cls = parent.class_name.lower()
    return any(h in cls for h in hints)


def _canvas_dimension(canvas: PageElement, name: str, default: int) -> int:
    """Leading digits of the attribute (``"400px"`` is 400), else ``default``."""
    m = _LEADING_DIGITS_RE.match(canvas.get(name) or "")
    return int(m.group(1)) if m else default


def _descendant_count(element: PageElement, *tags: str) -> int:
    return sum(1 for _ in element.iter_descendants(*tags))


def is_chart_canvas(canvas: PageElement) -> bool:
    return _parent_class_contains(canvas, _CANVAS_PARENT_HINTS) or bool(canvas.get("data-chart-type"))


def detect_charts(document: PageDocument) -> tuple[VisualElementRef, ...]:
    return tuple(
        VisualElementRef(
            id=element_ref_id(canvas),
            width=_canvas_dimension(canvas, "width", _CANVAS_DEFAULT_WIDTH),
            height=_canvas_dimension(canvas, "height", _CANVAS_DEFAULT_HEIGHT),
            position=element_position(canvas, document),
        )
        for canvas in document.iter_elements("canvas")
        if is_chart_canvas(canvas)
    )


def is_dashboard_candidate(element: PageElement) -> bool:
    """Class or id mentions dashboard/widget (case-sensitive, like [class*=...])."""
    cls = element.class_name
    eid = element.element_id
    return any(h in cls or h in eid for h in _DASHBOARD_HINTS)


def detect_dashboards(document: PageDocument) -> tuple[VisualElementRef, ...]:
    found: list[VisualElementRef] = []
    for el in document.iter_elements():
        if not is_dashboard_candidate(el):
            continue
        children = _descendant_count(el)
        if children > DASHBOARD_MIN_DESCENDANTS:
            found.append(
                VisualElementRef(
                    id=element_ref_id(el),
                    children=children,
                    position=element_position(el, document),
                )
            )
    return tuple(found)


def is_data_visualization(svg: PageElement) -> bool:
    if _descendant_count(svg, *_SVG_SHAPE_TAGS) > SVG_MIN_SHAPES:
        return True
    return _parent_class_contains(svg, _SVG_PARENT_HINTS)


def detect_data_visualizations(document: PageDocument) -> tuple[VisualElementRef, ...]:
    return tuple(
        VisualElementRef(
            id=element_ref_id(svg),
            type="svg",
            children=_descendant_count(svg),
            position=element_position(svg, document),
        )
        for svg in document.iter_elements("svg")
        if is_data_visualization(svg)
    )
