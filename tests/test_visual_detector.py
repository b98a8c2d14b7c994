# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for pagesignal.visual_detector and pagesignal.geometry."""

from __future__ import annotations

from pagesignal import BoundingBox
from pagesignal.document import Rect
from pagesignal.geometry import build_selector, element_position
from pagesignal.visual_detector import (
    detect_charts,
    detect_dashboards,
    detect_data_visualizations,
)

# ── Geometry / selectors ─────────────────────────────────────────


class TestGeometry:
    def test_position_is_scroll_adjusted(self, make_doc):
        doc = make_doc("<div id='a'></div>", layout={"a": Rect(10, 20, 300, 40)}, scroll=(5, 100))
        el = next(doc.iter_elements("div"))
        assert element_position(el, doc) == BoundingBox(top=110, left=25, width=300, height=40)

    def test_selector_prefers_id(self, make_doc):
        el = next(make_doc("<div id='main' class='a b'></div>").iter_elements("div"))
        assert build_selector(el) == "#main"

    def test_selector_first_class(self, make_doc):
        el = next(make_doc("<div class=' card  wide'></div>").iter_elements("div"))
        assert build_selector(el) == ".card"

    def test_selector_nth_child(self, make_doc):
        doc = make_doc("<section><h2>t</h2><p>x</p><canvas></canvas></section>")
        assert build_selector(next(doc.iter_elements("canvas"))) == "canvas:nth-child(3)"

    def test_selector_detached_root(self, make_doc):
        assert build_selector(make_doc("").root) == "html"


# ── Charts ───────────────────────────────────────────────────────


class TestCharts:
    def test_parent_class_marks_chart(self, make_doc):
        doc = make_doc(
            '<div class="Chart-Wrapper"><canvas id="sales" width="400" height="200"></canvas></div>',
            layout={"sales": Rect(1, 2, 400, 200)},
        )
        (chart,) = detect_charts(doc)
        assert chart.id == "sales"
        assert (chart.width, chart.height) == (400, 200)
        assert chart.position == BoundingBox(1, 2, 400, 200)

    def test_data_chart_type_attribute(self, make_doc):
        doc = make_doc('<div><p>x</p><canvas data-chart-type="bar"></canvas></div>')
        (chart,) = detect_charts(doc)
        assert chart.id == "canvas:nth-child(2)"
        # HTML default canvas size
        assert (chart.width, chart.height) == (300, 150)

    def test_plain_canvas_ignored(self, make_doc):
        assert detect_charts(make_doc('<div class="game"><canvas></canvas></div>')) == ()

    def test_empty_chart_type_ignored(self, make_doc):
        assert detect_charts(make_doc('<div><canvas data-chart-type=""></canvas></div>')) == ()

    def test_dimensions_with_units_use_leading_digits(self, make_doc):
        doc = make_doc('<div class="chart"><canvas width="400px" height=" 200.5"></canvas></div>')
        (chart,) = detect_charts(doc)
        assert (chart.width, chart.height) == (400, 200)

    def test_invalid_dimensions_fall_back(self, make_doc):
        doc = make_doc('<div class="plot"><canvas width="wide" height="-4"></canvas></div>')
        (chart,) = detect_charts(doc)
        assert (chart.width, chart.height) == (300, 150)


# ── Dashboards ───────────────────────────────────────────────────


class TestDashboards:
    def test_dense_widget_is_dashboard(self, make_doc):
        spans = "<span></span>" * 15
        (dash,) = detect_dashboards(make_doc(f'<div class="widget-panel">{spans}</div>'))
        assert dash.id == ".widget-panel"
        assert dash.children == 15

    def test_sparse_widget_is_not(self, make_doc):
        spans = "<span></span>" * 5
        assert detect_dashboards(make_doc(f'<div class="widget-panel">{spans}</div>')) == ()

    def test_exactly_ten_descendants_is_not(self, make_doc):
        spans = "<span></span>" * 10
        assert detect_dashboards(make_doc(f'<div class="widget">{spans}</div>')) == ()

    def test_id_match(self, make_doc):
        items = "<li></li>" * 11
        (dash,) = detect_dashboards(make_doc(f'<ul id="sales-dashboard">{items}</ul>'))
        assert dash.id == "sales-dashboard"

    def test_nested_candidates_both_reported(self, make_doc):
        inner = '<div class="widget">' + "<i></i>" * 12 + "</div>"
        found = detect_dashboards(make_doc(f'<div id="dashboard">{inner}</div>'))
        assert [d.id for d in found] == ["dashboard", ".widget"]


# ── SVG data visualizations ──────────────────────────────────────


class TestDataVisualizations:
    def test_many_shapes(self, make_doc):
        shapes = "<rect></rect>" * 6
        (viz,) = detect_data_visualizations(make_doc(f'<div><svg id="bars"><g>{shapes}</g></svg></div>'))
        assert viz.id == "bars"
        assert viz.type == "svg"
        assert viz.children == 7

    def test_chart_parent(self, make_doc):
        doc = make_doc('<div class="graph-box"><svg><path></path></svg></div>')
        (viz,) = detect_data_visualizations(doc)
        assert viz.id == "svg:nth-child(1)"

    def test_icon_svg_ignored(self, make_doc):
        doc = make_doc('<div class="icon"><svg><circle></circle><circle></circle></svg></div>')
        assert detect_data_visualizations(doc) == ()

