# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for pagesignal.analyzer: end-to-end report assembly."""

from __future__ import annotations

import pytest

from pagesignal import (
    EndpointRef,
    FieldDetail,
    LinkRef,
    NetworkObservation,
    TableRef,
    analyze_page,
)
from pagesignal.document import ResourceEntry
from pagesignal.errors import InvalidDocumentError, PageSignalError

LOGIN_PAGE = """
<form action="/session" method="post">
  <input type="email" name="email" placeholder="you@example.com" required>
  <input type="password" name="password">
  <input type="hidden" name="csrf" value="t0k3n">
  <button type="submit">Sign in</button>
</form>
"""


def _table(rows: int = 2) -> str:
    body = "".join(f"<tr><td>{i}</td></tr>" for i in range(rows))
    return f"<table><tr><th>N</th></tr>{body}</table>"


class TestLoginScenario:
    def test_report(self, make_doc):
        report = analyze_page(make_doc(LOGIN_PAGE, head="<title> Sign  in </title>"))
        assert report.url == "https://example.com/page"
        assert report.title == "Sign in"
        assert (report.forms, report.buttons, report.inputs, report.links, report.tables) == (1, 1, 0, 0, 0)
        assert report.element_count == 2
        assert report.details.page_type == "login"
        assert report.warnings == ()

    def test_form_detail(self, make_doc):
        (form,) = analyze_page(make_doc(LOGIN_PAGE)).details.forms
        assert form.index == 0
        assert form.action == "https://example.com/session"
        assert form.method == "post"
        assert form.fields == (
            FieldDetail("email", "email", "you@example.com", True),
            FieldDetail("password", "password", "", False),
        )


class TestBoundaries:
    def test_empty_document(self, make_doc):
        report = analyze_page(make_doc("", url=""))
        assert report.url == ""
        assert report.title == ""
        assert report.element_count == 0
        assert report.details.forms == ()
        assert report.details.important_elements == ()
        assert report.details.page_type is None
        assert report.details.detected_apis is None
        assert report.apis.endpoints == ()
        assert report.apis.webhooks == ()
        assert report.visual_elements.charts == ()

    def test_element_count_is_sum(self, make_doc):
        doc = make_doc(
            '<form><input name="q"></form><form></form>'
            '<input name="loose"><select name="s"></select>'
            '<a href="/export.csv">Export</a><a href="/about">About</a>'
            '<div role="button">Go</div><a class="btn">Act</a>'
            + _table()
        )
        report = analyze_page(doc)
        assert (report.forms, report.inputs, report.buttons, report.links, report.tables) == (2, 2, 2, 1, 1)
        assert report.element_count == 8

    def test_idempotent(self, make_doc):
        doc = make_doc(LOGIN_PAGE + _table() + "<script>fetch('/api/me')</script>")
        assert analyze_page(doc) == analyze_page(doc)

    def test_five_tables(self, make_doc):
        report = analyze_page(make_doc(_table() * 5))
        assert report.tables == 5
        assert report.details.important_elements == (TableRef(headers=("N",), row_count=3),) * 3

    def test_links_before_tables_in_important_elements(self, make_doc):
        report = analyze_page(make_doc(_table() + '<a href="/data.json"> Data </a>'))
        assert report.details.important_elements == (
            LinkRef(text="Data", href="https://example.com/data.json"),
            TableRef(headers=("N",), row_count=3),
        )


class TestSignals:
    def test_dashboard_and_apis(self, make_doc):
        doc = make_doc(
            '<div class="dashboard-grid">' + "<span></span>" * 15 + "</div>"
            "<script>axios.post('/api/orders', o); hook('/webhooks/deploy');</script>"
        )
        report = analyze_page(doc)
        (dash,) = report.visual_elements.dashboards
        assert dash.children == 15
        assert report.apis.endpoints == (EndpointRef("/api/orders", "POST"),)
        assert [w.url for w in report.apis.webhooks] == ["/webhooks/deploy"]

    def test_detected_apis_from_resources(self, make_doc):
        doc = make_doc(
            "<p>x</p>",
            resources=[
                ResourceEntry("https://example.com/api/cart", "fetch"),
                ResourceEntry("https://example.com/hero.jpg", "img"),
            ],
        )
        assert analyze_page(doc).details.detected_apis == (
            NetworkObservation("https://example.com/api/cart", "fetch"),
        )


class TestDegradation:
    def test_failing_section_is_isolated(self, make_doc, monkeypatch):
        def boom(document):
            raise RuntimeError("detached node")

        monkeypatch.setattr("pagesignal.analyzer.count_buttons", boom)
        report = analyze_page(make_doc(LOGIN_PAGE))
        assert report.buttons == 0
        assert report.forms == 1
        assert report.details.page_type == "login"
        assert report.warnings == ("buttons analysis failed (RuntimeError): section left empty",)

    def test_failing_api_extraction(self, make_doc, monkeypatch):
        def boom(document):
            raise ValueError("bad regex input")

        monkeypatch.setattr("pagesignal.analyzer.extract_javascript_apis", boom)
        report = analyze_page(make_doc("<script>fetch('/api/x')</script>"))
        assert report.apis.endpoints == ()
        assert len(report.warnings) == 1
        assert report.warnings[0].startswith("apis analysis failed")


class TestInvalidDocument:
    @pytest.mark.parametrize("value", [None, "<html></html>", object()])
    def test_not_a_document(self, value):
        with pytest.raises(InvalidDocumentError):
            analyze_page(value)

    def test_is_page_signal_error(self):
        with pytest.raises(PageSignalError):
            analyze_page(None)
