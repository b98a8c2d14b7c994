# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Form structure: every <form> counted, forms with visible fields detailed."""

from __future__ import annotations

from dataclasses import dataclass

from . import FieldDetail, FormDetail
from .document import PageDocument, PageElement

FIELD_TAGS = ("input", "textarea", "select")

# Input types a browser recognizes; anything else falls back to "text"
INPUT_TYPES = frozenset(
    {
        "button",
        "checkbox",
        "color",
        "date",
        "datetime-local",
        "email",
        "file",
        "hidden",
        "image",
        "month",
        "number",
        "password",
        "radio",
        "range",
        "reset",
        "search",
        "submit",
        "tel",
        "text",
        "time",
        "url",
        "week",
    }
)

_NO_ACTION = "no-action"
_DEFAULT_METHOD = "GET"


@dataclass(frozen=True, slots=True)
class FormSummary:
    count: int
    details: tuple[FormDetail, ...]


def field_type(element: PageElement) -> str:
    """Reflected control type, as a browser reports it.

    Only <input> reads its type attribute; missing or unknown values report
    ``text``. <textarea> and <select> always report their tag name.
    """
    if element.tag != "input":
        return element.tag
    declared = (element.get("type") or "").strip().lower()
    return declared if declared in INPUT_TYPES else "text"


def is_hidden_field(element: PageElement) -> bool:
    return element.tag == "input" and field_type(element) == "hidden"


def _field_detail(element: PageElement) -> FieldDetail:
    return FieldDetail(
        type=field_type(element),
        name=element.get("name") or element.element_id or "unnamed",
        placeholder=element.get("placeholder") or "",
        required=element.has("required"),
    )


def _form_action(form: PageElement, document: PageDocument) -> str:
    action = (form.get("action") or "").strip()
    if not action:
        return _NO_ACTION
    return document.resolve_url(action)


def analyze_forms(document: PageDocument) -> FormSummary:
    forms = list(document.iter_elements("form"))
    details: list[FormDetail] = []
    for index, form in enumerate(forms):
        fields = tuple(_field_detail(el) for el in form.iter_descendants(*FIELD_TAGS) if not is_hidden_field(el))
        if not fields:
            continue
        details.append(
            FormDetail(
                index=index,
                action=_form_action(form, document),
                method=form.get("method") or _DEFAULT_METHOD,
                fields=fields,
            )
        )
    return FormSummary(count=len(forms), details=tuple(details))
