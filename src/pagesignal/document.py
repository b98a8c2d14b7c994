# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Read-only document interface the analyzers run against.

The analyzers never touch a parser or a browser directly. They need four
capabilities: walk elements, read attributes/text, read a bounding box, and
read the serialized markup. ``PageDocument`` / ``PageElement`` capture that
contract; ``HtmlDocument`` implements it over ``lxml.html`` so a page can be
analyzed from an HTML snapshot plus an optional layout sidecar.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

import lxml.html
from lxml import etree
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidDocumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Rect:
    """Viewport-relative rectangle, as getBoundingClientRect() reports it."""

    top: float = 0.0
    left: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True, slots=True)
class ResourceEntry:
    """One buffered resource-timing entry."""

    name: str
    initiator_type: str = ""


_ZERO_RECT = Rect()


# ---------------------------------------------------------------------------
# Abstract interface
# ---------------------------------------------------------------------------


class PageElement(ABC):
    """A single element node. Text, comment and PI nodes are never exposed."""

    @property
    @abstractmethod
    def tag(self) -> str:
        """Lower-case tag name."""

    @abstractmethod
    def get(self, name: str) -> str | None:
        """Attribute value, or None when the attribute is absent."""

    @property
    @abstractmethod
    def parent(self) -> PageElement | None: ...

    @abstractmethod
    def children(self) -> list[PageElement]: ...

    @abstractmethod
    def iter_descendants(self, *tags: str) -> Iterator[PageElement]:
        """Descendants in document order (self excluded), optionally filtered by tag."""

    @abstractmethod
    def text(self) -> str:
        """Concatenated text content of the subtree."""

    @abstractmethod
    def rect(self) -> Rect: ...

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    @property
    def element_id(self) -> str:
        return self.get("id") or ""

    @property
    def class_name(self) -> str:
        return self.get("class") or ""

    @property
    def classes(self) -> tuple[str, ...]:
        return tuple(self.class_name.split())

    def has_ancestor(self, tag: str) -> bool:
        node = self.parent
        while node is not None:
            if node.tag == tag:
                return True
            node = node.parent
        return False


class PageDocument(ABC):
    """A whole page: element tree plus the side information a browser exposes."""

    @property
    @abstractmethod
    def url(self) -> str: ...

    @property
    @abstractmethod
    def title(self) -> str: ...

    @property
    def scroll_x(self) -> float:
        return 0.0

    @property
    def scroll_y(self) -> float:
        return 0.0

    @property
    @abstractmethod
    def root(self) -> PageElement: ...

    @abstractmethod
    def iter_elements(self, *tags: str) -> Iterator[PageElement]:
        """All elements in document order (root included), optionally filtered by tag."""

    @abstractmethod
    def outer_html(self) -> str: ...

    def resource_entries(self) -> tuple[ResourceEntry, ...]:
        return ()

    def resolve_url(self, ref: str) -> str:
        """Resolve ``ref`` against the document URL; unparseable input is kept verbatim."""
        if not self.url:
            return ref
        try:
            return urljoin(self.url, ref)
        except ValueError:
            return ref


# ---------------------------------------------------------------------------
# lxml implementation
# ---------------------------------------------------------------------------

LayoutSource = Mapping[str, Rect] | Callable[[PageElement], Rect] | None


def _is_element(node: Any) -> bool:
    # lxml yields comments / PIs with a callable tag
    return isinstance(node.tag, str)


class HtmlElementNode(PageElement):
    __slots__ = ("_el", "_doc")

    def __init__(self, el: lxml.html.HtmlElement, doc: HtmlDocument) -> None:
        self._el = el
        self._doc = doc

    def __eq__(self, other: object) -> bool:
        return isinstance(other, HtmlElementNode) and other._el is self._el

    def __hash__(self) -> int:
        return hash(self._el)

    def __repr__(self) -> str:
        return f"<HtmlElementNode {self.tag}>"

    @property
    def tag(self) -> str:
        return self._el.tag.lower()

    def get(self, name: str) -> str | None:
        return self._el.get(name)

    @property
    def parent(self) -> PageElement | None:
        p = self._el.getparent()
        if p is None or not _is_element(p):
            return None
        return HtmlElementNode(p, self._doc)

    def children(self) -> list[PageElement]:
        return [HtmlElementNode(c, self._doc) for c in self._el if _is_element(c)]

    def iter_descendants(self, *tags: str) -> Iterator[PageElement]:
        wanted = frozenset(tags)
        for d in self._el.iterdescendants():
            if not _is_element(d):
                continue
            if wanted and d.tag.lower() not in wanted:
                continue
            yield HtmlElementNode(d, self._doc)

    def text(self) -> str:
        return self._el.text_content()

    def rect(self) -> Rect:
        return self._doc.rect_for(self)


class _SidecarRect(BaseModel):
    top: float = 0.0
    left: float = 0.0
    width: float = 0.0
    height: float = 0.0


class _SidecarScroll(BaseModel):
    x: float = 0.0
    y: float = 0.0


class _SidecarResource(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    initiator_type: str = Field("", alias="initiatorType")


class SnapshotMeta(BaseModel):
    """JSON sidecar captured next to an HTML snapshot."""

    url: str = ""
    scroll: _SidecarScroll = Field(default_factory=_SidecarScroll)
    layout: dict[str, _SidecarRect] = Field(default_factory=dict)
    resources: list[_SidecarResource] = Field(default_factory=list)


def _parse_html(html: str | bytes) -> lxml.html.HtmlElement:
    if not html or not html.strip():
        return lxml.html.Element("html")
    try:
        return lxml.html.document_fromstring(html)
    except ValueError:
        # str input carrying an XML encoding declaration
        if isinstance(html, str):
            return _parse_html(html.encode("utf-8"))
        raise
    except etree.ParserError:
        logger.debug("Markup contained no elements; using empty document")
        return lxml.html.Element("html")


class HtmlDocument(PageDocument):
    """PageDocument over an lxml tree.

    Args:
        root: Parsed lxml root element.
        url: Document URL; relative form actions and hrefs resolve against it.
        layout: Element id -> Rect mapping, or a callable returning a Rect per
            element. Elements without layout report a zero rect.
        scroll: (scroll_x, scroll_y) page offsets.
        resources: Buffered resource-timing entries.
    """

    def __init__(
        self,
        root: lxml.html.HtmlElement,
        *,
        url: str = "",
        layout: LayoutSource = None,
        scroll: tuple[float, float] = (0.0, 0.0),
        resources: Iterable[ResourceEntry] = (),
    ) -> None:
        self._root = root
        self._url = url
        self._layout = layout
        self._scroll = (float(scroll[0]), float(scroll[1]))
        self._resources = tuple(resources)

    @classmethod
    def from_html(
        cls,
        html: str | bytes,
        *,
        url: str = "",
        layout: LayoutSource = None,
        scroll: tuple[float, float] = (0.0, 0.0),
        resources: Iterable[ResourceEntry] = (),
    ) -> HtmlDocument:
        return cls(_parse_html(html), url=url, layout=layout, scroll=scroll, resources=resources)

    @classmethod
    def from_snapshot(cls, html: str | bytes, meta: Mapping[str, Any] | None = None) -> HtmlDocument:
        """Build from HTML plus a sidecar dict (see SnapshotMeta)."""
        try:
            parsed = SnapshotMeta.model_validate(meta or {})
        except ValidationError as e:
            raise InvalidDocumentError(f"Invalid snapshot sidecar: {e.error_count()} error(s)") from e
        layout = {key: Rect(r.top, r.left, r.width, r.height) for key, r in parsed.layout.items()}
        return cls.from_html(
            html,
            url=parsed.url,
            layout=layout,
            scroll=(parsed.scroll.x, parsed.scroll.y),
            resources=[ResourceEntry(r.name, r.initiator_type) for r in parsed.resources],
        )

    @property
    def url(self) -> str:
        return self._url

    @property
    def title(self) -> str:
        for el in self._root.iter("title"):
            return " ".join(el.text_content().split())
        return ""

    @property
    def scroll_x(self) -> float:
        return self._scroll[0]

    @property
    def scroll_y(self) -> float:
        return self._scroll[1]

    @property
    def root(self) -> PageElement:
        return HtmlElementNode(self._root, self)

    def iter_elements(self, *tags: str) -> Iterator[PageElement]:
        wanted = frozenset(tags)
        for el in self._root.iter():
            if not _is_element(el):
                continue
            if wanted and el.tag.lower() not in wanted:
                continue
            yield HtmlElementNode(el, self)

    def outer_html(self) -> str:
        return lxml.html.tostring(self._root, encoding="unicode")

    def resource_entries(self) -> tuple[ResourceEntry, ...]:
        return self._resources

    def rect_for(self, node: PageElement) -> Rect:
        if self._layout is None:
            return _ZERO_RECT
        if callable(self._layout):
            return self._layout(node)
        key = node.element_id
        return self._layout.get(key, _ZERO_RECT) if key else _ZERO_RECT
