"""
DOM query capability consumed by the extraction pipeline.

The pipeline only needs a handful of operations on a rendered page: CSS
selection under a scope, trimmed text content, the class attribute, class
membership and subtree containment. ``DomScope`` names that capability;
``SoupScope`` implements it over a BeautifulSoup snapshot of ``page.content()``.
"""

from typing import List, Protocol, Union

from bs4 import BeautifulSoup, Tag


class DomScope(Protocol):
    """A DOM subtree root that selectors are evaluated against."""

    def select(self, selector: str) -> List["DomScope"]:
        ...

    @property
    def text(self) -> str:
        ...

    @property
    def class_name(self) -> str:
        ...

    def has_class(self, name: str) -> bool:
        ...

    def contains(self, other: "DomScope") -> bool:
        ...


class SoupScope:
    """DomScope backed by a BeautifulSoup document or element."""

    def __init__(self, node: Union[BeautifulSoup, Tag]):
        self.node = node

    @classmethod
    def from_html(cls, html: str) -> "SoupScope":
        return cls(BeautifulSoup(html or "", "html.parser"))

    def select(self, selector: str) -> List["SoupScope"]:
        return [SoupScope(tag) for tag in self.node.select(selector)]

    @property
    def text(self) -> str:
        # Mirrors textContent.trim() with runs of whitespace collapsed
        return " ".join(self.node.get_text().split())

    @property
    def class_name(self) -> str:
        classes = self.node.get("class") if isinstance(self.node, Tag) else None
        if not classes:
            return ""
        if isinstance(classes, str):
            return classes
        return " ".join(classes)

    def has_class(self, name: str) -> bool:
        return name in self.class_name.split()

    def contains(self, other: "SoupScope") -> bool:
        if other.node is self.node:
            return False
        return any(parent is self.node for parent in other.node.parents)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupScope) and other.node is self.node

    def __hash__(self) -> int:
        return id(self.node)

    def __repr__(self) -> str:
        name = getattr(self.node, "name", "?")
        return f"SoupScope(<{name} class={self.class_name!r}>)"
