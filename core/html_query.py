# core/html_query.py
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from .errors import MarkupError


class Node:
    """
    Thin wrapper over a BeautifulSoup Tag.
    Text lookups on missing nodes give "", attribute lookups give None.
    """

    def __init__(self, tag: Tag):
        self.tag = tag

    def __repr__(self) -> str:
        return f"Node({self.tag.name!r})"

    def find(self, selector: str) -> Optional["Node"]:
        found = self.tag.select_one(selector)
        return Node(found) if isinstance(found, Tag) else None

    def find_all(self, selector: str) -> List["Node"]:
        return [Node(t) for t in self.tag.select(selector) if isinstance(t, Tag)]

    def text(self, selector: str | None = None) -> str:
        node = self if selector is None else self.find(selector)
        if node is None:
            return ""
        return node.tag.get_text()

    def attr(self, name: str) -> Optional[str]:
        val = self.tag.get(name)
        if val is None:
            return None
        # class-like attributes come back as lists
        if isinstance(val, list):
            return " ".join(val)
        return str(val)

    def require_attr(self, selector: str, name: str) -> str:
        node = self.find(selector)
        if node is None:
            raise MarkupError(selector)
        val = node.attr(name)
        if val is None:
            raise MarkupError(selector, name)
        return val


class Document(Node):
    def __init__(self, html: str):
        super().__init__(BeautifulSoup(html, "html.parser"))
