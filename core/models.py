# core/models.py
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Tuple

from .errors import UnknownCategoryError

CATEGORY_LABELS = MappingProxyType(
    {
        "want": "想买",
        "preorder": "预定",
        "buy": "已入",
        "care": "关注",
        "resell": "有过",
    }
)


def category_label(caty: str) -> str:
    """Return the display label for a favorite-state key."""
    try:
        return CATEGORY_LABELS[caty]
    except KeyError:
        raise UnknownCategoryError(caty) from None


@dataclass(frozen=True)
class FeedItem:
    title: str
    link: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "link": self.link,
            "description": self.description,
        }


@dataclass(frozen=True)
class Feed:
    """
    Normalized feed handed to the syndication layer.
    Items keep the document order of the scraped page.
    """
    title: str
    link: str
    item: Tuple[FeedItem, ...] = field(default_factory=tuple)
    allow_empty: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "item": [it.to_dict() for it in self.item],
            "allowEmpty": self.allow_empty,
        }
