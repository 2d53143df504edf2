# core/errors.py


class FeedError(Exception):
    """Base error for feed extraction."""


class UnknownCategoryError(FeedError, ValueError):
    """Raised for a favorite-state key outside the known set."""

    def __init__(self, caty: str):
        self.caty = caty
        super().__init__(f"Unknown category {caty!r}")


class MarkupError(FeedError):
    """
    Raised when a node required to build an item is missing from the page.
    Aborts the whole extraction rather than skipping the item.
    """

    def __init__(self, selector: str, attr: str | None = None):
        self.selector = selector
        self.attr = attr
        if attr:
            msg = f"Missing attribute {attr!r} on {selector!r}"
        else:
            msg = f"Missing node {selector!r}"
        super().__init__(msg)
