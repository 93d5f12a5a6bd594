"""Markup extraction for the provider overview and yearly ranking pages.

All knowledge of the page structure lives behind :class:`MarkupExtractor`;
missing nodes degrade to empty strings or empty lists, never exceptions.
"""

from __future__ import annotations

from selectolax.parser import HTMLParser, Node

from ..config import PageSelectors
from .records import ProviderListing, RawMovie


class MarkupExtractor:
    """Locate list containers and marked entries, then pull typed fields."""

    def __init__(self, selectors: PageSelectors | None = None) -> None:
        self.selectors = selectors or PageSelectors()

    # ------------------------------------------------------------------
    # Structural lookups
    # ------------------------------------------------------------------
    @staticmethod
    def parse(html: str) -> HTMLParser:
        return HTMLParser(html)

    @staticmethod
    def find_container(document: HTMLParser | Node, selector: str) -> Node | None:
        """Return the first node matching ``selector`` or ``None``."""

        return document.css_first(selector)

    @staticmethod
    def find_entries(container: Node, marker: str, limit: int | None = None) -> list[Node]:
        """Return descendants of ``container`` matching ``marker`` in document order."""

        entries = container.css(marker)
        return _cap(entries, limit)

    @staticmethod
    def outer_items(container: Node, selector: str, limit: int | None = None) -> list[Node]:
        """Return descendants matching ``selector`` that are not nested in another match.

        Wrappers between the container and the items (``div > ul > li``) are
        allowed; items inside a matched item are skipped.
        """

        matches = container.css(selector)
        matched_ids = {node.mem_id for node in matches}
        items: list[Node] = []
        for node in matches:
            parent = node.parent
            nested = False
            while parent is not None and parent.mem_id != container.mem_id:
                if parent.mem_id in matched_ids:
                    nested = True
                    break
                parent = parent.parent
            if not nested:
                items.append(node)
        return _cap(items, limit)

    # ------------------------------------------------------------------
    # Typed extraction
    # ------------------------------------------------------------------
    def extract_providers(self, html: str, limit: int | None = None) -> list[ProviderListing]:
        sel = self.selectors
        container = self.find_container(self.parse(html), sel.provider_list)
        if container is None:
            return []
        providers: list[ProviderListing] = []
        for item in self.outer_items(container, sel.provider_item, limit):
            anchor = item.css_first(sel.provider_link)
            if anchor is None:
                providers.append(ProviderListing(name=None, url=None))
                continue
            providers.append(
                ProviderListing(
                    name=anchor.attributes.get("title"),
                    url=anchor.attributes.get("href"),
                )
            )
        return providers

    def extract_movies(self, html: str, provider_label: str, limit: int | None = None) -> list[RawMovie]:
        sel = self.selectors
        container = self.find_container(self.parse(html), sel.ranking_container)
        if container is None:
            return []
        return [
            RawMovie(
                title=self.movie_title(entry),
                rating_text=self.movie_rating(entry),
                provider_name=provider_label,
            )
            for entry in self.find_entries(container, sel.ranking_entry, limit)
        ]

    def movie_title(self, entry: Node) -> str:
        """Text of the title link, verbatim, or ``""`` when blank or missing."""

        sel = self.selectors
        title = "".join(
            link.text()
            for title_node in entry.css(sel.title_node)
            for link in title_node.css(sel.title_link)
        )
        if not title.strip():
            return ""
        return title

    def movie_rating(self, entry: Node) -> str:
        return "".join(node.text() for node in entry.css(self.selectors.rating_node))


def _cap(nodes: list[Node], limit: int | None) -> list[Node]:
    if limit is None:
        return list(nodes)
    if limit <= 0:
        return []
    return list(nodes[:limit])


__all__ = ["MarkupExtractor"]
