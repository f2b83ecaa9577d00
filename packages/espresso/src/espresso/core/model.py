"""Site model entities.

Articles come from the parser, pages bind an article to its route, and
list/index pages, navigation and footer are views derived from the
finished route tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TypedDict

from espresso.core.types import RoutePath, join_route


class MalformedLinkError(ValueError):
    """Related link cannot be split into a route path and an article id."""


class PageRefDict(TypedDict):
    """Dictionary representation of a page reference."""

    path: str
    id: str
    title: str


@dataclass(frozen=True)
class RelatedLink:
    """Reference from one article to another.

    Written in front matter as ``<route-path>/<article-id>``, for example
    ``blog/coffee/roasting-basics``.
    """

    route_path: RoutePath
    article_id: str

    @classmethod
    def parse(cls, raw: str) -> RelatedLink:
        """Parse a link string into its route path and article id.

        Args:
            raw: Link string, e.g. "blog/post-1" or "/blog/post-1"

        Returns:
            RelatedLink instance

        Raises:
            MalformedLinkError: If the link has no article id
        """
        normalized = raw.strip().strip("/")
        path, _, article_id = normalized.rpartition("/")
        if not article_id:
            raise MalformedLinkError(f"Related link has no article id: {raw!r}")
        return cls(route_path=RoutePath(path), article_id=article_id)

    def __str__(self) -> str:
        return join_route(self.route_path, self.article_id)


@dataclass
class Article:
    """Parsed content unit."""

    title: str
    date: datetime
    id: str = ""
    description: str = ""
    hide: bool = False
    author: str = ""
    tags: list[str] = field(default_factory=list)
    related: list[RelatedLink] = field(default_factory=list)
    content: str = ""
    # Populated by the related-article pass
    related_pages: list[Page] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat(),
            "author": self.author,
            "tags": list(self.tags),
            "related": [page.to_ref() for page in self.related_pages],
            "content": self.content,
        }


@dataclass(frozen=True, eq=False)
class Page:
    """An article bound to the route it was registered under.

    Compared by identity: a resolved related page is the registered object.
    """

    path: RoutePath
    article: Article

    @property
    def url_path(self) -> str:
        """Route path plus article id, e.g. "blog/post-1"."""
        return join_route(self.path, self.article.id)

    def to_ref(self) -> PageRefDict:
        """Convert to a compact reference for JSON serialization."""
        return {"path": self.path, "id": self.article.id, "title": self.article.title}


@dataclass
class ListPage:
    """Route-scoped overview of visible pages."""

    path: RoutePath
    article_pages: list[Page] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": "list",
            "path": self.path,
            "pages": [page.to_ref() for page in self.article_pages],
        }


@dataclass
class IndexPage:
    """User-provided landing page of a route.

    After derivation it also references every visible page of the site.
    """

    path: RoutePath
    article: Article
    article_pages: list[Page] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": "index",
            "path": self.path,
            "article": self.article.to_dict(),
            "pages": [page.to_ref() for page in self.article_pages],
        }


@dataclass(frozen=True)
class NavItem:
    """Navigation entry."""

    label: str
    target: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"label": self.label, "target": self.target}


@dataclass
class Nav:
    """Site navigation bar."""

    brand: str
    items: list[NavItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"brand": self.brand, "items": [item.to_dict() for item in self.items]}


@dataclass(frozen=True)
class FooterItem:
    """Footer link."""

    label: str
    target: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"label": self.label, "target": self.target}


@dataclass
class Footer:
    """Site footer."""

    text: str = ""
    items: list[FooterItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"text": self.text, "items": [item.to_dict() for item in self.items]}
