"""Concurrent-safe construction of the site model.

The builder turns parsed articles into pages and registers them in the
route tree. Parsing runs outside the lock and may proceed fully in
parallel; only the structural insert is serialized.
"""

import logging
import threading
from pathlib import Path, PurePath
from typing import Protocol

from espresso.core.model import Article, IndexPage, Page
from espresso.core.site import Site
from espresso.core.types import RoutePath

logger = logging.getLogger(__name__)

INDEX_ID = "index"


class MalformedPathError(ValueError):
    """Content file path cannot be reduced to a route path."""


class ArticleParser(Protocol):
    """Turns the raw bytes of a content file into an Article."""

    def parse(self, source: bytes) -> Article: ...


class SiteBuilder:
    """Builds the site model from content files.

    Exclusively owns the route tree while ingestion runs. The lock is
    private: callers only see the register/ingest entry points.
    """

    def __init__(self, content_root: Path, parser: ArticleParser | None = None) -> None:
        """Initialize builder.

        Args:
            content_root: Directory all content file paths are relative to
            parser: Parser used by build_page (not needed for ingest)
        """
        self._content_root = PurePath(content_root)
        self._parser = parser
        self._site = Site()
        self._lock = threading.Lock()

    @property
    def content_root(self) -> PurePath:
        """Directory all content file paths are relative to."""
        return self._content_root

    @property
    def site(self) -> Site:
        """The site model. Only read it once all registrations are done."""
        return self._site

    def route_for(self, raw_path: str | PurePath) -> tuple[RoutePath, str]:
        """Compute route path and article id for a content file.

        If the content root is ``my-site/content``, the file
        ``my-site/content/blog/coffee/roasting.md`` lives on route
        ``blog/coffee`` with id ``roasting``.

        Args:
            raw_path: Path of the content file, including the content root

        Returns:
            Tuple of (route path, article id)

        Raises:
            MalformedPathError: If the path is not below the content root
                or contains ".." segments
        """
        try:
            relative = PurePath(raw_path).relative_to(self._content_root)
        except ValueError as e:
            raise MalformedPathError(
                f"{raw_path} is not inside content root {self._content_root}",
            ) from e

        if not relative.parts or not relative.stem:
            raise MalformedPathError(f"{raw_path} does not name a content file")

        if ".." in relative.parts:
            raise MalformedPathError(f"{raw_path} escapes content root {self._content_root}")

        route = relative.parent.as_posix()
        if route == ".":
            route = ""
        return RoutePath(route), relative.stem

    def ingest(self, raw_path: str | PurePath, article: Article) -> Page:
        """Register an already parsed article.

        A file named ``index`` becomes the index page of its route
        instead of an ordinary page.

        Args:
            raw_path: Path of the content file, including the content root
            article: Parsed article; its id is set from the file name

        Returns:
            The page binding the article to its route (the registered
            object for ordinary pages)

        Raises:
            MalformedPathError: If the path is not below the content root
        """
        route, article_id = self.route_for(raw_path)
        article.id = article_id

        page = Page(path=route, article=article)
        if article_id == INDEX_ID:
            self.register_index(IndexPage(path=route, article=article))
        else:
            self.register(page)

        return page

    def build_page(self, source: bytes, raw_path: str | PurePath) -> Page:
        """Parse a content file and register the result.

        Safe for concurrent invocation. Parse errors propagate unchanged.
        """
        if self._parser is None:
            raise RuntimeError("SiteBuilder was created without a parser")
        article = self._parser.parse(source)
        return self.ingest(raw_path, article)

    def register(self, page: Page) -> None:
        """Register a page in the route tree.

        Safe for concurrent invocation.
        """
        with self._lock:
            self._site.insert(page)
        logger.debug(f"Registered page {page.url_path}")

    def register_index(self, index_page: IndexPage) -> None:
        """Register an index page for its route.

        Safe for concurrent invocation.
        """
        with self._lock:
            self._site.insert_index(index_page)
        logger.debug(f"Registered index page for route {index_page.path!r}")
