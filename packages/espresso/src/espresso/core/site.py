"""Route tree for the site model.

A website route like ``blog/my-category`` is represented as nested
routes keyed by path segment::

    "" (root)
    └── "blog"
        └── "my-category"   # pages registered under blog/my-category

Routes are created lazily on first registration and never removed
during a build.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from espresso.core import walker
from espresso.core.model import Footer, IndexPage, ListPage, Nav, Page
from espresso.core.types import ROOT_PATH, RoutePath, join_route, split_route


class RouteNotFoundError(LookupError):
    """No route exists for the requested path."""


class DuplicatePageError(ValueError):
    """A route already holds a page with the same article id."""


class Route:
    """Node of the route tree.

    Holds the pages registered directly under the route, its child
    routes and, after derivation, either an index page or a list page.
    """

    __slots__ = ("_page_ids", "children", "index_page", "key", "list_page", "pages", "path")

    def __init__(self, key: str, path: RoutePath) -> None:
        """Initialize an empty route.

        Args:
            key: Segment under which the route hangs in its parent ("" for the root)
            path: Full route path
        """
        self.key = key
        self.path = path
        self.pages: list[Page] = []
        self.children: dict[str, Route] = {}
        self.index_page: IndexPage | None = None
        self.list_page: ListPage | None = None
        self._page_ids: dict[str, Page] = {}

    def child(self, key: str) -> Route:
        """Get the child route for key, creating it if necessary."""
        node = self.children.get(key)
        if node is None:
            node = Route(key, join_route(self.path, key))
            self.children[key] = node
        return node

    def add_page(self, page: Page) -> None:
        """Append a page to this route.

        Raises:
            DuplicatePageError: If a page with the same article id exists
        """
        article_id = page.article.id
        if article_id in self._page_ids:
            raise DuplicatePageError(
                f"Route {self.path!r} already has a page with id {article_id!r}",
            )
        self._page_ids[article_id] = page
        self.pages.append(page)

    def find_page(self, article_id: str) -> Page | None:
        """Get the page with the given article id, None if not registered."""
        return self._page_ids.get(article_id)

    def visible_pages(self) -> list[Page]:
        """Pages whose article is not hidden, in registration order."""
        return [page for page in self.pages if not page.article.hide]

    def __repr__(self) -> str:
        return f"Route(path={self.path!r}, pages={len(self.pages)}, children={len(self.children)})"


class Site:
    """The website model.

    Owns the root route that holds all sub-routes: ``blog`` is a child
    of the root. Navigation and footer are attached by the derivation
    passes.
    """

    def __init__(self) -> None:
        self.root = Route("", ROOT_PATH)
        self.nav: Nav | None = None
        self.footer: Footer | None = None

    def insert(self, page: Page) -> Route:
        """Register a page under the route stored in page.path.

        Missing routes along the path are created. An empty path appends
        the page to the root.

        Returns:
            The route the page was appended to
        """
        route = self._ensure_route(page.path)
        route.add_page(page)
        return route

    def insert_index(self, index_page: IndexPage) -> Route:
        """Register a route's index page.

        Raises:
            DuplicatePageError: If the route already has an index page
        """
        route = self._ensure_route(index_page.path)
        if route.index_page is not None:
            raise DuplicatePageError(f"Route {route.path!r} already has an index page")
        route.index_page = index_page
        return route

    def lookup(self, path: str) -> Route:
        """Resolve a route path to its route.

        Args:
            path: Route path (e.g., "blog/coffee", "/blog/coffee" or "" for the root)

        Returns:
            The route at that path

        Raises:
            RouteNotFoundError: If any segment of the path is missing
        """
        node = self.root
        for segment in split_route(path):
            child = node.children.get(segment)
            if child is None:
                raise RouteNotFoundError(f"Route not found: {path!r}")
            node = child
        return node

    def get_route(self, path: str) -> Route | None:
        """Like lookup, but return None for unknown paths."""
        try:
            return self.lookup(path)
        except RouteNotFoundError:
            return None

    def walk(
        self,
        fn: Callable[[Route], None],
        depth: int = walker.UNBOUNDED,
        *,
        include_root: bool = False,
        sort: bool = False,
    ) -> None:
        """Invoke fn for each route below the root, see walker.walk."""
        walker.walk(self.root, depth, fn, include_root=include_root, sort=sort)

    def routes(self, *, include_root: bool = True, sort: bool = True) -> Iterator[Route]:
        """Iterate over all routes, root first, siblings in key order by default."""
        return walker.iter_routes(self.root, include_root=include_root, sort=sort)

    def page_count(self) -> int:
        """Number of ordinary pages registered in the whole tree."""
        return sum(len(route.pages) for route in self.routes())

    def _ensure_route(self, path: str) -> Route:
        node = self.root
        for segment in split_route(path):
            node = node.child(segment)
        return node
