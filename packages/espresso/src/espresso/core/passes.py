"""Derivation passes over the finished route tree.

Each pass runs once per build, after all pages have been registered:
list pages, index page aggregates, related articles, navigation and
footer.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from espresso.core.model import Article, Footer, FooterItem, ListPage, Nav, NavItem, Page, RelatedLink
from espresso.core.site import RouteNotFoundError, Site
from espresso.core.walker import iter_routes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnresolvedLink:
    """Related link that points to no registered page."""

    source: Page
    link: RelatedLink
    reason: str

    def __str__(self) -> str:
        return f"{self.source.url_path}: related link {str(self.link)!r} {self.reason}"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a single related link."""

    link: RelatedLink
    page: Page | None
    reason: str = ""

    @property
    def found(self) -> bool:
        return self.page is not None


class UnresolvedLinkError(Exception):
    """Raised in strict mode when related links cannot be resolved."""

    def __init__(self, unresolved: list[UnresolvedLink]) -> None:
        self.unresolved = unresolved
        details = "\n".join(f"  {item}" for item in unresolved)
        super().__init__(f"{len(unresolved)} related link(s) could not be resolved:\n{details}")


def _sorted_by_date(pages: Iterable[Page]) -> list[Page]:
    # sorted() is stable with reverse=True: equal dates keep their order
    return sorted(pages, key=lambda page: page.article.date, reverse=True)


def build_list_pages(site: Site, sort_pages: bool = True) -> None:
    """Build overview pages for every route without an index page.

    Hidden articles are skipped. With sort_pages, the newest article
    comes first. Routes that have an index page keep list_page None.
    """
    count = 0
    for route in site.routes():
        if route.index_page is not None:
            continue
        pages = route.visible_pages()
        if sort_pages:
            pages = _sorted_by_date(pages)
        route.list_page = ListPage(path=route.path, article_pages=pages)
        count += 1
    logger.debug(f"Built {count} list pages")


def collect_visible_pages(site: Site, sort_pages: bool = True) -> list[Page]:
    """Collect every visible page of the site in canonical order.

    Routes are visited in key order and pages in registration order;
    with sort_pages the result is then ordered newest first.
    """
    pages = [page for route in site.routes() for page in route.visible_pages()]
    if sort_pages:
        pages = _sorted_by_date(pages)
    return pages


def add_article_pages_to_index_pages(site: Site, sort_pages: bool = True) -> None:
    """Attach all visible pages of the site to every index page.

    An index page is a site-wide feed, not a subtree feed. The visible
    pages are collected once and each index page gets its own copy.
    """
    index_pages = [route.index_page for route in site.routes() if route.index_page is not None]
    if not index_pages:
        return

    visible = collect_visible_pages(site, sort_pages)
    for index_page in index_pages:
        index_page.article_pages.extend(visible)
    logger.debug(f"Attached {len(visible)} pages to {len(index_pages)} index pages")


def resolve_link(site: Site, link: RelatedLink) -> Resolution:
    """Resolve a related link to the registered page it points to.

    A link to a hidden article does not resolve.
    """
    try:
        route = site.lookup(link.route_path)
    except RouteNotFoundError:
        return Resolution(link=link, page=None, reason="points to an unknown route")

    page = route.find_page(link.article_id)
    if page is None:
        return Resolution(link=link, page=None, reason="points to an unknown article")
    if page.article.hide:
        return Resolution(link=link, page=None, reason="points to a hidden article")
    return Resolution(link=link, page=page)


def _linking_pages(site: Site) -> list[tuple[Page, Article]]:
    result: list[tuple[Page, Article]] = []
    for route in site.routes():
        result.extend((page, page.article) for page in route.pages)
        if route.index_page is not None:
            index = route.index_page
            result.append((Page(path=index.path, article=index.article), index.article))
    return result


def build_related(site: Site, *, strict: bool = False) -> list[UnresolvedLink]:
    """Store the related pages of each article.

    Resolved pages are appended to ``article.related_pages`` so templates
    can access their fields. Links that resolve to nothing are logged and
    returned.

    Args:
        site: Finished site model
        strict: Raise instead of returning when links are unresolved

    Returns:
        List of unresolved links, empty when everything resolved

    Raises:
        UnresolvedLinkError: If strict and any link is unresolved
    """
    unresolved: list[UnresolvedLink] = []

    for source, article in _linking_pages(site):
        for link in article.related:
            resolution = resolve_link(site, link)
            if resolution.page is not None:
                article.related_pages.append(resolution.page)
                continue
            miss = UnresolvedLink(source=source, link=link, reason=resolution.reason)
            logger.warning(f"Unresolved related link: {miss}")
            unresolved.append(miss)

    if strict and unresolved:
        raise UnresolvedLinkError(unresolved)
    return unresolved


def build_nav(
    site: Site,
    brand: str,
    items: Iterable[NavItem] = (),
    *,
    override: bool = False,
) -> Nav:
    """Build the navigation bar and attach it to the site.

    Configured items come first. Unless override is set, every top-level
    route is appended as an item, in key order.
    """
    nav = Nav(brand=brand, items=list(items))

    if not override:
        for route in iter_routes(site.root, 1, sort=True):
            nav.items.append(NavItem(label=route.key.title(), target=route.key))

    site.nav = nav
    return nav


def build_footer(site: Site, text: str = "", items: Iterable[FooterItem] = ()) -> Footer:
    """Build the footer from settings and attach it to the site."""
    footer = Footer(text=text, items=list(items))
    site.footer = footer
    return footer
