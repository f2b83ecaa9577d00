"""Atom feed plugin.

Collects one feed entry per visible article and writes ``atom.xml``
into the target directory on finalize.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from xml.etree import ElementTree as ET

from espresso.core.model import Page
from espresso.plugins import RenderContext

FILENAME = "atom.xml"
ATOM_NS = "http://www.w3.org/2005/Atom"


@dataclass
class FeedMeta:
    """Feed metadata, populated from the [site] config section."""

    title: str
    base_url: str
    description: str = ""
    author: str = ""
    subtitle: str = ""
    copyright: str = ""


@dataclass
class FeedEntry:
    """Single feed entry."""

    title: str
    link: str
    description: str
    created: datetime


@dataclass
class AtomPlugin:
    """Generates an Atom feed from article pages."""

    meta: FeedMeta
    created: datetime = field(default_factory=lambda: datetime.now(UTC))
    entries: list[FeedEntry] = field(default_factory=list)

    def process_article_page(self, ctx: RenderContext, page: Page) -> None:
        """Add a feed entry for the page. Hidden articles are ignored."""
        if page.article.hide:
            return

        self.entries.append(
            FeedEntry(
                title=page.article.title,
                link=self.absolute_url(page),
                description=page.article.description,
                created=page.article.date,
            ),
        )

    def absolute_url(self, page: Page) -> str:
        """Absolute URL of an article page, e.g. https://example.com/blog/post-1."""
        return f"{self.meta.base_url.rstrip('/')}/{page.url_path}"

    def to_xml(self) -> bytes:
        """Serialize the feed as Atom XML."""
        ET.register_namespace("", ATOM_NS)
        feed = ET.Element(f"{{{ATOM_NS}}}feed")

        _sub(feed, "title", self.meta.title)
        _sub(feed, "id", self.meta.base_url)
        ET.SubElement(feed, f"{{{ATOM_NS}}}link", href=self.meta.base_url)
        _sub(feed, "updated", _latest(self.entries, self.created).isoformat())
        if self.meta.subtitle or self.meta.description:
            _sub(feed, "subtitle", self.meta.subtitle or self.meta.description)
        if self.meta.author:
            author = ET.SubElement(feed, f"{{{ATOM_NS}}}author")
            _sub(author, "name", self.meta.author)
        if self.meta.copyright:
            _sub(feed, "rights", self.meta.copyright)

        for entry in self.entries:
            element = ET.SubElement(feed, f"{{{ATOM_NS}}}entry")
            _sub(element, "title", entry.title)
            ET.SubElement(element, f"{{{ATOM_NS}}}link", href=entry.link, rel="alternate")
            _sub(element, "id", entry.link)
            _sub(element, "published", entry.created.isoformat())
            _sub(element, "updated", entry.created.isoformat())
            if entry.description:
                _sub(element, "summary", entry.description)

        return ET.tostring(feed, encoding="utf-8", xml_declaration=True)

    def finalize(self, ctx: RenderContext) -> None:
        """Write the feed to atom.xml in the target directory."""
        ctx.target_dir.mkdir(parents=True, exist_ok=True)
        (ctx.target_dir / FILENAME).write_bytes(self.to_xml())


def _sub(parent: ET.Element, tag: str, text: str) -> ET.Element:
    element = ET.SubElement(parent, f"{{{ATOM_NS}}}{tag}")
    element.text = text
    return element


def _latest(entries: list[FeedEntry], fallback: datetime) -> datetime:
    if not entries:
        return fallback
    return max(entry.created for entry in entries)
