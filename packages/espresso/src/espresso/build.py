"""Build pipeline.

Reads content files, parses and registers them with a pool of workers,
then runs the derivation passes on the finished route tree.
"""

import concurrent.futures
import logging
from dataclasses import dataclass, field
from pathlib import Path

from espresso.config import Config
from espresso.core.builder import ArticleParser, SiteBuilder
from espresso.core.passes import (
    UnresolvedLink,
    add_article_pages_to_index_pages,
    build_footer,
    build_list_pages,
    build_nav,
    build_related,
)
from espresso.core.site import Site
from espresso.parser import FrontMatterParser, ParseError

logger = logging.getLogger(__name__)

CONTENT_PATTERN = "*.md"


@dataclass
class BuildResult:
    """Finished site model plus build diagnostics."""

    site: Site
    file_count: int
    unresolved: list[UnresolvedLink] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        return [str(item) for item in self.unresolved]


def discover_content(content_dir: Path) -> list[Path]:
    """List content files below content_dir in sorted order.

    Returns an empty list if the directory doesn't exist.
    """
    if not content_dir.is_dir():
        return []
    return sorted(p for p in content_dir.rglob(CONTENT_PATTERN) if p.is_file())


def derive(site: Site, config: Config) -> list[UnresolvedLink]:
    """Run every derivation pass once over the finished tree.

    Returns:
        Related links that could not be resolved

    Raises:
        UnresolvedLinkError: If build.strict_related is set and links are unresolved
    """
    sort_pages = config.build.sort_pages
    build_list_pages(site, sort_pages)
    add_article_pages_to_index_pages(site, sort_pages)
    unresolved = build_related(site, strict=config.build.strict_related)
    build_nav(site, config.site.title, config.nav.nav_items(), override=config.nav.override)
    build_footer(site, config.footer.text, config.footer.footer_items())
    return unresolved


def _read_and_build(builder: SiteBuilder, path: Path) -> None:
    try:
        builder.build_page(path.read_bytes(), path)
    except ParseError as e:
        raise ParseError(f"{path}: {e}") from e


def ingest_files(builder: SiteBuilder, files: list[Path], workers: int) -> None:
    """Parse and register files in parallel.

    The first failure cancels all pending work and is re-raised; the
    partially built tree must then be discarded.
    """
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(_read_and_build, builder, path): path for path in files}
        for fut in concurrent.futures.as_completed(futures):
            try:
                fut.result()
            except Exception as e:
                logger.error(f"Failed to build {futures[fut]}: {e}")
                executor.shutdown(wait=True, cancel_futures=True)
                raise


def build_site(config: Config, parser: ArticleParser | None = None) -> BuildResult:
    """Build the complete site model for a configuration.

    Args:
        config: Application configuration
        parser: Content parser (default: FrontMatterParser)

    Returns:
        BuildResult with the finished site model
    """
    content_dir = config.build.content_dir
    files = discover_content(content_dir)
    logger.info(f"Building {len(files)} content files from {content_dir}")

    builder = SiteBuilder(content_dir, parser or FrontMatterParser())
    ingest_files(builder, files, config.build.workers)

    site = builder.site
    unresolved = derive(site, config)
    logger.info(f"Built site with {site.page_count()} pages")

    return BuildResult(site=site, file_count=len(files), unresolved=unresolved)
