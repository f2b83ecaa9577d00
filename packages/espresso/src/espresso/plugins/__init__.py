"""Output plugins.

Plugins consume the finished site model: they receive every visible
article page once and are finalized after the last page was delivered.
Writing their output is their own responsibility.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from espresso.core.model import Page
from espresso.core.site import Site

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderContext:
    """Output context handed to plugins."""

    target_dir: Path


class Plugin(Protocol):
    """Consumer of finished article pages."""

    def process_article_page(self, ctx: RenderContext, page: Page) -> None: ...

    def finalize(self, ctx: RenderContext) -> None: ...


def deliver(site: Site, plugins: Iterable[Plugin], ctx: RenderContext) -> int:
    """Feed every visible article page to each plugin, then finalize them.

    Pages are delivered in canonical order: routes sorted by key, pages
    in their registration order.

    Returns:
        Number of pages delivered to each plugin
    """
    plugins = list(plugins)
    pages = [page for route in site.routes() for page in route.visible_pages()]

    for plugin in plugins:
        for page in pages:
            plugin.process_article_page(ctx, page)
        plugin.finalize(ctx)
        logger.debug(f"Finalized plugin {type(plugin).__name__} with {len(pages)} pages")

    return len(pages)
