"""Shared test fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest
from espresso.config import AtomConfig, BuildConfig, Config, FooterConfig, NavConfig, ServerConfig, SiteConfig
from espresso.core.model import Article, RelatedLink

ArticleFactory = Callable[..., Article]


@pytest.fixture
def make_article() -> ArticleFactory:
    """Factory for articles with sensible defaults.

    Dates are given as "YYYY-MM-DD" strings, related links as raw strings.
    """

    def factory(
        article_id: str = "post",
        *,
        date: str = "2023-01-01",
        hide: bool = False,
        related: list[str] | None = None,
        title: str | None = None,
    ) -> Article:
        return Article(
            id=article_id,
            title=title or article_id.replace("-", " ").title(),
            date=datetime.fromisoformat(date).replace(tzinfo=UTC),
            hide=hide,
            related=[RelatedLink.parse(link) for link in related or []],
        )

    return factory


@pytest.fixture
def write_content(tmp_path: Path) -> Callable[..., Path]:
    """Write a content file with TOML front matter below tmp_path/content."""
    content_dir = tmp_path / "content"

    def writer(
        relative: str,
        *,
        title: str = "Post",
        date: str = "2023-01-01",
        hide: bool = False,
        related: list[str] | None = None,
        body: str = "Body.\n",
    ) -> Path:
        path = content_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        related_toml = ", ".join(f'"{link}"' for link in related or [])
        path.write_text(
            "+++\n"
            f'title = "{title}"\n'
            f"date = {date}\n"
            f"hide = {'true' if hide else 'false'}\n"
            f"related = [{related_toml}]\n"
            "+++\n\n"
            f"{body}",
            encoding="utf-8",
        )
        return path

    return writer


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Create a test configuration with tmp_path directories.

    Creates the content dir and returns a Config suitable for testing.
    """
    content_dir = tmp_path / "content"
    content_dir.mkdir(exist_ok=True)

    return Config(
        site=SiteConfig(title="Coffee Blog", base_url="https://example.com"),
        nav=NavConfig(),
        footer=FooterConfig(),
        build=BuildConfig(content_dir=content_dir, output_dir=tmp_path / "target", workers=4),
        atom=AtomConfig(),
        server=ServerConfig(),
    )
