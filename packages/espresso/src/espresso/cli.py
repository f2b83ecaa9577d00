"""CLI interface for Espresso.

Command-line tool for building the site model of a content directory.
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from espresso.build import BuildResult, build_site
from espresso.config import Config
from espresso.core.site import Route

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Path to configuration file (default: auto-discover site.toml)",
)
content_dir_option = click.option(
    "--content-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Content directory (overrides config)",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


def _load_config(config_path: Path | None, **overrides: object) -> Config:
    try:
        config = Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))
    return config.with_overrides(**overrides)  # type: ignore[arg-type]


def _build(config: Config) -> BuildResult:
    try:
        return build_site(config)
    except Exception as e:
        _fail(str(e))


@click.group()
@click.version_option(package_name="espresso")
def cli() -> None:
    """Espresso - a static site model builder."""


@cli.command()
@config_option
@content_dir_option
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Output directory for plugin output (overrides config)",
)
@click.option(
    "--workers",
    "-j",
    type=click.IntRange(min=1),
    default=None,
    help="Number of parallel ingestion workers (overrides config)",
)
@click.option(
    "--sort/--no-sort",
    "sort_pages",
    default=None,
    help="Sort list pages by date, newest first (overrides config)",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail the build on unresolved related links",
)
@verbose_option
def build(
    config_path: Path | None,
    content_dir: Path | None,
    output_dir: Path | None,
    workers: int | None,
    sort_pages: bool | None,
    strict: bool | None,
    verbose: bool,
) -> None:
    """Build the site model and run output plugins."""
    from espresso.plugins import RenderContext, deliver
    from espresso.plugins.atom import AtomPlugin, FeedMeta

    _configure_logging(verbose)
    config = _load_config(
        config_path,
        content_dir=content_dir,
        output_dir=output_dir,
        workers=workers,
        sort_pages=sort_pages,
        strict_related=strict,
    )

    click.echo(f"Content directory: {config.build.content_dir}")
    result = _build(config)
    site = result.site

    plugins = []
    if config.atom.enabled:
        plugins.append(
            AtomPlugin(
                FeedMeta(
                    title=config.site.title,
                    base_url=config.site.base_url,
                    description=config.site.description,
                    author=config.site.author,
                    subtitle=config.site.subtitle,
                    copyright=config.site.copyright,
                ),
            ),
        )
    if plugins:
        try:
            deliver(site, plugins, RenderContext(target_dir=config.build.output_dir))
        except OSError as e:
            _fail(f"Failed to write plugin output: {e}")
        click.echo(f"Output directory: {config.build.output_dir}")

    click.echo(
        click.style("\nBuild completed successfully!", fg="green", bold=True),
    )
    click.echo(f"Files: {result.file_count}")
    click.echo(f"Pages: {site.page_count()}")
    click.echo(f"Routes: {sum(1 for _ in site.routes(include_root=False))}")

    if result.unresolved:
        click.echo(
            click.style(
                f"\nWarning: {len(result.unresolved)} related link(s) could not be resolved:",
                fg="yellow",
            ),
        )
        for warning in result.warnings:
            click.echo(f"  {warning}")


@cli.command()
@config_option
@content_dir_option
@verbose_option
def routes(config_path: Path | None, content_dir: Path | None, verbose: bool) -> None:
    """Print the route tree of the site."""
    _configure_logging(verbose)
    config = _load_config(config_path, content_dir=content_dir)
    site = _build(config).site

    for route in site.routes():
        click.echo(_describe_route(route))


def _describe_route(route: Route) -> str:
    depth = route.path.count("/") + 1 if route.path else 0
    name = f"{route.key}/" if route.path else "/"
    kind = "index" if route.index_page is not None else "list"
    return f"{'  ' * depth}{name} ({len(route.pages)} pages, {kind})"


@cli.command()
@config_option
@content_dir_option
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@verbose_option
def serve(
    config_path: Path | None,
    content_dir: Path | None,
    host: str | None,
    port: int | None,
    verbose: bool,
) -> None:
    """Build the site model and serve it as JSON."""
    from espresso.server import run_server

    _configure_logging(verbose)
    config = _load_config(config_path, content_dir=content_dir, host=host, port=port)
    site = _build(config).site

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Content directory: {config.build.content_dir}")
    run_server(config, site)
