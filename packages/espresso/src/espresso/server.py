"""aiohttp inspector server for Espresso.

Serves a built site model as read-only JSON for previewing navigation,
list and index pages while working on content.
"""

from aiohttp import web

from espresso.api.config import create_config_routes
from espresso.api.navigation import create_navigation_routes
from espresso.api.pages import create_pages_routes
from espresso.api.routes import create_route_routes
from espresso.app_keys import config_key, site_key
from espresso.build import build_site
from espresso.config import Config
from espresso.core.site import Site


def create_app(config: Config, site: Site | None = None) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        site: Prebuilt site model (default: build one from config)

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    if site is None:
        site = build_site(config).site

    app[site_key] = site
    app[config_key] = config

    app.router.add_routes(create_config_routes())
    app.router.add_routes(create_navigation_routes())
    app.router.add_routes(create_route_routes())
    app.router.add_routes(create_pages_routes())

    return app


def run_server(config: Config, site: Site | None = None) -> None:
    """Run the server.

    Args:
        config: Application configuration
        site: Prebuilt site model (default: build one from config)
    """
    app = create_app(config, site)
    web.run_app(app, host=config.server.host, port=config.server.port)
