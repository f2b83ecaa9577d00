"""Config API endpoint."""

from aiohttp import web

from espresso.app_keys import config_key


def create_config_routes() -> list[web.RouteDef]:
    return [web.get("/api/config", get_config)]


async def get_config(request: web.Request) -> web.Response:
    config = request.app[config_key]
    return web.json_response(
        {
            "title": config.site.title,
            "base_url": config.site.base_url,
            "sort_pages": config.build.sort_pages,
            "atom_enabled": config.atom.enabled,
        },
    )
