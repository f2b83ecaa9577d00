"""Navigation and footer API endpoints."""

from aiohttp import web

from espresso.app_keys import site_key


def create_navigation_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/navigation", get_navigation),
        web.get("/api/footer", get_footer),
    ]


async def get_navigation(request: web.Request) -> web.Response:
    site = request.app[site_key]
    if site.nav is None:
        return web.json_response({"brand": "", "items": []})
    return web.json_response(site.nav.to_dict())


async def get_footer(request: web.Request) -> web.Response:
    site = request.app[site_key]
    if site.footer is None:
        return web.json_response({"text": "", "items": []})
    return web.json_response(site.footer.to_dict())
