"""Route API endpoint.

Returns a route's derived view: its index page if the user provided
one, its list page otherwise.
"""

from aiohttp import web

from espresso.app_keys import site_key


def create_route_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/routes", get_route),
        web.get("/api/routes/{path:.*}", get_route),
    ]


async def get_route(request: web.Request) -> web.Response:
    path = request.match_info.get("path", "")
    site = request.app[site_key]

    route = site.get_route(path)
    if route is None:
        return web.json_response(
            {"error": "Route not found", "path": path},
            status=404,
        )

    if route.index_page is not None:
        view = route.index_page.to_dict()
    elif route.list_page is not None:
        view = route.list_page.to_dict()
    else:
        view = {"type": "none", "path": route.path, "pages": []}

    view["children"] = sorted(route.children)
    return web.json_response(view)
