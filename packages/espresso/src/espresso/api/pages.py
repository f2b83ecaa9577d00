"""Pages API endpoint.

Looks up a single article by ``<route-path>/<article-id>`` and returns
it with its resolved related pages.
"""

from aiohttp import web

from espresso.app_keys import site_key
from espresso.core.model import MalformedLinkError, RelatedLink
from espresso.core.passes import resolve_link


def create_pages_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/pages/{path:.*}", get_page),
    ]


async def get_page(request: web.Request) -> web.Response:
    path = request.match_info["path"]
    site = request.app[site_key]

    try:
        link = RelatedLink.parse(path)
    except MalformedLinkError:
        return web.json_response(
            {"error": "Page not found", "path": path},
            status=404,
        )

    resolution = resolve_link(site, link)
    if resolution.page is None:
        return web.json_response(
            {"error": "Page not found", "path": path},
            status=404,
        )

    page = resolution.page
    return web.json_response(
        {
            "meta": {
                "path": page.path,
                "url_path": page.url_path,
                "hidden": page.article.hide,
            },
            "article": page.article.to_dict(),
        },
    )
