"""Application keys for type-safe app configuration access."""

from aiohttp import web

from espresso.config import Config
from espresso.core.site import Site

site_key = web.AppKey("site", Site)
config_key = web.AppKey("config", Config)
