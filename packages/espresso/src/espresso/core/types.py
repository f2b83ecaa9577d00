"""Core type definitions."""

from typing import NewType

# Route path within the site (e.g., "", "blog", "blog/coffee")
# Segments joined by "/", no leading or trailing slash, "" is the root
RoutePath = NewType("RoutePath", str)

ROOT_PATH = RoutePath("")


def join_route(parent: RoutePath, key: str) -> RoutePath:
    """Join a parent route path and a child segment."""
    return RoutePath(f"{parent}/{key}" if parent else key)


def split_route(path: str) -> list[str]:
    """Split a route path into its segments. The root has none."""
    normalized = path.strip("/")
    if not normalized:
        return []
    return normalized.split("/")
