"""Depth-bounded traversal over the route tree.

Walks are read-only and must not run while pages are still being
registered; the build pipeline only starts them once ingestion is done.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from espresso.core.site import Route

UNBOUNDED = -1


def iter_routes(
    root: Route,
    depth: int = UNBOUNDED,
    *,
    include_root: bool = False,
    sort: bool = False,
) -> Iterator[Route]:
    """Yield every route below root, parents before their children.

    Args:
        root: Route to start from
        depth: Maximum number of levels to descend, -1 for unbounded
        include_root: Yield root itself first
        sort: Visit siblings in key order instead of insertion order

    Yields:
        Routes in depth-first pre-order
    """
    if include_root:
        yield root
    yield from _descend(root, depth, 0, sort)


def _descend(route: Route, depth: int, current_depth: int, sort: bool) -> Iterator[Route]:
    if depth != UNBOUNDED and current_depth >= depth:
        return
    children = route.children
    keys = sorted(children) if sort else list(children)
    for key in keys:
        child = children[key]
        yield child
        yield from _descend(child, depth, current_depth + 1, sort)


def walk(
    root: Route,
    depth: int,
    fn: Callable[[Route], None],
    *,
    include_root: bool = False,
    sort: bool = False,
) -> None:
    """Invoke fn once for every route below root.

    depth limits how many levels are descended: 1 visits only the
    immediate children of root, -1 walks down to the lowest level.
    """
    for route in iter_routes(root, depth, include_root=include_root, sort=sort):
        fn(route)
