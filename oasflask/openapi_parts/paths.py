"""Fold endpoints into the paths table and register their routes.

Endpoints are processed in the order given. A path entry is created the first
time a path is seen and each (path, verb) gets one operation document. Every
path then gets one Flask rule accepting all of its declared verbs, which
dispatches on the request method.
"""
import logging
from typing import Callable, Dict, Iterable, Tuple

from flask import request

from ..errors import DuplicateEndpointError
from .models import PathItem

logger = logging.getLogger(__name__)

RouteKey = Tuple[str, str]


def _dispatcher(routes: Dict[RouteKey, object], path: str) -> Callable:
    # Looked up per request so a replaced endpoint takes over its route.
    def dispatch(**view_args):
        verb = request.method.lower()
        endpoint = routes.get((path, verb))
        if endpoint is None and verb == "head":
            # Werkzeug answers HEAD on GET rules
            endpoint = routes[(path, "get")]
        return endpoint.run(**view_args)
    return dispatch


def merge_endpoints(
    paths: Dict[str, PathItem],
    endpoints: Iterable,
    router,
    routes: Dict[RouteKey, object],
    allow_duplicates: bool = False,
) -> Dict[str, PathItem]:
    registered = {p for (p, _) in routes}
    new_paths: Dict[str, None] = {}
    for e in endpoints:
        verb = e.method.lower()
        key = (e.path, verb)
        path_item = paths.get(e.path)
        if path_item is None:
            path_item = PathItem()
            paths[e.path] = path_item
        if key in routes:
            if not allow_duplicates:
                raise DuplicateEndpointError(e.path, verb)
            logger.warning("replacing endpoint %s %s", e.method, e.path)
        path_item.methods[verb] = e.doc
        routes[key] = e
        if e.path not in registered:
            new_paths[e.path] = None

    for path in new_paths:
        router.register_route(path, list(paths[path].methods), _dispatcher(routes, path))
    return paths


__all__ = ["merge_endpoints"]
