"""Thin adapter between OpenAPI path templates and a Flask app or Blueprint."""
from __future__ import annotations
import logging
import os
import re
from typing import Callable, Dict, Iterable, Tuple, Union

from flask import Blueprint, Flask, send_from_directory

from .errors import RouteTemplateError
from .openapi_parts.constants import INDEX_FILENAME

logger = logging.getLogger(__name__)

_TEMPLATE_VAR = re.compile(r"\{([^}/]+)\}")
_SAFE_VAR = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_NAME_JUNK = re.compile(r"[^0-9A-Za-z_]+")


def to_flask_rule(path: str) -> Tuple[str, Dict[str, str]]:
    """`/pets/{pet-id}` -> (`/pets/<_arg0>`, {'_arg0': 'pet-id'})

    Template variables that are not valid Werkzeug identifiers are renamed;
    the returned mapping translates view args back to the declared names.
    """
    arg_names: Dict[str, str] = {}

    def repl(m):
        var = m.group(1)
        if _SAFE_VAR.match(var) and not var.startswith("_arg"):
            return f"<{var}>"
        safe = f"_arg{len(arg_names)}"
        arg_names[safe] = var
        return f"<{safe}>"

    return _TEMPLATE_VAR.sub(repl, path), arg_names


def endpoint_name(path: str) -> str:
    return "oas_" + (_NAME_JUNK.sub("_", path.strip("/")).strip("_") or "root")


class FlaskRouter:
    def __init__(self, target: Union[Flask, Blueprint]):
        self.target = target
        self._names: set = set()
        self._mounts: Dict[str, str] = {}

    @classmethod
    def wrap(cls, router: Union['FlaskRouter', Flask, Blueprint]) -> 'FlaskRouter':
        if isinstance(router, cls):
            return router
        return cls(router)

    def _unique_name(self, base: str) -> str:
        taken = set(self._names)
        if isinstance(self.target, Flask):
            taken.update(self.target.view_functions)
        name, n = base, 1
        while name in taken:
            n += 1
            name = f"{base}_{n}"
        self._names.add(name)
        return name

    def register_route(self, path: str, methods: Union[str, Iterable[str]], handler: Callable) -> str:
        """Add one rule for `path` accepting `methods`; returns the endpoint name."""
        if isinstance(methods, str):
            methods = [methods]
        methods = [m.upper() for m in methods]
        rule, arg_names = to_flask_rule(path)
        name = self._unique_name(endpoint_name(path))

        def view(**view_args):
            return handler(**{arg_names.get(k, k): v for k, v in view_args.items()})

        self.target.add_url_rule(rule, endpoint=name, view_func=view, methods=methods)
        logger.debug("registered %s %s as %s", ",".join(methods), rule, name)
        return name

    def resolve_path_template(self, route: str) -> str:
        """Return the URL prefix for `route`, a literal path or an endpoint name."""
        if not route:
            raise RouteTemplateError(route, "empty route")
        if route.startswith("/"):
            template = route
        else:
            if not isinstance(self.target, Flask):
                raise RouteTemplateError(route, "endpoint names can only be resolved on a Flask app")
            try:
                rules = list(self.target.url_map.iter_rules(endpoint=route))
            except KeyError:
                rules = []
            if not rules:
                raise RouteTemplateError(route, "no rule registered for endpoint")
            template = rules[0].rule
        if "<" in template or "{" in template:
            raise RouteTemplateError(route, "template contains variables")
        return template.rstrip("/")

    def mount_static(self, prefix: str, directory: str) -> None:
        directory = os.path.abspath(directory)
        mounted = self._mounts.get(prefix)
        if mounted == directory:
            return
        if mounted is not None:
            raise RouteTemplateError(prefix or "/", f"already serving {mounted}")
        name = self._unique_name(endpoint_name(prefix) + "_docs")

        def serve_docs(filename: str = INDEX_FILENAME):
            return send_from_directory(directory, filename)

        self.target.add_url_rule(
            f"{prefix}/", endpoint=name, view_func=serve_docs, methods=["GET"], defaults={"filename": INDEX_FILENAME}
        )
        self.target.add_url_rule(f"{prefix}/<path:filename>", endpoint=name, view_func=serve_docs, methods=["GET"])
        self._mounts[prefix] = directory
        logger.debug("mounted %s at %s/", directory, prefix)


__all__ = ["FlaskRouter", "to_flask_rule", "endpoint_name"]
