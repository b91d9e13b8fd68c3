"""Startup-time errors raised while assembling or publishing the spec.

Request-time problems are not represented here; those go through
``flask.abort`` and the app-level error handler.
"""
from typing import Optional


class OpenAPISpecError(Exception):
    """Base class for every error raised by the spec assembler."""


class DuplicateEndpointError(OpenAPISpecError):
    def __init__(self, path: str, method: str):
        self.path = path
        self.method = method
        super().__init__(f"endpoint already defined: {method.upper()} {path}")


class RouteTemplateError(OpenAPISpecError):
    def __init__(self, route: str, reason: Optional[str] = None):
        self.route = route
        msg = f"route {route!r} has no resolvable path template"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class SpecSerializationError(OpenAPISpecError):
    """The document could not be encoded as JSON."""


class SpecPublishError(OpenAPISpecError):
    def __init__(self, path: str, cause: Exception):
        self.path = path
        super().__init__(f"could not write spec to {path}: {cause}")


__all__ = [
    "OpenAPISpecError",
    "DuplicateEndpointError",
    "RouteTemplateError",
    "SpecSerializationError",
    "SpecPublishError",
]
