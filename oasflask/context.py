"""Per-request data handed to endpoint handlers and middleware."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from flask import Request, Response as FlaskResponse
    from .endpoint import Endpoint


class MapAny(dict):
    def get_or_else(self, key: str, else_value: Any = None) -> Any:
        if key in self:
            return self[key]
        return else_value


@dataclass
class RequestData:
    # The request that called this endpoint.
    req: Optional['Request']
    # Mutable response object. Handlers that fill it in themselves must
    # return Response(ignore=True).
    res_writer: Optional['FlaskResponse']
    endpoint: Optional['Endpoint'] = None
    # Declared query, path and header values, already coerced.
    query: MapAny = field(default_factory=MapAny)
    params: MapAny = field(default_factory=MapAny)
    headers: MapAny = field(default_factory=MapAny)
    # Decoded request body, built with the endpoint's body_type when set.
    body: Any = None
    # Free-form slot for middleware.
    extra: MapAny = field(default_factory=MapAny)


def new_data(req, res_writer, endpoint) -> RequestData:
    """Build an empty context for one request.

    Containers start empty; Endpoint.run fills them from the request.
    """
    return RequestData(
        req=req,
        res_writer=res_writer,
        endpoint=endpoint,
        query=MapAny(),
        params=MapAny(),
        headers=MapAny(),
        body=None,
        extra=MapAny(),
    )


__all__ = ["MapAny", "RequestData", "new_data"]
