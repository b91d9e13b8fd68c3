"""Endpoint definitions.

An Endpoint pairs a path and HTTP method with its OpenAPI operation document
and a handler. The assembler reads `path`, `method` and `doc` to build the
spec and binds `run` as the Flask view.

Usage:
    def get_pet(data):
        return Response(status=200, body={'id': data.params['pet_id']})

    Endpoint('/pets/{pet_id}', 'GET', get_pet,
             summary='Get a pet',
             params=[Param.path('pet_id', 'integer')])
"""
from __future__ import annotations
import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from flask import abort, jsonify, make_response, request

from .context import RequestData, new_data
from .openapi_parts.constants import HTTP_VERBS
from .openapi_parts.helpers import resolve_schema
from .utils.validation import coerce_value

logger = logging.getLogger(__name__)

Handler = Callable[[RequestData], Any]
Middleware = Callable[[RequestData], Optional['Response']]


@dataclass
class Response:
    # Skip writing the response; the handler used data.res_writer directly.
    ignore: bool = False
    status: int = 200
    # Body to send back. None sends no body.
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class Param:
    """A declared query, path or header parameter."""
    name: str
    location: str
    schema: Dict[str, Any] = field(default_factory=lambda: {'type': 'string'})
    required: bool = False
    description: str = ''

    @classmethod
    def query(cls, name: str, type: str = 'string', required: bool = False, description: str = '', **schema) -> 'Param':
        return cls(name, 'query', dict(schema, type=type), required, description)

    @classmethod
    def path(cls, name: str, type: str = 'string', description: str = '', **schema) -> 'Param':
        # path parameters are always required in OpenAPI
        return cls(name, 'path', dict(schema, type=type), True, description)

    @classmethod
    def header(cls, name: str, type: str = 'string', required: bool = False, description: str = '', **schema) -> 'Param':
        return cls(name, 'header', dict(schema, type=type), required, description)

    def to_doc(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {'name': self.name, 'in': self.location, 'required': self.required, 'schema': self.schema}
        if self.description:
            out['description'] = self.description
        return out


class Endpoint:
    def __init__(
        self,
        path: str,
        method: str,
        handler: Handler,
        *,
        doc: Optional[Dict[str, Any]] = None,
        summary: str = '',
        description: str = '',
        tags: Iterable[str] = (),
        operation_id: Optional[str] = None,
        query: Iterable[Param] = (),
        params: Iterable[Param] = (),
        headers: Iterable[Param] = (),
        body: Any = None,
        body_type: Optional[Callable[[Any], Any]] = None,
        body_required: bool = True,
        responses: Optional[Dict[str, Any]] = None,
        security: Optional[List[Dict[str, List[str]]]] = None,
        middleware: Iterable[Middleware] = (),
    ):
        verb = method.lower()
        if verb not in HTTP_VERBS:
            raise ValueError(f"unsupported HTTP method: {method}")
        self.path = path
        self.method = method.upper()
        self.handler = handler
        self.query: List[Param] = list(query)
        self.params: List[Param] = list(params)
        self.headers: List[Param] = list(headers)
        self.body = body
        self.body_type = body_type
        self.body_required = body_required
        self.middleware: List[Middleware] = list(middleware)
        self.doc = self._build_doc(doc, summary, description, list(tags), operation_id, responses, security)

    def __repr__(self) -> str:
        return f"<Endpoint {self.method} {self.path}>"

    def _build_doc(self, doc, summary, description, tags, operation_id, responses, security) -> Dict[str, Any]:
        out: Dict[str, Any] = copy.deepcopy(doc) if doc else {}
        if summary:
            out.setdefault('summary', summary)
        if description:
            out.setdefault('description', description)
        if tags:
            out.setdefault('tags', tags)
        if operation_id:
            out.setdefault('operationId', operation_id)
        declared = self.query + self.params + self.headers
        if declared and 'parameters' not in out:
            out['parameters'] = [p.to_doc() for p in declared]
        if self.body is not None and 'requestBody' not in out:
            out['requestBody'] = {
                'required': self.body_required,
                'content': {'application/json': {'schema': resolve_schema(self.body)}},
            }
        if security is not None:
            out.setdefault('security', security)
        out.setdefault('responses', responses or {'200': {'description': 'OK'}})
        return out

    def run(self, **view_args):
        """Flask view: extract declared inputs, run middleware and the handler."""
        data = new_data(request, make_response(), self)
        for p in self.query:
            raw = request.args.getlist(p.name) if p.schema.get('type') == 'array' else request.args.get(p.name)
            self._extract(data.query, p, raw if raw != [] else None)
        for p in self.params:
            self._extract(data.params, p, view_args.get(p.name))
        for p in self.headers:
            self._extract(data.headers, p, request.headers.get(p.name))
        if self.body is not None or self.body_type is not None:
            data.body = self._read_body()

        for mw in self.middleware:
            rv = mw(data)
            if rv is not None:
                return self._write(rv, data)
        return self._write(self.handler(data), data)

    def _extract(self, target, param: Param, raw) -> None:
        if raw is None:
            if param.required:
                abort(400, description=f'{param.name} required')
            if 'default' in param.schema:
                target[param.name] = param.schema['default']
            return
        target[param.name] = coerce_value(raw, param.schema, param.name)

    def _read_body(self):
        payload = request.get_json(silent=True)
        if payload is None:
            if self.body_required:
                abort(400, description='request body required')
            return None
        if self.body_type is None:
            return payload
        try:
            if isinstance(payload, dict):
                return self.body_type(**payload)
            return self.body_type(payload)
        except (TypeError, ValueError) as e:
            abort(400, description=f'request body invalid: {e}')

    def _write(self, rv, data: RequestData):
        if not isinstance(rv, Response):
            # plain Flask return values (dict, tuple, Response) pass through
            return make_response(rv)
        if rv.ignore:
            return data.res_writer
        if rv.body is None:
            resp = make_response('', rv.status)
        elif isinstance(rv.body, (str, bytes)):
            resp = make_response(rv.body, rv.status)
        else:
            resp = make_response(jsonify(rv.body), rv.status)
        for k, v in rv.headers.items():
            resp.headers[k] = v
        logger.debug('%s %s -> %s', self.method, self.path, rv.status)
        return resp


__all__ = ['Endpoint', 'Param', 'Response', 'Handler', 'Middleware']
