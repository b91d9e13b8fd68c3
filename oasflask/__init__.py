from flask import Flask
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
from dotenv import load_dotenv
from typing import Any, Callable, Dict, Iterable, Optional

from .config.settings import load_settings
from .context import MapAny, RequestData, new_data
from .endpoint import Endpoint, Param, Response
from .errors import (
    DuplicateEndpointError,
    OpenAPISpecError,
    RouteTemplateError,
    SpecPublishError,
    SpecSerializationError,
)
from .openapi import OpenAPISpec
from .openapi_parts.helpers import Ref, file_ref, served_ref
from .router import FlaskRouter

load_dotenv()

jwt = JWTManager()


def create_app(
    endpoints: Iterable[Endpoint] = (),
    config: Optional[Dict[str, Any]] = None,
    configure_spec: Optional[Callable[[OpenAPISpec], Any]] = None,
):
    """Build a Flask app serving `endpoints` and their OpenAPI document.

    `configure_spec` runs after servers from config are added and before the
    docs are published, so tags or security added there land in spec.json.
    Spec assembly errors propagate: a misconfigured service does not start.
    """
    app = Flask(__name__)
    app.config.update(load_settings())

    if config:
        # allow tests or callers to override default config values
        app.config.update(config)

    jwt.init_app(app)

    @app.route('/healthz')
    def health():
        return {'status': 'ok'}

    # Unified error handler producing standardized JSON shape
    @app.errorhandler(Exception)
    def handle_errors(e):  # type: ignore
        if isinstance(e, HTTPException):
            payload = {
                'error': {
                    'status': e.code,
                    'title': e.name,
                    'detail': e.description,
                }
            }
            return payload, e.code
        app.logger.exception('Unhandled exception')
        return {
            'error': {
                'status': 500,
                'title': 'Internal Server Error',
                'detail': 'Unexpected error'
            }
        }, 500

    spec = OpenAPISpec(
        app.config['OAS_API_TITLE'],
        app.config['OAS_API_DESCRIPTION'],
        app.config['OAS_API_VERSION'],
        endpoints,
        app,
        allow_duplicates=app.config['OAS_ALLOW_DUPLICATE_ENDPOINTS'],
    )
    for url, description in app.config['OAS_SERVERS']:
        spec.server(url, description)
    if configure_spec:
        configure_spec(spec)

    @app.route('/openapi.json')
    def openapi_spec():
        return spec.to_dict()

    if app.config['OAS_DOCS_DIR']:
        spec.swagger_docs(app.config['OAS_DOCS_ROUTE'], app.config['OAS_DOCS_DIR'])
        app.logger.info('API docs served at %s/', app.config['OAS_DOCS_ROUTE'].rstrip('/'))

    app.extensions['oas'] = spec
    return app


__all__ = [
    'create_app',
    'jwt',
    'Endpoint',
    'Param',
    'Response',
    'MapAny',
    'RequestData',
    'new_data',
    'OpenAPISpec',
    'FlaskRouter',
    'Ref',
    'served_ref',
    'file_ref',
    'OpenAPISpecError',
    'DuplicateEndpointError',
    'RouteTemplateError',
    'SpecSerializationError',
    'SpecPublishError',
]
