"""OpenAPI 3 document assembler.

Owns the document for one service. Construction folds every endpoint into the
paths table and registers its Flask rule; the fluent methods add servers, tags
and global security; `swagger_docs` writes `spec.json` into a docs directory
and serves that directory over HTTP.

This is the canonical module; `oasflask/openapi.py` re-exports from here.
"""
import html
import json
import logging
import os
from typing import Any, Dict, Iterable, Optional, Tuple

from .errors import SpecPublishError, SpecSerializationError
from .openapi_parts.constants import INDEX_FILENAME, REDOC_INDEX, SPEC_FILENAME, SPEC_FILE_MODE
from .openapi_parts.models import Document, Info, SecurityRequirement, Server, Tag
from .openapi_parts.paths import merge_endpoints
from .router import FlaskRouter

logger = logging.getLogger(__name__)

__all__ = ["OpenAPISpec"]


class OpenAPISpec:
    def __init__(
        self,
        title: str,
        description: str,
        version: str,
        endpoints: Iterable,
        router,
        allow_duplicates: bool = False,
    ):
        """Build the document and register a route for every endpoint.

        `router` is a Flask app, a Blueprint or a FlaskRouter. Raises
        DuplicateEndpointError when two endpoints share a path and method,
        unless `allow_duplicates` is set, in which case the later one wins.
        """
        self.router = FlaskRouter.wrap(router)
        self.doc = Document(info=Info(title=title, description=description, version=version))
        self.routes: Dict[Tuple[str, str], Any] = {}
        merge_endpoints(self.doc.paths, endpoints, self.router, self.routes, allow_duplicates=allow_duplicates)
        logger.debug("assembled %d operations over %d paths", len(self.routes), len(self.doc.paths))

    def server(self, url: str, description: str = "") -> "OpenAPISpec":
        self.doc.servers.append(Server(url=url, description=description))
        return self

    def tag(self, name: str, description: str = "") -> "OpenAPISpec":
        self.doc.tags.append(Tag(name=name, description=description))
        return self

    def security(self, name: str, *scopes: str) -> "OpenAPISpec":
        """Add a global security requirement naming a scheme and its scopes."""
        self.doc.security.append(SecurityRequirement(name=name, scopes=list(scopes)))
        return self

    def schema(self, name: str, schema: Dict[str, Any]) -> "OpenAPISpec":
        """Register a component schema so `Ref(name)` resolves in the served spec."""
        self.doc.schemas[name] = schema
        return self

    def security_scheme(self, name: str, scheme: Dict[str, Any]) -> "OpenAPISpec":
        self.doc.security_schemes[name] = scheme
        return self

    def to_dict(self) -> Dict[str, Any]:
        return self.doc.to_dict()

    def to_json(self) -> bytes:
        try:
            return json.dumps(self.to_dict(), separators=(",", ":")).encode()
        except (TypeError, ValueError) as e:
            raise SpecSerializationError(f"document is not JSON serializable: {e}") from e

    def swagger_docs(self, route: str, docs_dir: str, write_index: bool = True) -> "OpenAPISpec":
        """Serve `docs_dir` under `route` and write the spec into it.

        Call after all configuration; the written file is a snapshot.
        """
        prefix = self.router.resolve_path_template(route)
        self.router.mount_static(prefix, docs_dir)

        blob = self.to_json()
        spec_path = os.path.join(docs_dir, SPEC_FILENAME)
        try:
            os.makedirs(docs_dir, exist_ok=True)
            with open(spec_path, "wb") as fh:
                fh.write(blob)
            os.chmod(spec_path, SPEC_FILE_MODE)
            if write_index:
                self._write_index(docs_dir)
        except OSError as e:
            raise SpecPublishError(spec_path, e) from e
        logger.info("published %s (%d bytes) at %s/%s", spec_path, len(blob), prefix, SPEC_FILENAME)
        return self

    def _write_index(self, docs_dir: str) -> Optional[str]:
        index_path = os.path.join(docs_dir, INDEX_FILENAME)
        if os.path.exists(index_path):
            return None
        with open(index_path, "w", encoding="utf-8") as fh:
            fh.write(REDOC_INDEX.format(title=html.escape(self.doc.info.title), spec_file=SPEC_FILENAME))
        return index_path
