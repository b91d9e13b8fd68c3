"""Centralized constants for the OpenAPI assembler."""
from typing import Tuple

OPENAPI_VERSION = "3.0.0"

# Written into the documentation directory by OpenAPISpec.swagger_docs
SPEC_FILENAME = "spec.json"
SPEC_FILE_MODE = 0o644
INDEX_FILENAME = "index.html"

HTTP_VERBS: Tuple[str, ...] = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

# Parameter locations handled by Endpoint.run
PARAM_LOCATIONS: Tuple[str, ...] = ("query", "path", "header")

SCHEMA_REF_PREFIX = "#/components/schemas/"

# Minimal Redoc page, used when the docs directory ships no index.html
REDOC_INDEX = (
    "<!DOCTYPE html><html><head><title>{title}</title>"
    "<link rel=\"stylesheet\" href=\"https://cdn.jsdelivr.net/npm/redoc@next/bundles/redoc.standalone.css\" />"
    "</head><body><redoc spec-url='{spec_file}'></redoc>"
    "<script src='https://cdn.jsdelivr.net/npm/redoc@next/bundles/redoc.standalone.js'></script>"
    "</body></html>"
)
