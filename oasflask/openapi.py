"""Public import for the OpenAPI assembler.

Keeps a stable import path while the implementation lives in
`openapi_builder.py`.
"""
from .openapi_builder import OpenAPISpec  # noqa: F401

__all__ = ["OpenAPISpec"]
