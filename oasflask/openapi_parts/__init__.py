"""Modular pieces for the OpenAPI document assembler.

This package holds the document model, schema reference helpers and the
endpoint merge step that `oasflask.openapi_builder` drives.
"""

__all__ = [
    "constants",
    "helpers",
    "models",
    "paths",
]
