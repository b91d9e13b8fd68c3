"""Schema reference helpers.

A `Ref` names a schema that lives either in the served document's
components section or in a JSON file next to the service.
"""
from typing import Any, Dict

from .constants import SCHEMA_REF_PREFIX


class Ref(str):
    """Reference to a named schema."""

    def to_swagger_schema(self) -> Dict[str, Any]:
        return served_ref(self)

    def to_json_schema(self, schemas_dir: str) -> Dict[str, Any]:
        return file_ref(self, schemas_dir)


def served_ref(name: str) -> Dict[str, Any]:
    return {"$ref": f"{SCHEMA_REF_PREFIX}{name}"}


def file_ref(name: str, schemas_dir: str) -> Dict[str, Any]:
    return {"$ref": f"file://{schemas_dir}/{name}.json"}


def resolve_schema(schema: Any) -> Any:
    """Turn a `Ref` into its served form, pass anything else through."""
    if isinstance(schema, Ref):
        return schema.to_swagger_schema()
    return schema


__all__ = ["Ref", "served_ref", "file_ref", "resolve_schema"]
