"""In-memory OpenAPI 3 document model.

Operation documents are kept as whatever mapping the endpoint supplied;
nothing here inspects them.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .constants import OPENAPI_VERSION


@dataclass
class Info:
    title: str
    description: str = ""
    version: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "description": self.description, "version": self.version}


@dataclass
class Server:
    url: str
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "description": self.description}


@dataclass
class Tag:
    name: str
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description}


@dataclass
class SecurityRequirement:
    """Serialized in the standard OpenAPI form `{name: [scopes]}`, not as
    an object with `name` and `scopes` keys."""
    name: str
    scopes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {self.name: list(self.scopes)}


@dataclass
class PathItem:
    methods: Dict[str, Mapping[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.methods)


@dataclass
class Document:
    info: Info
    openapi: str = OPENAPI_VERSION
    servers: List[Server] = field(default_factory=list)
    tags: List[Tag] = field(default_factory=list)
    security: List[SecurityRequirement] = field(default_factory=list)
    paths: Dict[str, PathItem] = field(default_factory=dict)
    schemas: Dict[str, Any] = field(default_factory=dict)
    security_schemes: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "openapi": self.openapi,
            "info": self.info.to_dict(),
            "servers": [s.to_dict() for s in self.servers],
            "tags": [t.to_dict() for t in self.tags],
            "security": [s.to_dict() for s in self.security],
            "paths": {p: item.to_dict() for p, item in self.paths.items()},
        }
        components: Dict[str, Any] = {}
        if self.schemas:
            components["schemas"] = dict(self.schemas)
        if self.security_schemes:
            components["securitySchemes"] = dict(self.security_schemes)
        if components:
            out["components"] = components
        return out


__all__ = ["Info", "Server", "Tag", "SecurityRequirement", "PathItem", "Document"]
