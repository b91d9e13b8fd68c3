"""Environment-backed defaults for the app factory.

Values are read when `load_settings()` is called, so tests can set
environment variables (or pass overrides to `create_app`) first.
"""
import os
from typing import Any, Dict, List, Tuple

DEFAULT_DOCS_ROUTE = '/docs'

_TRUE = {'1', 'true', 'yes', 'on'}


def parse_servers(raw: str) -> List[Tuple[str, str]]:
    """`https://a|prod,https://b|staging` -> [(url, description), ...]"""
    out = []
    for item in (raw or '').split(','):
        item = item.strip()
        if not item:
            continue
        url, _, desc = item.partition('|')
        out.append((url.strip(), desc.strip()))
    return out


def load_settings() -> Dict[str, Any]:
    return {
        'OAS_API_TITLE': os.getenv('OAS_API_TITLE', 'API'),
        'OAS_API_DESCRIPTION': os.getenv('OAS_API_DESCRIPTION', ''),
        'OAS_API_VERSION': os.getenv('OAS_API_VERSION', '0.1.0'),
        'OAS_DOCS_ROUTE': os.getenv('OAS_DOCS_ROUTE', DEFAULT_DOCS_ROUTE),
        'OAS_DOCS_DIR': os.getenv('OAS_DOCS_DIR', ''),
        'OAS_SERVERS': parse_servers(os.getenv('OAS_SERVERS', '')),
        'OAS_ALLOW_DUPLICATE_ENDPOINTS': os.getenv('OAS_ALLOW_DUPLICATE_ENDPOINTS', '').lower() in _TRUE,
        'JWT_SECRET_KEY': os.getenv('JWT_SECRET_KEY', 'dev-secret'),
    }
