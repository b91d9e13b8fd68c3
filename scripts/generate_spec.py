#!/usr/bin/env python
"""Generate the OpenAPI spec JSON for a set of endpoints and print its hash.

Usage:
  python -m scripts.generate_spec myservice.api:ENDPOINTS --out build/spec.json
  python -m scripts.generate_spec myservice.api:build_endpoints --check <sha256>

TARGET is `module:attr` where attr is a list of Endpoint objects or a callable
returning one.

Options:
  --out PATH        Write full spec JSON to PATH (directories auto-created)
  --check HASH      Exit non-zero if current spec hash != HASH (CI check)
  --title/--description/--version  Info block (defaults from OAS_API_* env)
  --server URL|DESC Add a server entry (repeatable)

Safe Defaults:
  Without flags, prints current hash to stdout.

Exit Codes:
  0 success / in-check mode hash matches
  2 mismatch in --check mode
  3 other error
"""
from __future__ import annotations
import argparse, hashlib, importlib, json, pathlib, sys

from flask import Flask

from oasflask.config.settings import load_settings, parse_servers
from oasflask.errors import OpenAPISpecError
from oasflask.openapi import OpenAPISpec


def load_endpoints(target: str):
    module_name, _, attr = target.partition(':')
    if not attr:
        raise ValueError(f"target must look like module:attr, got {target!r}")
    obj = getattr(importlib.import_module(module_name), attr)
    return list(obj() if callable(obj) else obj)


def compute_spec_and_hash(endpoints, title: str, description: str, version: str, servers=()):
    # throwaway app; only the document is kept
    spec = OpenAPISpec(title, description, version, endpoints, Flask(__name__))
    for url, desc in servers:
        spec.server(url, desc)
    doc = spec.to_dict()
    blob = json.dumps(doc, sort_keys=True, separators=(',', ':')).encode()
    return doc, hashlib.sha256(blob).hexdigest()


def main(argv: list[str]) -> int:
    settings = load_settings()
    p = argparse.ArgumentParser(description="Generate deterministic OpenAPI spec")
    p.add_argument('target', help='module:attr resolving to the endpoints')
    p.add_argument('--out', dest='out', help='Path to write JSON spec')
    p.add_argument('--check', dest='check', help='Expected sha256; exit 2 on mismatch')
    p.add_argument('--title', default=settings['OAS_API_TITLE'])
    p.add_argument('--description', default=settings['OAS_API_DESCRIPTION'])
    p.add_argument('--version', default=settings['OAS_API_VERSION'])
    p.add_argument('--server', action='append', default=[], help='url|description')
    args = p.parse_args(argv)

    try:
        endpoints = load_endpoints(args.target)
        servers = settings['OAS_SERVERS'] + parse_servers(','.join(args.server))
        spec, h = compute_spec_and_hash(endpoints, args.title, args.description, args.version, servers)
    except (ImportError, AttributeError, ValueError, OpenAPISpecError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 3

    if args.out:
        out_path = pathlib.Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(spec, indent=2, sort_keys=True) + '\n')
        print(f"Wrote spec JSON to {out_path} ({len(json.dumps(spec))} bytes)")

    if args.check:
        if h != args.check.strip():
            print(f"Spec hash mismatch: expected={args.check.strip()} current={h}", file=sys.stderr)
            return 2
        print(f"Spec hash OK: {h}")

    if not args.out and not args.check:
        print(h)

    return 0


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
