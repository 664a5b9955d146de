"""
Explore a local copy of the WEEEK OpenAPI document (tags, endpoints, details).
"""

import json
import os

from weeek_cli.exceptions import CliError

_HTTP_METHODS = ("get", "post", "put", "patch", "delete")


def load_spec(path):
    """Read and parse the OpenAPI JSON file at *path*."""
    if not path or not os.path.exists(path):
        raise CliError(
            f"[ERROR] Could not read {path}. Download the WEEEK OpenAPI spec "
            "or set WEEEK_SPEC_PATH."
        )
    try:
        with open(path, encoding="utf-8") as f:
            spec = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CliError(f"[ERROR] Could not read {path}: {e}") from e
    if not isinstance(spec, dict):
        raise CliError(f"[ERROR] {path} is not an OpenAPI document.")
    return spec


def _operations(spec):
    for path, item in (spec.get("paths") or {}).items():
        if not isinstance(item, dict):
            continue
        for method, operation in item.items():
            if method.lower() in _HTTP_METHODS and isinstance(operation, dict):
                yield path, method.lower(), operation


def list_tags(spec):
    """Declared tags plus every tag used by an operation, sorted, unique."""
    tags = set()
    for tag in spec.get("tags") or []:
        name = tag.get("name") if isinstance(tag, dict) else tag
        if name:
            tags.add(name)
    for _, _, operation in _operations(spec):
        tags.update(operation.get("tags") or [])
    return sorted(tags)


def list_endpoints(spec, tag):
    return [
        {"path": path, "method": method.upper(), "summary": op.get("summary") or "No summary"}
        for path, method, op in _operations(spec)
        if tag in (op.get("tags") or [])
    ]


def describe_endpoint(spec, method, path):
    normalized = path if path.startswith("/") else f"/{path}"
    item = (spec.get("paths") or {}).get(normalized)
    if not item:
        raise CliError(f"[ERROR] Path not found: {normalized}")
    operation = item.get(method.lower())
    if not operation:
        raise CliError(f"[ERROR] Method {method.upper()} not found for path: {normalized}")
    return {
        "method": method.upper(),
        "path": normalized,
        "summary": operation.get("summary"),
        "description": operation.get("description"),
        "parameters": operation.get("parameters") or [],
        "requestBody": operation.get("requestBody"),
        "tags": operation.get("tags") or [],
    }
