"""Load introspection results from disk.

Reads a JSON document produced by the introspection step and converts the
MCP ``tools/list``, ``resources/list`` and ``prompts/list`` payloads of
each server into ServerModule descriptors:

    {"servers": {"notion": {"tools": [...], "resources": [...],
                            "prompts": [...], "error": null}}}

A bare ``{name: server}`` mapping is accepted as well.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .models import (
    OperationDescriptor,
    PromptArgument,
    PromptDescriptor,
    ResourceDescriptor,
    ServerModule,
)
from .schema_parser import parse_schema


class LoaderError(ValueError):
    """Raised when the introspection document has the wrong shape."""


def _text(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    return value if isinstance(value, str) and value else None


def _entries(raw: dict[str, Any], key: str, server_name: str) -> list[dict[str, Any]]:
    entries = raw.get(key) or []
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise LoaderError(f"{server_name}: '{key}' must be a list of objects")
    return entries


def _required_name(raw: dict[str, Any], key: str, server_name: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value:
        raise LoaderError(f"{server_name}: entry without a '{key}': {raw!r}")
    return value


def parse_operation(raw: dict[str, Any], server_name: str = "") -> OperationDescriptor:
    schema = raw.get("inputSchema")
    return OperationDescriptor(
        name=_required_name(raw, "name", server_name),
        description=_text(raw, "description"),
        input_schema=parse_schema(schema) if isinstance(schema, dict) else None,
    )


def parse_resource(raw: dict[str, Any], server_name: str = "") -> ResourceDescriptor:
    return ResourceDescriptor(
        uri=_required_name(raw, "uri", server_name),
        name=_text(raw, "name"),
        description=_text(raw, "description"),
        mime_type=_text(raw, "mimeType"),
    )


def parse_prompt(raw: dict[str, Any], server_name: str = "") -> PromptDescriptor:
    arguments = tuple(
        PromptArgument(
            name=_required_name(arg, "name", server_name),
            required=bool(arg.get("required", False)),
            description=_text(arg, "description"),
        )
        for arg in _entries(raw, "arguments", server_name)
    )
    return PromptDescriptor(
        name=_required_name(raw, "name", server_name),
        description=_text(raw, "description"),
        arguments=arguments,
    )


def parse_server(name: str, raw: dict[str, Any]) -> ServerModule:
    """Convert one server's introspection payload into a ServerModule."""
    if not isinstance(raw, dict):
        raise LoaderError(f"{name}: server entry must be an object")
    error = raw.get("error")
    if error:
        return ServerModule(name=name, error=str(error))
    return ServerModule(
        name=name,
        operations=tuple(parse_operation(t, name) for t in _entries(raw, "tools", name)),
        resources=tuple(parse_resource(r, name) for r in _entries(raw, "resources", name)),
        prompts=tuple(parse_prompt(p, name) for p in _entries(raw, "prompts", name)),
    )


def parse_servers(document: Any) -> dict[str, ServerModule]:
    """Convert a whole introspection document, keeping server order."""
    if not isinstance(document, dict):
        raise LoaderError("introspection document must be a JSON object")
    servers = document.get("servers", document)
    if not isinstance(servers, dict):
        raise LoaderError("'servers' must be an object keyed by server name")
    return {name: parse_server(name, raw) for name, raw in servers.items()}


def load_servers(path: str | Path) -> dict[str, ServerModule]:
    """Load introspection results from a JSON file."""
    with open(path) as f:
        return parse_servers(json.load(f))
