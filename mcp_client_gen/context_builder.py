"""Build the template context for client.ts.j2 from introspected servers.

Assigns every top-level identifier (input interfaces, client classes,
singleton slots and accessors) from one module-wide NameRegistry, builds
the interface and class declarations per server, and returns them as one
immutable GeneratedModule for codegen to render.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

from .class_builder import ClassDecl, build_class
from .declarations import InterfaceDecl, build_declaration
from .models import CodegenOptions, ServerModule
from .naming import (
    CLIENT_SUFFIX,
    INPUT_SUFFIX,
    NameRegistry,
    accessor_name,
    class_name,
    declaration_name,
    singleton_slot_name,
)

logger = logging.getLogger(__name__)

# Top-level names the template always emits
_RESERVED_TOP_LEVEL = (
    "Client",
    "McpConnection",
    "OperationFailed",
    "EmptyResult",
    "handleToolResult",
    "handleResourceResult",
)


@dataclass(frozen=True)
class SingletonDecl:
    """Lazily initialised module-level instance plus its accessor function."""

    slot: str
    accessor: str
    class_name: str


@dataclass(frozen=True)
class ServerSection:
    name: str
    error: str | None = None
    declarations: tuple[InterfaceDecl, ...] = ()
    client: ClassDecl | None = None
    singleton: SingletonDecl | None = None


@dataclass(frozen=True)
class GeneratedModule:
    generated_at: str
    output_path: str
    sections: tuple[ServerSection, ...] = ()
    tool_count: int = 0


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _build_section(
    server_name: str,
    server: ServerModule,
    names: NameRegistry,
    options: CodegenOptions,
) -> ServerSection:
    declarations: list[InterfaceDecl] = []
    input_types: dict[str, str] = {}

    for tool in server.operations:
        if tool.input_schema is None:
            continue
        interface_name = names.claim(declaration_name(tool.name), INPUT_SUFFIX)
        decl = build_declaration(
            tool.name,
            tool.description,
            tool.input_schema,
            name=interface_name,
            include_comments=options.include_comments,
        )
        if decl is not None:
            declarations.append(decl)
            input_types[tool.name] = interface_name

    client = build_class(
        server_name,
        server.operations,
        server.resources,
        server.prompts,
        name=names.claim(class_name(server_name), CLIENT_SUFFIX),
        input_types=input_types,
        include_comments=options.include_comments,
    )

    singleton = None
    if options.tree_shakable:
        singleton = SingletonDecl(
            slot=names.claim(singleton_slot_name(server_name)),
            accessor=names.claim(accessor_name(server_name), CLIENT_SUFFIX),
            class_name=client.name,
        )

    return ServerSection(
        name=server_name,
        declarations=tuple(declarations),
        client=client,
        singleton=singleton,
    )


def build_context(
    servers: Mapping[str, ServerModule],
    options: CodegenOptions | None = None,
    *,
    generated_at: str | None = None,
) -> GeneratedModule:
    """Build the full module structure, one section per server in input order.

    Servers whose introspection failed contribute only their error. The
    result depends on nothing but the arguments; ``generated_at`` defaults
    to the current UTC time.
    """
    options = options or CodegenOptions()
    names = NameRegistry(reserved=_RESERVED_TOP_LEVEL)
    sections: list[ServerSection] = []

    for server_name, server in servers.items():
        if server.error:
            logger.warning("Skipping server %s: %s", server_name, server.error)
            sections.append(ServerSection(name=server_name, error=server.error))
            continue
        sections.append(_build_section(server_name, server, names, options))

    return GeneratedModule(
        generated_at=generated_at or _timestamp(),
        output_path=options.output_path,
        sections=tuple(sections),
        tool_count=sum(len(s.operations) for s in servers.values() if not s.error),
    )
