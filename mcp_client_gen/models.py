"""Introspected capability descriptors consumed by the generator.

These are plain immutable records built once per generation run by the
loader (or any other introspection step) and handed to context_builder.
"""

from __future__ import annotations

from dataclasses import dataclass

from .schema_parser import SchemaNode

DEFAULT_OUTPUT_PATH = "mcp-client.ts"


@dataclass(frozen=True)
class OperationDescriptor:
    """A callable tool. The result shape is opaque and never synthesized."""

    name: str
    description: str | None = None
    input_schema: SchemaNode | None = None


@dataclass(frozen=True)
class ResourceDescriptor:
    uri: str
    name: str | None = None
    description: str | None = None
    mime_type: str | None = None


@dataclass(frozen=True)
class PromptArgument:
    name: str
    required: bool = False
    description: str | None = None


@dataclass(frozen=True)
class PromptDescriptor:
    name: str
    description: str | None = None
    arguments: tuple[PromptArgument, ...] = ()


@dataclass(frozen=True)
class ServerModule:
    """Everything introspected from one server.

    A non-empty ``error`` means introspection failed upstream; the server
    then contributes a single comment line to the generated module.
    """

    name: str
    operations: tuple[OperationDescriptor, ...] = ()
    resources: tuple[ResourceDescriptor, ...] = ()
    prompts: tuple[PromptDescriptor, ...] = ()
    error: str | None = None


@dataclass(frozen=True)
class CodegenOptions:
    """Options recognised by the module assembler.

    ``client_prefix`` is reserved and currently does not affect naming.
    """

    output_path: str = DEFAULT_OUTPUT_PATH
    client_prefix: str | None = None
    include_comments: bool = True
    tree_shakable: bool = True
