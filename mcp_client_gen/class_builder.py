"""Build the client class for one MCP server.

Generates one async method per tool, a generic ``getResource(uri)`` plus a
zero-argument accessor per named resource, and one ``...Prompt`` method per
prompt. The class only holds the connection it was constructed with.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .declarations import PropertyDecl
from .models import OperationDescriptor, PromptDescriptor, ResourceDescriptor
from .naming import (
    PROMPT_SUFFIX,
    NameRegistry,
    class_name,
    declaration_name,
    method_name,
    prompt_method_name,
    resource_method_name,
    ts_string,
)

CONNECTION_TYPE = "McpConnection"
CONNECTION_FIELD = "connection"
RETURN_TYPE = "Promise<any>"
TOOL_RESULT_HELPER = "handleToolResult"
RESOURCE_RESULT_HELPER = "handleResourceResult"
GET_RESOURCE_METHOD = "getResource"

# Names that would clash with the constructor or the connection field
_RESERVED_MEMBERS = ("constructor", CONNECTION_FIELD)


@dataclass(frozen=True)
class Parameter:
    name: str
    type: str

    def __str__(self) -> str:
        return f"{self.name}: {self.type}"


@dataclass(frozen=True)
class MethodDecl:
    name: str
    params: tuple[Parameter, ...] = ()
    body: tuple[str, ...] = ()
    return_type: str = RETURN_TYPE
    doc: str | None = None

    @property
    def signature(self) -> str:
        params = ", ".join(str(p) for p in self.params)
        return f"async {self.name}({params}): {self.return_type}"


@dataclass(frozen=True)
class ClassDecl:
    name: str
    server_name: str
    methods: tuple[MethodDecl, ...] = ()
    doc: str | None = None
    connection_field: str = CONNECTION_FIELD
    connection_type: str = CONNECTION_TYPE

    def get_method(self, name: str) -> MethodDecl | None:
        return next((m for m in self.methods if m.name == name), None)


def _call_body(rpc: str, original_name: str, arguments: str, result: str) -> tuple[str, ...]:
    return (
        f"const result = await this.{CONNECTION_FIELD}.client.{rpc}({{",
        f"  name: {ts_string(original_name)},",
        f"  arguments: {arguments},",
        "});",
        result,
    )


def _tool_method(
    tool: OperationDescriptor, name: str, input_type: str | None, include_comments: bool,
) -> MethodDecl:
    params = (Parameter("input", input_type),) if input_type else ()
    return MethodDecl(
        name=name,
        params=params,
        body=_call_body(
            "callTool",
            tool.name,
            "input" if input_type else "{}",
            f"return {TOOL_RESULT_HELPER}(result, {ts_string(tool.name)});",
        ),
        doc=tool.description if include_comments else None,
    )


def _resource_methods(
    resources: Iterable[ResourceDescriptor], members: NameRegistry, include_comments: bool,
) -> list[MethodDecl]:
    methods = [
        MethodDecl(
            name=members.claim(GET_RESOURCE_METHOD),
            params=(Parameter("uri", "string"),),
            body=(
                f"const result = await this.{CONNECTION_FIELD}.client.readResource({{ uri }});",
                f"return {RESOURCE_RESULT_HELPER}(result, uri);",
            ),
            doc="Fetch a resource by URI\n@param uri - Resource URI" if include_comments else None,
        )
    ]
    generic = methods[0].name
    for resource in resources:
        if not resource.name:
            continue
        methods.append(MethodDecl(
            name=members.claim(resource_method_name(resource.name)),
            body=(f"return this.{generic}({ts_string(resource.uri)});",),
            doc=resource.description if include_comments else None,
        ))
    return methods


def prompt_arguments_type(prompt: PromptDescriptor) -> str | None:
    """Inline object type for a prompt's arguments, None when it takes none."""
    if not prompt.arguments:
        return None
    members = [
        PropertyDecl(name=arg.name, type="string", optional=not arg.required).signature
        for arg in prompt.arguments
    ]
    return "{ " + "; ".join(members) + " }"


def _prompt_method(prompt: PromptDescriptor, name: str, include_comments: bool) -> MethodDecl:
    args_type = prompt_arguments_type(prompt)
    return MethodDecl(
        name=name,
        params=(Parameter("args", args_type),) if args_type else (),
        body=_call_body(
            "getPrompt",
            prompt.name,
            "args" if args_type else "{}",
            "return result.messages;",
        ),
        doc=prompt.description if include_comments else None,
    )


def build_class(
    server_name: str,
    operations: Iterable[OperationDescriptor],
    resources: Iterable[ResourceDescriptor] = (),
    prompts: Iterable[PromptDescriptor] = (),
    *,
    name: str | None = None,
    input_types: Mapping[str, str] | None = None,
    include_comments: bool = True,
) -> ClassDecl:
    """Build the ``{Pascal}Client`` class for one server.

    ``input_types`` maps a tool's original name to the interface emitted for
    its input; tools with a schema but no entry use the derived name.
    """
    members = NameRegistry(reserved=_RESERVED_MEMBERS)
    methods: list[MethodDecl] = []

    for tool in operations:
        input_type = None
        if tool.input_schema is not None:
            input_type = (input_types or {}).get(tool.name) or declaration_name(tool.name)
        methods.append(_tool_method(
            tool, members.claim(method_name(tool.name)), input_type, include_comments,
        ))

    resources = tuple(resources)
    if resources:
        methods.extend(_resource_methods(resources, members, include_comments))

    for prompt in prompts:
        methods.append(_prompt_method(
            prompt, members.claim(prompt_method_name(prompt.name), PROMPT_SUFFIX), include_comments,
        ))

    return ClassDecl(
        name=name or class_name(server_name),
        server_name=server_name,
        methods=tuple(methods),
        doc=f"MCP client for {server_name} server" if include_comments else None,
    )
