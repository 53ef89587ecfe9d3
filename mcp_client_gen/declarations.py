"""Build the exported input interface for one tool.

Object schemas with properties become one documented interface member per
property; any other input schema is wrapped in a single ``value`` member.
Tools without an input schema get no interface at all.
"""

from __future__ import annotations

from dataclasses import dataclass

from .naming import declaration_name, property_key
from .schema_parser import ObjectNode, SchemaNode, index_signature_type, synthesize

WRAPPED_VALUE_KEY = "value"


@dataclass(frozen=True)
class PropertyDecl:
    name: str
    type: str
    optional: bool = False
    doc: str | None = None

    @property
    def signature(self) -> str:
        return f"{property_key(self.name)}{'?' if self.optional else ''}: {self.type}"


@dataclass(frozen=True)
class InterfaceDecl:
    name: str
    properties: tuple[PropertyDecl, ...] = ()
    index_type: str | None = None
    doc: str | None = None

    def get_property(self, name: str) -> PropertyDecl | None:
        return next((p for p in self.properties if p.name == name), None)


def build_declaration(
    operation_name: str,
    description: str | None,
    input_node: SchemaNode | None,
    *,
    name: str | None = None,
    include_comments: bool = True,
) -> InterfaceDecl | None:
    """Build the ``{Pascal}Input`` interface for a tool, or None without a schema.

    ``name`` overrides the derived interface name (used when the assembler
    had to deduplicate it).
    """
    if input_node is None:
        return None

    interface_name = name or declaration_name(operation_name)
    doc = description if include_comments else None

    if isinstance(input_node, ObjectNode) and input_node.has_properties:
        members = tuple(
            PropertyDecl(
                name=prop.name,
                type=synthesize(prop.schema),
                optional=prop.name not in input_node.required,
                doc=prop.description if include_comments else None,
            )
            for prop in input_node.properties or ()
        )
        return InterfaceDecl(
            name=interface_name,
            properties=members,
            index_type=index_signature_type(input_node.additional),
            doc=doc,
        )

    return InterfaceDecl(
        name=interface_name,
        properties=(PropertyDecl(name=WRAPPED_VALUE_KEY, type=synthesize(input_node)),),
        doc=doc,
    )
