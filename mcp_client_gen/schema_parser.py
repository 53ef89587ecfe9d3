"""Parse JSON Schema fragments and synthesize TypeScript type expressions.

Handles:
- Primitive types (integer and number both become ``number``)
- String enums (literal unions, source order kept)
- Arrays, with or without an item schema
- Objects: inline structural types, quoted non-identifier keys,
  additionalProperties index signatures, open ``Record<string, any>``
- anyOf/oneOf and multi-valued ``type`` (unions), allOf (intersections)
- Local $ref resolution against the root schema (``#/$defs/...``)

Anything else parses to ``Unknown`` and synthesizes to ``any``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union

from .naming import property_key, ts_string

logger = logging.getLogger(__name__)

# Raw schemas nested deeper than this are rejected instead of recursing
# until the interpreter gives up (e.g. self-referencing dicts).
MAX_SCHEMA_DEPTH = 64

ANY_TYPE = "any"
OPEN_OBJECT_TYPE = "Record<string, any>"

_PRIMITIVE_TYPES: dict[str, str] = {
    "string": "string",
    "number": "number",
    "integer": "number",
    "boolean": "boolean",
    "null": "null",
}


class SchemaDepthError(ValueError):
    """Raised when a schema nests deeper than MAX_SCHEMA_DEPTH."""


@dataclass(frozen=True)
class Primitive:
    kind: str


@dataclass(frozen=True)
class StringEnum:
    values: tuple[str, ...]


@dataclass(frozen=True)
class ArrayNode:
    items: SchemaNode | None = None


@dataclass(frozen=True)
class Property:
    name: str
    schema: SchemaNode
    description: str | None = None


@dataclass(frozen=True)
class ObjectNode:
    """Object schema. ``properties`` is None when the schema declares none."""

    properties: tuple[Property, ...] | None = None
    required: frozenset[str] = frozenset()
    additional: SchemaNode | bool | None = None

    @property
    def has_properties(self) -> bool:
        return self.properties is not None


@dataclass(frozen=True)
class UnionNode:
    branches: tuple[SchemaNode, ...]


@dataclass(frozen=True)
class IntersectionNode:
    branches: tuple[SchemaNode, ...]


@dataclass(frozen=True)
class Unknown:
    reason: str = ""


SchemaNode = Union[
    Primitive, StringEnum, ArrayNode, ObjectNode, UnionNode, IntersectionNode, Unknown,
]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def resolve_ref(root: dict[str, Any], ref: str) -> Any | None:
    """Resolve a local JSON pointer ($ref) against the root schema.

    Returns None when the pointer is not local or does not resolve.
    """
    if ref == "#":
        return root
    if not ref.startswith("#/"):
        return None
    node: Any = root
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if isinstance(node, dict) and part in node:
            node = node[part]
        elif isinstance(node, list) and part.isdigit() and int(part) < len(node):
            node = node[int(part)]
        else:
            return None
    return node


def _union(branches: tuple[SchemaNode, ...]) -> SchemaNode:
    if not branches:
        return Unknown("empty union")
    if len(branches) == 1:
        return branches[0]
    return UnionNode(branches)


def _intersection(branches: tuple[SchemaNode, ...]) -> SchemaNode:
    if not branches:
        return Unknown("empty intersection")
    if len(branches) == 1:
        return branches[0]
    return IntersectionNode(branches)


def _description(raw: Any) -> str | None:
    if isinstance(raw, dict) and isinstance(raw.get("description"), str):
        return raw["description"]
    return None


def _parse_object(
    raw: dict[str, Any], root: dict[str, Any], depth: int, refs: tuple[str, ...],
) -> ObjectNode:
    raw_props = raw.get("properties")
    properties: tuple[Property, ...] | None = None
    if isinstance(raw_props, dict):
        properties = tuple(
            Property(
                name=str(name),
                schema=_parse(prop, root, depth + 1, refs),
                description=_description(prop),
            )
            for name, prop in raw_props.items()
        )

    names = {p.name for p in properties or ()}
    raw_required = raw.get("required")
    required = frozenset(
        r for r in (raw_required if isinstance(raw_required, list) else [])
        if isinstance(r, str) and r in names
    )

    raw_additional = raw.get("additionalProperties")
    additional: SchemaNode | bool | None = None
    if isinstance(raw_additional, bool):
        additional = raw_additional
    elif isinstance(raw_additional, dict):
        additional = _parse(raw_additional, root, depth + 1, refs)

    return ObjectNode(properties=properties, required=required, additional=additional)


def _parse_typed(
    raw: dict[str, Any], schema_type: str, root: dict[str, Any], depth: int,
    refs: tuple[str, ...],
) -> SchemaNode:
    if schema_type == "string":
        enum = raw.get("enum")
        # Non-string members (null in a nullable enum) belong to sibling types.
        values = tuple(v for v in enum if isinstance(v, str)) if isinstance(enum, list) else ()
        if values:
            return StringEnum(values)
        return Primitive("string")
    if schema_type in _PRIMITIVE_TYPES:
        return Primitive(schema_type)
    if schema_type == "array":
        items = raw.get("items")
        if isinstance(items, dict):
            return ArrayNode(_parse(items, root, depth + 1, refs))
        return ArrayNode(None)
    if schema_type == "object":
        return _parse_object(raw, root, depth, refs)
    return Unknown(f"unsupported type {schema_type!r}")


def _parse_ref(
    ref: str, root: dict[str, Any], depth: int, refs: tuple[str, ...],
) -> SchemaNode:
    if ref in refs:
        logger.debug("Recursive $ref %s treated as any", ref)
        return Unknown(f"recursive $ref {ref}")
    target = resolve_ref(root, ref)
    if target is None:
        logger.warning("Unresolvable $ref %s treated as any", ref)
        return Unknown(f"unresolvable $ref {ref}")
    return _parse(target, root, depth + 1, refs + (ref,))


def _parse(raw: Any, root: dict[str, Any], depth: int, refs: tuple[str, ...]) -> SchemaNode:
    if depth > MAX_SCHEMA_DEPTH:
        raise SchemaDepthError(f"schema nested deeper than {MAX_SCHEMA_DEPTH} levels")
    if not isinstance(raw, dict):
        return Unknown("missing schema")

    schema_type = raw.get("type")
    if isinstance(schema_type, str):
        return _parse_typed(raw, schema_type, root, depth, refs)
    if isinstance(schema_type, list) and schema_type:
        # Each listed type keeps the sibling keywords (properties, items, enum).
        return _union(tuple(
            _parse({**raw, "type": t}, root, depth + 1, refs) if isinstance(t, str)
            else Unknown(f"unsupported type {t!r}")
            for t in schema_type
        ))

    for key in ("anyOf", "oneOf"):
        if isinstance(raw.get(key), list):
            return _union(tuple(_parse(sub, root, depth + 1, refs) for sub in raw[key]))

    if isinstance(raw.get("allOf"), list):
        return _intersection(tuple(_parse(sub, root, depth + 1, refs) for sub in raw["allOf"]))

    enum = raw.get("enum")
    if isinstance(enum, list) and enum and all(isinstance(v, str) for v in enum):
        return StringEnum(tuple(enum))

    if isinstance(raw.get("$ref"), str):
        return _parse_ref(raw["$ref"], root, depth, refs)

    return Unknown("no recognised keyword")


def parse_schema(raw: Any, root: Any = None) -> SchemaNode:
    """Parse a raw JSON Schema dict into a SchemaNode tree.

    ``root`` is the document local $refs resolve against; it defaults to
    ``raw`` itself, which is right for MCP tool input schemas.
    """
    if root is None:
        root = raw
    return _parse(raw, root if isinstance(root, dict) else {}, 0, ())


# ---------------------------------------------------------------------------
# Synthesis
# ---------------------------------------------------------------------------

def _is_union_like(node: SchemaNode) -> bool:
    if isinstance(node, UnionNode):
        return True
    return isinstance(node, StringEnum) and len(node.values) > 1


def _array_operand(node: SchemaNode) -> str:
    text = synthesize(node)
    if _is_union_like(node) or isinstance(node, IntersectionNode):
        return f"({text})"
    return text


def _intersection_operand(node: SchemaNode) -> str:
    text = synthesize(node)
    return f"({text})" if _is_union_like(node) else text


def index_signature_type(additional: SchemaNode | bool | None) -> str | None:
    """Type of the ``[key: string]`` signature implied by additionalProperties."""
    if additional is True:
        return ANY_TYPE
    if additional is None or additional is False:
        return None
    return synthesize(additional)


def synthesize(node: SchemaNode | None) -> str:
    """Return the TypeScript type expression for a schema node.

    Total: unrecognised or missing nodes become ``any``.
    """
    if isinstance(node, Primitive):
        return _PRIMITIVE_TYPES.get(node.kind, ANY_TYPE)

    if isinstance(node, StringEnum):
        if not node.values:
            return "string"
        return " | ".join(ts_string(v) for v in node.values)

    if isinstance(node, ArrayNode):
        if node.items is None:
            return f"{ANY_TYPE}[]"
        return _array_operand(node.items) + "[]"

    if isinstance(node, ObjectNode):
        if node.properties is None:
            return OPEN_OBJECT_TYPE
        members = [
            f"{property_key(p.name)}{'' if p.name in node.required else '?'}: {synthesize(p.schema)}"
            for p in node.properties
        ]
        index_type = index_signature_type(node.additional)
        if index_type is not None:
            members.append(f"[key: string]: {index_type}")
        if not members:
            return "{}"
        return "{ " + "; ".join(members) + " }"

    if isinstance(node, UnionNode):
        return " | ".join(synthesize(b) for b in node.branches)

    if isinstance(node, IntersectionNode):
        return " & ".join(_intersection_operand(b) for b in node.branches)

    return ANY_TYPE


def schema_to_typescript(raw: Any) -> str:
    """Parse and synthesize a raw schema in one step."""
    return synthesize(parse_schema(raw))
