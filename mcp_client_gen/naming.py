"""Convert MCP capability names to TypeScript identifiers.

Pattern:
  - interface for tool input  -> {Pascal}Input
  - client class              -> {Pascal}Client
  - tool method               -> {camel}
  - named resource accessor   -> get{Pascal}
  - prompt method             -> {camel}Prompt
  - singleton slot / accessor -> _{camel} / get{Pascal}Client

Any run of non-alphanumeric characters is a word separator, so names that
differ only by separators collapse to the same identifier:

  create-page  -> CreatePageInput, createPage
  create_page  -> CreatePageInput, createPage
  create page  -> CreatePageInput, createPage

Only ASCII letters and digits count as word characters; anything else,
including non-ASCII letters, is a separator (café -> caf).

NameRegistry resolves such collisions within one generation run.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_SEPARATOR_RUN = re.compile(r"[^0-9A-Za-z]+([0-9A-Za-z])?")
_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

INPUT_SUFFIX = "Input"
CLIENT_SUFFIX = "Client"
PROMPT_SUFFIX = "Prompt"


def _join_words(text: str) -> str:
    """Drop separator runs, upper-casing the character that follows each."""
    return _SEPARATOR_RUN.sub(lambda m: (m.group(1) or "").upper(), text)


def _safe_identifier(name: str) -> str:
    if not name:
        return "_"
    if name[0].isdigit():
        return "_" + name
    return name


def pascal_case(text: str) -> str:
    """Convert a capability name to PascalCase."""
    joined = _join_words(text)
    return _safe_identifier(joined[:1].upper() + joined[1:])


def camel_case(text: str) -> str:
    """Convert a capability name to camelCase."""
    joined = _join_words(text)
    return _safe_identifier(joined[:1].lower() + joined[1:])


def is_identifier(name: str) -> bool:
    """True if ``name`` can be used as a bare TypeScript property key."""
    return bool(_IDENTIFIER.match(name))


def ts_string(value: str) -> str:
    """Quote a value as a TypeScript string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def property_key(name: str) -> str:
    """Return ``name`` bare when it is an identifier, quoted otherwise."""
    return name if is_identifier(name) else ts_string(name)


def declaration_name(operation_name: str) -> str:
    return pascal_case(operation_name) + INPUT_SUFFIX


def class_name(server_name: str) -> str:
    return pascal_case(server_name) + CLIENT_SUFFIX


def method_name(operation_name: str) -> str:
    return camel_case(operation_name)


def resource_method_name(resource_name: str) -> str:
    return "get" + pascal_case(resource_name)


def prompt_method_name(prompt_name: str) -> str:
    return camel_case(prompt_name) + PROMPT_SUFFIX


def singleton_slot_name(server_name: str) -> str:
    return "_" + camel_case(server_name)


def accessor_name(server_name: str) -> str:
    return "get" + pascal_case(server_name) + CLIENT_SUFFIX


class NameRegistry:
    """Hand out unique identifiers within one scope.

    The first claimant of a name keeps it; later claimants get the lowest
    free numeric suffix inserted before ``suffix`` (``CreatePage2Input``).
    """

    def __init__(self, reserved: tuple[str, ...] = ()) -> None:
        self._taken: set[str] = set(reserved)

    def __contains__(self, name: str) -> bool:
        return name in self._taken

    def claim(self, name: str, suffix: str = "") -> str:
        """Reserve ``name`` (which must end with ``suffix``) and return it."""
        if name not in self._taken:
            self._taken.add(name)
            return name

        stem = name[: len(name) - len(suffix)] if suffix and name.endswith(suffix) else name
        tail = suffix if suffix and name.endswith(suffix) else ""
        n = 2
        while f"{stem}{n}{tail}" in self._taken:
            n += 1
        unique = f"{stem}{n}{tail}"
        self._taken.add(unique)
        logger.warning("Identifier %s already in use, emitting %s instead", name, unique)
        return unique
