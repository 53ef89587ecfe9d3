"""Tests for the declarations module."""

from mcp_client_gen.declarations import WRAPPED_VALUE_KEY, build_declaration
from mcp_client_gen.schema_parser import parse_schema

_CREATE_PAGE_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "Page title"},
        "content": {"type": "string"},
        "published": {"type": "boolean"},
        "x-request-id": {"type": "string"},
    },
    "required": ["title"],
}


class TestObjectDeclaration:
    """Object schemas with properties become one member per property."""

    @classmethod
    def setup_class(cls):
        cls.decl = build_declaration(
            "create-page", "Create a new page", parse_schema(_CREATE_PAGE_SCHEMA),
        )

    def test_name(self):
        assert self.decl.name == "CreatePageInput"

    def test_one_member_per_property(self):
        names = [p.name for p in self.decl.properties]
        assert names == ["title", "content", "published", "x-request-id"]

    def test_optionality(self):
        assert self.decl.get_property("title").optional is False
        assert self.decl.get_property("content").optional is True
        assert self.decl.get_property("published").optional is True

    def test_member_types(self):
        assert self.decl.get_property("title").type == "string"
        assert self.decl.get_property("published").type == "boolean"

    def test_docs(self):
        assert self.decl.doc == "Create a new page"
        assert self.decl.get_property("title").doc == "Page title"
        assert self.decl.get_property("content").doc is None

    def test_non_identifier_key_quoted(self):
        assert self.decl.get_property("x-request-id").signature == '"x-request-id"?: string'

    def test_no_index_signature(self):
        assert self.decl.index_type is None


class TestDeclarationVariants:
    """Wrapped values, missing schemas and option handling."""

    def test_no_schema_no_declaration(self):
        assert build_declaration("get-status", "Get status", None) is None

    def test_bare_string_wrapped_in_value(self):
        decl = build_declaration("echo", None, parse_schema({"type": "string"}))
        assert len(decl.properties) == 1
        assert decl.properties[0].name == WRAPPED_VALUE_KEY
        assert decl.properties[0].type == "string"
        assert decl.properties[0].optional is False

    def test_array_wrapped_in_value(self):
        decl = build_declaration("batch", None, parse_schema({"type": "array", "items": {"type": "number"}}))
        assert decl.properties[0].signature == "value: number[]"

    def test_object_without_properties_wrapped(self):
        decl = build_declaration("raw", None, parse_schema({"type": "object"}))
        assert decl.properties[0].signature == "value: Record<string, any>"

    def test_unknown_schema_wrapped_as_any(self):
        decl = build_declaration("anything", None, parse_schema({}))
        assert decl.properties[0].signature == "value: any"

    def test_empty_properties_gives_empty_interface(self):
        decl = build_declaration("ping", None, parse_schema({"type": "object", "properties": {}}))
        assert decl.properties == ()

    def test_additional_properties_index_signature(self):
        schema = {
            "type": "object",
            "properties": {"id": {"type": "string"}},
            "additionalProperties": {"type": "number"},
        }
        decl = build_declaration("tagged", None, parse_schema(schema))
        assert decl.index_type == "number"

    def test_name_override(self):
        decl = build_declaration("create_page", None, parse_schema({"type": "string"}), name="CreatePage2Input")
        assert decl.name == "CreatePage2Input"

    def test_comments_disabled(self):
        decl = build_declaration(
            "create-page", "Create a new page", parse_schema(_CREATE_PAGE_SCHEMA),
            include_comments=False,
        )
        assert decl.doc is None
        assert all(p.doc is None for p in decl.properties)

    def test_nested_property_synthesized_inline(self):
        schema = {
            "type": "object",
            "properties": {
                "parent": {
                    "type": "object",
                    "properties": {"page_id": {"type": "string"}},
                    "required": ["page_id"],
                },
            },
            "required": ["parent"],
        }
        decl = build_declaration("move-page", None, parse_schema(schema))
        assert decl.properties[0].signature == "parent: { page_id: string }"
