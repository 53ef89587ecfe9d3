"""Tests for the naming module."""

import logging

from mcp_client_gen.naming import (
    NameRegistry,
    accessor_name,
    camel_case,
    class_name,
    declaration_name,
    is_identifier,
    method_name,
    pascal_case,
    prompt_method_name,
    property_key,
    resource_method_name,
    singleton_slot_name,
    ts_string,
)


class TestCaseConversion:
    """Test PascalCase / camelCase conversion of capability names."""

    def test_pascal_hyphen(self):
        assert pascal_case("create-page") == "CreatePage"

    def test_pascal_underscore(self):
        assert pascal_case("create_page") == "CreatePage"

    def test_pascal_space(self):
        assert pascal_case("create page") == "CreatePage"

    def test_pascal_keeps_inner_case(self):
        assert pascal_case("getHTTPStatus") == "GetHTTPStatus"

    def test_camel(self):
        assert camel_case("create-page") == "createPage"
        assert camel_case("CreatePage") == "createPage"

    def test_repeated_and_trailing_separators(self):
        assert camel_case("--list__all--items-") == "listAllItems"

    def test_other_separators(self):
        """Dots, slashes and colons are separators too."""
        assert pascal_case("github.repos/list:all") == "GithubReposListAll"

    def test_non_ascii_letters_are_separators(self):
        assert pascal_case("café") == "Caf"
        assert camel_case("über-tool") == "berTool"

    def test_leading_digit_prefixed(self):
        assert pascal_case("3d-render") == "_3dRender"
        assert is_identifier(camel_case("42"))

    def test_empty_name(self):
        assert pascal_case("") == "_"
        assert camel_case("---") == "_"


class TestDerivedNames:
    """Test the fixed prefixes and suffixes of generated identifiers."""

    def test_declaration_name(self):
        assert declaration_name("create-page") == "CreatePageInput"

    def test_class_name(self):
        assert class_name("notion") == "NotionClient"
        assert class_name("my-server") == "MyServerClient"

    def test_method_name(self):
        assert method_name("create-page") == "createPage"

    def test_resource_method_name(self):
        assert resource_method_name("user profile") == "getUserProfile"

    def test_prompt_method_name(self):
        assert prompt_method_name("generate-summary") == "generateSummaryPrompt"

    def test_singleton_names(self):
        assert singleton_slot_name("my-server") == "_myServer"
        assert accessor_name("my-server") == "getMyServerClient"

    def test_separator_variants_collide(self):
        """Names differing only by separators map to the same identifiers."""
        assert declaration_name("create-page") == declaration_name("create_page")
        assert method_name("create-page") == method_name("create_page")


class TestPropertyKey:
    """Test bare vs quoted property keys."""

    def test_identifier_is_bare(self):
        assert property_key("pageId") == "pageId"
        assert property_key("_private") == "_private"
        assert property_key("$ref") == "$ref"

    def test_hyphen_quoted(self):
        assert property_key("content-type") == '"content-type"'

    def test_leading_digit_quoted(self):
        assert property_key("2fa") == '"2fa"'

    def test_ts_string_escapes(self):
        assert ts_string('say "hi"') == '"say \\"hi\\""'
        assert ts_string("a\\b") == '"a\\\\b"'
        assert ts_string("line\nbreak") == '"line\\nbreak"'


class TestNameRegistry:
    """Test deterministic numeric-suffix deduplication."""

    def test_first_claim_keeps_name(self):
        names = NameRegistry()
        assert names.claim("CreatePageInput", "Input") == "CreatePageInput"

    def test_suffix_inserted_before_fixed_suffix(self):
        names = NameRegistry()
        names.claim("CreatePageInput", "Input")
        assert names.claim("CreatePageInput", "Input") == "CreatePage2Input"
        assert names.claim("CreatePageInput", "Input") == "CreatePage3Input"

    def test_suffix_appended_without_fixed_suffix(self):
        names = NameRegistry()
        names.claim("createPage")
        assert names.claim("createPage") == "createPage2"

    def test_reserved_names(self):
        names = NameRegistry(reserved=("constructor",))
        assert "constructor" in names
        assert names.claim("constructor") == "constructor2"

    def test_collision_logged(self, caplog):
        names = NameRegistry()
        names.claim("x")
        with caplog.at_level(logging.WARNING, logger="mcp_client_gen.naming"):
            names.claim("x")
        assert "x2" in caplog.text
