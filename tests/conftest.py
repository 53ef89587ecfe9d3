"""Shared fixtures for generator tests.

Descriptors are built directly (not through the loader) so each module can
be tested without touching disk; the loader has its own fixture file.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from mcp_client_gen.models import (
    OperationDescriptor,
    PromptArgument,
    PromptDescriptor,
    ResourceDescriptor,
    ServerModule,
)
from mcp_client_gen.schema_parser import parse_schema

FIXTURES_DIR = Path(__file__).parent / "fixtures"
INTROSPECTION_FIXTURE = FIXTURES_DIR / "introspection.json"

# Fixed timestamp so rendered output can be compared byte for byte
GENERATED_AT = "2025-01-01T00:00:00.000Z"


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

@pytest.fixture
def create_item() -> OperationDescriptor:
    return OperationDescriptor(
        name="create-item",
        description="Create an item",
        input_schema=parse_schema({
            "type": "object",
            "properties": {"name": {"type": "string", "description": "Item name"}},
            "required": ["name"],
        }),
    )


@pytest.fixture
def list_items() -> OperationDescriptor:
    """A tool without an input schema."""
    return OperationDescriptor(name="list_items", description="List all items")


@pytest.fixture
def items_resource() -> ResourceDescriptor:
    return ResourceDescriptor(uri="resource://items", name="items", description="List of items")


@pytest.fixture
def summary_prompt() -> PromptDescriptor:
    return PromptDescriptor(
        name="generate-summary",
        description="Generate a summary",
        arguments=(
            PromptArgument(name="text", required=True),
            PromptArgument(name="tone", required=False),
        ),
    )


@pytest.fixture
def test_server(create_item, list_items, items_resource, summary_prompt) -> ServerModule:
    return ServerModule(
        name="test",
        operations=(create_item, list_items),
        resources=(items_resource,),
        prompts=(summary_prompt,),
    )


@pytest.fixture
def broken_server() -> ServerModule:
    return ServerModule(name="broken", error="Connection refused")


# ---------------------------------------------------------------------------
# Paths and constants
# ---------------------------------------------------------------------------

@pytest.fixture
def generated_at() -> str:
    return GENERATED_AT


@pytest.fixture
def introspection_path() -> Path:
    return INTROSPECTION_FIXTURE
