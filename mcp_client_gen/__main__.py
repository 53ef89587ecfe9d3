"""Entry point: python -m mcp_client_gen INPUT.json [-o OUTPUT.ts]

Reads introspection results, generates the TypeScript client module.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .codegen import render_module, write_output
from .context_builder import build_context
from .loader import LoaderError, load_servers
from .models import DEFAULT_OUTPUT_PATH, CodegenOptions
from .schema_parser import SchemaDepthError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp_client_gen",
        description="Generate a typed TypeScript client from MCP introspection results",
    )
    parser.add_argument("input", help="Introspection results (JSON)")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT_PATH, help="Destination file")
    parser.add_argument("--client-prefix", default=None, help="Reserved, currently unused")
    parser.add_argument("--no-comments", action="store_true", help="Omit JSDoc from descriptions")
    parser.add_argument(
        "--no-singletons", action="store_true",
        help="Export classes only, without lazy get<Server>Client() accessors",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = CodegenOptions(
        output_path=args.output,
        client_prefix=args.client_prefix,
        include_comments=not args.no_comments,
        tree_shakable=not args.no_singletons,
    )
    try:
        servers = load_servers(args.input)
        module = build_context(servers, options)
        text = render_module(module)
        output_path = write_output(text, args.output)
    except (OSError, json.JSONDecodeError, LoaderError, SchemaDepthError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Generated {output_path} ({module.tool_count} tools)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
