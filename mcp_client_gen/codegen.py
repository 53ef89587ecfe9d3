"""Render the generated client module.

Takes the GeneratedModule from context_builder and renders client.ts.j2.
Rendering is pure; write_output is the only function touching disk.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import jinja2

from .context_builder import GeneratedModule, build_context
from .models import CodegenOptions, ServerModule

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "client.ts.j2"


def jsdoc(text: str, indent: str = "") -> str:
    """Format text as a JSDoc block, one `` * `` line per source line."""
    lines = [f"{indent}/**"]
    for line in text.replace("*/", "*\\/").strip().splitlines():
        line = line.rstrip()
        lines.append(f"{indent} * {line}" if line else f"{indent} *")
    lines.append(f"{indent} */")
    return "\n".join(lines)


def one_line(text: str) -> str:
    """Collapse text onto a single line for ``//`` comments."""
    return " ".join(str(text).split())


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["jsdoc"] = jsdoc
    env.filters["one_line"] = one_line
    return env


def render_module(module: GeneratedModule) -> str:
    """Render a GeneratedModule to TypeScript source text."""
    template = _environment().get_template(TEMPLATE_NAME)
    output = template.render(module=module)
    return output.rstrip("\n") + "\n"


def assemble(
    servers: Mapping[str, ServerModule],
    options: CodegenOptions | None = None,
    *,
    generated_at: str | None = None,
) -> str:
    """Generate the client module text for a set of introspected servers.

    Identical inputs and ``generated_at`` always yield identical text.
    """
    return render_module(build_context(servers, options, generated_at=generated_at))


def write_output(text: str, path: str | Path) -> Path:
    """Write generated text to ``path``, creating parent directories."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text)
    return output_path
