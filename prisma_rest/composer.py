"""Merge rendered handlers into one route file and stamp its header.

A route file holds several exported handlers (GET + POST for the
collection, GET + PUT + DELETE for the item). Each rendered handler
starts with its own imports; those are collected, deduplicated in
first-seen order, and printed once above the handler bodies.

Only the leading run of `import` and blank lines counts as a handler's
import block. An import line further down stays in the body untouched.
"""

from __future__ import annotations

from .models import RunContext


def split_imports(handler: str) -> tuple[list[str], str]:
    """Split handler source into its leading import lines and trimmed body."""
    imports: list[str] = []
    body: list[str] = []
    in_imports = True
    for line in handler.split("\n"):
        if in_imports and (line.startswith("import") or not line.strip()):
            if line.strip():
                imports.append(line)
        else:
            in_imports = False
            body.append(line)
    return imports, "\n".join(body).strip()


def combine_handlers(*handlers: str) -> str:
    """Merge handlers that share a file."""
    imports: dict[str, None] = {}
    bodies: list[str] = []
    for handler in handlers:
        handler_imports, body = split_imports(handler)
        imports.update(dict.fromkeys(handler_imports))
        bodies.append(body)
    return "\n".join(imports) + "\n\n" + "\n\n".join(bodies)


def render_header(context: RunContext) -> str:
    return (
        f"// Generated by {context.generator_name} v{context.version}\n"
        f"// Generated at: {context.iso_timestamp}\n"
        "// DO NOT MODIFY THIS COMMENT BLOCK\n"
        "\n"
    )


def add_generator_header(content: str, context: RunContext) -> str:
    """Prefix generated content with the provenance header."""
    return render_header(context) + content


def compose_file(handlers: list[str], context: RunContext) -> str:
    """Return the full contents of a route file."""
    return add_generator_header(combine_handlers(*handlers), context)
