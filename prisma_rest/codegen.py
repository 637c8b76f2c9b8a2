"""Jinja2 environment for the TypeScript templates."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import jinja2

TEMPLATE_DIR = Path(__file__).parent / "templates"


@lru_cache(maxsize=None)
def get_environment() -> jinja2.Environment:
    """Return the shared template environment."""
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )


def render(template_name: str, **context: Any) -> str:
    """Render a template from the package templates directory."""
    template = get_environment().get_template(template_name)
    return template.render(**context)
