"""Parse @rest-* directives from Prisma model documentation.

Directives live in `///` doc comments above a model:

    /// Internal audit trail. @rest-skip
    model AuditLog { ... }
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Marker pattern -> directive flag
_DIRECTIVE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"@rest-skip", re.IGNORECASE), "skip"),
)


@dataclass(frozen=True)
class RestDirectives:
    skip: bool = False


def parse_rest_directives(documentation: str | None) -> RestDirectives:
    """Collect the directives present anywhere in the documentation text."""
    if not documentation:
        return RestDirectives()

    flags = {flag: True for pattern, flag in _DIRECTIVE_RULES if pattern.search(documentation)}
    return RestDirectives(**flags)
