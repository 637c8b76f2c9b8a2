"""Describe and render Next.js route handlers for one model operation.

build_handler() decides what a handler does (HTTP verb, imports, Prisma
delegate, key field, status codes, error messages) as a HandlerDocument.
render_handler() prints that document through the per-operation template
in templates/{operation}.ts.j2.
"""

from __future__ import annotations

from dataclasses import dataclass

from .codegen import render
from .errors import UnknownOperationError
from .models import DEFAULT_PRISMA_IMPORT, Entity
from .naming import ITEM_OPERATIONS, OPERATION_METHODS, OPERATIONS, accessor_name

NEXT_SERVER_MODULE = "next/server"

# Operation -> (verb in the error message, HTTP status on success)
_OPERATION_OUTCOMES: dict[str, tuple[str, int]] = {
    "list": ("fetch", 200),
    "get": ("fetch", 200),
    "create": ("create", 201),
    "update": ("update", 200),
    "delete": ("delete", 204),
}


@dataclass(frozen=True)
class ImportDecl:
    names: tuple[str, ...]
    module: str


@dataclass(frozen=True)
class HandlerDocument:
    """Structured form of one exported route handler."""

    operation: str
    method: str  # exported function name: GET, POST, PUT, DELETE
    imports: tuple[ImportDecl, ...]
    model: str
    accessor: str
    id_field: str
    takes_id_param: bool
    success_status: int
    error_message: str
    not_found_message: str | None = None
    error_status: int = 500


def build_handler(
    entity: Entity,
    operation: str,
    prisma_import_path: str = DEFAULT_PRISMA_IMPORT,
) -> HandlerDocument:
    """Describe the handler implementing ``operation`` for ``entity``."""
    if operation not in OPERATIONS:
        raise UnknownOperationError(operation)

    verb, success_status = _OPERATION_OUTCOMES[operation]
    subject = entity.name.lower()
    if operation == "list":
        subject += "s"

    return HandlerDocument(
        operation=operation,
        method=OPERATION_METHODS[operation],
        imports=(
            ImportDecl(("NextRequest", "NextResponse"), NEXT_SERVER_MODULE),
            ImportDecl(("prisma",), prisma_import_path),
        ),
        model=entity.name,
        accessor=accessor_name(entity.name),
        id_field=entity.id_field,
        takes_id_param=operation in ITEM_OPERATIONS,
        success_status=success_status,
        error_message=f"Failed to {verb} {subject}",
        not_found_message=f"{entity.name} not found" if operation == "get" else None,
    )


def render_handler(handler: HandlerDocument) -> str:
    """Serialize a handler document to TypeScript source."""
    return render(f"{handler.operation}.ts.j2", handler=handler)


def generate_route_handler(
    entity: Entity,
    operation: str,
    prisma_import_path: str = DEFAULT_PRISMA_IMPORT,
) -> str:
    """Return the TypeScript source of one route handler."""
    return render_handler(build_handler(entity, operation, prisma_import_path))
