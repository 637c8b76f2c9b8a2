"""Build the canonical REST route descriptors for a model."""

from __future__ import annotations

from .models import DEFAULT_BASE_URL, Entity, RouteDescriptor
from .naming import (
    ID_SEGMENT,
    ITEM_OPERATIONS,
    OPERATION_METHODS,
    OPERATIONS,
    handler_name,
    pluralize,
)


def build_routes(entity: Entity, base_url: str = DEFAULT_BASE_URL) -> list[RouteDescriptor]:
    """Return the list/get/create/update/delete descriptors, in that order."""
    collection = f"{base_url}/{pluralize(entity.name)}"
    routes = []
    for operation in OPERATIONS:
        path = f"{collection}/{ID_SEGMENT}" if operation in ITEM_OPERATIONS else collection
        routes.append(RouteDescriptor(
            path=path,
            method=OPERATION_METHODS[operation],
            handler=handler_name(operation, entity.name),
            entity=entity.name,
            operation=operation,
        ))
    return routes
