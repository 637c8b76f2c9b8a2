"""Derive route and identifier names from Prisma model names.

Pattern: {base}/{lowercased model}s
  - GET    collection      -> list{Model}
  - GET    collection/[id] -> get{Model}
  - POST   collection      -> create{Model}
  - PUT    collection/[id] -> update{Model}
  - DELETE collection/[id] -> delete{Model}

Examples:
  User     -> /api/users,      prisma.user,     listUser
  BlogPost -> /api/blogposts,  prisma.blogPost, getBlogPost
  Category -> /api/categorys,  prisma.category, deleteCategory

Pluralization is a plain "s" suffix with no irregular forms.
"""

from __future__ import annotations

OPERATIONS: tuple[str, ...] = ("list", "get", "create", "update", "delete")

# Operation to HTTP method
OPERATION_METHODS: dict[str, str] = {
    "list": "GET",
    "get": "GET",
    "create": "POST",
    "update": "PUT",
    "delete": "DELETE",
}

# Operations addressed by the [id] route segment
ITEM_OPERATIONS = frozenset({"get", "update", "delete"})

ID_SEGMENT = "[id]"


def pluralize(name: str) -> str:
    """Return the collection segment for a model name."""
    return f"{name.lower()}s"


def accessor_name(name: str) -> str:
    """Return the Prisma client delegate name (first character lowercased)."""
    return name[:1].lower() + name[1:]


def handler_name(operation: str, name: str) -> str:
    """Return a handler name like 'getUser'."""
    return f"{operation}{name}"
