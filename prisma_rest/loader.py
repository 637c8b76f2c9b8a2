"""Load a Prisma schema from disk.

Accepts either a schema.prisma file or a DMMF JSON document (the output of
Prisma's getDMMF, or just its `datamodel` section).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import SchemaNotFoundError, SchemaParseError
from .models import Entity, Enum, Field, Schema
from .schema_parser import parse_prisma_schema

logger = logging.getLogger(__name__)


def load_schema(path: Path) -> Schema:
    """Read and parse the schema at ``path``."""
    if not path.is_file():
        raise SchemaNotFoundError(path)

    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SchemaParseError(f"invalid DMMF JSON: {exc.msg}", exc.lineno) from exc
        schema = schema_from_dmmf(document)
    else:
        schema = parse_prisma_schema(text)

    logger.debug("Loaded %d models and %d enums from %s", len(schema.entities), len(schema.enums), path)
    return schema


def _optional_names(value: Any) -> tuple[str, ...] | None:
    if value is None:
        return None
    return tuple(value)


def _field_from_dmmf(data: dict[str, Any]) -> Field:
    return Field(
        name=data["name"],
        type=data["type"],
        is_list=data.get("isList", False),
        is_required=data.get("isRequired", True),
        is_id=data.get("isId", False),
        is_unique=data.get("isUnique", False),
        documentation=data.get("documentation"),
        relation_name=data.get("relationName"),
        relation_from_fields=_optional_names(data.get("relationFromFields")),
        relation_to_fields=_optional_names(data.get("relationToFields")),
    )


def schema_from_dmmf(document: dict[str, Any]) -> Schema:
    """Build the schema model from a DMMF document."""
    try:
        datamodel = document.get("datamodel", document)
        entities = tuple(
            Entity(
                name=model["name"],
                documentation=model.get("documentation"),
                fields=tuple(_field_from_dmmf(f) for f in model.get("fields", [])),
            )
            for model in datamodel.get("models", [])
        )
        enums = tuple(
            Enum(
                name=enum["name"],
                values=tuple(v["name"] if isinstance(v, dict) else str(v) for v in enum.get("values", [])),
            )
            for enum in datamodel.get("enums", [])
        )
    except (AttributeError, KeyError, TypeError) as exc:
        raise SchemaParseError(f"malformed DMMF document: missing or invalid {exc}") from exc

    return Schema(entities=entities, enums=enums)
