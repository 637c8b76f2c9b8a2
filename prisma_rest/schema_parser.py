"""Parse Prisma schema language into the schema model.

Handles:
- model and enum blocks (datasource, generator, view and type blocks are skipped)
- `///` doc comments attached to the following model, enum or field
- `//` line comments, including trailing ones outside string literals
- `?` optional and `[]` list type modifiers, Unsupported("...") types
- @id, @unique and @relation(name, fields: [...], references: [...])
- relation names Prisma derives when none is given ("PostToUser")

Block attributes such as @@id and @@unique are ignored; only fields with a
field-level @id count as the primary key.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace

from .errors import SchemaParseError
from .models import Entity, Enum, Field, Schema

logger = logging.getLogger(__name__)

_BLOCK_START = re.compile(r"^(?P<kind>model|enum|view|type|datasource|generator)\s+(?P<name>\w+)\s*\{$")

_FIELD_LINE = re.compile(
    r"^(?P<name>\w+)\s+"
    r"(?P<type>Unsupported\(\"[^\"]*\"\)|\w+)"
    r"(?P<list>\[\])?(?P<optional>\?)?"
    r"(?:\s+(?P<attrs>.*))?$"
)

_ID_ATTR = re.compile(r"(?<!@)@id\b")
_UNIQUE_ATTR = re.compile(r"(?<!@)@unique\b")
_RELATION_ATTR = re.compile(r"@relation\((?P<args>[^)]*)\)")
_RELATION_NAME = re.compile(r"^\s*(?:name\s*:\s*)?\"(?P<name>[^\"]*)\"")
_RELATION_LIST = re.compile(r"\b(?P<key>fields|references)\s*:\s*\[(?P<items>[^\]]*)\]")

_SKIPPED_BLOCKS = {"datasource", "generator", "view", "type"}


@dataclass
class _Block:
    kind: str
    name: str
    line: int
    documentation: str | None
    lines: list[tuple[int, str, str | None]] = field(default_factory=list)


def _strip_comment(line: str) -> str:
    """Drop a trailing // comment that is not inside a string literal."""
    in_string = False
    for i, ch in enumerate(line):
        if ch == '"' and (i == 0 or line[i - 1] != "\\"):
            in_string = not in_string
        elif not in_string and line.startswith("//", i):
            return line[:i]
    return line


def _split_names(items: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in items.split(",") if item.strip())


def _parse_field(line_no: int, text: str, documentation: str | None) -> Field:
    match = _FIELD_LINE.match(text)
    if not match:
        raise SchemaParseError(f"invalid field declaration: {text!r}", line_no)

    attrs = match.group("attrs") or ""
    relation_name = None
    from_fields = None
    to_fields = None

    relation = _RELATION_ATTR.search(attrs)
    if relation:
        args = relation.group("args")
        name_match = _RELATION_NAME.match(args)
        if name_match:
            relation_name = name_match.group("name")
        lists = {m.group("key"): _split_names(m.group("items")) for m in _RELATION_LIST.finditer(args)}
        from_fields = lists.get("fields", ())
        to_fields = lists.get("references", ())

    return Field(
        name=match.group("name"),
        type=match.group("type"),
        is_list=bool(match.group("list")),
        is_required=not match.group("optional"),
        is_id=bool(_ID_ATTR.search(attrs)),
        is_unique=bool(_UNIQUE_ATTR.search(attrs)),
        documentation=documentation,
        relation_name=relation_name,
        relation_from_fields=from_fields,
        relation_to_fields=to_fields,
    )


def _read_blocks(source: str) -> list[_Block]:
    """Group schema lines into top-level blocks, attaching doc comments."""
    blocks: list[_Block] = []
    current: _Block | None = None
    docs: list[str] = []

    for line_no, raw in enumerate(source.splitlines(), start=1):
        stripped = raw.strip()
        if stripped.startswith("///"):
            docs.append(stripped[3:].strip())
            continue
        text = _strip_comment(stripped).strip()
        if not text:
            continue

        documentation = "\n".join(docs) if docs else None
        docs = []

        if current is None:
            match = _BLOCK_START.match(text)
            if not match:
                raise SchemaParseError(f"unexpected top-level statement: {text!r}", line_no)
            current = _Block(match.group("kind"), match.group("name"), line_no, documentation)
        elif text == "}":
            blocks.append(current)
            current = None
        else:
            current.lines.append((line_no, text, documentation))

    if current is not None:
        raise SchemaParseError(f"unterminated {current.kind} block {current.name!r}", current.line)
    return blocks


def _default_relation_name(model: str, other: str) -> str:
    first, second = sorted((model, other))
    return f"{first}To{second}"


def _resolve_relations(entities: list[Entity]) -> list[Entity]:
    """Fill in relation metadata for fields typed by another model."""
    model_names = {e.name for e in entities}
    resolved = []
    for entity in entities:
        fields = []
        for f in entity.fields:
            if f.type in model_names:
                f = replace(
                    f,
                    relation_name=f.relation_name or _default_relation_name(entity.name, f.type),
                    relation_from_fields=f.relation_from_fields or (),
                    relation_to_fields=f.relation_to_fields or (),
                )
            fields.append(f)
        resolved.append(replace(entity, fields=tuple(fields)))
    return resolved


def parse_prisma_schema(source: str) -> Schema:
    """Parse the text of a schema.prisma file."""
    entities: list[Entity] = []
    enums: list[Enum] = []
    seen: set[str] = set()

    for block in _read_blocks(source):
        if block.kind in _SKIPPED_BLOCKS:
            logger.debug("Skipping %s block %s", block.kind, block.name)
            continue
        if block.name in seen:
            raise SchemaParseError(f"duplicate declaration {block.name!r}", block.line)
        seen.add(block.name)

        if block.kind == "enum":
            values = tuple(
                text.split()[0] for _, text, _ in block.lines if not text.startswith("@@")
            )
            enums.append(Enum(name=block.name, values=values))
        else:
            fields = tuple(
                _parse_field(line_no, text, doc)
                for line_no, text, doc in block.lines
                if not text.startswith("@@")
            )
            entities.append(Entity(name=block.name, fields=fields, documentation=block.documentation))

    return Schema(entities=tuple(_resolve_relations(entities)), enums=tuple(enums))
