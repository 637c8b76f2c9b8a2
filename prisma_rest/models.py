"""Value types shared across the generator.

The schema model mirrors what Prisma's DMMF exposes for models, fields
and enums. Relations are kept as names only, so nothing here holds a
reference to another Entity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from . import __version__

GENERATOR_NAME = "prisma-rest"

DEFAULT_BASE_URL = "/api"
DEFAULT_PRISMA_IMPORT = "@/lib/prisma"
DEFAULT_SCHEMA_PATH = Path("./prisma/schema.prisma")

# Fallback primary key when no field is flagged @id
DEFAULT_ID_FIELD = "id"


@dataclass(frozen=True)
class Field:
    name: str
    type: str
    is_list: bool = False
    is_required: bool = True
    is_id: bool = False
    is_unique: bool = False
    documentation: str | None = None
    relation_name: str | None = None
    relation_from_fields: tuple[str, ...] | None = None
    relation_to_fields: tuple[str, ...] | None = None


@dataclass(frozen=True)
class Entity:
    name: str
    fields: tuple[Field, ...] = ()
    documentation: str | None = None

    @property
    def id_field(self) -> str:
        """Name of the primary key field, falling back to 'id'."""
        for f in self.fields:
            if f.is_id:
                return f.name
        return DEFAULT_ID_FIELD


@dataclass(frozen=True)
class Enum:
    name: str
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class Schema:
    entities: tuple[Entity, ...] = ()
    enums: tuple[Enum, ...] = ()

    def get_entity(self, name: str) -> Entity | None:
        for entity in self.entities:
            if entity.name == name:
                return entity
        return None


@dataclass(frozen=True)
class RouteDescriptor:
    path: str
    method: str  # "GET", "POST", "PUT" or "DELETE"
    handler: str
    entity: str
    operation: str


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable configuration for one generation run."""

    schema_path: Path
    output_path: Path
    base_url: str = DEFAULT_BASE_URL
    api_prefix: str | None = None
    prisma_import_path: str = DEFAULT_PRISMA_IMPORT
    include_models: frozenset[str] | None = None
    exclude_models: frozenset[str] | None = None
    force: bool = False
    skip_existing: bool = False
    dry_run: bool = False

    @property
    def route_base(self) -> str:
        """Base URL the route descriptors are built against."""
        if self.api_prefix:
            return f"{self.base_url.rstrip('/')}/{self.api_prefix.strip('/')}"
        return self.base_url

    @classmethod
    def from_options(
        cls,
        *,
        schema: Path,
        output: Path | None = None,
        base_url: str = DEFAULT_BASE_URL,
        api_prefix: str | None = None,
        prisma_import: str | None = None,
        include: list[str] | None = None,
        exclude: list[str] | None = None,
        force: bool = False,
        skip_existing: bool = False,
        dry_run: bool = False,
        cwd: Path | None = None,
    ) -> GeneratorConfig:
        """Build a config from CLI-style options.

        Relative paths are resolved against ``cwd``. When no output path is
        given, ``src/app/api`` is used if the project has a ``src``
        directory, otherwise ``app/api``; the API prefix is appended to
        either.
        """
        cwd = cwd or Path.cwd()
        if output is None:
            output = default_output_path(cwd, api_prefix)
        return cls(
            schema_path=(cwd / schema).resolve(),
            output_path=(cwd / output).resolve(),
            base_url=base_url,
            api_prefix=api_prefix,
            prisma_import_path=prisma_import or DEFAULT_PRISMA_IMPORT,
            include_models=_name_set(include),
            exclude_models=_name_set(exclude),
            force=force,
            skip_existing=skip_existing,
            dry_run=dry_run,
        )


def default_output_path(cwd: Path, api_prefix: str | None = None) -> Path:
    """Next.js app directory for API routes, honouring a ``src/`` layout."""
    root = Path("src/app/api") if (cwd / "src").is_dir() else Path("app/api")
    if api_prefix:
        root = root / api_prefix.strip("/")
    return root


def _name_set(names: list[str] | None) -> frozenset[str] | None:
    """Flatten repeated and comma-separated entity names."""
    if not names:
        return None
    flat = [n.strip() for chunk in names for n in chunk.split(",")]
    return frozenset(n for n in flat if n)


@dataclass(frozen=True)
class RunContext:
    """Generator identity and timestamp stamped into every header."""

    generator_name: str = GENERATOR_NAME
    version: str = __version__
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def iso_timestamp(self) -> str:
        ts = self.timestamp
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        ts = ts.astimezone(timezone.utc)
        return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class GeneratedFile:
    path: str  # relative to the output directory
    content: str


@dataclass
class RunReport:
    """Outcome of a generation run."""

    generated: int = 0
    skipped: int = 0
    conflicted: list[str] = field(default_factory=list)
    directive_skipped: list[str] = field(default_factory=list)
    files: list[GeneratedFile] = field(default_factory=list)
    routes: list[RouteDescriptor] = field(default_factory=list)
