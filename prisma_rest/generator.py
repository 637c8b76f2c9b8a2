"""Orchestrate route generation for a parsed schema.

For every selected model two files are produced under the output root:

    {plural}/route.ts        list + create
    {plural}/[id]/route.ts   get + update + delete

Existing files are left alone unless ``force`` is set; ``skip_existing``
turns a conflict into a counted skip. Models are processed one after the
other and nothing is rolled back if a later model fails.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from .composer import compose_file
from .directives import parse_rest_directives
from .handlers import generate_route_handler
from .loader import load_schema
from .models import Entity, GeneratedFile, GeneratorConfig, RunContext, RunReport, Schema
from .naming import ID_SEGMENT, pluralize
from .routes import build_routes
from .writer import write_file

logger = logging.getLogger(__name__)

ROUTE_FILENAME = "route.ts"

# Handlers sharing a route file, in output order
COLLECTION_ROUTE_OPERATIONS = ("list", "create")
ITEM_ROUTE_OPERATIONS = ("get", "update", "delete")


def route_file_paths(entity: Entity) -> tuple[str, str]:
    """Relative paths of the collection and item route files."""
    plural = pluralize(entity.name)
    return f"{plural}/{ROUTE_FILENAME}", f"{plural}/{ID_SEGMENT}/{ROUTE_FILENAME}"


def select_entities(
    entities: Iterable[Entity],
    include: Iterable[str] | None = None,
    exclude: Iterable[str] | None = None,
) -> list[Entity]:
    """Apply the include filter, then the exclude filter, keeping schema order."""
    selected = list(entities)
    if include is not None:
        include = set(include)
        unknown = include - {e.name for e in selected}
        if unknown:
            logger.warning("Included models not found in schema: %s", ", ".join(sorted(unknown)))
        selected = [e for e in selected if e.name in include]
    if exclude is not None:
        exclude = set(exclude)
        selected = [e for e in selected if e.name not in exclude]
    return selected


def plan_entity(entity: Entity, config: GeneratorConfig, context: RunContext) -> list[GeneratedFile]:
    """Render both route files for one model."""
    collection_path, item_path = route_file_paths(entity)
    files = []
    layout = ((collection_path, COLLECTION_ROUTE_OPERATIONS), (item_path, ITEM_ROUTE_OPERATIONS))
    for path, operations in layout:
        handlers = [generate_route_handler(entity, op, config.prisma_import_path) for op in operations]
        files.append(GeneratedFile(path=path, content=compose_file(handlers, context)))
    return files


def _path_exists(path: Path) -> bool:
    return path.exists()


def generate_routes(
    schema: Schema,
    config: GeneratorConfig,
    context: RunContext,
    *,
    exists: Callable[[Path], bool] = _path_exists,
    write: Callable[[Path, str], None] = write_file,
) -> RunReport:
    """Generate route files for every selected model and report the outcome."""
    report = RunReport()

    for entity in select_entities(schema.entities, config.include_models, config.exclude_models):
        if parse_rest_directives(entity.documentation).skip:
            logger.info("Skipping %s (@rest-skip)", entity.name)
            report.directive_skipped.append(entity.name)
            continue

        files = plan_entity(entity, config, context)
        targets = [config.output_path / f.path for f in files]

        if any(exists(target) for target in targets):
            if config.skip_existing:
                logger.info("Skipping existing routes for %s", entity.name)
                report.skipped += 1
                continue
            if not config.force:
                logger.warning("Routes already exist for %s", entity.name)
                report.conflicted.append(entity.name)
                continue
            logger.info("Overwriting existing routes for %s", entity.name)

        if config.dry_run:
            logger.info("[DRY RUN] Would generate routes for %s", entity.name)
        else:
            for target, generated in zip(targets, files):
                write(target, generated.content)
            logger.info("Generated routes for %s", entity.name)

        report.generated += 1
        report.files.extend(files)
        report.routes.extend(build_routes(entity, config.route_base))

    return report


def run(config: GeneratorConfig, context: RunContext | None = None) -> RunReport:
    """Load the schema named by ``config`` and generate its routes."""
    schema = load_schema(config.schema_path)
    logger.info("Parsed %d models from schema", len(schema.entities))
    return generate_routes(schema, config, context or RunContext())
