"""Shared fixtures: a small blog schema and a fixed run context."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from prisma_rest.models import Entity, Field, GeneratorConfig, RunContext, Schema

FIXTURES = Path(__file__).parent / "fixtures"
BLOG_SCHEMA = (FIXTURES / "blog.prisma").read_text()

FIXED_CONTEXT = RunContext(
    generator_name="prisma-rest",
    version="0.1.0",
    timestamp=datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc),
)


@pytest.fixture
def context() -> RunContext:
    return FIXED_CONTEXT


@pytest.fixture
def user() -> Entity:
    return Entity(
        name="User",
        fields=(
            Field(name="id", type="String", is_id=True),
            Field(name="email", type="String", is_unique=True),
        ),
    )


@pytest.fixture
def post() -> Entity:
    return Entity(
        name="Post",
        fields=(
            Field(name="postId", type="Int", is_id=True),
            Field(name="title", type="String"),
        ),
    )


@pytest.fixture
def category() -> Entity:
    """A model with no @id field."""
    return Entity(name="Category", fields=(Field(name="name", type="String"),))


@pytest.fixture
def schema(user, post) -> Schema:
    return Schema(entities=(user, post))


@pytest.fixture
def schema_file(tmp_path) -> Path:
    path = tmp_path / "prisma" / "schema.prisma"
    path.parent.mkdir()
    path.write_text(BLOG_SCHEMA)
    return path


@pytest.fixture
def make_config(tmp_path):
    """Return a factory for configs writing under tmp_path/out."""
    def _make(**overrides) -> GeneratorConfig:
        values = {
            "schema_path": tmp_path / "prisma" / "schema.prisma",
            "output_path": tmp_path / "out",
        }
        values.update(overrides)
        return GeneratorConfig(**values)
    return _make
