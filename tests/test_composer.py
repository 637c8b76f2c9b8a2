"""Tests for handler merging and the provenance header."""

from datetime import datetime, timedelta, timezone

from prisma_rest.composer import (
    add_generator_header,
    combine_handlers,
    compose_file,
    split_imports,
)
from prisma_rest.handlers import generate_route_handler
from prisma_rest.models import RunContext

A = "import { a } from 'a'\nimport { shared } from 'shared'\n\nexport const A = 1\n"
B = "import { shared } from 'shared'\nimport { b } from 'b'\n\nexport const B = 2\n"
C = "import { c } from 'c'\nimport { a } from 'a'\n\nexport const C = 3"


class TestSplitImports:

    def test_split(self):
        imports, body = split_imports(A)
        assert imports == ["import { a } from 'a'", "import { shared } from 'shared'"]
        assert body == "export const A = 1"

    def test_no_imports(self):
        assert split_imports("\n\nexport const X = 1\n") == ([], "export const X = 1")

    def test_late_import_stays_in_body(self):
        source = "import { a } from 'a'\n\nconst x = 1\nimport { late } from 'late'\n"
        imports, body = split_imports(source)
        assert imports == ["import { a } from 'a'"]
        assert body == "const x = 1\nimport { late } from 'late'"


class TestCombineHandlers:

    def test_dedup_first_seen_order(self):
        merged = combine_handlers(A, B)
        assert merged == (
            "import { a } from 'a'\n"
            "import { shared } from 'shared'\n"
            "import { b } from 'b'\n"
            "\n"
            "export const A = 1\n"
            "\n"
            "export const B = 2"
        )

    def test_late_import_not_deduplicated(self):
        late = "import { a } from 'a'\n\nexport const L = 0\nimport { a } from 'a'\n"
        merged = combine_handlers(A, late)
        assert merged.count("import { a } from 'a'") == 2
        assert merged.endswith("export const L = 0\nimport { a } from 'a'")

    def test_associative(self):
        stepwise = combine_handlers(combine_handlers(A, B), C)
        direct = combine_handlers(A, B, C)
        assert split_imports(stepwise)[0] == split_imports(direct)[0]
        assert stepwise == direct

    def test_real_handlers(self, user):
        merged = combine_handlers(
            generate_route_handler(user, "get"),
            generate_route_handler(user, "update"),
            generate_route_handler(user, "delete"),
        )
        assert merged.count("import { NextRequest, NextResponse } from 'next/server'") == 1
        assert merged.count("import { prisma } from '@/lib/prisma'") == 1
        assert merged.index("function GET(") < merged.index("function PUT(") < merged.index("function DELETE(")
        assert "}\n\nexport async function PUT(" in merged
        assert not merged.endswith("\n")


class TestHeader:

    def test_header(self, context):
        content = add_generator_header("body", context)
        assert content == (
            "// Generated by prisma-rest v0.1.0\n"
            "// Generated at: 2024-01-02T03:04:05.678Z\n"
            "// DO NOT MODIFY THIS COMMENT BLOCK\n"
            "\n"
            "body"
        )

    def test_timestamp_normalized_to_utc(self):
        tz = timezone(timedelta(hours=2))
        context = RunContext(timestamp=datetime(2024, 6, 1, 12, 0, tzinfo=tz))
        assert context.iso_timestamp == "2024-06-01T10:00:00.000Z"

    def test_compose_file(self, context):
        content = compose_file([A, B], context)
        assert content.startswith("// Generated by prisma-rest v0.1.0\n")
        assert content.endswith(combine_handlers(A, B))

    def test_only_header_depends_on_time(self, user):
        early = RunContext(timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc))
        late = RunContext(timestamp=datetime(2025, 1, 1, tzinfo=timezone.utc))
        handlers = [generate_route_handler(user, op) for op in ("list", "create")]
        a = compose_file(handlers, early).split("\n")
        b = compose_file(handlers, late).split("\n")
        assert a[1] != b[1]
        assert a[:1] + a[2:] == b[:1] + b[2:]
