"""Tests for schema loading from .prisma and DMMF JSON files."""

import json

import pytest

from prisma_rest.errors import SchemaNotFoundError, SchemaParseError
from prisma_rest.loader import load_schema, schema_from_dmmf

DMMF = {
    "datamodel": {
        "models": [
            {
                "name": "User",
                "documentation": "@rest-skip",
                "fields": [
                    {"name": "uid", "type": "String", "isList": False, "isRequired": True,
                     "isId": True, "isUnique": False},
                    {"name": "posts", "type": "Post", "isList": True, "isRequired": True,
                     "isId": False, "isUnique": False, "relationName": "PostToUser",
                     "relationFromFields": [], "relationToFields": []},
                ],
            },
            {
                "name": "Post",
                "fields": [
                    {"name": "id", "type": "Int", "isId": True},
                    {"name": "authorId", "type": "String", "documentation": "FK"},
                ],
            },
        ],
        "enums": [{"name": "Role", "values": [{"name": "USER"}, {"name": "ADMIN"}]}],
    }
}


class TestSchemaFromDmmf:

    def test_models(self):
        schema = schema_from_dmmf(DMMF)
        assert [e.name for e in schema.entities] == ["User", "Post"]
        user = schema.get_entity("User")
        assert user.documentation == "@rest-skip"
        assert user.id_field == "uid"

    def test_fields(self):
        user = schema_from_dmmf(DMMF).get_entity("User")
        posts = user.fields[1]
        assert posts.is_list
        assert posts.relation_name == "PostToUser"
        assert posts.relation_from_fields == ()

    def test_defaults_for_missing_flags(self):
        post = schema_from_dmmf(DMMF).get_entity("Post")
        author_id = post.fields[1]
        assert author_id.is_required
        assert not author_id.is_list
        assert author_id.documentation == "FK"
        assert author_id.relation_from_fields is None

    def test_enums(self):
        schema = schema_from_dmmf(DMMF)
        assert schema.enums[0].name == "Role"
        assert schema.enums[0].values == ("USER", "ADMIN")

    def test_bare_datamodel(self):
        schema = schema_from_dmmf(DMMF["datamodel"])
        assert len(schema.entities) == 2

    def test_unknown_entity(self):
        assert schema_from_dmmf(DMMF).get_entity("Comment") is None

    def test_malformed(self):
        with pytest.raises(SchemaParseError, match="malformed DMMF"):
            schema_from_dmmf({"models": [{"fields": []}]})


class TestLoadSchema:

    def test_prisma_file(self, schema_file):
        schema = load_schema(schema_file)
        assert [e.name for e in schema.entities] == ["User", "Post", "Category", "AuditLog"]

    def test_json_file(self, tmp_path):
        path = tmp_path / "dmmf.json"
        path.write_text(json.dumps(DMMF))
        schema = load_schema(path)
        assert [e.name for e in schema.entities] == ["User", "Post"]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "dmmf.json"
        path.write_text("{not json")
        with pytest.raises(SchemaParseError, match="invalid DMMF JSON"):
            load_schema(path)

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "nope.prisma"
        with pytest.raises(SchemaNotFoundError) as excinfo:
            load_schema(missing)
        assert excinfo.value.path == missing
        assert "Prisma schema not found at" in str(excinfo.value)

    def test_directory_is_not_a_schema(self, tmp_path):
        with pytest.raises(SchemaNotFoundError):
            load_schema(tmp_path)
