"""
Unit tests for the declaration document parser.
"""

import json

import pytest

from structured_reader import DeclarationError, JSONReader, WrongTypeError
from structured_reader.schema import load_schema_file, parse_schema
from structured_reader.schema.types import ArrayReader, NumberReader, ObjectReader, OneOfReader


class TestParseSchema:
    """Test building reader trees from declaration dicts."""

    def test_parse_simple_object(self):
        """Test parsing an object with scalar fields."""
        declaration = {
            "type": "object",
            "fields": [
                {"name": "name", "type": "string"},
                {"name": "age", "type": "number"}
            ]
        }

        reader = parse_schema(declaration)

        assert isinstance(reader, ObjectReader)
        assert [f.name for f in reader.fields] == ["name", "age"]
        assert reader.fields[1].reader == NumberReader()

    def test_parse_source_keys(self):
        """Test that key renames the source key."""
        declaration = {
            "type": "object",
            "fields": [{"name": "kind", "key": "widgetType", "type": "string"}]
        }

        reader = parse_schema(declaration)

        assert reader.keys == ("widgetType",)
        assert JSONReader(reader).read({"widgetType": "squorzit"}).kind == "squorzit"

    def test_parse_array_of(self):
        """Test parsing an array with a type name member."""
        reader = parse_schema({"type": "array", "of": "number"})

        assert reader == ArrayReader(NumberReader())

    def test_parse_array_member(self):
        """Test parsing an array with a full member declaration."""
        declaration = {
            "type": "array",
            "member": {"type": "object", "fields": [{"name": "id", "type": "number"}]}
        }

        result = JSONReader(parse_schema(declaration)).read([{"id": 1}, {"id": 2}])

        assert [item.id for item in result] == [1, 2]

    def test_parse_one_of(self):
        """Test parsing a union."""
        declaration = {"type": "one_of", "options": [{"type": "string"}, {"type": "number"}]}

        reader = parse_schema(declaration)

        assert isinstance(reader, OneOfReader)
        assert JSONReader(reader).read(5) == 5
        assert JSONReader(reader).read("five") == "five"

    def test_parse_nullable_and_strict(self):
        """Test the nullable and strict modifiers."""
        declaration = {
            "type": "object",
            "strict": True,
            "fields": [{"name": "note", "type": "string", "nullable": True}]
        }

        rdr = JSONReader(parse_schema(declaration))

        assert rdr.read({}).note is None
        with pytest.raises(WrongTypeError, match="strictly forbidden keys"):
            rdr.read({"note": "x", "extra": 1})

    def test_parse_literal(self):
        """Test parsing a literal value."""
        declaration = {
            "type": "object",
            "fields": [{"name": "type", "type": "literal", "value": "circle"}]
        }

        rdr = JSONReader(parse_schema(declaration))

        assert rdr.read({"type": "circle"}).type == "circle"
        assert not rdr.validate({"type": "square"}).is_valid

    def test_parse_named_types(self):
        """Test that root types are usable by name below the root."""
        declaration = {
            "type": "object",
            "types": {
                "point": {"type": "object", "fields": [
                    {"name": "x", "type": "number"},
                    {"name": "y", "type": "number"}
                ]}
            },
            "fields": [
                {"name": "start", "type": "point"},
                {"name": "end", "type": "point", "nullable": True}
            ]
        }

        result = JSONReader(parse_schema(declaration)).read({"start": {"x": 0, "y": 1}})

        assert result.start.y == 1
        assert result.end is None

    def test_missing_type(self):
        """Test that every node needs a type."""
        with pytest.raises(DeclarationError, match="missing a type"):
            parse_schema({"fields": []})

    def test_unknown_keys(self):
        """Test that unknown node keys are rejected."""
        with pytest.raises(DeclarationError, match="unknown declaration keys"):
            parse_schema({"type": "object", "properties": {}})

    def test_types_only_at_root(self):
        """Test that named types cannot be declared below the root."""
        declaration = {
            "type": "object",
            "fields": [{"name": "a", "type": "object", "types": {}, "fields": []}]
        }

        with pytest.raises(DeclarationError):
            parse_schema(declaration)

    def test_field_without_name(self):
        """Test that object fields need a name."""
        with pytest.raises(DeclarationError, match="missing a name"):
            parse_schema({"type": "object", "fields": [{"type": "string"}]})

    def test_unknown_type_name(self):
        """Test that unknown type names are rejected."""
        with pytest.raises(DeclarationError, match="unknown reader type"):
            parse_schema({"type": "object", "fields": [{"name": "a", "type": "integer"}]})

    def test_option_not_taken_by_type(self):
        """Test that options a type does not take are declaration errors."""
        with pytest.raises(DeclarationError, match="invalid declaration"):
            parse_schema({"type": "object", "fields": [{"name": "a", "type": "string", "strict": True}]})

    def test_declaration_must_be_object(self):
        """Test that the document itself must be an object."""
        with pytest.raises(DeclarationError):
            parse_schema(["string"])


class TestLoadSchemaFile:
    """Test loading declaration files."""

    def test_load_file(self, tmp_path):
        """Test loading a declaration from disk."""
        schema_path = tmp_path / "schema.json"
        schema_path.write_text(json.dumps({"type": "array", "of": "string"}))

        reader = load_schema_file(schema_path)

        assert JSONReader(reader).read(["a", "b"]) == ["a", "b"]

    def test_missing_file(self, tmp_path):
        """Test that a missing file is a ValueError."""
        with pytest.raises(ValueError, match="not found"):
            load_schema_file(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        """Test that malformed JSON is a ValueError."""
        schema_path = tmp_path / "schema.json"
        schema_path.write_text("{invalid json}")

        with pytest.raises(ValueError, match="Invalid JSON"):
            load_schema_file(schema_path)
