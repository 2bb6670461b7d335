#!/usr/bin/env python3

import pytest

from openapi_to_code.context.schema_nodes import (
    ArrayNode,
    CompositionNode,
    EnumNode,
    ObjectNode,
    PrimitiveNode,
    RefNode,
    SchemaKind,
    SchemaNodeVisitor,
    classify_schema,
)
from openapi_to_code.errors import UnexpectedError


class KindNameVisitor(SchemaNodeVisitor[str]):
    def visit_ref(self, node):
        return f"ref:{node.ref_path}"

    def visit_object(self, node):
        return f"object:{','.join(node.properties)}"

    def visit_array(self, node):
        return "array"

    def visit_enum(self, node):
        return f"enum:{len(node.values)}"

    def visit_composition(self, node):
        return f"composition:{node.composition_type}"

    def visit_primitive(self, node):
        return f"primitive:{node.type_name}"


class TestClassifySchema:
    """Test classification of raw schemas into node variants"""

    @pytest.mark.parametrize(
        "schema,node_class,kind",
        [
            ({"$ref": "#/components/schemas/Pet"}, RefNode, SchemaKind.REF),
            ({"type": "object", "properties": {"a": {"type": "string"}}}, ObjectNode, SchemaKind.OBJECT),
            ({"properties": {"a": {"type": "string"}}}, ObjectNode, SchemaKind.OBJECT),
            ({"type": "object", "additionalProperties": {"type": "string"}}, ObjectNode, SchemaKind.OBJECT),
            ({"type": "array", "items": {"type": "string"}}, ArrayNode, SchemaKind.ARRAY),
            ({"items": {"type": "string"}}, ArrayNode, SchemaKind.ARRAY),
            ({"type": "string", "enum": ["a", "b"]}, EnumNode, SchemaKind.ENUM),
            ({"enum": [1, 2]}, EnumNode, SchemaKind.ENUM),
            ({"oneOf": [{"type": "string"}]}, CompositionNode, SchemaKind.COMPOSITION),
            ({"anyOf": [{"type": "string"}]}, CompositionNode, SchemaKind.COMPOSITION),
            ({"allOf": [{"$ref": "#/components/schemas/Pet"}]}, CompositionNode, SchemaKind.COMPOSITION),
            ({"type": "string", "format": "date-time"}, PrimitiveNode, SchemaKind.PRIMITIVE),
            ({"type": "integer"}, PrimitiveNode, SchemaKind.PRIMITIVE),
            ({}, PrimitiveNode, SchemaKind.PRIMITIVE),
        ],
    )
    def test_classification(self, schema, node_class, kind):
        node = classify_schema(schema, "#/components/schemas/X")
        assert isinstance(node, node_class)
        assert node.kind == kind
        assert node.source_path == "#/components/schemas/X"
        assert node.raw is schema

    def test_ref_takes_priority(self):
        node = classify_schema({"$ref": "#/components/schemas/Pet", "type": "object"}, "#")
        assert isinstance(node, RefNode)
        assert node.ref_path == "#/components/schemas/Pet"

    def test_composition_type(self):
        node = classify_schema({"anyOf": [{"type": "string"}, {"type": "integer"}]}, "#")
        assert node.composition_type == "anyOf"
        assert len(node.variants) == 2

    def test_object_fields(self):
        node = classify_schema({"type": "object", "required": ["id"], "properties": {"id": {"type": "integer"}}}, "#")
        assert node.required == ["id"]
        assert list(node.properties) == ["id"]

    def test_primitive_fields(self):
        node = classify_schema({"type": "string", "format": "uuid"}, "#")
        assert node.type_name == "string"
        assert node.format == "uuid"

    @pytest.mark.parametrize("schema", ["string", 1, None, ["a"]])
    def test_non_mapping_schema(self, schema):
        with pytest.raises(UnexpectedError):
            classify_schema(schema, "#/components/schemas/Bad")

    @pytest.mark.parametrize(
        "schema",
        [
            {"type": "object", "properties": None},
            {"type": "object", "properties": ["id"]},
            {"type": "object", "properties": {}, "required": "id"},
            {"enum": None},
            {"enum": 5},
            {"oneOf": "x"},
            {"allOf": None},
        ],
    )
    def test_mistyped_field(self, schema):
        with pytest.raises(UnexpectedError) as exc_info:
            classify_schema(schema, "#/components/schemas/Bad")
        assert "#/components/schemas/Bad" in exc_info.value.detail


class TestVisitor:
    """Test visitor dispatch over node variants"""

    def test_each_variant_dispatches_to_its_method(self):
        visitor = KindNameVisitor()
        schemas = [
            {"$ref": "#/components/schemas/Pet"},
            {"type": "object", "properties": {"a": {}, "b": {}}},
            {"type": "array", "items": {}},
            {"enum": ["x", "y", "z"]},
            {"oneOf": []},
            {"type": "boolean"},
        ]
        results = [classify_schema(schema, "#").accept(visitor) for schema in schemas]
        assert results == [
            "ref:#/components/schemas/Pet",
            "object:a,b",
            "array",
            "enum:3",
            "composition:oneOf",
            "primitive:boolean",
        ]

    def test_incomplete_visitor_cannot_be_instantiated(self):
        class PartialVisitor(SchemaNodeVisitor[str]):
            def visit_ref(self, node):
                return "ref"

        with pytest.raises(TypeError):
            PartialVisitor()
