"""
Schema node definitions for component schemas.

A raw schema is classified exactly once into one of the closed set of
node variants below. Later stages dispatch on the variant through a
SchemaNodeVisitor instead of re-inspecting raw schema fields.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from ..errors import UnexpectedError

T = TypeVar("T")


class SchemaKind(str, Enum):
    """Structural kind of a schema."""

    REF = "ref"
    OBJECT = "object"
    ARRAY = "array"
    ENUM = "enum"
    COMPOSITION = "composition"
    PRIMITIVE = "primitive"


@dataclass
class SchemaNode(ABC):
    """Base class for all schema nodes."""

    # Location in the document (for error messages)
    source_path: str = ""

    # The raw schema this node was classified from
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False)

    kind = SchemaKind.PRIMITIVE

    @abstractmethod
    def accept(self, visitor: SchemaNodeVisitor[T]) -> T:
        pass


@dataclass
class RefNode(SchemaNode):
    """A pointer to another location (unresolved)."""

    ref_path: str = ""

    kind = SchemaKind.REF

    def accept(self, visitor: SchemaNodeVisitor[T]) -> T:
        return visitor.visit_ref(self)


@dataclass
class ObjectNode(SchemaNode):
    """An object schema with properties and/or additionalProperties."""

    properties: dict[str, Any] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)

    kind = SchemaKind.OBJECT

    def accept(self, visitor: SchemaNodeVisitor[T]) -> T:
        return visitor.visit_object(self)


@dataclass
class ArrayNode(SchemaNode):
    """An array schema."""

    items: Any = None

    kind = SchemaKind.ARRAY

    def accept(self, visitor: SchemaNodeVisitor[T]) -> T:
        return visitor.visit_array(self)


@dataclass
class EnumNode(SchemaNode):
    """An enum schema."""

    values: list[Any] = field(default_factory=list)

    kind = SchemaKind.ENUM

    def accept(self, visitor: SchemaNodeVisitor[T]) -> T:
        return visitor.visit_enum(self)


@dataclass
class CompositionNode(SchemaNode):
    """A oneOf, anyOf or allOf composition of subschemas."""

    variants: list[Any] = field(default_factory=list)
    composition_type: str = "oneOf"  # "oneOf", "anyOf" or "allOf"

    kind = SchemaKind.COMPOSITION

    def accept(self, visitor: SchemaNodeVisitor[T]) -> T:
        return visitor.visit_composition(self)


@dataclass
class PrimitiveNode(SchemaNode):
    """A primitive schema (string, integer, number, boolean) or an untyped one."""

    type_name: str = ""
    format: str | None = None

    kind = SchemaKind.PRIMITIVE

    def accept(self, visitor: SchemaNodeVisitor[T]) -> T:
        return visitor.visit_primitive(self)


class SchemaNodeVisitor(ABC, Generic[T]):
    """Visitor over the schema node variants. Every variant must be handled."""

    @abstractmethod
    def visit_ref(self, node: RefNode) -> T:
        pass

    @abstractmethod
    def visit_object(self, node: ObjectNode) -> T:
        pass

    @abstractmethod
    def visit_array(self, node: ArrayNode) -> T:
        pass

    @abstractmethod
    def visit_enum(self, node: EnumNode) -> T:
        pass

    @abstractmethod
    def visit_composition(self, node: CompositionNode) -> T:
        pass

    @abstractmethod
    def visit_primitive(self, node: PrimitiveNode) -> T:
        pass


_COMPOSITION_KEYWORDS = ("oneOf", "anyOf", "allOf")


def _schema_field(schema: Mapping[str, Any], key: str, expected_type: type, default: Any, source_path: str) -> Any:
    """Read a schema field, raising UnexpectedError if it has the wrong type."""
    value = schema.get(key, default)
    if not isinstance(value, expected_type):
        raise UnexpectedError(f"Field {key!r} of schema at {source_path} must be {expected_type.__name__}, got {value!r}")
    return value


def classify_schema(schema: Any, source_path: str) -> SchemaNode:
    """
    Classify a raw schema into its node variant.

    Args:
        schema: The raw schema mapping
        source_path: Location of the schema in the document

    Returns:
        Appropriate SchemaNode subclass

    Raises:
        UnexpectedError: If the schema or one of its fields has the wrong shape
    """
    if not isinstance(schema, Mapping):
        raise UnexpectedError(f"Schema at {source_path} is not an object: {schema!r}")

    # Handle $ref
    if "$ref" in schema:
        return RefNode(ref_path=schema["$ref"], source_path=source_path, raw=schema)

    # Enum takes priority over type, the values drive the generated declaration
    if "enum" in schema:
        return EnumNode(values=list(_schema_field(schema, "enum", list, [], source_path)), source_path=source_path, raw=schema)

    # Handle oneOf/anyOf/allOf
    for keyword in _COMPOSITION_KEYWORDS:
        if keyword in schema:
            return CompositionNode(
                variants=list(_schema_field(schema, keyword, list, [], source_path)),
                composition_type=keyword,
                source_path=source_path,
                raw=schema,
            )

    schema_type = schema.get("type")

    if schema_type == "array" or "items" in schema:
        return ArrayNode(items=schema.get("items"), source_path=source_path, raw=schema)

    if schema_type == "object" or "properties" in schema or "additionalProperties" in schema:
        return ObjectNode(
            properties=dict(_schema_field(schema, "properties", Mapping, {}, source_path)),
            required=list(_schema_field(schema, "required", list, [], source_path)),
            source_path=source_path,
            raw=schema,
        )

    # Fallback: primitive or untyped schema
    return PrimitiveNode(
        type_name=schema_type or "",
        format=schema.get("format"),
        source_path=source_path,
        raw=schema,
    )
