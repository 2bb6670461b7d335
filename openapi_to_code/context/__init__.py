"""
Generation context.

Binds the document, the reference resolvers and the export plan into a
single read-only handle shared by every downstream consumer of one run:

1. Resolver: resolve `$ref` pointers with cycle detection and caching
2. Planner: decide export names for `components/schemas`
3. Context: freeze both into one bundle
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..config import ContextConfig
from .reference_resolver import (
    RefObjectResolvers,
    component_schema_name,
    component_schema_ref,
    is_ref_object,
    make_ref_object_resolvers,
    parse_ref,
)
from .schema_exporter import ExportedSchemas, SchemaExportPlanner, process_object_schemas
from .schema_nodes import (
    ArrayNode,
    CompositionNode,
    EnumNode,
    ObjectNode,
    PrimitiveNode,
    RefNode,
    SchemaKind,
    SchemaNode,
    SchemaNodeVisitor,
    classify_schema,
)


@dataclass(frozen=True)
class Context:
    """Read-only bundle handed to code generation."""

    document: Mapping[str, Any]
    resolve_object: Callable[..., Any]
    resolve_ref: Callable[[str], Any]
    exported_component_schemas_map: Mapping[str, str]
    # Component name -> structural kind of its body
    component_schema_kinds: Mapping[str, SchemaKind] = field(default_factory=dict)
    config: ContextConfig = field(default_factory=ContextConfig)

    def export_name_for_ref(self, ref: str) -> str | None:
        """Identifier to reference at a use site, or None if the schema is inlined."""
        name = component_schema_name(ref)
        if name is None:
            return None
        return self.exported_component_schemas_map.get(name)


def generate_context(document: Mapping[str, Any], config: ContextConfig | None = None) -> Context:
    """
    Build the generation context for a document.

    Args:
        document: The parsed OpenAPI 3.0 document
        config: Resolution and planning options

    Returns:
        Frozen Context

    Raises:
        OpenApiContractError: If a component schema cannot be resolved
    """
    config = config or ContextConfig()
    resolvers = make_ref_object_resolvers(document, config)
    exported = process_object_schemas(document, resolvers.resolve_ref, config)

    return Context(
        document=document,
        resolve_object=resolvers.resolve_object,
        resolve_ref=resolvers.resolve_ref,
        exported_component_schemas_map=MappingProxyType(exported.exported_component_schemas_map),
        component_schema_kinds=MappingProxyType(exported.kinds),
        config=config,
    )


__all__ = [
    "Context",
    "generate_context",
    "RefObjectResolvers",
    "make_ref_object_resolvers",
    "parse_ref",
    "is_ref_object",
    "component_schema_ref",
    "component_schema_name",
    "ExportedSchemas",
    "SchemaExportPlanner",
    "process_object_schemas",
    "SchemaNode",
    "RefNode",
    "ObjectNode",
    "ArrayNode",
    "EnumNode",
    "CompositionNode",
    "PrimitiveNode",
    "SchemaKind",
    "SchemaNodeVisitor",
    "classify_schema",
]
