"""
Schema export planner.

Walks `components/schemas` and decides which definitions become a
standalone named export and which are inlined where they are used.
Aliases (definitions that are only a pointer to another component) are
collapsed onto the export name of the definition they point to.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..config import ContextConfig
from ..errors import CircularRefDependencyError
from ..utils import format_to_identifier_string
from .reference_resolver import component_schema_name, component_schema_ref
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

logger = logging.getLogger(__name__)


@dataclass
class ExportedSchemas:
    """Result of export planning."""

    # Component name -> export name (aliases point to their target's export name)
    exported_component_schemas_map: dict[str, str] = field(default_factory=dict)

    # Component name -> structural kind of its body
    kinds: dict[str, SchemaKind] = field(default_factory=dict)


class ExportDecision(SchemaNodeVisitor[bool]):
    """Decides whether a concrete schema is hoisted into a named export."""

    def __init__(self, config: ContextConfig):
        self.config = config

    def visit_ref(self, node: RefNode) -> bool:
        # Aliases are collapsed onto their target, never exported themselves
        return False

    def visit_object(self, node: ObjectNode) -> bool:
        return True

    def visit_array(self, node: ArrayNode) -> bool:
        return True

    def visit_enum(self, node: EnumNode) -> bool:
        return True

    def visit_composition(self, node: CompositionNode) -> bool:
        return True

    def visit_primitive(self, node: PrimitiveNode) -> bool:
        return self.config.export_primitive_schemas


class SchemaExportPlanner:
    """Assigns unique export names to component schemas."""

    def __init__(
        self,
        document: Mapping[str, Any],
        resolve_ref: Callable[[str], Any],
        config: ContextConfig | None = None,
    ):
        """
        Initialize the planner.

        Args:
            document: The OpenAPI document
            resolve_ref: Resolver returning the raw object a pointer designates
            config: Planning options
        """
        self.document = document
        self.resolve_ref = resolve_ref
        self.config = config or ContextConfig()
        self._decision = ExportDecision(self.config)
        self._nodes: dict[str, SchemaNode] = {}
        self._export_names: dict[str, str] = {}
        self._used_names: set[str] = set()

    def plan(self) -> ExportedSchemas:
        """
        Plan exports for every entry of `components/schemas`.

        Concrete definitions are named first, in document order, then aliases
        are resolved onto them.

        Raises:
            CircularRefDependencyError: If aliases point to each other in a loop
            InvalidRefError: If an alias pointer is malformed
            ResolveRefError: If an alias pointer has no target
        """
        schemas = (self.document.get("components") or {}).get("schemas") or {}

        for name, schema in schemas.items():
            self._nodes[name] = classify_schema(schema, component_schema_ref(name))

        # First pass: concrete definitions
        for name, node in self._nodes.items():
            if node.accept(self._decision):
                self._assign_export_name(name)

        # Second pass: aliases
        alias_targets: dict[str, str] = {}
        for name, node in self._nodes.items():
            if isinstance(node, RefNode):
                export_name = self._resolve_alias(name, node)
                if export_name is not None:
                    alias_targets[name] = export_name
                    logger.debug("Alias %s collapsed onto %s", name, export_name)
                else:
                    logger.debug("Alias %s is inlined", name)

        result = ExportedSchemas()
        for name, node in self._nodes.items():
            result.kinds[name] = node.kind
            if name in self._export_names:
                result.exported_component_schemas_map[name] = self._export_names[name]
            elif name in alias_targets:
                result.exported_component_schemas_map[name] = alias_targets[name]
        return result

    def _assign_export_name(self, component_name: str) -> str:
        """Give a component a unique identifier, suffixing it on collision."""
        base_name = format_to_identifier_string(component_name)
        export_name = base_name
        suffix = self.config.collision_suffix_start
        while export_name in self._used_names:
            export_name = f"{base_name}_{suffix}"
            suffix += 1

        if export_name != base_name:
            logger.debug("Export name %s taken, %s exported as %s", base_name, component_name, export_name)

        self._used_names.add(export_name)
        self._export_names[component_name] = export_name
        return export_name

    def _resolve_alias(self, name: str, node: RefNode) -> str | None:
        """Follow an alias chain to the export name of its first concrete definition."""
        resolution_path: tuple[str, ...] = (component_schema_ref(name),)
        current: SchemaNode = node
        # Last components/schemas alias seen, owner of the export if the chain leaves the section
        last_alias = name

        while isinstance(current, RefNode):
            ref = current.ref_path
            if ref in resolution_path:
                raise CircularRefDependencyError([*resolution_path, ref])

            target = self.resolve_ref(ref)
            resolution_path = (*resolution_path, ref)

            target_name = component_schema_name(ref)
            if target_name is not None and target_name in self._nodes:
                current = self._nodes[target_name]
                if not isinstance(current, RefNode):
                    return self._export_names.get(target_name)
                last_alias = target_name
            else:
                current = classify_schema(target, ref)

        if not current.accept(self._decision):
            return None
        # Every alias of the chain shares one export
        if last_alias in self._export_names:
            return self._export_names[last_alias]
        return self._assign_export_name(last_alias)


def process_object_schemas(
    document: Mapping[str, Any],
    resolve_ref: Callable[[str], Any],
    config: ContextConfig | None = None,
) -> ExportedSchemas:
    """Plan the export names of the document's component schemas."""
    return SchemaExportPlanner(document, resolve_ref, config).plan()
