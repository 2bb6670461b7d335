"""
Reference resolver for $ref resolution.

Resolves `#/components/<section>/<name>` pointers to the objects they
designate in the document, following chains of pointers with cycle
detection and a per-run resolution cache.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..config import ContextConfig
from ..errors import CircularRefDependencyError, InvalidRefError, ResolveRefError

logger = logging.getLogger(__name__)

REF_PREFIX = "#/"
COMPONENT_SCHEMAS_PREFIX = "#/components/schemas/"


def is_ref_object(value: Any) -> bool:
    """Check if a value is a pointer wrapper (a mapping with a $ref key)."""
    return isinstance(value, Mapping) and "$ref" in value


def _unescape_segment(segment: str) -> str:
    """Decode JSON pointer escapes (~1 is '/', ~0 is '~')."""
    return segment.replace("~1", "/").replace("~0", "~")


def _escape_segment(segment: str) -> str:
    return segment.replace("~", "~0").replace("/", "~1")


def component_schema_ref(name: str) -> str:
    """Build the pointer to a `components/schemas` entry."""
    return f"{COMPONENT_SCHEMAS_PREFIX}{_escape_segment(name)}"


def component_schema_name(ref: str) -> str | None:
    """Return the component name if the pointer targets a `components/schemas` entry directly."""
    if not isinstance(ref, str) or not ref.startswith(COMPONENT_SCHEMAS_PREFIX):
        return None
    escaped_name = ref[len(COMPONENT_SCHEMAS_PREFIX) :]
    if not escaped_name or "/" in escaped_name:
        return None
    return _unescape_segment(escaped_name)


def parse_ref(ref: Any, supported_sections: Sequence[str]) -> list[str]:
    """
    Parse a pointer into the list of keys to walk from the document root.

    Args:
        ref: Pointer string, e.g. "#/components/schemas/Pet"
        supported_sections: Components sections a pointer may target

    Returns:
        Path segments, e.g. ["components", "schemas", "Pet"]

    Raises:
        InvalidRefError: If the pointer does not have the supported shape
    """
    if not isinstance(ref, str) or not ref.startswith(REF_PREFIX):
        raise InvalidRefError(ref)

    segments = [_unescape_segment(part) for part in ref[len(REF_PREFIX) :].split("/")]
    if len(segments) < 3 or segments[0] != "components" or segments[1] not in supported_sections or not segments[2]:
        raise InvalidRefError(ref)
    return segments


@dataclass
class RefObjectResolvers:
    """Resolvers bound to one document.

    The cache is owned by this instance, so two generation runs never share
    resolved objects.
    """

    document: Mapping[str, Any]
    config: ContextConfig = field(default_factory=ContextConfig)
    _cache: dict[str, Any] = field(default_factory=dict, init=False, repr=False)

    def resolve_ref(self, ref: str) -> Any:
        """
        Return the raw object a pointer designates.

        The result may itself be a pointer wrapper; use resolve_object to get
        the fully dereferenced target.

        Raises:
            InvalidRefError: If the pointer is malformed
            ResolveRefError: If the pointer has no target in the document
        """
        segments = parse_ref(ref, self.config.supported_ref_sections)

        current: Any = self.document
        for segment in segments:
            if isinstance(current, Mapping) and segment in current:
                current = current[segment]
            elif isinstance(current, list) and segment.isascii() and segment.isdigit() and int(segment) < len(current):
                current = current[int(segment)]
            else:
                raise ResolveRefError(ref)
        return current

    def resolve_object(self, value: Any, resolution_path: tuple[str, ...] = ()) -> Any:
        """
        Dereference a pointer wrapper recursively; return anything else unchanged.

        Args:
            value: A concrete object or a pointer wrapper
            resolution_path: Pointers being resolved on the current call chain

        Returns:
            The concrete target, identical for every resolution of a pointer

        Raises:
            CircularRefDependencyError: If a pointer is already on the path
            InvalidRefError: If a pointer is malformed
            ResolveRefError: If a pointer has no target in the document
        """
        if not is_ref_object(value):
            return value

        ref = value["$ref"]
        if not isinstance(ref, str):
            raise InvalidRefError(ref)
        if ref in self._cache:
            return self._cache[ref]

        if ref in resolution_path:
            raise CircularRefDependencyError([*resolution_path, ref])

        logger.debug("Resolving %s", ref)
        resolved = self.resolve_object(self.resolve_ref(ref), (*resolution_path, ref))
        self._cache[ref] = resolved
        return resolved

    @property
    def cache(self) -> Mapping[str, Any]:
        """Read-only view of the resolution cache."""
        return MappingProxyType(self._cache)


def make_ref_object_resolvers(document: Mapping[str, Any], config: ContextConfig | None = None) -> RefObjectResolvers:
    """Bind resolve_ref and resolve_object to a document."""
    return RefObjectResolvers(document=document, config=config or ContextConfig())
