"""
Configuration for building the generation context.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Fields of the OpenAPI 3.0 Components Object
DEFAULT_REF_SECTIONS = [
    "schemas",
    "responses",
    "parameters",
    "examples",
    "requestBodies",
    "headers",
    "securitySchemes",
    "links",
    "callbacks",
]


@dataclass
class ContextConfig:
    """Configuration options for reference resolution and export planning."""

    # Components sections a pointer may target
    supported_ref_sections: list[str] = field(default_factory=lambda: list(DEFAULT_REF_SECTIONS))

    # Hoist primitive component schemas (string, integer, ...) into exports
    export_primitive_schemas: bool = False

    # First numeric suffix used when two components share an identifier
    collision_suffix_start: int = 2

    @staticmethod
    def from_dict(d: dict) -> ContextConfig:
        """Create a config from a dictionary."""
        config = ContextConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "supported_ref_sections": self.supported_ref_sections,
            "export_primitive_schemas": self.export_primitive_schemas,
            "collision_suffix_start": self.collision_suffix_start,
        }
