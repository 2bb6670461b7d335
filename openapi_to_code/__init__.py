"""OpenAPI to Code context builder

A Python package that resolves `$ref` pointers of an OpenAPI 3.0 document
into a cycle-safe object graph and plans stable, collision-free export
names for its component schemas, ready for code generation.
"""

__version__ = "1.0.0"

from .config import ContextConfig
from .context import Context, generate_context
from .context.operations import Operation, collect_operations
from .errors import (
    CircularRefDependencyError,
    ErrorCode,
    InvalidHttpMethodError,
    InvalidRefError,
    InvalidStatusCodeError,
    MissingSchemaInParameterError,
    NotImplementedFeatureError,
    OpenApiContractError,
    ResolveRefError,
    UnexpectedError,
)
from .utils import format_to_identifier_string

__all__ = [
    "generate_context",
    "Context",
    "ContextConfig",
    "collect_operations",
    "Operation",
    "format_to_identifier_string",
    "ErrorCode",
    "OpenApiContractError",
    "CircularRefDependencyError",
    "InvalidHttpMethodError",
    "InvalidRefError",
    "InvalidStatusCodeError",
    "MissingSchemaInParameterError",
    "NotImplementedFeatureError",
    "ResolveRefError",
    "UnexpectedError",
]
