"""
Error taxonomy for reference resolution and export planning.

Every failure that leaves the resolver, the export planner or the
operation walker is an OpenApiContractError carrying a machine-checkable
code and a human-readable detail string.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Machine-checkable error codes."""

    CIRCULAR_REF_DEPENDENCY = "CircularRefDependencyError"
    INVALID_HTTP_METHOD = "InvalidHttpMethodError"
    INVALID_REF = "InvalidRefError"
    INVALID_STATUS_CODE = "InvalidStatusCodeError"
    MISSING_SCHEMA_IN_PARAMETER = "MissingSchemaInParameterError"
    NOT_IMPLEMENTED = "NotImplementedError"
    RESOLVE_REF = "ResolveRefError"
    UNEXPECTED = "UnexpectedError"


class OpenApiContractError(Exception):
    """Base class for all errors raised while building a context."""

    code: ErrorCode = ErrorCode.UNEXPECTED

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidRefError(OpenApiContractError):
    """Raised when a pointer does not match `#/components/<section>/<name>`."""

    code = ErrorCode.INVALID_REF

    def __init__(self, ref):
        super().__init__(f"Invalid reference found: {ref}")
        self.ref = ref


class ResolveRefError(OpenApiContractError):
    """Raised when a well-formed pointer has no target in the document."""

    code = ErrorCode.RESOLVE_REF

    def __init__(self, ref: str):
        super().__init__(f"Could not resolve reference: {ref}")
        self.ref = ref


class CircularRefDependencyError(OpenApiContractError):
    """Raised when a pointer is met again while it is still being resolved.

    Attributes:
        deps_path: Ordered pointers forming the cycle, first and last equal
    """

    code = ErrorCode.CIRCULAR_REF_DEPENDENCY

    def __init__(self, deps_path: list[str]):
        super().__init__(f"Circular reference detected: {' -> '.join(deps_path)}")
        self.deps_path = list(deps_path)


class InvalidHttpMethodError(OpenApiContractError):
    code = ErrorCode.INVALID_HTTP_METHOD

    def __init__(self, method: str, path: str):
        super().__init__(f"Invalid HTTP method at path {path}: {method}")
        self.method = method
        self.path = path


class InvalidStatusCodeError(OpenApiContractError):
    code = ErrorCode.INVALID_STATUS_CODE

    def __init__(self, status_code: str, method: str, path: str):
        super().__init__(f"Invalid status code at path {method} {path}: {status_code}")
        self.status_code = status_code
        self.method = method
        self.path = path


class MissingSchemaInParameterError(OpenApiContractError):
    code = ErrorCode.MISSING_SCHEMA_IN_PARAMETER

    def __init__(self, param_type: str, method: str, path: str):
        super().__init__(f"Missing schema in parameter {param_type} at path {method} {path}")
        self.param_type = param_type
        self.method = method
        self.path = path


class NotImplementedFeatureError(OpenApiContractError):
    """Raised for document constructs that are recognized but not supported.

    Named to avoid shadowing the builtin NotImplementedError; its code is
    still ``NotImplementedError``.
    """

    code = ErrorCode.NOT_IMPLEMENTED


class UnexpectedError(OpenApiContractError):
    """Raised on invariant violations that prior validation should rule out."""

    code = ErrorCode.UNEXPECTED
