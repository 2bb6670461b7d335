"""
Structural validation of path operations.

Walks the `paths` section, checks HTTP methods, response status codes and
parameter schemas, and collects each operation with its pointers
resolved.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..errors import (
    InvalidHttpMethodError,
    InvalidStatusCodeError,
    MissingSchemaInParameterError,
    NotImplementedFeatureError,
)
from . import Context

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

PARAMETER_LOCATIONS = ("path", "query", "header", "cookie")

# Path item fields that are not operations
PATH_ITEM_FIELDS = {"summary", "description", "servers", "parameters"}

# "default", 100-599, or a range such as "2XX"
_STATUS_CODE_PATTERN = re.compile(r"^(default|[1-5][0-9][0-9]|[1-5]XX)$")


def validate_http_method(method: str, path: str) -> None:
    """Raise InvalidHttpMethodError unless method is a recognized HTTP verb."""
    if method not in HTTP_METHODS:
        raise InvalidHttpMethodError(method=method, path=path)


def validate_status_code(status_code: Any, method: str, path: str) -> None:
    """Raise InvalidStatusCodeError unless status_code is a valid status token."""
    if not _STATUS_CODE_PATTERN.match(str(status_code)):
        raise InvalidStatusCodeError(status_code=str(status_code), method=method, path=path)


def validate_parameter(parameter: Mapping[str, Any], method: str, path: str) -> None:
    """Raise MissingSchemaInParameterError if a path/query/header/cookie parameter has no schema."""
    location = parameter.get("in")
    if location in PARAMETER_LOCATIONS and "schema" not in parameter:
        raise MissingSchemaInParameterError(param_type=location, method=method, path=path)


@dataclass
class Operation:
    """An operation with its pointers resolved."""

    path: str = ""
    method: str = ""
    operation_id: str | None = None
    # Resolved parameters, path-level ones first unless overridden
    parameters: list[Mapping[str, Any]] = field(default_factory=list)
    request_body: Mapping[str, Any] | None = None
    # Status code -> resolved response
    responses: dict[str, Mapping[str, Any]] = field(default_factory=dict)


def _resolve_parameters(context: Context, parameters: list[Any]) -> list[Mapping[str, Any]]:
    return [context.resolve_object(parameter) for parameter in parameters]


def _merge_parameters(
    path_parameters: list[Mapping[str, Any]],
    operation_parameters: list[Mapping[str, Any]],
) -> list[Mapping[str, Any]]:
    """Operation-level parameters override path-level ones with the same (in, name)."""
    overridden = {(p.get("in"), p.get("name")) for p in operation_parameters}
    kept = [p for p in path_parameters if (p.get("in"), p.get("name")) not in overridden]
    return kept + list(operation_parameters)


def collect_operations(context: Context) -> list[Operation]:
    """
    Walk every path operation of the document.

    Args:
        context: The generation context

    Returns:
        Operations in document order

    Raises:
        InvalidHttpMethodError: If an operation key is not an HTTP verb
        InvalidStatusCodeError: If a response key is not a status token
        MissingSchemaInParameterError: If a parameter has no schema
        NotImplementedFeatureError: If a path item is a $ref
    """
    operations = []
    paths = context.document.get("paths") or {}

    for path, path_item in paths.items():
        if "$ref" in path_item:
            raise NotImplementedFeatureError(f"Path item references are not supported at path {path}: {path_item['$ref']}")

        path_parameters = _resolve_parameters(context, path_item.get("parameters", []))

        for method, operation in path_item.items():
            if method in PATH_ITEM_FIELDS or method.startswith("x-"):
                continue
            validate_http_method(method, path)

            parameters = _merge_parameters(path_parameters, _resolve_parameters(context, operation.get("parameters", [])))
            for parameter in parameters:
                validate_parameter(parameter, method, path)

            responses = {}
            for status_code, response in (operation.get("responses") or {}).items():
                validate_status_code(status_code, method, path)
                responses[str(status_code)] = context.resolve_object(response)

            request_body = operation.get("requestBody")
            operations.append(
                Operation(
                    path=path,
                    method=method,
                    operation_id=operation.get("operationId"),
                    parameters=parameters,
                    request_body=context.resolve_object(request_body) if request_body is not None else None,
                    responses=responses,
                )
            )

    return operations
