"""
Utility functions for the OpenAPI to code context builder.
"""

import re

# Anything outside of the identifier alphabet is replaced
_INVALID_IDENTIFIER_CHAR_PATTERN = re.compile(r"[^A-Za-z0-9_$]")


def format_to_identifier_string(text: str) -> str:
    """Turn an arbitrary string into a valid bare identifier.

    Examples:
        "" -> "_"
        "1" -> "_1"
        "a$1_ " -> "a$1__"
        " a$1_2" -> "_a$1_2"
        "$" -> "$"

    Args:
        text: Any string, typically a component name from the document

    Returns:
        Identifier made of ``[A-Za-z0-9_$]`` that does not start with a digit
    """
    if not text:
        return "_"
    identifier = _INVALID_IDENTIFIER_CHAR_PATTERN.sub("_", text)
    if identifier[0].isdigit():
        identifier = f"_{identifier}"
    return identifier
