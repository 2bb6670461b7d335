"""
Plain-text export plan rendered from a generation context.
"""

from __future__ import annotations

from pathlib import Path

import jinja2

from .context import Context, SchemaKind
from .context.operations import Operation

CURRENT_DIR = Path(__file__).parent


def render_export_plan(context: Context, operations: list[Operation], command_line: str) -> str:
    """
    Render the export plan of a context.

    Args:
        context: The generation context
        operations: Operations collected from the document
        command_line: Command line shown in the header

    Returns:
        The rendered plan
    """
    jinja_env = jinja2.Environment(lstrip_blocks=True, trim_blocks=True)
    with open(CURRENT_DIR / "templates/export_plan.txt.jinja2") as f:
        template = jinja_env.from_string(f.read())

    exports = context.exported_component_schemas_map
    kinds = context.component_schema_kinds
    aliases = {name for name, kind in kinds.items() if kind == SchemaKind.REF}
    inlined = [name for name in kinds if name not in exports]

    title = (context.document.get("info") or {}).get("title", "untitled document")

    return template.render(
        title=title,
        command_line=command_line,
        exports=dict(exports),
        aliases=aliases,
        inlined=inlined,
        operations=operations,
    )
