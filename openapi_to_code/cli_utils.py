"""
Command line summary for the export plan header.
"""

import os

import click

COMMAND_NAME = "openapi_to_code"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Summarize the running invocation of `click_command`.

    Path values are reduced to their file name so the header does not depend
    on the working directory. Options left at their default are omitted.
    """
    ctx = click.get_current_context(silent=True)
    if ctx is None:
        return COMMAND_NAME

    words = [COMMAND_NAME]
    for param in click_command.params:
        value = ctx.params.get(param.name)
        if value is None or value == param.default:
            continue
        if isinstance(param, click.Argument):
            words.append(os.path.basename(value))
        elif param.is_flag:
            words.append(param.opts[0])
        else:
            words.extend([param.opts[0], os.path.basename(value)])
    return " ".join(words)
