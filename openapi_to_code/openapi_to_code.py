import json
import logging

import click

from .cli_utils import reconstruct_command_line
from .config import ContextConfig
from .context import generate_context
from .context.operations import collect_operations
from .errors import OpenApiContractError
from .logging_config import setup_logging
from .report import render_export_plan

logger = logging.getLogger(__name__)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log resolution details to stderr")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", required=False, default=None, type=click.Path(resolve_path=True))
def openapi_to_code(config, verbose, path, output):
    setup_logging(verbose)

    with open(path) as f:
        document = json.load(f)

    if config is not None:
        with open(config) as f:
            config = ContextConfig.from_dict(json.load(f))
    else:
        config = ContextConfig()

    try:
        context = generate_context(document, config)
        operations = collect_operations(context)
    except OpenApiContractError as e:
        raise click.ClickException(f"{e.code.value}: {e.detail}") from e

    logger.info("%d component schemas exported, %d operations", len(context.exported_component_schemas_map), len(operations))

    out = render_export_plan(context, operations, reconstruct_command_line(openapi_to_code))
    if output is None:
        click.echo(out, nl=False)
    else:
        with open(output, "w") as f:
            f.write(out)
