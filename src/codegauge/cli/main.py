"""CodeGauge CLI - codegauge command."""

from pathlib import Path

import click

from codegauge.cli.analyze import analyze_command
from codegauge.cli.languages import languages_command
from codegauge.config import load_config
from codegauge.core.errors import ConfigError
from codegauge.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="codegauge")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """CodeGauge - per-scope complexity metrics for source code."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    try:
        config = load_config(Path.cwd())
    except ConfigError as err:
        raise click.ClickException(str(err)) from err
    ctx.obj["config"] = config
    configure_logging(config=config.logging, verbose=verbose)


cli.add_command(analyze_command, name="analyze")
cli.add_command(languages_command, name="languages")


if __name__ == "__main__":
    cli()
