"""codegauge analyze command - print the space tree of source files."""

from __future__ import annotations

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from codegauge.analysis import AnalysisResult, analyze_paths
from codegauge.config.models import CodeGaugeConfig
from codegauge.core.errors import CodeGaugeError
from codegauge.core.languages import Language, detect_language
from codegauge.core.logging import set_request_id
from codegauge.enrichment import iter_spaces

EXIT_UNSUPPORTED = 2


def _render_table(console: Console, result: AnalysisResult, max_depth: int | None) -> None:
    title = result.path or result.language.value
    if result.root is None:
        console.print(f"[dim]{title}: no analyzable content[/dim]")
        return

    table = Table(title=f"{title} ({result.language.value})")
    table.add_column("Space")
    table.add_column("Kind", style="dim")
    table.add_column("Lines", justify="right")
    table.add_column("CC", justify="right")
    table.add_column("Cog", justify="right")
    table.add_column("Volume", justify="right")
    table.add_column("SLOC", justify="right")
    table.add_column("Args", justify="right")
    table.add_column("Exits", justify="right")
    table.add_column("MI", justify="right")

    for depth, space in iter_spaces(result.root):
        if max_depth is not None and depth > max_depth:
            continue
        metrics = space.metrics
        table.add_row(
            "  " * depth + (space.name or "<unit>"),
            space.kind.value,
            f"{space.start_line}-{space.end_line}",
            str(metrics.cyclomatic.sum),
            str(metrics.cognitive.sum),
            f"{metrics.halstead.volume:.1f}",
            str(metrics.loc.sloc),
            str(metrics.nargs.total),
            str(metrics.nexits.sum),
            f"{metrics.mi.visual_studio:.1f}",
        )
    console.print(table)
    if result.error_count:
        console.print(f"[yellow]{result.error_count} syntax error node(s) skipped[/yellow]")


@click.command()
@click.argument(
    "paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path)
)
@click.option("--language", "-l", default=None, help="Language (or alias) for every file")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "table"]),
    default=None,
    help="Output format (default from config: table)",
)
@click.option("--max-depth", type=int, default=None, help="Deepest space level to print")
@click.pass_context
def analyze_command(
    ctx: click.Context,
    paths: tuple[Path, ...],
    language: str | None,
    output_format: str | None,
    max_depth: int | None,
) -> None:
    """Analyze source files and directories.

    PATHS are files or directories; directories are searched recursively
    for files of supported languages.
    """
    set_request_id()
    config: CodeGaugeConfig = (ctx.obj or {}).get("config") or CodeGaugeConfig()
    output_format = output_format or config.output.format
    max_depth = max_depth if max_depth is not None else config.output.max_depth

    forced: Language | None = None
    if language is not None:
        try:
            forced = Language.from_name(language)
        except CodeGaugeError as err:
            raise click.BadParameter(str(err), param_hint="--language") from err

    unsupported = 0
    targets: list[Path] = []
    for path in paths:
        if path.is_file() and forced is None and detect_language(path) is None:
            click.echo(f"Unsupported file type: {path}", err=True)
            unsupported += 1
            continue
        targets.append(path)

    try:
        results = analyze_paths(targets, config=config.analysis, language=forced)
    except CodeGaugeError as err:
        raise click.ClickException(str(err)) from err

    if output_format == "json":
        payload = [result.to_dict(max_depth=max_depth) for result in results]
        click.echo(json.dumps(payload, indent=config.output.indent))
    else:
        console = Console()
        for result in results:
            _render_table(console, result, max_depth)

    if unsupported:
        ctx.exit(EXIT_UNSUPPORTED)
