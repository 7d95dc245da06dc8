"""codegauge languages command - list supported languages."""

import json

import click
from rich.console import Console
from rich.table import Table

from codegauge.core.languages import supported_languages


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def languages_command(as_json: bool) -> None:
    """List the supported languages, their extensions and grammars."""
    languages = supported_languages()
    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "language": lang.value,
                        "extensions": sorted(lang.definition.extensions),
                        "aliases": list(lang.definition.aliases),
                        "grammar": lang.definition.grammar_package,
                    }
                    for lang in languages
                ],
                indent=2,
            )
        )
        return

    table = Table(title="Supported languages")
    table.add_column("Language", style="cyan")
    table.add_column("Extensions")
    table.add_column("Aliases", style="dim")
    table.add_column("Grammar", style="dim")
    for lang in languages:
        definition = lang.definition
        table.add_row(
            lang.value,
            " ".join(sorted(definition.extensions)),
            ", ".join(definition.aliases),
            definition.grammar_package,
        )
    Console().print(table)
