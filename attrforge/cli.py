"""Command line entry point: check an attribute definition file.

    attrforge resource.yaml
    attrforge resource.yaml --json

Exit codes: 0 when every attribute compiles, 1 when any attribute is invalid
or the file can't be read as definitions, 2 for usage errors (missing file).
"""

import json
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .loader import CompileReport, compile_file


app = typer.Typer(
    name="attrforge",
    help="Validate and normalize attribute definitions.",
    add_completion=False,
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        from . import __version__

        typer.echo(f"attrforge {__version__}")
        raise typer.Exit()


@app.command()
def validate(
    definition_file: Annotated[
        Path,
        typer.Argument(
            exists=True,
            dir_okay=False,
            readable=True,
            help="YAML file with an 'attributes' list",
        ),
    ],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the report as JSON"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
):
    """Compile every attribute in DEFINITION_FILE and report each failure."""
    try:
        report = compile_file(definition_file)
    except (yaml.YAMLError, ValueError) as e:
        if json_output:
            typer.echo(json.dumps({"file": str(definition_file), "error": str(e)}))
        else:
            console.print(
                f"[red]✗[/red] Could not read {escape(str(definition_file))}: "
                f"{escape(str(e))}"
            )
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps(_report_data(report), indent=2, default=str))
    else:
        _print_report(report)

    raise typer.Exit(0 if report.ok else 1)


def _report_data(report: CompileReport) -> dict[str, Any]:
    return {
        "file": str(report.path),
        "valid": len(report.attributes),
        "invalid": len(report.errors),
        "attributes": [
            {
                "name": attr.name,
                "type": str(attr.type),
                "constraints": attr.model_dump(include={"constraints"})["constraints"],
            }
            for attr in report.attributes
        ],
        "errors": [error.to_dict() for error in report.errors],
    }


def _print_report(report: CompileReport) -> None:
    if report.attributes:
        table = Table(title=report.path.name, show_header=True, header_style="bold")
        table.add_column("Attribute")
        table.add_column("Constraints")
        for attr in report.attributes:
            constraints = attr.model_dump(include={"constraints"})["constraints"]
            rendered = ", ".join(f"{k}={v!r}" for k, v in constraints.items())
            table.add_row(escape(attr.summary()), escape(rendered or "-"))
        console.print(table)

    for error in report.errors:
        console.print(f"[red]✗[/red] {escape(str(error))}")

    total = len(report.results)
    if report.ok:
        console.print(f"[green]✓[/green] {total} attribute(s) valid")
    else:
        console.print(f"[red]{len(report.errors)} of {total} attribute(s) invalid[/red]")
