"""Ledger export and import commands."""

from datetime import date

import click
from budgettrack.domain.errors import DomainError
from budgettrack.domain.exchange import default_export_filename, dumps_ledger, import_ledger
from budgettrack.cli.error_handling import handle_domain_error


@click.command("export")
@click.argument("output", required=False, type=click.Path(dir_okay=False, writable=True))
@click.option("--stdout", "to_stdout", is_flag=True, help="Write JSON to standard output")
@click.pass_context
def export_ledger(ctx, output: str | None, to_stdout: bool):
    """Save the whole ledger as JSON.

    Without OUTPUT the file is named budget_tracker_<dd-mm-yyyy>.json.
    """
    text = dumps_ledger(ctx.obj["store"].snapshot())
    if to_stdout:
        click.echo(text)
        return

    path = output or default_export_filename(date.today())
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
        f.write("\n")
    click.echo(f"Exported ledger to {path}")


@click.command("load")
@click.argument("json_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def load_ledger(ctx, json_file: str):
    """Load a JSON ledger file.

    Each field present in the file replaces the current one; missing or
    malformed fields are left unchanged.
    """
    with open(json_file, "rb") as f:
        content = f.read()

    try:
        result = import_ledger(ctx.obj["store"], content)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if result.applied:
        click.echo(f"Loaded: {', '.join(result.applied)}")
    else:
        click.echo("Nothing loaded.")
    for skipped in result.skipped:
        click.echo(f"  Warning: {skipped}", err=True)


def register_commands(cli):
    """Register export and load commands with main CLI."""
    cli.add_command(export_ledger)
    cli.add_command(load_ledger)
