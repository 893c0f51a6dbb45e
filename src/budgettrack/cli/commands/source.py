"""Spending source commands."""

import click
from budgettrack.domain.entities import SourceType
from budgettrack.domain.errors import DomainError
from budgettrack.domain.source import SourceService
from budgettrack.cli.error_handling import handle_domain_error


@click.group()
def source_group():
    """Manage spending sources (bank accounts, cards, cash)."""
    pass


@source_group.command("list")
@click.pass_context
def list_sources(ctx):
    """List all sources."""
    service = SourceService(ctx.obj["store"])

    sources = service.list_sources()
    if not sources:
        click.echo("No sources found.")
        return

    click.echo(f"\n{'ID':<38} {'Name':<20} {'Type':<6} Default")
    click.echo("-" * 74)
    for s in sources:
        marker = "*" if s.is_default else ""
        click.echo(f"{s.id:<38} {s.name:<20} {s.type.value:<6} {marker}")


@source_group.command("create")
@click.argument("name")
@click.option(
    "--type",
    "source_type",
    type=click.Choice([t.value for t in SourceType], case_sensitive=False),
    default=SourceType.BANK.value,
    help="Source type (default: Bank)",
)
@click.option("--default", "make_default", is_flag=True, help="Make this the default source")
@click.pass_context
def create_source(ctx, name: str, source_type: str, make_default: bool):
    """Create a new source."""
    service = SourceService(ctx.obj["store"])

    # Choice keeps the user's casing; normalize to the enum value
    source_type = next(t for t in SourceType if t.value.lower() == source_type.lower())
    try:
        source = service.create_source(name, source_type, is_default=make_default)
    except DomainError as e:
        handle_domain_error(ctx, e)
    default_str = " (default)" if source.is_default else ""
    click.echo(f"Created source '{source.name}'{default_str} (ID: {source.id})")


@source_group.command("default")
@click.argument("source")
@click.pass_context
def set_default(ctx, source: str):
    """Make SOURCE (ID or name) the default source."""
    service = SourceService(ctx.obj["store"])

    try:
        found = service.resolve_source(source)
        service.set_default_source(found.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Default source is now '{found.name}'")


def register_commands(cli):
    """Register source commands with main CLI."""
    cli.add_command(source_group, name="source")
