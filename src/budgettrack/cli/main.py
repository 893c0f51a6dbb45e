"""Main CLI entry point."""

import logging

import click
from budgettrack.store.factories import LEDGER_PATH_ENV, create_ledger_store
from budgettrack.domain.errors import DomainError
from budgettrack.cli.error_handling import handle_domain_error

# Import and register all commands at module level
from budgettrack.cli.commands import (
    source,
    category,
    add,
    transaction,
    budget,
    summary,
    data,
    statement,
    init_defaults,
)


@click.group()
@click.option(
    "--ledger-path",
    type=click.Path(dir_okay=False),
    help=f"Path to ledger file (overrides {LEDGER_PATH_ENV} environment variable)",
    envvar=LEDGER_PATH_ENV,
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug details to stderr")
@click.pass_context
def cli(ctx, ledger_path: str | None, verbose: bool):
    """Budgettrack - 50/25/25 personal budget tracker.

    Record income, savings and categorized transactions, compare spending
    with the 50/25/25 allocation, and import pasted bank statement text.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Load the ledger only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_ledger_store(ledger_path=ledger_path)
        try:
            store.connect()
        except DomainError as e:
            handle_domain_error(ctx, e)
        ctx.obj["store"] = store


# Register all commands
source.register_commands(cli)
category.register_commands(cli)
init_defaults.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
budget.register_commands(cli)
summary.register_commands(cli)
data.register_commands(cli)
statement.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
