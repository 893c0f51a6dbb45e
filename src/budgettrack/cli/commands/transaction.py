"""Transaction management commands."""

import click
from budgettrack.domain.category import SubCategoryService, parse_category
from budgettrack.domain.entities import Category, TransactionType
from budgettrack.domain.errors import DomainError
from budgettrack.domain.source import SourceService
from budgettrack.domain.transaction import TransactionService
from budgettrack.cli.error_handling import handle_domain_error
from budgettrack.cli.formatting import format_amount
from budgettrack.cli.resolution import resolve_source_or_exit, resolve_sub_category_or_exit
from budgettrack.utils.date_parser import parse_date
from budgettrack.utils.amount_parser import parse_amount

CATEGORY_CHOICE = click.Choice([c.value for c in Category], case_sensitive=False)
TYPE_CHOICE = click.Choice([t.value for t in TransactionType], case_sensitive=False)


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--category", type=CATEGORY_CHOICE, help="Only show one category")
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="Only show debits or credits")
@click.option("--verbose", "-v", is_flag=True, help="Show IDs and source for every transaction")
@click.pass_context
def list_transactions(ctx, category: str | None, txn_type: str | None, verbose: bool):
    """View transactions ordered by date."""
    store = ctx.obj["store"]
    service = TransactionService(store)
    sub_category_service = SubCategoryService(store)
    source_service = SourceService(store)

    transactions = service.list_transactions(
        category=parse_category(category) if category else None,
        type=TransactionType(txn_type.lower()) if txn_type else None,
    )

    if not transactions:
        click.echo("No transactions found.")
        return

    sources = {s.id: s.name for s in source_service.list_sources()}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    if verbose:
        click.echo("=" * 100)
        for txn in transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            click.echo(f"  Date: {txn.date.isoformat()}")
            click.echo(f"  Name: {txn.name}")
            click.echo(f"  Amount: {format_amount(txn.amount)} ({txn.type.value})")
            click.echo(
                f"  Category: {txn.category.value} > "
                f"{sub_category_service.resolve_name(txn.sub_category_id)}"
            )
            click.echo(f"  Source: {sources.get(txn.source_id, 'Unknown')}")
            click.echo("-" * 100)
        return

    click.echo("-" * 132)
    click.echo(
        f"{'ID':<36} {'Date':<12} {'Amount':>12} {'Type':<7} {'Category':<28} {'Name':<30}"
    )
    click.echo("-" * 132)
    for txn in transactions:
        category_name = (
            f"{txn.category.value} > {sub_category_service.resolve_name(txn.sub_category_id)}"
        )
        click.echo(
            f"{txn.id:<36} {txn.date.isoformat():<12} {format_amount(txn.amount):>12} "
            f"{txn.type.value:<7} {category_name[:28]:<28} {txn.name[:30]:<30}"
        )


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--name", help="Transaction description")
@click.option("--amount", help="Transaction amount")
@click.option("--date", help="Transaction date (YYYY-MM-DD, DD-MM-YYYY, 'today', ...)")
@click.option("--type", "txn_type", type=TYPE_CHOICE, help="debit or credit")
@click.option("--category", type=CATEGORY_CHOICE, help="Budget category")
@click.option("--sub-category", help="Sub-category name or ID")
@click.option("--source", help="Source name or ID")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    name: str | None,
    amount: str | None,
    date: str | None,
    txn_type: str | None,
    category: str | None,
    sub_category: str | None,
    source: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. Changing --category without
    --sub-category picks the first sub-category of the new category.

    Examples:
        budgettrack transaction update <id> --amount 75.00
        budgettrack transaction update <id> --category Wants --sub-category movie
    """
    store = ctx.obj["store"]
    service = TransactionService(store)
    sub_category_service = SubCategoryService(store)
    source_service = SourceService(store)

    try:
        current = service.require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    # Parse date if provided
    txn_date = None
    if date is not None:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            handle_domain_error(ctx, e, "Invalid date format")

    # Parse amount if provided
    txn_amount = None
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            handle_domain_error(ctx, e, "Invalid amount format")

    parent = parse_category(category) if category else current.category
    sub_category_id = None
    if sub_category is not None:
        sub_category_id = resolve_sub_category_or_exit(ctx, sub_category_service, sub_category, parent)

    source_id = None
    if source is not None:
        source_id = resolve_source_or_exit(ctx, source_service, source)

    try:
        service.update_transaction(
            transaction_id,
            name=name,
            amount=txn_amount,
            date=txn_date,
            type=txn_type,
            category=category,
            sub_category_id=sub_category_id,
            source_id=source_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.pass_context
def delete_transaction(ctx, transaction_id: str) -> None:
    """Delete a transaction."""
    service = TransactionService(ctx.obj["store"])

    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("reset")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reset_transactions(ctx, yes: bool) -> None:
    """Delete ALL transactions, keeping sources and sub-categories."""
    service = TransactionService(ctx.obj["store"])

    if not yes:
        click.confirm(
            "Delete ALL transactions? This cannot be undone. "
            "Categories and sources will be kept.",
            abort=True,
        )
    count = service.reset_transactions()
    click.echo(f"Deleted {count} transaction(s)")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
