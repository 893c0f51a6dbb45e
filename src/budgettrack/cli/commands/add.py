"""Add transaction command."""

import click
from budgettrack.domain.category import SubCategoryService, parse_category
from budgettrack.domain.entities import Category, TransactionType
from budgettrack.domain.errors import DomainError
from budgettrack.domain.source import SourceService
from budgettrack.domain.transaction import TransactionService
from budgettrack.cli.error_handling import handle_domain_error
from budgettrack.cli.formatting import format_inr
from budgettrack.cli.resolution import resolve_source_or_exit, resolve_sub_category_or_exit
from budgettrack.utils.date_parser import parse_date
from budgettrack.utils.amount_parser import parse_amount


@click.command("add")
@click.option("--name", required=True, help="Transaction description")
@click.option("--amount", required=True, help="Transaction amount (e.g., 479.05 or 1,200)")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD, DD-MM-YYYY or relative like 'today', 'yesterday')",
)
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    default=TransactionType.DEBIT.value,
    show_default=True,
    help="debit for spending, credit for money received",
)
@click.option(
    "--category",
    type=click.Choice([c.value for c in Category], case_sensitive=False),
    help="Budget category (default: Essential for debits, Income for credits)",
)
@click.option("--sub-category", help="Sub-category name or ID (default: first under category)")
@click.option("--source", help="Source name or ID (default: the default source)")
@click.pass_context
def add_transaction(
    ctx,
    name: str,
    amount: str,
    date: str,
    txn_type: str,
    category: str | None,
    sub_category: str | None,
    source: str | None,
):
    """Add a transaction manually.

    Examples:
        budgettrack add --name "Rent" --amount 19000 --sub-category Rent
        budgettrack add --name "Salary" --amount 85000 --type credit
    """
    store = ctx.obj["store"]
    transaction_service = TransactionService(store)
    sub_category_service = SubCategoryService(store)
    source_service = SourceService(store)

    # Parse date
    try:
        txn_date = parse_date(date)
    except ValueError as e:
        handle_domain_error(ctx, e, "Invalid date format")

    # Parse amount
    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        handle_domain_error(ctx, e, "Invalid amount format")

    txn_type = TransactionType(txn_type.lower())
    if category is None:
        parent = Category.INCOME if txn_type == TransactionType.CREDIT else Category.ESSENTIAL
    else:
        parent = parse_category(category)

    sub_category_id = None
    if sub_category:
        sub_category_id = resolve_sub_category_or_exit(ctx, sub_category_service, sub_category, parent)

    source_id = None
    if source:
        source_id = resolve_source_or_exit(ctx, source_service, source)

    try:
        txn = transaction_service.create_transaction(
            name=name,
            amount=txn_amount,
            date=txn_date,
            type=txn_type,
            category=parent,
            sub_category_id=sub_category_id,
            source_id=source_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {txn.date.isoformat()}")
    click.echo(f"  Amount: {format_inr(txn.amount)} ({txn.type.value})")
    click.echo(
        f"  Category: {txn.category.value} > {sub_category_service.resolve_name(txn.sub_category_id)}"
    )
    source_obj = source_service.get_source(txn.source_id)
    if source_obj is not None:
        click.echo(f"  Source: {source_obj.name}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
