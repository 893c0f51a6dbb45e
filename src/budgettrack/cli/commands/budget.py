"""Income and savings commands."""

import click
from budgettrack.domain.budget import BudgetService
from budgettrack.domain.errors import DomainError
from budgettrack.cli.error_handling import handle_domain_error
from budgettrack.cli.formatting import format_inr
from budgettrack.utils.amount_parser import parse_amount


def _parse_or_exit(ctx, amount: str):
    try:
        return parse_amount(amount)
    except ValueError as e:
        handle_domain_error(ctx, e, "Invalid amount format")


@click.command("income")
@click.argument("amount")
@click.pass_context
def set_income(ctx, amount: str):
    """Set monthly income (added to credited transactions)."""
    service = BudgetService(ctx.obj["store"])
    value = _parse_or_exit(ctx, amount)
    try:
        service.set_income(value)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Income set to {format_inr(value)}")


@click.command("savings")
@click.argument("amount")
@click.pass_context
def set_savings(ctx, amount: str):
    """Set savings put aside before the 50/25/25 split."""
    service = BudgetService(ctx.obj["store"])
    value = _parse_or_exit(ctx, amount)
    try:
        service.set_savings(value)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Savings set to {format_inr(value)}")


def register_commands(cli):
    """Register income and savings commands with main CLI."""
    cli.add_command(set_income)
    cli.add_command(set_savings)
