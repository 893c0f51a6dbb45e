"""Budget summary command."""

import click
from budgettrack.domain.budget import SPENDING_CATEGORIES, BudgetService
from budgettrack.domain.category import parse_category
from budgettrack.domain.entities import BUDGET_TARGETS
from budgettrack.cli.formatting import format_inr

BAR_WIDTH = 20


def _progress_bar(spent, target) -> str:
    if target <= 0:
        return "[" + " " * BAR_WIDTH + "]"
    filled = min(BAR_WIDTH, int(spent / target * BAR_WIDTH))
    return "[" + "#" * filled + " " * (BAR_WIDTH - filled) + "]"


@click.command("summary")
@click.option(
    "--category",
    type=click.Choice([c.value for c in SPENDING_CATEGORIES], case_sensitive=False),
    help="Break spending down by sub-category within one category",
)
@click.pass_context
def show_summary(ctx, category: str | None):
    """Show spending against the 50/25/25 targets.

    Targets are shares of net income: credited transactions plus income,
    minus savings.
    """
    service = BudgetService(ctx.obj["store"])
    summary = service.summarize()

    click.echo(f"\nTotal income: {format_inr(summary.total_income)}")
    click.echo(f"Net income:   {format_inr(summary.net_income)}")
    click.echo(f"Total spent:  {format_inr(summary.total_spent)}")
    click.echo("")

    for cat in SPENDING_CATEGORIES:
        spent = summary.totals[cat]
        target = summary.targets[cat]
        share = int(BUDGET_TARGETS[cat] * 100)
        over = " OVER" if spent > target else ""
        click.echo(
            f"{cat.value:<11} {share:>3}% {_progress_bar(spent, target)} "
            f"{format_inr(spent)} / {format_inr(target)}{over}"
        )

    insights = summary.insights
    click.echo("")
    click.echo(
        f"Highest spending: {insights.highest_sub_category_name} "
        f"({format_inr(insights.highest_sub_category_amount)})"
    )
    click.echo(f"Investment rate:  {insights.investment_rate}%")
    for alert in insights.alerts:
        click.echo(f"! {alert}")

    slices = service.breakdown(parse_category(category) if category else None)
    title = f"{category} breakdown" if category else "Expense breakdown"
    click.echo(f"\n{title}:")
    if not slices:
        click.echo("  No spending recorded.")
    for s in slices:
        click.echo(f"  {s.name:<24} {format_inr(s.value)}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(show_summary)
