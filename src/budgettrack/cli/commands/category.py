"""Sub-category management commands."""

import click
from budgettrack.domain.category import SubCategoryService, parse_category
from budgettrack.domain.entities import Category
from budgettrack.domain.errors import DomainError
from budgettrack.cli.error_handling import handle_domain_error

CATEGORY_CHOICE = click.Choice([c.value for c in Category], case_sensitive=False)


@click.group()
def category_group():
    """Manage sub-categories."""
    pass


@category_group.command("list")
@click.option("--parent", type=CATEGORY_CHOICE, help="Only show one category")
@click.pass_context
def list_categories(ctx, parent: str | None):
    """List sub-categories grouped by category."""
    service = SubCategoryService(ctx.obj["store"])

    tree = service.get_category_tree()
    if parent is not None:
        wanted = parse_category(parent)
        tree = {wanted: tree[wanted]}

    for category, sub_categories in tree.items():
        click.echo(f"{category.value}")
        if not sub_categories:
            click.echo("  (none)")
        for sub in sub_categories:
            click.echo(f"  {sub.name} (ID: {sub.id})")


@category_group.command("create")
@click.argument("name")
@click.option("--parent", required=True, type=CATEGORY_CHOICE, help="Parent category")
@click.pass_context
def create_category(ctx, name: str, parent: str):
    """Create a new sub-category."""
    service = SubCategoryService(ctx.obj["store"])

    try:
        sub = service.create_sub_category(name=name, parent=parent)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created sub-category '{sub.name}' under '{sub.parent_id.value}' (ID: {sub.id})")


@category_group.command("delete")
@click.argument("sub_category_id")
@click.pass_context
def delete_category(ctx, sub_category_id: str):
    """Delete a sub-category.

    Transactions that use it are kept and show as Uncategorized.
    """
    service = SubCategoryService(ctx.obj["store"])

    try:
        service.delete_sub_category(sub_category_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted sub-category {sub_category_id}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
