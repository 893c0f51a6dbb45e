"""Bank statement import command with interactive review."""

import shlex

import click
from budgettrack.domain.errors import DomainError
from budgettrack.domain.review import ImportReview
from budgettrack.cli.error_handling import handle_domain_error
from budgettrack.cli.formatting import format_amount

# Prompt field names -> pending item fields
FIELD_ALIASES = {
    "date": "date",
    "name": "name",
    "amount": "amount",
    "type": "type",
    "category": "category",
    "sub": "sub_category_id",
    "sub-category": "sub_category_id",
    "source": "source_id",
}

REVIEW_HELP = """Commands:
  list                      Show pending transactions
  select N|all              Select item N (or every item) for import
  deselect N|all            Leave item N (or every item) out
  set N FIELD VALUE         Edit a field: date, name, amount, type, category, sub, source
  newsub N NAME             Create a sub-category under item N's category and use it
  clear                     Remove every pending item
  confirm                   Import the selected items
  cancel                    Discard everything"""


def print_pending(review: ImportReview) -> None:
    """Print the pending list with 1-based item numbers."""
    sub_categories = review.sub_category_service
    if not review.pending:
        click.echo("No pending transactions.")
        return

    selected = len(review.selected_items())
    click.echo(f"\nFound {len(review.pending)} items, {selected} selected.")
    click.echo("-" * 100)
    click.echo(
        f"{'#':<4} {'Sel':<4} {'Date':<12} {'Name':<30} {'Amount':>12} {'Type':<7} {'Category':<26}"
    )
    click.echo("-" * 100)
    for number, item in enumerate(review.pending, start=1):
        mark = "[x]" if item.is_selected else "[ ]"
        category = f"{item.category.value} > {sub_categories.resolve_name(item.sub_category_id)}"
        click.echo(
            f"{number:<4} {mark:<4} {item.date.isoformat():<12} {item.name:<30} "
            f"{format_amount(item.amount):>12} {item.type.value:<7} {category[:26]:<26}"
        )
        click.echo(f"{'':<9}{item.original_description}")


def _item_id(review: ImportReview, number: str) -> str:
    try:
        index = int(number) - 1
    except ValueError:
        raise click.UsageError(f"'{number}' is not an item number")
    if not 0 <= index < len(review.pending):
        raise click.UsageError(f"No item {number}")
    return review.pending[index].id


def _resolve_value(review: ImportReview, item_id: str, field: str, value: str) -> str:
    """Turn sub-category and source names into IDs."""
    if field == "sub_category_id":
        item = review.get_item(item_id)
        return review.sub_category_service.resolve_sub_category(value, item.category).id
    if field == "source_id":
        return review.source_service.resolve_source(value).id
    return value


def run_review_command(review: ImportReview, line: str) -> bool:
    """Apply one review command.

    Returns:
        True when the review is finished (confirmed or cancelled)
    """
    try:
        words = shlex.split(line)
    except ValueError as e:
        raise click.UsageError(str(e))
    if not words:
        return False

    command, args = words[0].lower(), words[1:]
    if command in ("list", "ls"):
        print_pending(review)
    elif command in ("select", "deselect"):
        selected = command == "select"
        if len(args) != 1:
            raise click.UsageError(f"Usage: {command} N|all")
        if args[0].lower() == "all":
            review.select_all(selected)
        else:
            review.toggle_select(_item_id(review, args[0]), selected)
    elif command == "set":
        if len(args) < 3:
            raise click.UsageError("Usage: set N FIELD VALUE")
        item_id = _item_id(review, args[0])
        field = FIELD_ALIASES.get(args[1].lower())
        if field is None:
            raise click.UsageError(f"Unknown field '{args[1]}'")
        value = _resolve_value(review, item_id, field, " ".join(args[2:]))
        review.update_item(item_id, field, value)
    elif command == "newsub":
        if len(args) < 2:
            raise click.UsageError("Usage: newsub N NAME")
        sub = review.add_sub_category(_item_id(review, args[0]), " ".join(args[1:]))
        click.echo(f"Created sub-category '{sub.name}' under '{sub.parent_id.value}'")
    elif command == "clear":
        review.clear()
        click.echo("Cleared pending list.")
    elif command == "confirm":
        appended = review.confirm()
        click.echo(f"Imported {len(appended)} transaction(s).")
        return True
    elif command in ("cancel", "quit", "exit"):
        review.cancel()
        click.echo("Import cancelled.")
        return True
    elif command == "help":
        click.echo(REVIEW_HELP)
    else:
        raise click.UsageError(f"Unknown command '{command}'. Type 'help' for commands.")
    return False


@click.group()
def statement_group():
    """Import transactions from pasted bank statement text."""
    pass


@statement_group.command("import")
@click.argument(
    "text_file", type=click.File("r", encoding="utf-8", errors="replace"), default="-"
)
@click.option("--yes", is_flag=True, help="Import every parsed transaction without review")
@click.pass_context
def import_statement(ctx, text_file, yes: bool):
    """Parse statement text from TEXT_FILE (or stdin) and review it.

    Every line starting with a date like 28-11-2025 becomes a candidate
    transaction. Candidates are auto-categorized and shown for review; only
    confirmed, selected items are added to the ledger. When the text comes
    from stdin there is no terminal left for the review prompt, so use --yes.
    """
    review = ImportReview(ctx.obj["store"])
    text = text_file.read()

    try:
        review.start_review(text)
    except DomainError as e:
        handle_domain_error(ctx, e)

    print_pending(review)
    if yes:
        appended = review.confirm()
        click.echo(f"Imported {len(appended)} transaction(s).")
        return

    click.echo("\nType 'help' for commands.")
    while True:
        line = click.prompt("review", prompt_suffix="> ", default="", show_default=False)
        try:
            if run_review_command(review, line):
                return
        except (DomainError, click.UsageError) as e:
            click.echo(f"Error: {e}", err=True)


def register_commands(cli):
    """Register statement commands with main CLI."""
    cli.add_command(statement_group, name="statement")
