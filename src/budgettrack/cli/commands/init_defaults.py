"""Restore default sources and sub-categories."""

from dataclasses import replace

import click
from budgettrack.store.defaults import default_snapshot


@click.command("init-defaults")
@click.option("--force", is_flag=True, help="Replace all sub-categories with the defaults")
@click.pass_context
def init_defaults(ctx, force: bool):
    """Add the default sources and sub-categories that are missing.

    Existing entries are kept; with --force the sub-category list is replaced
    by the defaults (transactions keep their sub-category IDs).
    """
    store = ctx.obj["store"]
    snapshot = store.snapshot()
    seed = default_snapshot()

    known_sources = {s.id for s in snapshot.sources}
    new_sources = [s for s in seed.sources if s.id not in known_sources]
    # Never add a second default
    if snapshot.sources:
        new_sources = [replace(s, is_default=False) for s in new_sources]

    if force:
        sub_categories = seed.sub_categories
        added_subs = len(seed.sub_categories)
    else:
        known_subs = {s.id for s in snapshot.sub_categories}
        new_subs = tuple(s for s in seed.sub_categories if s.id not in known_subs)
        sub_categories = snapshot.sub_categories + new_subs
        added_subs = len(new_subs)

    if not new_sources and not added_subs:
        click.echo("Defaults already present. Use --force to reset sub-categories.")
        return

    store.update(
        sources=snapshot.sources + tuple(new_sources),
        sub_categories=sub_categories,
    )
    click.echo(f"Added {len(new_sources)} sources and {added_subs} sub-categories.")


def register_commands(cli):
    """Register init-defaults command with main CLI."""
    cli.add_command(init_defaults)
