"""CLI helpers for resolving names to IDs with consistent error handling."""

from __future__ import annotations

import click
from budgettrack.domain.category import SubCategoryService
from budgettrack.domain.entities import Category
from budgettrack.domain.errors import DomainError
from budgettrack.domain.source import SourceService
from budgettrack.cli.error_handling import handle_domain_error


def resolve_source_or_exit(
    ctx: click.Context, source_service: SourceService, source: str
) -> str:
    """Resolve a source name or ID, or exit with a CLI error."""
    try:
        return source_service.resolve_source(source).id
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def resolve_sub_category_or_exit(
    ctx: click.Context,
    sub_category_service: SubCategoryService,
    value: str,
    parent: Category,
) -> str:
    """Resolve a sub-category name (under parent) or ID, or exit with a CLI error."""
    try:
        return sub_category_service.resolve_sub_category(value, parent).id
    except DomainError as exc:
        handle_domain_error(ctx, exc)
