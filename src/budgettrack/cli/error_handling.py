"""CLI error handling helpers."""

import click


def handle_domain_error(
    ctx: click.Context, error: ValueError, context: str | None = None
) -> None:
    """Print an error to stderr and exit with status 1.

    Args:
        ctx: Click context of the running command
        error: Domain error, or ValueError from one of the input parsers
        context: Optional label printed before the message
    """
    message = f"{context}: {error}" if context else str(error)
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)
