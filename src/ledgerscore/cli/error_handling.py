"""CLI error handling helpers."""

import logging
from typing import NoReturn

import click

from ledgerscore.domain.errors import DomainError

logger = logging.getLogger(__name__)


def exit_with_error(ctx: click.Context, message: str) -> NoReturn:
    """Print an error line to stderr and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> NoReturn:
    """Render a domain error and exit with failure."""
    logger.debug("%s in %s: %s", type(error).__name__, ctx.info_name, error)
    exit_with_error(ctx, str(error))
