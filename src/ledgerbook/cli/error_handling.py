"""CLI error handling and permission helpers."""

import click

from ledgerbook.domain.access import Section, ensure_can_access, ensure_can_write
from ledgerbook.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def require_access(ctx: click.Context, section: Section) -> None:
    """Exit with an error unless the current role may open the section."""
    try:
        ensure_can_access(ctx.obj["role"], section)
    except DomainError as e:
        handle_domain_error(ctx, e)


def require_write(ctx: click.Context, section: Section) -> None:
    """Exit with an error unless the current role may change the section."""
    try:
        ensure_can_write(ctx.obj["role"], section)
    except DomainError as e:
        handle_domain_error(ctx, e)
