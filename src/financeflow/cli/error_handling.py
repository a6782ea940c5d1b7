"""CLI error handling and output helpers."""

import json
from typing import Any

import click

from financeflow.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def echo_json(payload: Any) -> None:
    """Print a JSON document."""
    click.echo(json.dumps(payload, indent=2, default=str))


def format_amount(amount) -> str:
    return f"{amount:,.2f}"
