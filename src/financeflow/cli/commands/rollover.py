"""Monthly savings rollover command."""

import click
from financeflow.domain.rollover import RolloverService
from financeflow.cli.date_filters import reference_today
from financeflow.cli.error_handling import format_amount, handle_domain_error


@click.command("rollover")
@click.option("--as-of", help="Run as if today were this date")
@click.pass_context
def rollover(ctx, as_of: str | None) -> None:
    """Carry last month's savings into this month as income.

    Runs at most once per month.

    Examples:
        financeflow rollover
    """
    db = ctx.obj["db"]
    today = reference_today(ctx, as_of)

    try:
        amount = RolloverService(db).rollover_savings(today)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if amount > 0:
        click.echo(f"Rolled over {format_amount(amount)} of savings into {today:%B %Y}")
    else:
        click.echo("No savings to roll over from last month.")


def register_commands(cli):
    """Register rollover command with main CLI."""
    cli.add_command(rollover)
