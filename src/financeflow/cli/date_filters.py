"""CLI helpers for date range and reference date resolution."""

from datetime import date

import click

from financeflow.utils.date_parser import get_date_range, parse_date
from financeflow.utils.months import today_in


def reference_today(ctx: click.Context, as_of: str | None = None) -> date:
    """Today in the configured timezone, or the date given with --as-of."""
    today = today_in(ctx.obj["zone"])
    if as_of is None:
        return today
    try:
        return parse_date(as_of, today=today)
    except ValueError as e:
        click.echo(f"Error: Invalid --as-of date: {e}", err=True)
        ctx.exit(1)


def parse_date_or_exit(ctx: click.Context, value: str, label: str) -> date:
    """Parse a CLI date relative to the configured timezone, or exit with an error."""
    try:
        return parse_date(value, today=today_in(ctx.obj["zone"]))
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one period option (--this-month, --this-year, --last-month, --last-year) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    start = None
    end = None

    if period_count == 1:
        today = today_in(ctx.obj["zone"])
        for period, is_set in period_flags.items():
            if is_set:
                start, end = get_date_range(period, today=today)
                break
    else:
        if start_date:
            start = parse_date_or_exit(ctx, start_date, "start date")
        if end_date:
            end = parse_date_or_exit(ctx, end_date, "end date")

        if start is None and end is None and default_range is not None:
            start, end = default_range

    return start, end
