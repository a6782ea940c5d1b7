"""Mutual fund position commands."""

import click
from financeflow.domain.fund import FundService
from financeflow.domain.entities import FundCategory, FundPosition, InvestmentKind
from financeflow.cli.date_filters import parse_date_or_exit
from financeflow.cli.error_handling import format_amount, handle_domain_error
from financeflow.utils.amount_parser import parse_amount

INVESTMENT_KINDS = [kind.value for kind in InvestmentKind]
FUND_CATEGORIES = [category.value for category in FundCategory]


@click.group()
def fund_group():
    """Manage mutual fund positions."""
    pass


def _parse_amount_or_exit(ctx, value: str, label: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _echo_fund(fund: FundPosition) -> None:
    gain = fund.current_amount - fund.initial_amount
    click.echo(f"Fund ID: {fund.id}")
    click.echo(f"  Name: {fund.name}")
    click.echo(f"  Type: {fund.investment_kind}")
    click.echo(f"  Category: {fund.category}")
    click.echo(f"  Invested on: {fund.invested_on}")
    click.echo(f"  Invested: {format_amount(fund.initial_amount)}")
    click.echo(f"  Current value: {format_amount(fund.current_amount)}")
    click.echo(f"  Gain: {format_amount(gain)}")
    if fund.notes:
        click.echo(f"  Notes: {fund.notes}")


@fund_group.command("add")
@click.option("--name", required=True, help="Fund name")
@click.option(
    "--type",
    "investment_kind",
    default="sip",
    show_default=True,
    type=click.Choice(INVESTMENT_KINDS, case_sensitive=False),
    help="Investment type",
)
@click.option(
    "--category",
    required=True,
    type=click.Choice(FUND_CATEGORIES, case_sensitive=False),
    help="Fund category",
)
@click.option("--amount", required=True, help="Amount invested")
@click.option("--current-value", help="Current value (defaults to the amount invested)")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Investment date (YYYY-MM-DD or relative like 'today')",
)
@click.option("--notes", help="Notes")
@click.pass_context
def add_fund(
    ctx,
    name: str,
    investment_kind: str,
    category: str,
    amount: str,
    current_value: str | None,
    date: str,
    notes: str | None,
) -> None:
    """Add a mutual fund position.

    Examples:
        financeflow fund add --name "Meezan Equity" --category equity --amount 50000
        financeflow fund add --name "Index Tracker" --type "lump sum" --category index --amount 100000 --date 2024-01-10
    """
    db = ctx.obj["db"]
    fund_service = FundService(db)

    invested_on = parse_date_or_exit(ctx, date, "date format")
    initial = _parse_amount_or_exit(ctx, amount, "amount")
    current = _parse_amount_or_exit(ctx, current_value, "current value") if current_value else None

    try:
        fund_id = fund_service.create_fund(
            name=name,
            investment_kind=investment_kind,
            category=category,
            initial_investment=initial,
            invested_on=invested_on,
            current_value=current,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created fund {fund_id}: {name}")


@fund_group.command("list")
@click.pass_context
def list_funds(ctx) -> None:
    """List fund positions."""
    db = ctx.obj["db"]
    try:
        funds = FundService(db).list_funds()
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not funds:
        click.echo("No funds found.")
        return

    click.echo(f"{'ID':<6} {'Name':<30} {'Category':<10} {'Invested':>14} {'Current':>14}")
    click.echo("-" * 78)
    total = 0
    for fund in funds:
        total += fund.current_amount
        click.echo(
            f"{fund.id:<6} {fund.name[:30]:<30} {fund.category:<10} "
            f"{format_amount(fund.initial_amount):>14} {format_amount(fund.current_amount):>14}"
        )
    click.echo("-" * 78)
    click.echo(f"{'Total':<48} {format_amount(total):>29}")


@fund_group.command("show")
@click.argument("fund_id", type=int)
@click.pass_context
def show_fund(ctx, fund_id: int) -> None:
    """Show a fund position with its valuation history."""
    db = ctx.obj["db"]

    try:
        fund = FundService(db).require_fund(fund_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    _echo_fund(fund)
    if fund.valuation_history is None:
        click.echo("  History: not tracked")
        return

    click.echo("  History:")
    for entry in fund.valuation_history:
        note = f"  {entry.note}" if entry.note else ""
        click.echo(f"    {str(entry.on):<12} {format_amount(entry.value_amount):>14}{note}")


@fund_group.command("update")
@click.argument("fund_id", type=int)
@click.option("--name", help="Fund name")
@click.option(
    "--type",
    "investment_kind",
    type=click.Choice(INVESTMENT_KINDS, case_sensitive=False),
    help="Investment type",
)
@click.option(
    "--category",
    type=click.Choice(FUND_CATEGORIES, case_sensitive=False),
    help="Fund category",
)
@click.option("--date", help="Investment date")
@click.option("--notes", help="Notes")
@click.pass_context
def update_fund(
    ctx,
    fund_id: int,
    name: str | None,
    investment_kind: str | None,
    category: str | None,
    date: str | None,
    notes: str | None,
) -> None:
    """Update descriptive fund fields.

    Use 'fund value' or 'fund invest' to change valuations.
    """
    db = ctx.obj["db"]
    invested_on = parse_date_or_exit(ctx, date, "date format") if date is not None else None

    try:
        FundService(db).update_fund(
            fund_id,
            name=name,
            investment_kind=investment_kind,
            category=category,
            invested_on=invested_on,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated fund {fund_id}")


@fund_group.command("value")
@click.argument("fund_id", type=int)
@click.argument("value")
@click.option("--date", default="today", show_default=True, help="Valuation date")
@click.option("--note", help="Note for the history entry")
@click.pass_context
def record_value(ctx, fund_id: int, value: str, date: str, note: str | None) -> None:
    """Record the current VALUE of a fund.

    Examples:
        financeflow fund value 1 56000
        financeflow fund value 1 "Rs 58,250" --date 2024-03-31 --note "Quarter end"
    """
    db = ctx.obj["db"]
    on = parse_date_or_exit(ctx, date, "date format")
    amount = _parse_amount_or_exit(ctx, value, "value")

    try:
        fund = FundService(db).record_value(fund_id, amount, on, note=note)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Recorded value {format_amount(fund.current_amount)} for {fund.name} on {on}")


@fund_group.command("invest")
@click.argument("fund_id", type=int)
@click.argument("amount")
@click.option("--date", default="today", show_default=True, help="Investment date")
@click.pass_context
def add_investment(ctx, fund_id: int, amount: str, date: str) -> None:
    """Add AMOUNT to an existing fund position."""
    db = ctx.obj["db"]
    on = parse_date_or_exit(ctx, date, "date format")
    extra = _parse_amount_or_exit(ctx, amount, "amount")

    try:
        fund = FundService(db).add_investment(fund_id, extra, on)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Added {format_amount(extra)} to {fund.name}")
    click.echo(f"  Invested: {format_amount(fund.initial_amount)}")
    click.echo(f"  Current value: {format_amount(fund.current_amount)}")


@fund_group.command("delete")
@click.argument("fund_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_fund(ctx, fund_id: int, yes: bool) -> None:
    """Delete a fund position and its history."""
    db = ctx.obj["db"]
    fund_service = FundService(db)

    fund = fund_service.get_fund(fund_id)
    if fund is None:
        click.echo(f"Error: Fund {fund_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete fund '{fund.name}' (ID: {fund_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        fund_service.delete_fund(fund_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Deleted fund {fund_id}")


def register_commands(cli: click.Group) -> None:
    """Register fund commands with main CLI."""
    cli.add_command(fund_group, name="fund")
