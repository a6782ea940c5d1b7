"""Period report command."""

import click
from financeflow.domain.report import ReportService
from financeflow.cli.date_filters import parse_date_or_exit, reference_today
from financeflow.cli.error_handling import echo_json, format_amount, handle_domain_error


@click.command("report")
@click.option(
    "--type",
    "report_type",
    default="monthly",
    show_default=True,
    type=click.Choice(["monthly", "quarterly", "yearly"], case_sensitive=False),
    help="Report period ending today",
)
@click.option("--start-date", help="Custom range start (requires --end-date)")
@click.option("--end-date", help="Custom range end (requires --start-date)")
@click.option("--as-of", help="Evaluate as if today were this date")
@click.option("--transactions", "show_transactions", is_flag=True, help="List the transactions too")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def report(
    ctx,
    report_type: str,
    start_date: str | None,
    end_date: str | None,
    as_of: str | None,
    show_transactions: bool,
    as_json: bool,
) -> None:
    """Show income, expenses and spending by category for a period.

    Examples:
        financeflow report --type quarterly
        financeflow report --start-date 2024-01-01 --end-date 2024-06-30 --json
    """
    db = ctx.obj["db"]
    today = reference_today(ctx, as_of)
    start = parse_date_or_exit(ctx, start_date, "start date") if start_date else None
    end = parse_date_or_exit(ctx, end_date, "end date") if end_date else None

    try:
        period_report = ReportService(db).build_report(
            report_type=report_type, start_date=start, end_date=end, today=today
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if as_json:
        echo_json(period_report.to_dict())
        return

    click.echo(
        f"{period_report.report_type.capitalize()} report: "
        f"{period_report.start_date} to {period_report.end_date}"
    )
    click.echo("=" * 60)
    click.echo(f"  Income: {format_amount(period_report.total_income)}")
    click.echo(f"  Expenses: {format_amount(period_report.total_expenses)}")
    click.echo(f"  Net savings: {format_amount(period_report.net_savings)}")
    click.echo(f"  Mutual fund value: {format_amount(period_report.total_fund_value)}")

    if period_report.category_breakdown:
        click.echo("\nExpenses by category:")
        for name, amount in period_report.category_breakdown:
            click.echo(f"  {name:<30} {format_amount(amount):>14}")

    if show_transactions:
        click.echo(f"\nTransactions ({len(period_report.transactions)}):")
        for txn in period_report.transactions:
            click.echo(
                f"  {str(txn.occurred_on):<12} {txn.kind.value:<8} "
                f"{format_amount(txn.amount_value):>14}  {txn.category_label}"
            )


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
