"""Analytics, health score and dashboard commands."""

import click
from financeflow.domain.analytics import AnalyticsService
from financeflow.domain.dashboard import DashboardService
from financeflow.domain.health import HealthScoreService
from financeflow.domain.entities import AnalyticsPeriod, HealthReport
from financeflow.cli.date_filters import reference_today
from financeflow.cli.error_handling import echo_json, format_amount, handle_domain_error

AS_OF_HELP = "Evaluate as if today were this date (YYYY-MM-DD or relative)"


def _echo_health(report: HealthReport) -> None:
    metrics = report.metrics
    click.echo(f"Financial health for {report.month}: {report.score}/100 ({report.grade}, {report.status})")
    click.echo(f"  Income: {format_amount(metrics.income)}")
    click.echo(f"  Expenses: {format_amount(metrics.expenses)}")
    click.echo(f"  Savings rate: {metrics.savings_rate:.1f}%")
    click.echo(f"  Income/expense ratio: {metrics.income_to_expense_ratio:.2f}")
    click.echo(f"  Investment ratio: {metrics.investment_ratio:.2f}")
    if metrics.expense_variability is not None:
        click.echo(f"  Expense variability: {metrics.expense_variability:.1f}%")
    if report.recommendations:
        click.echo("  Recommendations:")
        for recommendation in report.recommendations:
            click.echo(f"    - {recommendation}")


@click.command("analytics")
@click.option(
    "--period",
    default="monthly",
    show_default=True,
    type=click.Choice([period.value for period in AnalyticsPeriod], case_sensitive=False),
    help="Length of the monthly series (yearly shows 12 months, otherwise 6)",
)
@click.option("--as-of", help=AS_OF_HELP)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def analytics(ctx, period: str, as_of: str | None, as_json: bool) -> None:
    """Show monthly trends, spending by category, fund growth and net worth.

    Examples:
        financeflow analytics
        financeflow analytics --period yearly --json
    """
    db = ctx.obj["db"]
    today = reference_today(ctx, as_of)

    try:
        report = AnalyticsService(db).get_analytics(period, today)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if as_json:
        echo_json(report.to_dict())
        if report.error is not None:
            ctx.exit(1)
        return

    if report.error is not None:
        click.echo(f"Error: {report.error}", err=True)
        ctx.exit(1)

    click.echo("Monthly trend:")
    click.echo(f"  {'Month':<8} {'Income':>14} {'Expenses':>14} {'Savings':>14}")
    for point in report.monthly:
        click.echo(
            f"  {point.label:<8} {format_amount(point.income):>14} "
            f"{format_amount(point.expenses):>14} {format_amount(point.savings):>14}"
        )

    click.echo("\nSpending by category (this month):")
    for slice_ in report.categories:
        click.echo(f"  {slice_.name:<24} {format_amount(slice_.value):>14}")

    click.echo("\nMutual fund value:")
    for point in report.funds:
        click.echo(f"  {point.label:<8} {format_amount(point.value):>14}")

    click.echo("\nNet worth:")
    for point in report.net_worth:
        click.echo(
            f"  {point.label:<8} cash {format_amount(point.cash):>14}  "
            f"investments {format_amount(point.investments):>14}  "
            f"total {format_amount(point.total):>14}"
        )

    if report.health is not None:
        click.echo("")
        _echo_health(report.health)


@click.command("health")
@click.option("--as-of", help=AS_OF_HELP)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def health(ctx, as_of: str | None, as_json: bool) -> None:
    """Score last month's financial health (0-100).

    Examples:
        financeflow health
        financeflow health --as-of 2024-04-01 --json
    """
    db = ctx.obj["db"]
    today = reference_today(ctx, as_of)

    report = HealthScoreService(db).get_report(today)
    if report is None:
        click.echo("Error: Unable to calculate financial health", err=True)
        ctx.exit(1)

    if as_json:
        echo_json(report.to_dict())
        return
    _echo_health(report)


@click.command("dashboard")
@click.option("--as-of", help=AS_OF_HELP)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def dashboard(ctx, as_of: str | None, as_json: bool) -> None:
    """Show this month's income, expenses and savings progress."""
    db = ctx.obj["db"]
    today = reference_today(ctx, as_of)

    try:
        summary = DashboardService(db).get_summary(today)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if as_json:
        echo_json(summary.to_dict())
        return

    click.echo(f"Dashboard for {today:%B %Y}:")
    click.echo(f"  Income: {format_amount(summary.monthly_income)}")
    click.echo(f"  Expenses: {format_amount(summary.monthly_expenses)}")
    click.echo(f"  Net savings: {format_amount(summary.net_savings)}")
    click.echo(f"  Mutual funds: {format_amount(summary.mutual_fund_value)}")
    click.echo(
        f"  Savings goal: {format_amount(summary.savings_goal)} "
        f"({summary.savings_progress:.1f}% reached)"
    )
    click.echo(f"  Transactions: {summary.total_transactions}")
    click.echo(f"  Funds: {summary.total_funds}")


def register_commands(cli):
    """Register analytics commands with main CLI."""
    cli.add_command(analytics)
    cli.add_command(health)
    cli.add_command(dashboard)
