"""Main CLI entry point."""

import click
from financeflow.database.factories import create_sqlite_database
from financeflow.utils.logger import configure_logging
from financeflow.utils.months import DEFAULT_TIMEZONE, resolve_timezone

# Import and register all commands at module level
from financeflow.cli.commands import (
    add,
    transaction,
    fund,
    profile,
    analytics,
    report,
    rollover,
    backup,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINANCEFLOW_DB_PATH environment variable)",
    envvar="FINANCEFLOW_DB_PATH",
)
@click.option(
    "--timezone",
    "timezone_name",
    default=DEFAULT_TIMEZONE,
    show_default=True,
    help="Reference timezone for calendar dates (e.g. 'UTC', 'Asia/Karachi')",
    envvar="FINANCEFLOW_TIMEZONE",
)
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity",
    envvar="FINANCEFLOW_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, timezone_name: str, log_level: str):
    """FinanceFlow - Personal finance tracking.

    Record income, expenses and mutual fund investments, then review monthly
    analytics and your financial health score.
    """
    ctx.ensure_object(dict)

    try:
        zone = resolve_timezone(timezone_name)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--timezone")

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        configure_logging(log_level)
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["zone"] = zone
        ctx.call_on_close(db.disconnect)


# Register all commands
add.register_commands(cli)
transaction.register_commands(cli)
fund.register_commands(cli)
profile.register_commands(cli)
analytics.register_commands(cli)
report.register_commands(cli)
rollover.register_commands(cli)
backup.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
