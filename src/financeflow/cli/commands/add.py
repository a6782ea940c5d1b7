"""Add transaction command."""

import click
from financeflow.domain.transaction import TransactionService
from financeflow.cli.date_filters import parse_date_or_exit
from financeflow.cli.error_handling import format_amount, handle_domain_error
from financeflow.utils.amount_parser import parse_amount


@click.command("add")
@click.option(
    "--type",
    "kind",
    required=True,
    type=click.Choice(["income", "expense"], case_sensitive=False),
    help="Transaction type",
)
@click.option("--amount", required=True, help="Transaction amount (e.g., 1500 or 'Rs 1,500.50')")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--category", help="Category (e.g., 'food', 'salary')")
@click.option("--description", help="Transaction description")
@click.option("--source", help="Payment source (e.g., 'cash', 'card', 'bank')")
@click.pass_context
def add_transaction(
    ctx,
    kind: str,
    amount: str,
    date: str,
    category: str | None,
    description: str | None,
    source: str | None,
):
    """Add an income or expense transaction.

    Examples:
        financeflow add --type expense --amount 2500 --category food --description "Groceries"
        financeflow add --type income --amount 150000 --category salary --date 2024-03-01
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    txn_date = parse_date_or_exit(ctx, date, "date format")

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = transaction_service.create_transaction(
            kind=kind.lower(),
            amount=txn_amount,
            occurred_on=txn_date,
            category=category,
            description=description,
            payment_source=source,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Type: {kind.lower()}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: {format_amount(txn_amount)}")
    if category:
        click.echo(f"  Category: {category}")
    if description:
        click.echo(f"  Description: {description}")
    if source:
        click.echo(f"  Source: {source}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
