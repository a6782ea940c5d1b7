"""Transaction management commands."""

import click
from financeflow.domain.transaction import TransactionService
from financeflow.domain.entities import Transaction
from financeflow.cli.date_filters import parse_date_or_exit, resolve_cli_date_range
from financeflow.cli.error_handling import echo_json, format_amount, handle_domain_error
from financeflow.utils.amount_parser import parse_amount


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


def _transaction_to_dict(txn: Transaction) -> dict:
    return {
        "id": txn.id,
        "type": txn.kind.value,
        "amount": float(txn.amount_value),
        "category": txn.category,
        "date": txn.occurred_on.isoformat() if txn.occurred_on else None,
        "description": txn.description,
        "paymentSource": txn.payment_source,
    }


def _echo_transactions(transactions: list[Transaction], as_json: bool) -> None:
    if as_json:
        echo_json([_transaction_to_dict(txn) for txn in transactions])
        return

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Type':<8} {'Amount':>14}  {'Category':<20} {'Description':<30}"
    )
    click.echo("-" * 100)
    for txn in transactions:
        sign = "+" if txn.is_income else "-"
        amount_str = f"{sign}{format_amount(txn.amount_value)}"
        description = (txn.description or "")[:30]
        click.echo(
            f"{txn.id:<6} {str(txn.occurred_on or ''):<12} {txn.kind.value:<8} {amount_str:>14}  "
            f"{txn.category_label[:20]:<20} {description:<30}"
        )


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative)")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative)")
@click.option("--this-month", is_flag=True, help="Show transactions from this month")
@click.option("--this-year", is_flag=True, help="Show transactions from this year")
@click.option("--last-month", is_flag=True, help="Show transactions from last month")
@click.option("--last-year", is_flag=True, help="Show transactions from last year")
@click.option("--category", help="Only transactions with this category")
@click.option(
    "--type",
    "kind",
    type=click.Choice(["income", "expense"], case_sensitive=False),
    help="Only income or only expenses",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
    category: str | None,
    kind: str | None,
    as_json: bool,
) -> None:
    """List transactions, newest first.

    Examples:
        financeflow transaction list --this-month
        financeflow transaction list --type expense --category food
        financeflow transaction list --start-date 2024-01-01 --end-date 2024-03-31
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "this-year": this_year,
            "last-month": last_month,
            "last-year": last_year,
        },
    )

    try:
        transactions = transaction_service.list_transactions(
            start_date=start, end_date=end, category=category, kind=kind
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    _echo_transactions(transactions, as_json)


@transaction_group.command("range")
@click.argument("start_date")
@click.argument("end_date")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def range_transactions(ctx, start_date: str, end_date: str, as_json: bool) -> None:
    """List transactions dated between START_DATE and END_DATE (inclusive).

    Examples:
        financeflow transaction range 2024-01-01 2024-01-31
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    start = parse_date_or_exit(ctx, start_date, "start date")
    end = parse_date_or_exit(ctx, end_date, "end date")

    try:
        transactions = transaction_service.list_by_range(start, end)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    _echo_transactions(transactions, as_json)


@transaction_group.command("category")
@click.argument("category")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def category_transactions(ctx, category: str, as_json: bool) -> None:
    """List transactions stored under CATEGORY."""
    db = ctx.obj["db"]
    try:
        transactions = TransactionService(db).list_by_category(category)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    _echo_transactions(transactions, as_json)


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int) -> None:
    """Show a single transaction."""
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    try:
        txn = transaction_service.require_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Transaction ID: {txn.id}")
    click.echo(f"  Type: {txn.kind.value}")
    click.echo(f"  Date: {txn.occurred_on}")
    click.echo(f"  Amount: {format_amount(txn.amount_value)}")
    click.echo(f"  Category: {txn.category_label}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    if txn.payment_source:
        click.echo(f"  Source: {txn.payment_source}")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option(
    "--type",
    "kind",
    type=click.Choice(["income", "expense"], case_sensitive=False),
    help="Transaction type",
)
@click.option("--amount", help="Transaction amount")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--category", help="Category")
@click.option("--description", help="Transaction description")
@click.option("--source", help="Payment source")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    kind: str | None,
    amount: str | None,
    date: str | None,
    category: str | None,
    description: str | None,
    source: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided.

    Examples:
        financeflow transaction update 1 --amount 3000
        financeflow transaction update 1 --type income --category freelance
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    txn_date = parse_date_or_exit(ctx, date, "date format") if date is not None else None

    txn_amount = None
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    try:
        transaction_service.update_transaction(
            transaction_id,
            kind=kind.lower() if kind else None,
            amount=txn_amount,
            occurred_on=txn_date,
            category=category,
            description=description,
            payment_source=source,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction.

    Examples:
        financeflow transaction delete 1
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    txn = transaction_service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {transaction_id}?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        transaction_service.delete_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
