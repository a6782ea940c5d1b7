"""User profile commands."""

import click
from financeflow.domain.profile import ProfileService
from financeflow.cli.error_handling import format_amount, handle_domain_error
from financeflow.utils.amount_parser import parse_amount


@click.group()
def profile_group():
    """View and update your profile."""
    pass


@profile_group.command("show")
@click.pass_context
def show_profile(ctx) -> None:
    """Show profile settings."""
    db = ctx.obj["db"]
    try:
        profile = ProfileService(db).get_profile()
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("Profile:")
    click.echo(f"  Monthly income goal: {format_amount(profile.monthly_income_goal)}")
    click.echo(f"  Savings target: {format_amount(profile.savings_target)}")
    click.echo(f"  Currency: {profile.preferred_currency}")
    click.echo(f"  Motivational quotes: {'on' if profile.motivational_quotes else 'off'}")


@profile_group.command("set")
@click.option("--income-goal", help="Monthly income goal")
@click.option("--savings-target", help="Monthly savings target")
@click.option("--currency", help="Preferred currency code (e.g., PKR, USD)")
@click.option("--quotes/--no-quotes", default=None, help="Show motivational quotes")
@click.pass_context
def set_profile(
    ctx,
    income_goal: str | None,
    savings_target: str | None,
    currency: str | None,
    quotes: bool | None,
) -> None:
    """Update profile settings.

    Examples:
        financeflow profile set --savings-target 60000
        financeflow profile set --currency usd --no-quotes
    """
    db = ctx.obj["db"]

    try:
        goal = parse_amount(income_goal) if income_goal is not None else None
        target = parse_amount(savings_target) if savings_target is not None else None
        profile = ProfileService(db).update_profile(
            monthly_income_goal=goal,
            savings_target=target,
            preferred_currency=currency,
            motivational_quotes=quotes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("Updated profile")
    click.echo(f"  Monthly income goal: {format_amount(profile.monthly_income_goal)}")
    click.echo(f"  Savings target: {format_amount(profile.savings_target)}")
    click.echo(f"  Currency: {profile.preferred_currency}")


def register_commands(cli: click.Group) -> None:
    """Register profile commands with main CLI."""
    cli.add_command(profile_group, name="profile")
