"""Backup export and restore commands."""

import json
from datetime import datetime

import click
from financeflow.domain.backup import BackupService
from financeflow.cli.error_handling import handle_domain_error


@click.group()
def backup_group():
    """Export or restore all data."""
    pass


@backup_group.command("export")
@click.argument("output", type=click.File("w"), default="-")
@click.pass_context
def export_backup(ctx, output) -> None:
    """Write a JSON backup to OUTPUT (stdout by default).

    Examples:
        financeflow backup export backup.json
    """
    db = ctx.obj["db"]
    zone = ctx.obj["zone"]

    try:
        payload = BackupService(db, zone=zone).export_backup(datetime.now(zone))
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    json.dump(payload, output, indent=2)
    output.write("\n")

    if output.name != "<stdout>":
        data = payload["data"]
        click.echo(
            f"Exported {len(data['transactions'])} transaction(s) and "
            f"{len(data['mutualFunds'])} fund(s) to {output.name}",
            err=True,
        )


@backup_group.command("import")
@click.argument("input_file", type=click.File("r"))
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def import_backup(ctx, input_file, yes: bool) -> None:
    """Replace all data with the contents of a JSON backup.

    Examples:
        financeflow backup import backup.json
    """
    db = ctx.obj["db"]
    zone = ctx.obj["zone"]

    try:
        payload = json.load(input_file)
    except json.JSONDecodeError as e:
        click.echo(f"Error: Invalid backup file: {e}", err=True)
        ctx.exit(1)

    if not yes and not click.confirm("This replaces all existing data. Continue?"):
        click.echo("Import cancelled.")
        return

    try:
        counts = BackupService(db, zone=zone).import_backup(payload)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Restored {counts['transactions']} transaction(s), "
        f"{counts['mutualFunds']} fund(s) and {counts['userProfiles']} profile(s)"
    )


def register_commands(cli: click.Group) -> None:
    """Register backup commands with main CLI."""
    cli.add_command(backup_group, name="backup")
