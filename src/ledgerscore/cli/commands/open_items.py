"""Open items command."""

import click

from ledgerscore.cli.commands.customers import TODAY_HELP
from ledgerscore.cli.ledger_context import format_amount, format_date, load_ledger, resolve_today
from ledgerscore.domain.aging import days_overdue


@click.command("open-items")
@click.argument("ledger_csv", type=click.Path(exists=True, dir_okay=False))
@click.argument("name", metavar="CUSTOMER_NAME")
@click.option("--today", help=TODAY_HELP)
@click.option("--net-only", is_flag=True, help="Show each open row with its residual as credit")
@click.pass_context
def open_items(ctx, ledger_csv: str, name: str, today: str | None, net_only: bool):
    """List the open items of one customer after matching.

    Closed matching groups are left out; each open group is shown once,
    on the row that holds its residual.

    Examples:
        ledgerscore open-items ledger.csv "Acme LLC"
        ledgerscore open-items ledger.csv "Acme LLC" --net-only
    """
    reference_date = resolve_today(ctx, today)
    loaded = load_ledger(ctx, ledger_csv, reference_date)

    report = loaded.require_customer(ctx, name)

    if net_only:
        if not report.net_only_rows:
            click.echo(f"No open rows for {report.customer_name}.")
            return
        click.echo(f"\nOpen rows for {report.customer_name}:")
        click.echo("-" * 90)
        click.echo(
            f"{'Date':<12} {'Number':<16} {'Matching':<12} {'Debit':>14} {'Credit':>14} {'Net':>14}"
        )
        click.echo("-" * 90)
        for row in report.net_only_rows:
            click.echo(
                f"{row.date:<12} {row.number[:16]:<16} {(row.matching or '')[:12]:<12} "
                f"{format_amount(row.debit):>14} {format_amount(row.credit):>14} "
                f"{format_amount(row.net_amount):>14}"
            )
        return

    if not report.open_items:
        click.echo(f"No open items for {report.customer_name}.")
        return

    total = sum(item.amount for item in report.open_items)
    click.echo(f"\nOpen items for {report.customer_name} as of {reference_date.isoformat()}:")
    click.echo("-" * 90)
    click.echo(
        f"{'Date':<12} {'Due':<12} {'Number':<16} {'Matching':<12} {'Amount':>14} {'Days':>6}"
    )
    click.echo("-" * 90)
    for item in report.open_items:
        days = days_overdue(item, reference_date)
        click.echo(
            f"{format_date(item.row.parsed_date):<12} {format_date(item.row.parsed_due_date):<12} "
            f"{item.row.number[:16]:<16} {(item.matching or '')[:12]:<12} "
            f"{format_amount(item.amount):>14} {'-' if days is None else days:>6}"
        )
    click.echo("-" * 90)
    click.echo(f"{'Total':<54} {format_amount(total):>14}")


def register_commands(cli):
    """Register open items command with main CLI."""
    cli.add_command(open_items)
