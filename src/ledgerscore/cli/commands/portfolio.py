"""Portfolio summary commands."""

import click

from ledgerscore.cli.commands.customers import TODAY_HELP
from ledgerscore.cli.ledger_context import format_amount, load_ledger, resolve_today
from ledgerscore.domain.entities import RatingCounts
from ledgerscore.domain.portfolio import PortfolioService


def _ratings_text(ratings: RatingCounts) -> str:
    return f"{ratings.good:>5} {ratings.medium:>6} {ratings.bad:>5}"


@click.command("reps")
@click.argument("ledger_csv", type=click.Path(exists=True, dir_okay=False))
@click.option("--today", help=TODAY_HELP)
@click.pass_context
def sales_reps(ctx, ledger_csv: str, today: str | None):
    """Summarize the ledger per sales rep.

    Examples:
        ledgerscore reps ledger.csv
    """
    reference_date = resolve_today(ctx, today)
    loaded = load_ledger(ctx, ledger_csv, reference_date)

    summaries = PortfolioService().summarize_sales_reps(loaded.rows, loaded.analysis.reports)
    if not summaries:
        click.echo("No sales reps found.")
        return

    click.echo(f"\nSales reps as of {reference_date.isoformat()}:")
    click.echo("-" * 112)
    click.echo(
        f"{'Sales Rep':<20} {'Debit':>15} {'Credit':>15} {'Net Debt':>15} "
        f"{'Coll %':>7} {'Cust':>5} {'Txns':>6} {'Good':>5} {'Medium':>6} {'Bad':>5}"
    )
    click.echo("-" * 112)
    for summary in summaries:
        click.echo(
            f"{summary.sales_rep[:20]:<20} {format_amount(summary.total_debit):>15} "
            f"{format_amount(summary.total_credit):>15} {format_amount(summary.net_debt):>15} "
            f"{summary.collection_rate:>7.1f} {summary.customer_count:>5} "
            f"{summary.transaction_count:>6} {_ratings_text(summary.ratings)}"
        )


@click.command("periods")
@click.argument("ledger_csv", type=click.Path(exists=True, dir_okay=False))
@click.option("--today", help=TODAY_HELP)
@click.option("--by-month", is_flag=True, help="Group by month instead of year")
@click.pass_context
def periods(ctx, ledger_csv: str, today: str | None, by_month: bool):
    """Summarize debtor customers per year or month.

    Examples:
        ledgerscore periods ledger.csv
        ledgerscore periods ledger.csv --by-month
    """
    reference_date = resolve_today(ctx, today)
    loaded = load_ledger(ctx, ledger_csv, reference_date)

    summaries = PortfolioService().summarize_periods(
        loaded.rows, loaded.analysis.reports, by_month=by_month
    )
    if not summaries:
        click.echo("No periods with outstanding debt found.")
        return

    click.echo(f"\n{'Monthly' if by_month else 'Yearly'} summary as of {reference_date.isoformat()}:")
    click.echo("-" * 100)
    click.echo(
        f"{'Period':<10} {'Debit':>15} {'Credit':>15} {'Net Debt':>15} "
        f"{'Coll %':>7} {'Txns':>6} {'Good':>5} {'Medium':>6} {'Bad':>5}"
    )
    click.echo("-" * 100)
    for summary in summaries:
        click.echo(
            f"{summary.period:<10} {format_amount(summary.total_debit):>15} "
            f"{format_amount(summary.total_credit):>15} {format_amount(summary.net_debt):>15} "
            f"{summary.collection_rate:>7.1f} {summary.transaction_count:>6} "
            f"{_ratings_text(summary.ratings)}"
        )


def register_commands(cli):
    """Register portfolio commands with main CLI."""
    cli.add_command(sales_reps)
    cli.add_command(periods)
