"""Customer report commands."""

import click

from ledgerscore.cli.ledger_context import (
    format_amount,
    format_date,
    load_ledger,
    resolve_today,
)
from ledgerscore.domain.analysis import LedgerAnalysisService
from ledgerscore.domain.entities import CustomerReport, Rating
from ledgerscore.domain.rating import MAX_SCORE

TODAY_HELP = "Reference date (YYYY-MM-DD or relative like 'today', 'last month')"

SCORE_LABELS = (
    ("net_debt", "Net debt"),
    ("collection_rate", "Collection rate"),
    ("days_since_last_payment", "Days since last payment"),
    ("payments_count_3m", "Payments count (90d)"),
    ("days_since_last_sale", "Days since last sale"),
    ("payments_3m", "Payments (90d)"),
    ("sales_3m", "Sales (90d)"),
    ("sales_count_3m", "Sales count (90d)"),
)

AGING_LABELS = (
    ("at_date", "Current"),
    ("one_to_thirty", "1-30"),
    ("thirty_one_to_sixty", "31-60"),
    ("sixty_one_to_ninety", "61-90"),
    ("ninety_one_to_one_twenty", "91-120"),
    ("older", "> 120"),
)


def _score_text(report: CustomerReport) -> str:
    breakdown = report.rating.breakdown
    if breakdown is None or breakdown.total_score is None:
        return "-"
    return f"{breakdown.total_score}/{MAX_SCORE}"


@click.command("customers")
@click.argument("ledger_csv", type=click.Path(exists=True, dir_okay=False))
@click.option("--today", help=TODAY_HELP)
@click.option(
    "--rating",
    type=click.Choice([rating.value for rating in Rating], case_sensitive=False),
    help="Only show customers with this rating",
)
@click.option("--search", help="Only show customers whose name contains this text")
@click.option("--hide-closed", is_flag=True, help="Hide customers on the closed list")
@click.option("--semi-closed-only", is_flag=True, help="Only show semi-closed customers")
@click.option("--without-email", is_flag=True, help="Only show customers without an email")
@click.option("--open-matchings", is_flag=True, help="Only show customers with open matchings")
@click.pass_context
def list_customers(
    ctx,
    ledger_csv: str,
    today: str | None,
    rating: str | None,
    search: str | None,
    hide_closed: bool,
    semi_closed_only: bool,
    without_email: bool,
    open_matchings: bool,
):
    """Rate every customer of a ledger export.

    Customers are sorted by net debt, largest first.

    Examples:
        ledgerscore customers ledger.csv
        ledgerscore customers ledger.csv --rating bad --hide-closed
        ledgerscore customers ledger.csv --today 2024-06-30
    """
    reference_date = resolve_today(ctx, today)
    loaded = load_ledger(ctx, ledger_csv, reference_date)

    wanted_rating = None
    if rating is not None:
        wanted_rating = next(r for r in Rating if r.value.lower() == rating.lower())

    reports = LedgerAnalysisService().filter_customers(
        loaded.analysis.reports,
        loaded.reference_lists,
        search=search,
        rating=wanted_rating,
        hide_closed=hide_closed,
        semi_closed_only=semi_closed_only,
        without_email=without_email,
        open_matchings_only=open_matchings,
    )

    if not reports:
        click.echo("No customers found.")
        return

    total_debt = sum(report.aggregate.net_debt for report in reports)
    click.echo(f"\nCustomers as of {reference_date.isoformat()}: {len(reports)}")
    click.echo(f"Total net debt: {format_amount(total_debt)}")
    click.echo("-" * 110)
    click.echo(
        f"{'Customer':<40} {'Net Debt':>15} {'Overdue':>15} {'Rating':<8} {'Score':>6}  {'Reason'}"
    )
    click.echo("-" * 110)
    for report in reports:
        aggregate = report.aggregate
        click.echo(
            f"{aggregate.customer_name[:40]:<40} {format_amount(aggregate.net_debt):>15} "
            f"{format_amount(aggregate.overdue_amount):>15} {report.rating.rating.value:<8} "
            f"{_score_text(report):>6}  {report.rating.reason}"
        )


@click.command("customer")
@click.argument("ledger_csv", type=click.Path(exists=True, dir_okay=False))
@click.argument("name", metavar="CUSTOMER_NAME")
@click.option("--today", help=TODAY_HELP)
@click.pass_context
def show_customer(ctx, ledger_csv: str, name: str, today: str | None):
    """Show the full analysis of one customer.

    CUSTOMER_NAME is matched exactly first, then ignoring case and spacing.

    Examples:
        ledgerscore customer ledger.csv "Acme LLC"
    """
    reference_date = resolve_today(ctx, today)
    loaded = load_ledger(ctx, ledger_csv, reference_date)

    report = loaded.require_customer(ctx, name)

    aggregate = report.aggregate
    activity = aggregate.activity
    rating = report.rating

    click.echo(f"\n{aggregate.customer_name} (as of {reference_date.isoformat()})")
    click.echo("=" * 70)
    click.echo(f"  Rating: {rating.rating.value} ({rating.reason})")
    click.echo(f"  Total debit: {format_amount(aggregate.total_debit)}")
    click.echo(f"  Total credit: {format_amount(aggregate.total_credit)}")
    click.echo(f"  Net debt: {format_amount(aggregate.net_debt)}")
    click.echo(f"  Net sales: {format_amount(aggregate.net_sales)}")
    click.echo(
        f"  Credits: payments {format_amount(aggregate.credit_payments)}, "
        f"returns {format_amount(aggregate.credit_returns)}, "
        f"discounts {format_amount(aggregate.credit_discounts)}"
    )
    if aggregate.sales_reps:
        click.echo(f"  Sales reps: {', '.join(aggregate.sales_reps)}")
    click.echo(f"  Transactions: {aggregate.transaction_count}")

    click.echo("\nLast activity:")
    click.echo(
        f"  Last payment: {format_date(aggregate.last_payment_date)} "
        f"({format_amount(aggregate.last_payment_amount)})"
    )
    click.echo(f"  Last payment status: {aggregate.last_payment_closure}")
    click.echo(
        f"  Last sale: {format_date(aggregate.last_sales_date)} "
        f"({format_amount(aggregate.last_sales_amount)})"
    )
    click.echo(
        f"  Last 90 days: sales {format_amount(activity.sales_3m)} ({activity.sales_count_3m}), "
        f"payments {format_amount(activity.payments_3m)} ({activity.payments_count_3m})"
    )

    click.echo("\nAging:")
    for field, label in AGING_LABELS:
        click.echo(f"  {label:<10} {format_amount(getattr(aggregate.aging, field)):>15}")
    click.echo(f"  {'Total':<10} {format_amount(aggregate.aging.total):>15}")
    click.echo(f"  Overdue amount: {format_amount(aggregate.overdue_amount)}")
    if aggregate.has_ob:
        click.echo(f"  Open opening balance: {format_amount(aggregate.open_ob_amount)}")

    breakdown = aggregate.monthly_breakdown
    if breakdown.months:
        click.echo("\nOpen items by month:")
        for entry in breakdown.months:
            click.echo(f"  {entry.month:<10} {format_amount(entry.amount):>15}  ({entry.item_count})")
        click.echo(f"  {'Total':<10} {format_amount(breakdown.net_total):>15}")

    if rating.breakdown is not None:
        inputs = rating.breakdown.inputs
        click.echo("\nRating breakdown:")
        click.echo(f"  Collection rate: {inputs.collection_rate:.2%}")
        if rating.breakdown.risk_flag_1 is not None:
            click.echo(
                f"  Risk flags: {int(rating.breakdown.risk_flag_1)}, "
                f"{int(rating.breakdown.risk_flag_2)}"
            )
        scores = rating.breakdown.scores
        if scores is not None:
            for field, label in SCORE_LABELS:
                click.echo(f"  {label:<26} {getattr(scores, field)}")
            click.echo(f"  {'Total':<26} {scores.total}/{MAX_SCORE}")


def register_commands(cli):
    """Register customer commands with main CLI."""
    cli.add_command(list_customers)
    cli.add_command(show_customer)
