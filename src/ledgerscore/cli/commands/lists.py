"""Reference list management commands."""

import click

from ledgerscore.cli.error_handling import handle_domain_error
from ledgerscore.domain.entities import CustomerListType
from ledgerscore.domain.reference_lists import LIST_LABELS, ReferenceListService


def _customer_list_group(list_type: CustomerListType) -> click.Group:
    """Build the add/remove/list group for one customer list."""
    label = LIST_LABELS[list_type]

    @click.group(help=f"Manage the {label} customer list.")
    def group():
        pass

    @group.command("add")
    @click.argument("name", metavar="CUSTOMER_NAME")
    @click.pass_context
    def add_customer(ctx, name: str):
        service = ReferenceListService(ctx.obj["db"])
        try:
            entry_id = service.add_customer(list_type, name)
            click.echo(f"Added '{name.strip()}' to the {label} list (ID: {entry_id})")
        except ValueError as e:
            handle_domain_error(ctx, e)

    add_customer.help = f"Add a customer to the {label} list."

    @group.command("remove")
    @click.argument("name", metavar="CUSTOMER_NAME")
    @click.pass_context
    def remove_customer(ctx, name: str):
        service = ReferenceListService(ctx.obj["db"])
        try:
            service.remove_customer(list_type, name)
            click.echo(f"Removed '{name.strip()}' from the {label} list")
        except ValueError as e:
            handle_domain_error(ctx, e)

    remove_customer.help = f"Remove a customer from the {label} list."

    @group.command("list")
    @click.pass_context
    def list_customers(ctx):
        service = ReferenceListService(ctx.obj["db"])
        flags = service.list_customers(list_type)
        if not flags:
            click.echo(f"No customers on the {label} list.")
            return

        click.echo(f"\n{label.capitalize()} customers:")
        for flag in flags:
            click.echo(f"  {flag.customer_name} (ID: {flag.id})")

    list_customers.help = f"List customers on the {label} list."

    return group


@click.group()
def email_group():
    """Manage customer email addresses."""
    pass


@email_group.command("set")
@click.argument("name", metavar="CUSTOMER_NAME")
@click.argument("email")
@click.pass_context
def set_email(ctx, name: str, email: str):
    """Set or replace the email address of a customer."""
    service = ReferenceListService(ctx.obj["db"])
    try:
        service.set_email(name, email)
        click.echo(f"Email for '{name.strip()}' set to {email.strip()}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@email_group.command("remove")
@click.argument("name", metavar="CUSTOMER_NAME")
@click.pass_context
def remove_email(ctx, name: str):
    """Remove the email address of a customer."""
    service = ReferenceListService(ctx.obj["db"])
    try:
        service.remove_email(name)
        click.echo(f"Removed email for '{name.strip()}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


@email_group.command("list")
@click.pass_context
def list_emails(ctx):
    """List customer email addresses."""
    service = ReferenceListService(ctx.obj["db"])
    entries = service.list_emails()
    if not entries:
        click.echo("No customer emails found.")
        return

    click.echo("\nCustomer emails:")
    for entry in entries:
        click.echo(f"  {entry.customer_name:<40} {entry.email}")


@click.group()
def override_group():
    """Manage override pairs that pick the residual holder of a matching group."""
    pass


@override_group.command("add")
@click.argument("number")
@click.argument("matching")
@click.pass_context
def add_override(ctx, number: str, matching: str):
    """Make the row NUMBER hold the residual of matching group MATCHING.

    Examples:
        ledgerscore override add INV-1002 M7
    """
    service = ReferenceListService(ctx.obj["db"])
    try:
        entry_id = service.add_override(number, matching)
        click.echo(f"Added override {number.strip()} -> {matching.strip()} (ID: {entry_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@override_group.command("remove")
@click.argument("number")
@click.argument("matching")
@click.pass_context
def remove_override(ctx, number: str, matching: str):
    """Remove an override pair."""
    service = ReferenceListService(ctx.obj["db"])
    try:
        service.remove_override(number, matching)
        click.echo(f"Removed override {number.strip()} -> {matching.strip()}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@override_group.command("list")
@click.pass_context
def list_overrides(ctx):
    """List override pairs."""
    service = ReferenceListService(ctx.obj["db"])
    overrides = service.list_overrides()
    if not overrides:
        click.echo("No override pairs found.")
        return

    click.echo("\nOverride pairs:")
    click.echo(f"{'ID':<6} {'Number':<20} {'Matching':<20}")
    click.echo("-" * 48)
    for entry in overrides:
        click.echo(f"{entry.id:<6} {entry.number:<20} {entry.matching:<20}")


def register_commands(cli):
    """Register reference list commands with main CLI."""
    cli.add_command(_customer_list_group(CustomerListType.CLOSED), name="closed")
    cli.add_command(_customer_list_group(CustomerListType.SEMI_CLOSED), name="semi-closed")
    cli.add_command(email_group, name="email")
    cli.add_command(override_group, name="override")
