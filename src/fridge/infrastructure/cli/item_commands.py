"""CLI commands for browsing and maintaining the inventory."""

from __future__ import annotations

from datetime import datetime

import click

from fridge.domain.exceptions import DomainException
from fridge.infrastructure.bootstrap import (
    credential_store,
    entry_orchestrator,
    inventory_store,
)
from fridge.infrastructure.cli.common import (
    date_type,
    echo_items,
    quantity_type,
    resolve_item_id,
    to_utc,
)


@click.command("list")
@click.option("--search", default="", help="Case-insensitive text to find in titles.")
@click.option("--sort-by-expiration", is_flag=True, help="Soonest expiration first.")
def item_list(search: str, sort_by_expiration: bool) -> None:
    """List items in the inventory."""
    items = inventory_store().query(search, sort_by_expiration)

    if not items:
        click.echo("No items found.")
        return

    echo_items(items)


@click.command("add")
@click.option("--title", default="", help="Product title.")
@click.option("--barcode", default="", help="Barcode, if known.")
@click.option("--quantity", default=1, type=quantity_type, help="Units on hand.")
@click.option("--expires", type=date_type, help="Expiration date (YYYY-MM-DD).")
def item_add(title: str, barcode: str, quantity: int, expires: datetime | None) -> None:
    """Add an item by hand."""
    store = inventory_store()
    orchestrator = entry_orchestrator(store, credential_store())

    draft = orchestrator.begin_manual_entry()
    draft.item.title = title
    draft.item.barcode = barcode.strip()
    if expires is not None:
        draft.item.expiration_date = to_utc(expires)

    try:
        draft.item.set_quantity(quantity)
        item = orchestrator.commit(draft)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Added {item.title or '(untitled)'} [{item.id[:8]}]")


@click.command("edit")
@click.argument("item_id")
@click.option("--title", default=None, help="New title.")
@click.option("--quantity", default=None, type=quantity_type, help="New quantity.")
@click.option("--expires", type=date_type, help="New expiration date (YYYY-MM-DD).")
def item_edit(
    item_id: str, title: str | None, quantity: int | None, expires: datetime | None
) -> None:
    """Change an existing item."""
    store = inventory_store()
    orchestrator = entry_orchestrator(store, credential_store())

    full_id = resolve_item_id(store, item_id)
    draft = orchestrator.begin_edit(full_id) if full_id else None
    if draft is None:
        raise click.ClickException(f"No item matches '{item_id}'")

    if title is not None:
        draft.item.title = title
    if expires is not None:
        draft.item.expiration_date = to_utc(expires)

    try:
        if quantity is not None:
            draft.item.set_quantity(quantity)
        orchestrator.commit(draft)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Updated {draft.item.title or '(untitled)'}")


@click.command("use")
@click.argument("item_id")
@click.option("--amount", default=1, type=click.IntRange(min=1), help="Units used.")
def item_use(item_id: str, amount: int) -> None:
    """Use up units of an item; it is removed when none are left."""
    store = inventory_store()
    full_id = resolve_item_id(store, item_id)
    if full_id is None:
        click.echo(f"No item matches '{item_id}'")
        return

    try:
        store.consume(full_id, amount)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    remaining = store.get(full_id)
    if remaining is None:
        click.echo("Item used up and removed.")
    else:
        click.echo(f"{remaining.quantity} left.")


@click.command("delete")
@click.argument("item_id")
def item_delete(item_id: str) -> None:
    """Remove an item from the inventory."""
    store = inventory_store()
    full_id = resolve_item_id(store, item_id)
    if full_id is None:
        click.echo(f"No item matches '{item_id}'")
        return

    store.delete(full_id)
    click.echo("Item deleted.")
