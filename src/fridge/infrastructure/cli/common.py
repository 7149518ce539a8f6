"""Helpers shared by the CLI commands."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from fridge.application.dto import ItemDTO
from fridge.application.entry_orchestrator import Draft
from fridge.application.inventory_store import InventoryStore
from fridge.domain.model.item import MAX_QUANTITY, MIN_QUANTITY

DATE_FORMAT = "%Y-%m-%d"
SHORT_ID = 8

quantity_type = click.IntRange(MIN_QUANTITY, MAX_QUANTITY)
date_type = click.DateTime(formats=[DATE_FORMAT])


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def resolve_item_id(store: InventoryStore, id_prefix: str) -> str | None:
    """Expand a (possibly shortened) id; None when nothing matches."""
    matches = [dto.id for dto in store.query() if dto.id.startswith(id_prefix)]
    if len(matches) > 1:
        raise click.ClickException(f"Id '{id_prefix}' is ambiguous")
    return matches[0] if matches else None


def echo_items(items: tuple[ItemDTO, ...]) -> None:
    click.echo(f"{'ID':<9} {'Title':<28} {'Qty':>4} {'Expires':<11} {'Barcode'}")
    click.echo("-" * 70)
    for item in items:
        click.echo(
            f"{item.id[:SHORT_ID]:<9} {item.title or '(untitled)':<28} "
            f"{item.quantity:>4} {item.expiration_date.strftime(DATE_FORMAT):<11} "
            f"{item.barcode}"
        )


def prompt_draft(draft: Draft) -> None:
    """Let the user review and edit a draft in place."""
    item = draft.item
    item.title = click.prompt("Title", default=item.title, show_default=bool(item.title))
    item.set_quantity(click.prompt("Quantity", default=item.quantity, type=quantity_type))
    expires = click.prompt(
        "Expires",
        default=item.expiration_date.strftime(DATE_FORMAT),
        type=date_type,
    )
    item.expiration_date = to_utc(expires)
