"""CLI command for the scan-to-inventory flow."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import click

from fridge.application.entry_orchestrator import Draft, EntryOrchestrator
from fridge.application.scan_capture import ScanCaptureController
from fridge.domain.exceptions import DomainException
from fridge.infrastructure.bootstrap import (
    credential_store,
    entry_orchestrator,
    inventory_store,
    scanner,
)
from fridge.infrastructure.cli.common import prompt_draft


@click.command("scan")
@click.option("--barcode", default=None, help="Use this code instead of reading the scanner.")
@click.option("--timeout", default=60.0, type=float, help="Seconds to wait for a scan.")
def scan(barcode: str | None, timeout: float) -> None:
    """Scan a barcode, look up its title and add it to the inventory."""
    store = inventory_store()
    credentials = credential_store()
    if not credentials.is_configured:
        key = click.prompt(
            "upcdatabase.org API key (blank to skip lookups)",
            default="",
            show_default=False,
        )
        if key.strip():
            credentials.save(key)

    orchestrator = entry_orchestrator(store, credentials)
    try:
        draft = asyncio.run(_capture_and_lookup(orchestrator, barcode, timeout))
    except DomainException as exc:
        raise click.ClickException(f"{exc}. Use 'fridge add' to enter the item by hand.")

    if draft is None:
        raise click.ClickException("No barcode was scanned.")
    if draft.lookup_error is not None:
        click.echo(f"Lookup failed ({draft.lookup_error}); please enter the title.")

    try:
        prompt_draft(draft)
        item = orchestrator.commit(draft)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Added {item.title or '(untitled)'} [{item.id[:8]}]")


async def _capture_and_lookup(
    orchestrator: EntryOrchestrator, barcode: str | None, timeout: float
) -> Draft | None:
    if barcode is None:
        barcode = await _capture(timeout)
        if barcode is None:
            return None

    click.echo(f"Looking up {barcode}...")
    draft = orchestrator.begin_from_scan(barcode)
    await orchestrator.wait_for_lookup(draft)
    return draft


def _deliver_to(scanned: asyncio.Future[str]) -> Callable[[str], None]:
    def deliver(code: str) -> None:
        # A report queued before a timeout can still run after it.
        if not scanned.done():
            scanned.set_result(code)

    return deliver


async def _capture(timeout: float) -> str | None:
    loop = asyncio.get_running_loop()
    scanned: asyncio.Future[str] = loop.create_future()
    controller = ScanCaptureController(scanner(), dispatch=loop.call_soon_threadsafe)

    controller.start(_deliver_to(scanned))
    click.echo("Scan a barcode...")
    try:
        return await asyncio.wait_for(scanned, timeout)
    except asyncio.TimeoutError:
        controller.cancel()
        return None
