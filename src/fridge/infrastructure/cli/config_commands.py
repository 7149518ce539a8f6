"""CLI commands for the lookup service credential."""

from __future__ import annotations

import click

from fridge.domain.exceptions import DomainException
from fridge.infrastructure.bootstrap import credential_store


@click.command("set-key")
@click.argument("api_key", required=False)
def config_set_key(api_key: str | None) -> None:
    """Save the upcdatabase.org API key."""
    if api_key is None:
        api_key = click.prompt("API key", hide_input=True)

    try:
        credential_store().save(api_key)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("API key saved.")


@click.command("show")
def config_show() -> None:
    """Show whether an API key is configured."""
    key = credential_store().api_key
    if not key:
        click.echo("No API key configured. Run 'fridge config set-key'.")
        return
    click.echo(f"API key configured (ends with ...{key[-4:]})")
