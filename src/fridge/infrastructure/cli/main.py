import click

from fridge.infrastructure.cli.config_commands import config_set_key, config_show
from fridge.infrastructure.cli.item_commands import (
    item_add,
    item_delete,
    item_edit,
    item_list,
    item_use,
)
from fridge.infrastructure.cli.scan_commands import scan
from fridge.infrastructure.logging import configure_logging
from fridge.infrastructure.settings import get_settings


@click.group()
def cli() -> None:
    """Fridge: household inventory tracker."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)


@cli.group()
def config() -> None:
    """Manage the lookup service API key."""


# Register subcommands
cli.add_command(item_add)
cli.add_command(item_delete)
cli.add_command(item_edit)
cli.add_command(item_list)
cli.add_command(item_use)
cli.add_command(scan)
config.add_command(config_set_key)
config.add_command(config_show)
