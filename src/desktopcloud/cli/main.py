"""desktopcloud CLI — manage the VM slots offered to the build orchestrator."""

from __future__ import annotations

import logging

import click

from desktopcloud.cli.commands.behaviors import behaviors
from desktopcloud.cli.commands.post_build import post_build_command
from desktopcloud.cli.commands.slots import slots
from desktopcloud.config import DesktopCloudConfig


@click.group()
@click.option("--config", "slots_path", default=None, help="Slot configuration file (TOML)")
@click.pass_context
def cli(ctx: click.Context, slots_path: str | None) -> None:
    """desktopcloud — desktop virtualization VMs as build agents."""
    config = DesktopCloudConfig.from_env()
    if slots_path:
        config.slots_path = slots_path
    logging.basicConfig(level=config.log_level, format="%(name)s %(levelname)s %(message)s")
    ctx.obj = config


# Register subcommands
cli.add_command(slots)
cli.add_command(behaviors)
cli.add_command(post_build_command)
