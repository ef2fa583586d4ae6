"""desktopcloud behaviors — list selectable post-build behaviors."""

from __future__ import annotations

import click

from desktopcloud.descriptor import default_registry
from desktopcloud.slot import VMSlotConfig


@click.command()
def behaviors() -> None:
    """Show the post-build behaviors a slot can be configured with."""
    descriptor = default_registry().get_descriptor(VMSlotConfig)
    click.echo(f"{'VALUE':<18} {'LABEL':<30}")
    click.echo("-" * 48)
    for label, value in descriptor.fill_post_build_behavior_items():
        click.echo(f"{value:<18} {label:<30}")
