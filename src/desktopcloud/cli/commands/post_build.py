"""desktopcloud post-build-command — what would happen to a VM after a build."""

from __future__ import annotations

import click

from desktopcloud.cli.commands.slots import load_pool
from desktopcloud.errors import DesktopCloudError
from desktopcloud.slot import VMState, parse_vm_state


@click.command("post-build-command")
@click.argument("vm_id")
@click.option(
    "--state",
    required=True,
    type=click.Choice([s.value for s in VMState]),
    help="Power state the VM was in before the build",
)
@click.pass_obj
def post_build_command(config, vm_id: str, state: str) -> None:
    """Resolve the command sent to VM_ID once its build finishes."""
    try:
        slot = load_pool(config).get(vm_id)
    except DesktopCloudError as e:
        raise click.ClickException(str(e))

    slot.set_prev_vm_state(parse_vm_state(state))
    click.echo(slot.get_post_build_command() or "none")
