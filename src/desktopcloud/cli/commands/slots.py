"""desktopcloud slots — list, add and remove configured VM slots."""

from __future__ import annotations

import click

from desktopcloud.config import DesktopCloudConfig
from desktopcloud.errors import DesktopCloudError
from desktopcloud.launcher import CommandLauncher, SSHLauncher
from desktopcloud.pool import SlotPool
from desktopcloud.slot import PostBuildBehavior, VMSlotConfig
from desktopcloud.store import load_slots, save_slots


def load_pool(config: DesktopCloudConfig) -> SlotPool:
    return SlotPool(load_slots(config.slots_path))


@click.group(invoke_without_command=True)
@click.pass_context
def slots(ctx) -> None:
    """List configured slots. Use 'slots add' / 'slots rm' to change them."""
    if ctx.invoked_subcommand is not None:
        return

    try:
        pool = load_pool(ctx.obj)
    except DesktopCloudError as e:
        raise click.ClickException(str(e))

    if not len(pool):
        click.echo("No slots configured.")
        return

    click.echo(f"{'VM':<20} {'LABELS':<20} {'REMOTE FS':<20} {'AFTER BUILD':<16} {'HOST':<16}")
    click.echo("-" * 96)
    for s in pool.slots:
        host = getattr(s.launcher, "host", None) or "-"
        click.echo(
            f"{s.vm_id:<20} {s.labels:<20} {s.remote_fs:<20} "
            f"{s.get_post_build_behavior():<16} {host:<16}"
        )


@slots.command()
@click.argument("vm_id")
@click.option("--labels", default="", help="Space-separated labels")
@click.option("--remote-fs", default="", help="Working directory on the VM")
@click.option(
    "--behavior",
    type=click.Choice([b.name for b in PostBuildBehavior]),
    default=PostBuildBehavior.Suspend.name,
    help="What to do with the VM after a build",
)
@click.option("--ssh-host", default=None, help="Launch the agent over SSH (host is updated once the VM's IP is known)")
@click.option("--ssh-port", default=None, type=int, help="SSH port (default 22)")
@click.option("--credentials-id", default="", help="SSH credentials id")
@click.option("--command", "launch_command", default=None, help="Launch the agent with a local command instead of SSH")
@click.pass_obj
def add(
    config,
    vm_id: str,
    labels: str,
    remote_fs: str,
    behavior: str,
    ssh_host: str | None,
    ssh_port: int | None,
    credentials_id: str,
    launch_command: str | None,
) -> None:
    """Add a slot for VM_ID."""
    if launch_command is not None:
        if ssh_host is not None or ssh_port is not None or credentials_id:
            raise click.UsageError("--command cannot be combined with SSH options")
        launcher = CommandLauncher(command=launch_command)
    else:
        launcher = SSHLauncher(
            host=ssh_host,
            port=22 if ssh_port is None else ssh_port,
            credentials_id=credentials_id,
        )

    try:
        pool = load_pool(config)
        pool.add(VMSlotConfig(vm_id, labels, remote_fs, launcher, behavior))
    except DesktopCloudError as e:
        raise click.ClickException(str(e))

    save_slots(config.slots_path, pool.slots)
    click.echo(f"Added slot: {vm_id}")


@slots.command()
@click.argument("vm_id")
@click.pass_obj
def rm(config, vm_id: str) -> None:
    """Remove the slot for VM_ID."""
    try:
        pool = load_pool(config)
        pool.remove(vm_id)
    except DesktopCloudError as e:
        raise click.ClickException(str(e))

    save_slots(config.slots_path, pool.slots)
    click.echo(f"Removed slot: {vm_id}")
