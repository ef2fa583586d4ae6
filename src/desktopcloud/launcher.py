"""Agent launch strategies for VM slots.

A launcher describes how the orchestrator starts the build agent process on
a VM once it is reachable. Launchers that connect to the VM over the network
expose a writable ``host`` attribute (the ``HasTargetHost`` capability) so the
slot can point them at the VM's address once its IP is known.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Protocol, runtime_checkable

from desktopcloud.errors import UnknownLauncherError


@runtime_checkable
class HasTargetHost(Protocol):
    """Launcher whose target host can be rewritten after construction."""

    host: str | None


@dataclass
class SSHLauncher:
    """Start the agent over SSH on the VM."""

    host: str | None = None
    port: int = 22
    credentials_id: str = ""
    jvm_options: str = ""
    java_path: str = ""

    type: str = field(default="ssh", init=False, repr=False)


@dataclass
class CommandLauncher:
    """Start the agent by running a local command on the orchestrator host.

    The command is responsible for reaching the VM itself, so this launcher
    has no target host.
    """

    command: str

    type: str = field(default="command", init=False, repr=False)


Launcher = SSHLauncher | CommandLauncher

_LAUNCHER_TYPES: dict[str, type] = {
    "ssh": SSHLauncher,
    "command": CommandLauncher,
}


def launcher_to_dict(launcher: Any) -> dict[str, Any]:
    """Serialize a launcher to a plain dict tagged with its ``type``.

    ``None`` values are dropped since TOML has no null.
    """
    if type(launcher) not in _LAUNCHER_TYPES.values():
        raise UnknownLauncherError(f"Cannot serialize launcher {type(launcher).__name__}")
    return {k: v for k, v in asdict(launcher).items() if v is not None}


def launcher_from_dict(data: dict[str, Any]) -> Launcher:
    """Rebuild a launcher from the dict produced by launcher_to_dict()."""
    fields = dict(data)
    kind = fields.pop("type", None)
    cls = _LAUNCHER_TYPES.get(kind)
    if cls is None:
        raise UnknownLauncherError(f"Unknown launcher type: {kind!r}")
    return cls(**fields)
