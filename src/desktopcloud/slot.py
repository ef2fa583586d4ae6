"""A configured VM slot that the orchestrator can check out for a build.

The slot carries static configuration (VM id, labels, remote working
directory, launcher, post-build behavior) plus transient runtime state that
is rebuilt on every process start:

    provisioned    – True while a build is using the VM
    prev_vm_state  – power state observed before the build started
    slave_name     – name of the agent currently bound to the slot

Lifecycle per build:
    1. set_prev_vm_state()  – orchestrator records the VM's current power state
    2. try_checkout()       – slot is reserved for one build
    3. set_launcher_ip()    – launcher is pointed at the VM once its IP is known
    4. on_slave_released()  – agent disconnected, slot is free again
    5. get_post_build_command() tells the hypervisor control what to do next
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING, Any

from desktopcloud.launcher import HasTargetHost

if TYPE_CHECKING:
    from desktopcloud.descriptor import ExtensionRegistry, SlotDescriptor

logger = logging.getLogger(__name__)

CMD_STOP = "stop"
CMD_SUSPEND = "suspend"


class PostBuildBehavior(Enum):
    Suspend = "Suspend"
    Stop = "Stop"
    KeepRunning = "KeepRunning"
    ReturnPrevState = "ReturnPrevState"


class VMState(Enum):
    Suspended = "suspended"
    Paused = "paused"
    Running = "running"
    Stopped = "stopped"


def parse_vm_state(state: str | None) -> VMState | None:
    """Map a hypervisor state token to VMState.

    Only the exact lowercase tokens are recognized; anything else means the
    state is unknown and None is returned.
    """
    if state == "stopped":
        return VMState.Stopped
    elif state == "paused":
        return VMState.Paused
    elif state == "running":
        return VMState.Running
    elif state == "suspended":
        return VMState.Suspended
    return None


def resolve_post_build_command(
    behavior: PostBuildBehavior,
    prev_state: VMState,
) -> str | None:
    """Command to send to the VM after a build, or None to leave it alone."""
    if behavior is PostBuildBehavior.ReturnPrevState:
        if prev_state is VMState.Running:
            return None
        if prev_state is VMState.Stopped:
            return CMD_STOP
        # Paused and Suspended both go back to suspend.
        return CMD_SUSPEND
    if behavior is PostBuildBehavior.KeepRunning:
        return None
    if behavior is PostBuildBehavior.Stop:
        return CMD_STOP
    return CMD_SUSPEND


def _parse_behavior(value: str | None) -> PostBuildBehavior | None:
    try:
        return PostBuildBehavior[value]
    except (KeyError, TypeError) as e:
        logger.error("Invalid post-build behavior %r: %s", value, e)
        return None


class VMSlotConfig:
    """One virtual machine made available to the orchestrator as an agent host."""

    def __init__(
        self,
        vm_id: str,
        labels: str,
        remote_fs: str,
        launcher: Any,
        post_build_behavior: str | None = None,
        node_properties: Any = None,
    ) -> None:
        self._vm_id = vm_id
        self._labels = labels
        self._remote_fs = remote_fs
        self._launcher = launcher
        self._node_properties = node_properties

        behavior = _parse_behavior(post_build_behavior)
        if behavior is None:
            behavior = PostBuildBehavior.Suspend
        self._post_build_behavior = behavior

        # --- Transient state (never persisted) ---
        self._lock = threading.Lock()
        self._provisioned = False
        self._prev_vm_state = VMState.Suspended
        self._slave_name: str | None = None

    def __repr__(self) -> str:
        return (
            f"VMSlotConfig(vm_id={self._vm_id!r}, labels={self._labels!r}, "
            f"post_build_behavior={self._post_build_behavior.name})"
        )

    # ── Configuration ─────────────────────────────────────────────

    @property
    def vm_id(self) -> str:
        return self._vm_id

    @property
    def labels(self) -> str:
        return self._labels

    @property
    def label_set(self) -> frozenset[str]:
        return frozenset(self._labels.split())

    @property
    def remote_fs(self) -> str:
        return self._remote_fs

    @property
    def launcher(self) -> Any:
        return self._launcher

    @property
    def node_properties(self) -> Any:
        return self._node_properties

    @node_properties.setter
    def node_properties(self, value: Any) -> None:
        self._node_properties = value

    @property
    def post_build_behavior(self) -> PostBuildBehavior:
        return self._post_build_behavior

    def get_post_build_behavior(self) -> str:
        """Name of the post-build behavior, as shown in the configuration form."""
        return self._post_build_behavior.name

    def matches_label(self, label: str | None) -> bool:
        """True if a job asking for ``label`` may run on this slot.

        An empty label matches any slot.
        """
        if not label:
            return True
        return label in self.label_set

    # ── Runtime state ─────────────────────────────────────────────

    @property
    def slave_name(self) -> str | None:
        return self._slave_name

    def set_slave_name(self, name: str | None) -> None:
        self._slave_name = name

    @property
    def prev_vm_state(self) -> VMState:
        return self._prev_vm_state

    def set_prev_vm_state(self, state: VMState) -> None:
        self._prev_vm_state = state

    @property
    def provisioned(self) -> bool:
        return self._provisioned

    def mark_provisioned(self) -> None:
        with self._lock:
            self._provisioned = True

    def try_checkout(self) -> bool:
        """Reserve the slot for one build.

        Returns False if another caller already holds it.
        """
        with self._lock:
            if self._provisioned:
                return False
            self._provisioned = True
            return True

    def on_slave_released(self, slave: Any = None) -> None:
        """The agent bound to this slot went away; the slot is free again."""
        with self._lock:
            self._provisioned = False
        logger.debug("Slot %s released (agent %s)", self._vm_id, slave or self._slave_name)

    def get_post_build_command(self) -> str | None:
        return resolve_post_build_command(self._post_build_behavior, self._prev_vm_state)

    # ── Launcher address ──────────────────────────────────────────

    def set_launcher_ip(self, ip: str) -> None:
        """Point the launcher at the VM's current IP address.

        Launchers without a target host are left untouched.
        """
        if not isinstance(self._launcher, HasTargetHost):
            logger.error(
                "Cannot set IP %s for VM %s: launcher %s has no target host",
                ip, self._vm_id, type(self._launcher).__name__,
            )
            return
        try:
            self._launcher.host = ip
        except (AttributeError, TypeError) as e:
            logger.error("Cannot set IP %s for VM %s: %s", ip, self._vm_id, e)
            return
        logger.info("VM %s launcher host set to %s", self._vm_id, ip)

    def get_launcher_ip(self) -> str | None:
        if not isinstance(self._launcher, HasTargetHost):
            logger.error(
                "Cannot read IP for VM %s: launcher %s has no target host",
                self._vm_id, type(self._launcher).__name__,
            )
            return None
        return self._launcher.host

    # ── Descriptor ────────────────────────────────────────────────

    def get_descriptor(self, registry: ExtensionRegistry) -> SlotDescriptor:
        return registry.get_descriptor(type(self))
