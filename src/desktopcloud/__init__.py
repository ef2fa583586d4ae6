from desktopcloud.descriptor import ExtensionRegistry, SlotDescriptor, default_registry
from desktopcloud.launcher import CommandLauncher, HasTargetHost, SSHLauncher
from desktopcloud.pool import SlotPool
from desktopcloud.slot import (
    PostBuildBehavior,
    VMSlotConfig,
    VMState,
    parse_vm_state,
    resolve_post_build_command,
)

__all__ = [
    "CommandLauncher",
    "ExtensionRegistry",
    "HasTargetHost",
    "PostBuildBehavior",
    "SSHLauncher",
    "SlotDescriptor",
    "SlotPool",
    "VMSlotConfig",
    "VMState",
    "default_registry",
    "parse_vm_state",
    "resolve_post_build_command",
]
