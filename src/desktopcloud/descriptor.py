"""Descriptors expose configurable types to the orchestrator's configuration form.

The registry is passed explicitly to whoever needs a descriptor; there is no
process-wide singleton.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from desktopcloud.slot import PostBuildBehavior, VMSlotConfig

logger = logging.getLogger(__name__)

BEHAVIOR_LABELS: dict[PostBuildBehavior, str] = {
    PostBuildBehavior.Suspend: "Suspend",
    PostBuildBehavior.Stop: "Stop",
    PostBuildBehavior.KeepRunning: "Keep running",
    PostBuildBehavior.ReturnPrevState: "Return to previous state",
}


@dataclass
class NodePropertyDescriptor:
    """A node property type an operator may attach to a slot."""

    name: str
    display_name: str


@dataclass
class SlotDescriptor:
    display_name: str = "Parallels Desktop virtual machine"
    target: type = VMSlotConfig

    def fill_post_build_behavior_items(self) -> list[tuple[str, str]]:
        """Selectable post-build behaviors as (label, value) pairs."""
        return [(BEHAVIOR_LABELS[b], b.name) for b in PostBuildBehavior]


@dataclass
class ExtensionRegistry:
    """Descriptors known to the orchestrator, keyed by the type they describe."""

    _descriptors: dict[type, SlotDescriptor] = field(default_factory=dict)
    _node_properties: list[NodePropertyDescriptor] = field(default_factory=list)

    def register(self, descriptor: SlotDescriptor) -> None:
        if descriptor.target in self._descriptors:
            logger.warning("Replacing descriptor for %s", descriptor.target.__name__)
        self._descriptors[descriptor.target] = descriptor

    def get_descriptor(self, cls: type) -> SlotDescriptor:
        try:
            return self._descriptors[cls]
        except KeyError:
            raise LookupError(f"No descriptor registered for {cls.__name__}") from None

    def register_node_property(self, descriptor: NodePropertyDescriptor) -> None:
        self._node_properties.append(descriptor)

    def node_property_descriptors(self) -> list[NodePropertyDescriptor]:
        return list(self._node_properties)


def default_registry() -> ExtensionRegistry:
    """Registry with the slot descriptor already registered."""
    registry = ExtensionRegistry()
    registry.register(SlotDescriptor())
    return registry
