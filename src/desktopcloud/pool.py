"""Label-matched checkout of VM slots.

Each slot serves one build at a time. checkout() hands out a free slot
whose labels match the job; when every matching slot is busy the caller
waits until one is released.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from desktopcloud.errors import DuplicateSlotError, NoMatchingSlotError, SlotNotFoundError
from desktopcloud.slot import VMSlotConfig

logger = logging.getLogger(__name__)


class SlotPool:
    """Set of configured slots with checkout/release."""

    def __init__(self, slots: Iterable[VMSlotConfig] = ()) -> None:
        self._slots: dict[str, VMSlotConfig] = {}
        self._cond = asyncio.Condition()
        for slot in slots:
            self.add(slot)

    def __len__(self) -> int:
        return len(self._slots)

    @property
    def slots(self) -> list[VMSlotConfig]:
        return list(self._slots.values())

    def add(self, slot: VMSlotConfig) -> None:
        if slot.vm_id in self._slots:
            raise DuplicateSlotError(f"Slot already configured for VM {slot.vm_id}")
        self._slots[slot.vm_id] = slot

    def get(self, vm_id: str) -> VMSlotConfig:
        try:
            return self._slots[vm_id]
        except KeyError:
            raise SlotNotFoundError(f"No slot configured for VM {vm_id}") from None

    def remove(self, vm_id: str) -> VMSlotConfig:
        slot = self.get(vm_id)
        if slot.provisioned:
            logger.warning("Removing slot %s while it is checked out", vm_id)
        del self._slots[vm_id]
        return slot

    def matching(self, label: str | None) -> list[VMSlotConfig]:
        return [s for s in self._slots.values() if s.matches_label(label)]

    def try_checkout(self, label: str | None = None) -> VMSlotConfig | None:
        """Reserve a free slot matching ``label`` without waiting."""
        for slot in self.matching(label):
            if slot.try_checkout():
                logger.info("Checked out slot %s for label %r", slot.vm_id, label)
                return slot
        return None

    async def checkout(
        self,
        label: str | None = None,
        timeout: float | None = None,
    ) -> VMSlotConfig:
        """Reserve a free slot matching ``label``.

        Blocks while every matching slot is busy. Raises NoMatchingSlotError
        if no configured slot carries the label, and asyncio.TimeoutError if
        ``timeout`` elapses first.
        """
        if not self.matching(label):
            raise NoMatchingSlotError(f"No slot matches label {label!r}")

        async def _wait() -> VMSlotConfig:
            async with self._cond:
                while True:
                    slot = self.try_checkout(label)
                    if slot is not None:
                        return slot
                    await self._cond.wait()

        return await asyncio.wait_for(_wait(), timeout)

    async def release(self, slot: VMSlotConfig, slave: str | None = None) -> None:
        """Return a slot to the pool after its agent disconnected."""
        async with self._cond:
            slot.on_slave_released(slave)
            logger.info("Released slot %s", slot.vm_id)
            self._cond.notify_all()
