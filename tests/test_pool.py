"""Tests for SlotPool checkout/release."""

import asyncio

import pytest

from desktopcloud.errors import DuplicateSlotError, NoMatchingSlotError, SlotNotFoundError
from desktopcloud.launcher import SSHLauncher
from desktopcloud.pool import SlotPool
from desktopcloud.slot import VMSlotConfig


def _slot(vm_id, labels=""):
    return VMSlotConfig(vm_id, labels, "/build", SSHLauncher(), "Suspend")


@pytest.fixture
def pool():
    return SlotPool([_slot("mac-1", "macos xcode"), _slot("mac-2", "macos"), _slot("win-1", "windows")])


def test_add_duplicate(pool):
    with pytest.raises(DuplicateSlotError):
        pool.add(_slot("mac-1"))


def test_get_and_remove(pool):
    assert pool.get("win-1").labels == "windows"
    removed = pool.remove("win-1")
    assert removed.vm_id == "win-1"
    assert len(pool) == 2
    with pytest.raises(SlotNotFoundError):
        pool.get("win-1")
    with pytest.raises(SlotNotFoundError):
        pool.remove("win-1")


def test_matching(pool):
    assert [s.vm_id for s in pool.matching("macos")] == ["mac-1", "mac-2"]
    assert [s.vm_id for s in pool.matching("xcode")] == ["mac-1"]
    assert len(pool.matching(None)) == 3


def test_try_checkout_skips_busy_slots(pool):
    first = pool.try_checkout("macos")
    second = pool.try_checkout("macos")
    assert first.vm_id == "mac-1"
    assert second.vm_id == "mac-2"
    assert pool.try_checkout("macos") is None
    assert first.provisioned and second.provisioned


@pytest.mark.asyncio
async def test_checkout_no_matching_label(pool):
    with pytest.raises(NoMatchingSlotError):
        await pool.checkout("linux")


@pytest.mark.asyncio
async def test_checkout_and_release(pool):
    slot = await pool.checkout("windows")
    assert slot.vm_id == "win-1"
    assert slot.provisioned is True

    await pool.release(slot, "win-1-agent")
    assert slot.provisioned is False


@pytest.mark.asyncio
async def test_checkout_waits_for_release(pool):
    held = await pool.checkout("windows")

    waiter = asyncio.create_task(pool.checkout("windows"))
    await asyncio.sleep(0.05)
    assert not waiter.done()

    await pool.release(held)
    slot = await asyncio.wait_for(waiter, timeout=2.0)
    assert slot is held
    assert slot.provisioned is True


@pytest.mark.asyncio
async def test_checkout_timeout(pool):
    await pool.checkout("windows")
    with pytest.raises(asyncio.TimeoutError):
        await pool.checkout("windows", timeout=0.05)


@pytest.mark.asyncio
async def test_concurrent_checkouts_never_share_a_slot(pool):
    results = await asyncio.gather(*(asyncio.wait_for(pool.checkout("macos"), 0.1) for _ in range(2)))
    assert {s.vm_id for s in results} == {"mac-1", "mac-2"}

    # A third caller only gets a slot after one is released
    third = asyncio.create_task(pool.checkout("macos"))
    await asyncio.sleep(0.05)
    assert not third.done()
    await pool.release(results[1])
    assert (await asyncio.wait_for(third, timeout=2.0)) is results[1]
