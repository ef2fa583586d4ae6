"""Slot configuration file — reads/writes the [[slots]] array of a TOML file.

Only configuration is stored. Runtime state (checkout flag, agent name,
observed power state) starts fresh every time slots are loaded.
"""

from __future__ import annotations

import logging
import os
import stat
import tomllib
from collections.abc import Iterable

import tomli_w

from desktopcloud.errors import InvalidSlotFileError
from desktopcloud.launcher import launcher_from_dict, launcher_to_dict
from desktopcloud.slot import VMSlotConfig

logger = logging.getLogger(__name__)


def slot_to_dict(slot: VMSlotConfig) -> dict:
    data = {
        "vm_id": slot.vm_id,
        "labels": slot.labels,
        "remote_fs": slot.remote_fs,
        "post_build_behavior": slot.get_post_build_behavior(),
        "launcher": launcher_to_dict(slot.launcher),
    }
    if slot.node_properties:
        data["node_properties"] = slot.node_properties
    return data


def slot_from_dict(data: dict) -> VMSlotConfig:
    try:
        return VMSlotConfig(
            vm_id=data["vm_id"],
            labels=data.get("labels", ""),
            remote_fs=data.get("remote_fs", ""),
            launcher=launcher_from_dict(data["launcher"]),
            post_build_behavior=data.get("post_build_behavior"),
            node_properties=data.get("node_properties"),
        )
    except KeyError as e:
        raise InvalidSlotFileError(f"Slot entry is missing {e}") from e
    except (TypeError, ValueError) as e:
        raise InvalidSlotFileError(f"Invalid slot entry: {e}") from e


def load_slots(path: str) -> list[VMSlotConfig]:
    """Load slots from ``path``, returning [] if the file doesn't exist."""
    if not os.path.exists(path):
        return []
    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise InvalidSlotFileError(f"Cannot parse {path}: {e}") from e
    slots = [slot_from_dict(entry) for entry in data.get("slots", [])]
    logger.debug("Loaded %d slot(s) from %s", len(slots), path)
    return slots


def save_slots(path: str, slots: Iterable[VMSlotConfig]) -> None:
    """Write slots to ``path`` with restricted permissions (0600)."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "wb") as f:
        tomli_w.dump({"slots": [slot_to_dict(s) for s in slots]}, f)
    os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)
