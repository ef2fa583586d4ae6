from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_SLOTS_PATH = os.path.expanduser("~/.desktopcloud/slots.toml")
DEFAULT_LOG_LEVEL = "INFO"


def _log_level(value: str) -> str:
    """Normalise a level name, falling back to INFO for names logging doesn't know."""
    level = value.strip().upper()
    if level not in logging.getLevelNamesMapping():
        return DEFAULT_LOG_LEVEL
    return level


@dataclass
class DesktopCloudConfig:
    slots_path: str = DEFAULT_SLOTS_PATH
    log_level: str = DEFAULT_LOG_LEVEL

    @staticmethod
    def from_env() -> DesktopCloudConfig:
        return DesktopCloudConfig(
            slots_path=os.environ.get("DESKTOPCLOUD_CONFIG", DEFAULT_SLOTS_PATH),
            log_level=_log_level(os.environ.get("DESKTOPCLOUD_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        )
