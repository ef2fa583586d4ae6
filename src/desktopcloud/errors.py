"""Exception types raised by desktopcloud."""

from __future__ import annotations


class DesktopCloudError(Exception):
    """Base class for desktopcloud errors."""


class SlotNotFoundError(DesktopCloudError):
    """No slot is configured for the requested VM id."""


class DuplicateSlotError(DesktopCloudError):
    """A slot with the same VM id is already configured."""


class NoMatchingSlotError(DesktopCloudError):
    """No configured slot carries the requested label."""


class UnknownLauncherError(DesktopCloudError):
    """A persisted launcher entry names a type we don't know how to build."""


class InvalidSlotFileError(DesktopCloudError):
    """The slot configuration file can't be parsed."""
