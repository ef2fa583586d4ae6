"""Tests for launch strategies and their serialization."""

import pytest

from desktopcloud.errors import UnknownLauncherError
from desktopcloud.launcher import (
    CommandLauncher,
    HasTargetHost,
    SSHLauncher,
    launcher_from_dict,
    launcher_to_dict,
)


def test_ssh_launcher_has_target_host():
    assert isinstance(SSHLauncher(), HasTargetHost)


def test_command_launcher_has_no_target_host():
    assert not isinstance(CommandLauncher(command="true"), HasTargetHost)


def test_ssh_launcher_to_dict_drops_unset_host():
    data = launcher_to_dict(SSHLauncher(port=2222, credentials_id="build-key"))
    assert data["type"] == "ssh"
    assert data["port"] == 2222
    assert data["credentials_id"] == "build-key"
    assert "host" not in data


def test_launcher_from_dict():
    launcher = launcher_from_dict({"type": "ssh", "host": "10.0.0.5", "port": 22})
    assert launcher == SSHLauncher(host="10.0.0.5")

    launcher = launcher_from_dict({"type": "command", "command": "./start-agent.sh"})
    assert launcher == CommandLauncher(command="./start-agent.sh")


def test_launcher_from_dict_unknown_type():
    with pytest.raises(UnknownLauncherError):
        launcher_from_dict({"type": "jnlp"})
    with pytest.raises(UnknownLauncherError):
        launcher_from_dict({"host": "10.0.0.5"})


def test_launcher_to_dict_rejects_foreign_objects():
    with pytest.raises(UnknownLauncherError):
        launcher_to_dict(object())
