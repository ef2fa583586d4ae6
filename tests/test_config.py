"""Tests for configuration."""

from desktopcloud.config import DEFAULT_SLOTS_PATH, DesktopCloudConfig


def test_config_defaults():
    config = DesktopCloudConfig()
    assert config.slots_path == DEFAULT_SLOTS_PATH
    assert config.slots_path.endswith("slots.toml")
    assert config.log_level == "INFO"


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("DESKTOPCLOUD_CONFIG", "/tmp/slots.toml")
    monkeypatch.setenv("DESKTOPCLOUD_LOG_LEVEL", "debug")

    config = DesktopCloudConfig.from_env()
    assert config.slots_path == "/tmp/slots.toml"
    assert config.log_level == "DEBUG"


def test_config_from_env_unset(monkeypatch):
    monkeypatch.delenv("DESKTOPCLOUD_CONFIG", raising=False)
    monkeypatch.delenv("DESKTOPCLOUD_LOG_LEVEL", raising=False)

    config = DesktopCloudConfig.from_env()
    assert config.slots_path == DEFAULT_SLOTS_PATH
    assert config.log_level == "INFO"


def test_config_from_env_unknown_log_level_falls_back(monkeypatch):
    monkeypatch.setenv("DESKTOPCLOUD_LOG_LEVEL", "verbose")
    assert DesktopCloudConfig.from_env().log_level == "INFO"
