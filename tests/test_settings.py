"""Tests for Settings and Config."""

from pathlib import Path

import pytest

from stool.config import Config, Settings
from stool.config.loader import EMBEDDED_SOURCE


class TestSettings:
    """Test environment parsing."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unset variables give defaults."""
        for key in (
            "STOOL_CONFIG",
            "STOOL_DOWNLOAD_DIR",
            "STOOL_UPLOAD_DIR",
            "STOOL_SSH_BIN",
            "STOOL_PROMPT_TIMEOUT",
            "STOOL_STRICT_HOST_KEYS",
            "STOOL_LOG_LEVEL",
        ):
            monkeypatch.delenv(key, raising=False)

        settings = Settings.from_env()

        assert settings.config_path is None
        assert settings.download_dir == "~/Downloads"
        assert settings.upload_dir == "~/"
        assert settings.ssh_bin == "ssh"
        assert settings.prompt_timeout == 30
        assert settings.strict_host_keys is False
        assert settings.log_level == "WARNING"

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """STOOL_* variables override defaults."""
        monkeypatch.setenv("STOOL_CONFIG", "/etc/stool.yaml")
        monkeypatch.setenv("STOOL_DOWNLOAD_DIR", "/data/in")
        monkeypatch.setenv("STOOL_SCP_BIN", "/opt/bin/scp")
        monkeypatch.setenv("STOOL_PROMPT_TIMEOUT", "5")
        monkeypatch.setenv("STOOL_STRICT_HOST_KEYS", "yes")
        monkeypatch.setenv("STOOL_LOG_LEVEL", "debug")

        settings = Settings.from_env()

        assert settings.config_path == "/etc/stool.yaml"
        assert settings.download_dir == "/data/in"
        assert settings.scp_bin == "/opt/bin/scp"
        assert settings.prompt_timeout == 5
        assert settings.strict_host_keys is True
        assert settings.log_level == "DEBUG"

    def test_invalid_int_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Invalid numbers fall back to the default."""
        monkeypatch.setenv("STOOL_PROMPT_TIMEOUT", "soon")
        assert Settings.from_env().prompt_timeout == 30

    def test_non_positive_int_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Zero or negative timeouts fall back to the default."""
        monkeypatch.setenv("STOOL_PROMPT_TIMEOUT", "0")
        assert Settings.from_env().prompt_timeout == 30


class TestConfig:
    """Test Config source selection."""

    def test_explicit_path_wins(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """--config overrides STOOL_CONFIG."""
        monkeypatch.setenv("STOOL_CONFIG", str(tmp_path / "env.yaml"))
        config = Config.from_env(tmp_path / "flag.yaml")
        assert config.loader.config_path == tmp_path / "flag.yaml"

    def test_env_path_used(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """STOOL_CONFIG is used when no path is given."""
        monkeypatch.setenv("STOOL_CONFIG", str(tmp_path / "env.yaml"))
        config = Config.from_env()
        assert config.loader.config_path == tmp_path / "env.yaml"

    def test_embedded_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a path the embedded catalog is used."""
        monkeypatch.delenv("STOOL_CONFIG", raising=False)
        config = Config.from_env()
        assert config.loader.source == EMBEDDED_SOURCE

    def test_delegates_to_settings(self, config: Config, settings: Settings) -> None:
        """Convenience properties read through to settings."""
        assert config.download_dir == settings.download_dir
        assert config.upload_dir == "~/"
        assert config.strict_host_keys is False

    def test_strict_host_keys_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """STOOL_STRICT_HOST_KEYS reaches the verifier."""
        monkeypatch.setenv("STOOL_STRICT_HOST_KEYS", "true")
        monkeypatch.setenv("STOOL_KNOWN_HOSTS", "none")
        config = Config.from_env()
        assert config.strict_host_keys is True
