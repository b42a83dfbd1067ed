"""Unit tests for library configuration."""

from pathlib import Path
from unittest.mock import patch

import pytest
import sysbridge.core.config as config_module
from pydantic import ValidationError
from sysbridge.core.config import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_HASH_COMMAND,
    SysBridgeConfig,
    get_config,
    load_config,
    reload_config,
    save_config,
)
from sysbridge.core.paths import get_config_path
from sysbridge.errors import ConfigError, ConfigParseError


class TestSysBridgeConfig:
    """Tests for the SysBridgeConfig model."""

    def test_defaults(self) -> None:
        """Every field has a default."""
        config = SysBridgeConfig()

        assert config.copy_chunk_size == DEFAULT_CHUNK_SIZE
        assert config.hash_command == DEFAULT_HASH_COMMAND
        assert config.command_timeout == DEFAULT_COMMAND_TIMEOUT

    @pytest.mark.parametrize("size", [1024, 32 * 1024 * 1024])
    def test_chunk_size_bounds(self, size: int) -> None:
        """Chunk sizes outside 4 KiB..16 MiB are rejected."""
        with pytest.raises(ValidationError):
            SysBridgeConfig(copy_chunk_size=size)

    @pytest.mark.parametrize("timeout", [0, 3601])
    def test_timeout_bounds(self, timeout: int) -> None:
        """Timeouts outside 1..3600 are rejected."""
        with pytest.raises(ValidationError):
            SysBridgeConfig(command_timeout=timeout)

    def test_empty_hash_command(self) -> None:
        """The hash command cannot be empty."""
        with pytest.raises(ValidationError):
            SysBridgeConfig(hash_command="")

    def test_unknown_field(self) -> None:
        """Unknown fields are rejected."""
        with pytest.raises(ValidationError):
            SysBridgeConfig(colour="blue")  # type: ignore[call-arg]


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """A missing file yields the defaults."""
        assert load_config(tmp_path / "config.toml") == SysBridgeConfig()

    def test_default_path(self) -> None:
        """Without a path, the XDG config file is read."""
        path = get_config_path()
        path.parent.mkdir(parents=True)
        path.write_text('hash_command = "gmd5sum"\n')

        assert load_config().hash_command == "gmd5sum"

    def test_partial_file(self, tmp_path: Path) -> None:
        """Missing keys keep their defaults."""
        path = tmp_path / "config.toml"
        path.write_text("copy_chunk_size = 131072\n")

        config = load_config(path)

        assert config.copy_chunk_size == 131072
        assert config.command_timeout == DEFAULT_COMMAND_TIMEOUT

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("copy_chunk_size = \n")

        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        """Values that fail validation raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("command_timeout = -5\n")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_parse_error_is_config_error(self) -> None:
        """ConfigParseError is a ConfigError."""
        assert issubclass(ConfigParseError, ConfigError)


class TestSaveConfig:
    """Tests for save_config."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """A saved config loads back equal."""
        path = tmp_path / "nested" / "config.toml"
        config = SysBridgeConfig(copy_chunk_size=8192, command_timeout=5)

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config

    def test_only_non_defaults_written(self, tmp_path: Path) -> None:
        """Default values are left out of the file."""
        path = tmp_path / "config.toml"
        save_config(SysBridgeConfig(hash_command="gmd5sum"), path)

        assert path.read_text().strip() == 'hash_command = "gmd5sum"'

    def test_write_failure(self, tmp_path: Path) -> None:
        """A failed replace raises ConfigError and leaves no temp file."""
        path = tmp_path / "config.toml"
        with (
            patch("sysbridge.core.config.os.replace", side_effect=OSError(28, "No space left on device")),
            pytest.raises(ConfigError, match="Failed to write config"),
        ):
            save_config(SysBridgeConfig(command_timeout=10), path)

        assert list(tmp_path.iterdir()) == []


class TestGetConfig:
    """Tests for the cached config accessors."""

    def test_cached(self) -> None:
        """get_config returns the same instance until reloaded."""
        first = get_config()

        assert get_config() is first

    def test_reload_picks_up_changes(self) -> None:
        """reload_config rereads the file."""
        assert get_config().command_timeout == DEFAULT_COMMAND_TIMEOUT

        save_config(SysBridgeConfig(command_timeout=7))

        assert get_config().command_timeout == DEFAULT_COMMAND_TIMEOUT
        assert reload_config().command_timeout == 7

    def test_invalid_file_falls_back_to_defaults(self, caplog: pytest.LogCaptureFixture) -> None:
        """An invalid config file is logged and replaced by defaults."""
        path = get_config_path()
        path.parent.mkdir(parents=True)
        path.write_text("copy_chunk_size = 1\n")

        with caplog.at_level("WARNING", logger="sysbridge.core.config"):
            config = get_config()

        assert config == SysBridgeConfig()
        assert "Ignoring invalid sysbridge config" in caplog.text
        assert config_module._cached_config is config
