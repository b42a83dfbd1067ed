"""Library configuration.

Tunables shared by the copy, hashing and shell helpers. Values are read
from ~/.config/sysbridge/config.toml when it exists; every field has a
default, so a missing file simply yields the defaults.

Example config.toml:

    copy_chunk_size = 131072
    hash_command = "md5sum"
    command_timeout = 120
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sysbridge.core.paths import get_config_path
from sysbridge.errors import ConfigError, ConfigParseError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024
DEFAULT_HASH_COMMAND = "md5sum"
DEFAULT_COMMAND_TIMEOUT = 60


class SysBridgeConfig(BaseModel):
    """Configuration for sysbridge helpers.

    Attributes:
        copy_chunk_size: Buffer size in bytes used when streaming file content.
        hash_command: External tool used to compute MD5 digests.
        command_timeout: Default timeout in seconds for external commands.
    """

    model_config = ConfigDict(extra="forbid")

    copy_chunk_size: Annotated[
        int,
        Field(ge=4096, le=16 * 1024 * 1024, description="Copy buffer size in bytes"),
    ] = DEFAULT_CHUNK_SIZE
    hash_command: Annotated[
        str,
        Field(min_length=1, description="External MD5 tool"),
    ] = DEFAULT_HASH_COMMAND
    command_timeout: Annotated[
        int,
        Field(ge=1, le=3600, description="Timeout in seconds (1-3600)"),
    ] = DEFAULT_COMMAND_TIMEOUT


def load_config(path: Path | None = None) -> SysBridgeConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated SysBridgeConfig. Defaults are returned when the file
        does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content doesn't
            match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return SysBridgeConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return SysBridgeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: SysBridgeConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename. Only values that differ
    from the defaults are written.

    Args:
        config: The SysBridgeConfig to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(exclude_defaults=True), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


# Module-level cached config instance
_cached_config: SysBridgeConfig | None = None


def get_config() -> SysBridgeConfig:
    """Get the active configuration, loading and caching it on first use.

    An unreadable or invalid config file is logged and replaced by the
    defaults so that library calls never fail on configuration alone.

    Returns:
        Cached SysBridgeConfig instance.
    """
    global _cached_config
    if _cached_config is None:
        try:
            _cached_config = load_config()
        except ConfigError as e:
            logger.warning("Ignoring invalid sysbridge config: %s", e)
            _cached_config = SysBridgeConfig()
    return _cached_config


def reload_config() -> SysBridgeConfig:
    """Drop the cached configuration and load it again.

    Returns:
        Newly loaded SysBridgeConfig instance.
    """
    global _cached_config
    _cached_config = None
    return get_config()
