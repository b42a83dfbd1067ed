"""Core infrastructure: XDG paths and library configuration."""

from sysbridge.core.config import (
    SysBridgeConfig,
    get_config,
    load_config,
    reload_config,
    save_config,
)
from sysbridge.core.paths import APP_NAME, ensure_config_dir, get_config_dir, get_config_path

__all__ = [
    "APP_NAME",
    "SysBridgeConfig",
    "ensure_config_dir",
    "get_config",
    "get_config_dir",
    "get_config_path",
    "load_config",
    "reload_config",
    "save_config",
]
