"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import io
from pathlib import Path

import pytest
import sysbridge.core.config as config_module
from rich.console import Console


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory and reset the config cache."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setattr(config_module, "_cached_config", None)
    return config_home


@pytest.fixture
def output() -> io.StringIO:
    """Buffer receiving console output."""
    return io.StringIO()


@pytest.fixture
def buffer_console(output: io.StringIO) -> Console:
    """Console writing plain text into the output buffer."""
    return Console(file=output, width=80, color_system=None, force_terminal=False)


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Source tree with a file (644) and a nested file (600).

    Layout:
        src/a.txt       "hello" mode 644
        src/sub/b.txt   "world" mode 600
    """
    src = tmp_path / "src"
    (src / "sub").mkdir(parents=True)
    (src / "a.txt").write_text("hello")
    (src / "a.txt").chmod(0o644)
    (src / "sub" / "b.txt").write_text("world")
    (src / "sub" / "b.txt").chmod(0o600)
    src.chmod(0o755)
    (src / "sub").chmod(0o750)
    return src
