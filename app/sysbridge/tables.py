"""Structured data tables.

A table is a nested mapping of plain values: strings, integers, floats,
booleans, lists and string-keyed dicts. Tables are printed as indented
``key: value`` lines and stored as TOML, which is parsed as data and
never executed.
"""

from __future__ import annotations

import logging
import math
import os
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, TypeAlias

import tomli_w
from rich.console import Console

from sysbridge.errors import TableError, TableNotFoundError, TableParseError
from sysbridge.utils.formatting import print_plain

logger = logging.getLogger(__name__)

TableScalar: TypeAlias = str | int | float | bool
TableValue: TypeAlias = TableScalar | list["TableValue"] | dict[str, "TableValue"]
Table: TypeAlias = dict[str, TableValue]

INDENT_STEP = "  "


def _validate_value(value: Any, where: str) -> None:
    if isinstance(value, str | bool | int):
        return
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise TableError(f"{where}: NaN and infinity are not supported")
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TableError(f"{where}: keys must be strings, got {key!r}")
            _validate_value(item, f"{where}.{key}")
        return
    if isinstance(value, Sequence) and not isinstance(value, bytes | bytearray):
        for index, item in enumerate(value, start=1):
            _validate_value(item, f"{where}[{index}]")
        return
    raise TableError(f"{where}: unsupported value type {type(value).__name__}")


def validate_table(data: object) -> Table:
    """Check that data is a table of supported values.

    Args:
        data: Candidate table.

    Returns:
        The same object, typed as a Table.

    Raises:
        TableError: If data is not a string-keyed mapping, or contains None,
            non-string keys, non-finite floats or other unsupported types.
    """
    if not isinstance(data, Mapping):
        raise TableError(f"A table must be a mapping, got {type(data).__name__}")
    _validate_value(data, "table")
    return data  # type: ignore[return-value]


def _format_scalar(value: TableScalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _items(value: Mapping[str, TableValue] | Sequence[TableValue]) -> list[tuple[str, TableValue]]:
    if isinstance(value, Mapping):
        return list(value.items())
    return [(str(index), item) for index, item in enumerate(value, start=1)]


def format_table(data: Mapping[str, TableValue], indent: str = "") -> list[str]:
    """Render a table as indented ``key: value`` lines.

    Nested dicts and lists print their key followed by a colon, with their
    children indented two more spaces. List items are keyed by 1-based
    position.

    Raises:
        TableError: If the table contains unsupported values.
    """
    validate_table(data)
    lines: list[str] = []
    _format_into(lines, data, indent)
    return lines


def _format_into(
    lines: list[str],
    value: Mapping[str, TableValue] | Sequence[TableValue],
    indent: str,
) -> None:
    for key, item in _items(value):
        if isinstance(item, Mapping | list | tuple):
            lines.append(f"{indent}{key}:")
            _format_into(lines, item, indent + INDENT_STEP)
        else:
            lines.append(f"{indent}{key}: {_format_scalar(item)}")


def print_table(data: Mapping[str, TableValue], *, console: Console | None = None) -> None:
    """Pretty-print a table to the console.

    Args:
        data: Table to print.
        console: Console to print to. Defaults to stdout.
    """
    for line in format_table(data):
        print_plain(line, target=console)


def save_table(data: Mapping[str, TableValue], path: str | Path) -> Path:
    """Save a table to a TOML file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.

    Args:
        data: Table to save.
        path: Destination file.

    Returns:
        Path where the table was saved.

    Raises:
        TableError: If the table is invalid or the file cannot be written.
    """
    table = validate_table(data)
    table_path = Path(path)

    tmp_path: Path | None = None
    try:
        table_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=table_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(table, f)
        os.replace(str(tmp_path), str(table_path))
    except (OSError, TypeError) as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise TableError(f"Could not save table to {table_path}: {e}") from e

    logger.debug("Saved table to %s", table_path)
    return table_path


def load_table(path: str | Path) -> Table:
    """Load a table previously written by :func:`save_table`.

    Args:
        path: TOML file to read.

    Returns:
        The loaded table.

    Raises:
        TableNotFoundError: If the file doesn't exist.
        TableParseError: If the TOML syntax is invalid.
        TableError: If the file cannot be read or holds unsupported values
            (such as dates).
    """
    table_path = Path(path)

    if not table_path.exists():
        raise TableNotFoundError(f"Table file not found: {table_path}")

    try:
        with open(table_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise TableParseError(f"Invalid TOML syntax in {table_path}: {e}") from e
    except OSError as e:
        raise TableError(f"Could not load table from {table_path}: {e}") from e

    return validate_table(data)
