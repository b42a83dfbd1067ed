"""Unit tests for console formatting helpers."""

import io

import pytest
from rich.console import Console
from sysbridge.utils import formatting
from sysbridge.utils.formatting import format_log_line, log_print, print_plain


class TestPrintPlain:
    """Tests for print_plain."""

    def test_markup_is_not_interpreted(self, buffer_console: Console, output: io.StringIO) -> None:
        """Square brackets are printed literally."""
        print_plain("[bold]/tmp/[x]/file[/]", target=buffer_console)

        assert output.getvalue() == "[bold]/tmp/[x]/file[/]\n"

    def test_long_lines_are_not_wrapped(self, buffer_console: Console, output: io.StringIO) -> None:
        """Lines wider than the console stay on one line."""
        message = "/very/long/" + "x" * 200

        print_plain(message, target=buffer_console)

        assert output.getvalue() == message + "\n"

    def test_default_target(self, monkeypatch: pytest.MonkeyPatch, buffer_console: Console) -> None:
        """Without a target the shared console is used."""
        monkeypatch.setattr(formatting, "console", buffer_console)

        print_plain("hello")

        assert buffer_console.file.getvalue() == "hello\n"  # type: ignore[attr-defined]


class TestLogLines:
    """Tests for format_log_line and log_print."""

    @pytest.mark.parametrize(
        ("msg_type", "expected"),
        [
            ("INFO", "> INFO  : started"),
            ("WARN", "> WARN  : started"),
            ("ERROR", "> ERROR : started"),
            ("CMD", "> CMD   : started"),
        ],
    )
    def test_types_are_aligned(self, msg_type: str, expected: str) -> None:
        """Message types are padded to a common width."""
        assert format_log_line(msg_type, "started") == expected

    def test_long_type_is_not_truncated(self) -> None:
        """Types longer than the width are kept whole."""
        assert format_log_line("NOTICE", "x") == "> NOTICE : x"

    def test_log_print(self, buffer_console: Console, output: io.StringIO) -> None:
        """log_print writes the formatted line."""
        log_print("CMD", "rsync -a [src] dst", target=buffer_console)

        assert output.getvalue() == "> CMD   : rsync -a [src] dst\n"


class TestStatusMessages:
    """Tests for the themed status printers."""

    def test_warning_goes_to_stderr_console(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Warnings are printed with a prefix on the error console."""
        buffer = io.StringIO()
        monkeypatch.setattr(
            formatting,
            "err_console",
            Console(file=buffer, theme=formatting.THEME, color_system=None, width=80),
        )

        formatting.print_warning("disk almost full")

        assert buffer.getvalue() == "Warning: disk almost full\n"

    def test_success_goes_to_stdout_console(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Success messages are printed on the stdout console."""
        buffer = io.StringIO()
        monkeypatch.setattr(
            formatting,
            "console",
            Console(file=buffer, theme=formatting.THEME, color_system=None, width=80),
        )

        formatting.print_success("done")

        assert buffer.getvalue() == "done\n"
