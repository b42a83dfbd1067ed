"""Unit tests for interactive prompts."""

import io

import pytest
from rich.console import Console
from sysbridge.errors import PromptAbortedError
from sysbridge.prompts import INVALID_SELECTION_MESSAGE, confirm, select_element, wait_for_enter


class TestConfirm:
    """Tests for confirm."""

    @pytest.mark.parametrize("answer", ["y\n", "Y\n", "yes\n", "Yes\n", " YES \n"])
    def test_yes(self, answer: str, buffer_console: Console) -> None:
        """Any casing of y or yes confirms."""
        assert confirm("Delete?", console=buffer_console, stream=io.StringIO(answer)) is True

    @pytest.mark.parametrize("answer", ["n\n", "\n", "yep\n", "ja\n"])
    def test_other_answers(self, answer: str, buffer_console: Console) -> None:
        """Everything else declines."""
        assert confirm("Delete?", console=buffer_console, stream=io.StringIO(answer)) is False

    def test_prompt_text(self, buffer_console: Console, output: io.StringIO) -> None:
        """The question is followed by the accepted answers."""
        confirm("Delete [tmp]?", console=buffer_console, stream=io.StringIO("n\n"))

        assert output.getvalue().rstrip() == "Delete [tmp]? - <Y/y/Yes/yes>?"

    def test_eof(self, buffer_console: Console) -> None:
        """Closed input aborts the prompt."""
        with pytest.raises(PromptAbortedError):
            confirm("Delete?", console=buffer_console, stream=io.StringIO(""))


class TestWaitForEnter:
    """Tests for wait_for_enter."""

    def test_returns_on_enter(self, buffer_console: Console, output: io.StringIO) -> None:
        """Any line continues."""
        wait_for_enter("Insert disk", console=buffer_console, stream=io.StringIO("\n"))

        assert output.getvalue() == "Insert disk - <ENTER>"

    def test_eof(self, buffer_console: Console) -> None:
        """Closed input aborts the prompt."""
        with pytest.raises(PromptAbortedError):
            wait_for_enter("Insert disk", console=buffer_console, stream=io.StringIO(""))


class TestSelectElement:
    """Tests for select_element."""

    def test_selects_by_number(self, buffer_console: Console, output: io.StringIO) -> None:
        """The chosen element is returned and the list is numbered from 1."""
        result = select_element(
            ["alpha", "beta", 3],
            console=buffer_console,
            stream=io.StringIO("2\n"),
        )

        assert result == "beta"
        lines = output.getvalue().splitlines()
        assert lines[:4] == ["Choose element:", "[1] alpha", "[2] beta", "[3] 3"]
        assert lines[4].rstrip() == "Enter a number [1-3] and press <ENTER>:"

    def test_numbers_are_returned_as_is(self, buffer_console: Console) -> None:
        """Numeric options keep their type."""
        assert select_element([10, 2.5], console=buffer_console, stream=io.StringIO("2\n")) == 2.5

    def test_custom_prompt(self, buffer_console: Console, output: io.StringIO) -> None:
        """The heading can be customized."""
        select_element(["a"], "Pick a host:", console=buffer_console, stream=io.StringIO("1\n"))

        assert output.getvalue().startswith("Pick a host:\n")

    def test_retries_after_invalid_answer(self, buffer_console: Console, output: io.StringIO) -> None:
        """Invalid answers print an error and ask again."""
        result = select_element(
            ["a", "b"],
            console=buffer_console,
            stream=io.StringIO("0\nx\n3\n1\n"),
        )

        assert result == "a"
        assert output.getvalue().count(INVALID_SELECTION_MESSAGE) == 3

    def test_max_attempts(self, buffer_console: Console, output: io.StringIO) -> None:
        """Giving up after max_attempts invalid answers returns ''."""
        result = select_element(
            ["a", "b"],
            max_attempts=2,
            console=buffer_console,
            stream=io.StringIO("9\n9\n1\n"),
        )

        assert result == ""
        assert output.getvalue().count(INVALID_SELECTION_MESSAGE) == 2

    def test_empty_options(self, buffer_console: Console, output: io.StringIO) -> None:
        """No options returns '' without prompting."""
        assert select_element([], console=buffer_console, stream=io.StringIO("1\n")) == ""
        assert output.getvalue() == ""

    def test_empty_answer(self, buffer_console: Console) -> None:
        """An empty answer returns ''."""
        assert select_element(["a"], console=buffer_console, stream=io.StringIO("\n")) == ""

    def test_eof(self, buffer_console: Console) -> None:
        """Closed input returns ''."""
        assert select_element(["a"], console=buffer_console, stream=io.StringIO("")) == ""
