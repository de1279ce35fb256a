"""Unit tests for the snippet executor."""

import asyncio
import logging

import pytest

from snippetbox.core.logging_config import RecentLogBuffer
from snippetbox.interfaces.clipboard import ClipboardError
from snippetbox.strategies.clipboard import MemoryClipboard
from snippetbox.strategies.template_engine import ExecutionResult, SnippetExecutor, render_template


# =============================================================================
# Pure Rendering Tests
# =============================================================================


class TestRenderTemplate:
    """Test suite for the three substitution passes."""

    def test_plain_text(self):
        """Test that text without placeholders passes through."""
        outcome = render_template("just text")

        assert outcome == ExecutionResult(result="just text", cursor_index=None)

    def test_empty_template(self):
        """Test that an empty template yields empty text and no cursor."""
        outcome = render_template("")

        assert outcome.result == ""
        assert outcome.cursor_index is None

    def test_full_example(self):
        """Test arguments, clipboard and cursor together."""
        outcome = render_template(
            'Hi {argument name="who" default="Bob"}, {clipboard}{cursor}',
            {},
            "pasted",
        )

        assert outcome.result == "Hi Bob, pasted"
        assert outcome.cursor_index == 14

    def test_cursor_index(self):
        """Test that the cursor offset is measured in the final text."""
        outcome = render_template("ab{cursor}cd")

        assert outcome.result == "abcd"
        assert outcome.cursor_index == 2

    def test_cursor_after_substitution(self):
        """Test that the offset accounts for values inserted before the cursor."""
        outcome = render_template('{argument name="x"}-{cursor}', {"x": "long value"})

        assert outcome.result == "long value-"
        assert outcome.cursor_index == len("long value-")

    def test_multiple_cursors_removed(self):
        """Test that every cursor marker is removed and the first one counts."""
        outcome = render_template("{cursor}x{cursor}")

        assert outcome.result == "x"
        assert outcome.cursor_index == 0

    def test_every_argument_occurrence_replaced(self):
        """Test that a name used N times is replaced N times with the same value."""
        template = '{argument name="a"}/{argument name="a" default="z"}/{argument name="a"}'
        outcome = render_template(template, {"a": "v"})

        assert outcome.result == "v/v/v"

    def test_every_clipboard_occurrence_replaced(self):
        """Test that all {clipboard} markers receive the same snapshot."""
        outcome = render_template("{clipboard}+{clipboard}", None, "c")

        assert outcome.result == "c+c"

    def test_value_containing_placeholder_is_literal(self):
        """Test that a value that looks like a placeholder is not substituted again."""
        outcome = render_template(
            '{argument name="x"}{argument name="y"}',
            {"x": "{clipboard}", "y": "{cursor}"},
            "CLIP",
        )

        assert outcome.result == "{clipboard}{cursor}"
        assert outcome.cursor_index is None

    def test_clipboard_containing_cursor_is_literal(self):
        """Test that clipboard text is not scanned for a cursor marker."""
        outcome = render_template("[{clipboard}]", None, "a{cursor}b")

        assert outcome.result == "[a{cursor}b]"
        assert outcome.cursor_index is None

    def test_value_does_not_join_surrounding_text(self):
        """Test that a value cannot complete a placeholder with neighbouring text."""
        outcome = render_template('{clip{argument name="x"}board}', {"x": ""}, "CLIP")

        assert outcome.result == "{clipboard}"

    def test_malformed_argument_left_as_text(self):
        """Test that a malformed argument placeholder survives verbatim."""
        outcome = render_template('{argument} {argument name=""}')

        assert outcome.result == '{argument} {argument name=""}'

    def test_render_is_pure(self):
        """Test that identical inputs give identical output."""
        template = '{argument name="a" default="1"}{clipboard}{cursor}'

        assert render_template(template, {}, "x") == render_template(template, {}, "x")


# =============================================================================
# Clipboard Interaction Tests
# =============================================================================


class TestSnippetExecutor:
    """Test suite for SnippetExecutor clipboard handling."""

    def test_clipboard_read_once(self):
        """Test that the clipboard is read once however many markers there are."""
        clipboard = MemoryClipboard("snap")
        executor = SnippetExecutor(clipboard=clipboard)

        outcome = asyncio.run(executor.execute("{clipboard}{clipboard}{clipboard}"))

        assert outcome.result == "snapsnapsnap"
        assert clipboard.read_count == 1

    def test_clipboard_not_read_when_unreferenced(self):
        """Test that templates without {clipboard} never touch the clipboard."""
        clipboard = MemoryClipboard("snap")
        executor = SnippetExecutor(clipboard=clipboard)

        asyncio.run(executor.execute('{clip{argument name="x"}board}', {"x": ""}))

        assert clipboard.read_count == 0

    def test_failed_read_is_empty(self):
        """Test that a clipboard read failure substitutes the empty string."""
        executor = SnippetExecutor(clipboard=MemoryClipboard("snap", fail_reads=True))

        outcome = asyncio.run(executor.execute("a{clipboard}b{cursor}"))

        assert outcome.result == "ab"
        assert outcome.cursor_index == 2

    def test_no_clipboard_is_empty(self):
        """Test that an executor without a clipboard treats it as empty."""
        outcome = asyncio.run(SnippetExecutor().execute("[{clipboard}]"))

        assert outcome.result == "[]"

    def test_execute_with_values(self):
        """Test that supplied values are used during execution."""
        executor = SnippetExecutor(clipboard=MemoryClipboard())

        outcome = asyncio.run(
            executor.execute(
                '{argument name="size" options="S,M,L" default="M"}!',
                {"size": "L"},
            )
        )

        assert outcome.result == "L!"

    def test_copy_writes_clipboard(self):
        """Test that copy puts text on the clipboard."""
        clipboard = MemoryClipboard()
        executor = SnippetExecutor(clipboard=clipboard)

        asyncio.run(executor.copy("final text"))

        assert clipboard.text == "final text"

    def test_copy_failure_raises(self):
        """Test that a failed write surfaces as ClipboardError."""
        executor = SnippetExecutor(clipboard=MemoryClipboard(fail_writes=True))

        with pytest.raises(ClipboardError):
            asyncio.run(executor.copy("text"))

    def test_copy_without_clipboard_raises(self):
        """Test that copy needs a clipboard backend."""
        with pytest.raises(ClipboardError):
            asyncio.run(SnippetExecutor().copy("text"))


# =============================================================================
# Logging Tests
# =============================================================================


class TestExecutorLogging:
    """Test suite for the executor's log records."""

    @pytest.fixture
    def log_buffer(self):
        """Capture the executor module's records in a buffer."""
        buffer = RecentLogBuffer(capacity=20)
        executor_logger = logging.getLogger("snippetbox.strategies.template_engine.executor")
        previous_level = executor_logger.level
        executor_logger.setLevel(logging.INFO)
        executor_logger.addHandler(buffer)
        yield buffer
        executor_logger.removeHandler(buffer)
        executor_logger.setLevel(previous_level)

    def test_execution_record(self, log_buffer):
        """Test that an execution is logged as plain text with structured context."""
        render_template('{argument name="a" default="x"}b{cursor}')

        [entry] = log_buffer.entries()
        assert entry.level == "info"
        assert entry.message.startswith("Executed snippet")
        assert entry.context["arguments"] == 1
        assert entry.context["cursor_index"] == 2

    def test_failed_read_record(self, log_buffer):
        """Test that a clipboard read failure is logged as a warning."""
        executor = SnippetExecutor(clipboard=MemoryClipboard(fail_reads=True))

        asyncio.run(executor.execute("{clipboard}"))

        [warning] = log_buffer.entries("warning")
        assert "Clipboard read failed" in warning.message
        assert warning.context["backend"] == "memory"
