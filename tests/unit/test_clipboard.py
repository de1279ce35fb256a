"""Unit tests for clipboard backends and the component factory."""

import asyncio
from unittest.mock import patch

import pyperclip
import pytest

from snippetbox.core.config import Settings
from snippetbox.core.factory import ComponentFactory
from snippetbox.interfaces.clipboard import ClipboardError
from snippetbox.strategies.clipboard import MemoryClipboard, SystemClipboard


# =============================================================================
# Memory Clipboard Tests
# =============================================================================


class TestMemoryClipboard:
    """Test suite for MemoryClipboard."""

    def test_read_write(self):
        """Test that written text is read back and reads are counted."""
        clipboard = MemoryClipboard("start")

        async def run_test():
            assert await clipboard.read() == "start"
            await clipboard.write("next")
            assert await clipboard.read() == "next"

        asyncio.run(run_test())
        assert clipboard.read_count == 2
        assert clipboard.backend_name == "memory"

    def test_failures(self):
        """Test that configured failures raise ClipboardError."""
        clipboard = MemoryClipboard("keep", fail_reads=True, fail_writes=True)

        with pytest.raises(ClipboardError):
            asyncio.run(clipboard.read())
        with pytest.raises(ClipboardError):
            asyncio.run(clipboard.write("lost"))

        assert clipboard.text == "keep"


# =============================================================================
# System Clipboard Tests
# =============================================================================


class TestSystemClipboard:
    """Test suite for SystemClipboard with pyperclip patched out."""

    def test_read(self):
        """Test that read returns pyperclip's paste value."""
        with patch("pyperclip.paste", return_value="from os"):
            assert asyncio.run(SystemClipboard().read()) == "from os"

    def test_read_none_is_empty(self):
        """Test that an empty platform clipboard reads as ''."""
        with patch("pyperclip.paste", return_value=None):
            assert asyncio.run(SystemClipboard().read()) == ""

    def test_write(self):
        """Test that write hands the text to pyperclip."""
        with patch("pyperclip.copy") as mock_copy:
            asyncio.run(SystemClipboard().write("to os"))

        mock_copy.assert_called_once_with("to os")

    def test_unavailable_clipboard(self):
        """Test that pyperclip errors become ClipboardError."""
        error = pyperclip.PyperclipException("no copy/paste mechanism")

        with patch("pyperclip.paste", side_effect=error):
            with pytest.raises(ClipboardError):
                asyncio.run(SystemClipboard().read())

        with patch("pyperclip.copy", side_effect=error):
            with pytest.raises(ClipboardError):
                asyncio.run(SystemClipboard().write("x"))


# =============================================================================
# Factory Tests
# =============================================================================


class TestComponentFactory:
    """Test suite for ComponentFactory."""

    @pytest.fixture
    def factory(self, tmp_path):
        """A factory configured for the memory clipboard."""
        settings = Settings(
            clipboard_backend="memory",
            log_dir=tmp_path,
            expansion_buffer_size=5,
            auto_expansion_enabled=True,
        )
        return ComponentFactory(settings)

    def test_clipboard_from_settings(self, factory):
        """Test that the configured backend is built and cached."""
        clipboard = factory.get_clipboard()

        assert isinstance(clipboard, MemoryClipboard)
        assert factory.get_clipboard() is clipboard

    def test_explicit_backend(self, factory):
        """Test that an explicit backend overrides the settings."""
        assert isinstance(factory.get_clipboard("system"), SystemClipboard)

    def test_unknown_backend(self, factory):
        """Test that an unknown backend is rejected."""
        with pytest.raises(ValueError):
            factory.get_clipboard("carrier-pigeon")

    def test_executor_uses_clipboard(self, factory):
        """Test that the executor is wired to the cached clipboard."""
        executor = factory.get_executor()

        assert executor.clipboard is factory.get_clipboard()
        assert factory.get_executor() is executor

    def test_auto_expander_settings(self, factory):
        """Test that the auto-expander follows the expansion settings."""
        expander = factory.get_auto_expander()

        assert expander.enabled is True
        assert factory.get_auto_expander() is expander

    def test_settings_reject_unknown_backend(self, tmp_path):
        """Test that Settings validates the clipboard backend."""
        with pytest.raises(ValueError):
            Settings(clipboard_backend="fax", log_dir=tmp_path)
