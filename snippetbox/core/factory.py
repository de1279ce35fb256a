"""Component Factory for strategy instantiation.

The Factory Pattern allows the application to instantiate
different strategy implementations at runtime based on
configuration or environment variables.
"""

import logging

from snippetbox.core.config import Settings, get_settings
from snippetbox.interfaces.clipboard import BaseClipboard
from snippetbox.strategies.clipboard import MemoryClipboard, SystemClipboard
from snippetbox.strategies.expansion import AutoExpander, KeystrokeBuffer, KeywordMap
from snippetbox.strategies.template_engine import SnippetExecutor

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating component instances based on configuration.

    Example:
        ```python
        factory = ComponentFactory(get_settings())

        clipboard = factory.get_clipboard()
        executor = factory.get_executor()
        expander = factory.get_auto_expander()
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._clipboard_cache: BaseClipboard | None = None
        self._executor_cache: SnippetExecutor | None = None
        self._auto_expander_cache: AutoExpander | None = None

    def get_clipboard(self, backend: str | None = None) -> BaseClipboard:
        """Get a clipboard instance for the specified backend.

        Args:
            backend: The backend to instantiate. If None, uses settings.

        Returns:
            A BaseClipboard implementation instance.

        Raises:
            ValueError: If the backend is unknown.
        """
        if self._clipboard_cache is None or backend is not None:
            backend = backend or self._settings.clipboard_backend

            logger.info(f"Instantiating clipboard: {backend}")

            match backend:
                case "system":
                    self._clipboard_cache = SystemClipboard()
                case "memory":
                    self._clipboard_cache = MemoryClipboard()
                case _:
                    raise ValueError(f"Unknown clipboard backend: {backend}")

        return self._clipboard_cache

    def get_executor(self) -> SnippetExecutor:
        """Get the snippet executor wired to the configured clipboard."""
        if self._executor_cache is None:
            self._executor_cache = SnippetExecutor(clipboard=self.get_clipboard())
        return self._executor_cache

    def get_auto_expander(self) -> AutoExpander:
        """Get the keyword auto-expander with its configured buffer size."""
        if self._auto_expander_cache is None:
            logger.info(
                f"Instantiating auto-expander: enabled={self._settings.auto_expansion_enabled}, "
                f"buffer={self._settings.expansion_buffer_size}"
            )
            self._auto_expander_cache = AutoExpander(
                keyword_map=KeywordMap(),
                buffer=KeystrokeBuffer(max_size=self._settings.expansion_buffer_size),
                enabled=self._settings.auto_expansion_enabled,
            )
        return self._auto_expander_cache
