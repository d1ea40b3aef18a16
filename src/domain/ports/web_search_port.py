"""
Port (interface) for live web search engines.
Infrastructure adapters (e.g. TavilyWebSearchEngine) must implement this interface.
"""

from abc import ABC, abstractmethod


class IWebSearchEngine(ABC):
    @abstractmethod
    async def search(self, query: str) -> str:
        """Run a free-text query and return the answer text.

        Raises:
            Any exception from the search backend; callers do not expect
            an empty string as a failure signal.
        """
        ...
