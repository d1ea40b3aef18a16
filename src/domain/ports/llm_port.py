"""
Port (interface) for language model providers.
Infrastructure adapters (e.g. BedrockChatAdapter) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any


class ILanguageModel(ABC):
    @abstractmethod
    async def ainvoke(self, messages: list[Any], config: dict | None = None) -> Any:
        """Invoke the model and return a response message.

        Async so that cancelling the calling task (e.g. an attempt timeout)
        cancels the model call too.

        Args:
            messages: Chat messages rendered from a prompt template.
            config:   Optional run config (callbacks, metadata) forwarded to
                      the underlying runnable for tracing.
        """
        ...
