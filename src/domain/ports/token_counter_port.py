"""
Port (interface) for prompt token counters.
Used for cost logging only; counts never influence control flow.
"""

from abc import ABC, abstractmethod


class ITokenCounter(ABC):
    @abstractmethod
    def count(self, text: str) -> int:
        """Return the number of model tokens in *text*."""
        ...
