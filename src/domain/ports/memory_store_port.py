"""
Port (interface) for the semantic memory store.
Infrastructure adapters (e.g. FAISSMemoryStore) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Iterator

from src.domain.entities.memory_record import MemoryEntry, MemorySearchResult


class IMemoryStore(ABC):
    @abstractmethod
    def save_information(self, collection: str, entries: list[MemoryEntry]) -> None:
        """Embed *entries* and persist them into *collection*."""
        ...

    @abstractmethod
    def search(
        self,
        collection: str,
        query: str,
        limit: int = 1,
        min_relevance: float = 0.7,
    ) -> Iterator[MemorySearchResult]:
        """Lazily yield up to *limit* results from *collection*.

        Results are ordered by descending relevance and every result has
        ``relevance >= min_relevance``. The iterator can be consumed once.
        """
        ...
