"""
Port (interface) for document loaders feeding the memory store.
Infrastructure adapters (e.g. PDFDocumentLoader) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.memory_record import MemoryEntry


class IDocumentLoader(ABC):
    @abstractmethod
    def load(self, source: str) -> list[MemoryEntry]:
        """Load and chunk a document from a URL or local path."""
        ...
