"""
Application service: fills a memory collection with documents.

Business decisions owned here:
  - CHUNK_SIZE / CHUNK_OVERLAP: what constitutes a good recall chunk.
  - Ingestion flow: load -> embed -> save into the named collection.

Infrastructure adapters (IDocumentLoader, IMemoryStore) are injected; no
imports from langchain, faiss, boto3, or any other external library appear here.
"""

import logging

from src.domain.entities.memory_record import MemoryEntry
from src.domain.ports.document_loader_port import IDocumentLoader
from src.domain.ports.memory_store_port import IMemoryStore

logger = logging.getLogger(__name__)


class IngestMemoryService:
    CHUNK_SIZE: int = 1000
    CHUNK_OVERLAP: int = 200

    def __init__(self, loader: IDocumentLoader, memory_store: IMemoryStore) -> None:
        self._loader = loader
        self._memory_store = memory_store

    def ingest(self, collection: str, sources: list[str]) -> int:
        """Load every source and save the chunks into *collection*.

        Args:
            collection: Memory collection name (the one the endpoint searches).
            sources:    List of PDF URLs or local file paths.

        Returns:
            Total number of entries saved.

        Raises:
            ValueError: if *collection* is blank or *sources* is empty.
        """
        if not collection or not collection.strip():
            raise ValueError("collection must be a non-empty string")
        if not sources:
            raise ValueError("at least one source is required")

        entries: list[MemoryEntry] = []
        for source in sources:
            loaded = self._loader.load(source)
            logger.info("Loaded %d chunks from %s", len(loaded), source)
            entries.extend(loaded)

        if entries:
            self._memory_store.save_information(collection, entries)
        return len(entries)
