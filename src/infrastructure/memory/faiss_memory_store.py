"""
Infrastructure adapter: FAISS + Bedrock Titan Embeddings -> IMemoryStore.

Each collection is an independent FAISS index persisted under
``<root_path>/<collection>/``. Indexes are loaded on first use and cached for
the life of the process. MemoryEntry <-> langchain Document conversion happens
in this adapter so the rest of the codebase never imports faiss directly.
"""

import logging
import os
from typing import Any, Iterator

from langchain_aws import BedrockEmbeddings
from langchain_community.vectorstores import FAISS
from langchain_core.documents import Document

from src.domain.entities.memory_record import MemoryEntry, MemorySearchResult
from src.domain.ports.memory_store_port import IMemoryStore

logger = logging.getLogger(__name__)


class FAISSMemoryStore(IMemoryStore):
    """Collection-scoped FAISS memory backed by Amazon Bedrock Titan Text Embeddings v2."""

    _EMBEDDING_MODEL_ID = "amazon.titan-embed-text-v2:0"

    def __init__(
        self,
        root_path: str,
        region: str = "us-east-1",
        embedding: Any = None,
    ) -> None:
        """
        Args:
            root_path: Directory holding one sub-directory per collection.
            region:    AWS region for the embeddings endpoint.
            embedding: Optional LangChain Embeddings instance replacing Bedrock.
        """
        self._root_path = root_path
        self._embedding = embedding or BedrockEmbeddings(
            model_id=self._EMBEDDING_MODEL_ID,
            region_name=region,
        )
        self._stores: dict[str, FAISS] = {}

    # ------------------------------------------------------------------
    # IMemoryStore interface
    # ------------------------------------------------------------------

    def save_information(self, collection: str, entries: list[MemoryEntry]) -> None:
        """Embed *entries* into *collection* and save the index to disk.

        Entries whose id is already stored are skipped, so re-ingesting a
        source is idempotent.
        """
        store = self._get_store(collection)
        if store is not None:
            known = set(store.index_to_docstore_id.values())
            entries = [e for e in entries if e.id not in known]
        if not entries:
            logger.info("Nothing new to save into collection %r", collection)
            return

        logger.info("Embedding %d entries into collection %r ...", len(entries), collection)
        docs = [self._to_lc_doc(entry) for entry in entries]
        ids = [entry.id for entry in entries]
        if store is None:
            store = FAISS.from_documents(docs, self._embedding, ids=ids)
        else:
            store.add_documents(docs, ids=ids)
        self._stores[collection] = store

        path = self._collection_path(collection)
        os.makedirs(path, exist_ok=True)
        store.save_local(path)
        logger.info("FAISS index for %r saved to %s/", collection, path)

    def search(
        self,
        collection: str,
        query: str,
        limit: int = 1,
        min_relevance: float = 0.7,
    ) -> Iterator[MemorySearchResult]:
        store = self._get_store(collection)
        if store is None:
            logger.warning("Memory collection %r does not exist", collection)
            return
        hits = store.similarity_search_with_relevance_scores(
            query, k=limit, score_threshold=min_relevance
        )
        for doc, score in hits:
            yield self._from_lc_doc(doc, score)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _collection_path(self, collection: str) -> str:
        if not collection or os.sep in collection or collection in (".", ".."):
            raise ValueError(f"Invalid memory collection name: {collection!r}")
        return os.path.join(self._root_path, collection)

    def _get_store(self, collection: str) -> FAISS | None:
        if collection in self._stores:
            return self._stores[collection]
        path = self._collection_path(collection)
        if not os.path.exists(os.path.join(path, "index.faiss")):
            return None
        # FAISS pickles its docstore; we only ever load indexes we built ourselves.
        store = FAISS.load_local(path, self._embedding, allow_dangerous_deserialization=True)
        self._stores[collection] = store
        return store

    @staticmethod
    def _to_lc_doc(entry: MemoryEntry) -> Document:
        return Document(
            page_content=entry.text,
            metadata={
                "id": entry.id,
                "description": entry.description,
                "source": entry.source,
            },
        )

    @staticmethod
    def _from_lc_doc(doc: Document, relevance: float) -> MemorySearchResult:
        return MemorySearchResult(
            id=str(doc.metadata.get("id", "")),
            text=doc.page_content,
            relevance=float(relevance),
        )
