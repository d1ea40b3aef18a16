"""
Infrastructure adapter: PDF (URL or path) -> IDocumentLoader.

Remote PDFs are streamed into a local cache directory once and reused on
later ingestion runs; a partial download never lands under the final name.
Chunking parameters are injected from IngestMemoryService so the business
decision remains in the application layer.
"""

import logging
from pathlib import Path
from urllib.parse import unquote, urlparse

import requests
from langchain_community.document_loaders import PyPDFLoader
from langchain_text_splitters import RecursiveCharacterTextSplitter

from src.domain.entities.memory_record import MemoryEntry
from src.domain.ports.document_loader_port import IDocumentLoader

logger = logging.getLogger(__name__)

_REMOTE_SCHEMES = ("http", "https")


class PDFDocumentLoader(IDocumentLoader):
    """Turns a PDF into MemoryEntry chunks whose ids stay stable across runs."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        cache_dir: str = "data/pdfs",
        download_timeout: float = 120.0,
    ) -> None:
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            separators=["\n\n", "\n", ". ", " ", ""],
        )
        self._cache_dir = Path(cache_dir)
        self._download_timeout = download_timeout

    def load(self, source: str) -> list[MemoryEntry]:
        """Load *source* and return one entry per chunk, id ``<file name>#<index>``.

        Raises:
            FileNotFoundError:       if a local path does not exist.
            requests.HTTPError:      if a remote PDF cannot be downloaded.
        """
        path = self.local_path(source)
        chunks = self._splitter.split_documents(PyPDFLoader(str(path)).load())
        return [
            MemoryEntry(
                id=f"{path.name}#{index}",
                text=chunk.page_content,
                description=f"{path.name}, page {int(chunk.metadata.get('page', 0))}",
                source=source,
            )
            for index, chunk in enumerate(chunks)
        ]

    def local_path(self, source: str) -> Path:
        """Return a readable local file for *source*, downloading URLs on first use."""
        parsed = urlparse(source)
        if parsed.scheme not in _REMOTE_SCHEMES:
            path = Path(source)
            if not path.is_file():
                raise FileNotFoundError(f"PDF not found: {source}")
            return path

        name = Path(unquote(parsed.path)).name or "document.pdf"
        target = self._cache_dir / name
        if target.is_file():
            logger.debug("Using cached %s", target)
            return target

        self._cache_dir.mkdir(parents=True, exist_ok=True)
        partial = target.with_name(target.name + ".part")
        logger.info("Downloading %s ...", source)
        with requests.get(source, stream=True, timeout=self._download_timeout) as response:
            response.raise_for_status()
            with partial.open("wb") as fh:
                for block in response.iter_content(chunk_size=64 * 1024):
                    fh.write(block)
        partial.replace(target)
        logger.info("Saved %s", target)
        return target
