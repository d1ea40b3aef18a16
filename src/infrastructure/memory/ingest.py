"""
CLI entry point for filling a memory collection.

This script is the Composition Root for the ingestion use-case: it wires
infrastructure adapters (PDFDocumentLoader, FAISSMemoryStore) to the
IngestMemoryService and triggers the pipeline.

Run once before serving recommendations:

    export AWS_PROFILE=<your-profile>
    export MEMORY_COLLECTION=investment-insights
    python -m src.infrastructure.memory.ingest ./reports/outlook-2026.pdf https://...
"""

import argparse
import logging
import os

from dotenv import load_dotenv

from src.application.services.memory_ingestor import IngestMemoryService
from src.infrastructure.memory.faiss_memory_store import FAISSMemoryStore
from src.infrastructure.memory.pdf_loader import PDFDocumentLoader
from src.infrastructure.observability.logging_config import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Save PDF documents into a memory collection.")
    parser.add_argument("sources", nargs="+", help="PDF URLs or local paths")
    parser.add_argument(
        "--collection",
        default=os.environ.get("MEMORY_COLLECTION"),
        help="Target collection (default: $MEMORY_COLLECTION)",
    )
    parser.add_argument(
        "--store-path",
        default=os.environ.get("MEMORY_STORE_PATH", "memorystore"),
        help="Root directory of the FAISS indexes (default: $MEMORY_STORE_PATH)",
    )
    args = parser.parse_args(argv)
    if not args.collection:
        parser.error("--collection is required when MEMORY_COLLECTION is not set")
    return args


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    configure_logging(os.environ.get("LOG_LEVEL", "INFO"))
    args = parse_args(argv)

    loader = PDFDocumentLoader(
        chunk_size=IngestMemoryService.CHUNK_SIZE,
        chunk_overlap=IngestMemoryService.CHUNK_OVERLAP,
    )
    memory_store = FAISSMemoryStore(
        args.store_path,
        region=os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
    )
    service = IngestMemoryService(loader=loader, memory_store=memory_store)

    total = service.ingest(args.collection, args.sources)
    logger.info("Ingestion complete: %d entries in collection %r.", total, args.collection)


if __name__ == "__main__":
    main()
