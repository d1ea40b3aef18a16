"""
Domain entities for the semantic memory store.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MemoryEntry:
    """A piece of text to be embedded and saved into a memory collection."""

    id: str
    text: str
    description: str = ""
    source: str = ""


@dataclass(frozen=True)
class MemorySearchResult:
    id: str
    text: str
    relevance: float
