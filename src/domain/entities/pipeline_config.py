"""
Value object holding the retrieval and retry configuration of the
recommendation pipeline. Built once at startup by the composition root and
injected into the application layer.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PipelineConfig:
    memory_collection: str
    memory_relevance: float = 0.8
    memory_limit: int = 3
    max_retries: int = 2
    attempt_timeout_seconds: float | None = None

    def __post_init__(self) -> None:
        if not self.memory_collection or not self.memory_collection.strip():
            raise ValueError("memory_collection must be a non-empty string")
        if not 0.0 <= self.memory_relevance <= 1.0:
            raise ValueError(
                f"memory_relevance must be within [0, 1], got {self.memory_relevance!r}"
            )
        if self.memory_limit < 1:
            raise ValueError(f"memory_limit must be positive, got {self.memory_limit!r}")
        if self.max_retries < 0:
            raise ValueError(f"max_retries must not be negative, got {self.max_retries!r}")
        if self.attempt_timeout_seconds is not None and self.attempt_timeout_seconds <= 0:
            raise ValueError("attempt_timeout_seconds must be positive when set")
