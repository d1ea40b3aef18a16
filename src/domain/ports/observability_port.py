"""
Port (interface) for observability / tracing handlers.
Infrastructure adapters (e.g. LangfuseObservabilityHandler) must implement this interface.
"""

from abc import ABC, abstractmethod


class IObservabilityHandler(ABC):
    @abstractmethod
    def trace_config(self, user_id: str | None = None) -> dict:
        """Return a LangChain run config (callbacks + metadata) for one skill-chain run."""
        ...

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered telemetry data to the remote backend."""
        ...
