"""
Infrastructure adapter: Langfuse -> IObservabilityHandler.

Langfuse is imported lazily inside the methods so the module can be loaded
even when LANGFUSE_* environment variables are not set (e.g. during testing).
"""

from src.domain.ports.observability_port import IObservabilityHandler

_TAGS = ["investment-advisor"]
_RUN_NAME = "investment-recommendation"


class LangfuseObservabilityHandler(IObservabilityHandler):
    """Attaches the Langfuse LangChain CallbackHandler to each skill-chain run."""

    def __init__(self) -> None:
        from langfuse.langchain import CallbackHandler
        self._handler = CallbackHandler()

    def trace_config(self, user_id: str | None = None) -> dict:
        return {
            "callbacks": [self._handler],
            "run_name": _RUN_NAME,
            "metadata": {
                "langfuse_user_id": user_id,
                "langfuse_tags": _TAGS,
            },
        }

    def flush(self) -> None:
        """Flush pending traces to the Langfuse backend before the process exits."""
        from langfuse import get_client
        get_client().flush()


class NoopObservabilityHandler(IObservabilityHandler):
    """Used when Langfuse keys are not configured: runs are named but not exported."""

    def trace_config(self, user_id: str | None = None) -> dict:
        return {"run_name": _RUN_NAME, "metadata": {"user_id": user_id}}

    def flush(self) -> None:
        return None
