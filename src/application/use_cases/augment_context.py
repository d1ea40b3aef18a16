"""
Use-case: enrich the pipeline context with externally retrieved text.

Two independent lookups run in sequence:
  1. A live web search for the current inflation rate, written into
     ``web_search_result``. Failures propagate to the caller.
  2. A similarity search against the memory collection. The results are
     logged for diagnostics and are not written into the context.

Depends only on Domain ports; no infrastructure imports.
"""

import asyncio
import logging

from src.application.agent.state import PipelineState
from src.domain.ports.memory_store_port import IMemoryStore
from src.domain.ports.web_search_port import IWebSearchEngine

logger = logging.getLogger(__name__)

WEB_SEARCH_QUESTION = "What is the current inflation rate?"
MEMORY_QUERY = "investment advise"


class RetrievalAugmenter:
    def __init__(self, web_search: IWebSearchEngine, memory_store: IMemoryStore) -> None:
        self._web_search = web_search
        self._memory_store = memory_store

    async def augment(self, context: PipelineState) -> PipelineState:
        """Return *context* with ``web_search_result`` set.

        Raises:
            Any exception from the web search or memory store adapters.
        """
        web_result = await self._web_search.search(WEB_SEARCH_QUESTION)
        augmented: PipelineState = {**context, "web_search_result": web_result}
        logger.debug("Web search result: %s", web_result)

        # TODO: merge the recalled memories into the advisor prompt once the
        # prompt has a slot for them; for now they are only logged.
        await asyncio.to_thread(self.recall, context)
        return augmented

    def recall(self, context: PipelineState) -> int:
        """Consume the memory search once, logging each hit.

        Returns:
            Number of results the store yielded.
        """
        results = self._memory_store.search(
            context["memory_collection"],
            MEMORY_QUERY,
            limit=int(context["memory_limit"]),
            min_relevance=float(context["memory_relevance"]),
        )
        count = 0
        for item in results:
            logger.debug("%s : %s", item.text, item.relevance)
            count += 1
        return count
