"""
Infrastructure adapter: Tavily Search API -> IWebSearchEngine.

Tavily is asked for a synthesized answer; when it returns none, the content
of the top results is aggregated instead. HTTP and JSON errors propagate so
the caller can treat a failed search as a failed attempt.
"""

import logging

import httpx

from src.domain.ports.web_search_port import IWebSearchEngine

logger = logging.getLogger(__name__)


class TavilyWebSearchEngine(IWebSearchEngine):
    _URL = "https://api.tavily.com/search"

    def __init__(
        self,
        api_key: str,
        timeout_seconds: float = 10.0,
        max_results: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            api_key:         Tavily API key.
            timeout_seconds: Per-request HTTP timeout.
            max_results:     Results aggregated when no answer is returned.
            transport:       Optional httpx transport (tests use httpx.MockTransport).
        """
        if not api_key:
            raise ValueError("Tavily API key is not configured")
        self._api_key = api_key
        self._timeout = timeout_seconds
        self._max_results = max_results
        self._transport = transport

    async def search(self, query: str) -> str:
        body = {
            "query": query,
            "search_depth": "basic",
            "include_answer": True,
            "max_results": self._max_results,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(self._URL, json=body, headers=headers)
            response.raise_for_status()
            data = response.json()

        answer = (data.get("answer") or "").strip()
        if answer:
            return answer

        snippets = [
            item.get("content", "").strip()
            for item in data.get("results", [])[: self._max_results]
            if isinstance(item, dict)
        ]
        snippets = [s for s in snippets if s]
        if not snippets:
            raise ValueError(f"Web search returned no results for {query!r}")
        logger.debug("No answer from Tavily, aggregating %d snippets", len(snippets))
        return "\n".join(snippets)
