"""
Shared fakes for every domain port, plus a factory that wires the full
recommendation pipeline around them.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Iterator

import pytest
from langchain_core.messages import AIMessage

from src.application.agent.graph import build_skill_chain_graph
from src.application.agent.skills import create_skills
from src.application.use_cases.augment_context import RetrievalAugmenter
from src.application.use_cases.get_recommendation import GetInvestmentRecommendationUseCase
from src.application.use_cases.run_skill_chain import SkillChainExecutor
from src.domain.entities.investment_request import InvestmentRequest, Stock, UserInfo
from src.domain.entities.memory_record import MemoryEntry, MemorySearchResult
from src.domain.entities.pipeline_config import PipelineConfig
from src.domain.ports.llm_port import ILanguageModel
from src.domain.ports.memory_store_port import IMemoryStore
from src.domain.ports.token_counter_port import ITokenCounter
from src.domain.ports.web_search_port import IWebSearchEngine
from src.infrastructure.observability.langfuse_adapter import NoopObservabilityHandler
from src.infrastructure.user_profile.in_memory_profile_provider import (
    InMemoryUserProfileProvider,
    UserProfile,
)


class FakeWebSearch(IWebSearchEngine):
    """*answer* may be a list: one answer per call, the last one repeats.
    *errors* are raised in call order; a None entry lets that call succeed."""

    def __init__(
        self,
        answer: str | list[str] = "Inflation is 3.1%",
        errors: list | None = None,
        delay: float = 0.0,
    ):
        self.answers = [answer] if isinstance(answer, str) else list(answer)
        self.errors = list(errors or [])
        self.delay = delay
        self.queries: list[str] = []

    async def search(self, query: str) -> str:
        self.queries.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.errors:
            error = self.errors.pop(0)
            if error is not None:
                raise error
        return self.answers[min(len(self.queries), len(self.answers)) - 1]


class FakeMemoryStore(IMemoryStore):
    def __init__(self, results: list[MemorySearchResult] | None = None):
        self.results = list(results or [])
        self.searches: list[dict] = []
        self.saved: dict[str, list[MemoryEntry]] = {}

    def save_information(self, collection: str, entries: list[MemoryEntry]) -> None:
        self.saved.setdefault(collection, []).extend(entries)

    def search(self, collection, query, limit=1, min_relevance=0.7) -> Iterator[MemorySearchResult]:
        self.searches.append(
            {"collection": collection, "query": query, "limit": limit, "min_relevance": min_relevance}
        )
        hits = [r for r in self.results if r.relevance >= min_relevance]
        yield from sorted(hits, key=lambda r: r.relevance, reverse=True)[:limit]


class ScriptedLanguageModel(ILanguageModel):
    """Returns scripted outputs in order; the last one repeats. Exceptions are raised."""

    def __init__(self, outputs: list[Any], delay: float = 0.0):
        self.outputs = list(outputs)
        self.delay = delay
        self.calls: list[list] = []
        self.cancelled = 0

    async def ainvoke(self, messages, config=None):
        self.calls.append(messages)
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled += 1
                raise
        index = min(len(self.calls) - 1, len(self.outputs) - 1)
        output = self.outputs[index]
        if isinstance(output, Exception):
            raise output
        return AIMessage(content=output)

    def prompt_text(self, call: int = -1) -> str:
        return "\n".join(m.content for m in self.calls[call])


class WordCounter(ITokenCounter):
    def count(self, text: str) -> int:
        return len(text.split())


@dataclass
class Pipeline:
    use_case: GetInvestmentRecommendationUseCase
    llm: ScriptedLanguageModel
    web_search: FakeWebSearch
    memory_store: FakeMemoryStore
    config: PipelineConfig


@pytest.fixture
def profiles() -> InMemoryUserProfileProvider:
    return InMemoryUserProfileProvider(
        {"50": UserProfile(age=61, annual_household_income=250_000)}
    )


@pytest.fixture
def investment_request() -> InvestmentRequest:
    return InvestmentRequest(
        user_info=UserInfo(
            user_id="50",
            risk_level="medium",
            favorite_advisor="Warren",
            favorite_book="intelligent-investor",
        ),
        stocks=(Stock("AAPL", {"shares": 10}), Stock("MSFT")),
    )


@pytest.fixture
def make_pipeline(profiles):
    """Factory: wire the real use-case, graph and skills around fake adapters."""

    def _make(
        outputs: list[Any],
        max_retries: int = 2,
        web_search: FakeWebSearch | None = None,
        memory_store: FakeMemoryStore | None = None,
        attempt_timeout_seconds: float | None = None,
        model_delay: float = 0.0,
        token_counter: ITokenCounter | None = None,
    ) -> Pipeline:
        llm = ScriptedLanguageModel(outputs, delay=model_delay)
        web_search = web_search or FakeWebSearch()
        memory_store = memory_store or FakeMemoryStore(
            [MemorySearchResult(id="m1", text="Diversify across sectors", relevance=0.91)]
        )
        config = PipelineConfig(
            memory_collection="investment-insights",
            max_retries=max_retries,
            attempt_timeout_seconds=attempt_timeout_seconds,
        )
        graph = build_skill_chain_graph(create_skills(llm, profiles))
        use_case = GetInvestmentRecommendationUseCase(
            config=config,
            augmenter=RetrievalAugmenter(web_search, memory_store),
            skill_chain=SkillChainExecutor(
                graph, NoopObservabilityHandler(), token_counter or WordCounter()
            ),
        )
        return Pipeline(use_case, llm, web_search, memory_store, config)

    return _make
