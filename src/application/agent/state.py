"""
Pipeline context definition.
langgraph is the orchestration framework and is allowed in the application layer.
"""

from typing import TypedDict


class PipelineState(TypedDict, total=False):
    """Shared variables threaded through retrieval and every skill in the chain.

    All values are strings. Each LangGraph node returns only the variable it
    writes; the default reducer overwrites, so variables are added or replaced
    but never removed.
    """

    # Written by the context builder
    user_id: str
    stocks: str
    voice: str
    risk: str
    tickers: str
    memory_collection: str
    memory_relevance: str
    memory_limit: str

    # Written by the retrieval augmenter
    web_search_result: str

    # Written by the skills
    age: str
    annual_household_income: str
    recommendation: str


# Variables available before the first skill runs, in the order they are written.
INITIAL_VARIABLES: tuple[str, ...] = (
    "user_id",
    "stocks",
    "voice",
    "risk",
    "tickers",
    "memory_collection",
    "memory_relevance",
    "memory_limit",
)
AUGMENTED_VARIABLES: tuple[str, ...] = INITIAL_VARIABLES + ("web_search_result",)
