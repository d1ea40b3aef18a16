"""
Skill definitions for the recommendation chain.

A skill is a named unit that reads variables from PipelineState and produces
the text of exactly one variable. The chain is a fixed, ordered list: profile
lookups first, then the advisor prompt that consumes their outputs.

Dependency-injection contract:
  - Receives ILanguageModel and IUserProfileProvider; never imports ChatBedrock
    or any other SDK directly.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import RunnableConfig

from src.application.agent.prompts import (
    INVESTMENT_ADVISE_SYSTEM_PROMPT,
    INVESTMENT_ADVISE_USER_PROMPT,
)
from src.application.agent.state import PipelineState
from src.domain.ports.llm_port import ILanguageModel
from src.domain.ports.user_profile_port import IUserProfileProvider


@dataclass(frozen=True)
class Skill:
    name: str
    reads: tuple[str, ...]
    writes: str
    run: Callable[[PipelineState, RunnableConfig], str | Awaitable[str]]


def message_text(message: Any) -> str:
    """Plain text of a model response.

    Content may be a string or a list of content blocks; text blocks are
    joined in order and non-text blocks (tool calls, images) are dropped.
    """
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def create_skills(llm: ILanguageModel, profiles: IUserProfileProvider) -> list[Skill]:
    """Build the recommendation chain in execution order.

    Args:
        llm:      ILanguageModel used by the advisor skill.
        profiles: IUserProfileProvider backing the profile skills.

    Returns:
        [get_user_age, get_annual_household_income, investment_advise]
    """
    advise_prompt = ChatPromptTemplate.from_messages(
        [
            ("system", INVESTMENT_ADVISE_SYSTEM_PROMPT),
            ("human", INVESTMENT_ADVISE_USER_PROMPT),
        ]
    )
    advise_reads = (
        "voice",
        "risk",
        "stocks",
        "tickers",
        "web_search_result",
        "age",
        "annual_household_income",
    )

    def get_user_age(state: PipelineState, config: RunnableConfig) -> str:
        return str(profiles.get_age(state["user_id"]))

    def get_annual_household_income(state: PipelineState, config: RunnableConfig) -> str:
        return str(profiles.get_annual_household_income(state["user_id"]))

    async def investment_advise(state: PipelineState, config: RunnableConfig) -> str:
        messages = advise_prompt.format_messages(**{k: state[k] for k in advise_reads})
        response = await llm.ainvoke(messages, config=config)
        return message_text(response)

    return [
        Skill("get_user_age", ("user_id",), "age", get_user_age),
        Skill(
            "get_annual_household_income",
            ("user_id",),
            "annual_household_income",
            get_annual_household_income,
        ),
        Skill("investment_advise", advise_reads, "recommendation", investment_advise),
    ]
