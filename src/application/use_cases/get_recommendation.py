"""
Use-case: produce a structured investment recommendation for one request.

Each attempt rebuilds the context, reruns retrieval and the whole skill chain,
then parses the advisor output as JSON. Every failure kind (malformed JSON,
skill failure, search/memory/model errors, attempt timeout) is retried the
same way until the attempt budget is spent.

Depends only on Domain ports, entities and other use-cases.
"""

import asyncio
import json
import logging
from typing import Any

from src.application.use_cases.augment_context import RetrievalAugmenter
from src.application.use_cases.build_context import build_pipeline_context
from src.application.use_cases.run_skill_chain import SkillChainExecutor
from src.domain.entities.investment_request import InvestmentRequest
from src.domain.entities.pipeline_config import PipelineConfig
from src.domain.errors import (
    PARSE_FAILURE_MESSAGE,
    UNEXPECTED_FAILURE_MESSAGE,
    RecommendationFailedError,
    SkillInvocationError,
)

logger = logging.getLogger(__name__)


class GetInvestmentRecommendationUseCase:
    def __init__(
        self,
        config: PipelineConfig,
        augmenter: RetrievalAugmenter,
        skill_chain: SkillChainExecutor,
    ) -> None:
        self._config = config
        self._augmenter = augmenter
        self._skill_chain = skill_chain

    async def execute(self, request: InvestmentRequest) -> Any:
        """Return the parsed recommendation document.

        Raises:
            RecommendationFailedError: when no attempt yields valid JSON.
        """
        max_retries = self._config.max_retries
        for attempt in range(max_retries):
            try:
                return await self._run_attempt(request)
            except Exception as exc:
                if attempt == max_retries - 1:
                    logger.error("Failed to parse JSON data", exc_info=exc)
                    raise RecommendationFailedError(PARSE_FAILURE_MESSAGE) from exc
                logger.error(
                    "Failed to parse JSON data, retry attempt %d", attempt + 1, exc_info=exc
                )

        logger.error("Failed to parse JSON data, returning 400")
        raise RecommendationFailedError(UNEXPECTED_FAILURE_MESSAGE)

    async def _run_attempt(self, request: InvestmentRequest) -> Any:
        """Run one attempt, bounded by the attempt timeout when configured.

        On timeout the attempt task is cancelled. The advisor skill awaits the
        model through ILanguageModel.ainvoke, so the cancellation reaches the
        model call; synchronous profile skills and adapters whose ainvoke
        delegates to a worker thread finish their current call in the
        background.
        """
        timeout = self._config.attempt_timeout_seconds
        if timeout is None:
            return await self._run_pipeline(request)
        return await asyncio.wait_for(self._run_pipeline(request), timeout=timeout)

    async def _run_pipeline(self, request: InvestmentRequest) -> Any:
        context = build_pipeline_context(request, self._config)
        context = await self._augmenter.augment(context)

        result = await self._skill_chain.execute(context, user_id=request.user_info.user_id)
        if not result.success:
            raise SkillInvocationError(
                result.failed_skill or "unknown", RuntimeError(result.error)
            )

        output = result.text.replace("\n", "")
        return json.loads(output, parse_constant=_reject_constant)


def _reject_constant(name: str) -> Any:
    """NaN and Infinity are not JSON; json.loads accepts them unless told otherwise."""
    raise ValueError(f"Invalid JSON constant: {name}")
