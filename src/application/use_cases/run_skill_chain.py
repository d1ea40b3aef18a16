"""
Use-case: execute the compiled skill chain against one pipeline context.
langchain/langgraph are treated as framework (not infrastructure) because
LangGraph is the orchestration framework used throughout the application layer.
"""

import json
import logging
from typing import Any

from src.application.agent.state import PipelineState
from src.domain.entities.skill_result import SkillResult
from src.domain.errors import SkillInvocationError
from src.domain.ports.observability_port import IObservabilityHandler
from src.domain.ports.token_counter_port import ITokenCounter

logger = logging.getLogger(__name__)


class SkillChainExecutor:
    def __init__(
        self,
        graph: Any,
        observability: IObservabilityHandler,
        token_counter: ITokenCounter,
        output_variable: str = "recommendation",
    ) -> None:
        """
        Args:
            graph:           Compiled graph returned by build_skill_chain_graph().
            observability:   IObservabilityHandler implementation (e.g. Langfuse adapter).
            token_counter:   ITokenCounter used for cost logging.
            output_variable: State variable holding the last skill's text.
        """
        self._graph = graph
        self._observability = observability
        self._token_counter = token_counter
        self._output_variable = output_variable

    async def execute(self, context: PipelineState, user_id: str | None = None) -> SkillResult:
        """Run every skill in order and return the final skill's text.

        A failing skill stops the chain; the failure is returned as an
        unsuccessful SkillResult rather than raised.
        """
        self._log_token_count(json.dumps(context))
        logger.debug("Context: %s", context)

        try:
            final_state = await self._graph.ainvoke(
                context, config=self._observability.trace_config(user_id)
            )
        except SkillInvocationError as exc:
            logger.error("Skill %r failed", exc.skill_name, exc_info=exc)
            return SkillResult(
                text="", success=False, failed_skill=exc.skill_name, error=str(exc)
            )

        text = final_state.get(self._output_variable, "")
        logger.debug("Result: %s", text)
        self._log_token_count(text)
        return SkillResult(text=text, success=True)

    def _log_token_count(self, text: str) -> None:
        # Cost logging only: a broken counter must not fail the attempt.
        try:
            count = self._token_counter.count(text)
        except Exception as exc:
            logger.warning("Token counting failed", exc_info=exc)
            return
        logger.debug("Number of Tokens: %d", count)
