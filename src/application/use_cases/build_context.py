"""
Use-case: turn an incoming request into the initial pipeline context.
Depends only on Domain entities: pure transformation, no I/O.
"""

import json

from src.application.agent.state import PipelineState
from src.domain.entities.investment_request import InvestmentRequest
from src.domain.entities.pipeline_config import PipelineConfig


def build_pipeline_context(
    request: InvestmentRequest, config: PipelineConfig
) -> PipelineState:
    """Build a fresh PipelineState for one attempt.

    Values are passed through without validation; the HTTP schema is the
    only guard on their shape.
    """
    return PipelineState(
        user_id=request.user_info.user_id,
        stocks=json.dumps([stock.as_dict() for stock in request.stocks], default=str),
        voice=request.user_info.favorite_advisor,
        risk=request.user_info.risk_level,
        tickers=", ".join(request.tickers),
        memory_collection=config.memory_collection,
        memory_relevance=str(config.memory_relevance),
        memory_limit=str(config.memory_limit),
    )
