"""
FastAPI application factory: request/response schema and routes.

Kept separate from the composition root so the app can be built around any
GetInvestmentRecommendationUseCase (tests inject one wired with fakes).
"""

import logging
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.application.use_cases.get_recommendation import GetInvestmentRecommendationUseCase
from src.domain.entities.investment_request import InvestmentRequest, Stock, UserInfo
from src.domain.errors import RecommendationFailedError

logger = logging.getLogger(__name__)


class UserInfoBody(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True
    )

    user_id: str
    risk_level: str
    favorite_advisor: str
    favorite_book: str | None = None


class StockBody(BaseModel):
    """A holding; any field besides ``symbol`` is kept as an attribute."""

    model_config = ConfigDict(extra="allow")

    symbol: str


class InvestmentRequestBody(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_info: UserInfoBody
    stocks: list[StockBody] = Field(default_factory=list)

    def to_domain(self) -> InvestmentRequest:
        return InvestmentRequest(
            user_info=UserInfo(
                user_id=self.user_info.user_id,
                risk_level=self.user_info.risk_level,
                favorite_advisor=self.user_info.favorite_advisor,
                favorite_book=self.user_info.favorite_book,
            ),
            stocks=tuple(
                Stock(symbol=s.symbol, attributes=dict(s.model_extra or {}))
                for s in self.stocks
            ),
        )


def create_app(
    use_case: GetInvestmentRecommendationUseCase,
    on_shutdown: Callable[[], None] | None = None,
) -> FastAPI:
    """Build the FastAPI app around an already wired use-case.

    Args:
        use_case:    The recommendation pipeline.
        on_shutdown: Optional hook run when the server stops (e.g. trace flush).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if on_shutdown is not None:
            on_shutdown()

    app = FastAPI(title="Investment Recommendation API", lifespan=lifespan)

    @app.exception_handler(RecommendationFailedError)
    async def recommendation_failed(
        request: Request, exc: RecommendationFailedError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.post("/investments")
    async def get_recommendations(body: InvestmentRequestBody) -> JSONResponse:
        """Return the advisor's recommendation as a JSON document."""
        request = body.to_domain()
        logger.info(
            "Recommendation requested for user %s (%d holdings)",
            request.user_info.user_id,
            len(request.stocks),
        )
        document = await use_case.execute(request)
        return JSONResponse(content=document)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app
