"""
Domain entities for an incoming investment recommendation request.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class UserInfo:
    user_id: str
    risk_level: str
    favorite_advisor: str
    favorite_book: str | None = None


@dataclass(frozen=True)
class Stock:
    """A holding: the ticker symbol plus whatever attributes the client sent."""

    symbol: str
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {"symbol": self.symbol, **self.attributes}


@dataclass(frozen=True)
class InvestmentRequest:
    user_info: UserInfo
    stocks: tuple[Stock, ...] = ()

    @property
    def tickers(self) -> list[str]:
        return [stock.symbol for stock in self.stocks]
