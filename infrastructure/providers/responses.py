from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, model_validator

from domain.exceptions.conversion import RateNotFoundError
from domain.models.statement import USD, normalize_currency

ONE = Decimal(1)


class DailyRatesResponse(BaseModel):
    """Daily table keyed by a lower-case base currency.

    ``{"date": "2025-01-01", "eur": {"sek": 11.24, "usd": 1.08}}`` reads as
    1 EUR = 11.24 SEK, so an amount in SEK is divided by the rate to get EUR.
    """

    provider: str = "exchangeapi"
    date: str | None = None
    rates: dict[str, dict[str, Decimal]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def collect_rate_tables(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            "date": data.get("date"),
            "rates": {
                key: value
                for key, value in data.items()
                if key != "date" and isinstance(value, dict)
            },
        }

    def cross_rate(self, source: str, target: str) -> Decimal:
        source, target = normalize_currency(source), normalize_currency(target)
        if source == target:
            return ONE

        table = self.rates.get(target.lower())
        if table is None:
            raise RateNotFoundError(source, target, self.provider)

        rate = table.get(source.lower())
        if not rate:
            raise RateNotFoundError(source, target, self.provider)
        return rate

    def convert(self, amount: Decimal, source: str, target: str) -> Decimal:
        return amount / self.cross_rate(source, target)


class ErrorDetail(BaseModel):
    code: int | None = None
    type: str | None = None
    info: str | None = None


class HistoricalQuotesResponse(BaseModel):
    """USD-anchored quotes where ``"USDSEK": 11.24`` means 1 USD = 11.24 SEK."""

    provider: str = "currencylayer"
    success: bool = False
    historical: bool = False
    date: str | None = None
    timestamp: int | None = None
    source: str | None = None
    quotes: dict[str, Decimal] = Field(default_factory=dict)
    error: ErrorDetail | None = None

    def usd_rate(self, currency: str) -> Decimal:
        rate = self.quotes.get(f"{USD}{currency}")
        if not rate:
            raise RateNotFoundError(USD, currency, self.provider)
        return rate

    def cross_rate(self, source: str, target: str) -> Decimal:
        source, target = normalize_currency(source), normalize_currency(target)
        if source == target:
            return ONE
        if source == USD:
            return self.usd_rate(target)

        # source -> USD -> target
        try:
            usd_source = self.usd_rate(source)
            usd_target = self.usd_rate(target)
        except RateNotFoundError as e:
            raise RateNotFoundError(source, target, self.provider) from e
        return usd_target / usd_source

    def convert(self, amount: Decimal, source: str, target: str) -> Decimal:
        return amount * self.cross_rate(source, target)
