import logging
from datetime import date

import httpx

from infrastructure.providers.base import RateProvider, split_api_url
from infrastructure.providers.responses import DailyRatesResponse

logger = logging.getLogger(__name__)


class ExchangeAPIProvider(RateProvider):
    """Free daily-rate tables served from a date-partitioned CDN."""

    DEFAULT_HOST = "currency-api.pages.dev/v1/currencies"

    def __init__(
        self,
        api_url: str = "",
        client: httpx.AsyncClient | None = None,
        timeout: float = 10,
        retry_attempts: int = 3,
        retry_backoff: float = 0.5,
    ):
        self.schema, self.host = split_api_url(api_url, self.DEFAULT_HOST)
        self._custom = bool(api_url)
        super().__init__(
            client=client,
            timeout=timeout,
            retry_attempts=retry_attempts,
            retry_backoff=retry_backoff,
        )

    @property
    def name(self) -> str:
        return "exchangeapi"

    def build_url(self, day: date, target_currency: str) -> str:
        currency = self._require_currency(target_currency).lower()
        # Configured hosts (stub servers, mirrors) are never date-partitioned.
        if self._custom:
            return f"{self.schema}://{self.host}/{currency}.json"
        return f"{self.schema}://{day:%Y-%m-%d}.{self.host}/{currency}.json"

    async def fetch_rates(self, day: date, target_currency: str, currencies: list[str]) -> DailyRatesResponse:
        # The whole table for the target is fetched; currencies are looked up afterwards.
        url = self.build_url(day, target_currency)
        body = await self._fetch(url)
        rates = self._decode(body, DailyRatesResponse, url=url)
        logger.debug(f"Fetched {self.name} rate tables {sorted(rates.rates)} for {day}")
        return rates
