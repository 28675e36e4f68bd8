import logging
from datetime import date

import httpx

from domain.exceptions.conversion import ConfigurationError, ProviderRejectedError
from domain.models.statement import USD, normalize_currency
from infrastructure.providers.base import RateProvider, split_api_url
from infrastructure.providers.responses import HistoricalQuotesResponse

logger = logging.getLogger(__name__)


class CurrencyLayerProvider(RateProvider):
    """Historical USD-anchored quotes, authenticated with an access key."""

    DEFAULT_HOST = "api.currencylayer.com/historical"

    def __init__(
        self,
        api_key: str,
        api_url: str = "",
        client: httpx.AsyncClient | None = None,
        timeout: float = 10,
        retry_attempts: int = 3,
        retry_backoff: float = 0.5,
    ):
        if not api_key:
            raise ConfigurationError("API key must be provided for CurrencyLayer API")
        self.api_key = api_key
        self.schema, self.host = split_api_url(api_url, self.DEFAULT_HOST)
        super().__init__(
            client=client,
            timeout=timeout,
            retry_attempts=retry_attempts,
            retry_backoff=retry_backoff,
        )

    @property
    def name(self) -> str:
        return "currencylayer"

    def build_url(self, day: date, target_currency: str) -> str:
        self._require_currency(target_currency)
        return f"{self.schema}://{self.host}"

    def build_params(self, day: date, target_currency: str, currencies: list[str]) -> dict:
        codes = {normalize_currency(c) for c in currencies if c}
        codes.add(normalize_currency(target_currency))
        return {
            "access_key": self.api_key,
            "date": day.strftime("%Y-%m-%d"),
            "currencies": ",".join(sorted(codes)),
        }

    async def fetch_rates(self, day: date, target_currency: str, currencies: list[str]) -> HistoricalQuotesResponse:
        url = self.build_url(day, target_currency)
        body = await self._fetch(url, self.build_params(day, target_currency, currencies))
        quotes = self._decode(body, HistoricalQuotesResponse, url=url)

        if not quotes.success:
            info = quotes.error.info if quotes.error and quotes.error.info else "Unknown error"
            logger.warning(f"{self.name} rejected request for {day}: {info}")
            raise ProviderRejectedError(self.name, f"API error: {info}", url=url)

        # Cross rates are computed through USD, any other anchor breaks the math.
        if quotes.source != USD:
            raise ConfigurationError(
                f"unexpected currency response from {self.name}. Expected {USD} source, got {quotes.source}"
            )

        return quotes
