import json
import logging
from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Protocol, TypeVar
from urllib.parse import urlsplit

import httpx
from pydantic import BaseModel, ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from domain.exceptions.conversion import (
    ConfigurationError,
    ProviderHTTPError,
    ProviderUnreachableError,
    ResponseParseError,
)
from domain.models.statement import normalize_currency

logger = logging.getLogger(__name__)

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


class RateTable(Protocol):
    """Rates fetched for a single date, able to convert between currencies."""

    def cross_rate(self, source: str, target: str) -> Decimal:
        ...

    def convert(self, amount: Decimal, source: str, target: str) -> Decimal:
        ...


def split_api_url(api_url: str, default_host: str) -> tuple[str, str]:
    """Return (schema, host) for a provider, falling back to the default https host."""
    if not api_url:
        return "https", default_host

    parsed = urlsplit(api_url)
    if not parsed.scheme or not parsed.netloc:
        raise ConfigurationError(f"invalid API URL: {api_url!r}")

    return parsed.scheme, f"{parsed.netloc}{parsed.path.rstrip('/')}"


class RateProvider(ABC):
    """Base class for exchange-rate providers, handling common HTTP logic."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10,
        retry_attempts: int = 3,
        retry_backoff: float = 0.5,
    ):
        self.timeout = timeout
        self.retry_attempts = max(retry_attempts, 1)
        self.retry_backoff = retry_backoff
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def build_url(self, day: date, target_currency: str) -> str:
        ...

    @abstractmethod
    async def fetch_rates(self, day: date, target_currency: str, currencies: list[str]) -> RateTable:
        ...

    def _require_currency(self, code: str) -> str:
        code = normalize_currency(code)
        if len(code) != 3 or not code.isalpha():
            raise ConfigurationError(f"{self.name}: invalid target currency {code!r}")
        return code

    async def _fetch(self, url: str, params: dict | None = None) -> bytes:
        """GET the url, retrying only when the provider could not be reached."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=self.retry_backoff, max=10),
            retry=retry_if_exception_type(ProviderUnreachableError),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._get(url, params)

    async def _get(self, url: str, params: dict | None) -> bytes:
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()  # Raises HTTPStatusError for non-2xx

        except httpx.HTTPStatusError as e:
            raise ProviderHTTPError(
                self.name,
                f"HTTP error {e.response.status_code}: {e.response.text[:200]}",
                status_code=e.response.status_code,
                url=url,
            ) from e
        except httpx.RequestError as e:
            logger.debug(f"{self.name} request to {url} failed: {e!r}")
            raise ProviderUnreachableError(
                self.name, f"request failed: {e.__class__.__name__}", url=url
            ) from e

        return response.content

    def _decode(self, body: bytes, model: type[ResponseModel], url: str | None = None) -> ResponseModel:
        try:
            data = json.loads(body, parse_float=Decimal)
            return model.model_validate(data)
        except (ValueError, ValidationError) as e:
            raise ResponseParseError(self.name, f"response parsing error: {e}", url=url) from e

    async def close(self) -> None:
        await self._client.aclose()

    def __repr__(self):
        return f"<{self.__class__.__name__}(name={self.name})>"
