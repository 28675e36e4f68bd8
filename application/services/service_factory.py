import logging

from application.services.conversion_service import ConversionService, Converter
from application.services.fallback_service import FallbackConverter
from config.settings import Settings
from infrastructure.providers import CurrencyLayerProvider, ExchangeAPIProvider, RateProvider

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Factory to create and wire the rate providers into a converter"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.providers: dict[str, RateProvider] = {}

    def create_converter(self, currencylayer_key: str | None = None) -> Converter:
        """Daily-rate provider first, historical quotes as fallback when a key is available"""
        settings = self.settings
        primary = ExchangeAPIProvider(
            api_url=settings.EXCHANGEAPI_URL,
            timeout=settings.REQUEST_TIMEOUT,
            retry_attempts=settings.RETRY_ATTEMPTS,
        )
        self.providers[primary.name] = primary
        converter: Converter = ConversionService(primary, max_concurrency=settings.MAX_CONCURRENT_BUCKETS)

        api_key = currencylayer_key or settings.CURRENCYLAYER_API_KEY
        if api_key:
            secondary = CurrencyLayerProvider(
                api_key=api_key,
                api_url=settings.CURRENCYLAYER_URL,
                timeout=settings.REQUEST_TIMEOUT,
                retry_attempts=settings.RETRY_ATTEMPTS,
            )
            self.providers[secondary.name] = secondary
            converter = FallbackConverter(
                primary=converter,
                secondary=ConversionService(secondary, max_concurrency=settings.MAX_CONCURRENT_BUCKETS),
            )

        logger.info(f"Converter created with providers {list(self.providers)}")
        return converter

    async def cleanup(self) -> None:
        """Close HTTP clients"""
        for provider in self.providers.values():
            await provider.close()
        self.providers.clear()
