import pytest

from application.services.conversion_service import ConversionService
from application.services.fallback_service import FallbackConverter
from application.services.service_factory import ServiceFactory
from config.settings import Settings
from infrastructure.providers import CurrencyLayerProvider, ExchangeAPIProvider


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        EXCHANGEAPI_URL="http://rates.test",
        CURRENCYLAYER_API_KEY="",
        REQUEST_TIMEOUT=2,
        RETRY_ATTEMPTS=1,
        MAX_CONCURRENT_BUCKETS=3,
    )


@pytest.mark.asyncio
async def test_single_provider_without_currencylayer_key(settings):
    factory = ServiceFactory(settings)

    converter = factory.create_converter()

    assert isinstance(converter, ConversionService)
    assert isinstance(converter.provider, ExchangeAPIProvider)
    assert converter.max_concurrency == 3
    assert converter.provider.host == "rates.test"
    assert list(factory.providers) == ["exchangeapi"]
    await factory.cleanup()


@pytest.mark.asyncio
async def test_fallback_when_currencylayer_key_given(settings):
    factory = ServiceFactory(settings)

    converter = factory.create_converter(currencylayer_key="some-key")

    assert isinstance(converter, FallbackConverter)
    assert isinstance(converter.primary.provider, ExchangeAPIProvider)
    assert isinstance(converter.secondary.provider, CurrencyLayerProvider)
    assert converter.secondary.provider.api_key == "some-key"
    assert list(factory.providers) == ["exchangeapi", "currencylayer"]

    await factory.cleanup()
    assert factory.providers == {}
