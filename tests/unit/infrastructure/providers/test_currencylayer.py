# nosec B101


import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import Mock, AsyncMock
import httpx

from infrastructure.providers.currencylayer import CurrencyLayerProvider
from domain.exceptions.conversion import (
    ConfigurationError,
    ProviderErrorKind,
    ProviderHTTPError,
    ProviderRejectedError,
    ProviderUnreachableError,
    ResponseParseError,
)

DAY = date(2025, 1, 1)

SUCCESS_BODY = b'''{
    "success": true,
    "terms": "https://currencylayer.com/terms",
    "privacy": "https://currencylayer.com/privacy",
    "historical": true,
    "date": "1735689600",
    "source": "USD",
    "quotes": {
        "USDSEK": 11.24233239,
        "USDEUR": 1.0
    }
}'''


def mock_client_returning(body: bytes):
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_response = Mock()
    mock_response.content = body
    mock_response.raise_for_status = Mock()
    mock_client.get.return_value = mock_response
    return mock_client


def test_api_key_is_required():
    with pytest.raises(ConfigurationError):
        CurrencyLayerProvider(api_key='')


def test_default_url_is_https_historical_endpoint():
    provider = CurrencyLayerProvider(api_key='some-key', client=AsyncMock(spec=httpx.AsyncClient))

    assert provider.build_url(DAY, 'EUR') == 'https://api.currencylayer.com/historical'


def test_custom_url_keeps_scheme_and_host():
    provider = CurrencyLayerProvider(
        api_key='some-key', api_url='http://127.0.0.1:8080', client=AsyncMock(spec=httpx.AsyncClient)
    )

    assert provider.build_url(DAY, 'EUR') == 'http://127.0.0.1:8080'


def test_invalid_custom_url():
    with pytest.raises(ConfigurationError):
        CurrencyLayerProvider(api_key='some-key', api_url='not a url')


def test_empty_target_currency_fails_url_construction():
    provider = CurrencyLayerProvider(api_key='some-key', client=AsyncMock(spec=httpx.AsyncClient))

    with pytest.raises(ConfigurationError):
        provider.build_url(DAY, '')


@pytest.mark.asyncio
async def test_fetch_rates_sends_key_date_and_currencies():
    mock_client = mock_client_returning(SUCCESS_BODY)
    provider = CurrencyLayerProvider(api_key='some-key', client=mock_client)

    quotes = await provider.fetch_rates(DAY, 'EUR', ['SEK', 'SEK', 'usd'])

    assert quotes.source == 'USD'
    assert quotes.quotes['USDSEK'] == Decimal('11.24233239')
    mock_client.get.assert_called_once()
    call_args = mock_client.get.call_args
    assert call_args[0][0] == 'https://api.currencylayer.com/historical'
    assert call_args[1]['params'] == {
        'access_key': 'some-key',
        'date': '2025-01-01',
        'currencies': 'EUR,SEK,USD',
    }


@pytest.mark.asyncio
async def test_fetch_rates_rejects_non_usd_source():
    body = SUCCESS_BODY.replace(b'"source": "USD"', b'"source": "EUR"')
    provider = CurrencyLayerProvider(api_key='some-key', client=mock_client_returning(body))

    with pytest.raises(ConfigurationError) as exc_info:
        await provider.fetch_rates(DAY, 'EUR', ['SEK'])

    assert 'Expected USD source, got EUR' in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_rates_api_returns_error(caplog):
    body = b'{"success": false, "error": {"code": 101, "type": "invalid_access_key", "info": "Invalid API key"}}'
    provider = CurrencyLayerProvider(api_key='invalid_key', client=mock_client_returning(body))

    with pytest.raises(ProviderRejectedError) as exc_info:
        await provider.fetch_rates(DAY, 'EUR', ['SEK'])

    assert 'Invalid API key' in str(exc_info.value)
    assert exc_info.value.kind is ProviderErrorKind.REJECTED
    assert exc_info.value.provider == 'currencylayer'
    assert 'rejected request for 2025-01-01: Invalid API key' in caplog.text


@pytest.mark.asyncio
async def test_fetch_rates_http_500_error():
    mock_client = AsyncMock(spec=httpx.AsyncClient)

    error_response = Mock()
    error_response.status_code = 500
    error_response.text = 'Internal Server Error'

    mock_client.get.side_effect = httpx.HTTPStatusError(
        'Server error',
        request=Mock(),
        response=error_response
    )

    provider = CurrencyLayerProvider(api_key='some-key', client=mock_client, retry_backoff=0)

    with pytest.raises(ProviderHTTPError) as exc_info:
        await provider.fetch_rates(DAY, 'EUR', ['SEK'])

    assert exc_info.value.status_code == 500
    assert 'HTTP error 500' in str(exc_info.value)
    # HTTP errors are answers, not outages: no retry
    assert mock_client.get.call_count == 1


@pytest.mark.asyncio
async def test_fetch_rates_connection_error_is_retried():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.side_effect = httpx.ConnectError('Connection refused')
    provider = CurrencyLayerProvider(
        api_key='some-key', client=mock_client, retry_attempts=3, retry_backoff=0
    )

    with pytest.raises(ProviderUnreachableError) as exc_info:
        await provider.fetch_rates(DAY, 'EUR', ['SEK'])

    assert 'request failed' in str(exc_info.value).lower()
    assert mock_client.get.call_count == 3


@pytest.mark.asyncio
async def test_fetch_rates_recovers_after_timeout():
    mock_client = mock_client_returning(SUCCESS_BODY)
    ok_response = mock_client.get.return_value
    mock_client.get.side_effect = [httpx.TimeoutException('Request timed out'), ok_response]
    provider = CurrencyLayerProvider(api_key='some-key', client=mock_client, retry_backoff=0)

    quotes = await provider.fetch_rates(DAY, 'EUR', ['SEK'])

    assert quotes.quotes['USDEUR'] == Decimal('1.0')
    assert mock_client.get.call_count == 2


@pytest.mark.asyncio
async def test_fetch_rates_invalid_json_response():
    provider = CurrencyLayerProvider(api_key='some-key', client=mock_client_returning(b'<html>oops'))

    with pytest.raises(ResponseParseError) as exc_info:
        await provider.fetch_rates(DAY, 'EUR', ['SEK'])

    assert 'parsing error' in str(exc_info.value).lower()
    assert exc_info.value.kind is ProviderErrorKind.PARSE
