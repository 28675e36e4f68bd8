from .base import RateProvider, RateTable
from .currencylayer import CurrencyLayerProvider
from .exchangeapi import ExchangeAPIProvider
from .responses import DailyRatesResponse, HistoricalQuotesResponse

__all__ = [
    'RateProvider',
    'RateTable',
    'CurrencyLayerProvider',
    'ExchangeAPIProvider',
    'DailyRatesResponse',
    'HistoricalQuotesResponse',
]
