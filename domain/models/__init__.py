from .statement import (
    EUR,
    SEK,
    USD,
    ConversionResult,
    Document,
    Transaction,
    normalize_currency,
    round_amount,
)

__all__ = [
    "EUR",
    "SEK",
    "USD",
    "ConversionResult",
    "Document",
    "Transaction",
    "normalize_currency",
    "round_amount",
]
