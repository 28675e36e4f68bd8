from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext

from domain.exceptions.conversion import ProviderError

USD = "USD"
SEK = "SEK"
EUR = "EUR"

CENTS = Decimal("0.01")


def round_amount(value: Decimal) -> Decimal:
    """Round a converted amount to cents, halves away from zero."""
    with localcontext() as ctx:
        # Room for every integer digit plus the cents.
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def normalize_currency(code: str) -> str:
    return (code or "").strip().upper()


@dataclass(frozen=True)
class Transaction:
    description: str
    date: date
    amount: Decimal
    currency: str

    def converted_to(self, currency: str, amount: Decimal) -> "Transaction":
        return Transaction(
            description=self.description,
            date=self.date,
            amount=amount,
            currency=currency,
        )


@dataclass
class Document:
    transactions: list[Transaction] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.transactions)

    def __iter__(self):
        return iter(self.transactions)


@dataclass
class ConversionResult:
    converted: Document
    failed: Document
    errors: list[ProviderError] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.converted) + len(self.failed)
