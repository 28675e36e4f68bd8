import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from domain.exceptions.conversion import (
    ConversionFailedError,
    EmptyInputError,
    ProviderError,
    RateNotFoundError,
)
from domain.models.statement import ConversionResult, Document, Transaction, normalize_currency, round_amount
from infrastructure.providers.base import RateProvider

logger = logging.getLogger(__name__)


class Converter(Protocol):
    async def convert(self, target_currency: str, document: Document) -> ConversionResult:
        ...


@dataclass
class DateBucket:
    date: date
    transactions: list[Transaction] = field(default_factory=list)
    currencies: set[str] = field(default_factory=set)

    def add(self, transaction: Transaction) -> None:
        self.transactions.append(transaction)
        self.currencies.add(transaction.currency)


@dataclass
class BucketOutcome:
    converted: list[Transaction] = field(default_factory=list)
    failed: list[Transaction] = field(default_factory=list)
    error: ProviderError | None = None


def bucket_by_date(document: Document) -> dict[date, DateBucket]:
    """Group transactions by date, keeping input order inside each bucket."""
    buckets: dict[date, DateBucket] = {}
    for transaction in document:
        bucket = buckets.setdefault(transaction.date, DateBucket(date=transaction.date))
        bucket.add(transaction)
    return dict(sorted(buckets.items()))


class ConversionService:
    """Converts a statement into one currency using a single rate provider.

    Date buckets are fetched concurrently (bounded by ``max_concurrency``) and
    merged in date order once every bucket is done. A ConfigurationError in
    any bucket cancels the buckets still in flight and is re-raised.
    """

    def __init__(self, provider: RateProvider, max_concurrency: int = 4):
        self.provider = provider
        self.max_concurrency = max(max_concurrency, 1)

    @property
    def name(self) -> str:
        return self.provider.name

    async def convert(self, target_currency: str, document: Document) -> ConversionResult:
        if not document.transactions:
            raise EmptyInputError("no transactions to convert")

        target = normalize_currency(target_currency)
        buckets = bucket_by_date(document)
        semaphore = asyncio.Semaphore(self.max_concurrency)

        tasks = [
            asyncio.create_task(self._convert_bucket(bucket, target, semaphore))
            for bucket in buckets.values()
        ]
        try:
            outcomes = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        result = ConversionResult(converted=Document(), failed=Document())
        for outcome in outcomes:
            result.converted.transactions.extend(outcome.converted)
            result.failed.transactions.extend(outcome.failed)
            if outcome.error is not None:
                result.errors.append(outcome.error)

        logger.info(
            f"{self.name}: converted {len(result.converted)} of {len(document)} transactions "
            f"to {target} across {len(buckets)} dates ({len(result.failed)} failed)"
        )

        if not result.converted.transactions and result.errors:
            raise ConversionFailedError(
                f"{self.name}: no transactions converted to {target}, "
                f"{len(result.errors)} of {len(buckets)} dates failed",
                failed=result.failed,
                errors=result.errors,
            ) from result.errors[-1]

        return result

    async def _convert_bucket(self, bucket: DateBucket, target: str, semaphore: asyncio.Semaphore) -> BucketOutcome:
        async with semaphore:
            try:
                rates = await self.provider.fetch_rates(bucket.date, target, sorted(bucket.currencies))
            except ProviderError as e:
                logger.warning(f"Failed to fetch {self.name} rates for {bucket.date}: {e}")
                return BucketOutcome(failed=list(bucket.transactions), error=e)

        outcome = BucketOutcome()
        for transaction in bucket.transactions:
            try:
                amount = rates.convert(transaction.amount, transaction.currency, target)
            except RateNotFoundError as e:
                logger.info(f"Failed to convert {transaction.description!r} on {bucket.date}: {e}")
                outcome.failed.append(transaction)
                continue

            outcome.converted.append(transaction.converted_to(target, round_amount(amount)))

        return outcome
