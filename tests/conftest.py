"""
Shared fixtures: transactions and httpx clients backed by stub rate servers.
"""

from datetime import date
from decimal import Decimal

import httpx
import pytest

from domain.models.statement import Transaction


@pytest.fixture
def make_transaction():
    def _make(description="transaction1", day=date(2025, 1, 1), amount="100", currency="SEK"):
        return Transaction(
            description=description,
            date=day,
            amount=Decimal(amount),
            currency=currency,
        )

    return _make


@pytest.fixture
def stub_client():
    """Build an AsyncClient whose requests are answered by ``handler(request)``."""
    def _make(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make
