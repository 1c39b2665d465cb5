"""Service test fixtures — FastAPI test client and account factories.

Invariants:
    - Every test gets fresh Account records (balances mutated in place by the orchestrator)
    - client talks to the ASGI app in-process, no network

Design Decisions:
    - httpx AsyncClient + ASGITransport: exercises routing, schemas and error handlers
      exactly as deployed
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.domain_types import Account
from app.main import app


@pytest.fixture
async def client():
    """FastAPI test client bound to the app."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def make_accounts():
    """Factory for the usual two-account snapshot."""
    def _make(a_balance=500, b_balance=0, a_ccy="USD", b_ccy="USD", a_id="A1", b_id="B1"):
        return [
            Account(id=a_id, balance=a_balance, currency=a_ccy),
            Account(id=b_id, balance=b_balance, currency=b_ccy),
        ]
    return _make
