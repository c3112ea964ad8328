"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from dex.accounts import AccountBook, reset_default_accounts
from dex.api.endpoints import get_accounts, get_exchange
from dex.api.main import app
from dex.exchange import Exchange
from dex.pools import Pool, PoolRegistry, reset_registry
from tests.helpers import make_pool


@pytest.fixture(autouse=True)
def fresh_globals() -> Iterator[None]:
    """Give every test its own process-wide registry and account book."""
    reset_registry()
    reset_default_accounts()
    yield
    reset_registry()
    reset_default_accounts()


@pytest.fixture
def registry() -> PoolRegistry:
    return PoolRegistry(registry_id="test-registry")


@pytest.fixture
def exchange(registry: PoolRegistry) -> Exchange:
    return Exchange(registry)


@pytest.fixture
def accounts() -> AccountBook:
    return AccountBook()


@pytest.fixture
def funded_pool() -> Pool:
    """BTC/USDC pool with reserves 10_000 / 20_000 and a 0.3% fee."""
    return make_pool()


@pytest.fixture
def client(exchange: Exchange, accounts: AccountBook) -> Iterator[TestClient]:
    """API test client wired to the test exchange and account book."""
    app.dependency_overrides[get_exchange] = lambda: exchange
    app.dependency_overrides[get_accounts] = lambda: accounts
    yield TestClient(app)
    app.dependency_overrides.clear()
