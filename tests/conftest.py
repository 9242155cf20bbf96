from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from app.api import create_app
from app.repos.basket_store import BasketStore
from app.services.pricing import CatalogPriceResolver
from app.services.rate_limiter import RateLimiter
from tests.helpers import FakeClock

API_KEY = "test-api-key"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def resolver():
    return CatalogPriceResolver(prices={"MOUSE": "49.50"}, default_price=10)


@pytest.fixture
def store(resolver, clock):
    return BasketStore(price_resolver=resolver, clock=clock)


@pytest.fixture
def short_store(resolver, clock):
    return BasketStore(
        price_resolver=resolver, expiry_window=timedelta(milliseconds=1000), clock=clock
    )


@pytest.fixture
def app(short_store):
    return create_app(
        store=short_store,
        rate_limiter=RateLimiter(limit=1000, window_ms=60_000),
        api_key=API_KEY,
        sweep_interval_seconds=0,
    )


@pytest.fixture
def client(app):
    with TestClient(app, headers={"x-api-key": API_KEY}) as c:
        yield c
