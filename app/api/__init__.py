# app/api/__init__.py
import asyncio
import contextlib
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI

from app.api.errors import register_error_handlers
from app.api.routers import carts, health
from app.repos.basket_store import BasketStore
from app.services.pricing import build_price_resolver
from app.services.rate_limiter import RateLimiter
from app.tasks.expire import run_expiry_sweeper
from app.utils.settings import (
    API_KEY,
    API_PREFIX,
    CART_EXPIRY_MS,
    CART_SWEEP_INTERVAL_SECONDS,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)


def create_app(
    store: BasketStore | None = None,
    rate_limiter: RateLimiter | None = None,
    api_key: str = API_KEY,
    sweep_interval_seconds: float = CART_SWEEP_INTERVAL_SECONDS,
) -> FastAPI:
    if store is None:
        store = BasketStore(
            price_resolver=build_price_resolver(),
            expiry_window=timedelta(milliseconds=CART_EXPIRY_MS),
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper = None
        if sweep_interval_seconds > 0:
            sweeper = asyncio.create_task(
                run_expiry_sweeper(app.state.basket_store, sweep_interval_seconds)
            )
        yield
        if sweeper is not None:
            sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sweeper

    app = FastAPI(
        title="Basket Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.basket_store = store
    app.state.rate_limiter = rate_limiter or RateLimiter()
    app.state.api_key = api_key

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(carts.router, prefix=API_PREFIX)

    logger.info(f"Basket Service ready, cart expiry {store.expiry_window}")
    return app
