# app/api/dependencies.py
import secrets

from fastapi import Request, Security
from fastapi.security import APIKeyHeader

from app.api.errors import ApiError
from app.repos.basket_store import BasketStore
from app.services.rate_limiter import RateLimiter

api_key_header = APIKeyHeader(name="x-api-key", auto_error=False)


def get_store(request: Request) -> BasketStore:
    return request.app.state.basket_store


def rate_limit(request: Request) -> None:
    limiter: RateLimiter = request.app.state.rate_limiter
    key = request.client.host if request.client else "unknown"
    if not limiter.allow(key):
        raise ApiError(429, "RATE_LIMIT_EXCEEDED")


def verify_api_key(request: Request, api_key: str | None = Security(api_key_header)) -> None:
    expected: str = request.app.state.api_key
    if not api_key or not secrets.compare_digest(api_key.encode(), expected.encode()):
        raise ApiError(401, "UNAUTHORIZED")
