from datetime import datetime, timedelta, timezone
from decimal import Decimal


class FakeClock:
    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += timedelta(milliseconds=ms)


class MutablePriceResolver:
    def __init__(self, prices: dict):
        self.prices = {k: Decimal(str(v)) for k, v in prices.items()}
        self.calls = []

    def resolve(self, sku: str) -> Decimal:
        self.calls.append(sku)
        return self.prices[sku]
