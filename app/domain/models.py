# app/domain/models.py
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List


@dataclass
class BasketItem:
    id: str
    sku: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


@dataclass
class BasketTotals:
    subtotal: Decimal = Decimal("0")
    item_count: int = 0


@dataclass
class Basket:
    id: str
    created_at: datetime
    last_accessed_at: datetime
    items: List[BasketItem] = field(default_factory=list)
    totals: BasketTotals = field(default_factory=BasketTotals)

    def find_item(self, item_id: str) -> BasketItem | None:
        return next((i for i in self.items if i.id == item_id), None)

    def find_item_by_sku(self, sku: str) -> BasketItem | None:
        return next((i for i in self.items if i.sku == sku), None)
