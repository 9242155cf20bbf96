# app/domain/schemas.py
from decimal import Decimal
from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, StrictInt
from pydantic.alias_generators import to_camel

from app.domain.models import Basket

#kwoty w JSON jako liczby, nie stringi
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    model_config = ConfigDict(extra="forbid")

    sku: str = Field(..., min_length=1, description="SKU produktu")
    #ilosc <= 0 odrzuca store, nie schema
    quantity: StrictInt = Field(..., description="Ilość produktu")


class QuantityIn(BaseModel):
    """Schema dla zmiany ilości pozycji."""

    model_config = ConfigDict(extra="forbid")

    quantity: StrictInt = Field(..., description="Nowa ilość, 0 usuwa pozycję")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CartItemOut(_CamelModel):
    """Schema dla pozycji w koszyku (response)."""

    item_id: str
    sku: str
    quantity: int
    unit_price: Money
    total_price: Money


class TotalsOut(_CamelModel):
    subtotal: Money
    item_count: int


class CartOut(_CamelModel):
    """Schema dla koszyka (response)."""

    cart_id: str
    items: List[CartItemOut]
    totals: TotalsOut

    @classmethod
    def from_basket(cls, basket: Basket) -> "CartOut":
        return cls(
            cart_id=basket.id,
            items=[
                CartItemOut(
                    item_id=i.id,
                    sku=i.sku,
                    quantity=i.quantity,
                    unit_price=i.unit_price,
                    total_price=i.total_price,
                )
                for i in basket.items
            ],
            totals=TotalsOut(
                subtotal=basket.totals.subtotal,
                item_count=basket.totals.item_count,
            ),
        )


class ErrorOut(BaseModel):
    error: str
    message: str


class HealthOut(BaseModel):
    status: str
    baskets: int
