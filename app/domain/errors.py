# app/domain/errors.py
from enum import Enum


class CartErrorKind(str, Enum):
    """Zamknieta lista bledow domeny koszyka."""

    BASKET_NOT_FOUND = "BASKET_NOT_FOUND"
    BASKET_EXPIRED = "BASKET_EXPIRED"
    INVALID_ITEM_QUANTITY = "INVALID_ITEM_QUANTITY"
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
    SKU_UNPRICEABLE = "SKU_UNPRICEABLE"


class CartError(Exception):
    """
    Jedyny typ wyjatku rzucany przez store i resolver cen.
    Rodzaj bledu niesie `kind`, gateway mapuje go na odpowiedz HTTP.
    """

    def __init__(self, kind: CartErrorKind, message: str | None = None):
        self.kind = kind
        self.message = message or kind.value
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"CartError({self.kind.value}, {self.message!r})"
