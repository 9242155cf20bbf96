# app/services/pricing.py
import threading
from decimal import Decimal, InvalidOperation
from typing import Dict, Mapping, Protocol

from requests import HTTPError, RequestException

from app.domain.errors import CartError, CartErrorKind
from app.services.product_client import ProductClient
from app.utils.settings import PRICING_SOURCE, DEFAULT_UNIT_PRICE
from app.utils.logging import get_logger

logger = get_logger(__name__)


class PriceResolver(Protocol):
    def resolve(self, sku: str) -> Decimal:
        """Zwraca cene jednostkowa SKU albo rzuca CartError(SKU_UNPRICEABLE)."""
        ...


def _unpriceable(sku: str) -> CartError:
    return CartError(CartErrorKind.SKU_UNPRICEABLE, f"SKU {sku} cannot be priced")


def to_price(value) -> Decimal:
    price = Decimal(str(value))
    if not price.is_finite() or price < 0:
        raise InvalidOperation(f"invalid price {value!r}")
    return price


class CatalogPriceResolver:
    """
    Stala tabela cen w pamieci.
    Nieznany SKU dostaje cene domyslna, a bez niej jest niewyceniany.
    """

    def __init__(
        self,
        prices: Mapping[str, object] | None = None,
        default_price: object | None = None,
    ):
        self.prices = {sku: to_price(p) for sku, p in (prices or {}).items()}
        self.default_price = None if default_price is None else to_price(default_price)

    def resolve(self, sku: str) -> Decimal:
        if sku in self.prices:
            return self.prices[sku]
        if self.default_price is not None:
            return self.default_price
        raise _unpriceable(sku)


class ProductServicePriceResolver:
    """
    Ceny z product-service przez HTTP.
    Raz pobrana cena SKU jest trzymana do konca zycia procesu.
    """

    def __init__(self, client: ProductClient | None = None):
        self.client = client or ProductClient()
        self._cache: Dict[str, Decimal] = {}
        self._lock = threading.Lock()

    def resolve(self, sku: str) -> Decimal:
        with self._lock:
            cached = self._cache.get(sku)
        if cached is not None:
            return cached

        try:
            pdata = self.client.fetch_product(sku)
        except HTTPError as e:
            logger.warning(f"product-service rejected SKU {sku}: {e}")
            raise _unpriceable(sku) from e
        except RequestException as e:
            logger.error(f"product-service unavailable while pricing SKU {sku}: {e}")
            raise _unpriceable(sku) from e

        if pdata is None:
            raise _unpriceable(sku)

        try:
            price = to_price(pdata["price"])
        except (KeyError, TypeError, InvalidOperation) as e:
            logger.error(f"product-service returned no usable price for SKU {sku}")
            raise _unpriceable(sku) from e

        with self._lock:
            #pierwsza zapisana cena wygrywa
            return self._cache.setdefault(sku, price)


def build_price_resolver(source: str = PRICING_SOURCE) -> PriceResolver:
    if source == "product-service":
        logger.info("Pricing SKUs via product-service")
        return ProductServicePriceResolver()

    default = DEFAULT_UNIT_PRICE or None
    logger.info(f"Pricing SKUs from static catalog, default price {default}")
    return CatalogPriceResolver(default_price=default)
