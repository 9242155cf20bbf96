# app/repos/basket_store.py
import copy
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone, timedelta
from decimal import Decimal
from typing import Callable, Dict, Iterator, Tuple

from app.domain.errors import CartError, CartErrorKind
from app.domain.models import Basket, BasketItem, BasketTotals
from app.services.pricing import PriceResolver

DEFAULT_EXPIRY_WINDOW = timedelta(minutes=15)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class _Entry:
    __slots__ = ("basket", "lock")

    def __init__(self, basket: Basket):
        self.basket = basket
        self.lock = threading.Lock()


class BasketStore:
    """
    Koszyki w pamieci z przesuwanym wygasaniem (sliding expiry).

    - kazdy udany odczyt/zmiana przedluza zycie koszyka (touch)
    - wygasly koszyk usuwany jest leniwie, przy probie dostepu
    - operacje na jednym koszyku sa serializowane przez lock koszyka,
      rozne koszyki nie blokuja sie nawzajem
    - zwracany jest zawsze snapshot, nie obiekt trzymany w mapie
    """

    def __init__(
        self,
        price_resolver: PriceResolver,
        expiry_window: timedelta = DEFAULT_EXPIRY_WINDOW,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.price_resolver = price_resolver
        self.expiry_window = expiry_window
        self.clock = clock
        self._baskets: Dict[str, _Entry] = {}
        self._map_lock = threading.Lock()

    def __len__(self) -> int:
        with self._map_lock:
            return len(self._baskets)

    #query
    def get_basket(self, basket_id: str) -> Basket:
        with self._checkout(basket_id) as (basket, now):
            return self._touch_and_snapshot(basket, now)

    #commands
    def create_basket(self) -> Basket:
        now = self.clock()
        basket = Basket(id=str(uuid.uuid4()), created_at=now, last_accessed_at=now)
        with self._map_lock:
            self._baskets[basket.id] = _Entry(basket)
        return copy.deepcopy(basket)

    def add_item(self, basket_id: str, sku: str, quantity: int) -> Basket:
        """
        Dodaje SKU do koszyka albo zwieksza ilosc istniejacej pozycji.
        Cena jest pobierana tylko dla nowego SKU i poza lockiem koszyka.
        """
        #walidacja ilosci przed sprawdzeniem koszyka
        if quantity <= 0:
            raise CartError(
                CartErrorKind.INVALID_ITEM_QUANTITY, "Quantity must be greater than zero"
            )

        with self._checkout(basket_id) as (basket, now):
            if basket.find_item_by_sku(sku) is not None:
                return self._upsert_item(basket, now, sku, quantity, None)

        unit_price = self.price_resolver.resolve(sku)

        #koszyk mogl wygasnac albo dostac ten sam SKU w miedzyczasie
        with self._checkout(basket_id) as (basket, now):
            return self._upsert_item(basket, now, sku, quantity, unit_price)

    def update_item_quantity(self, basket_id: str, item_id: str, quantity: int) -> Basket:
        """Ustawia ilosc pozycji, 0 usuwa pozycje z koszyka."""
        if quantity < 0:
            raise CartError(
                CartErrorKind.INVALID_ITEM_QUANTITY, "Quantity must not be negative"
            )

        with self._checkout(basket_id) as (basket, now):
            item = self._require_item(basket, item_id)

            if quantity == 0:
                basket.items.remove(item)
            else:
                item.quantity = quantity
                item.total_price = item.unit_price * item.quantity

            basket.totals = self._calculate_totals(basket)
            return self._touch_and_snapshot(basket, now)

    def remove_item(self, basket_id: str, item_id: str) -> Basket:
        with self._checkout(basket_id) as (basket, now):
            item = self._require_item(basket, item_id)
            basket.items.remove(item)
            basket.totals = self._calculate_totals(basket)
            return self._touch_and_snapshot(basket, now)

    def purge_expired(self) -> int:
        """Usuwa wszystkie wygasle koszyki, zwraca ich liczbe."""
        with self._map_lock:
            entries = list(self._baskets.items())

        purged = 0
        for basket_id, entry in entries:
            with entry.lock:
                if not self._is_expired(entry.basket, self.clock()):
                    continue
                with self._map_lock:
                    if self._baskets.get(basket_id) is entry:
                        del self._baskets[basket_id]
                        purged += 1
        return purged

    # =====================================================
    # INTERNALS
    # =====================================================
    @contextmanager
    def _checkout(self, basket_id: str) -> Iterator[Tuple[Basket, datetime]]:
        """
        Sprawdzenie dostepnosci koszyka wykonywane pod lockiem koszyka.
        Zwraca koszyk i jeden odczyt zegara uzywany do sprawdzenia i touch.
        """
        with self._map_lock:
            entry = self._baskets.get(basket_id)
        if entry is None:
            raise CartError(CartErrorKind.BASKET_NOT_FOUND, f"Basket {basket_id} not found")

        with entry.lock:
            #wpis mogl zostac usuniety zanim dostalismy lock
            with self._map_lock:
                current = self._baskets.get(basket_id)
            if current is not entry:
                raise CartError(CartErrorKind.BASKET_NOT_FOUND, f"Basket {basket_id} not found")

            now = self.clock()
            if self._is_expired(entry.basket, now):
                with self._map_lock:
                    self._baskets.pop(basket_id, None)
                raise CartError(CartErrorKind.BASKET_EXPIRED, f"Basket {basket_id} is expired")

            yield entry.basket, now

    def _is_expired(self, basket: Basket, now: datetime) -> bool:
        return now - basket.last_accessed_at > self.expiry_window

    def _upsert_item(
        self,
        basket: Basket,
        now: datetime,
        sku: str,
        quantity: int,
        unit_price: Decimal | None,
    ) -> Basket:
        existing = basket.find_item_by_sku(sku)

        if existing:
            #cena zablokowana przy pierwszym dodaniu
            existing.quantity += quantity
            existing.total_price = existing.unit_price * existing.quantity
        else:
            basket.items.append(
                BasketItem(
                    id=str(uuid.uuid4()),
                    sku=sku,
                    quantity=quantity,
                    unit_price=unit_price,
                    total_price=unit_price * quantity,
                )
            )

        basket.totals = self._calculate_totals(basket)
        return self._touch_and_snapshot(basket, now)

    @staticmethod
    def _require_item(basket: Basket, item_id: str) -> BasketItem:
        item = basket.find_item(item_id)
        if item is None:
            raise CartError(CartErrorKind.ITEM_NOT_FOUND, "Item does not exist in the basket")
        return item

    @staticmethod
    def _calculate_totals(basket: Basket) -> BasketTotals:
        return BasketTotals(
            subtotal=sum((i.total_price for i in basket.items), Decimal("0")),
            item_count=sum(i.quantity for i in basket.items),
        )

    @staticmethod
    def _touch_and_snapshot(basket: Basket, now: datetime) -> Basket:
        #zegar moze sie cofnac, last_accessed_at nie
        basket.last_accessed_at = max(basket.last_accessed_at, now)
        return copy.deepcopy(basket)
