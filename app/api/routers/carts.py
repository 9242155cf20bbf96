#app/api/routers/carts.py
from fastapi import APIRouter, Depends

from app.api.dependencies import get_store, rate_limit, verify_api_key
from app.domain.schemas import CartOut, ErrorOut, ItemIn, QuantityIn
from app.repos.basket_store import BasketStore

router = APIRouter(
    prefix="/cart",
    tags=["cart"],
    dependencies=[Depends(rate_limit), Depends(verify_api_key)],
    responses={
        400: {"model": ErrorOut},
        401: {"model": ErrorOut},
        404: {"model": ErrorOut},
        429: {"model": ErrorOut},
    },
)


@router.post("", response_model=CartOut, status_code=201)
def create_cart(store: BasketStore = Depends(get_store)):
    return CartOut.from_basket(store.create_basket())


@router.get("/{cart_id}", response_model=CartOut)
def get_cart(cart_id: str, store: BasketStore = Depends(get_store)):
    return CartOut.from_basket(store.get_basket(cart_id))


@router.post(
    "/{cart_id}/items",
    response_model=CartOut,
    status_code=202,
    responses={422: {"model": ErrorOut}},
)
def add_item(cart_id: str, payload: ItemIn, store: BasketStore = Depends(get_store)):
    """Dodaje SKU do koszyka, ten sam SKU zwieksza ilosc istniejacej pozycji."""
    basket = store.add_item(cart_id, payload.sku, payload.quantity)
    return CartOut.from_basket(basket)


@router.put("/{cart_id}/items/{item_id}", response_model=CartOut)
def update_item_quantity(
    cart_id: str,
    item_id: str,
    payload: QuantityIn,
    store: BasketStore = Depends(get_store),
):
    """Zmiana ilosci, 0 usuwa pozycje."""
    basket = store.update_item_quantity(cart_id, item_id, payload.quantity)
    return CartOut.from_basket(basket)


@router.delete("/{cart_id}/items/{item_id}", response_model=CartOut)
def remove_item(cart_id: str, item_id: str, store: BasketStore = Depends(get_store)):
    return CartOut.from_basket(store.remove_item(cart_id, item_id))
