# app/api/routers/health.py
from fastapi import APIRouter, Depends

from app.api.dependencies import get_store
from app.domain.schemas import HealthOut
from app.repos.basket_store import BasketStore

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health(store: BasketStore = Depends(get_store)):
    return HealthOut(status="ok", baskets=len(store))
