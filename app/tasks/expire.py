# app/tasks/expire.py
import asyncio

from app.repos.basket_store import BasketStore
from app.utils.logging import get_logger

logger = get_logger(__name__)


def expire_carts_task(store: BasketStore) -> int:
    logger.info("Expire carts task started")
    purged = store.purge_expired()
    logger.info(f"Purged {purged} expired carts, {len(store)} remaining")
    return purged


async def run_expiry_sweeper(store: BasketStore, interval_seconds: float) -> None:
    """
    Okresowe czyszczenie wygaslych koszykow.
    Dziala do anulowania taska (zamkniecie aplikacji).
    """
    logger.info(f"Expiry sweeper running every {interval_seconds}s")
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await asyncio.to_thread(expire_carts_task, store)
        except Exception:
            logger.exception("Expire carts task failed")
