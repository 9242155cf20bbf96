# app/services/rate_limiter.py
import threading
import time
from typing import Callable, Dict, Tuple

from app.utils.settings import RATE_LIMIT_PER_MIN, RATE_LIMIT_WINDOW_MS


class RateLimiter:
    """
    Prosty limiter w pamieci, stale okno per klient (np. IP).
    klucz -> (licznik, poczatek okna w ms)
    """

    def __init__(
        self,
        limit: int = RATE_LIMIT_PER_MIN,
        window_ms: float = RATE_LIMIT_WINDOW_MS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window_ms = window_ms
        self.clock = clock
        self._entries: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    def allow(self, key: str) -> bool:
        now_ms = self.clock() * 1000
        with self._lock:
            entry = self._entries.get(key)

            if entry is None or now_ms - entry[1] >= self.window_ms:
                self._entries[key] = (1, now_ms)
                return True

            count, started = entry
            if count >= self.limit:
                return False

            self._entries[key] = (count + 1, started)
            return True

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()
