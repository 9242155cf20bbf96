# app/utils/logging.py
import logging
import sys

from app.utils.settings import LOG_LEVEL

_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
_configured = False


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Konfiguracja root loggera, tylko za pierwszym razem."""
    global _configured
    if _configured:
        return
    _configured = True

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))

    root = logging.getLogger("app")
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
