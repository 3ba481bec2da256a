"""
Configuration centralisée du logging pour le bot Discord.

Objectifs :
- Un seul setup idempotent (pas de handlers en double)
- Suppression des rafales de messages identiques (ex : reconnexions gateway)
- Format et niveau configurables via LOG_FORMAT / LOG_LEVEL
- Loggers bavards de discord.py plafonnés à WARNING
"""
from __future__ import annotations

import logging
import os
import threading
import time

_INITIALIZED = False

DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_FORMAT = os.getenv("LOG_FORMAT", '[%(asctime)s] %(levelname)s %(name)s: %(message)s')
NOISY_LOGGERS = ("discord.http", "discord.gateway", "discord.client")


class _BurstFilter(logging.Filter):
    """Laisse passer un message identique au plus une fois par fenêtre (secondes)."""

    def __init__(self, window: float = 10.0):
        super().__init__()
        self.window = window
        self._lock = threading.Lock()
        self._last_seen: dict[tuple[str, int, str], float] = {}

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        # Les exceptions passent toujours (stack trace utile)
        if record.exc_info:
            return True
        key = (record.name, record.levelno, record.getMessage())
        now = time.monotonic()
        with self._lock:
            last = self._last_seen.get(key)
            if last is not None and now - last < self.window:
                return False
            self._last_seen[key] = now
            if len(self._last_seen) > 5000:
                self._last_seen.clear()
        return True


def setup_logging(force: bool = False) -> None:
    global _INITIALIZED
    if _INITIALIZED and not force:
        return

    root = logging.getLogger()
    if force:
        for h in list(root.handlers):
            root.removeHandler(h)
    if not root.handlers:
        root.addHandler(logging.StreamHandler())
    formatter = logging.Formatter(DEFAULT_FORMAT)
    for h in root.handlers:
        h.setFormatter(formatter)
        if not any(isinstance(f, _BurstFilter) for f in h.filters):
            h.addFilter(_BurstFilter())
    root.setLevel(getattr(logging, DEFAULT_LEVEL, logging.INFO))
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    _INITIALIZED = True


__all__ = ["setup_logging"]
