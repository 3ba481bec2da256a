"""
Stockage clé/valeur de l'état du bot.

Principes :
- Un pool asyncpg global unique, créé à la demande (`get_pool`)
- Une seule table `bot_state` : une clé texte -> une valeur JSONB
- Sauvegarde = upsert de la valeur complète (le dernier écrivain gagne)
- `MemoryStateStore` : même contrat, en mémoire (sans DATABASE_URL, ou en test)

Les erreurs sont traduites dans la taxonomie de `core.errors` puis propagées
sans retry.
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict

import asyncpg

from core.errors import StateDeserializeError, StateNotFound, StoreUnavailable

logger = logging.getLogger(__name__)

_pool = None

# Pannes de transport : pool fermé, acquisition expirée, connexion perdue
_BACKEND_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS bot_state (
    key TEXT PRIMARY KEY,
    value JSONB NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
"""

SELECT_SQL = "SELECT value FROM bot_state WHERE key=$1"

# Upsert idempotent (remplacement complet de la valeur)
UPSERT_SQL = """
INSERT INTO bot_state(key, value, updated_at)
VALUES($1, $2::jsonb, NOW())
ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value, updated_at = NOW();
"""


async def get_pool(dsn: str):
    """
    Retourne (et crée si nécessaire) le pool asyncpg.
    Args :
        dsn : URL de connexion Postgres
    """
    global _pool
    if _pool is None:
        _pool = await asyncpg.create_pool(dsn, min_size=1, max_size=5)
        logger.info("Pool asyncpg initialisé")
    return _pool


async def ensure_schema(pool: asyncpg.Pool):
    """
    Vérifie et crée le schéma requis si absent.
    """
    async with pool.acquire() as conn:
        await conn.execute(CREATE_TABLE_SQL)
        logger.info("Schéma vérifié (bot_state)")


def _decode(key: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise StateDeserializeError(key, f"Contenu illisible pour {key}: {exc}") from exc


class PostgresStateStore:
    """Stockage persistant adossé à la table `bot_state`."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def load(self, key: str) -> Any:
        try:
            async with self.pool.acquire() as conn:
                raw = await conn.fetchval(SELECT_SQL, key)
        except _BACKEND_ERRORS as exc:
            raise StoreUnavailable(key, f"Lecture impossible ({key}): {exc}") from exc
        if raw is None:
            raise StateNotFound(key)
        return _decode(key, raw)

    async def save(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        try:
            async with self.pool.acquire() as conn:
                await conn.execute(UPSERT_SQL, key, payload)
        except _BACKEND_ERRORS as exc:
            raise StoreUnavailable(key, f"Écriture impossible ({key}): {exc}") from exc


class MemoryStateStore:
    """
    Stockage volatil (perdu au redémarrage).

    Les valeurs sont conservées sérialisées en JSON pour reproduire exactement
    le chemin encodage/décodage du stockage Postgres.
    """

    def __init__(self):
        self._data: Dict[str, str] = {}

    async def load(self, key: str) -> Any:
        raw = self._data.get(key)
        if raw is None:
            raise StateNotFound(key)
        return _decode(key, raw)

    async def save(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)


__all__ = ["get_pool", "ensure_schema", "PostgresStateStore", "MemoryStateStore"]
