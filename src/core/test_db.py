"""Tests du stockage clé/valeur (mémoire et Postgres simulé)."""

import asyncio
import json
import unittest
from unittest.mock import AsyncMock, MagicMock

import asyncpg

from core.db import MemoryStateStore, PostgresStateStore
from core.errors import StateDeserializeError, StateNotFound, StoreUnavailable


def fake_pool(conn):
    """Pool dont acquire() renvoie `conn` via un context manager asynchrone."""
    acquire = MagicMock()
    acquire.__aenter__ = AsyncMock(return_value=conn)
    acquire.__aexit__ = AsyncMock(return_value=False)
    pool = MagicMock()
    pool.acquire.return_value = acquire
    return pool


class MemoryStateStoreTests(unittest.IsolatedAsyncioTestCase):
    async def test_missing_key(self):
        with self.assertRaises(StateNotFound) as ctx:
            await MemoryStateStore().load("admins")
        self.assertEqual(ctx.exception.key, "admins")

    async def test_values_are_copied_through_json(self):
        store = MemoryStateStore()
        value = [1, 2]
        await store.save("games", value)
        value.append(3)
        self.assertEqual(await store.load("games"), [1, 2])


class PostgresStateStoreTests(unittest.IsolatedAsyncioTestCase):
    async def test_load_decodes_json(self):
        conn = MagicMock()
        conn.fetchval = AsyncMock(return_value=json.dumps([1, 2]))
        store = PostgresStateStore(fake_pool(conn))

        self.assertEqual(await store.load("games"), [1, 2])

    async def test_load_missing_row(self):
        conn = MagicMock()
        conn.fetchval = AsyncMock(return_value=None)
        with self.assertRaises(StateNotFound):
            await PostgresStateStore(fake_pool(conn)).load("games")

    async def test_load_invalid_json(self):
        conn = MagicMock()
        conn.fetchval = AsyncMock(return_value="{oops")
        with self.assertRaises(StateDeserializeError):
            await PostgresStateStore(fake_pool(conn)).load("games")

    async def test_backend_errors_become_store_unavailable(self):
        conn = MagicMock()
        conn.execute = AsyncMock(side_effect=ConnectionRefusedError("boom"))
        with self.assertRaises(StoreUnavailable):
            await PostgresStateStore(fake_pool(conn)).save("games", [1])

    async def test_closing_pool_becomes_store_unavailable(self):
        pool = MagicMock()
        pool.acquire.return_value.__aenter__ = AsyncMock(side_effect=asyncpg.InterfaceError("pool is closing"))
        pool.acquire.return_value.__aexit__ = AsyncMock(return_value=False)
        with self.assertRaises(StoreUnavailable):
            await PostgresStateStore(pool).load("games")

    async def test_acquire_timeout_becomes_store_unavailable(self):
        pool = MagicMock()
        pool.acquire.return_value.__aenter__ = AsyncMock(side_effect=asyncio.TimeoutError())
        pool.acquire.return_value.__aexit__ = AsyncMock(return_value=False)
        with self.assertRaises(StoreUnavailable):
            await PostgresStateStore(pool).save("games", [1])

    async def test_save_upserts_json_payload(self):
        conn = MagicMock()
        conn.execute = AsyncMock()
        await PostgresStateStore(fake_pool(conn)).save("games", [1, 2])

        args = conn.execute.await_args.args
        self.assertEqual(args[1:], ("games", "[1, 2]"))


if __name__ == "__main__":
    unittest.main()
