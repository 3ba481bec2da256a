"""Tests de l'allocation des salles de confinement."""

import unittest

from core import config
from core.db import MemoryStateStore
from core.errors import ConfigError, StateDeserializeError
from db.t_rooms import Room, TRooms


class CountingStore(MemoryStateStore):
    def __init__(self):
        super().__init__()
        self.saves = 0

    async def save(self, key, value):
        self.saves += 1
        await super().save(key, value)


class TRoomsTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.store = MemoryStateStore()
        await TRooms.sync(self.store, [(1, 10), (2, 20)])

    async def test_claims_in_storage_order_until_exhausted(self):
        rooms = await TRooms.load(self.store)

        self.assertEqual(await rooms.claim_open_room(), (1, 10))
        self.assertEqual(await rooms.claim_open_room(), (2, 20))
        self.assertIsNone(await rooms.claim_open_room())
        self.assertFalse(any(r.is_open for r in rooms.rooms))

    async def test_claim_is_persisted(self):
        rooms = await TRooms.load(self.store)
        await rooms.claim_open_room()

        reloaded = await TRooms.load(self.store)
        self.assertEqual(reloaded.rooms, [Room(1, 10, False), Room(2, 20, True)])

    async def test_find_by_channel_toggle_reopens_room(self):
        rooms = await TRooms.load(self.store)
        await rooms.claim_open_room()
        await rooms.claim_open_room()

        room = rooms.find_by_channel(10)
        self.assertIsNotNone(room)
        room.toggle_open()
        await rooms.save()

        reloaded = await TRooms.load(self.store)
        self.assertEqual(await reloaded.claim_open_room(), (1, 10))

    async def test_find_by_unknown_channel(self):
        rooms = await TRooms.load(self.store)
        self.assertIsNone(rooms.find_by_channel(999))

    async def test_malformed_room_raises(self):
        await self.store.save("t_rooms", [{"role_id": 1}])
        with self.assertRaises(StateDeserializeError):
            await TRooms.load(self.store)


class TRoomsSyncTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.store = CountingStore()

    async def test_room_added_to_config_appears_open(self):
        rooms = await TRooms.sync(self.store, [(1, 10)])
        await rooms.claim_open_room()

        await TRooms.sync(self.store, [(1, 10), (2, 20)])

        reloaded = await TRooms.load(self.store)
        self.assertEqual(reloaded.rooms, [Room(1, 10, False), Room(2, 20, True)])
        self.assertEqual(await reloaded.claim_open_room(), (2, 20))

    async def test_room_removed_from_config_cannot_be_claimed(self):
        await TRooms.sync(self.store, [(1, 10), (2, 20)])

        await TRooms.sync(self.store, [(2, 20)])

        reloaded = await TRooms.load(self.store)
        self.assertEqual(reloaded.rooms, [Room(2, 20, True)])
        self.assertEqual(await reloaded.claim_open_room(), (2, 20))
        self.assertIsNone(await reloaded.claim_open_room())
        self.assertIsNone(reloaded.find_by_channel(10))

    async def test_closed_rooms_survive_restart(self):
        rooms = await TRooms.sync(self.store, [(1, 10), (2, 20)])
        await rooms.claim_open_room()
        saves = self.store.saves

        await TRooms.sync(self.store, [(1, 10), (2, 20)])

        self.assertEqual(self.store.saves, saves)
        reloaded = await TRooms.load(self.store)
        self.assertFalse(reloaded.rooms[0].is_open)

    async def test_changed_channel_is_a_new_room(self):
        await TRooms.sync(self.store, [(1, 10)])
        rooms = await TRooms.load(self.store)
        await rooms.claim_open_room()

        await TRooms.sync(self.store, [(1, 11)])

        reloaded = await TRooms.load(self.store)
        self.assertEqual(reloaded.rooms, [Room(1, 11, True)])


class RoomSeedingFromConfigTests(unittest.IsolatedAsyncioTestCase):
    async def test_config_lists_seed_open_rooms(self):
        pairs = config.room_pairs("10,20", "100,200")
        store = MemoryStateStore()
        await TRooms.sync(store, pairs)

        rooms = await TRooms.load(store)

        self.assertEqual(rooms.rooms, [Room(10, 100, True), Room(20, 200, True)])

    def test_mismatched_config_fails_before_seeding(self):
        with self.assertRaises(ConfigError):
            config.room_pairs("10,20", "100")


if __name__ == "__main__":
    unittest.main()
