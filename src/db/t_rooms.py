"""
Pool de salles de confinement ("t-rooms").

Chaque salle est un triplet (rôle, salon, ouverte). Le couple rôle/salon est
fixé à la création ; seul `is_open` change. Le registre complet est stocké
sous la clé `t_rooms` et reconstruit depuis la configuration à chaque
démarrage (`TRooms.sync`) : les salles ajoutées arrivent ouvertes, les salles
retirées disparaissent, les autres gardent leur état.

Allocation : première salle ouverte dans l'ordre de stockage, sans autre
politique (pool petit et statique).
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import List, Optional, Sequence, Tuple

from core.errors import StateDeserializeError, StateNotFound

logger = logging.getLogger(__name__)


@dataclass
class Room:
    role_id: int
    channel_id: int
    is_open: bool = True

    def toggle_open(self) -> None:
        self.is_open = not self.is_open


class TRooms:
    KEY = "t_rooms"

    def __init__(self, store, rooms: Optional[List[Room]] = None):
        self.store = store
        self.rooms: List[Room] = list(rooms or [])

    @classmethod
    async def load(cls, store) -> "TRooms":
        raw = await store.load(cls.KEY)
        if not isinstance(raw, list):
            raise StateDeserializeError(cls.KEY, "Liste attendue pour t_rooms")
        rooms: List[Room] = []
        try:
            for item in raw:
                rooms.append(Room(int(item["role_id"]), int(item["channel_id"]), bool(item["is_open"])))
        except (KeyError, TypeError, ValueError) as exc:
            raise StateDeserializeError(cls.KEY, f"Salle invalide: {exc}") from exc
        return cls(store, rooms)

    @classmethod
    async def sync(cls, store, pairs: Sequence[Tuple[int, int]]) -> "TRooms":
        """
        Aligne le registre stocké sur les paires configurées (ordre de la config).

        Une salle encore configurée garde son état `is_open` ; une nouvelle paire
        arrive ouverte ; une paire retirée de la config est supprimée.
        """
        try:
            stored = (await cls.load(store)).rooms
        except StateNotFound:
            stored = None
        is_open = {(r.role_id, r.channel_id): r.is_open for r in stored or []}
        rooms = [Room(rid, cid, is_open.get((rid, cid), True)) for rid, cid in pairs]
        registry = cls(store, rooms)
        if rooms != stored:
            await registry.save()
            logger.info("Registre t_rooms synchronisé (%d salle(s))", len(rooms))
        return registry

    async def save(self) -> None:
        await self.store.save(self.KEY, [asdict(r) for r in self.rooms])

    async def claim_open_room(self) -> Optional[Tuple[int, int]]:
        """
        Ferme la première salle ouverte et persiste le registre.
        Returns : (role_id, channel_id) ou None si toutes les salles sont prises
        """
        for room in self.rooms:
            if room.is_open:
                room.toggle_open()
                await self.save()
                return room.role_id, room.channel_id
        return None

    def find_by_channel(self, channel_id: int) -> Optional[Room]:
        """Salle liée au salon (référence mutable : l'appelant bascule puis `save()`)."""
        for room in self.rooms:
            if room.channel_id == channel_id:
                return room
        return None


__all__ = ["Room", "TRooms"]
