"""
Sauvegarde des rôles d'un membre confiné (workflow "Triggered!").

Stockage : objet JSON { "<user_id>": [role_id, ...] } sous la clé `role_backup`.
Une sauvegarde présente signifie que le membre est actuellement confiné.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from core.errors import StateDeserializeError
from db.state import StateKey

ROLE_BACKUPS = StateKey("role_backup", dict)


class RoleBackups:
    def __init__(self, store, backups: Optional[Dict[int, List[int]]] = None):
        self.store = store
        self._backups: Dict[int, List[int]] = dict(backups or {})

    @classmethod
    async def load(cls, store) -> "RoleBackups":
        raw = await store.load(ROLE_BACKUPS.name)
        if not isinstance(raw, dict):
            raise StateDeserializeError(ROLE_BACKUPS.name, "Objet attendu pour role_backup")
        backups: Dict[int, List[int]] = {}
        try:
            for uid, roles in raw.items():
                backups[int(uid)] = [int(r) for r in roles]
        except (TypeError, ValueError) as exc:
            raise StateDeserializeError(ROLE_BACKUPS.name, f"Sauvegarde de rôles invalide: {exc}") from exc
        return cls(store, backups)

    def __contains__(self, user_id: int) -> bool:
        return user_id in self._backups

    def get(self, user_id: int) -> Optional[List[int]]:
        roles = self._backups.get(user_id)
        return list(roles) if roles is not None else None

    async def save(self) -> None:
        # Les clés JSON sont forcément des chaînes
        await self.store.save(ROLE_BACKUPS.name, {str(k): v for k, v in self._backups.items()})

    async def add(self, user_id: int, role_ids: Iterable[int]) -> bool:
        """False si une sauvegarde existe déjà (membre déjà confiné)."""
        if user_id in self._backups:
            return False
        self._backups[user_id] = list(role_ids)
        await self.save()
        return True

    async def remove(self, user_id: int) -> Optional[List[int]]:
        """Retire et retourne la sauvegarde, None si absente."""
        if user_id not in self._backups:
            return None
        roles = self._backups.pop(user_id)
        await self.save()
        return roles


__all__ = ["ROLE_BACKUPS", "RoleBackups"]
