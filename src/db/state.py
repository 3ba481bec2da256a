"""
Collections d'identifiants persistées dans le stockage clé/valeur.

Schéma :
- Chaque collection est liée à une clé fixe (`StateKey`) et à une valeur par défaut
- `SnowflakeList` : liste ordonnée d'identifiants uniques (admins, jeux)
- `SnowflakeMap` : libellé -> identifiant, libellés ET identifiants uniques

Cycle de vie : `ensure_initialized` écrit la valeur par défaut au premier
lancement ; chaque commande recharge la collection (`load`), la modifie en
mémoire puis réécrit la collection complète. Pas de verrou entre deux
commandes concurrentes : le dernier écrivain gagne.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence

import discord

from core.errors import StateDeserializeError, StateNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateKey:
    name: str
    default: Callable[[], Any]


async def ensure_initialized(store, key: StateKey) -> bool:
    """
    Écrit la valeur par défaut si la clé est absente.
    Returns : True si la valeur par défaut vient d'être écrite
    """
    try:
        await store.load(key.name)
        return False
    except StateNotFound:
        await store.save(key.name, key.default())
        logger.info("État initialisé: %s", key.name)
        return True


def _as_snowflake(key: StateKey, value: Any) -> int:
    # bool est une sous-classe d'int : à refuser explicitement
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise StateDeserializeError(key.name, f"Identifiant invalide dans {key.name}: {value!r}")
    return value


class SnowflakeList:
    """
    Liste d'identifiants liée à une clé.

    add/remove sont idempotents : un doublon ou une absence renvoie False sans
    écriture ; un succès réécrit la liste complète.
    """

    def __init__(self, store, key: StateKey, ids: Optional[Iterable[int]] = None):
        self.store = store
        self.key = key
        self._ids: List[int] = list(ids or [])

    @classmethod
    async def load(cls, store, key: StateKey) -> "SnowflakeList":
        raw = await store.load(key.name)
        if not isinstance(raw, list):
            raise StateDeserializeError(key.name, f"Liste attendue pour {key.name}")
        return cls(store, key, [_as_snowflake(key, v) for v in raw])

    @property
    def ids(self) -> List[int]:
        return list(self._ids)

    def __iter__(self) -> Iterator[int]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def contains(self, snowflake: int) -> bool:
        return snowflake in self._ids

    async def save(self) -> None:
        await self.store.save(self.key.name, list(self._ids))

    async def add(self, snowflake: int) -> bool:
        if self.contains(snowflake):
            return False
        self._ids.append(snowflake)
        await self.save()
        return True

    async def remove(self, snowflake: int) -> bool:
        if not self.contains(snowflake):
            return False
        self._ids.remove(snowflake)
        await self.save()
        return True


class SnowflakeMap:
    """
    Associations libellé -> identifiant (ex : nom de guilde -> salon).

    Un ajout est refusé si le libellé OU l'identifiant est déjà utilisé.
    """

    def __init__(self, store, key: StateKey, entries: Optional[Dict[str, int]] = None):
        self.store = store
        self.key = key
        self._entries: Dict[str, int] = dict(entries or {})

    @classmethod
    async def load(cls, store, key: StateKey) -> "SnowflakeMap":
        raw = await store.load(key.name)
        if not isinstance(raw, dict):
            raise StateDeserializeError(key.name, f"Objet attendu pour {key.name}")
        return cls(store, key, {str(k): _as_snowflake(key, v) for k, v in raw.items()})

    def items(self):
        return list(self._entries.items())

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, label: str) -> Optional[int]:
        return self._entries.get(label)

    def contains_label(self, label: str) -> bool:
        return label in self._entries

    def contains_value(self, snowflake: int) -> bool:
        return snowflake in self._entries.values()

    async def save(self) -> None:
        await self.store.save(self.key.name, dict(self._entries))

    async def add(self, label: str, snowflake: int) -> bool:
        if self.contains_label(label) or self.contains_value(snowflake):
            return False
        self._entries[label] = snowflake
        await self.save()
        return True

    async def remove(self, label: str) -> bool:
        if label not in self._entries:
            return False
        del self._entries[label]
        await self.save()
        return True


def resolve_roles(ids: Iterable[int], guild: discord.Guild) -> list[discord.Role]:
    """
    Projette des identifiants vers les rôles existants du serveur.

    Projection avec perte : les rôles supprimés côté Discord sont ignorés
    silencieusement mais restent stockés tant qu'on ne les retire pas.
    """
    roles: list[discord.Role] = []
    for rid in ids:
        role = guild.get_role(rid)
        if role is None:
            logger.debug("Rôle %s introuvable, ignoré", rid)
            continue
        roles.append(role)
    return roles


async def init_all_state(store, keys: Sequence[StateKey]) -> list[str]:
    """Initialise toutes les clés manquantes. Returns : clés nouvellement écrites."""
    created: list[str] = []
    for key in keys:
        if await ensure_initialized(store, key):
            created.append(key.name)
    return created


__all__ = [
    "StateKey",
    "ensure_initialized",
    "SnowflakeList",
    "SnowflakeMap",
    "resolve_roles",
    "init_all_state",
]
