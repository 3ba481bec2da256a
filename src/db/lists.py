"""
Clés d'état du bot et accès typés aux collections.

- admins : liste des admins du bot (amorcée avec MASTER_ADMIN_ID)
- games : rôles de jeux proposés dans le menu "Pick Your Games"
- guild_apply : routage candidatures (libellé -> salon), fonctionnalité désactivée
"""
from __future__ import annotations

from core import config
from db.state import SnowflakeList, SnowflakeMap, StateKey


def _default_admins() -> list[int]:
    return [config.MASTER_ADMIN_ID] if config.MASTER_ADMIN_ID is not None else []


ADMINS = StateKey("admins", _default_admins)
GAMES = StateKey("games", list)
GUILD_APPLY = StateKey("guild_apply", dict)


async def load_admins(store) -> SnowflakeList:
    return await SnowflakeList.load(store, ADMINS)


async def load_games(store) -> SnowflakeList:
    return await SnowflakeList.load(store, GAMES)


async def load_guild_apply(store) -> SnowflakeMap:
    return await SnowflakeMap.load(store, GUILD_APPLY)


def is_master_admin(user_id: int) -> bool:
    return config.MASTER_ADMIN_ID is not None and user_id == config.MASTER_ADMIN_ID


__all__ = ["ADMINS", "GAMES", "GUILD_APPLY", "load_admins", "load_games", "load_guild_apply", "is_master_admin"]
