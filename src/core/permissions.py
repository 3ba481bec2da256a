"""
Vérifications d'accès pour les commandes slash et menus contextuels.

Deux niveaux :
- `require_perms` : permissions Discord via bitmask (ex : Administrator = 0x8)
  On teste un sous-ensemble via : (current & required) == required
- `require_admin_list` : l'auteur doit figurer dans la liste des admins du bot
  (clé `admins` du stockage d'état)

Les décorateurs répondent eux-mêmes en éphémère et n'exécutent pas la commande
en cas de refus.
"""
from __future__ import annotations

from typing import Callable, TypeVar, Awaitable, Any
import functools
import logging
import discord

from db.lists import load_admins

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Callable[..., Awaitable[Any]])

# Extraits de `discord.Permissions` (compléter si besoin futur)
ADMINISTRATOR = 0x00000008


async def _deny(interaction: discord.Interaction, text: str, ephemeral: bool):
    if interaction.response.is_done():
        await interaction.followup.send(text, ephemeral=ephemeral)
    else:
        await interaction.response.send_message(text, ephemeral=ephemeral)


def require_perms(bits: int, *, ephemeral: bool = True, message: str | None = None):
    """
    Décorateur : l'utilisateur doit posséder toutes les permissions du bitmask.

    Args :
        bits : Masque de bits des permissions requises (ex : ADMINISTRATOR = 8)
        ephemeral : Si True, les messages d'erreur sont envoyés en éphémère
        message : Message d'erreur personnalisé (optionnel)

    Note : refusé hors guilde (DM).
    """
    def decorator(func: T) -> T:
        @functools.wraps(func)
        async def wrapper(interaction: discord.Interaction, *args, **kwargs):  # type: ignore[misc]
            if interaction.guild is None:
                await _deny(interaction, message or "Commande uniquement disponible dans une guilde.", ephemeral)
                return  # type: ignore[return-value]
            perms_value = interaction.user.guild_permissions.value  # type: ignore[union-attr]
            if (perms_value & bits) != bits:
                await _deny(interaction, message or f"Permissions insuffisantes (requis bitmask: {bits}).", ephemeral)
                return  # type: ignore[return-value]
            return await func(interaction, *args, **kwargs)
        return wrapper  # type: ignore[return-value]
    return decorator


def require_admin_list(*, ephemeral: bool = True, message: str | None = None):
    """
    Décorateur : l'auteur doit être dans la liste des admins du bot.

    Les erreurs de stockage remontent (gérées par `Bot.on_app_command_error`).
    """
    def decorator(func: T) -> T:
        @functools.wraps(func)
        async def wrapper(interaction: discord.Interaction, *args, **kwargs):  # type: ignore[misc]
            if interaction.guild is None:
                await _deny(interaction, "Commande uniquement disponible dans une guilde.", ephemeral)
                return  # type: ignore[return-value]
            store = getattr(interaction.client, "state", None)
            if store is None:
                await _deny(interaction, "Stockage non initialisé.", ephemeral)
                return  # type: ignore[return-value]
            admins = await load_admins(store)
            if not admins.contains(interaction.user.id):
                logger.info("Accès refusé à %s (%s)", interaction.user, interaction.user.id)
                await _deny(interaction, message or "Vous n'êtes pas autorisé à utiliser cette commande...", ephemeral)
                return  # type: ignore[return-value]
            return await func(interaction, *args, **kwargs)
        return wrapper  # type: ignore[return-value]
    return decorator


__all__ = ["require_perms", "require_admin_list", "ADMINISTRATOR"]
