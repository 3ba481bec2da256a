"""
Commandes slash `/guild_apply` : routage des candidatures de guilde (libellé -> salon).

- /guild_apply add <libelle> <salon>
- /guild_apply remove <libelle>
- /guild_apply list

Le formulaire de candidature côté membre n'existe pas (fonctionnalité abandonnée) :
seul le routage est administrable. Un libellé ou un salon déjà utilisé est refusé.
"""
from __future__ import annotations

import logging
import discord
from discord import app_commands

from core.permissions import require_perms, ADMINISTRATOR
from db.lists import load_guild_apply
from views.common import channel_mention

logger = logging.getLogger(__name__)

guild_apply = app_commands.Group(name="guild_apply", description="Routage des candidatures de guilde")


@guild_apply.command(name="add", description="Associer un libellé de guilde à un salon")
@app_commands.describe(libelle="Nom de la guilde", salon="Salon recevant les candidatures")
@require_perms(ADMINISTRATOR, message="Admin requis")
async def add_cmd(inter: discord.Interaction, libelle: str, salon: discord.TextChannel):
    routes = await load_guild_apply(inter.client.state)  # type: ignore[attr-defined]
    label = libelle.strip()
    if not label:
        await inter.response.send_message("Libellé vide.", ephemeral=True)
        return
    if await routes.add(label, salon.id):
        logger.info("Guild apply: %s -> %s", label, salon.id)
        await inter.response.send_message(f"{label} -> {salon.mention} enregistré.", ephemeral=True)
    else:
        await inter.response.send_message("Libellé ou salon déjà utilisé.", ephemeral=True)


@guild_apply.command(name="remove", description="Supprimer un routage")
@app_commands.describe(libelle="Nom de la guilde")
@require_perms(ADMINISTRATOR)
async def remove_cmd(inter: discord.Interaction, libelle: str):
    routes = await load_guild_apply(inter.client.state)  # type: ignore[attr-defined]
    if await routes.remove(libelle.strip()):
        await inter.response.send_message("Supprimé.", ephemeral=True)
    else:
        await inter.response.send_message("Libellé introuvable.", ephemeral=True)


@guild_apply.command(name="list", description="Lister les routages")
@require_perms(ADMINISTRATOR)
async def list_cmd(inter: discord.Interaction):
    routes = await load_guild_apply(inter.client.state)  # type: ignore[attr-defined]
    lines = [f"{label}: {channel_mention(cid)}" for label, cid in routes.items()]
    await inter.response.send_message("\n".join(lines) or "Aucun routage.", ephemeral=True)


def register(bot: discord.Client):
    try:
        bot.tree.add_command(guild_apply)
    except Exception:
        logger.exception("Echec enregistrement commandes guild_apply")

__all__ = ["register"]
