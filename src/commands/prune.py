"""
Commande slash `/prune <nombre>`.

Supprime les N derniers messages du salon courant (1 à 100).
Réservée à la liste des admins du bot.
"""
from __future__ import annotations

import logging
import discord
from discord import app_commands

from core.permissions import require_admin_list

logger = logging.getLogger(__name__)

MAX_PRUNE = 100


def register(bot: discord.Client):
    @bot.tree.command(name="prune", description="Supprimer les N derniers messages du salon")
    @app_commands.describe(nombre=f"Nombre de messages à supprimer (1-{MAX_PRUNE})")
    @require_admin_list()
    async def prune(interaction: discord.Interaction, nombre: int):
        channel = interaction.channel
        if not isinstance(channel, (discord.TextChannel, discord.Thread, discord.VoiceChannel)):
            await interaction.response.send_message("Salon texte requis.", ephemeral=True)
            return
        if not 1 <= nombre <= MAX_PRUNE:
            await interaction.response.send_message(f"Nombre invalide (1-{MAX_PRUNE}).", ephemeral=True)
            return
        await interaction.response.defer(ephemeral=True, thinking=True)
        deleted = await channel.purge(limit=nombre, reason=f"/prune par {interaction.user}")
        logger.info("Prune: %s message(s) dans %s par %s", len(deleted), channel.id, interaction.user.id)
        await interaction.followup.send(f"{len(deleted)} message(s) supprimé(s) !", ephemeral=True)

__all__ = ["register"]
