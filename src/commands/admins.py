"""
Commandes slash de gestion de la liste des admins du bot.

- /add_admin <membre>
- /remove_admin <membre> (l'admin maître ne peut pas être retiré)
- /list_admins

Réservées aux administrateurs Discord (bit 8).
"""
from __future__ import annotations

import logging
import discord
from discord import app_commands

from core.permissions import require_perms, ADMINISTRATOR
from db.lists import is_master_admin, load_admins
from views.common import user_mention

logger = logging.getLogger(__name__)


def register(bot: discord.Client):
    @bot.tree.command(name="add_admin", description="Ajouter un membre à la liste des admins")
    @app_commands.describe(membre="Membre ciblé")
    @require_perms(ADMINISTRATOR, message="Admin requis (bit 8).")
    async def add_admin(interaction: discord.Interaction, membre: discord.User):
        admins = await load_admins(bot.state)  # type: ignore[attr-defined]
        if await admins.add(membre.id):
            logger.info("Admin ajouté: %s (%s) par %s", membre, membre.id, interaction.user.id)
            await interaction.response.send_message(f"{membre.mention} ajouté à la liste des admins !", ephemeral=True)
        else:
            await interaction.response.send_message("Admin déjà enregistré...", ephemeral=True)

    @bot.tree.command(name="remove_admin", description="Retirer un membre de la liste des admins")
    @app_commands.describe(membre="Membre ciblé")
    @require_perms(ADMINISTRATOR, message="Admin requis (bit 8).")
    async def remove_admin(interaction: discord.Interaction, membre: discord.User):
        if is_master_admin(membre.id):
            await interaction.response.send_message("Impossible de retirer l'admin maître !", ephemeral=True)
            return
        admins = await load_admins(bot.state)  # type: ignore[attr-defined]
        if await admins.remove(membre.id):
            logger.info("Admin retiré: %s (%s) par %s", membre, membre.id, interaction.user.id)
            await interaction.response.send_message(f"{membre.mention} retiré de la liste des admins !", ephemeral=True)
        else:
            await interaction.response.send_message("Membre introuvable dans la liste des admins...", ephemeral=True)

    @bot.tree.command(name="list_admins", description="Afficher la liste des admins")
    @require_perms(ADMINISTRATOR, message="Admin requis (bit 8).")
    async def list_admins(interaction: discord.Interaction):
        admins = await load_admins(bot.state)  # type: ignore[attr-defined]
        if not len(admins):
            await interaction.response.send_message("Aucun admin.", ephemeral=True)
            return
        await interaction.response.send_message("\n".join(user_mention(a) for a in admins), ephemeral=True)

__all__ = ["register"]
