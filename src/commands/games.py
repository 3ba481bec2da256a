"""
Commandes slash des rôles de jeux et du menu "Pick Your Games".

- /add_game <role>, /remove_game <role>, /list_games : gestion de la liste
- /pick_games_menu : publie le panneau persistant (boutons Ajouter / Retirer)

La logique des boutons et de la sélection est dans `views/pick_games.py`.
"""
from __future__ import annotations

import logging
import discord
from discord import app_commands

from core.permissions import require_perms, ADMINISTRATOR
from db.lists import load_games
from views.common import role_mention
from views.pick_games import PickGamesMenu, build_menu_embed

logger = logging.getLogger(__name__)


def register(bot: discord.Client):
    @bot.tree.command(name="add_game", description="Ajouter un rôle de jeu à la liste")
    @app_commands.describe(role="Rôle du jeu")
    @require_perms(ADMINISTRATOR, message="Admin requis (bit 8).")
    async def add_game(interaction: discord.Interaction, role: discord.Role):
        games = await load_games(bot.state)  # type: ignore[attr-defined]
        if await games.add(role.id):
            logger.info("Jeu ajouté: %s (%s)", role.name, role.id)
            await interaction.response.send_message(f"{role.mention} ajouté à la liste des jeux !", ephemeral=True)
        else:
            await interaction.response.send_message("Jeu déjà enregistré...", ephemeral=True)

    @bot.tree.command(name="remove_game", description="Retirer un rôle de jeu de la liste")
    @app_commands.describe(role="Rôle du jeu")
    @require_perms(ADMINISTRATOR, message="Admin requis (bit 8).")
    async def remove_game(interaction: discord.Interaction, role: discord.Role):
        games = await load_games(bot.state)  # type: ignore[attr-defined]
        if await games.remove(role.id):
            logger.info("Jeu retiré: %s (%s)", role.name, role.id)
            await interaction.response.send_message(f"{role.mention} retiré de la liste des jeux !", ephemeral=True)
        else:
            await interaction.response.send_message("Jeu introuvable dans la liste...", ephemeral=True)

    @bot.tree.command(name="list_games", description="Afficher la liste des jeux")
    @require_perms(ADMINISTRATOR, message="Admin requis (bit 8).")
    async def list_games(interaction: discord.Interaction):
        games = await load_games(bot.state)  # type: ignore[attr-defined]
        if not len(games):
            await interaction.response.send_message("Aucun jeu.", ephemeral=True)
            return
        await interaction.response.send_message("\n".join(role_mention(g) for g in games), ephemeral=True)

    @bot.tree.command(name="pick_games_menu", description="Publier le menu 'Pick Your Games'")
    @require_perms(ADMINISTRATOR, message="Admin requis (bit 8).")
    async def pick_games_menu(interaction: discord.Interaction):
        channel = interaction.channel
        if not isinstance(channel, (discord.TextChannel, discord.Thread)):
            await interaction.response.send_message("Salon texte requis.", ephemeral=True)
            return
        await channel.send(embed=build_menu_embed(), view=PickGamesMenu())
        await interaction.response.send_message("Menu publié.", ephemeral=True)

__all__ = ["register"]
