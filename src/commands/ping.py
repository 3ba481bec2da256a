"""
Commande slash `/ping`.

Vérifie que le bot est en ligne et affiche sa latence. Ouverte à tous.
"""
from __future__ import annotations

import discord


def register(bot: discord.Client):
    @bot.tree.command(name="ping", description="Vérifier que le bot est en ligne")
    async def ping(interaction: discord.Interaction):  # noqa: D401
        await interaction.response.send_message(f"En ligne ! ({bot.latency*1000:.0f} ms)", ephemeral=True)

__all__ = ["register"]
