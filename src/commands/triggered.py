"""
Workflow de confinement d'un membre perturbateur.

- Menu contextuel "Triggered!" : sauvegarde les rôles du membre, les retire,
  attribue TRIGGERED_ROLE puis le rôle d'une salle de confinement libre
- Menu contextuel "Release Trigger" : restaure les rôles sauvegardés
- /unlock_triggered_channel : nettoie la salle courante et la rend à nouveau libre

Réservé à la liste des admins du bot. L'admin maître ne peut pas être confiné.
Les rôles gérés par une intégration (boost, bots) ne sont jamais touchés.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import discord
from discord import app_commands

from core import config
from core.permissions import require_admin_list
from db.lists import is_master_admin
from db.role_backups import RoleBackups
from db.state import resolve_roles
from db.t_rooms import TRooms
from views.common import channel_mention, user_mention

logger = logging.getLogger(__name__)


def removable_roles(member: discord.Member) -> list[discord.Role]:
    return [r for r in member.roles if not r.is_default() and not r.managed]


@dataclass
class ContainResult:
    already_contained: bool = False
    room: Optional[tuple[int, int]] = None


async def contain(store, member: discord.Member, triggered_role_id: Optional[int]) -> ContainResult:
    """
    Confine un membre.

    Séquence :
    1. Sauvegarde des rôles (no-op si une sauvegarde existe déjà)
    2. Retrait des rôles, ajout du rôle triggered
    3. Réservation de la première salle libre et ajout de son rôle
    """
    roles = removable_roles(member)
    backups = await RoleBackups.load(store)
    if not await backups.add(member.id, [r.id for r in roles]):
        return ContainResult(already_contained=True)
    reason = "Triggered!"
    if roles:
        await member.remove_roles(*roles, reason=reason)
    if triggered_role_id is not None:
        await member.add_roles(discord.Object(id=triggered_role_id), reason=reason)
    rooms = await TRooms.load(store)
    room = await rooms.claim_open_room()
    if room is not None:
        await member.add_roles(discord.Object(id=room[0]), reason=reason)
    return ContainResult(room=room)


async def release(store, member: discord.Member, guild: discord.Guild) -> Optional[list[int]]:
    """
    Libère un membre confiné. Returns : rôles restaurés, None si non confiné.

    Les rôles supprimés entre-temps sont ignorés.
    """
    backups = await RoleBackups.load(store)
    saved = await backups.remove(member.id)
    if saved is None:
        return None
    reason = "Release Trigger"
    current = removable_roles(member)
    if current:
        await member.remove_roles(*current, reason=reason)
    restored = [r for r in resolve_roles(saved, guild) if not r.managed]
    if restored:
        await member.add_roles(*restored, reason=reason)
    return [r.id for r in restored]


@require_admin_list()
async def triggered(interaction: discord.Interaction, membre: discord.Member):
    if is_master_admin(membre.id):
        await interaction.response.send_message("Bien essayé...", ephemeral=True)
        return
    await interaction.response.defer(ephemeral=True, thinking=True)
    result = await contain(interaction.client.state, membre, config.TRIGGERED_ROLE)  # type: ignore[attr-defined]
    if result.already_contained:
        await interaction.followup.send(f"{membre.mention} est déjà confiné...", ephemeral=True)
        return
    logger.info("Triggered: %s (%s) par %s, salle=%s", membre, membre.id, interaction.user.id, result.room)
    if result.room is None:
        await interaction.followup.send(
            f"{interaction.user.mention}\nToutes les salles de confinement sont occupées. Contactez l'admin du bot...",
            ephemeral=True,
        )
        return
    _, channel_id = result.room
    channel = interaction.guild.get_channel(channel_id) if interaction.guild else None
    if isinstance(channel, (discord.TextChannel, discord.VoiceChannel, discord.Thread)):
        await channel.send(
            f"{user_mention(membre.id)}\nUn modérateur vous a placé dans un salon privé. Merci de patienter..."
        )
    else:
        logger.warning("Salle de confinement %s introuvable", channel_id)
    await interaction.followup.send(f"Membre confiné dans {channel_mention(channel_id)}.", ephemeral=True)


@require_admin_list()
async def release_trigger(interaction: discord.Interaction, membre: discord.Member):
    await interaction.response.defer(ephemeral=True, thinking=True)
    restored = await release(interaction.client.state, membre, interaction.guild)  # type: ignore[attr-defined, arg-type]
    if restored is None:
        await interaction.followup.send(f"{membre.mention} a déjà été libéré...", ephemeral=True)
        return
    logger.info("Release: %s (%s) par %s, %s rôle(s) restauré(s)", membre, membre.id, interaction.user.id, len(restored))
    await interaction.followup.send(
        f"{interaction.user.mention}\nLibération effectuée.\n\n"
        "Pensez à lancer `/unlock_triggered_channel` dans la salle de confinement pour effacer "
        "la conversation et la rendre à nouveau disponible.\n\n"
        "UNIQUEMENT APRÈS AVOIR RELU LA CONVERSATION ET PRIS LES CAPTURES NÉCESSAIRES !!",
        ephemeral=True,
    )


def register(bot: discord.Client):
    bot.tree.add_command(app_commands.ContextMenu(name="Triggered!", callback=triggered))
    bot.tree.add_command(app_commands.ContextMenu(name="Release Trigger", callback=release_trigger))

    @bot.tree.command(name="unlock_triggered_channel", description="Nettoyer et libérer la salle de confinement courante")
    @require_admin_list()
    async def unlock_triggered_channel(interaction: discord.Interaction):
        channel = interaction.channel
        rooms = await TRooms.load(bot.state)  # type: ignore[attr-defined]
        room = rooms.find_by_channel(channel.id) if channel else None
        if room is None:
            await interaction.response.send_message("Ce salon n'est pas une salle de confinement.", ephemeral=True)
            return
        if room.is_open:
            await interaction.response.send_message("Salle déjà libre.", ephemeral=True)
            return
        await interaction.response.defer(ephemeral=True, thinking=True)
        if isinstance(channel, (discord.TextChannel, discord.VoiceChannel, discord.Thread)):
            await channel.purge(limit=None, reason="Libération salle de confinement")
        room.toggle_open()
        await rooms.save()
        logger.info("Salle %s libérée par %s", room.channel_id, interaction.user.id)
        await interaction.followup.send("Salle nettoyée et libérée.", ephemeral=True)


__all__ = ["register", "contain", "release", "ContainResult"]
