"""
Handlers pour les événements membres Discord (arrivée, départ, ban, déban, rôles).

Chaque événement est journalisé dans le salon "majeur" (MAJOR_EVENTS_CHANNEL).
À l'arrivée, le rôle FOLLOWER_ROLE est attribué s'il est configuré.
En cas d'erreur, le workflow Discord n'est pas bloqué (log + ignore).
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import discord

from core import config
from views import log_embeds

logger = logging.getLogger(__name__)


def diff_roles(before: Sequence[int], after: Sequence[int]) -> tuple[list[int], list[int]]:
    """Retourne (ajoutés, retirés) en conservant l'ordre d'origine."""
    added = [r for r in after if r not in before]
    removed = [r for r in before if r not in after]
    return added, removed


def member_role_ids(member: discord.Member) -> list[int]:
    # Exclut @everyone
    return [r.id for r in member.roles if not r.is_default()]


async def send_log(bot: discord.Client, channel_id: Optional[int], embed: discord.Embed) -> bool:
    """Envoie un embed dans un salon de logs. False si non configuré / introuvable."""
    if channel_id is None:
        return False
    ch = bot.get_channel(channel_id)
    if not isinstance(ch, (discord.TextChannel, discord.Thread)):
        logger.warning("Salon de logs %s introuvable", channel_id)
        return False
    await ch.send(embed=embed)
    return True


def setup(bot: discord.Client):
    @bot.event
    async def on_member_join(member: discord.Member):
        if config.FOLLOWER_ROLE is not None:
            role = member.guild.get_role(config.FOLLOWER_ROLE)
            if role is None:
                logger.warning("FOLLOWER_ROLE %s introuvable", config.FOLLOWER_ROLE)
            else:
                try:
                    await member.add_roles(role, reason="Follower automatique")
                except discord.HTTPException:
                    logger.exception("Echec attribution follower à %s", member.id)
        try:
            await send_log(bot, config.MAJOR_EVENTS_CHANNEL, log_embeds.build_member_joined(member))
            logger.info("Join: %s (%s)", member.display_name, member.id)
        except Exception:
            logger.exception("Echec log join")

    @bot.event
    async def on_member_remove(member: discord.Member):
        try:
            embed = log_embeds.build_member_left(member, member_role_ids(member))
            await send_log(bot, config.MAJOR_EVENTS_CHANNEL, embed)
            logger.info("Leave: %s (%s)", member.display_name, member.id)
        except Exception:
            logger.exception("Echec log leave")

    @bot.event
    async def on_member_ban(guild: discord.Guild, user: discord.User | discord.Member):
        try:
            await send_log(bot, config.MAJOR_EVENTS_CHANNEL, log_embeds.build_member_banned(user))
            logger.info("Ban: %s (%s)", user, user.id)
        except Exception:
            logger.exception("Echec log ban")

    @bot.event
    async def on_member_unban(guild: discord.Guild, user: discord.User):
        try:
            await send_log(bot, config.MAJOR_EVENTS_CHANNEL, log_embeds.build_member_unbanned(user))
            logger.info("Unban: %s (%s)", user, user.id)
        except Exception:
            logger.exception("Echec log unban")

    @bot.event
    async def on_member_update(before: discord.Member, after: discord.Member):
        added, removed = diff_roles(member_role_ids(before), member_role_ids(after))
        if not added and not removed:
            return
        try:
            await send_log(bot, config.MAJOR_EVENTS_CHANNEL, log_embeds.build_roles_changed(after, added, removed))
        except Exception:
            logger.exception("Echec log rôles")
