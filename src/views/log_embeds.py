"""
Embeds des salons de logs.

- Salon "majeur" : arrivées, départs, bans, débans, changements de rôles
- Salon "mineur" : vocal (rejoint, quitté, déplacé)
"""
from __future__ import annotations

from typing import Sequence

import discord

from views.common import (
    GREEN,
    RED,
    YELLOW,
    account_age,
    channel_mention,
    join_role_mentions,
    member_embed,
    user_mention,
)

LEFT_IMAGE = "https://i.ibb.co/1qyVmzG/left-discord.png"
BANNED_IMAGE = "https://i.ibb.co/P4m8YSL/banned.png"
UNBANNED_IMAGE = "https://i.ibb.co/7nqVFKd/unbanned.png"


def build_member_joined(user: discord.abc.User) -> discord.Embed:
    e = member_embed("Membre arrivé", GREEN, user, description=user_mention(user.id))
    e.set_image(url=user.display_avatar.url)
    e.add_field(name="Âge du compte", value=account_age(user.created_at), inline=True)
    return e


def build_member_left(user: discord.abc.User, role_ids: Sequence[int]) -> discord.Embed:
    e = member_embed("Membre parti", RED, user, description=user_mention(user.id))
    e.set_image(url=LEFT_IMAGE)
    e.add_field(name="Âge du compte", value=account_age(user.created_at), inline=True)
    e.add_field(name="Rôles", value=join_role_mentions(role_ids) or "-", inline=False)
    return e


def build_member_banned(user: discord.abc.User) -> discord.Embed:
    e = member_embed("Membre banni", RED, user, description=user_mention(user.id))
    e.set_image(url=BANNED_IMAGE)
    e.add_field(name="Âge du compte", value=account_age(user.created_at), inline=True)
    return e


def build_member_unbanned(user: discord.abc.User) -> discord.Embed:
    e = member_embed("Membre débanni", GREEN, user, description=user_mention(user.id))
    e.set_image(url=UNBANNED_IMAGE)
    e.add_field(name="Âge du compte", value=account_age(user.created_at), inline=True)
    return e


def build_roles_changed(user: discord.abc.User, added: Sequence[int], removed: Sequence[int]) -> discord.Embed:
    e = member_embed("Rôles mis à jour", YELLOW, user, description="🔄 🔄 🔄")
    if added:
        e.add_field(name="Nouveaux rôles", value=join_role_mentions(added), inline=False)
    if removed:
        e.add_field(name="Rôles retirés", value=join_role_mentions(removed), inline=False)
    e.add_field(name="Membre", value=user_mention(user.id), inline=False)
    return e


def build_voice_joined(user: discord.abc.User, channel_id: int) -> discord.Embed:
    e = member_embed("A rejoint un vocal", GREEN, user, description=f"Salon : {channel_mention(channel_id)}")
    e.add_field(name="Membre", value=user_mention(user.id), inline=False)
    return e


def build_voice_left(user: discord.abc.User, channel_id: int) -> discord.Embed:
    e = member_embed("A quitté un vocal", RED, user, description=f"Salon : {channel_mention(channel_id)}")
    e.add_field(name="Membre", value=user_mention(user.id), inline=False)
    return e


def build_voice_moved(user: discord.abc.User, old_channel_id: int, new_channel_id: int) -> discord.Embed:
    e = member_embed("A changé de vocal", YELLOW, user)
    e.add_field(name="Quitté", value=channel_mention(old_channel_id), inline=True)
    e.add_field(name="Rejoint", value=channel_mention(new_channel_id), inline=True)
    e.add_field(name="Membre", value=user_mention(user.id), inline=False)
    return e


__all__ = [
    "build_member_joined",
    "build_member_left",
    "build_member_banned",
    "build_member_unbanned",
    "build_roles_changed",
    "build_voice_joined",
    "build_voice_left",
    "build_voice_moved",
]
