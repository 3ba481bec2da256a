"""
Helpers communs aux embeds : mentions, en-tête membre, âge du compte.
"""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

import discord

GREEN = discord.Color.green()
RED = discord.Color.red()
YELLOW = discord.Color.gold()


def user_mention(user_id: int) -> str:
    return f"<@{user_id}>"


def role_mention(role_id: int) -> str:
    return f"<@&{role_id}>"


def channel_mention(channel_id: int) -> str:
    return f"<#{channel_id}>"


def join_role_mentions(role_ids: Iterable[int]) -> str:
    return " ".join(role_mention(r) for r in role_ids)


def account_age(created_at: datetime, now: Optional[datetime] = None) -> str:
    """
    Âge lisible d'un compte ("2 ans, 3 mois, 5 jours").

    Mois comptés sur 30 jours et années sur 365 : approximation d'affichage.
    """
    now = now or discord.utils.utcnow()
    days = max(0, (now - created_at).days)
    years, days = divmod(days, 365)
    months, days = divmod(days, 30)
    parts: list[str] = []
    if years:
        parts.append(f"{years} an{'s' if years > 1 else ''}")
    if months:
        parts.append(f"{months} mois")
    if days or not parts:
        parts.append(f"{days} jour{'s' if days > 1 else ''}")
    return ", ".join(parts)


def member_embed(title: str, color: discord.Color, user: discord.abc.User, *, description: Optional[str] = None) -> discord.Embed:
    """Embed de base : auteur = membre (nom + avatar), pied = ID, horodatage."""
    e = discord.Embed(title=title, color=color, description=description, timestamp=discord.utils.utcnow())
    e.set_author(name=user.name, icon_url=user.display_avatar.url)
    e.set_footer(text=f"ID utilisateur : {user.id}")
    return e


__all__ = [
    "GREEN",
    "RED",
    "YELLOW",
    "user_mention",
    "role_mention",
    "channel_mention",
    "join_role_mentions",
    "account_age",
    "member_embed",
]
