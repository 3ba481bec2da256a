"""
Journalisation des mouvements vocaux dans le salon "mineur" (MINOR_EVENTS_CHANNEL).
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

import discord

from core import config
from events.members import send_log
from views import log_embeds

logger = logging.getLogger(__name__)


class VoiceAction(enum.Enum):
    JOINED = "joined"
    LEFT = "left"
    MOVED = "moved"


@dataclass(frozen=True)
class VoiceChange:
    action: VoiceAction
    old_channel_id: Optional[int]
    new_channel_id: Optional[int]


def classify_voice_change(before_channel_id: Optional[int], after_channel_id: Optional[int]) -> Optional[VoiceChange]:
    """
    Classe une mise à jour d'état vocal.
    None si le salon n'a pas changé (mute, deafen, stream...).
    """
    if before_channel_id == after_channel_id:
        return None
    if before_channel_id is None:
        return VoiceChange(VoiceAction.JOINED, None, after_channel_id)
    if after_channel_id is None:
        return VoiceChange(VoiceAction.LEFT, before_channel_id, None)
    return VoiceChange(VoiceAction.MOVED, before_channel_id, after_channel_id)


def build_voice_embed(member: discord.abc.User, change: VoiceChange) -> discord.Embed:
    if change.action is VoiceAction.JOINED:
        return log_embeds.build_voice_joined(member, change.new_channel_id)  # type: ignore[arg-type]
    if change.action is VoiceAction.LEFT:
        return log_embeds.build_voice_left(member, change.old_channel_id)  # type: ignore[arg-type]
    return log_embeds.build_voice_moved(member, change.old_channel_id, change.new_channel_id)  # type: ignore[arg-type]


def setup(bot: discord.Client):
    @bot.event
    async def on_voice_state_update(member: discord.Member, before: discord.VoiceState, after: discord.VoiceState):
        change = classify_voice_change(
            before.channel.id if before.channel else None,
            after.channel.id if after.channel else None,
        )
        if change is None:
            return
        try:
            await send_log(bot, config.MINOR_EVENTS_CHANNEL, build_voice_embed(member, change))
        except Exception:
            logger.exception("Echec log vocal (%s)", change.action.value)
