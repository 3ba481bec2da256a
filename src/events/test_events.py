"""Tests des helpers d'événements (vocal, rôles, envoi des logs)."""

import unittest
from unittest.mock import AsyncMock, MagicMock

import discord

from events.members import diff_roles, send_log
from events.voice import VoiceAction, VoiceChange, classify_voice_change


class ClassifyVoiceChangeTests(unittest.TestCase):
    def test_join_leave_move(self):
        self.assertEqual(classify_voice_change(None, 5), VoiceChange(VoiceAction.JOINED, None, 5))
        self.assertEqual(classify_voice_change(5, None), VoiceChange(VoiceAction.LEFT, 5, None))
        self.assertEqual(classify_voice_change(5, 6), VoiceChange(VoiceAction.MOVED, 5, 6))

    def test_same_channel_is_ignored(self):
        self.assertIsNone(classify_voice_change(5, 5))
        self.assertIsNone(classify_voice_change(None, None))


class DiffRolesTests(unittest.TestCase):
    def test_added_and_removed_keep_order(self):
        added, removed = diff_roles([1, 2, 3], [3, 4, 1, 5])
        self.assertEqual(added, [4, 5])
        self.assertEqual(removed, [2])

    def test_no_change(self):
        self.assertEqual(diff_roles([1], [1]), ([], []))


class SendLogTests(unittest.IsolatedAsyncioTestCase):
    async def test_unconfigured_channel(self):
        bot = MagicMock()
        self.assertFalse(await send_log(bot, None, discord.Embed()))
        bot.get_channel.assert_not_called()

    async def test_unknown_channel(self):
        bot = MagicMock()
        bot.get_channel.return_value = None
        self.assertFalse(await send_log(bot, 123, discord.Embed()))

    async def test_sends_to_text_channel(self):
        channel = MagicMock(spec=discord.TextChannel)
        channel.send = AsyncMock()
        bot = MagicMock()
        bot.get_channel.return_value = channel
        embed = discord.Embed(title="x")

        self.assertTrue(await send_log(bot, 123, embed))
        channel.send.assert_awaited_once_with(embed=embed)


if __name__ == "__main__":
    unittest.main()
