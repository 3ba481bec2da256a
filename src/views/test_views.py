"""Tests des embeds et de la logique du menu de jeux."""

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from views import log_embeds
from views.common import account_age, join_role_mentions
from views.pick_games import INVALID_VALUE, needs_guild_application, select_targets

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def fake_user(user_id=42, name="alice", days_old=10):
    user = MagicMock()
    user.id = user_id
    user.name = name
    user.display_avatar.url = "https://cdn.example/avatar.png"
    user.created_at = datetime.now(timezone.utc) - timedelta(days=days_old)
    return user


class AccountAgeTests(unittest.TestCase):
    def test_full_breakdown(self):
        created = NOW - timedelta(days=2 * 365 + 3 * 30 + 5)
        self.assertEqual(account_age(created, NOW), "2 ans, 3 mois, 5 jours")

    def test_singulars(self):
        created = NOW - timedelta(days=365 + 1)
        self.assertEqual(account_age(created, NOW), "1 an, 1 jour")

    def test_brand_new_account(self):
        self.assertEqual(account_age(NOW, NOW), "0 jour")

    def test_exact_months(self):
        self.assertEqual(account_age(NOW - timedelta(days=60), NOW), "2 mois")


class SelectTargetsTests(unittest.TestCase):
    def test_adding_skips_owned_roles(self):
        self.assertEqual(select_targets(["1", "2", "3"], [2], adding=True), [1, 3])

    def test_removing_keeps_only_owned_roles(self):
        self.assertEqual(select_targets(["1", "2", "3"], [2, 3], adding=False), [2, 3])

    def test_placeholder_selection_is_empty(self):
        self.assertEqual(select_targets([INVALID_VALUE], [], adding=True), [])

    def test_garbage_and_duplicates(self):
        self.assertEqual(select_targets(["x", "4", "4"], [], adding=True), [4])


class GuildApplicationTests(unittest.TestCase):
    def test_needs_application(self):
        self.assertTrue(needs_guild_application([1, 7], {7, 8}))
        self.assertFalse(needs_guild_application([1, 2], {7, 8}))
        self.assertFalse(needs_guild_application([1], set()))


class LogEmbedTests(unittest.TestCase):
    def test_member_left_lists_roles(self):
        embed = log_embeds.build_member_left(fake_user(), [10, 11])

        self.assertEqual(embed.title, "Membre parti")
        self.assertEqual(embed.footer.text, "ID utilisateur : 42")
        self.assertEqual(embed.author.name, "alice")
        roles = next(f for f in embed.fields if f.name == "Rôles")
        self.assertEqual(roles.value, join_role_mentions([10, 11]))

    def test_member_left_without_roles(self):
        embed = log_embeds.build_member_left(fake_user(), [])
        roles = next(f for f in embed.fields if f.name == "Rôles")
        self.assertEqual(roles.value, "-")

    def test_roles_changed_only_shows_non_empty_sides(self):
        embed = log_embeds.build_roles_changed(fake_user(), [5], [])
        names = [f.name for f in embed.fields]
        self.assertIn("Nouveaux rôles", names)
        self.assertNotIn("Rôles retirés", names)

    def test_voice_moved_mentions_both_channels(self):
        embed = log_embeds.build_voice_moved(fake_user(), 1, 2)
        values = {f.name: f.value for f in embed.fields}
        self.assertEqual(values["Quitté"], "<#1>")
        self.assertEqual(values["Rejoint"], "<#2>")

    def test_member_joined_shows_account_age(self):
        embed = log_embeds.build_member_joined(fake_user(days_old=3))
        age = next(f for f in embed.fields if f.name == "Âge du compte")
        self.assertEqual(age.value, "3 jours")


if __name__ == "__main__":
    unittest.main()
