"""Tests du menu "Pick Your Games" (boutons et liste déroulante)."""

import unittest
from unittest.mock import AsyncMock, MagicMock, PropertyMock, patch

import discord

from core import config
from core.db import MemoryStateStore
from views.pick_games import INVALID_VALUE, GamesSelect, PickGamesMenu


def fake_role(role_id, name=None):
    role = MagicMock(spec=discord.Role)
    role.id = role_id
    role.name = name or f"jeu-{role_id}"
    return role


def fake_interaction(roles_by_id, member_role_ids, store=None):
    member = MagicMock(spec=discord.Member)
    member.id = 42
    member.name = "alice"
    member.display_avatar.url = "https://cdn.example/avatar.png"
    member.roles = [roles_by_id.get(rid) or fake_role(rid) for rid in member_role_ids]
    member.add_roles = AsyncMock()
    member.remove_roles = AsyncMock()

    interaction = MagicMock()
    interaction.user = member
    interaction.client.state = store
    interaction.guild.get_role.side_effect = roles_by_id.get
    interaction.response.is_done.return_value = False
    interaction.response.send_message = AsyncMock()
    return interaction


def select_with(values, *, adding):
    select = GamesSelect([], adding=adding)
    return select, patch.object(GamesSelect, "values", new_callable=PropertyMock, return_value=values)


class GamesSelectCallbackTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.roles = {10: fake_role(10), 11: fake_role(11), 12: fake_role(12)}

    async def test_adding_skips_roles_already_owned(self):
        interaction = fake_interaction(self.roles, [10])
        select, values = select_with(["10", "11"], adding=True)

        with values, patch.object(config, "guild_apply_roles", return_value=set()):
            await select.callback(interaction)

        interaction.user.add_roles.assert_awaited_once()
        self.assertEqual(list(interaction.user.add_roles.await_args.args), [self.roles[11]])
        embed = interaction.response.send_message.await_args.kwargs["embed"]
        self.assertEqual(embed.title, "Rôles mis à jour")

    async def test_removing_only_touches_owned_roles(self):
        interaction = fake_interaction(self.roles, [10, 12])
        select, values = select_with(["11", "12"], adding=False)

        with values:
            await select.callback(interaction)

        self.assertEqual(list(interaction.user.remove_roles.await_args.args), [self.roles[12]])
        interaction.user.add_roles.assert_not_awaited()
        embed = interaction.response.send_message.await_args.kwargs["embed"]
        self.assertEqual(embed.fields[0].name, "Rôles retirés")

    async def test_guild_application_roles_switch_embed(self):
        interaction = fake_interaction(self.roles, [])
        select, values = select_with(["11"], adding=True)

        with values, patch.object(config, "guild_apply_roles", return_value={11}):
            await select.callback(interaction)

        interaction.user.add_roles.assert_awaited_once()
        embed = interaction.response.send_message.await_args.kwargs["embed"]
        self.assertEqual(embed.title, "Candidature de guilde requise !")

    async def test_placeholder_selection_is_invalid(self):
        interaction = fake_interaction(self.roles, [])
        select, values = select_with([INVALID_VALUE], adding=True)

        with values:
            await select.callback(interaction)

        interaction.user.add_roles.assert_not_awaited()
        interaction.response.send_message.assert_awaited_once_with("Opération invalide...", ephemeral=True)


class PickGamesMenuTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.store = MemoryStateStore()
        # 13 n'existe plus sur le serveur
        await self.store.save("games", [10, 11, 12, 13])
        self.roles = {10: fake_role(10), 11: fake_role(11), 12: fake_role(12)}
        self.menu = PickGamesMenu()

    def offered(self, interaction):
        view = interaction.response.send_message.await_args.kwargs["view"]
        return [option.value for option in view.children[0].options]

    async def test_add_offers_games_not_owned(self):
        interaction = fake_interaction(self.roles, [10], self.store)

        await self.menu._open_select(interaction, adding=True)

        self.assertEqual(self.offered(interaction), ["11", "12"])

    async def test_remove_offers_games_owned(self):
        interaction = fake_interaction(self.roles, [10, 12], self.store)

        await self.menu._open_select(interaction, adding=False)

        self.assertEqual(self.offered(interaction), ["10", "12"])

    async def test_nothing_to_offer_shows_placeholder(self):
        interaction = fake_interaction(self.roles, [10, 11, 12], self.store)

        await self.menu._open_select(interaction, adding=True)

        self.assertEqual(self.offered(interaction), [INVALID_VALUE])

    async def test_menu_unavailable_without_store(self):
        interaction = fake_interaction(self.roles, [], None)

        await self.menu._open_select(interaction, adding=True)

        interaction.response.send_message.assert_awaited_once_with("Menu indisponible.", ephemeral=True)


if __name__ == "__main__":
    unittest.main()
