"""
Composants UI du menu "Pick Your Games".

Ce module fournit :
- PickGamesMenu : vue persistante (boutons Ajouter / Retirer) postée par /pick_games_menu
- GamesSelect : liste déroulante éphémère des rôles de jeux proposés au membre

Contraintes Discord :
- Un Select accepte 1 à 25 options maximum
- max_values ne doit pas dépasser le nombre d'options
- Sans option valable, une option factice `__invalid__` est affichée
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

import discord

from core import config
from core.errors import StateError
from db.lists import load_games
from db.state import resolve_roles
from views.common import YELLOW, RED, join_role_mentions, member_embed, user_mention

logger = logging.getLogger(__name__)

PICK_GAMES_ADD = "pick-games-add"
PICK_GAMES_REMOVE = "pick-games-remove"
PICK_GAMES_ADD_EXECUTE = "pick-games-add-execute"
PICK_GAMES_REMOVE_EXECUTE = "pick-games-remove-execute"
INVALID_VALUE = "__invalid__"
MAX_OPTIONS = 25


def select_targets(values: Sequence[str], member_role_ids: Iterable[int], adding: bool) -> list[int]:
    """
    Filtre la sélection du membre.

    - adding=True : ne garde que les rôles que le membre n'a pas encore
    - adding=False : ne garde que les rôles que le membre possède
    Une sélection contenant `__invalid__` ou des valeurs non numériques est vide.
    """
    if INVALID_VALUE in values:
        return []
    owned = set(member_role_ids)
    out: list[int] = []
    for v in values:
        if not v.isdigit():
            continue
        rid = int(v)
        if (rid in owned) != adding and rid not in out:
            out.append(rid)
    return out


def needs_guild_application(role_ids: Iterable[int], apply_roles: set[int]) -> bool:
    return any(r in apply_roles for r in role_ids)


def build_menu_embed() -> discord.Embed:
    return discord.Embed(
        title="Pick Your Games",
        description="Ajoutez ou retirez les rôles des jeux qui vous intéressent.",
        color=discord.Color.blurple(),
    )


def build_roles_updated(member: discord.Member, role_ids: Sequence[int], *, added: bool) -> discord.Embed:
    e = member_embed("Rôles mis à jour", YELLOW, member, description="🔄 🔄 🔄")
    e.add_field(name="Nouveaux rôles" if added else "Rôles retirés", value=join_role_mentions(role_ids), inline=True)
    e.add_field(name="Membre", value=user_mention(member.id), inline=False)
    return e


def build_guild_apply_required() -> discord.Embed:
    return discord.Embed(
        title="Candidature de guilde requise !",
        description=(
            "***Étape 1 : allez dans un salon où vous pouvez écrire***\n"
            "Étape 2 : `clic droit` sur vous-même, `Applications`, puis `Guild Apply`"
        ),
        color=RED,
    )


async def report_error(interaction: discord.Interaction, error: Exception):
    logger.error("Erreur menu pick games", exc_info=error)
    if isinstance(error, StateError):
        text = "Stockage indisponible, réessayez plus tard."
    elif isinstance(error, discord.Forbidden):
        text = "Permissions insuffisantes pour modifier vos rôles."
    else:
        text = "Erreur inattendue."
    if interaction.response.is_done():
        await interaction.followup.send(text, ephemeral=True)
    else:
        await interaction.response.send_message(text, ephemeral=True)


class GamesSelect(discord.ui.Select):
    """Select éphémère : ajout ou retrait de rôles de jeux."""

    def __init__(self, roles: Sequence[discord.Role], *, adding: bool):
        self.adding = adding
        options = [discord.SelectOption(label=r.name[:100], value=str(r.id)) for r in roles[:MAX_OPTIONS]]
        if not options:
            empty_label = (
                "Tous les jeux disponibles vous sont déjà attribués..."
                if adding else "Aucun des jeux disponibles ne vous est attribué..."
            )
            options = [discord.SelectOption(label=empty_label, value=INVALID_VALUE)]
        super().__init__(
            placeholder="Aucun jeu sélectionné",
            min_values=1,
            max_values=len(options),
            options=options,
            custom_id=PICK_GAMES_ADD_EXECUTE if adding else PICK_GAMES_REMOVE_EXECUTE,
        )

    async def callback(self, interaction: discord.Interaction):  # type: ignore[override]
        member = interaction.user
        if not isinstance(member, discord.Member) or interaction.guild is None:
            await interaction.response.send_message("Opération invalide...", ephemeral=True)
            return
        targets = select_targets(self.values, (r.id for r in member.roles), self.adding)
        roles = [r for r in (interaction.guild.get_role(rid) for rid in targets) if r is not None]
        if not roles:
            await interaction.response.send_message("Opération invalide...", ephemeral=True)
            return
        if self.adding:
            await member.add_roles(*roles, reason="Pick Your Games")
        else:
            await member.remove_roles(*roles, reason="Pick Your Games")
        role_ids = [r.id for r in roles]
        logger.info("Pick games %s: %s -> %s", "add" if self.adding else "remove", member.id, role_ids)
        if self.adding and needs_guild_application(role_ids, config.guild_apply_roles()):
            embed = build_guild_apply_required()
        else:
            embed = build_roles_updated(member, role_ids, added=self.adding)
        await interaction.response.send_message(embed=embed, ephemeral=True)


class GamesSelectView(discord.ui.View):
    def __init__(self, roles: Sequence[discord.Role], *, adding: bool):
        super().__init__(timeout=180)
        self.add_item(GamesSelect(roles, adding=adding))

    async def on_error(self, interaction: discord.Interaction, error: Exception, item: discord.ui.Item):  # type: ignore[override]
        await report_error(interaction, error)


class PickGamesMenu(discord.ui.View):
    """Vue persistante (custom_id fixes) : réenregistrée à chaque démarrage."""

    def __init__(self):
        super().__init__(timeout=None)

    async def _open_select(self, interaction: discord.Interaction, *, adding: bool):
        member = interaction.user
        store = getattr(interaction.client, "state", None)
        if not isinstance(member, discord.Member) or interaction.guild is None or store is None:
            await interaction.response.send_message("Menu indisponible.", ephemeral=True)
            return
        games = await load_games(store)
        owned = {r.id for r in member.roles}
        roles = [r for r in resolve_roles(games, interaction.guild) if (r.id in owned) != adding]
        content = (
            "Sélectionnez les jeux qui vous intéressent"
            if adding else "Sélectionnez les rôles de jeux à retirer"
        )
        await interaction.response.send_message(content, view=GamesSelectView(roles, adding=adding), ephemeral=True)

    @discord.ui.button(label="Ajouter", style=discord.ButtonStyle.success, custom_id=PICK_GAMES_ADD)
    async def add_games(self, interaction: discord.Interaction, button: discord.ui.Button):  # type: ignore[override]
        await self._open_select(interaction, adding=True)

    @discord.ui.button(label="Retirer", style=discord.ButtonStyle.danger, custom_id=PICK_GAMES_REMOVE)
    async def remove_games(self, interaction: discord.Interaction, button: discord.ui.Button):  # type: ignore[override]
        await self._open_select(interaction, adding=False)

    async def on_error(self, interaction: discord.Interaction, error: Exception, item: discord.ui.Item):  # type: ignore[override]
        await report_error(interaction, error)


__all__ = [
    "PickGamesMenu",
    "GamesSelect",
    "GamesSelectView",
    "select_targets",
    "needs_guild_application",
    "build_menu_embed",
]
