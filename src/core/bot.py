"""
Classe principale du bot Discord.

Responsabilités :
- Crée le client Discord et l'arbre de commandes slash.
- Initialise le stockage d'état (Postgres si DATABASE_URL, sinon volatil en mémoire).
- Amorce les clés d'état manquantes (admins, jeux, sauvegardes, salles...).
- Enregistre les commandes, les événements et la vue persistante "Pick Your Games".
- Remonte les erreurs de commandes à l'utilisateur (réponse éphémère + log).

Note : L'initialisation asynchrone est centralisée dans `setup_hook`, appelé avant `on_ready`.
"""
from __future__ import annotations

import logging
from typing import Sequence

import discord
from discord import app_commands

from core import config, db
from core.errors import StateError
from db.lists import ADMINS, GAMES, GUILD_APPLY
from db.role_backups import ROLE_BACKUPS
from db.state import init_all_state
from db.t_rooms import TRooms

logger = logging.getLogger(__name__)


class Bot(discord.Client):
    """
    Client Discord étendu, encapsulant l'état applicatif.

    Attributs principaux :
        tree : Arbre des commandes slash (CommandTree)
        db_pool : Pool asyncpg (None si aucune DB configurée)
        state : Stockage clé/valeur (PostgresStateStore ou MemoryStateStore)
        room_pairs : Paires (rôle, salon) des salles de confinement configurées
    """

    def __init__(self, room_pairs: Sequence[tuple[int, int]] = ()):
        super().__init__(intents=config.INTENTS)
        self.tree = app_commands.CommandTree(self)
        self.tree.error(self.on_app_command_error)
        self.db_pool = None  # Sera peuplé si DATABASE_URL défini
        self.state = None
        self.room_pairs = list(room_pairs)

    async def setup_hook(self):
        """
        Initialise les sous-systèmes avant la mise en ligne.

        Séquence :
        1. Connexion et schéma DB (si configurée) ; une erreur ici est fatale
        2. Amorçage des clés d'état, synchronisation des salles sur la config
        3. Enregistrement des commandes, événements et vues persistantes
        4. Synchronisation des commandes (sur GUILD_ID si défini)
        """
        if config.DATABASE_URL:
            self.db_pool = await db.get_pool(config.DATABASE_URL)
            await db.ensure_schema(self.db_pool)
            self.state = db.PostgresStateStore(self.db_pool)
            logger.info("DB prête")
        else:
            logger.warning("DATABASE_URL absent : état volatil en mémoire (perdu au redémarrage)")
            self.state = db.MemoryStateStore()

        created = await init_all_state(self.state, [ADMINS, GAMES, GUILD_APPLY, ROLE_BACKUPS])
        logger.info("État prêt (nouvelles clés: %s)", ", ".join(created) or "aucune")
        # Le registre des salles suit toujours la configuration courante
        await TRooms.sync(self.state, self.room_pairs)

        # Chargement commandes dynamiques
        try:
            from commands import load_all_commands  # type: ignore
            await load_all_commands(self)
        except Exception:  # noqa: BLE001
            logger.exception("Erreur chargement commandes dynamiques")
        # Events généraux
        try:
            from events.members import setup as setup_members  # type: ignore
            from events.voice import setup as setup_voice  # type: ignore
            setup_members(self)
            setup_voice(self)
        except Exception:  # noqa: BLE001
            logger.exception("Erreur setup events")
        # Vue persistante : les boutons des menus déjà publiés restent actifs
        from views.pick_games import PickGamesMenu  # import local pour éviter cycles
        self.add_view(PickGamesMenu())
        # Sync final
        try:
            if config.GUILD_ID:
                guild = discord.Object(id=config.GUILD_ID)
                self.tree.copy_global_to(guild=guild)
                synced = await self.tree.sync(guild=guild)
            else:
                synced = await self.tree.sync()
            logger.info("%s commandes synchronisées", len(synced))
        except Exception:  # noqa: BLE001
            logger.exception("Erreur sync slash commands")

    async def on_ready(self):
        logger.info("Connecté: %s (%s)", self.user, getattr(self.user, 'id', '?'))

    async def on_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """
        Point unique de remontée des erreurs de commandes.
        Les erreurs de stockage ne sont jamais retentées : on log et on prévient l'utilisateur.
        """
        original = error.original if isinstance(error, app_commands.CommandInvokeError) else error
        name = interaction.command.name if interaction.command else "?"
        logger.error("Erreur commande %s", name, exc_info=original)
        if isinstance(original, StateError):
            text = "Échec : stockage indisponible ou corrompu, réessayez plus tard."
        elif isinstance(original, discord.Forbidden):
            text = "Échec : permissions Discord insuffisantes pour le bot."
        else:
            text = "Échec de la commande."
        try:
            if interaction.response.is_done():
                await interaction.followup.send(text, ephemeral=True)
            else:
                await interaction.response.send_message(text, ephemeral=True)
        except discord.HTTPException:
            logger.exception("Impossible de notifier l'échec de %s", name)

    async def close(self):  # type: ignore[override]
        """
        Fermeture propre du bot.
        Ajoute la fermeture du pool asyncpg si présent.
        """
        try:
            if self.db_pool is not None:
                await self.db_pool.close()  # type: ignore[union-attr]
                logger.info("Pool asyncpg fermé")
        except Exception:  # noqa: BLE001
            logger.exception("Erreur fermeture pool")
        await super().close()
