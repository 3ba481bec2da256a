"""
Configuration centrale du bot Discord.

Ce module charge les variables d'environnement (.env) et prépare :
- Les intents Discord (members, voice_states, moderation, message_content)
- Le token du bot (BOT_TOKEN, obligatoire)
- L'URL de la base de données (DATABASE_URL, optionnelle : état volatil sinon)
- Les identifiants du serveur : salons de logs, rôles follower / triggered,
  pool de salles de confinement (T_ROOM_ROLES / T_ROOM_CHANNELS)

Les identifiants sont validés au démarrage (`check_ids()` puis `room_pairs()`) :
une valeur mal formée ou des listes de longueurs différentes sont fatales.
"""
from __future__ import annotations

import os
import logging
from typing import Optional
from dotenv import load_dotenv
import discord

from core.errors import ConfigError

load_dotenv()

logger = logging.getLogger(__name__)

INTENTS = discord.Intents.default()
INTENTS.message_content = True
INTENTS.members = True
INTENTS.voice_states = True
INTENTS.moderation = True

# L'intent "presences" est privilégié ; activable via la variable d'environnement ENABLE_PRESENCES
_PRESENCES_ENV = (os.getenv("ENABLE_PRESENCES", "false") or "false").strip().lower()
INTENTS.presences = _PRESENCES_ENV in {"1", "true", "yes", "on"}


def parse_id(raw: Optional[str]) -> Optional[int]:
    """
    Convertit un snowflake texte en int. Retourne None si vide.
    Lève ConfigError si la valeur n'est pas numérique.
    """
    if raw is None or not raw.strip():
        return None
    value = raw.strip()
    if not value.isdigit():
        raise ConfigError(f"Identifiant invalide: {value!r}")
    return int(value)


def parse_id_list(raw: Optional[str]) -> list[int]:
    """Liste d'identifiants séparés par des virgules (les trous sont ignorés)."""
    if not raw:
        return []
    out: list[int] = []
    for token in raw.split(","):
        value = parse_id(token)
        if value is not None:
            out.append(value)
    return out


def _env_id(name: str) -> Optional[int]:
    try:
        return parse_id(os.getenv(name))
    except ConfigError:
        logger.warning("%s invalide dans l'environnement, ignoré", name)
        return None


BOT_TOKEN = os.getenv("BOT_TOKEN")
DATABASE_URL = os.getenv("DATABASE_URL")

GUILD_ID = _env_id("GUILD_ID")
MASTER_ADMIN_ID = _env_id("MASTER_ADMIN_ID")
MAJOR_EVENTS_CHANNEL = _env_id("MAJOR_EVENTS_CHANNEL")
MINOR_EVENTS_CHANNEL = _env_id("MINOR_EVENTS_CHANNEL")
FOLLOWER_ROLE = _env_id("FOLLOWER_ROLE")
TRIGGERED_ROLE = _env_id("TRIGGERED_ROLE")

# Brut : validé par room_pairs() au démarrage
T_ROOM_ROLES = os.getenv("T_ROOM_ROLES", "")
T_ROOM_CHANNELS = os.getenv("T_ROOM_CHANNELS", "")
GUILD_APPLY_ROLES = os.getenv("GUILD_APPLY_ROLES", "")


def room_pairs(roles_raw: Optional[str] = None, channels_raw: Optional[str] = None) -> list[tuple[int, int]]:
    """
    Construit les paires (rôle, salon) du pool de salles de confinement.

    Args :
        roles_raw : liste brute des rôles (défaut : T_ROOM_ROLES)
        channels_raw : liste brute des salons (défaut : T_ROOM_CHANNELS)

    Lève ConfigError si les deux listes n'ont pas la même longueur.
    """
    roles = parse_id_list(T_ROOM_ROLES if roles_raw is None else roles_raw)
    channels = parse_id_list(T_ROOM_CHANNELS if channels_raw is None else channels_raw)
    if len(roles) != len(channels):
        raise ConfigError(
            f"T_ROOM_ROLES ({len(roles)}) et T_ROOM_CHANNELS ({len(channels)}) doivent avoir la même longueur"
        )
    return list(zip(roles, channels))


ID_VARS = ("GUILD_ID", "MASTER_ADMIN_ID", "MAJOR_EVENTS_CHANNEL", "MINOR_EVENTS_CHANNEL", "FOLLOWER_ROLE", "TRIGGERED_ROLE")
ID_LIST_VARS = ("T_ROOM_ROLES", "T_ROOM_CHANNELS", "GUILD_APPLY_ROLES")


def check_ids(environ=None) -> None:
    """
    Valide toutes les variables d'identifiants (appelé par run.main avant connexion).
    Lève ConfigError en listant chaque variable mal formée.
    """
    env = os.environ if environ is None else environ
    invalid: list[str] = []
    for name in ID_VARS + ID_LIST_VARS:
        parse = parse_id_list if name in ID_LIST_VARS else parse_id
        try:
            parse(env.get(name))
        except ConfigError:
            invalid.append(name)
    if invalid:
        raise ConfigError(f"Identifiants invalides: {', '.join(invalid)}")


def guild_apply_roles() -> set[int]:
    try:
        return set(parse_id_list(GUILD_APPLY_ROLES))
    except ConfigError:
        logger.warning("GUILD_APPLY_ROLES invalide, ignoré")
        return set()


# Avertit si le token du bot est absent
if not BOT_TOKEN:
    logger.warning("BOT_TOKEN manquant dans l'environnement")
if MASTER_ADMIN_ID is None:
    logger.warning("MASTER_ADMIN_ID absent : la liste des admins démarrera vide")
