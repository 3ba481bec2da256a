"""
Chargement des commandes slash et menus contextuels.

Chaque module de ce package (sauf `_*` et `test_*`) expose `register(bot)`,
qui attache ses commandes à `bot.tree`. Un module en échec est journalisé
et ignoré : les autres commandes restent disponibles.
"""
from __future__ import annotations

import importlib
import pkgutil
import logging
from typing import Iterator
import discord

logger = logging.getLogger(__name__)

_SKIPPED_PREFIXES = ('_', 'test_')


def _command_modules() -> Iterator[str]:
	for info in pkgutil.iter_modules(__path__):  # type: ignore[name-defined]
		if not info.name.startswith(_SKIPPED_PREFIXES):
			yield f"{__name__}.{info.name}"


async def load_all_commands(bot: discord.Client) -> list[str]:
	"""Returns : noms des modules enregistrés avec succès."""
	loaded: list[str] = []
	for name in _command_modules():
		try:
			module = importlib.import_module(name)
			register = getattr(module, 'register', None)
			if register is None:
				continue
			result = register(bot)
			if hasattr(result, '__await__'):
				await result
		except Exception:  # noqa: BLE001
			logger.exception("Echec chargement commande %s", name)
			continue
		loaded.append(name)
	logger.info("%d module(s) de commandes chargé(s)", len(loaded))
	return loaded


__all__ = ["load_all_commands"]
