"""
Point d'entrée du bot (`python src/run.py` ou script `community-warden`).

Le dossier `src` est placé dans sys.path pour les imports absolus (core, db...).
Le démarrage est refusé si BOT_TOKEN manque, si une variable d'identifiant
est mal formée ou si T_ROOM_ROLES et T_ROOM_CHANNELS n'ont pas la même longueur.
"""
from __future__ import annotations

import logging
import os
import sys

_SRC_DIR = os.path.dirname(os.path.abspath(__file__))
if _SRC_DIR not in sys.path:
    sys.path.insert(0, _SRC_DIR)

from core.logging_config import setup_logging  # noqa: E402
setup_logging()

from core import config  # noqa: E402
from core.bot import Bot  # noqa: E402
from core.errors import ConfigError  # noqa: E402

logger = logging.getLogger("run")


def main() -> None:
    if not config.BOT_TOKEN:
        raise SystemExit("BOT_TOKEN manquant")
    try:
        config.check_ids()
        pairs = config.room_pairs()
    except ConfigError as exc:
        raise SystemExit(f"Configuration invalide: {exc}")
    logger.info("%d salle(s) de confinement configurée(s)", len(pairs))

    bot = Bot(room_pairs=pairs)
    try:
        # setup_logging a déjà installé les handlers
        bot.run(config.BOT_TOKEN, log_handler=None)
    except KeyboardInterrupt:
        logger.info("Arrêt manuel")


if __name__ == "__main__":
    main()
