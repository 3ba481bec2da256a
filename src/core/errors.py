"""
Erreurs applicatives.

- ConfigError : configuration invalide (fatale au démarrage)
- StateError et dérivées : échecs du stockage clé/valeur, remontés tels quels
  jusqu'à la couche commande (aucun retry)
"""
from __future__ import annotations


class ConfigError(Exception):
    pass


class StateError(Exception):
    """Erreur de base du stockage d'état, porte la clé concernée."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"{self.__class__.__name__}: {key}")


class StateNotFound(StateError):
    """Clé absente : attendu au premier lancement (déclenche l'initialisation)."""


class StateDeserializeError(StateError):
    """Contenu stocké illisible ou de forme inattendue."""


class StoreUnavailable(StateError):
    """Backend injoignable ou en erreur."""


__all__ = ["ConfigError", "StateError", "StateNotFound", "StateDeserializeError", "StoreUnavailable"]
