"""
Configuration de l'application (Settings)
=========================================

Rôle
----
- Centraliser les paramètres de l'app (nom, host/port, chemins, logs, CORS…).
- Les valeurs par défaut conviennent pour un environnement de dev local.
- Les variables peuvent être surchargées via un fichier `.env` ou l'environnement.

Intégrations
------------
- `pydantic-settings` charge automatiquement les variables d'env et `.env`.
- Les services/routers importent `from app.config.settings import settings`.

Notes
-----
- `DATA_DIR` calcule un chemin relatif au repo : `<repo>/app/data`.
- `WORD_BANK_FILE` est résolu relativement à `DATA_DIR` s'il n'est pas absolu.
- Les listes (`ALLOWED_ORIGINS`, `DEFAULT_PLAYERS`) se passent en JSON dans l'env.

Exemples de `.env`
------------------
APP_NAME="Impostor Backend (Staging)"
HOST="0.0.0.0"
PORT=8080
LOG_LEVEL="DEBUG"
DEFAULT_PLAYERS='["Ana", "Luis", "Marta"]'
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import os


class Settings(BaseSettings):
    # Nom du service (apparaît dans /health)
    APP_NAME: str = "Impostor Backend"
    # Bind réseau (FastAPI / Uvicorn)
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Niveau de log racine (DEBUG, INFO, WARNING…)
    LOG_LEVEL: str = "INFO"

    # Frontends autorisés (CORS)
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    # Répertoire des données statiques (banque de mots)
    # Par défaut: <repo>/app/data
    DATA_DIR: str = os.path.join(os.path.dirname(os.path.dirname(__file__)), "data")
    WORD_BANK_FILE: str = "categories.json"

    # Roster initial d'une nouvelle session (vide par défaut)
    DEFAULT_PLAYERS: List[str] = []

    # Bornage du journal d'événements en mémoire (par session)
    MAX_SESSION_EVENTS: int = 500

    # Paramétrage pydantic-settings :
    # - lit le fichier .env (UTF-8) si présent
    # - ignore les clés supplémentaires pour éviter les erreurs
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def word_bank_path(self) -> str:
        if os.path.isabs(self.WORD_BANK_FILE):
            return self.WORD_BANK_FILE
        return os.path.join(self.DATA_DIR, self.WORD_BANK_FILE)


# Instance unique importable partout : `settings`
settings = Settings()
