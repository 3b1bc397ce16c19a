"""
Session store registry
======================

Expose des helpers pour récupérer la `GameSession` d'un identifiant de session.
Les instances vivent uniquement en mémoire (perdues au redémarrage du process)
et sont créées à la demande.
"""
from __future__ import annotations

import logging
from threading import RLock
from typing import Dict, Optional
from uuid import uuid4

from app.config.settings import settings
from .game_session import GameSession

logger = logging.getLogger(__name__)

_SESSIONS: Dict[str, GameSession] = {}
_LOCK = RLock()


class SessionNotFoundError(KeyError):
    """Aucune session en mémoire pour cet identifiant."""


def create_session(session_id: Optional[str] = None, **kwargs) -> GameSession:
    """
    Crée une nouvelle session (roster initial = `settings.DEFAULT_PLAYERS`).
    Une session existante portant le même identifiant est remplacée.
    """
    sid = (session_id or uuid4().hex).strip() or uuid4().hex
    session = GameSession(session_id=sid, **kwargs)
    for name in settings.DEFAULT_PLAYERS:
        session.add_player(name)
    with _LOCK:
        _SESSIONS[sid] = session
    logger.info("session created", extra={"session_id": sid})
    return session


def get_session(session_id: str) -> GameSession:
    with _LOCK:
        session = _SESSIONS.get(session_id)
    if session is None:
        raise SessionNotFoundError(session_id)
    return session


def drop_session(session_id: str) -> bool:
    """Retire une session du registre. Renvoie False si elle n'existait pas."""
    with _LOCK:
        return _SESSIONS.pop(session_id, None) is not None


def list_session_ids() -> list[str]:
    """Retourne la liste des sessions actuellement chargées en mémoire."""
    with _LOCK:
        return list(_SESSIONS.keys())
