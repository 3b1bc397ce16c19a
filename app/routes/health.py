"""
Module routes/health.py
Rôle:
- Endpoint de santé (service OK + banque de mots chargée).

Intégrations:
- settings: nom d'app.
- get_word_bank: vérifie que le référentiel de mots est lisible.
"""
from fastapi import APIRouter

from app.config.settings import settings
from app.services.session_store import list_session_ids
from app.services.word_bank import WordBankError, get_word_bank

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health():
    """Renvoie un OK minimal avec le nom de service et l'état de la banque de mots."""
    try:
        categories = len(get_word_bank())
    except WordBankError as e:
        return {"ok": False, "service": settings.APP_NAME, "error": str(e)}
    return {
        "ok": True,
        "service": settings.APP_NAME,
        "categories": categories,
        "sessions": len(list_session_ids()),
    }
