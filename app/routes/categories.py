"""
Module routes/categories.py
Rôle:
- Exposer la banque de mots (noms de catégories + nombre de mots) pour l'écran "Banco de Datos".
- Ne renvoie jamais les mots eux-mêmes.
"""
from fastapi import APIRouter

from app.services.word_bank import get_word_bank

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("")
def list_categories():
    bank = get_word_bank()
    return {"count": len(bank), "categories": bank.summary()}
