"""
Service: word_bank.py
Rôle:
- Charger en mémoire la banque de mots (référentiel statique, lecture seule).
- Exposer `names()`, `get(name)` et un résumé par catégorie pour les routes.

Fichier source:
- app/data/categories.json → {"categories": {"<Catégorie>": [{civ, imp, hint}, ...]}}

Remarque:
- L'ordre des catégories et des paires est conservé (la "première paire" d'une
  catégorie est utilisée par le moteur de pistas troll).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from app.config.settings import settings
from app.models.round import WordPair
from .io_utils import read_json

logger = logging.getLogger(__name__)


class WordBankError(RuntimeError):
    """Banque de mots absente ou invalide."""


class WordBank:
    """Catalogue catégorie → paires de mots.

    Exemple d'entrée:
    {
      "Animales": [
        {"civ": "Perro", "imp": "Lobo", "hint": "Mejor amigo del hombre"}
      ]
    }
    """

    def __init__(self, categories: Mapping[str, Sequence[Any]]):
        parsed: Dict[str, List[WordPair]] = {}
        for name, pairs in categories.items():
            try:
                words = [p if isinstance(p, WordPair) else WordPair(**p) for p in pairs]
            except (TypeError, ValidationError) as exc:
                raise WordBankError(f"Invalid word pair in category '{name}': {exc}") from exc
            if not words:
                raise WordBankError(f"Category '{name}' is empty")
            parsed[name] = words
        if not parsed:
            raise WordBankError("Word bank has no categories")
        self.categories = parsed

    @classmethod
    def from_file(cls, path: Path) -> "WordBank":
        raw = read_json(path)
        if not isinstance(raw, dict) or not isinstance(raw.get("categories"), dict):
            raise WordBankError(f"Word bank file missing or malformed: {path}")
        bank = cls(raw["categories"])
        logger.info("word bank loaded", extra={"path": str(path), "categories": len(bank.categories)})
        return bank

    def names(self) -> List[str]:
        return list(self.categories.keys())

    def get(self, name: str) -> List[WordPair]:
        return self.categories[name]

    def __contains__(self, name: object) -> bool:
        return name in self.categories

    def __iter__(self) -> Iterator[str]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)

    def summary(self) -> List[Dict[str, Any]]:
        """Liste [{name, words}] pour l'écran de sélection des catégories."""
        return [{"name": name, "words": len(pairs)} for name, pairs in self.categories.items()]


_instance: Optional[WordBank] = None


def get_word_bank() -> WordBank:
    """Instance unique chargée à la demande depuis `settings.word_bank_path`."""
    global _instance
    if _instance is None:
        _instance = WordBank.from_file(Path(settings.word_bank_path))
    return _instance
