"""
Service: word_selection.py
Rôle:
- Tirer la catégorie puis la paire de mots d'un round, en évitant les mots récents.

Règles:
- Sélection vide = pas de filtre (toutes les catégories). Les noms inconnus sont ignorés;
  s'il n'en reste aucun, on retombe aussi sur toutes les catégories.
- Les paires dont `civ` figure dans `recent_words` sont écartées; si la catégorie est
  épuisée, on reprend la liste complète (évitement "best effort").
"""
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from app.models.history import RECENT_WORDS_LIMIT
from app.models.round import WordPair
from app.services.rng import RandomSource, choice
from app.services.word_bank import WordBank


def candidate_categories(selected: Iterable[str], bank: WordBank) -> List[str]:
    known = [name for name in dict.fromkeys(selected) if name in bank]
    return known or bank.names()


def pick_word(
    selected: Iterable[str],
    bank: WordBank,
    recent_words: Sequence[str],
    rng: RandomSource,
) -> Tuple[str, WordPair]:
    category = choice(rng, candidate_categories(selected, bank))
    pairs = bank.get(category)
    recent = set(recent_words)
    fresh = [p for p in pairs if p.civ not in recent]
    return category, choice(rng, fresh or pairs)


def push_recent_word(recent_words: Sequence[str], word: str) -> List[str]:
    """Nouvelle liste: `word` en tête, bornée à RECENT_WORDS_LIMIT."""
    return [word, *recent_words][:RECENT_WORDS_LIMIT]
