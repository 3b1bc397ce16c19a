import random

import pytest

from app.models.history import RECENT_WORDS_LIMIT
from app.services.word_bank import WordBank, WordBankError
from app.services.word_selection import candidate_categories, pick_word, push_recent_word


def test_empty_selection_means_every_category(bank):
    assert candidate_categories([], bank) == ["Animales", "Comida", "Deportes"]


def test_unknown_categories_are_ignored(bank):
    assert candidate_categories(["Comida", "Planetas"], bank) == ["Comida"]
    assert candidate_categories(["Planetas"], bank) == bank.names()


def test_pick_respects_selection(bank):
    rng = random.Random(3)
    for _ in range(20):
        category, pair = pick_word(["Comida"], bank, [], rng)
        assert category == "Comida"
        assert pair.civ in {"Paella", "Churros"}


def test_recent_words_are_avoided(bank):
    rng = random.Random(9)
    for _ in range(20):
        _, pair = pick_word(["Animales"], bank, ["Perro", "Gato"], rng)
        assert pair.civ == "Pulpo"


def test_exhausted_category_falls_back_to_full_list(bank, scripted):
    category, pair = pick_word(["Deportes"], bank, ["Tenis"], scripted([0.0, 0.0]))
    assert category == "Deportes"
    assert pair.civ == "Tenis"


def test_push_recent_word_caps_history():
    recent = [f"w{i}" for i in range(RECENT_WORDS_LIMIT)]
    updated = push_recent_word(recent, "nuevo")
    assert updated[0] == "nuevo"
    assert len(updated) == RECENT_WORDS_LIMIT
    assert updated[-1] == f"w{RECENT_WORDS_LIMIT - 2}"
    assert recent[0] == "w0"


def test_word_bank_rejects_empty_category():
    with pytest.raises(WordBankError):
        WordBank({"Vacía": []})


def test_word_bank_rejects_pair_without_hint():
    with pytest.raises(WordBankError):
        WordBank({"Animales": [{"civ": "Perro"}]})


def test_default_word_bank_file_loads():
    from pathlib import Path

    from app.config.settings import settings

    bank = WordBank.from_file(Path(settings.word_bank_path))
    assert len(bank) >= 5
    assert all(entry["words"] > 0 for entry in bank.summary())
