from __future__ import annotations

from typing import Iterable, List

import pytest

from app.models.player import Player
from app.services.word_bank import WordBank


class ScriptedRandom:
    """Source d'aléa rejouant une séquence, puis `default` indéfiniment."""

    def __init__(self, values: Iterable[float] = (), default: float = 0.5):
        self.values: List[float] = list(values)
        self.default = default
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def bank() -> WordBank:
    return WordBank({
        "Animales": [
            {"civ": "Perro", "imp": "Lobo", "hint": "Mejor amigo del hombre"},
            {"civ": "Gato", "imp": "Tigre", "hint": "Duerme todo el día"},
            {"civ": "Pulpo", "imp": "Calamar", "hint": "Ocho brazos"},
        ],
        "Comida": [
            {"civ": "Paella", "imp": "Arroz negro", "hint": "Domingo en Valencia"},
            {"civ": "Churros", "imp": "Porras", "hint": "Se mojan en chocolate"},
        ],
        "Deportes": [
            {"civ": "Tenis", "imp": "Pádel", "hint": "Raqueta y red"},
        ],
    })


@pytest.fixture
def players() -> List[Player]:
    return [Player(id=f"p{i}", name=name) for i, name in enumerate(["Ana", "Luis", "Marta", "Sergio"], start=1)]
