"""
Service: rng.py
Rôle:
- Abstraire la source d'aléa du générateur (une seule méthode: `random() -> float` dans [0, 1)).
- `random.Random` satisfait le protocole; les tests injectent des séquences scriptées.

Helpers:
- pick_index(rng, n): index uniforme dans [0, n).
- choice(rng, items): élément uniforme.
- shuffled(rng, items): copie mélangée (Fisher–Yates).
"""
from __future__ import annotations

import random
from typing import List, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    def random(self) -> float:
        ...


def default_rng() -> RandomSource:
    return random.Random()


def pick_index(rng: RandomSource, n: int) -> int:
    if n <= 0:
        raise ValueError("cannot pick from an empty sequence")
    # borne haute: une source scriptée peut renvoyer 1.0
    return min(int(rng.random() * n), n - 1)


def choice(rng: RandomSource, items: Sequence[T]) -> T:
    return items[pick_index(rng, len(items))]


def shuffled(rng: RandomSource, items: Sequence[T]) -> List[T]:
    """Fisher–Yates uniforme sur une copie (l'entrée n'est pas modifiée)."""
    pool = list(items)
    for i in range(len(pool) - 1, 0, -1):
        j = pick_index(rng, i + 1)
        pool[i], pool[j] = pool[j], pool[i]
    return pool
