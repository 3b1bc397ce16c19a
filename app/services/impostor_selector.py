"""
Service: impostor_selector.py
Rôle:
- Tirage pondéré sans remise de `count` impostors.

Stratégie:
1) Mélange uniforme du pool une seule fois (pas de biais positionnel).
2) À chaque itération: poids des candidats restants, tirage dans [0, total),
   parcours en soustrayant les poids jusqu'à reste <= 0.
3) Dérive flottante: si aucun candidat ne satisfait la condition, on prend le dernier.

Contrat appelant: `count < len(players)` (non re-vérifié ici).
"""
from __future__ import annotations

import logging
from typing import Callable, List, Sequence

from app.models.player import Player
from app.services.rng import RandomSource, shuffled

logger = logging.getLogger(__name__)

WeightFn = Callable[[Player], float]


def select_impostors(
    players: Sequence[Player],
    count: int,
    weight_fn: WeightFn,
    rng: RandomSource,
) -> List[Player]:
    pool = shuffled(rng, players)
    selected: List[Player] = []

    for _ in range(count):
        weights = [weight_fn(p) for p in pool]
        remaining = rng.random() * sum(weights)

        picked = len(pool) - 1
        for idx, weight in enumerate(weights):
            remaining -= weight
            if remaining <= 0:
                picked = idx
                break
        else:
            logger.debug("weighted draw fell through, using last candidate", extra={"pool_size": len(pool)})

        selected.append(pool.pop(picked))

    return selected
