"""
Service: fairness.py
Rôle:
- Poids ARE (Adaptive Role Equalizer) d'un joueur pour le tirage des impostors.

Calcul:
1) base = 100 / (total_impostor_count + 1)  → décroissance harmonique, jamais nulle.
2) Si le joueur a déjà été impostor, écart `gap = current_round - last_impostor_round`:
   - gap 1 → x0.05, gap 2 → x0.20, gap 3 → x0.50;
   - gap 4..5 → zone neutre;
   - gap > 5 → bonus additif (gap - 5) * 15 (non borné: "ton tour arrive").
Fonction pure: tout l'aléa vit chez l'appelant.
"""
from typing import Dict, Optional

from app.models.history import PlayerStats

BASE_WEIGHT = 100.0
RECENCY_MULTIPLIERS: Dict[int, float] = {1: 0.05, 2: 0.20, 3: 0.50}
NEUTRAL_GAP_MAX = 5
DROUGHT_BONUS_PER_ROUND = 15.0


def are_weight(stats: Optional[PlayerStats], current_round: int) -> float:
    stats = stats or PlayerStats()
    weight = BASE_WEIGHT / (stats.total_impostor_count + 1)

    if stats.last_impostor_round is None:
        return weight

    gap = current_round - stats.last_impostor_round
    if gap in RECENCY_MULTIPLIERS:
        weight *= RECENCY_MULTIPLIERS[gap]
    elif gap > NEUTRAL_GAP_MAX:
        weight += (gap - NEUTRAL_GAP_MAX) * DROUGHT_BONUS_PER_ROUND
    return weight
