"""
Models / history.py
Rôle:
- Historique de session consommé et renvoyé par le générateur de rounds.

Cycle de vie:
- Créé vide au démarrage de la session, jamais modifié en place: chaque round
  produit un nouveau `HistoryStore` (modèles figés).
- `None` sert de sentinelle "jamais" pour `last_impostor_round` et
  `last_troll_round` (un `last_troll_round` à None = cooldown inactif).
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional

RECENT_WORDS_LIMIT = 15


class PlayerStats(BaseModel):
    """Statistiques ARE d'un joueur (clé: player id)."""
    total_impostor_count: int = Field(0, ge=0)
    last_impostor_round: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class HistoryStore(BaseModel):
    """Snapshot de l'historique (compteur, mots récents, stats, dernier troll)."""
    round_counter: int = Field(0, ge=0)
    last_words: List[str] = Field(default_factory=list, max_length=RECENT_WORDS_LIMIT)  # plus récent en tête
    player_stats: Dict[str, PlayerStats] = Field(default_factory=dict)
    last_troll_round: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    def stats_for(self, player_id: str) -> PlayerStats:
        return self.player_stats.get(player_id) or PlayerStats()
