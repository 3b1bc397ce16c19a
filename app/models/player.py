"""
Models / player.py
Rôle:
- Définir le joueur du roster (`Player`) et sa vue de round (`GamePlayer`).

Champs (GamePlayer):
- role: "Civil" | "Impostor".
- word: texte affiché sur la carte (mot civil, marqueur impostor ou pista).
- real_word: vrai mot civil du round (écran de résultats).
- is_imp: dérivé de `role` (jamais fixé à la main).
- category: catégorie tirée pour le round.
- are_score: poids ARE au moment du tirage (0 en round troll, informatif).
"""
from pydantic import BaseModel, ConfigDict, Field, computed_field
from typing import Literal

Role = Literal["Civil", "Impostor"]

IMPOSTOR_MARKER = "ERES EL IMPOSTOR"
HINT_PREFIX = "PISTA: "


def hint_text(text: str) -> str:
    """Formate une pista telle qu'affichée sur la carte."""
    return f"{HINT_PREFIX}{text}"


class Player(BaseModel):
    """Joueur du roster actif (immuable; renommer = retirer puis ré-ajouter)."""
    id: str  # identifiant stable pour la session
    name: str  # nom affiché

    model_config = ConfigDict(frozen=True)


class GamePlayer(Player):
    """Carte d'un joueur pour un round donné."""
    role: Role
    word: str
    real_word: str
    category: str
    are_score: float = Field(0.0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_imp(self) -> bool:
        return self.role == "Impostor"
