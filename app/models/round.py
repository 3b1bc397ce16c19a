"""
Models / round.py
Rôle:
- Résultat typé d'un appel au générateur: union étiquetée `NormalRound | TrollRound`.
- Chaque variante vérifie ses invariants à la construction (qui est impostor, ce qu'il voit).

Invariants:
- NormalRound: au moins un Civil et un Impostor, aucun Civil ne voit autre chose que le mot.
- TrollRound:
  - espejo_total    → tout le monde Impostor, personne ne voit le vrai mot;
  - civil_solitario → exactement un Civil (qui voit le vrai mot);
  - falsa_alarma    → tout le monde Civil et voit le vrai mot.
"""
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Annotated, List, Literal, Optional, Union

from app.models.history import HistoryStore
from app.models.player import GamePlayer

TrollScenario = Literal["espejo_total", "civil_solitario", "falsa_alarma"]


class WordPair(BaseModel):
    """Entrée statique de la banque de mots."""
    civ: str = Field(..., min_length=1)  # mot civil
    imp: str = ""  # champ historique, non utilisé par le générateur
    hint: str = Field(..., min_length=1)  # pista décrivant le mot sans le dire

    model_config = ConfigDict(frozen=True)


class _RoundBase(BaseModel):
    players: List[GamePlayer]
    category: str
    word: str  # mot civil de base du round
    history: HistoryStore  # historique mis à jour, à conserver par l'appelant

    model_config = ConfigDict(frozen=True)

    @property
    def impostors(self) -> List[GamePlayer]:
        return [p for p in self.players if p.is_imp]

    def _check_civils_see_word(self) -> None:
        for p in self.players:
            if not p.is_imp and p.word != self.word:
                raise ValueError(f"civil {p.id} must see the round word")


class NormalRound(_RoundBase):
    kind: Literal["normal"] = "normal"

    @property
    def is_troll_event(self) -> bool:
        return False

    @property
    def troll_scenario(self) -> Optional[TrollScenario]:
        return None

    @model_validator(mode="after")
    def _check_roles(self) -> "NormalRound":
        imps = len(self.impostors)
        if imps == 0 or imps == len(self.players):
            raise ValueError("normal round needs both civils and impostors")
        self._check_civils_see_word()
        return self


class TrollRound(_RoundBase):
    kind: Literal["troll"] = "troll"
    scenario: TrollScenario

    @property
    def is_troll_event(self) -> bool:
        return True

    @property
    def troll_scenario(self) -> Optional[TrollScenario]:
        return self.scenario

    @model_validator(mode="after")
    def _check_scenario(self) -> "TrollRound":
        total = len(self.players)
        imps = len(self.impostors)
        if self.scenario == "espejo_total":
            if imps != total:
                raise ValueError("espejo_total: every player must be impostor")
            if any(p.word == self.word for p in self.players):
                raise ValueError("espejo_total: nobody may see the round word")
        elif self.scenario == "civil_solitario":
            if imps != total - 1:
                raise ValueError("civil_solitario: exactly one civil expected")
        elif imps != 0:
            raise ValueError("falsa_alarma: nobody may be impostor")
        self._check_civils_see_word()
        return self


RoundResult = Annotated[Union[NormalRound, TrollRound], Field(discriminator="kind")]
