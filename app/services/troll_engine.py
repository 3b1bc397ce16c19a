"""
Service: troll_engine.py
Rôle:
- "Protocolo Pandora": décider si un round est un round troll et lequel des trois scénarios s'applique.
- Moteur de pistas "Babylon": pistas par joueur, dont une pista de bruit volontairement hors sujet.

Porte d'éligibilité:
- mode troll activé ET pas de cooldown. Le cooldown est actif si `last_troll_round` est
  renseigné et `current_round - last_troll_round <= 5`.
- Déclenchement: tirage uniforme < 0.15 (fixe, seul le on/off est configurable).
- Scénario: tirage dans [0, 100) → < 70 espejo_total, < 90 civil_solitario, sinon falsa_alarma.

Pistas (mode pista activé, sinon marqueur plat "ERES EL IMPOSTOR"):
- une "victime du bruit" tirée parmi les index joueurs reçoit la pista de la PREMIÈRE paire
  d'une autre catégorie tirée au hasard;
- les autres impostors: 50% le nom de la catégorie, sinon la pista d'une paire au hasard
  de la même catégorie.

Historique:
- round_counter avance, last_troll_round = round courant;
- player_stats et last_words ne bougent pas.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from app.models.history import HistoryStore
from app.models.player import IMPOSTOR_MARKER, GamePlayer, Player, hint_text
from app.models.round import TrollRound, TrollScenario, WordPair
from app.services.rng import RandomSource, choice, pick_index
from app.services.word_bank import WordBank

logger = logging.getLogger(__name__)

TROLL_PROBABILITY = 0.15
TROLL_COOLDOWN_ROUNDS = 5
CATEGORY_HINT_PROBABILITY = 0.5
NOISE_PAIR_INDEX = 0
# Bornes cumulées sur [0, 100): 70 / 20 / 10
SCENARIO_THRESHOLDS = (
    ("espejo_total", 70.0),
    ("civil_solitario", 90.0),
)
FALLBACK_SCENARIO: TrollScenario = "falsa_alarma"


# -------------------- porte & tirages --------------------

def cooldown_active(history: HistoryStore, current_round: int) -> bool:
    if history.last_troll_round is None:
        return False
    return current_round - history.last_troll_round <= TROLL_COOLDOWN_ROUNDS


def troll_eligible(troll_mode: bool, history: HistoryStore, current_round: int) -> bool:
    return bool(troll_mode) and not cooldown_active(history, current_round)


def roll_troll(troll_mode: bool, history: HistoryStore, current_round: int, rng: RandomSource) -> bool:
    """Aucun tirage n'est consommé si la porte est fermée."""
    if not troll_eligible(troll_mode, history, current_round):
        return False
    return rng.random() < TROLL_PROBABILITY


def roll_scenario(rng: RandomSource) -> TrollScenario:
    roll = rng.random() * 100
    for scenario, bound in SCENARIO_THRESHOLDS:
        if roll < bound:
            return scenario  # type: ignore[return-value]
    return FALLBACK_SCENARIO


# -------------------- pistas Babylon --------------------

def noise_hint(category: str, bank: WordBank, rng: RandomSource) -> str:
    others = [name for name in bank.names() if name != category] or [category]
    noise_category = choice(rng, others)
    pair = bank.get(noise_category)[NOISE_PAIR_INDEX]
    logger.debug("babylon noise hint", extra={"round_category": category, "noise_category": noise_category})
    return hint_text(pair.hint)


def babylon_hint(category: str, bank: WordBank, rng: RandomSource) -> str:
    if rng.random() < CATEGORY_HINT_PROBABILITY:
        return hint_text(category)
    return hint_text(choice(rng, bank.get(category)).hint)


def _impostor_view(
    index: int,
    noise_victim: Optional[int],
    hint_mode: bool,
    category: str,
    bank: WordBank,
    rng: RandomSource,
) -> str:
    if not hint_mode:
        return IMPOSTOR_MARKER
    if index == noise_victim:
        return noise_hint(category, bank, rng)
    return babylon_hint(category, bank, rng)


# -------------------- construction du round --------------------

def build_troll_round(
    players: Sequence[Player],
    scenario: TrollScenario,
    hint_mode: bool,
    category: str,
    pair: WordPair,
    bank: WordBank,
    history: HistoryStore,
    current_round: int,
    rng: RandomSource,
) -> TrollRound:
    civil_index: Optional[int] = None
    if scenario == "civil_solitario":
        civil_index = pick_index(rng, len(players))

    noise_victim: Optional[int] = None
    if hint_mode and scenario != "falsa_alarma":
        noise_victim = pick_index(rng, len(players))

    game_players: List[GamePlayer] = []
    for index, player in enumerate(players):
        is_civil = scenario == "falsa_alarma" or index == civil_index
        if is_civil:
            role, word = "Civil", pair.civ
        else:
            role, word = "Impostor", _impostor_view(index, noise_victim, hint_mode, category, bank, rng)
        game_players.append(GamePlayer(
            id=player.id,
            name=player.name,
            role=role,
            word=word,
            real_word=pair.civ,
            category=category,
            are_score=0.0,
        ))

    new_history = history.model_copy(update={
        "round_counter": current_round,
        "last_troll_round": current_round,
    })

    logger.info(
        "troll round generated",
        extra={"round": current_round, "scenario": scenario, "category": category, "hint_mode": hint_mode},
    )
    return TrollRound(
        players=game_players,
        category=category,
        word=pair.civ,
        history=new_history,
        scenario=scenario,
    )
