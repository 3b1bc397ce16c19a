"""
Service: round_generator.py
Rôle:
- Orchestrer un round complet: porte troll, tirage du mot, poids ARE, tirage des impostors,
  construction des cartes `GamePlayer` et nouvel historique.

Contrat:
- generate_round(players, impostor_count, hint_mode, troll_mode, selected_categories,
  history, bank=None, rng=None) -> NormalRound | TrollRound
- Transformation pure: l'historique d'entrée n'est jamais modifié, le nouveau est renvoyé
  dans le résultat. Les cartes sont alignées 1:1 (ids, ordre) avec `players`.

Préconditions (durcies ici):
- len(players) >= 3 et 0 < impostor_count < len(players), ids uniques,
  sinon `InvalidConfigurationError`.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from app.models.history import HistoryStore, PlayerStats
from app.models.player import IMPOSTOR_MARKER, GamePlayer, Player, hint_text
from app.models.round import NormalRound, RoundResult
from app.services.fairness import are_weight
from app.services.impostor_selector import select_impostors
from app.services.rng import RandomSource, default_rng
from app.services.troll_engine import build_troll_round, roll_scenario, roll_troll
from app.services.word_bank import WordBank, get_word_bank
from app.services.word_selection import pick_word, push_recent_word

logger = logging.getLogger(__name__)

MIN_PLAYERS = 3


class InvalidConfigurationError(ValueError):
    """Paramètres de round incohérents (joueurs, nombre d'impostors)."""


def validate_round_config(players: Sequence[Player], impostor_count: int) -> None:
    if len(players) < MIN_PLAYERS:
        raise InvalidConfigurationError(f"At least {MIN_PLAYERS} players required")
    if not 0 < impostor_count < len(players):
        raise InvalidConfigurationError("Impostor count must be between 1 and players - 1")
    if len({p.id for p in players}) != len(players):
        raise InvalidConfigurationError("Player ids must be unique")


def _updated_stats(
    players: Sequence[Player],
    impostor_ids: Iterable[str],
    history: HistoryStore,
    current_round: int,
) -> Dict[str, PlayerStats]:
    stats = dict(history.player_stats)
    for player in players:
        stats.setdefault(player.id, PlayerStats())
    for pid in impostor_ids:
        previous = stats[pid]
        stats[pid] = PlayerStats(
            total_impostor_count=previous.total_impostor_count + 1,
            last_impostor_round=current_round,
        )
    return stats


def generate_round(
    players: Sequence[Player],
    impostor_count: int,
    hint_mode: bool,
    troll_mode: bool,
    selected_categories: Iterable[str],
    history: HistoryStore,
    bank: Optional[WordBank] = None,
    rng: Optional[RandomSource] = None,
) -> RoundResult:
    validate_round_config(players, impostor_count)
    bank = bank or get_word_bank()
    rng = rng or default_rng()
    selected = list(selected_categories)

    current_round = history.round_counter + 1

    if roll_troll(troll_mode, history, current_round, rng):
        scenario = roll_scenario(rng)
        category, pair = pick_word(selected, bank, history.last_words, rng)
        return build_troll_round(players, scenario, hint_mode, category, pair, bank, history, current_round, rng)

    category, pair = pick_word(selected, bank, history.last_words, rng)

    weights = {p.id: are_weight(history.stats_for(p.id), current_round) for p in players}
    impostors = select_impostors(players, impostor_count, lambda p: weights[p.id], rng)
    impostor_ids = {p.id for p in impostors}

    impostor_word = hint_text(pair.hint) if hint_mode else IMPOSTOR_MARKER
    game_players: List[GamePlayer] = []
    for player in players:
        is_imp = player.id in impostor_ids
        game_players.append(GamePlayer(
            id=player.id,
            name=player.name,
            role="Impostor" if is_imp else "Civil",
            word=impostor_word if is_imp else pair.civ,
            real_word=pair.civ,
            category=category,
            are_score=weights[player.id],
        ))

    new_history = HistoryStore(
        round_counter=current_round,
        last_words=push_recent_word(history.last_words, pair.civ),
        player_stats=_updated_stats(players, impostor_ids, history, current_round),
        last_troll_round=history.last_troll_round,
    )

    logger.info(
        "round generated",
        extra={"round": current_round, "category": category, "impostors": impostor_count, "hint_mode": hint_mode},
    )
    return NormalRound(players=game_players, category=category, word=pair.civ, history=new_history)
