"""
Service: game_session.py
Rôle:
- État d'une partie "un seul appareil" pour une session: roster, réglages, historique ARE,
  round courant et curseur de révélation.
- Sérialise les mises à jour de l'historique (un seul écrivain par session, verrou RLock);
  le générateur de rounds, lui, reste pur.

Phases:
- SETUP      : édition du roster et des réglages
- REVEALING  : les joueurs se passent l'appareil et révèlent leur carte un par un
- RESULTS    : écran de résultats (identités révélées à la demande)

Journal:
- Événements en mémoire `{id, kind, payload, ts}` bornés à `settings.MAX_SESSION_EVENTS`.
- Rien n'est persisté sur disque (l'historique vit le temps du process).
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from app.config.settings import settings as app_settings
from app.models.history import HistoryStore
from app.models.player import GamePlayer, Player
from app.models.round import RoundResult
from app.services.rng import RandomSource, choice, default_rng
from app.services.round_generator import InvalidConfigurationError, generate_round
from app.services.word_bank import WordBank, get_word_bank

logger = logging.getLogger(__name__)

PHASE_SETUP = "setup"
PHASE_REVEALING = "revealing"
PHASE_RESULTS = "results"


class PhaseError(RuntimeError):
    """Action impossible dans la phase courante."""


class PlayerNotFoundError(KeyError):
    """Identifiant joueur inconnu dans le roster."""


class GameSettings(BaseModel):
    hint_mode: bool = False
    troll_mode: bool = False  # désactivé par défaut
    impostor_count: int = Field(1, ge=1)
    selected_categories: List[str] = Field(default_factory=list)  # vide = toutes


@dataclass
class GameSession:
    session_id: str = field(default_factory=lambda: uuid4().hex)
    bank: WordBank = field(default_factory=get_word_bank, repr=False)
    rng: RandomSource = field(default_factory=default_rng, repr=False)
    _lock: RLock = field(default_factory=RLock, init=False, repr=False)
    players: List[Player] = field(default_factory=list)
    settings: GameSettings = field(default_factory=GameSettings)
    history: HistoryStore = field(default_factory=HistoryStore)
    phase: str = PHASE_SETUP
    round: Optional[RoundResult] = None
    current_player_index: int = 0
    starting_player: Optional[str] = None
    results_revealed: bool = False
    events: List[Dict[str, Any]] = field(default_factory=list)

    # -----------------------------
    # Roster
    # -----------------------------
    def add_player(self, name: str) -> Player:
        """Ajoute un joueur (nom unique dans le roster, insensible à la casse)."""
        clean = (name or "").strip()
        if not clean:
            raise ValueError("Player name must not be empty")
        with self._lock:
            self._require_phase(PHASE_SETUP)
            if any(p.name.lower() == clean.lower() for p in self.players):
                raise ValueError(f"Player '{clean}' already in roster")
            player = Player(id=uuid4().hex, name=clean)
            self.players.append(player)
            self._log_event_nolock("player_added", {"player_id": player.id, "display_name": clean})
            return player

    def remove_player(self, player_id: str) -> Player:
        with self._lock:
            self._require_phase(PHASE_SETUP)
            for idx, player in enumerate(self.players):
                if player.id == player_id:
                    del self.players[idx]
                    self._log_event_nolock("player_removed", {"player_id": player_id})
                    return player
            raise PlayerNotFoundError(player_id)

    # -----------------------------
    # Réglages
    # -----------------------------
    def update_settings(self, **changes: Any) -> GameSettings:
        """Met à jour les réglages (clés inconnues refusées, catégories validées)."""
        with self._lock:
            unknown = set(changes) - set(GameSettings.model_fields)
            if unknown:
                raise ValueError(f"Unknown settings: {sorted(unknown)}")
            merged = {**self.settings.model_dump(), **changes}
            self._check_categories(merged.get("selected_categories") or [])
            self.settings = GameSettings(**merged)
            self._log_event_nolock("settings_updated", self.settings.model_dump())
            return self.settings

    def toggle_category(self, name: str) -> List[str]:
        with self._lock:
            self._check_categories([name])
            current = list(self.settings.selected_categories)
            if name in current:
                current.remove(name)
            else:
                current.append(name)
            self.settings = self.settings.model_copy(update={"selected_categories": current})
            return current

    def toggle_all_categories(self) -> List[str]:
        """Tout sélectionné → on vide (= toutes), sinon on sélectionne tout."""
        with self._lock:
            all_names = self.bank.names()
            all_selected = set(self.settings.selected_categories) >= set(all_names)
            updated = [] if all_selected else all_names
            self.settings = self.settings.model_copy(update={"selected_categories": updated})
            return updated

    # -----------------------------
    # Rounds
    # -----------------------------
    def start_game(self) -> RoundResult:
        """Lance (ou relance) un round et réinitialise le curseur de révélation."""
        with self._lock:
            self._require_phase(PHASE_SETUP, PHASE_RESULTS)
            result = generate_round(
                self.players,
                self.settings.impostor_count,
                self.settings.hint_mode,
                self.settings.troll_mode,
                self.settings.selected_categories,
                self.history,
                bank=self.bank,
                rng=self.rng,
            )
            self.round = result
            self.history = result.history
            self.phase = PHASE_REVEALING
            self.current_player_index = 0
            self.results_revealed = False
            self.starting_player = choice(self.rng, self.players).name
            self._log_event_nolock("round_started", {
                "round": result.history.round_counter,
                "category": result.category,
                "starting_player": self.starting_player,
            })
            return result

    def current_card(self) -> GamePlayer:
        with self._lock:
            self._require_phase(PHASE_REVEALING)
            return self.round.players[self.current_player_index]

    def next_player(self) -> Optional[GamePlayer]:
        """Passe au joueur suivant; None quand tout le monde a vu sa carte (→ résultats)."""
        with self._lock:
            self._require_phase(PHASE_REVEALING)
            if self.current_player_index < len(self.round.players) - 1:
                self.current_player_index += 1
                return self.round.players[self.current_player_index]
            self.phase = PHASE_RESULTS
            self._log_event_nolock("reveal_finished", {"round": self.history.round_counter})
            return None

    def reveal_results(self) -> Dict[str, Any]:
        with self._lock:
            self._require_phase(PHASE_RESULTS)
            self.results_revealed = True
            result = self.round
            return {
                "round": result.history.round_counter,
                "category": result.category,
                "word": result.word,
                "is_troll_event": result.is_troll_event,
                "troll_scenario": result.troll_scenario,
                "starting_player": self.starting_player,
                "players": [p.model_dump() for p in result.players],
            }

    def back_to_setup(self) -> None:
        """Retour à la configuration (l'historique de session est conservé)."""
        with self._lock:
            self.phase = PHASE_SETUP
            self.round = None
            self.current_player_index = 0
            self.results_revealed = False

    # -----------------------------
    # Vues
    # -----------------------------
    def snapshot(self) -> Dict[str, Any]:
        """Vue publique: ne révèle aucun rôle ni mot."""
        with self._lock:
            return {
                "session_id": self.session_id,
                "phase": self.phase,
                "players": [p.model_dump() for p in self.players],
                "settings": self.settings.model_dump(),
                "round_counter": self.history.round_counter,
                "current_player_index": self.current_player_index,
                "starting_player": self.starting_player if self.phase == PHASE_RESULTS else None,
                "results_revealed": self.results_revealed,
                "events_count": len(self.events),
            }

    # -----------------------------
    # Journal
    # -----------------------------
    def _trim_events(self) -> None:
        overflow = len(self.events) - app_settings.MAX_SESSION_EVENTS
        if overflow > 0:
            del self.events[:overflow]

    def _log_event_nolock(self, kind: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        entry = {
            "id": str(uuid4()),
            "kind": kind,
            "payload": payload,
            "ts": time.time(),
        }
        self.events.append(entry)
        self._trim_events()
        logger.debug("session event", extra={"session_id": self.session_id, "kind": kind})
        return entry

    def events_snapshot(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [event.copy() for event in self.events]

    # -----------------------------
    # Gardes
    # -----------------------------
    def _require_phase(self, *allowed: str) -> None:
        if self.phase not in allowed:
            raise PhaseError(f"Action not allowed in phase '{self.phase}'")

    def _check_categories(self, names: List[str]) -> None:
        unknown = [n for n in names if n not in self.bank]
        if unknown:
            raise InvalidConfigurationError(f"Unknown categories: {unknown}")
