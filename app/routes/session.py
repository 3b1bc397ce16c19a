"""
Routes de session (un appareil partagé).

Objectifs :
- Création/lecture/suppression de sessions en mémoire.
- Gestion du roster et des réglages (mode pista, mode troll, catégories, nombre d'impostors).
- Cycle d'un round : lancement (ou "volver a jugar"), révélation carte par carte,
  résultats, retour à la configuration.

Codes retour :
- 404 session/joueur inconnu, 400 configuration invalide, 409 mauvaise phase.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from app.models.player import GamePlayer, Player
from app.services.game_session import GameSession, PhaseError, PlayerNotFoundError
from app.services.session_store import (
    SessionNotFoundError,
    create_session,
    drop_session,
    get_session,
)

router = APIRouter(prefix="/session", tags=["session"])


# ---------------------------------------------------------------------------
# Modèles Pydantic
# ---------------------------------------------------------------------------
class SessionCreatePayload(BaseModel):
    session_id: Optional[str] = Field(None, description="Identifiant imposé (sinon auto)")


class SessionCreateResponse(BaseModel):
    session_id: str
    players: List[Player]


class PlayerCreatePayload(BaseModel):
    name: str = Field(..., min_length=1, max_length=40)


class SettingsPayload(BaseModel):
    hint_mode: Optional[bool] = None
    troll_mode: Optional[bool] = None
    impostor_count: Optional[int] = Field(None, ge=1)
    selected_categories: Optional[List[str]] = Field(None, description="Vide = toutes les catégories")


class CategoryTogglePayload(BaseModel):
    name: str


class RoundStartResponse(BaseModel):
    session_id: str
    round: int
    players_count: int
    phase: str


class CardResponse(BaseModel):
    index: int
    total: int
    is_last: bool
    card: GamePlayer


class NextResponse(BaseModel):
    phase: str
    index: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _session_or_404(session_id: str) -> GameSession:
    try:
        return get_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="session_not_found")


@contextmanager
def _http_errors() -> Iterator[None]:
    """Traduit les erreurs métier en codes HTTP."""
    try:
        yield
    except PlayerNotFoundError:
        raise HTTPException(status_code=404, detail="player_not_found")
    except PhaseError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------
@router.post("", response_model=SessionCreateResponse)
def session_create(payload: Optional[SessionCreatePayload] = None):
    session = create_session((payload.session_id if payload else None))
    return SessionCreateResponse(session_id=session.session_id, players=session.players)


@router.get("/{session_id}")
def session_state(session_id: str) -> Dict[str, Any]:
    return _session_or_404(session_id).snapshot()


@router.delete("/{session_id}")
def session_delete(session_id: str):
    if not drop_session(session_id):
        raise HTTPException(status_code=404, detail="session_not_found")
    return {"ok": True, "session_id": session_id}


@router.get("/{session_id}/events")
def session_events(
    session_id: str,
    limit: int = Query(100, ge=1, le=500, description="Nombre maximum d'événements retournés"),
):
    events = _session_or_404(session_id).events_snapshot()
    return {"ok": True, "count": len(events[-limit:]), "events": events[-limit:]}


# ---------------------------------------------------------------------------
# Roster & réglages
# ---------------------------------------------------------------------------
@router.post("/{session_id}/players", response_model=Player)
def session_add_player(session_id: str, payload: PlayerCreatePayload):
    session = _session_or_404(session_id)
    with _http_errors():
        return session.add_player(payload.name)


@router.delete("/{session_id}/players/{player_id}", response_model=Player)
def session_remove_player(session_id: str, player_id: str):
    session = _session_or_404(session_id)
    with _http_errors():
        return session.remove_player(player_id)


@router.put("/{session_id}/settings")
def session_update_settings(session_id: str, payload: SettingsPayload):
    session = _session_or_404(session_id)
    with _http_errors():
        updated = session.update_settings(**payload.model_dump(exclude_none=True))
    return updated.model_dump()


@router.post("/{session_id}/categories/toggle")
def session_toggle_category(session_id: str, payload: CategoryTogglePayload):
    session = _session_or_404(session_id)
    with _http_errors():
        selected = session.toggle_category(payload.name)
    return {"selected_categories": selected}


@router.post("/{session_id}/categories/toggle_all")
def session_toggle_all_categories(session_id: str):
    selected = _session_or_404(session_id).toggle_all_categories()
    return {"selected_categories": selected}


# ---------------------------------------------------------------------------
# Round
# ---------------------------------------------------------------------------
@router.post("/{session_id}/start", response_model=RoundStartResponse)
def session_start(session_id: str):
    """Lance un round (ou rejoue depuis les résultats). Ne révèle aucun rôle."""
    session = _session_or_404(session_id)
    with _http_errors():
        result = session.start_game()
    return RoundStartResponse(
        session_id=session.session_id,
        round=result.history.round_counter,
        players_count=len(result.players),
        phase=session.phase,
    )


@router.get("/{session_id}/card", response_model=CardResponse)
def session_card(session_id: str):
    """Carte du joueur qui tient l'appareil."""
    session = _session_or_404(session_id)
    with _http_errors():
        card = session.current_card()
    total = len(session.round.players)
    index = session.current_player_index
    return CardResponse(index=index, total=total, is_last=index == total - 1, card=card)


@router.post("/{session_id}/next", response_model=NextResponse)
def session_next(session_id: str):
    session = _session_or_404(session_id)
    with _http_errors():
        session.next_player()
    return NextResponse(phase=session.phase, index=session.current_player_index)


@router.get("/{session_id}/results")
def session_results(session_id: str):
    session = _session_or_404(session_id)
    with _http_errors():
        return session.reveal_results()


@router.post("/{session_id}/setup")
def session_back_to_setup(session_id: str):
    session = _session_or_404(session_id)
    session.back_to_setup()
    return {"ok": True, "phase": session.phase}
