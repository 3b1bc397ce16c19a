import random

import pytest

from app.models.history import RECENT_WORDS_LIMIT, HistoryStore, PlayerStats
from app.models.player import HINT_PREFIX, IMPOSTOR_MARKER, Player
from app.models.round import NormalRound, TrollRound
from app.services import round_generator
from app.services.round_generator import InvalidConfigurationError, generate_round


def _run(players, bank, rng, history=None, impostor_count=1, hint_mode=False, troll_mode=False, categories=()):
    return generate_round(
        players,
        impostor_count,
        hint_mode,
        troll_mode,
        list(categories),
        history or HistoryStore(),
        bank=bank,
        rng=rng,
    )


def test_single_impostor_sees_marker_and_civils_share_word(players, bank):
    result = _run(players, bank, random.Random(11))

    assert isinstance(result, NormalRound)
    assert result.is_troll_event is False
    assert result.troll_scenario is None
    impostors = [p for p in result.players if p.is_imp]
    civils = [p for p in result.players if not p.is_imp]
    assert len(impostors) == 1
    assert impostors[0].word == IMPOSTOR_MARKER
    assert len(civils) == 3
    assert len({p.real_word for p in result.players}) == 1
    assert all(p.word == p.real_word == result.word for p in civils)


def test_output_mirrors_input_order(players, bank):
    result = _run(players, bank, random.Random(5), impostor_count=2)
    assert [p.id for p in result.players] == [p.id for p in players]
    assert [p.name for p in result.players] == [p.name for p in players]
    assert len(result.impostors) == 2


def test_hint_mode_gives_impostor_the_pair_hint(players, bank):
    result = _run(players, bank, random.Random(8), hint_mode=True, categories=["Deportes"])
    impostor = result.impostors[0]
    assert impostor.word == HINT_PREFIX + "Raqueta y red"
    assert impostor.category == "Deportes"


def test_history_updated_without_mutating_input(players, bank):
    history = HistoryStore(round_counter=4, last_words=["Gato"], last_troll_round=1)
    result = _run(players, bank, random.Random(3), history=history)

    new = result.history
    assert new.round_counter == 5
    assert new.last_words[0] == result.word
    assert new.last_words[1:] == ["Gato"]
    assert new.last_troll_round == 1
    assert set(new.player_stats) == {p.id for p in players}
    imp_id = result.impostors[0].id
    assert new.player_stats[imp_id] == PlayerStats(total_impostor_count=1, last_impostor_round=5)

    assert history.round_counter == 4
    assert history.last_words == ["Gato"]
    assert history.player_stats == {}


def test_are_score_reports_selection_weight(players, bank):
    history = HistoryStore(
        round_counter=2,
        player_stats={"p1": PlayerStats(total_impostor_count=1, last_impostor_round=2)},
    )
    result = _run(players, bank, random.Random(1), history=history)
    scores = {p.id: p.are_score for p in result.players}
    assert scores["p1"] == pytest.approx(50 * 0.05)
    assert scores["p2"] == pytest.approx(100.0)


def test_recent_words_capped_over_many_rounds(players, bank):
    rng = random.Random(21)
    history = HistoryStore()
    for _ in range(40):
        result = _run(players, bank, rng, history=history)
        assert result.history.last_words[0] == result.word
        history = result.history
        assert len(history.last_words) <= RECENT_WORDS_LIMIT
    assert history.round_counter == 40


def test_repeat_impostor_is_weighted_below_everyone(players, bank, monkeypatch):
    forced = players[0]
    monkeypatch.setattr(round_generator, "select_impostors", lambda pool, count, weight_fn, rng: [forced])
    history = HistoryStore()
    for _ in range(5):
        history = _run(players, bank, random.Random(0), history=history).history
    monkeypatch.undo()

    assert history.player_stats[forced.id].total_impostor_count == 5
    result = _run(players, bank, random.Random(0), history=history)
    scores = {p.id: p.are_score for p in result.players}
    assert all(scores[forced.id] < scores[p.id] for p in players[1:])


def test_cooldown_blocks_troll_even_when_draws_force_it(players, bank, scripted):
    history = HistoryStore(round_counter=9, last_troll_round=7)  # round courant 10 → écart 3
    result = _run(players, bank, scripted(default=0.0), history=history, troll_mode=True)
    assert isinstance(result, NormalRound)
    assert result.history.last_troll_round == 7


def test_no_troll_within_five_rounds_of_previous(players, bank, scripted):
    history = HistoryStore()
    troll_rounds = []
    for _ in range(13):
        result = _run(players, bank, scripted(default=0.0), history=history, troll_mode=True)
        history = result.history
        if result.is_troll_event:
            troll_rounds.append(history.round_counter)
    assert troll_rounds == [1, 7, 13]


def test_troll_round_leaves_stats_and_words(players, bank, scripted):
    history = HistoryStore(round_counter=2, last_words=["Perro"], player_stats={"p1": PlayerStats()})
    result = _run(players, bank, scripted(default=0.0), history=history, troll_mode=True)

    assert isinstance(result, TrollRound)
    assert result.troll_scenario == "espejo_total"
    assert all(p.is_imp for p in result.players)
    assert result.history.round_counter == 3
    assert result.history.last_troll_round == 3
    assert result.history.last_words == ["Perro"]
    assert result.history.player_stats == history.player_stats


def test_forced_false_alarm(players, bank, scripted):
    rng = scripted([0.0, 0.95], default=0.5)
    result = _run(players, bank, rng, troll_mode=True, hint_mode=True)

    assert result.is_troll_event is True
    assert result.troll_scenario == "falsa_alarma"
    assert all(not p.is_imp for p in result.players)
    assert all(p.word == p.real_word for p in result.players)


def test_troll_mode_off_never_trolls(players, bank, scripted):
    result = _run(players, bank, scripted(default=0.0), troll_mode=False)
    assert isinstance(result, NormalRound)


@pytest.mark.parametrize("roster_size, impostors", [(2, 1), (4, 0), (4, 4), (3, 5)])
def test_invalid_configuration_rejected(bank, roster_size, impostors):
    roster = [Player(id=str(i), name=f"J{i}") for i in range(roster_size)]
    with pytest.raises(InvalidConfigurationError):
        _run(roster, bank, random.Random(0), impostor_count=impostors)


def test_duplicate_ids_rejected(bank):
    roster = [Player(id="x", name="A"), Player(id="x", name="B"), Player(id="y", name="C")]
    with pytest.raises(InvalidConfigurationError):
        _run(roster, bank, random.Random(0))
