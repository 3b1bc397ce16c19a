import random

from app.models.player import Player
from app.services.impostor_selector import select_impostors
from app.services.rng import shuffled


def test_selects_distinct_players(players):
    chosen = select_impostors(players, 3, lambda p: 1.0, random.Random(4))
    assert len(chosen) == 3
    assert len({p.id for p in chosen}) == 3
    assert {p.id for p in chosen} <= {p.id for p in players}


def test_does_not_mutate_input(players):
    before = list(players)
    select_impostors(players, 2, lambda p: 1.0, random.Random(1))
    assert players == before


def test_zero_draw_picks_first_of_shuffled_pool(players, scripted):
    # 3 tirages de mélange (n=4) puis le tirage pondéré à 0.0
    shuffle_draws = [0.9, 0.1, 0.6]
    expected_pool = shuffled(scripted(list(shuffle_draws)), players)

    rng = scripted(shuffle_draws + [0.0])
    chosen = select_impostors(players, 1, lambda p: 1.0, rng)
    assert chosen == [expected_pool[0]]


def test_float_drift_falls_back_to_last_candidate(players, scripted):
    # poids NaN: aucune soustraction ne descend sous 0 → dernier candidat
    rng = scripted([0.0, 0.0, 0.0, 0.5])
    pool = shuffled(scripted([0.0, 0.0, 0.0]), players)
    chosen = select_impostors(players, 1, lambda p: float("nan"), rng)
    assert chosen == [pool[-1]]


def test_heavy_weight_dominates():
    roster = [Player(id=str(i), name=f"J{i}") for i in range(5)]
    weights = {"0": 10_000.0}
    rng = random.Random(42)
    hits = sum(
        select_impostors(roster, 1, lambda p: weights.get(p.id, 0.05), rng)[0].id == "0"
        for _ in range(200)
    )
    assert hits > 190
