import pytest

from colormatch.components.game_session import GameMode
from colormatch.scoring import combo_bonus, next_dimension, points_for_match, win_bonus
from tests.helpers import arrange_grid, make_engine, play_pair


@pytest.mark.parametrize(
    "combo, bonus",
    [(0, 0), (1, 0), (2, 5), (3, 15), (4, 30), (5, 50), (9, 50)],
)
def test_combo_bonus_tiers(combo, bonus):
    assert combo_bonus(combo) == bonus


def test_points_include_base():
    assert points_for_match(1) == 10
    assert points_for_match(3) == 25


def test_win_bonus_by_mode():
    assert win_bonus(GameMode.TIME_ATTACK, time_remaining=42, lives=0) == 84
    assert win_bonus(GameMode.SURVIVAL, time_remaining=0, lives=2) == 20
    assert win_bonus(GameMode.CLASSIC, time_remaining=42, lives=3) == 0


def test_next_dimension_grows_and_caps():
    assert next_dimension(3) == 5
    assert next_dimension(5) == 7
    assert next_dimension(6) == 7
    assert next_dimension(7) == 7


def test_combo_accumulates_across_consecutive_matches():
    engine = make_engine(dimension=4)
    arrange_grid(engine, [0, 0, 1, 1, 2, 2, 3, 3, 0, 0, 1, 1, 2, 2, 3, 3])
    expected_scores = [10, 25, 50, 90, 150]
    for step, first in enumerate(range(0, 10, 2)):
        play_pair(engine, (first, first + 1))
        assert engine.combo_count == step + 1
        assert engine.score == expected_scores[step]


def test_wrong_pair_resets_combo_to_tier_one():
    engine = make_engine(dimension=4, mode=GameMode.TIME_ATTACK)
    arrange_grid(engine, [0, 0, 1, 1, 2, 2, 3, 3, 0, 0, 1, 1, 2, 2, 3, 3])
    play_pair(engine, (0, 1))
    play_pair(engine, (2, 3))
    assert engine.combo_count == 2
    play_pair(engine, (4, 6))
    assert engine.combo_count == 0
    score = engine.score
    play_pair(engine, (4, 5))
    assert engine.combo_count == 1
    assert engine.score == score + 10
