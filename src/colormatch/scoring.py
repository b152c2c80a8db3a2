"""Scoring rules: combo tiers, win bonuses and level growth."""
from __future__ import annotations

from colormatch.components.game_session import GameMode
from colormatch.constants import (
    BASE_MATCH_POINTS,
    LEVEL_GRID_STEP,
    LIVES_BONUS_PER_LIFE,
    MAX_GRID_SIZE,
    TIME_BONUS_PER_SECOND,
)

# combo count -> flat bonus; anything past the last tier keeps the last value
COMBO_TIERS = {1: 0, 2: 5, 3: 15, 4: 30, 5: 50}
_TOP_TIER = max(COMBO_TIERS)


def combo_bonus(combo_count: int) -> int:
    if combo_count <= 1:
        return 0
    return COMBO_TIERS[min(combo_count, _TOP_TIER)]


def points_for_match(combo_count: int) -> int:
    return BASE_MATCH_POINTS + combo_bonus(combo_count)


def win_bonus(mode: GameMode, *, time_remaining: int = 0, lives: int = 0) -> int:
    if mode is GameMode.TIME_ATTACK:
        return max(0, time_remaining) * TIME_BONUS_PER_SECOND
    if mode is GameMode.SURVIVAL:
        return max(0, lives) * LIVES_BONUS_PER_LIFE
    return 0


def next_dimension(dimension: int) -> int:
    return min(MAX_GRID_SIZE, dimension + LEVEL_GRID_STEP)
