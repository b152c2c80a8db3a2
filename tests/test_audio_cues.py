import logging

from colormatch.components.game_session import GameMode
from tests.helpers import arrange_grid, make_engine, play_pair


def _audio(engine):
    return engine.world.systems["audio"]


def test_cues_follow_play():
    played = []
    engine = make_engine(dimension=4, mode=GameMode.SURVIVAL, cue_player=played.append)
    arrange_grid(engine, [0, 0, 1, 1, 2, 2, 3, 3, 0, 0, 1, 1, 2, 2, 3, 3])
    for first in (0, 2, 4):
        play_pair(engine, (first, first + 1))
    play_pair(engine, (6, 8))
    assert played == [
        "tap", "tap", "match",
        "tap", "tap", "match",
        "tap", "tap", "combo",
        "tap", "tap", "wrong",
    ]


def test_win_and_lose_cues():
    played = []
    engine = make_engine(dimension=2, cue_player=played.append)
    arrange_grid(engine, [0, 1, 1, 0])
    play_pair(engine, (0, 1))
    assert played[-1] == "lose"
    engine.start_new_game()
    arrange_grid(engine, [0, 1, 1, 0])
    play_pair(engine, (0, 3))
    play_pair(engine, (1, 2))
    assert played[-1] == "win"


def test_muted_engine_plays_nothing():
    played = []
    engine = make_engine(dimension=2, cue_player=played.append, sound_enabled=False)
    engine.select_cell(0)
    assert played == []
    assert list(_audio(engine).history) == []


def test_failing_player_is_logged(caplog):
    def explode(cue):
        raise RuntimeError("no audio device")

    with caplog.at_level(logging.ERROR):
        engine = make_engine(dimension=2, cue_player=explode)
        engine.select_cell(0)
    assert engine.pending_index == 0
    assert list(_audio(engine).history) == ["tap"]
    assert "Cue player failed" in caplog.text


def test_haptic_player_follows_its_own_setting():
    played, felt = [], []
    engine = make_engine(dimension=2, cue_player=played.append, haptic_player=felt.append, sound_enabled=False)
    engine.select_cell(0)
    assert played == []
    assert felt == ["tap"]

    felt.clear()
    engine = make_engine(dimension=2, haptic_player=felt.append, haptics_enabled=False)
    engine.select_cell(0)
    assert felt == []


def test_failing_haptic_player_does_not_block_sound(caplog):
    played = []

    def explode(cue):
        raise RuntimeError("no motor")

    with caplog.at_level(logging.ERROR):
        engine = make_engine(dimension=2, cue_player=played.append, haptic_player=explode)
        engine.select_cell(0)
    assert played == ["tap"]
    assert "Haptic player failed on tap" in caplog.text
