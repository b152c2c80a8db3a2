import logging

import pytest

from colormatch.components.best_score import BestScore
from colormatch.components.game_session import GameMode, Outcome
from colormatch.components.tile_reset import TileReset
from colormatch.errors import ConfigurationError
from colormatch.events.bus import (
    EVENT_BEST_SCORE_CHANGED,
    EVENT_SESSION_END_REQUEST,
    EVENT_SESSION_ENDED,
    EVENT_SESSION_STARTED,
)
from colormatch.storage import InMemoryScoreStore
from tests.helpers import FIXED_NOW, FakeClock, arrange_grid, clear_board, make_engine, play_pair


class ExplodingStore(InMemoryScoreStore):
    def record(self, player_name, score, at):
        raise OSError("disk full")


def test_new_game_resets_session_state_but_keeps_level():
    engine = make_engine(mode=GameMode.SURVIVAL)
    arrange_grid(engine, [0, 0, 1, 1, 2, 2, 3, 3, 0, 0, 1, 1, 2, 2, 3, 3])
    play_pair(engine, (0, 1))
    play_pair(engine, (2, 4))
    engine.select_cell(6)
    engine.session.level = 3
    first_id = engine.session.session_id

    engine.start_new_game()

    assert engine.score == 0
    assert engine.combo_count == 0
    assert engine.lives == 3
    assert engine.pending_index is None
    assert engine.outcome is Outcome.UNRESOLVED
    assert engine.level == 3
    assert engine.session.session_id != first_id
    assert not engine.feedback.visible
    assert not any(tile.matched or tile.selected for tile in engine.snapshot().grid)


def test_new_game_can_change_dimension():
    engine = make_engine(dimension=3)
    engine.start_new_game(6)
    assert engine.dimension == 6
    assert len(engine.snapshot().grid) == 36


def test_new_game_rejects_bad_dimension_without_touching_state():
    engine = make_engine(dimension=3)
    engine.select_cell(0)
    before = engine.snapshot()
    with pytest.raises(ConfigurationError):
        engine.start_new_game(1)
    assert engine.snapshot() == before


def test_next_level_grows_board_and_increments_level():
    engine = make_engine(dimension=3)
    clear_board(engine)
    engine.next_level()
    assert engine.level == 2
    assert engine.dimension == 5
    assert engine.outcome is Outcome.UNRESOLVED
    engine.next_level()
    engine.next_level()
    assert engine.level == 4
    assert engine.dimension == 7


def test_session_started_event_carries_identity():
    engine = make_engine(dimension=3, mode=GameMode.TIME_ATTACK, player_name="Ada")
    started = []
    engine.event_bus.subscribe(EVENT_SESSION_STARTED, lambda s, **kw: started.append(kw))
    engine.start_new_game()
    assert started[0]["player_name"] == "Ada"
    assert started[0]["mode"] is GameMode.TIME_ATTACK
    assert started[0]["dimension"] == 3
    assert started[0]["session_id"] == engine.session.session_id


def test_finalize_happens_exactly_once():
    store = InMemoryScoreStore()
    engine = make_engine(dimension=2, score_store=store)
    ended = []
    engine.event_bus.subscribe(EVENT_SESSION_ENDED, lambda s, **kw: ended.append(kw))
    clear_board(engine)
    engine.event_bus.emit(EVENT_SESSION_END_REQUEST, won=False, reason="late")
    assert engine.outcome is Outcome.WON
    assert len(ended) == 1
    assert len(store.top_scores(10)) == 1


def test_finished_session_records_score_and_duration():
    store = InMemoryScoreStore()
    clock = FakeClock()
    engine = make_engine(dimension=2, player_name="Ada", score_store=store, clock=clock)
    ended = []
    engine.event_bus.subscribe(EVENT_SESSION_ENDED, lambda s, **kw: ended.append(kw))
    clock.advance(12.5)
    clear_board(engine)
    entry = store.top_scores(1)[0]
    assert entry.player_name == "Ada"
    assert entry.score == engine.score
    assert entry.timestamp == FIXED_NOW
    assert ended[0]["duration"] == pytest.approx(12.5)


def test_store_failure_is_logged_and_state_survives(caplog):
    engine = make_engine(dimension=2, score_store=ExplodingStore())
    with caplog.at_level(logging.ERROR):
        clear_board(engine)
    assert engine.outcome is Outcome.WON
    assert engine.best_score == engine.score
    assert "Failed to record score" in caplog.text


def test_best_score_is_shared_and_only_raised():
    best = BestScore(value=20)
    changes = []
    engine = make_engine(dimension=2, best_score=best)
    engine.event_bus.subscribe(EVENT_BEST_SCORE_CHANGED, lambda s, **kw: changes.append(kw))
    arrange_grid(engine, [0, 0, 1, 1])
    play_pair(engine, (0, 1))
    play_pair(engine, (2, 3))
    assert engine.score == 25
    assert best.value == 25
    assert changes == [{"previous": 20, "value": 25}]

    engine.start_new_game()
    arrange_grid(engine, [0, 1, 0, 1])
    play_pair(engine, (0, 1))
    assert engine.outcome is Outcome.LOST
    assert best.value == 25
    assert len(changes) == 1


def test_new_game_cancels_pending_resets():
    engine = make_engine(mode=GameMode.TIME_ATTACK, transient_delays=True)
    arrange_grid(engine, [0, 0, 1, 1, 2, 2, 3, 3, 0, 0, 1, 1, 2, 2, 3, 3])
    play_pair(engine, (0, 2))
    assert list(engine.world.get_component(TileReset))
    engine.start_new_game()
    assert list(engine.world.get_component(TileReset)) == []
    engine.tick(2.0)
    assert not any(tile.selected or tile.wrong for tile in engine.snapshot().grid)


def test_finish_cancels_pending_resets():
    engine = make_engine(dimension=2, transient_delays=True)
    arrange_grid(engine, [0, 0, 1, 1])
    play_pair(engine, (0, 1))
    play_pair(engine, (2, 3))
    assert engine.outcome is Outcome.WON
    assert list(engine.world.get_component(TileReset)) == []
