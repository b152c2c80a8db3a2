from colormatch.components.countdown_timer import CountdownTimer
from colormatch.components.game_session import GameMode, Outcome
from colormatch.constants import TIME_ATTACK_SECONDS
from colormatch.events.bus import EVENT_SESSION_ENDED, EVENT_TIMER_CHANGED
from tests.helpers import clear_board, make_engine


def _timer(engine):
    return engine.world.component_for_entity(engine._session_entity, CountdownTimer)


def test_timer_counts_whole_seconds_from_fractional_ticks():
    engine = make_engine(mode=GameMode.TIME_ATTACK)
    for _ in range(59):
        engine.tick(1 / 60)
    assert engine.time_remaining == TIME_ATTACK_SECONDS
    engine.tick(1 / 60 + 0.001)
    assert engine.time_remaining == TIME_ATTACK_SECONDS - 1


def test_timer_change_events_report_remaining_time():
    engine = make_engine(mode=GameMode.TIME_ATTACK)
    seen = []
    engine.event_bus.subscribe(EVENT_TIMER_CHANGED, lambda s, **kw: seen.append(kw["time_remaining"]))
    engine.tick(1.0)
    engine.tick(0.5)
    engine.tick(0.5)
    assert seen == [TIME_ATTACK_SECONDS - 1, TIME_ATTACK_SECONDS - 2]


def test_timer_expiry_loses_exactly_once():
    engine = make_engine(mode=GameMode.TIME_ATTACK)
    ended = []
    engine.event_bus.subscribe(EVENT_SESSION_ENDED, lambda s, **kw: ended.append(kw))
    engine.tick(TIME_ATTACK_SECONDS - 1)
    assert engine.outcome is Outcome.UNRESOLVED
    engine.tick(1.0)
    assert engine.time_remaining == 0
    assert engine.outcome is Outcome.LOST
    assert engine.session.end_reason == "time_expired"
    engine.tick(5.0)
    assert len(ended) == 1
    assert ended[0]["won"] is False


def test_large_gap_never_goes_negative():
    engine = make_engine(mode=GameMode.TIME_ATTACK)
    engine.tick(10_000.0)
    assert engine.time_remaining == 0
    assert engine.outcome is Outcome.LOST


def test_timer_only_runs_in_time_attack():
    for mode in (GameMode.CLASSIC, GameMode.SURVIVAL):
        engine = make_engine(mode=mode)
        engine.tick(120.0)
        assert engine.outcome is Outcome.UNRESOLVED
        assert _timer(engine).running is False


def test_timer_stops_when_session_finishes():
    engine = make_engine(dimension=2, mode=GameMode.TIME_ATTACK)
    engine.tick(3.0)
    assert _timer(engine).running is True
    clear_board(engine)
    assert _timer(engine).running is False
    remaining = engine.time_remaining
    engine.tick(10.0)
    assert engine.time_remaining == remaining


def test_restart_resets_timer():
    engine = make_engine(mode=GameMode.TIME_ATTACK)
    engine.tick(30.4)
    engine.start_new_game()
    assert engine.time_remaining == TIME_ATTACK_SECONDS
    assert _timer(engine).running is True
    assert _timer(engine).elapsed == 0.0
    engine.tick(0.7)
    assert engine.time_remaining == TIME_ATTACK_SECONDS
