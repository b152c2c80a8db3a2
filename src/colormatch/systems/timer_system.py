from esper import World

from colormatch.components.countdown_timer import CountdownTimer
from colormatch.components.game_session import GameMode, GameSession
from colormatch.events.bus import EVENT_SESSION_END_REQUEST, EVENT_TICK, EVENT_TIMER_CHANGED, EventBus


class TimerSystem:
    """Drives the TIME_ATTACK countdown from frame ticks.

    Fractional frame times accumulate until a whole second has passed. A long gap
    between ticks consumes several seconds at once, and the countdown never drops
    below zero.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get("dt", 1 / 60)
        if dt is None or dt <= 0:
            return
        for _, (session, timer) in self.world.get_components(GameSession, CountdownTimer):
            self._advance(session, timer, float(dt))

    def _advance(self, session: GameSession, timer: CountdownTimer, dt: float) -> None:
        if not timer.running or session.is_over or session.mode is not GameMode.TIME_ATTACK:
            return
        timer.elapsed += dt
        changed = False
        while timer.elapsed >= 1.0 and session.time_remaining > 0:
            timer.elapsed -= 1.0
            session.time_remaining -= 1
            changed = True
        if session.time_remaining < 0:
            session.time_remaining = 0
        if changed:
            self.event_bus.emit(EVENT_TIMER_CHANGED, time_remaining=session.time_remaining)
        if session.time_remaining == 0:
            timer.stop()
            self.event_bus.emit(EVENT_SESSION_END_REQUEST, won=False, reason="time_expired")
