from esper import World

from colormatch.components.feedback import Feedback
from colormatch.constants import FEEDBACK_DURATION
from colormatch.events.bus import EVENT_FEEDBACK, EVENT_TICK, EventBus


class FeedbackSystem:
    """Shows transient feedback text and hides it once its duration has elapsed."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_FEEDBACK, self.on_feedback)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_feedback(self, sender, **kwargs):
        message = kwargs.get("message")
        if not message:
            return
        duration = kwargs.get("duration")
        if duration is None:
            duration = FEEDBACK_DURATION
        for _, feedback in self.world.get_component(Feedback):
            feedback.message = message
            feedback.visible = True
            feedback.remaining = float(duration)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get("dt", 1 / 60)
        if dt is None or dt <= 0:
            return
        for _, feedback in self.world.get_component(Feedback):
            if not feedback.visible:
                continue
            feedback.remaining -= dt
            if feedback.remaining <= 0.0:
                feedback.hide()
