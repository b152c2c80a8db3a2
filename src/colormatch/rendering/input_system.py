from colormatch.events.bus import EVENT_MOUSE_PRESS, EventBus
from colormatch.rendering.layout import cell_at_point


class InputSystem:
    """Turns raw left clicks into cell selections on the engine."""

    def __init__(self, event_bus: EventBus, window, engine):
        self.event_bus = event_bus
        self.window = window
        self.engine = engine
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get("x")
        y = kwargs.get("y")
        button = kwargs.get("button", 1)
        if x is None or y is None or button != 1:
            return
        index = cell_at_point(x, y, self.window.width, self.window.height, self.engine.dimension)
        if index is None:
            return
        self.engine.select_cell(index)
