from dataclasses import dataclass

@dataclass(slots=True)
class Feedback:
    message: str = ""
    visible: bool = False
    remaining: float = 0.0

    def hide(self) -> None:
        self.visible = False
        self.remaining = 0.0
