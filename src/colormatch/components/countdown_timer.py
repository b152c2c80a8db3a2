from dataclasses import dataclass

@dataclass(slots=True)
class CountdownTimer:
    """Once-per-second countdown attached to TIME_ATTACK sessions."""
    running: bool = False
    elapsed: float = 0.0

    def stop(self) -> None:
        self.running = False
        self.elapsed = 0.0
