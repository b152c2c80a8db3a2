from dataclasses import dataclass

@dataclass
class BestScore:
    """Best score seen so far; shared between sessions by passing the same instance."""
    value: int = 0

    def offer(self, score: int) -> bool:
        if score > self.value:
            self.value = score
            return True
        return False
