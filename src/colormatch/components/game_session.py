"""Session resource describing the active play-through."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GameMode(Enum):
    """Rule sets governing how a session can be lost."""
    CLASSIC = auto()
    SURVIVAL = auto()
    TIME_ATTACK = auto()

    @property
    def title(self) -> str:
        return self.name.replace("_", " ")

    @property
    def subtitle(self) -> str:
        return _SUBTITLES[self]


_SUBTITLES = {
    GameMode.CLASSIC: "No mistakes allowed",
    GameMode.SURVIVAL: "3 Lives system",
    GameMode.TIME_ATTACK: "Beat the clock",
}


class Outcome(Enum):
    UNRESOLVED = auto()
    WON = auto()
    LOST = auto()


@dataclass
class GameSession:
    """Singleton component holding score, lives, time and selection state."""
    player_name: str
    mode: GameMode
    dimension: int
    session_id: str = ""
    score: int = 0
    lives: int = 0
    time_remaining: int = 0
    combo_count: int = 0
    level: int = 1
    pending_index: Optional[int] = None
    outcome: Outcome = Outcome.UNRESOLVED
    started_at: float = 0.0
    end_reason: Optional[str] = None
    bonus: int = 0

    @property
    def is_over(self) -> bool:
        return self.outcome is not Outcome.UNRESOLVED
