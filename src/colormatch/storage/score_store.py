from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Protocol

from colormatch.constants import SCORE_STORE_CAPACITY, SCORE_STORE_KEY

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScoreEntry:
    player_name: str
    score: int
    timestamp: datetime

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.player_name,
            "score": self.score,
            "date": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "ScoreEntry":
        timestamp = datetime.fromisoformat(str(payload["date"]))
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return cls(
            player_name=str(payload["name"]),
            score=int(payload["score"]),
            timestamp=timestamp,
        )


class ScoreStore(Protocol):
    def record(self, player_name: str, score: int, at: datetime) -> None: ...

    def top_scores(self, n: int) -> List[ScoreEntry]: ...

    def clear_all(self) -> None: ...

    def best_score(self) -> int: ...


def rank_entries(entries: List[ScoreEntry], capacity: int = SCORE_STORE_CAPACITY) -> List[ScoreEntry]:
    """Sort by score descending, newest first among equal scores, and keep ``capacity``.

    Overflow therefore drops the lowest scores, oldest first.
    """
    ranked = sorted(entries, key=lambda entry: (-entry.score, -entry.timestamp.timestamp()))
    return ranked[:capacity]


class InMemoryScoreStore:
    def __init__(self, capacity: int = SCORE_STORE_CAPACITY):
        self.capacity = capacity
        self._entries: List[ScoreEntry] = []

    def record(self, player_name: str, score: int, at: datetime) -> None:
        self._entries.append(ScoreEntry(player_name=player_name, score=int(score), timestamp=at))
        self._entries = rank_entries(self._entries, self.capacity)

    def top_scores(self, n: int) -> List[ScoreEntry]:
        if n <= 0:
            return []
        return list(self._entries[:n])

    def clear_all(self) -> None:
        self._entries.clear()

    def best_score(self) -> int:
        return self._entries[0].score if self._entries else 0


class JsonScoreStore:
    """Score list persisted under a single key of a JSON document.

    A missing or unreadable file reads as an empty list; the next ``record`` rewrites it.
    """

    def __init__(
        self,
        path: Path | str | None = None,
        *,
        key: str = SCORE_STORE_KEY,
        capacity: int = SCORE_STORE_CAPACITY,
    ) -> None:
        self.path = Path(path) if path is not None else self._default_path()
        self.key = key
        self.capacity = capacity

    @staticmethod
    def _default_path() -> Path:
        return Path(__file__).resolve().parents[3] / "data" / "scores.json"

    def load(self) -> List[ScoreEntry]:
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return []
        except json.JSONDecodeError:
            logger.warning("Score file %s is not valid JSON; treating as empty", self.path)
            return []
        raw_entries = payload.get(self.key, []) if isinstance(payload, dict) else []
        entries: List[ScoreEntry] = []
        for raw in raw_entries:
            try:
                entries.append(ScoreEntry.from_dict(raw))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed score entry %r", raw)
        return rank_entries(entries, self.capacity)

    def save(self, entries: List[ScoreEntry]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump({self.key: [entry.to_dict() for entry in entries]}, handle, indent=2)

    def record(self, player_name: str, score: int, at: datetime) -> None:
        entries = self.load()
        entries.append(ScoreEntry(player_name=player_name, score=int(score), timestamp=at))
        self.save(rank_entries(entries, self.capacity))

    def top_scores(self, n: int) -> List[ScoreEntry]:
        if n <= 0:
            return []
        return self.load()[:n]

    def clear_all(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass

    def best_score(self) -> int:
        entries = self.load()
        return entries[0].score if entries else 0
