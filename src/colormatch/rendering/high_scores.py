"""Top score list shown by the window overlay and the ``--scores`` flag."""
from __future__ import annotations

import logging
from typing import Iterable, List

from colormatch.constants import HIGH_SCORES_SHOWN
from colormatch.storage import ScoreEntry, ScoreStore

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "No scores yet"


def high_score_lines(entries: Iterable[ScoreEntry]) -> List[str]:
    lines = [
        f"{rank:>2}. {entry.player_name[:14]:<14} {entry.score:>6}  {entry.timestamp:%Y-%m-%d}"
        for rank, entry in enumerate(entries, start=1)
    ]
    return lines or [EMPTY_MESSAGE]


class HighScoreBoard:
    """Toggleable view over a score store.

    Lines are read from the store when the board is opened or reset, not every frame.
    """

    def __init__(self, store: ScoreStore | None, limit: int = HIGH_SCORES_SHOWN):
        self.store = store
        self.limit = limit
        self.visible = False
        self.lines: List[str] = []

    def refresh(self) -> List[str]:
        entries = self.store.top_scores(self.limit) if self.store is not None else []
        self.lines = high_score_lines(entries)
        return self.lines

    def toggle(self) -> bool:
        self.visible = not self.visible
        if self.visible:
            self.refresh()
        return self.visible

    def hide(self) -> None:
        self.visible = False

    def reset(self) -> None:
        if self.store is not None:
            self.store.clear_all()
        self.refresh()


def run_score_command(args, store: ScoreStore, echo=print) -> bool:
    """Handle ``--reset-scores`` and ``--scores``. Returns True when the game should not start."""
    if args.reset_scores:
        store.clear_all()
        logger.info("Cleared saved scores in %s", getattr(store, "path", "memory"))
        echo("Scores cleared.")
        return True
    if args.scores:
        for line in HighScoreBoard(store).refresh():
            echo(line)
        return True
    return False
