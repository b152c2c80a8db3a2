from dataclasses import dataclass, field
from typing import Tuple


@dataclass(slots=True)
class TileReset:
    """Deferred cosmetic reversion of ``selected`` (and optionally ``wrong``) flags."""

    indices: Tuple[int, ...] = field(default_factory=tuple)
    remaining: float = 0.0
    clear_wrong: bool = False
