from dataclasses import dataclass, field
from typing import List, Tuple

RGB = Tuple[int, int, int]


@dataclass(slots=True)
class Palette:
    """Active color palette stored on the session entity.

    ``colors`` keeps the full ordered palette; ``usable`` is how many of the leading
    colors the current grid draws from; the grid system sets it on every build.
    """
    colors: List[Tuple[str, RGB]] = field(default_factory=list)
    usable: int = 0

    def __post_init__(self) -> None:
        if self.usable <= 0 or self.usable > len(self.colors):
            self.usable = len(self.colors)

    def rgb_for(self, color_index: int) -> RGB:
        return self.colors[color_index][1]
