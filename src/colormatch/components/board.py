from dataclasses import dataclass

@dataclass(slots=True)
class Board:
    dimension: int

    @property
    def total_cells(self) -> int:
        return self.dimension * self.dimension
