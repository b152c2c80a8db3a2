from dataclasses import dataclass

@dataclass(slots=True)
class Tile:
    """Per-tile state. The owning entity id is the tile's identity.

    Stores only the palette index; the RGB value is looked up on the Palette entity.
    """
    color_index: int
    matched: bool = False
    selected: bool = False
    wrong: bool = False


@dataclass(slots=True)
class GridIndex:
    index: int
