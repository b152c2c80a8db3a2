"""Built-in color palettes.

Both palettes hold ten colors so the largest board (7x7 uses seven) never runs short.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

import arcade
from arcade.types import Color

from colormatch.errors import ConfigurationError

RGB = Tuple[int, int, int]
PaletteEntry = Tuple[str, RGB]

NORMAL_COLORS: List[PaletteEntry] = [
    ("red", (240, 43, 29)),
    ("green", (34, 160, 59)),
    ("blue", (26, 115, 232)),
    ("yellow", (252, 194, 0)),
    ("orange", (244, 121, 32)),
    ("purple", (111, 48, 214)),
    ("cyan", (0, 191, 213)),
    ("pink", (255, 105, 180)),
    ("emerald", (46, 204, 113)),
    ("amethyst", (155, 89, 182)),
]

# Okabe-Ito based palette, distinguishable under the common color vision deficiencies.
COLOR_BLIND_COLORS: List[PaletteEntry] = [
    ("orange", (0xE6, 0x9F, 0x00)),
    ("sky_blue", (0x56, 0xB4, 0xE9)),
    ("bluish_green", (0x00, 0x9E, 0x73)),
    ("yellow", (0xF0, 0xE4, 0x42)),
    ("blue", (0x00, 0x72, 0xB2)),
    ("vermilion", (0xD5, 0x5E, 0x00)),
    ("reddish_purple", (0xCC, 0x79, 0xA7)),
    ("gray", (0x99, 0x99, 0x99)),
    ("black", (0x00, 0x00, 0x00)),
    ("white", (0xFF, 0xFF, 0xFF)),
]


def normalize_palette(colors: Sequence) -> List[PaletteEntry]:
    """Accept named entries or bare colors and return ``[(name, rgb), ...]``.

    A color may be an RGB or RGBA sequence (arcade ``Color`` included; alpha is
    dropped), a hex string such as ``"#ff0000"`` or an ``arcade.color`` name such
    as ``"sky_blue"``. Duplicate colors are dropped so every palette index is a
    distinct color.
    """
    if not colors:
        raise ConfigurationError("Palette must contain at least 2 colors, got none")
    entries: List[PaletteEntry] = []
    seen: set[RGB] = set()
    for position, item in enumerate(colors):
        if isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str):
            name, value = item
        elif isinstance(item, str):
            name, value = item.strip().lstrip("#").lower() or f"color_{position}", item
        else:
            name, value = f"color_{position}", item
        rgb = to_rgb(value)
        if rgb in seen:
            continue
        seen.add(rgb)
        entries.append((name, rgb))
    if len(entries) < 2:
        raise ConfigurationError(
            f"Palette must contain at least 2 distinct colors, got {len(entries)}"
        )
    return entries


def to_rgb(value) -> RGB:
    """Coerce one palette color to an opaque ``(r, g, b)`` tuple."""
    if isinstance(value, str):
        return _rgb_from_string(value)
    try:
        channels = tuple(int(channel) for channel in value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid palette color {value!r}") from exc
    if len(channels) not in (3, 4) or any(not 0 <= channel <= 255 for channel in channels):
        raise ConfigurationError(f"Invalid palette color {value!r}")
    return channels[:3]


def _rgb_from_string(text: str) -> RGB:
    code = text.strip()
    if not code.startswith("#"):
        named = getattr(arcade.color, code.upper().replace(" ", "_").replace("-", "_"), None)
        if isinstance(named, Color):
            return named.rgb
    try:
        return Color.from_hex_string(code).rgb
    except ValueError as exc:
        raise ConfigurationError(f"Invalid palette color {text!r}") from exc
