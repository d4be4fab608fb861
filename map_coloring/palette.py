from __future__ import annotations

from typing import List, Optional, Sequence

from .config import DEFAULT_MAX_COLORS

Color = str

MAP_COLORS: tuple[Color, ...] = (
    "#3B82F6",  # blue
    "#10B981",  # green
    "#8B5CF6",  # purple
    "#EF4444",  # red
)


class PaletteError(ValueError):
    pass


def resolve_palette(max_colors: int = DEFAULT_MAX_COLORS, palette: Optional[Sequence[Color]] = None) -> List[Color]:
    """Return the first ``max_colors`` entries of ``palette`` (default: MAP_COLORS).

    Requests outside ``1..len(palette)`` are rejected rather than truncated.
    """
    colors = list(MAP_COLORS if palette is None else palette)
    if not colors:
        raise PaletteError("Palette must contain at least one color")
    if len(set(colors)) != len(colors):
        raise PaletteError(f"Palette colors must be distinct (got {colors!r})")
    if isinstance(max_colors, bool) or not isinstance(max_colors, int):
        raise PaletteError(f"max_colors must be an int (got {max_colors!r})")
    if max_colors < 1:
        raise PaletteError(f"max_colors must be >= 1 (got {max_colors})")
    if max_colors > len(colors):
        raise PaletteError(f"max_colors={max_colors} exceeds the palette size ({len(colors)})")
    return colors[:max_colors]
