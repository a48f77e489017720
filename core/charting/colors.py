"""Color helpers for chart styling."""

from __future__ import annotations

DARK_TEXT = "#000000"
LIGHT_TEXT = "#ffffff"
BRIGHTNESS_THRESHOLD = 140.0


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Parse `#rrggbb` (or `#rgb`) into integer channels.

    Raises:
        ValueError: When `color` is not a hex color.
    """

    value = color.strip().lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        raise ValueError(f"Expected a hex color like #4CAF50, got {color!r}.")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def perceived_brightness(color: str) -> float:
    """Return the perceptual brightness (0-255) of a hex color."""

    red, green, blue = hex_to_rgb(color)
    return red * 0.299 + green * 0.587 + blue * 0.114


def contrast_text_color(fill: str) -> str:
    """Pick dark or light label text for readability on `fill`."""

    if perceived_brightness(fill) > BRIGHTNESS_THRESHOLD:
        return DARK_TEXT
    return LIGHT_TEXT
