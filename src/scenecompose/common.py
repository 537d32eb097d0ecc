"""scenecompose.common — small shared parsing helpers."""

import re

_HEX_COLOR = re.compile(r"#?[0-9a-fA-F]{6}")


def is_hex_color(value) -> bool:
    """True for '#RRGGBB' or 'RRGGBB' strings."""
    return isinstance(value, str) and _HEX_COLOR.fullmatch(value) is not None


def parse_hex_color(hex_str: str) -> tuple[int, int, int]:
    """Convert '#RRGGBB' or 'RRGGBB' string to (R, G, B) tuple.

    Raises:
        ValueError: Not a 6-digit hex color.
    """
    if not is_hex_color(hex_str):
        raise ValueError(f"Invalid color: {hex_str!r}. Expected '#RRGGBB'.")
    hex_str = hex_str.lstrip("#")
    return (int(hex_str[0:2], 16), int(hex_str[2:4], 16), int(hex_str[4:6], 16))
