"""Solid color scene: paints its color inside the active clip region."""

from ..common import is_hex_color, parse_hex_color
from ..scene import Fullscreen, SceneBehavior


DESCRIPTION = "Solid color fill"

HELP = """Fills the canvas with a single color.

The fill honours the clipper left by earlier scenes in the same frame,
so a clip scene placed before it restricts the painted area.
"""

OPTIONS = [
    {"name": "color", "value": "#FFFFFF", "desc": "fill color as #RRGGBB", "dirty": "fx"},
    {},
]

DRAWN = 1


class SolidBehavior(SceneBehavior):
    def __init__(self):
        self._color_ref = None
        self._rgb = (255, 255, 255)

    def update(self, scene, ctx):
        ref = scene.options["color"]
        # Unparseable colors keep the last good one.
        if ref != self._color_ref and is_hex_color(ref):
            self._rgb = parse_hex_color(ref)
            self._color_ref = ref
        return DRAWN

    def fullscreen(self, scene):
        return Fullscreen.YES

    def draw(self, scene, surface):
        surface.fill(self._rgb)


def load():
    return SolidBehavior()


def validate(options):
    """Reject colors the per-frame update could not parse."""
    if not is_hex_color(options.get("color")):
        raise ValueError(f"invalid color {options.get('color')!r}, expected '#RRGGBB'")
