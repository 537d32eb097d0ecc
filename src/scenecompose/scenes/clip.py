"""Screen clip scene.

Sets the surface clipper to the scene's box, or resets it. Scenes drawn
after this one in the same frame are restricted to the clip region.
"""

import enum

from ..geometry import to_canvas_space
from ..scene import SceneBehavior


DESCRIPTION = "Screen clip"

HELP = """This scene resets the canvas clipper or sets the canvas clipper to the scene area.

The clipper is always axis-aligned (rotation and skew are ignored).
"""

OPTIONS = [
    {
        "name": "reset",
        "value": False,
        "desc": "if set, reset clipper otherwise set it to scene position and size",
        "dirty": "size",
    },
    {},
]


class ClipMode(enum.IntEnum):
    CLIP_CLEARED = 1
    CLIP_ACTIVE = 2


class ClipBehavior(SceneBehavior):
    def update(self, scene, ctx):
        # Mode and geometry are independent: the cached rect survives
        # reset frames and is reused once reset is turned off again.
        if scene.update_flag:
            scene.clip_region = to_canvas_space(
                scene.x, scene.y, scene.width, scene.height,
                ctx.canvas_width, ctx.canvas_height,
            )
        return ClipMode.CLIP_CLEARED if scene.options["reset"] else ClipMode.CLIP_ACTIVE

    def draw(self, scene, surface):
        if scene.status == ClipMode.CLIP_CLEARED:
            surface.set_clipper(None)
        else:
            surface.set_clipper(scene.clip_region)


def load():
    return ClipBehavior()
