"""Host frame loop driving scene instances over a render surface.

Per frame, in manifest order, each scene gets:
  1. timed changes scheduled for this frame applied via ``set``,
  2. ``update`` with the frame context,
  3. its update flag cleared (the host owns the flag),
  4. ``draw`` against the shared surface.

The surface clipper is reset at the start of every frame, so a clip
scene affects only the scenes that follow it in the same frame.
"""

from collections.abc import Iterator

import numpy as np

from .context import FrameContext
from .registry import SceneRegistry, default_registry
from .scene import Fullscreen, SceneInstance
from .surface import RasterSurface


class Compositor:
    """Scene graph built from a normalized manifest config."""

    def __init__(self, config: dict, registry: SceneRegistry | None = None):
        self.registry = registry or default_registry()
        self.canvas = config["canvas"]
        self.instances: list[SceneInstance] = []
        self._changes: list[dict[int, dict]] = []
        for scene in config["scenes"]:
            module = self.registry.get(scene["type"])
            self.instances.append(SceneInstance(
                module,
                x=scene["x"], y=scene["y"],
                width=scene["width"], height=scene["height"],
                options=scene["options"],
            ))
            by_frame = {}
            for change in scene.get("changes", []):
                by_frame.setdefault(change["frame"], {}).update(change["set"])
            self._changes.append(by_frame)

    def new_surface(self) -> RasterSurface:
        return RasterSurface(
            self.canvas["width"], self.canvas["height"], self.canvas["background"],
        )

    def _needs_background(self) -> bool:
        """False when the first drawn scene paints the whole canvas anyway."""
        for instance in self.instances:
            if instance.identity():
                continue
            return instance.fullscreen() != Fullscreen.YES
        return True

    def render_frame(self, index: int, surface) -> list[int]:
        """Run one frame over ``surface`` and return each scene's update status."""
        ctx = FrameContext(
            canvas_width=self.canvas["width"],
            canvas_height=self.canvas["height"],
            surface=surface,
            frame_index=index,
        )
        if surface is not None:
            surface.set_clipper(None)
            if self._needs_background():
                surface.clear(self.canvas["background"])

        statuses = []
        for instance, changes in zip(self.instances, self._changes):
            for name, value in changes.get(index, {}).items():
                instance.set(name, value)
            if instance.identity():
                continue
            statuses.append(instance.update(ctx))
            instance.clear_update_flag()
            instance.draw(ctx)
        return statuses

    def render(self, frames: int, start: int = 0) -> Iterator[np.ndarray]:
        """Render consecutive frames, yielding a copy of each RGB frame.

        Frames before ``start`` are still run so timed changes and
        cached geometry match a render from frame 0.
        """
        surface = self.new_surface()
        for index in range(start + frames):
            self.render_frame(index, surface)
            if index >= start:
                yield surface.frame.copy()
