"""Per-frame context handed to scene update/draw calls."""

from dataclasses import dataclass

from .surface import RenderSurface


@dataclass(frozen=True)
class FrameContext:
    """Read-only host state for one frame.

    Attributes:
        canvas_width: Output canvas width in pixels.
        canvas_height: Output canvas height in pixels.
        surface: Render surface for this frame, or None when the host
            has no surface to offer (draw calls become no-ops).
        frame_index: Index of the frame being rendered.
    """

    canvas_width: int
    canvas_height: int
    surface: RenderSurface | None = None
    frame_index: int = 0
