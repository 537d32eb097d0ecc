"""CLI for scene previews.

Reads a YAML scene manifest, runs the compositor frame loop, and
writes either a single frame (png) or a frame range (mp4).

Usage:
    # Single frame
    scenecompose preview --manifest scenes.yaml --output /tmp/frame.png --frame 12

    # First 50 frames as video
    scenecompose preview --manifest scenes.yaml --output /tmp/preview.mp4 --frames 50

    # Validate only (no rendering)
    scenecompose preview --manifest scenes.yaml --validate
"""

import argparse
import time
from pathlib import Path

from moviepy import ImageSequenceClip
from PIL import Image

from .compositor import Compositor
from .manifest import load_manifest

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".bmp"}


def _export_frames(frames, output_path, fps, quiet=False):
    """Write a list of RGB frames to mp4 with standard encoding settings."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    clip = ImageSequenceClip(frames, fps=fps)
    clip.write_videofile(
        str(output_path),
        fps=fps,
        codec="libx264",
        audio=False,
        preset="medium",
        ffmpeg_params=["-crf", "20", "-pix_fmt", "yuv420p"],
        logger=None if quiet else "bar",
    )


def preview(manifest_path, output_path, frames=1, start=0, quiet=False):
    """Render frames [start, start + frames) of a manifest to output_path.

    Image outputs get the single frame at ``start``; anything else is
    written as an mp4.
    """
    config = load_manifest(manifest_path)
    compositor = Compositor(config)
    canvas = config["canvas"]
    output_path = Path(output_path)

    if output_path.suffix.lower() in IMAGE_SUFFIXES:
        frame = next(compositor.render(1, start=start))
        output_path.parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(frame).save(output_path)
        print(f"Frame {start}: {canvas['width']}x{canvas['height']}")
        print(f"Done: {output_path}")
        return

    t0 = time.monotonic()
    rendered = list(compositor.render(frames, start=start))
    print(f"Rendered {len(rendered)} frames in {time.monotonic() - t0:.1f}s wall")
    print(f"\nResolution: {canvas['width']}x{canvas['height']}, {canvas['fps']}fps")
    print(f"Writing to: {output_path}")
    _export_frames(rendered, output_path, canvas["fps"], quiet=quiet)
    print(f"\nDone: {output_path}")


# ── CLI entry point ───────────────────────────────────────────────


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Preview a YAML scene manifest as png or mp4.",
    )
    parser.add_argument(
        "--manifest", required=True,
        help="Path to YAML scene manifest",
    )
    parser.add_argument(
        "--output",
        help="Output .png (single frame) or .mp4 path",
    )
    parser.add_argument(
        "--frame", type=int, default=0,
        help="First frame index to output (default: 0)",
    )
    parser.add_argument(
        "--frames", type=int, default=None,
        help="Number of frames for video output (default: 1 second)",
    )
    parser.add_argument(
        "--quiet", action="store_true",
        help="Suppress the encoder progress bar",
    )
    parser.add_argument(
        "--validate", action="store_true",
        help="Validate manifest only, don't render",
    )
    args = parser.parse_args(args)

    if args.validate:
        config = load_manifest(args.manifest)
        canvas = config["canvas"]
        print(f"Manifest valid: {len(config['scenes'])} scenes on "
              f"{canvas['width']}x{canvas['height']}")
        for i, s in enumerate(config["scenes"]):
            box = f"({s['x']:g}, {s['y']:g}) {s['width']:g}x{s['height']:g}"
            tag = f" [{len(s['changes'])} changes]" if s["changes"] else ""
            print(f"  {i}: {s['type']} {box}{tag}")
        return

    if not args.output:
        parser.error("--output is required (unless using --validate)")
    if args.frame < 0:
        parser.error("--frame must be >= 0")
    if args.frames is not None and args.frames <= 0:
        parser.error("--frames must be > 0")

    frames = args.frames
    if frames is None:
        frames = int(round(load_manifest(args.manifest)["canvas"]["fps"]))

    preview(args.manifest, args.output, frames=frames, start=args.frame, quiet=args.quiet)


if __name__ == "__main__":
    main()
