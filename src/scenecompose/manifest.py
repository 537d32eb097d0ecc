"""Scene manifest loader.

Parses YAML scene manifests, converts hex colors to RGB tuples, and
validates scene types, geometry fields, option names and timed changes
against the scene registry.

Manifest schema:
  canvas:
    width: 800
    height: 600
    background: "#000000"     # optional
    fps: 25                   # optional
  scenes:
    - type: clip
      x: 100                  # geometry defaults to the full canvas
      y: 50
      width: 200
      height: 150
      options: {reset: false}
      changes:                # optional timed assignments
        - frame: 10
          set: {reset: true, x: 120}
"""

import math
from pathlib import Path

import yaml

from .common import parse_hex_color
from .errors import ConfigurationError
from .options import GEOMETRY_FIELDS
from .registry import SceneRegistry, default_registry

DEFAULT_BACKGROUND = "#000000"
DEFAULT_FPS = 25


def load_manifest(
    manifest_path: str | Path, registry: SceneRegistry | None = None,
) -> dict:
    """Load, validate, and normalize a scene manifest file.

    Raises:
        ConfigurationError: Invalid canvas, scene type, field or option.
        FileNotFoundError: Missing manifest file.
    """
    with open(manifest_path) as f:
        raw = yaml.safe_load(f)
    return parse_manifest(raw, registry)


def parse_manifest(raw: dict, registry: SceneRegistry | None = None) -> dict:
    """Validate and normalize an already-parsed manifest dict.

    Processing pipeline:
      1. Validate canvas size, parse background color, default fps.
      2. For each scene: check the type, default and coerce geometry,
         check option names and values.
      3. Validate timed changes and sort them by frame.
    """
    registry = registry or default_registry()
    if not isinstance(raw, dict):
        raise ConfigurationError("Manifest: top level must be a mapping")
    if "canvas" not in raw:
        raise ConfigurationError("Manifest: missing required 'canvas' section")

    canvas = _parse_canvas(raw["canvas"])

    scenes = []
    for i, entry in enumerate(raw.get("scenes") or []):
        scenes.append(_parse_scene(entry, i, canvas, registry))

    return {"canvas": canvas, "scenes": scenes}


def _parse_canvas(raw: dict) -> dict:
    if not isinstance(raw, dict):
        raise ConfigurationError("Canvas: must be a mapping")
    canvas = {}
    for key in ("width", "height"):
        value = raw.get(key)
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ConfigurationError(
                f"Canvas: '{key}' must be a positive integer, got {value!r}"
            )
        canvas[key] = value

    try:
        canvas["background"] = parse_hex_color(raw.get("background", DEFAULT_BACKGROUND))
    except ValueError as e:
        raise ConfigurationError(f"Canvas: {e}") from e

    fps = raw.get("fps", DEFAULT_FPS)
    if not isinstance(fps, (int, float)) or isinstance(fps, bool) or fps <= 0:
        raise ConfigurationError(f"Canvas: 'fps' must be positive, got {fps!r}")
    canvas["fps"] = fps
    return canvas


def _parse_scene(entry: dict, index: int, canvas: dict, registry: SceneRegistry) -> dict:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"Scene {index}: must be a mapping")
    scene_type = entry.get("type")
    if scene_type not in registry:
        raise ConfigurationError(
            f"Scene {index}: Unknown type '{scene_type}'. "
            f"Valid: {registry.names()}"
        )
    module = registry.get(scene_type)
    prefix = f"Scene {index} ({scene_type})"

    defaults = {"x": 0, "y": 0, "width": canvas["width"], "height": canvas["height"]}
    scene = {"type": scene_type}
    for field in GEOMETRY_FIELDS:
        scene[field] = _number(entry.get(field, defaults[field]), f"{prefix}: '{field}'")

    declared = {d.name: d.default for d in module.options}
    options = entry.get("options") or {}
    if not isinstance(options, dict):
        raise ConfigurationError(f"{prefix}: 'options' must be a mapping")
    _check_option_names(options, declared, prefix)
    scene["options"] = dict(options)

    current = {**declared, **options}
    _validate_option_values(module, current, prefix)

    changes = []
    for j, change in enumerate(entry.get("changes") or []):
        changes.append(_parse_change(change, f"{prefix}, change {j}", declared))
    changes.sort(key=lambda c: c["frame"])

    # Replay option changes in frame order so every intermediate state
    # is one the scene can update from.
    for change in changes:
        current.update({k: v for k, v in change["set"].items() if k in declared})
        _validate_option_values(module, current, f"{prefix}, frame {change['frame']}")

    scene["changes"] = changes
    return scene


def _parse_change(change: dict, prefix: str, declared: dict) -> dict:
    if not isinstance(change, dict):
        raise ConfigurationError(f"{prefix}: must be a mapping")
    frame = change.get("frame")
    if not isinstance(frame, int) or isinstance(frame, bool) or frame < 0:
        raise ConfigurationError(f"{prefix}: 'frame' must be an integer >= 0, got {frame!r}")
    assignments = change.get("set")
    if not isinstance(assignments, dict) or not assignments:
        raise ConfigurationError(f"{prefix}: 'set' must be a non-empty mapping")

    values = {}
    for key, value in assignments.items():
        if key in GEOMETRY_FIELDS:
            values[key] = _number(value, f"{prefix}: '{key}'")
        elif key in declared:
            values[key] = value
        else:
            raise ConfigurationError(
                f"{prefix}: unknown field '{key}'. "
                f"Valid: {sorted([*GEOMETRY_FIELDS, *declared])}"
            )
    return {"frame": frame, "set": values}


def _check_option_names(options: dict, declared: dict, prefix: str) -> None:
    for key in options:
        if key not in declared:
            raise ConfigurationError(
                f"{prefix}: unknown option '{key}'. Valid: {sorted(declared)}"
            )


def _validate_option_values(module, values: dict, prefix: str) -> None:
    if module.validate is None:
        return
    try:
        module.validate(values)
    except ValueError as e:
        raise ConfigurationError(f"{prefix}: {e}") from e


def _number(value, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{label} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ConfigurationError(f"{label} must be finite, got {value!r}")
    return float(value)
