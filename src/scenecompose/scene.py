"""Scene lifecycle contract shared by every scene type.

A scene type is a ``SceneModule``: a description, help text, option
declarations, and a ``load`` factory that builds a ``SceneBehavior``.
The host wraps each scene of the layout in a ``SceneInstance`` and
drives it once per frame:

    status = instance.update(ctx)    # recompute if dirty, report mode
    instance.clear_update_flag()     # host-owned, after update returns
    instance.draw(ctx)               # surface side effects only

Lifecycle states:

    LOADED --update--> UPDATED --draw--> DRAWN --update--> UPDATED ...

Behaviors keep all derived geometry on the instance. ``update`` only
recomputes while ``instance.update_flag`` is set. ``draw`` never
recomputes, so repeated draws within a frame issue identical commands.
"""

import abc
import enum
import math
from dataclasses import dataclass
from typing import Any, Callable

from .context import FrameContext
from .errors import ConfigurationError, LifecycleError
from .geometry import Rect
from .options import GEOMETRY_FIELDS, OptionDescriptor, parse_options
from .surface import RenderSurface


class SceneState(enum.Enum):
    LOADED = "loaded"
    UPDATED = "updated"
    DRAWN = "drawn"


class Fullscreen(enum.IntEnum):
    """Hint telling the host whether a scene covers the whole canvas."""

    UNKNOWN = -1
    NO = 0
    YES = 1


class SceneBehavior(abc.ABC):
    """Per-instance behavior returned by a scene module's ``load()``."""

    @abc.abstractmethod
    def update(self, scene: "SceneInstance", ctx: FrameContext) -> int:
        """Recompute derived state if ``scene.update_flag`` is set.

        Returns a scene-type specific status code. Must not raise for
        numeric input.
        """

    @abc.abstractmethod
    def draw(self, scene: "SceneInstance", surface: RenderSurface) -> None:
        """Issue surface commands from the state cached by ``update``."""

    def fullscreen(self, scene: "SceneInstance") -> Fullscreen:
        return Fullscreen.UNKNOWN

    def identity(self, scene: "SceneInstance") -> bool:
        return False


@dataclass(frozen=True)
class SceneModule:
    """A registered scene type."""

    name: str
    description: str
    help: str
    options: tuple[OptionDescriptor, ...]
    load: Callable[[], SceneBehavior]
    validate: Callable[[dict], None] | None = None

    @classmethod
    def from_module(cls, module, name: str | None = None) -> "SceneModule":
        """Build a SceneModule from a Python module.

        The module must define DESCRIPTION, OPTIONS and load(). HELP and
        validate(options) are optional; validate raises ValueError for
        option values update() could not handle. The type name defaults
        to the module's last dotted component.

        Raises:
            ConfigurationError: Missing attributes or invalid options.
        """
        name = name or module.__name__.rsplit(".", 1)[-1]
        for attr in ("DESCRIPTION", "OPTIONS", "load"):
            if not hasattr(module, attr):
                raise ConfigurationError(f"Scene '{name}': missing '{attr}'")
        return cls(
            name=name,
            description=module.DESCRIPTION,
            help=getattr(module, "HELP", ""),
            options=parse_options(module.OPTIONS, owner=f"Scene '{name}'"),
            load=module.load,
            validate=getattr(module, "validate", None),
        )

    def option(self, name: str) -> OptionDescriptor:
        for desc in self.options:
            if desc.name == name:
                return desc
        raise KeyError(
            f"Scene '{self.name}' has no option '{name}'. "
            f"Valid: {[d.name for d in self.options]}"
        )


class SceneInstance:
    """One scene placed in the layout, with its fields and cached geometry.

    Attributes:
        x, y, width, height: Layout-space box (top-left origin, y down).
        options: Current option values keyed by name.
        update_flag: True when a geometry-affecting value changed since
            the host last cleared it.
        clip_region: Canvas-space clip rect cached by the last
            recomputing update, or None before the first one.
        status: Code returned by the last update, or None.
    """

    def __init__(
        self,
        module: SceneModule,
        x: float = 0.0,
        y: float = 0.0,
        width: float = 0.0,
        height: float = 0.0,
        options: dict[str, Any] | None = None,
    ):
        self.module = module
        self.x = float(x)
        self.y = float(y)
        self.width = float(width)
        self.height = float(height)
        self.options = {d.name: d.default for d in module.options}
        for key, value in (options or {}).items():
            if key not in self.options:
                raise ConfigurationError(
                    f"Scene '{module.name}': unknown option '{key}'. "
                    f"Valid: {sorted(self.options)}"
                )
            self.options[key] = value

        self.update_flag = True
        self.clip_region: Rect | None = None
        self.status: int | None = None
        self.state = SceneState.LOADED
        self.behavior = module.load()

    def __repr__(self):
        return (
            f"SceneInstance({self.module.name!r}, x={self.x}, y={self.y}, "
            f"width={self.width}, height={self.height}, state={self.state.value})"
        )

    # ── Configuration ─────────────────────────────────────────────

    def get(self, name: str) -> Any:
        if name in GEOMETRY_FIELDS:
            return getattr(self, name)
        return self.options[name]

    def set(self, name: str, value: Any) -> None:
        """Assign a geometry field or option, marking geometry dirty.

        Only a real change of a geometry field or of a SIZE/POSITION
        option sets ``update_flag``.

        Raises:
            KeyError: Unknown option name.
        """
        if name in GEOMETRY_FIELDS:
            value = float(value)
            old = getattr(self, name)
            if old != value and not (math.isnan(old) and math.isnan(value)):
                setattr(self, name, value)
                self.update_flag = True
            return

        desc = self.module.option(name)
        if self.options[name] != value:
            self.options[name] = value
            if desc.invalidation.affects_geometry:
                self.update_flag = True

    def clear_update_flag(self) -> None:
        self.update_flag = False

    # ── Per-frame calls ───────────────────────────────────────────

    def update(self, ctx: FrameContext) -> int:
        self.status = self.behavior.update(self, ctx)
        self.state = SceneState.UPDATED
        return self.status

    def draw(self, ctx: FrameContext) -> None:
        """Draw onto ``ctx.surface``; a missing surface is a no-op.

        Raises:
            LifecycleError: Called before the first update.
        """
        if self.state is SceneState.LOADED:
            raise LifecycleError(
                f"Scene '{self.module.name}': draw called before update"
            )
        if ctx.surface is None:
            return
        self.behavior.draw(self, ctx.surface)
        self.state = SceneState.DRAWN

    def fullscreen(self) -> Fullscreen:
        return self.behavior.fullscreen(self)

    def identity(self) -> bool:
        return self.behavior.identity(self)
