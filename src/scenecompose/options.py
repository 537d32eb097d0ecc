"""Scene option declarations.

A scene module declares its options as an ordered list of dicts,
terminated by an empty dict:

    OPTIONS = [
        {"name": "reset", "value": False, "desc": "...", "dirty": "size"},
        {},
    ]

Each option carries an invalidation class telling the host what a
change of that option invalidates. SIZE and POSITION changes are
geometry changes: they set the instance's update flag so the next
update recomputes derived geometry. NONE and FX changes never do.
"""

import enum
from dataclasses import dataclass
from typing import Any

from .errors import ConfigurationError


class Invalidation(enum.Enum):
    NONE = "none"
    SIZE = "size"
    POSITION = "position"
    FX = "fx"

    @property
    def affects_geometry(self) -> bool:
        return self in GEOMETRY_INVALIDATIONS

    @classmethod
    def parse(cls, value) -> "Invalidation":
        """Accept an Invalidation member or its name (case-insensitive)."""
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise ConfigurationError(
            f"Unknown invalidation class: {value!r}. "
            f"Valid: {sorted(m.value for m in cls)}"
        )


GEOMETRY_INVALIDATIONS = frozenset({Invalidation.SIZE, Invalidation.POSITION})

# Instance fields that always count as geometry.
GEOMETRY_FIELDS = ("x", "y", "width", "height")


@dataclass(frozen=True)
class OptionDescriptor:
    name: str
    default: Any
    desc: str = ""
    invalidation: Invalidation = Invalidation.NONE


def parse_options(entries: list[dict], owner: str = "scene") -> tuple[OptionDescriptor, ...]:
    """Parse a terminator-ended option list into descriptors.

    Parsing stops at the first empty dict. A list without a terminator
    is accepted as-is.

    Args:
        entries: Option dicts with name, value, desc and optional dirty.
        owner: Scene type name, used in error messages.

    Returns:
        Descriptors in declaration order.

    Raises:
        ConfigurationError: Missing or duplicate name, a name that
            shadows a geometry field, an unknown dirty class, or
            entries after the terminator.
    """
    descriptors = []
    seen = set()
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigurationError(f"{owner}: option {i} must be a mapping")
        if not entry:
            if any(entries[i + 1:]):
                raise ConfigurationError(
                    f"{owner}: option entries found after the terminator at index {i}"
                )
            break
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"{owner}: option {i} missing 'name'")
        if name in GEOMETRY_FIELDS:
            raise ConfigurationError(
                f"{owner}: option '{name}' shadows a geometry field"
            )
        if name in seen:
            raise ConfigurationError(f"{owner}: duplicate option '{name}'")
        seen.add(name)

        descriptors.append(OptionDescriptor(
            name=name,
            default=entry.get("value"),
            desc=entry.get("desc", ""),
            invalidation=Invalidation.parse(entry.get("dirty")),
        ))
    return tuple(descriptors)
