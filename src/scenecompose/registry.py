"""Scene type registry.

Maps scene type names to SceneModules. The host fills the registry at
startup and freezes it; lookups are the only operation afterwards.
"""

from .errors import ConfigurationError
from .scene import SceneModule
from .scenes import clip, solid

BUILTIN_SCENES = (clip, solid)


class SceneRegistry:
    def __init__(self):
        self._modules: dict[str, SceneModule] = {}
        self._frozen = False

    def register(self, module, name: str | None = None) -> SceneModule:
        """Register a scene module (Python module or SceneModule).

        Raises:
            ConfigurationError: Invalid declarations or a taken name.
                The registry is left unchanged.
            RuntimeError: The registry is frozen.
        """
        if self._frozen:
            raise RuntimeError("Scene registry is frozen")
        if not isinstance(module, SceneModule):
            module = SceneModule.from_module(module, name)
        if module.name in self._modules:
            raise ConfigurationError(f"Scene type '{module.name}' already registered")
        self._modules[module.name] = module
        return module

    def freeze(self) -> "SceneRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> SceneModule:
        try:
            return self._modules[name]
        except KeyError:
            raise KeyError(
                f"Unknown scene type '{name}'. Valid: {sorted(self._modules)}"
            ) from None

    def __contains__(self, name):
        return name in self._modules

    def __iter__(self):
        return iter(self._modules.values())

    def names(self) -> list[str]:
        return sorted(self._modules)


def default_registry() -> SceneRegistry:
    """Frozen registry holding the bundled scene types."""
    registry = SceneRegistry()
    for module in BUILTIN_SCENES:
        registry.register(module)
    return registry.freeze()
