"""Error types raised at the scene/host boundary."""


class ConfigurationError(ValueError):
    """Invalid option declaration or manifest entry.

    Raised at load/registration time only, never from a per-frame call.
    """


class LifecycleError(RuntimeError):
    """The host called scene operations out of order."""
