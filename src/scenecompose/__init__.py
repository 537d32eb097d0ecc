"""scenecompose — scene plugins for a per-frame video compositor.

Scenes declare typed options, recompute their geometry when those
options change, and issue commands against a shared render surface.
Scene layouts and timed option changes are declared in YAML manifests.
"""
