"""Tests for the scene lifecycle contract and dirty-flag handling."""

import types

import pytest

from scenecompose.context import FrameContext
from scenecompose.errors import ConfigurationError, LifecycleError
from scenecompose.scene import (
    Fullscreen,
    SceneBehavior,
    SceneInstance,
    SceneModule,
    SceneState,
)


class CountingBehavior(SceneBehavior):
    """Counts recomputations so tests can observe the dirty flag."""

    def __init__(self):
        self.recomputed = 0
        self.draws = 0

    def update(self, scene, ctx):
        if scene.update_flag:
            self.recomputed += 1
        return 7

    def draw(self, scene, surface):
        self.draws += 1


def _module(**attrs):
    m = types.ModuleType("scenes.counter")
    m.DESCRIPTION = "Counter"
    m.HELP = "Counts updates."
    m.OPTIONS = [
        {"name": "shape", "value": "rect", "desc": "geometry option", "dirty": "size"},
        {"name": "offset", "value": 0, "desc": "position option", "dirty": "position"},
        {"name": "label", "value": "", "desc": "cosmetic option"},
        {"name": "tint", "value": "#000000", "desc": "effect option", "dirty": "fx"},
        {},
    ]
    m.load = CountingBehavior
    for k, v in attrs.items():
        setattr(m, k, v)
    return m


@pytest.fixture
def module():
    return SceneModule.from_module(_module())


@pytest.fixture
def scene(module):
    return SceneInstance(module, x=10, y=20, width=30, height=40)


def _frame(scene, ctx):
    """One host frame: update, clear flag, draw."""
    status = scene.update(ctx)
    scene.clear_update_flag()
    scene.draw(ctx)
    return status


class TestSceneModule:
    def test_from_module_reads_attributes(self, module):
        assert module.name == "counter"
        assert module.description == "Counter"
        assert module.help == "Counts updates."
        assert [o.name for o in module.options] == ["shape", "offset", "label", "tint"]

    def test_explicit_name(self):
        assert SceneModule.from_module(_module(), name="tally").name == "tally"

    def test_help_optional(self):
        m = _module()
        del m.HELP
        assert SceneModule.from_module(m).help == ""

    def test_missing_load_raises(self):
        m = _module()
        del m.load
        with pytest.raises(ConfigurationError, match="missing 'load'"):
            SceneModule.from_module(m)

    def test_duplicate_option_raises(self):
        m = _module(OPTIONS=[{"name": "a"}, {"name": "a"}, {}])
        with pytest.raises(ConfigurationError, match="duplicate"):
            SceneModule.from_module(m)

    def test_option_lookup(self, module):
        assert module.option("label").default == ""
        with pytest.raises(KeyError, match="no option 'nope'"):
            module.option("nope")


class TestSceneInstanceConstruction:
    def test_defaults_applied(self, scene):
        assert scene.options == {"shape": "rect", "offset": 0, "label": "", "tint": "#000000"}

    def test_overrides_applied(self, module):
        s = SceneInstance(module, options={"label": "hi"})
        assert s.get("label") == "hi"

    def test_unknown_override_raises(self, module):
        with pytest.raises(ConfigurationError, match="unknown option 'bogus'"):
            SceneInstance(module, options={"bogus": 1})

    def test_fields_are_floats(self, scene):
        assert isinstance(scene.x, float)
        assert scene.get("height") == 40.0

    def test_starts_loaded_and_dirty(self, scene):
        assert scene.state is SceneState.LOADED
        assert scene.update_flag is True
        assert scene.clip_region is None
        assert scene.status is None

    def test_each_instance_loads_its_own_behavior(self, module):
        a = SceneInstance(module)
        b = SceneInstance(module)
        assert a.behavior is not b.behavior


class TestDirtyFlag:
    @pytest.mark.parametrize("field", ["x", "y", "width", "height"])
    def test_geometry_field_change_sets_flag(self, scene, field):
        scene.clear_update_flag()
        scene.set(field, scene.get(field) + 1)
        assert scene.update_flag is True

    def test_equal_geometry_value_keeps_flag_clear(self, scene):
        scene.clear_update_flag()
        scene.set("x", 10)
        assert scene.update_flag is False

    @pytest.mark.parametrize("name, value", [("shape", "oval"), ("offset", 3)])
    def test_geometry_option_change_sets_flag(self, scene, name, value):
        scene.clear_update_flag()
        scene.set(name, value)
        assert scene.update_flag is True

    @pytest.mark.parametrize("name, value", [("label", "x"), ("tint", "#FFFFFF")])
    def test_non_geometry_option_never_sets_flag(self, scene, name, value):
        scene.clear_update_flag()
        scene.set(name, value)
        assert scene.update_flag is False
        assert scene.get(name) == value

    def test_unknown_option_raises(self, scene):
        with pytest.raises(KeyError):
            scene.set("bogus", 1)

    def test_update_does_not_clear_flag(self, scene, ctx):
        scene.update(ctx)
        assert scene.update_flag is True

    def test_recompute_only_when_dirty(self, scene, ctx):
        _frame(scene, ctx)
        _frame(scene, ctx)
        _frame(scene, ctx)
        assert scene.behavior.recomputed == 1

        scene.set("width", 99)
        _frame(scene, ctx)
        assert scene.behavior.recomputed == 2

    def test_several_changes_before_update_recompute_once(self, scene, ctx):
        _frame(scene, ctx)
        scene.set("x", 1)
        scene.set("shape", "oval")
        scene.set("height", 5)
        _frame(scene, ctx)
        assert scene.behavior.recomputed == 2


class TestLifecycle:
    def test_update_then_draw_states(self, scene, ctx):
        assert scene.update(ctx) == 7
        assert scene.status == 7
        assert scene.state is SceneState.UPDATED
        scene.draw(ctx)
        assert scene.state is SceneState.DRAWN
        scene.update(ctx)
        assert scene.state is SceneState.UPDATED

    def test_draw_before_update_raises(self, scene, ctx):
        with pytest.raises(LifecycleError, match="before update"):
            scene.draw(ctx)

    def test_draw_without_surface_is_noop(self, scene):
        ctx = FrameContext(canvas_width=100, canvas_height=100, surface=None)
        scene.update(ctx)
        scene.draw(ctx)
        assert scene.behavior.draws == 0
        assert scene.state is SceneState.UPDATED

    def test_default_introspection(self, scene):
        assert scene.fullscreen() == Fullscreen.UNKNOWN
        assert scene.fullscreen() == -1
        assert scene.identity() is False

    def test_behavior_is_abstract(self):
        with pytest.raises(TypeError):
            SceneBehavior()

    def test_resetting_nan_keeps_flag_clear(self, scene):
        scene.set("x", float("nan"))
        scene.clear_update_flag()
        scene.set("x", float("nan"))
        assert scene.update_flag is False
